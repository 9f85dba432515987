"""
File loader for parsing and validating ignore files
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Dict, Iterator, List, Optional, Tuple, Union

from .constants import BROAD_PATTERNS, IGNORE_FILENAME, UTF8_BOM
from .errors import ReadError
from .paths import clean_path
from .utils import get_logger

logger = get_logger(__name__)

# Kinds of lines yielded by _scan_lines
EMPTY = 'empty'
COMMENT = 'comment'
PATTERN = 'pattern'


@dataclass
class ValidationWarning:
    """Represents a validation warning in an ignore file"""
    line: int
    pattern: str
    message: str


@dataclass
class IgnoreFileInfo:
    """Information about a loaded ignore file"""
    path: Path
    exists: bool = True
    patterns: List[str] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=lambda: {
        'total_lines': 0,
        'empty_lines': 0,
        'comment_lines': 0,
        'pattern_lines': 0,
    })

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


def _clean_pattern(pattern: str) -> str:
    # The negation marker is not part of the path being cleaned
    if pattern.startswith('!') and len(pattern) > 1:
        return '!' + clean_path(pattern[1:], keep_trailing_slash=True)
    return clean_path(pattern, keep_trailing_slash=True)


def _scan_lines(stream: IO) -> Iterator[Tuple[int, str, str, str]]:
    """
    Yield ``(line_number, kind, original, pattern)`` for every line.

    Raises:
        ReadError: when the stream cannot be read or is not valid UTF-8
    """
    try:
        for line_num, raw in enumerate(stream, 1):
            if isinstance(raw, bytes):
                if line_num == 1 and raw.startswith(UTF8_BOM):
                    raw = raw[len(UTF8_BOM):]
                raw = raw.decode('utf-8')
            elif line_num == 1:
                raw = raw[1:] if raw.startswith('\ufeff') else raw

            line = raw.rstrip('\n')
            if line.endswith('\r'):
                line = line[:-1]

            # Comments are recognized before trimming: "  #x" is a pattern
            if line.startswith('#'):
                yield line_num, COMMENT, line, ''
                continue

            stripped = line.strip()
            if not stripped:
                yield line_num, EMPTY, line, ''
                continue

            yield line_num, PATTERN, stripped, _clean_pattern(stripped)
    except UnicodeDecodeError as e:
        raise ReadError(f"Ignore file is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ReadError(f"Error reading ignore file: {e}") from e


def read_patterns(stream: Optional[IO]) -> List[str]:
    """
    Parse an ignore file stream into its ordered patterns

    Args:
        stream: Binary or text stream; None is treated as an empty file

    Returns:
        Cleaned patterns in file order

    Raises:
        ReadError: on I/O or decoding failure
    """
    if stream is None:
        return []
    return [pattern for _, kind, _, pattern in _scan_lines(stream) if kind == PATTERN]


class IgnoreFileLoader:
    """
    Handles loading, parsing, and validating ignore files
    """

    def __init__(self, ignore_filename: str = IGNORE_FILENAME):
        """
        Initialize loader

        Args:
            ignore_filename: Name of ignore file used when a directory is given
        """
        self.ignore_filename = ignore_filename

    def resolve(self, path: Union[str, Path]) -> Path:
        """Map a directory to the ignore file inside it"""
        path = Path(path)
        if path.is_dir():
            return path / self.ignore_filename
        return path

    def load_file(self, file_path: Union[str, Path]) -> IgnoreFileInfo:
        """
        Load an ignore file

        Args:
            file_path: Path to the ignore file, or a directory containing one

        Returns:
            IgnoreFileInfo with patterns, statistics and warnings. A missing
            file is reported with ``exists=False`` and no patterns.

        Raises:
            ReadError: if the file exists but cannot be read
        """
        path = self.resolve(file_path)
        info = IgnoreFileInfo(path=path)

        try:
            with open(path, 'rb') as f:
                self._parse_into(info, f)
        except FileNotFoundError:
            logger.debug(f"No ignore file at {path}, nothing will be excluded")
            info.exists = False
            return info
        except OSError as e:
            raise ReadError(f"Cannot open ignore file {path}: {e}") from e

        logger.debug(
            f"Loaded {len(info.patterns)} patterns from {path} "
            f"({info.stats['total_lines']} lines, {len(info.warnings)} warnings)"
        )
        for warning in info.warnings:
            logger.debug(f"{path}:{warning.line}: {warning.message}")
        return info

    def _parse_into(self, info: IgnoreFileInfo, stream: IO):
        seen = set()
        for line_num, kind, original, pattern in _scan_lines(stream):
            info.stats['total_lines'] += 1
            if kind == EMPTY:
                info.stats['empty_lines'] += 1
                continue
            if kind == COMMENT:
                info.stats['comment_lines'] += 1
                continue

            info.stats['pattern_lines'] += 1
            for message in self._check_pattern_warnings(original, pattern, info.patterns, seen):
                info.warnings.append(ValidationWarning(line=line_num, pattern=original, message=message))
            seen.add(pattern)
            info.patterns.append(pattern)

    def _check_pattern_warnings(self, original: str, pattern: str,
                                previous: List[str], seen: set) -> List[str]:
        """
        Check pattern for potential issues that aren't errors

        Args:
            original: Pattern as written in the file
            pattern: Pattern after cleaning
            previous: Patterns accepted so far
            seen: Set of patterns accepted so far

        Returns:
            List of warning messages
        """
        warnings = []

        if '\\' in original:
            warnings.append(
                "Pattern contains backslash, which is treated as a path separator. "
                "Use forward slashes for paths."
            )

        if pattern in BROAD_PATTERNS:
            warnings.append("Very broad pattern - will exclude many files")

        if pattern.startswith('!') and not any(not p.startswith('!') for p in previous):
            warnings.append("Negation pattern has no earlier exclusion to override")

        if pattern in seen:
            warnings.append("Duplicate pattern")

        return warnings
