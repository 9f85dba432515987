"""
Filter orchestration: load an ignore file once, then decide every candidate
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .constants import DEFAULT_SYNTAX, IGNORE_FILENAME
from .errors import FilterError, ReadError
from .file_loader import IgnoreFileLoader
from .paths import is_directory_hint
from .rule_engine import MatchResult, get_rule_engine
from .utils import get_logger, log_with_context

logger = get_logger(__name__)


class IgnoreFilter:
    """
    Compiled ignore rules bound to a matching dialect.

    Instances are immutable after construction and can be shared between
    threads.
    """

    def __init__(self, patterns: Sequence[str] = (), syntax: str = DEFAULT_SYNTAX,
                 source: Optional[Path] = None):
        """
        Compile patterns

        Args:
            patterns: Cleaned ignore patterns in file order
            syntax: Matching dialect ("dockerignore" or "gitignore")
            source: Ignore file the patterns came from, for messages

        Raises:
            PatternError: if any pattern fails to compile
            ConfigError: for an unknown syntax
        """
        self.syntax = syntax
        self.source = source
        self._engine = get_rule_engine(syntax)
        self._rules = self._engine.compile_rules(list(patterns))

    @classmethod
    def from_file(cls, ignore_file: Union[str, Path], syntax: str = DEFAULT_SYNTAX,
                  ignore_filename: str = IGNORE_FILENAME) -> 'IgnoreFilter':
        """
        Load and compile an ignore file. A missing file excludes nothing.

        Raises:
            FilterError: if the file exists but cannot be read
            PatternError: if a pattern fails to compile
        """
        loader = IgnoreFileLoader(ignore_filename)
        try:
            info = loader.load_file(ignore_file)
        except ReadError as e:
            raise FilterError(str(e)) from e
        log_with_context(
            logger, logging.DEBUG, "Loaded ignore file",
            path=str(info.path), exists=info.exists,
            patterns=len(info.patterns), warnings=len(info.warnings),
        )
        return cls(info.patterns, syntax=syntax, source=info.path)

    def __len__(self) -> int:
        return len(self._rules)

    def explain(self, path: str) -> MatchResult:
        """Match a candidate and report which pattern decided it"""
        result = self._engine.match_path(path, self._rules, is_directory_hint(path))
        logger.trace(f"{path}: excluded={result.excluded} (matched: {result.matched_pattern})")
        return result

    def is_excluded(self, path: str) -> bool:
        return self.explain(path).excluded

    def filter(self, candidates: Iterable[str], workers: int = 1) -> List[str]:
        """
        Return the candidates that survive, in input order

        Args:
            candidates: Candidate paths; survivors are returned as given
            workers: Evaluate in a thread pool of this size when > 1
        """
        candidates = list(candidates)
        if not len(self._rules):
            return candidates

        if workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                verdicts = list(executor.map(self.is_excluded, candidates))
        else:
            verdicts = [self.is_excluded(path) for path in candidates]

        survivors = [path for path, excluded in zip(candidates, verdicts) if not excluded]
        logger.debug(f"{len(survivors)} of {len(candidates)} paths survived {len(self._rules)} rules")
        return survivors


def filter_paths(ignore_file: Union[str, Path], candidates: Iterable[str], *,
                 syntax: str = DEFAULT_SYNTAX, workers: int = 1) -> List[str]:
    """
    Filter candidate paths through an ignore file

    Args:
        ignore_file: Path of the ignore file; a missing file excludes nothing
        candidates: Candidate paths in the order they should be reported
        syntax: Matching dialect
        workers: Thread pool size for evaluation

    Returns:
        Surviving paths in input order

    Raises:
        FilterError: if the ignore file exists but cannot be read
        PatternError: if a pattern is malformed
    """
    return IgnoreFilter.from_file(ignore_file, syntax=syntax).filter(candidates, workers=workers)
