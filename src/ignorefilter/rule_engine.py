"""
Rule engine for pattern compilation and path matching

Rules are applied left to right and the last matching rule decides, so a
later ``!pattern`` can re-include a path an earlier pattern excluded.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import pathspec

from .compiler import CompiledRule, Globstar, Segment, compile_pattern
from .constants import SYNTAX_DOCKERIGNORE, SYNTAX_GITIGNORE
from .errors import ConfigError, PatternError
from .paths import split_path
from .utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MatchResult:
    """Result of matching a path against ignore rules"""
    excluded: bool
    matched_pattern: Optional[str] = None
    rule_index: Optional[int] = None  # Position of the deciding rule in the rule set


@dataclass(frozen=True)
class RuleSet:
    """Ordered, immutable sequence of compiled rules"""
    rules: Tuple[CompiledRule, ...] = ()

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[CompiledRule]:
        return iter(self.rules)

    @property
    def patterns(self) -> List[str]:
        return [rule.pattern for rule in self.rules]


def compile_rules(patterns: Iterable[str]) -> RuleSet:
    """
    Compile patterns into a rule set, keeping file order

    Raises:
        PatternError: on the first pattern that fails to compile
    """
    rules = tuple(
        compile_pattern(pattern, line=index)
        for index, pattern in enumerate(patterns, 1)
    )
    logger.debug(f"Compiled {len(rules)} ignore rules")
    return RuleSet(rules)


def _match_segments(segments: Sequence[Segment], names: Sequence[str]) -> bool:
    if not segments:
        return not names
    head, rest = segments[0], segments[1:]
    if isinstance(head, Globstar):
        return any(_match_segments(rest, names[i:]) for i in range(len(names) + 1))
    return bool(names) and head.matches(names[0]) and _match_segments(rest, names[1:])


def match_rule(rule: CompiledRule, names: Sequence[str], is_dir: bool = False) -> bool:
    """
    Check a single rule against a path split into components.

    Directory-only rules match a path through one of its parent directories,
    or through the path itself when it is known to be a directory.
    """
    if not names:
        return False

    if rule.directory_only:
        depth = len(names) if is_dir else len(names) - 1
        if rule.rooted:
            return any(_match_segments(rule.segments, names[:k]) for k in range(1, depth + 1))
        return any(_match_segments(rule.segments, [name]) for name in names[:depth])

    if rule.rooted:
        return _match_segments(rule.segments, names)
    return _match_segments(rule.segments, names[-1:])


def explain(path: str, rules: RuleSet, is_dir: bool = False) -> MatchResult:
    """
    Fold the rule set over a path and report the deciding rule.

    Args:
        path: Candidate path (normalized here)
        rules: Compiled rule set
        is_dir: Whether the candidate is known to be a directory

    Returns:
        MatchResult; ``excluded`` is False when no rule matched
    """
    names = split_path(path)
    result = MatchResult(excluded=False)
    for index, rule in enumerate(rules.rules):
        if match_rule(rule, names, is_dir):
            result = MatchResult(
                excluded=not rule.negated,
                matched_pattern=rule.pattern,
                rule_index=index,
            )
    return result


def evaluate(path: str, rules: RuleSet, is_dir: bool = False) -> bool:
    """Return True if the path is excluded by the rule set"""
    return explain(path, rules, is_dir).excluded


class IgnoreRuleEngine:
    """
    Handles pattern compilation and path matching with the built-in
    dockerignore-style semantics
    """

    syntax = SYNTAX_DOCKERIGNORE

    def compile_rules(self, patterns: Sequence[str]) -> RuleSet:
        return compile_rules(patterns)

    def match_path(self, path: str, compiled_rules: RuleSet, is_dir: bool = False) -> MatchResult:
        return explain(path, compiled_rules, is_dir)

    def validate_pattern(self, pattern: str) -> Tuple[bool, Optional[str]]:
        """
        Validate a single pattern

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            compile_pattern(pattern)
            return True, None
        except PatternError as e:
            return False, str(e)


@dataclass(frozen=True)
class GitIgnoreRules:
    """Patterns compiled by pathspec, kept with their source text"""
    spec: pathspec.GitIgnoreSpec
    patterns: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.patterns)


class GitIgnoreRuleEngine:
    """
    Path matching with git's wildmatch semantics, delegated to pathspec
    """

    syntax = SYNTAX_GITIGNORE

    def compile_rules(self, patterns: Sequence[str]) -> GitIgnoreRules:
        patterns = tuple(patterns)
        # Compile one at a time so errors point at the offending pattern
        for index, pattern in enumerate(patterns, 1):
            is_valid, error = self.validate_pattern(pattern)
            if not is_valid:
                raise PatternError(error or "Invalid pattern", pattern, index)

        logger.debug(f"Compiled {len(patterns)} gitignore rules")
        return GitIgnoreRules(spec=pathspec.GitIgnoreSpec.from_lines(patterns), patterns=patterns)

    def match_path(self, path: str, compiled_rules: GitIgnoreRules, is_dir: bool = False) -> MatchResult:
        names = split_path(path)
        if not names:
            return MatchResult(excluded=False)

        check = compiled_rules.spec.check_file('/'.join(names) + ('/' if is_dir else ''))
        if check.index is None:
            return MatchResult(excluded=False)
        return MatchResult(
            excluded=bool(check.include),
            matched_pattern=compiled_rules.patterns[check.index],
            rule_index=check.index,
        )

    def validate_pattern(self, pattern: str) -> Tuple[bool, Optional[str]]:
        """
        Validate a single pattern. pathspec reads an unterminated class as
        literal text, so the built-in compiler checks the pattern first.

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            compile_pattern(pattern)
            pathspec.GitIgnoreSpec.from_lines([pattern])
            return True, None
        except PatternError as e:
            return False, e.message
        except ValueError as e:
            return False, str(e)


def get_rule_engine(syntax: str = SYNTAX_DOCKERIGNORE):
    """
    Select the rule engine for a matching dialect

    Raises:
        ConfigError: for an unknown syntax name
    """
    if syntax == SYNTAX_DOCKERIGNORE:
        return IgnoreRuleEngine()
    if syntax == SYNTAX_GITIGNORE:
        return GitIgnoreRuleEngine()
    raise ConfigError(f"Unknown ignore syntax: {syntax!r}")
