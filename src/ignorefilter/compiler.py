"""
Pattern compiler: turns raw ignore patterns into immutable matchable rules
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .errors import PatternError
from .paths import clean_path


@dataclass(frozen=True)
class Literal:
    """Literal text inside a path segment"""
    text: str


@dataclass(frozen=True)
class AnyChar:
    """``?``: exactly one character"""


@dataclass(frozen=True)
class Star:
    """``*``: zero or more characters within one path segment"""


@dataclass(frozen=True)
class CharClass:
    """``[...]``: one character from (or, when negated, not from) a set of ranges"""
    ranges: Tuple[Tuple[str, str], ...]
    negated: bool = False


@dataclass(frozen=True)
class Globstar:
    """``**`` as a whole segment: zero or more whole path segments"""


ANY_CHAR = AnyChar()
STAR = Star()
GLOBSTAR = Globstar()

Token = Union[Literal, AnyChar, Star, CharClass]


@dataclass(frozen=True)
class PathSegment:
    """One ``/``-delimited component of a pattern"""
    tokens: Tuple[Token, ...]
    regex: re.Pattern = field(compare=False, repr=False)

    def matches(self, name: str) -> bool:
        return self.regex.fullmatch(name) is not None


Segment = Union[PathSegment, Globstar]


@dataclass(frozen=True)
class CompiledRule:
    """A single compiled ignore pattern"""
    pattern: str
    segments: Tuple[Segment, ...]
    negated: bool = False
    rooted: bool = False
    directory_only: bool = False


def compile_pattern(raw: str, line: Optional[int] = None) -> CompiledRule:
    """
    Compile one raw pattern.

    Args:
        raw: Pattern text as produced by the parser
        line: Position of the pattern, used in error messages

    Returns:
        CompiledRule for the pattern

    Raises:
        PatternError: bare ``!`` or unterminated character class
    """
    text = raw
    negated = text.startswith('!')
    if negated:
        text = text[1:]
        if not text.strip():
            raise PatternError("Illegal exclusion pattern", raw, line)

    text = clean_path(text, keep_trailing_slash=True)
    directory_only = text.endswith('/')
    body = text.rstrip('/')
    rooted = '/' in body
    body = body.lstrip('/')
    # "/" cleans to nothing: a rule with no segments never matches a path
    segments = tuple(_compile_segment(part, raw, line) for part in body.split('/')) if body else ()
    return CompiledRule(
        pattern=raw,
        segments=segments,
        negated=negated,
        rooted=rooted,
        directory_only=directory_only,
    )


def _compile_segment(part: str, raw: str, line: Optional[int]) -> Segment:
    if part == '**':
        return GLOBSTAR
    tokens = _tokenize(part, raw, line)
    regex = re.compile(''.join(_token_regex(token) for token in tokens), re.DOTALL)
    return PathSegment(tokens=tokens, regex=regex)


def _tokenize(part: str, raw: str, line: Optional[int]) -> Tuple[Token, ...]:
    tokens: List[Token] = []
    literal = ''
    i = 0
    while i < len(part):
        ch = part[i]
        if ch in '*?[':
            if literal:
                tokens.append(Literal(literal))
                literal = ''
            if ch == '*':
                # consecutive stars inside a segment behave like one
                if not tokens or tokens[-1] is not STAR:
                    tokens.append(STAR)
                i += 1
            elif ch == '?':
                tokens.append(ANY_CHAR)
                i += 1
            else:
                char_class, i = _parse_class(part, i + 1, raw, line)
                tokens.append(char_class)
        else:
            literal += ch
            i += 1
    if literal:
        tokens.append(Literal(literal))
    return tuple(tokens)


def _parse_class(part: str, i: int, raw: str, line: Optional[int]) -> Tuple[CharClass, int]:
    """Parse a class body starting just after ``[``; returns the class and the index after ``]``"""
    negated = i < len(part) and part[i] in '!^'
    if negated:
        i += 1

    ranges: List[Tuple[str, str]] = []
    first = True
    while i < len(part):
        ch = part[i]
        if ch == ']' and not first:
            return CharClass(tuple(ranges), negated), i + 1
        first = False
        if i + 2 < len(part) and part[i + 1] == '-' and part[i + 2] != ']':
            ranges.append((ch, part[i + 2]))
            i += 3
        else:
            ranges.append((ch, ch))
            i += 1

    raise PatternError("Unterminated character class", raw, line)


def _token_regex(token: Token) -> str:
    if isinstance(token, Literal):
        return re.escape(token.text)
    if isinstance(token, Star):
        return '.*'
    if isinstance(token, AnyChar):
        return '.'
    members = ''.join(
        re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}"
        for lo, hi in token.ranges
        if lo <= hi
    )
    if not members:
        # only reversed ranges: nothing matches, so the negation matches anything
        return '.' if token.negated else '(?!)'
    return f"[^{members}]" if token.negated else f"[{members}]"
