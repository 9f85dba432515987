"""
Ignore file filtering for ignore-filter

This package decides which candidate paths survive a .dockerignore-style
ignore file:
- Line-based pattern parsing with comment and BOM handling
- Compilation of glob patterns into immutable rules
- Last-match-wins evaluation with negation support
- An optional gitignore dialect backed by pathspec
"""

__version__ = "1.0.0"

from .constants import IGNORE_FILENAME
from .errors import ConfigError, FilterError, IgnoreFilterError, PatternError, ReadError
from .paths import normalize_path
from .file_loader import IgnoreFileLoader, IgnoreFileInfo, read_patterns
from .compiler import CompiledRule, compile_pattern
from .rule_engine import MatchResult, RuleSet, compile_rules, evaluate, explain
from .filter import IgnoreFilter, filter_paths

__all__ = [
    'IGNORE_FILENAME',
    'ConfigError',
    'FilterError',
    'IgnoreFilterError',
    'PatternError',
    'ReadError',
    'normalize_path',
    'IgnoreFileLoader',
    'IgnoreFileInfo',
    'read_patterns',
    'CompiledRule',
    'compile_pattern',
    'MatchResult',
    'RuleSet',
    'compile_rules',
    'evaluate',
    'explain',
    'IgnoreFilter',
    'filter_paths',
]
