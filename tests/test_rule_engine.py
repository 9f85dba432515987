#!/usr/bin/env python3
"""
Tests for rule evaluation: wildcards, scoping, negation and ordering
"""

import pytest

from ignorefilter.errors import ConfigError, PatternError
from ignorefilter.rule_engine import (
    GitIgnoreRuleEngine, IgnoreRuleEngine, RuleSet, compile_rules, evaluate, explain, get_rule_engine,
)


def excluded(patterns, path, is_dir=False):
    return evaluate(path, compile_rules(patterns), is_dir)


def test_empty_rule_set_excludes_nothing():
    rules = compile_rules([])
    assert len(rules) == 0
    assert not evaluate("anything", rules)
    assert not evaluate("a/b/c", RuleSet())


def test_rule_order_last_match_wins():
    """A later rule overrides an earlier verdict"""
    assert excluded(["*.log", "!keep.log"], "build.log")
    assert not excluded(["*.log", "!keep.log"], "keep.log")
    assert excluded(["!keep.log", "*.log"], "keep.log")


def test_negation_without_prior_exclusion_has_no_effect():
    assert not excluded(["!keep.log"], "keep.log")
    assert not excluded(["!keep.log"], "other.log")


def test_single_star_stays_in_segment():
    assert excluded(["a/*"], "a/b")
    assert not excluded(["a/*"], "a/b/c")


def test_globstar_crosses_segments():
    assert excluded(["a/**"], "a/b")
    assert excluded(["a/**"], "a/b/c")
    assert not excluded(["a/**"], "b/a/c")


def test_globstar_matches_zero_segments():
    assert excluded(["**/foo"], "foo")
    assert excluded(["**/foo"], "x/y/foo")
    assert excluded(["a/**/b"], "a/b")
    assert excluded(["a/**/b"], "a/x/y/b")
    assert not excluded(["a/**/b"], "a/x/c")


def test_unrooted_pattern_matches_last_segment_at_any_depth():
    assert excluded(["*.tmp"], "a.tmp")
    assert excluded(["*.tmp"], "deep/dir/a.tmp")
    assert not excluded(["*.tmp"], "a.tmp/child")


def test_rooted_pattern_anchors_at_start():
    assert excluded(["src/*.c"], "src/main.c")
    assert not excluded(["src/*.c"], "lib/src/main.c")
    assert excluded(["/build"], "build")
    assert not excluded(["/build"], "sub/build")


def test_question_mark_and_classes():
    assert excluded(["file?.txt"], "file1.txt")
    assert not excluded(["file?.txt"], "file10.txt")
    assert excluded(["[a-c].txt"], "b.txt")
    assert not excluded(["[!a-c].txt"], "b.txt")
    assert excluded(["[!a-c].txt"], "d.txt")


def test_wildcards_never_cross_separator():
    assert not excluded(["a?b"], "a/b")
    assert not excluded(["a*b"], "a/b")


def test_matching_is_case_sensitive():
    assert excluded(["*.LOG"], "x.LOG")
    assert not excluded(["*.LOG"], "x.log")


def test_directory_only_pattern():
    """logs/ matches contents of a logs directory but not a file named logs"""
    assert excluded(["logs/"], "logs/err.txt")
    assert excluded(["logs/"], "app/logs/deep/err.txt")
    assert not excluded(["logs/"], "logs")
    assert excluded(["logs/"], "logs", is_dir=True)


def test_rooted_directory_only_pattern():
    assert excluded(["app/logs/"], "app/logs/err.txt")
    assert not excluded(["app/logs/"], "x/app/logs/err.txt")
    assert not excluded(["app/logs/"], "app/logs")
    assert excluded(["app/logs/"], "app/logs", is_dir=True)


def test_candidate_normalization():
    assert excluded(["src/gen/**"], "./src//gen/out.o")
    assert excluded(["src/gen/**"], "src\\gen\\out.o")


def test_dot_path_is_never_excluded():
    assert not excluded(["**", "*"], ".")


def test_explain_reports_deciding_rule():
    rules = compile_rules(["*.log", "!keep.log", "tmp/"])
    result = explain("keep.log", rules)
    assert not result.excluded
    assert result.matched_pattern == "!keep.log"
    assert result.rule_index == 1

    result = explain("readme.md", rules)
    assert not result.excluded
    assert result.matched_pattern is None


def test_compile_rules_reports_position():
    with pytest.raises(PatternError) as exc_info:
        compile_rules(["*.log", "ok", "[bad"])
    assert exc_info.value.line == 3
    assert exc_info.value.pattern == "[bad"


def test_rule_set_preserves_order():
    rules = compile_rules(["b", "a", "!b"])
    assert rules.patterns == ["b", "a", "!b"]


def test_validate_pattern():
    engine = IgnoreRuleEngine()
    assert engine.validate_pattern("*.py") == (True, None)
    is_valid, message = engine.validate_pattern("[oops")
    assert not is_valid
    assert "Unterminated" in message


def test_get_rule_engine():
    assert isinstance(get_rule_engine("dockerignore"), IgnoreRuleEngine)
    assert isinstance(get_rule_engine("gitignore"), GitIgnoreRuleEngine)
    with pytest.raises(ConfigError):
        get_rule_engine("hgignore")


def test_gitignore_engine_last_match_wins():
    engine = GitIgnoreRuleEngine()
    rules = engine.compile_rules(["*.log", "!keep.log"])

    result = engine.match_path("keep.log", rules)
    assert not result.excluded
    assert result.matched_pattern == "!keep.log"

    result = engine.match_path("sub/build.log", rules)
    assert result.excluded
    assert result.matched_pattern == "*.log"

    assert not engine.match_path("readme.md", rules).excluded


def test_gitignore_engine_directory_patterns():
    """In git's dialect a bare name also matches everything beneath it"""
    engine = GitIgnoreRuleEngine()
    rules = engine.compile_rules(["build"])
    assert engine.match_path("build/out.o", rules).excluded
    assert engine.match_path("build", rules).excluded


def test_gitignore_engine_rejects_unterminated_class():
    """Both dialects reject the same malformed patterns"""
    engine = GitIgnoreRuleEngine()
    is_valid, message = engine.validate_pattern("[abc")
    assert not is_valid
    assert message == "Unterminated character class"

    with pytest.raises(PatternError) as exc_info:
        engine.compile_rules(["*.log", "[abc"])
    assert exc_info.value.pattern == "[abc"
    assert exc_info.value.line == 2
