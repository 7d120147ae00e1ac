import fnmatch

import pytest

from minish.pattern import contains_wildcard, wildcard_match


@pytest.mark.parametrize("text", ["*.c", "a?", "'x'*", "\"a\"?b", "*"])
def test_contains_wildcard(text):
    assert contains_wildcard(text)


@pytest.mark.parametrize("text", ["plain", "'*'", "\"a?\"", "'x*y'", ""])
def test_no_unquoted_wildcard(text):
    assert not contains_wildcard(text)


@pytest.mark.parametrize("name", ["main.c", "a", "Makefile", ".hidden"])
def test_literal_matches_itself(name):
    assert wildcard_match(name, name)


@pytest.mark.parametrize("name", ["main.c", "a", "Makefile"])
def test_star_matches_anything(name):
    assert wildcard_match("*", name)
    assert wildcard_match("**", name)


@pytest.mark.parametrize("name", ["main.c", "ab", "x"])
def test_question_marks_match_same_length(name):
    assert wildcard_match("?" * len(name), name)
    assert not wildcard_match("?" * (len(name) + 1), name)


@pytest.mark.parametrize("name", ["main.c", "abcabc", "xy"])
def test_prefix_and_suffix(name):
    assert wildcard_match(name[0] + "*", name)
    assert wildcard_match("*" + name[-1], name)
    assert wildcard_match(name[0] + "*" + name[-1], name)


def test_mismatch():
    assert not wildcard_match("*.c", "main.h")
    assert not wildcard_match("a", "ab")


PATTERNS = ["*.c", "a*b*c", "*ab", "*a?", "a*a", "?*", "*x*y", "*b*a", "m*.?", "*a*"]
TARGETS = ["abc", "abcbc", "aab", "abab", "a", "xay", "ab", "main.c", "a.cc.c", "bab"]


@pytest.mark.parametrize("pattern", PATTERNS)
@pytest.mark.parametrize("target", TARGETS)
def test_agrees_with_fnmatch_on_unquoted_patterns(pattern, target):
    assert wildcard_match(pattern, target) == fnmatch.fnmatchcase(target, pattern)