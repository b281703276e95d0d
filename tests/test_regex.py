"""Pattern façade tests: group shape, syntax rewriting, replacement tokens."""

import logging

import pytest

from corlib.collections import List
from corlib.errors import ArgumentException, ArgumentOutOfRangeException, NotSupportedException
from corlib.regex import Regex, RegexOptions, translate_pattern


# ---------------------------------------------------------------------------
# Syntax translation
# ---------------------------------------------------------------------------


def test_translate_named_groups_and_backrefs():
    assert translate_pattern(r"(?<word>\w+) \k<word>") == r"(?P<word>\w+) (?P=word)"
    assert translate_pattern(r"(?'x'a)\k'x'") == r"(?P<x>a)(?P=x)"
    assert translate_pattern(r"(a)\k<1>") == r"(a)(?:\1)"


def test_translate_leaves_lookbehind_and_classes():
    assert translate_pattern(r"(?<=a)b(?<!c)") == r"(?<=a)b(?<!c)"
    assert translate_pattern(r"[(?<x>]") == r"[(?<x>]"
    assert translate_pattern(r"[]\k<x>]") == r"[]\k<x>]"
    assert translate_pattern(r"\(?<x>") == r"\(?<x>"


def test_translate_explicit_capture():
    assert translate_pattern(r"(a)(?<n>b)(?:c)", explicit_capture=True) == r"(?:a)(?P<n>b)(?:c)"


def test_rewrite_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="corlib.regex"):
        Regex(r"(?<n>a)")
    assert "regex rewritten" in caplog.text


# ---------------------------------------------------------------------------
# Match shape
# ---------------------------------------------------------------------------


def test_group_offsets_accumulate_from_match_start():
    m = Regex("(a)(b)").Match("ab")
    assert m.Success
    g = m.Groups
    assert (g[0].Value, g[0].Index) == ("ab", 0)
    assert (g[1].Value, g[1].Index, g[1].Length) == ("a", 0, 1)
    assert (g[2].Value, g[2].Index, g[2].Length) == ("b", 1, 1)


def test_group_offsets_relative_to_match_position():
    m = Regex(r"(\d+)-(\d+)").Match("tel 12-345")
    assert m.Index == 4
    assert m.Groups[1].Index == 4
    assert m.Groups[2].Index == 6
    assert m.Groups[2].Value == "345"


def test_unnamed_groups_are_numbered_before_named():
    r = Regex(r"(?<first>a)(b)")
    m = r.Match("ab")
    assert m.Groups[1].Value == "b"
    assert m.Groups[2].Value == "a"
    assert m.Groups["first"].Value == "a"
    assert m.Groups["first"].Name == "first"
    assert r.GetGroupNames() == ["0", "1", "first"]
    assert r.GetGroupNumbers() == [0, 1, 2]


def test_unmatched_group():
    m = Regex("(a)|(b)").Match("b")
    assert not m.Groups[1].Success
    assert m.Groups[1].Value == ""
    assert m.Groups[2].Success
    assert not m.Groups[9].Success
    assert not m.Groups["nope"].Success


def test_failed_match():
    m = Regex("x(y)").Match("abc")
    assert not m.Success
    assert m.Value == ""
    assert m.Groups.Count == 2
    assert not m.NextMatch().Success


def test_match_startat_and_next_match():
    r = Regex(r"\d")
    m = r.Match("a1b2c3", 2)
    assert m.Value == "2"
    m = m.NextMatch()
    assert m.Value == "3"
    assert not m.NextMatch().Success
    with pytest.raises(ArgumentOutOfRangeException):
        r.Match("abc", 4)


def test_matches_returns_list():
    found = Regex(r"\d+").Matches("a1 b22 c333")
    assert isinstance(found, List)
    assert [m.Value for m in found] == ["1", "22", "333"]


def test_matches_handles_empty_matches():
    found = Regex("x*").Matches("axb")
    assert [(m.Value, m.Index) for m in found] == [("", 0), ("x", 1), ("", 2), ("", 3)]


def test_options():
    assert Regex("abc", RegexOptions.IgnoreCase).IsMatch("ABC")
    assert Regex("^b", RegexOptions.Multiline).IsMatch("a\nb")
    assert Regex("a.b", RegexOptions.Singleline).IsMatch("a\nb")
    assert not Regex("a.b").IsMatch("a\nb")
    with pytest.raises(NotSupportedException):
        Regex("a", RegexOptions.RightToLeft)


def test_invalid_pattern_raises_argument_exception():
    with pytest.raises(ArgumentException) as info:
        Regex("(unclosed")
    assert info.value.ParamName == "pattern"
    assert "Invalid pattern '(unclosed'" in info.value.Message


def test_backreference_by_name():
    assert Regex(r"(?<w>\w+) \k<w>").IsMatch("hey hey")
    assert not Regex(r"(?<w>\w+) \k<w>$").IsMatch("hey you")


# ---------------------------------------------------------------------------
# Replace / Split / Escape
# ---------------------------------------------------------------------------


def test_replace_tokens():
    r = Regex(r"(\w+)@(?<host>\w+)")
    assert r.Replace("me@home", "$2 at ${host} for $1") == "home at home for me"
    assert r.Replace("me@home", "[$&]") == "[me@home]"
    assert r.Replace("me@home", "[$0]") == "[me@home]"
    assert r.Replace("me@home", "$$1") == "$1"
    assert r.Replace("me@home", "$9") == "$9"
    assert r.Replace("x me@home y", "<$`|$'>") == "x <x | y> y"


def test_replace_longest_valid_group_number():
    r = Regex("(a)")
    assert r.Replace("a", "$10") == "a0"


def test_replace_count_and_evaluator():
    r = Regex(r"\d")
    assert r.Replace("1 2 3", "#", 2) == "# # 3"
    assert r.Replace("1 2 3", lambda m: str(int(m.Value) * 2)) == "2 4 6"
    assert r.Replace("1 2 3", "#", -1, 2) == "1 # #"
    assert r.Replace("1 2 3", "#", 0) == "1 2 3"


def test_is_match():
    assert Regex("b+").IsMatch("abbc")
    assert not Regex("^b").IsMatch("abc")


def test_split():
    assert Regex(",").Split("a,b,,c") == ["a", "b", "", "c"]
    assert Regex("(-)").Split("a-b") == ["a", "-", "b"]
    assert Regex(",").Split("a,b,c", 2) == ["a", "b,c"]
    assert Regex(",").Split("a,b", 1) == ["a,b"]


def test_escape():
    assert Regex.Escape("a.b*c") == r"a\.b\*c"
    assert Regex.Escape("x y\t#") == "x\\ y\\t\\#"
    assert Regex(Regex.Escape("1+1=2?")).IsMatch("1+1=2?")


def test_match_result_expands_tokens():
    m = Regex(r"(\w+) (\w+)").Match("hello world")
    assert m.Result("$2 $1") == "world hello"
