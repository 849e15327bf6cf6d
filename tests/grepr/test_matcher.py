"""Tests for line matchers."""

import pytest

from grepr import InvalidPatternError, LiteralMatcher, RegexMatcher, compile_matcher


class TestCompileMatcher:
    """Tests for the compile_matcher factory."""

    def test_regex_by_default(self) -> None:
        """Without fixed_strings the pattern is a regular expression."""
        assert isinstance(compile_matcher("fo+"), RegexMatcher)

    def test_fixed_strings(self) -> None:
        """fixed_strings selects the literal backend."""
        assert isinstance(compile_matcher("fo+", fixed_strings=True), LiteralMatcher)

    def test_invalid_pattern(self) -> None:
        """Uncompilable regex raises InvalidPatternError carrying the pattern."""
        with pytest.raises(InvalidPatternError) as exc_info:
            compile_matcher("foo(")
        assert exc_info.value.pattern == "foo("
        assert exc_info.value.code == "invalid_pattern"

    def test_invalid_regex_is_fine_as_literal(self) -> None:
        """Regex syntax errors don't matter for literal patterns."""
        matcher = compile_matcher("foo(", fixed_strings=True)
        assert matcher.matches("call foo(1)")


class TestRegexMatcher:
    """Tests for RegexMatcher."""

    def test_substring_search(self) -> None:
        """Matches anywhere in the line, not only at the start."""
        matcher = RegexMatcher("bar")
        assert matcher.matches("foobar")
        assert not matcher.matches("foo")

    def test_extended_syntax(self) -> None:
        """Alternation, groups and quantifiers work without escaping."""
        matcher = RegexMatcher(r"^(ab|cd)+x?$")
        assert matcher.matches("abcdab")
        assert matcher.matches("cdx")
        assert not matcher.matches("abc")

    def test_case_sensitive_by_default(self) -> None:
        """Case matters unless requested otherwise."""
        assert not RegexMatcher("FOO").matches("foo")

    def test_case_insensitive(self) -> None:
        """case_insensitive folds both sides."""
        matcher = RegexMatcher("FOO", case_insensitive=True)
        assert matcher.matches("foo")
        assert matcher.matches("xFoOx")

    def test_empty_pattern_matches_everything(self) -> None:
        """An empty regex matches every line, including empty ones."""
        matcher = RegexMatcher("")
        assert matcher.matches("")
        assert matcher.matches("anything")


class TestLiteralMatcher:
    """Tests for LiteralMatcher."""

    def test_metacharacters_are_literal(self) -> None:
        """Regex metacharacters match themselves."""
        matcher = LiteralMatcher("a.c")
        assert matcher.matches("xa.cx")
        assert not matcher.matches("abc")

    def test_case_insensitive(self) -> None:
        """Case is ignored; metacharacters stay literal."""
        matcher = LiteralMatcher("FOO.", case_insensitive=True)
        assert matcher.needle == "FOO."
        assert matcher.matches("FoO.bar")
        assert not matcher.matches("FoObar")

    def test_case_folding_is_unicode_aware(self) -> None:
        """Non-ASCII letters fold case one character at a time."""
        matcher = LiteralMatcher("ÉCOLE", case_insensitive=True)
        assert matcher.matches("une école")

    def test_empty_pattern_matches_everything(self) -> None:
        """An empty needle is a substring of every line."""
        matcher = LiteralMatcher("")
        assert matcher.matches("")
        assert matcher.matches("anything")


@pytest.mark.parametrize("fixed_strings", [False, True])
@pytest.mark.parametrize(
    ("pattern", "line", "case_insensitive", "expected"),
    [
        ("foo", "foo", False, True),
        ("foo", "FOO", False, False),
        ("foo", "FOO", True, True),
        ("foo", "bar", True, False),
        ("ÉCOLE", "école", True, True),
        ("STRASSE", "straße", True, False),
        ("straße", "STRASSE", True, False),
    ],
)
def test_backends_agree(pattern: str, line: str, case_insensitive: bool, expected: bool, fixed_strings: bool) -> None:
    """Literal and regex backends give the same answer for a plain word."""
    matcher = compile_matcher(pattern, case_insensitive=case_insensitive, fixed_strings=fixed_strings)
    assert matcher.matches(line) is expected
