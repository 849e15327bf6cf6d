"""Line matchers: one ``matches(line)`` interface, literal and regex backends."""

import re
from typing import Protocol

from .errors import InvalidPatternError


class PatternMatcher(Protocol):
    """Answers whether a single line matches. Implementations hold no mutable state."""

    def matches(self, line: str) -> bool:
        """Return True if ``line`` contains a match."""
        ...


class LiteralMatcher:
    """Plain substring search.

    With ``case_insensitive`` the escaped needle is compiled once with
    ``re.IGNORECASE``, so case folding is the simple per-character mapping
    :class:`RegexMatcher` uses and both backends agree (``STRASSE`` does not
    match ``straße`` in either).
    """

    __slots__ = ("_folded", "case_insensitive", "needle")

    def __init__(self, needle: str, *, case_insensitive: bool = False) -> None:
        self.case_insensitive = case_insensitive
        self.needle = needle
        self._folded = re.compile(re.escape(needle), re.IGNORECASE) if case_insensitive else None

    def matches(self, line: str) -> bool:
        if self._folded is not None:
            return self._folded.search(line) is not None
        return self.needle in line

    def __repr__(self) -> str:
        return f"LiteralMatcher({self.needle!r}, case_insensitive={self.case_insensitive})"


class RegexMatcher:
    """Regular-expression search backed by :mod:`re` (a superset of POSIX ERE)."""

    __slots__ = ("regex",)

    def __init__(self, pattern: str, *, case_insensitive: bool = False) -> None:
        flags = re.IGNORECASE if case_insensitive else 0
        try:
            self.regex = re.compile(pattern, flags)
        except re.error as e:
            raise InvalidPatternError(pattern, str(e)) from e

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None

    def __repr__(self) -> str:
        return f"RegexMatcher({self.regex.pattern!r}, flags={self.regex.flags})"


def compile_matcher(pattern: str, *, case_insensitive: bool = False, fixed_strings: bool = False) -> PatternMatcher:
    """Build the matcher for a pattern.

    Args:
        pattern: Regular expression, or a literal string when ``fixed_strings`` is set.
        case_insensitive: Fold case of both pattern and candidate lines.
        fixed_strings: Treat ``pattern`` as a literal substring.

    Raises:
        InvalidPatternError: If ``pattern`` is not a valid regular expression.

    """
    if fixed_strings:
        return LiteralMatcher(pattern, case_insensitive=case_insensitive)
    return RegexMatcher(pattern, case_insensitive=case_insensitive)
