"""Exception hierarchy for pattern compilation and source access."""

import errno


class GreprError(Exception):
    """Base for all grepr errors."""

    code = "error"


class InvalidPatternError(GreprError):
    """Pattern could not be compiled. Fatal, raised before any source is touched."""

    code = "invalid_pattern"

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid pattern {pattern!r}: {reason}")


class SourceUnavailableError(GreprError):
    """A single target could not be opened or read. Recovered per source."""

    code = "source_unavailable"

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"{target}: {reason}")

    @classmethod
    def from_os_error(cls, target: str, exc: OSError) -> "SourceUnavailableError":
        """Map an ``OSError`` raised for ``target`` to the matching source error."""
        if isinstance(exc, IsADirectoryError) or exc.errno == errno.EISDIR:
            return SourceIsDirectoryError(target)
        return cls(target, exc.strerror or str(exc))


class SourceIsDirectoryError(SourceUnavailableError):
    """A directory was given as a target while recursion is disabled."""

    code = "is_a_directory"

    def __init__(self, target: str) -> None:
        super().__init__(target, "Is a directory")
