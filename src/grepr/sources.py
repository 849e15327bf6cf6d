"""Input sources: standard input or a single file, read lazily line by line."""

import logging
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from types import TracebackType
from typing import BinaryIO, Self

from .errors import SourceUnavailableError

logger = logging.getLogger(__name__)

STDIN_TARGET = "-"
STDIN_DISPLAY_NAME = "(standard input)"


@dataclass(frozen=True, slots=True)
class InputSource:
    """One origin of line-delimited text.

    ``origin_id`` is the path to open, or ``"-"`` for standard input.
    ``display_name`` labels the source in multi-source output.
    """

    origin_id: str
    display_name: str

    @classmethod
    def stdin(cls) -> Self:
        """Source reading the process standard input."""
        return cls(STDIN_TARGET, STDIN_DISPLAY_NAME)

    @classmethod
    def file(cls, path: str) -> Self:
        """Source reading the file at ``path``, labeled with the path as given."""
        return cls(path, path)

    @property
    def is_stdin(self) -> bool:
        return self.origin_id == STDIN_TARGET

    def open(self) -> "LineReader":
        """Acquire the underlying handle.

        Raises:
            SourceUnavailableError: If the file is missing, unreadable or a directory,
                or if standard input is closed.

        """
        if self.is_stdin:
            stream = getattr(sys.stdin, "buffer", None)
            if stream is None or stream.closed:
                raise SourceUnavailableError(self.display_name, "standard input is not available")
            # stdin belongs to the process, never closed here
            return LineReader(self, stream, owns_stream=False)

        try:
            stream = open(self.origin_id, "rb")  # noqa: SIM115 -- released by LineReader
        except OSError as e:
            raise SourceUnavailableError.from_os_error(self.display_name, e) from e
        logger.debug("opened %s", self.display_name)
        return LineReader(self, stream, owns_stream=True)


class LineReader:
    """Scoped handle over one source, iterable once as ``(line_number, raw_line)``.

    Lines are split on ``\\n`` only; the newline is stripped and a final line
    without a trailing newline is still yielded. Use as a context manager so the
    handle is released on every exit path.
    """

    def __init__(self, source: InputSource, stream: BinaryIO, *, owns_stream: bool) -> None:
        self.source = source
        self._stream = stream
        self._owns_stream = owns_stream
        self._consumed = False

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the handle if this reader owns it. Safe to call repeatedly."""
        if self._owns_stream and not self._stream.closed:
            self._stream.close()
            logger.debug("closed %s", self.source.display_name)

    def __iter__(self) -> Iterator[tuple[int, bytes]]:
        if self._consumed:
            raise RuntimeError(f"source already consumed: {self.source.display_name}")
        self._consumed = True
        line_number = 0
        try:
            for raw in self._stream:
                line_number += 1
                yield line_number, raw.removesuffix(b"\n")
        except OSError as e:
            raise SourceUnavailableError.from_os_error(self.source.display_name, e) from e
