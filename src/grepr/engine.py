"""Search engine: drives enumeration, line iteration and matching for one request."""

import logging
from collections.abc import Iterator

from .enumerator import ResolvedSource, enumerate_sources
from .errors import SourceUnavailableError
from .matcher import PatternMatcher, compile_matcher
from .models import MatchRecord, SearchEvent, SearchRequest, SourceFailed, SourceSummary
from .sources import InputSource

logger = logging.getLogger(__name__)

# Lines are matched as text; undecodable bytes round-trip unchanged through surrogates
LINE_ENCODING = "utf-8"
LINE_ERRORS = "surrogateescape"


def decode_line(raw: bytes) -> str:
    return raw.decode(LINE_ENCODING, LINE_ERRORS)


def encode_line(text: str) -> bytes:
    return text.encode(LINE_ENCODING, LINE_ERRORS)


class SearchEngine:
    """Runs one :class:`SearchRequest` as a lazy, ordered event stream.

    The pattern is compiled on construction, so an invalid pattern raises
    :class:`~grepr.errors.InvalidPatternError` before any source is touched.
    Sources are drained one at a time in enumeration order; each handle is
    released before the next source is opened, including when the consumer
    stops iterating early.

    Events per source are either its :class:`MatchRecord` items (detail mode)
    or one :class:`SourceSummary` (count mode). A source that fails yields a
    :class:`SourceFailed`; records it already produced stay valid.
    """

    def __init__(self, request: SearchRequest, *, matcher: PatternMatcher | None = None) -> None:
        self.request = request
        self.matcher = matcher or compile_matcher(
            request.pattern, case_insensitive=request.case_insensitive, fixed_strings=request.fixed_strings
        )
        self._resolved: list[ResolvedSource] | None = None

    def resolve(self) -> list[ResolvedSource]:
        """Enumerate the request's targets once and cache the ordered result."""
        if self._resolved is None:
            self._resolved = list(
                enumerate_sources(
                    self.request.targets, recursive=self.request.recursive, skip_binary=self.request.skip_binary
                )
            )
            logger.debug("resolved %d entries from %d targets", len(self._resolved), len(self.request.targets))
        return self._resolved

    @property
    def multi_source(self) -> bool:
        """True when more than one entry (source or failed target) is in play."""
        return len(self.resolve()) > 1

    def is_match(self, text: str) -> bool:
        """Effective match: the raw match flipped when the request inverts."""
        return self.matcher.matches(text) != self.request.invert

    def run(self) -> Iterator[SearchEvent]:
        for entry in self.resolve():
            if isinstance(entry, SourceUnavailableError):
                yield SourceFailed(entry.target, entry)
                continue
            yield from self._scan(entry)

    def __iter__(self) -> Iterator[SearchEvent]:
        return self.run()

    def _scan(self, source: InputSource) -> Iterator[SearchEvent]:
        try:
            with source.open() as reader:
                if self.request.count_only:
                    count = 0
                    for _, raw in reader:
                        if self.is_match(decode_line(raw)):
                            count += 1
                    yield SourceSummary(source, count)
                else:
                    for line_number, raw in reader:
                        text = decode_line(raw)
                        if self.is_match(text):
                            yield MatchRecord(source, line_number, text)
        except SourceUnavailableError as e:
            logger.debug("source failed: %s", e)
            yield SourceFailed(source.display_name, e)


def search(request: SearchRequest) -> Iterator[SearchEvent]:
    """Run ``request`` and return its event stream."""
    return SearchEngine(request).run()
