"""Search request and the events a search run produces."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from .errors import SourceUnavailableError
from .sources import InputSource


class SearchRequest(BaseModel):
    """Validated, immutable description of one search run.

    An empty ``targets`` tuple means standard input.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern: str = Field(min_length=1)
    targets: tuple[str, ...] = ()
    recursive: bool = False
    count_only: bool = False
    invert: bool = False
    case_insensitive: bool = False
    fixed_strings: bool = False
    skip_binary: bool = False


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """A reported line. ``text`` has its newline stripped; ``line_number`` is 1-based."""

    source: InputSource
    line_number: int
    text: str
    matched: bool = True


@dataclass(frozen=True, slots=True)
class SourceSummary:
    """Count of effective matches in one fully drained source."""

    source: InputSource
    count: int


@dataclass(frozen=True, slots=True)
class SourceFailed:
    """A target or source that could not be resolved, opened or read to the end."""

    target: str
    error: SourceUnavailableError


type SearchEvent = MatchRecord | SourceSummary | SourceFailed
