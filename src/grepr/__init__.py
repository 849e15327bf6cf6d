"""Line-oriented pattern search over files, directory trees and standard input."""

from .engine import SearchEngine as SearchEngine
from .engine import search as search
from .enumerator import enumerate_sources as enumerate_sources
from .errors import GreprError as GreprError
from .errors import InvalidPatternError as InvalidPatternError
from .errors import SourceIsDirectoryError as SourceIsDirectoryError
from .errors import SourceUnavailableError as SourceUnavailableError
from .matcher import LiteralMatcher as LiteralMatcher
from .matcher import PatternMatcher as PatternMatcher
from .matcher import RegexMatcher as RegexMatcher
from .matcher import compile_matcher as compile_matcher
from .models import MatchRecord as MatchRecord
from .models import SearchEvent as SearchEvent
from .models import SearchRequest as SearchRequest
from .models import SourceFailed as SourceFailed
from .models import SourceSummary as SourceSummary
from .output import ExitStatus as ExitStatus
from .output import ResultFormatter as ResultFormatter
from .sources import InputSource as InputSource
