"""MyQuran - a terminal reader for the Qur'an."""

from .exceptions import Failure, FailureReason
from .jump import AyatJumpController, JumpState
from .location import ChapterDetailState, ChapterListState, Location, LocationCodec
from .models import ChapterDetail, ChapterSummary, RevelationPlace, Verse
from .navigation import NavigationController
from .search import filter_chapters
from .surah_repository import SurahRepository
from .version import VERSION

__version__ = VERSION

__all__ = [
    "AyatJumpController",
    "ChapterDetail",
    "ChapterDetailState",
    "ChapterListState",
    "ChapterSummary",
    "Failure",
    "FailureReason",
    "JumpState",
    "Location",
    "LocationCodec",
    "NavigationController",
    "RevelationPlace",
    "SurahRepository",
    "Verse",
    "filter_chapters",
]
