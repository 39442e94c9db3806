"""
Error taxonomy for the MyQuran reader.

Remote problems are raised inside the repository as QuranAPIError subclasses
and handed to callers as a Failure value; they never escape a fetch call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureReason(Enum):
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"
    NOT_FOUND = "not_found"


class QuranReaderError(Exception):
    """Base exception for all MyQuran errors."""


class QuranAPIError(QuranReaderError):
    """Base exception for Quran API errors"""

    reason = FailureReason.NETWORK_ERROR

    def __init__(self, message: str, chapter_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.chapter_number = chapter_number


class QuranNetworkError(QuranAPIError):
    """Transport failure, timeout or non-success HTTP status."""

    reason = FailureReason.NETWORK_ERROR


class QuranParseError(QuranAPIError):
    """Response body is not JSON or does not have the expected shape."""

    reason = FailureReason.PARSE_ERROR


class SurahNotFoundError(QuranAPIError):
    """No data exists for the requested chapter number."""

    reason = FailureReason.NOT_FOUND


class VerseOutOfRangeError(QuranReaderError):
    def __init__(self, verse_number: int, verse_count: int) -> None:
        super().__init__(f"Ayah {verse_number} is outside 1..{verse_count}")
        self.verse_number = verse_number
        self.verse_count = verse_count


@dataclass(frozen=True)
class Failure:
    """Result of a fetch attempt that did not produce data."""

    reason: FailureReason
    message: str = ""
    chapter_number: Optional[int] = None

    @classmethod
    def from_error(cls, error: QuranAPIError) -> "Failure":
        return cls(reason=error.reason, message=error.message, chapter_number=error.chapter_number)
