# myquran/views.py
"""
View-models behind the two screens.

They hold what the screens draw (loading flags, data, failures) and talk to
the repository. Rendering lives in ui.py.
"""
import asyncio
from typing import Callable, List, Optional

from ._logging import get_logger
from .exceptions import Failure, FailureReason
from .jump import AyatJumpController, LocateElement
from .models import TOTAL_SURAHS, ChapterDetail, ChapterSummary
from .search import filter_chapters
from .surah_repository import SurahRepository

logger = get_logger(__name__)


class ChapterListView:
    def __init__(self, repository: SurahRepository, on_change: Optional[Callable[[], None]] = None):
        self.repository = repository
        self.on_change = on_change
        self.summaries: List[ChapterSummary] = []
        self.query = ""
        self.loading = True
        self.loaded = False
        self.failure: Optional[Failure] = None

    @property
    def visible(self) -> List[ChapterSummary]:
        return filter_chapters(self.summaries, self.query)

    def set_query(self, query: str):
        self.query = query or ""
        self._changed()

    async def load(self, force: bool = False) -> List[ChapterSummary]:
        """Fetch the chapter list once; a failed attempt leaves an empty list."""
        if self.loaded and not force:
            return self.summaries
        self.loading = True
        self.failure = None
        self._changed()

        result = await self.repository.fetch_chapter_list()
        self.loading = False
        if isinstance(result, Failure):
            self.failure = result
            self.summaries = []
        else:
            self.summaries = list(result)
            self.loaded = True
        self._changed()
        return self.summaries

    def _changed(self):
        if self.on_change is not None:
            self.on_change()


class ChapterDetailView:
    """
    One chapter's screen: its data, loading flag and jump controller.

    Every request is tagged with the chapter number it was made for; a
    response is applied only while that chapter is still the one on screen
    and no newer request has been issued.
    """

    def __init__(
        self,
        repository: SurahRepository,
        jump: AyatJumpController,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.repository = repository
        self.jump = jump
        self.on_change = on_change
        self.chapter_number: Optional[int] = None
        self.detail: Optional[ChapterDetail] = None
        self.failure: Optional[Failure] = None
        self.loading = False
        self._request_id = 0
        self._task: Optional[asyncio.Task] = None

    def show(self, chapter_number: int) -> Optional[asyncio.Task]:
        """Make chapter_number the active chapter and start loading it."""
        if chapter_number == self.chapter_number and (self.loading or self.detail is not None):
            return self._task
        if chapter_number != self.chapter_number:
            self.jump.reset()
        self.chapter_number = chapter_number
        return self._start_request()

    def retry(self) -> Optional[asyncio.Task]:
        """Re-request the active chapter after a failed attempt."""
        if self.chapter_number is None or self.loading or self.detail is not None:
            return None
        return self._start_request()

    def close(self):
        """Tear down when the detail screen goes away."""
        self.jump.dispose()
        self.chapter_number = None
        self.detail = None
        self.failure = None
        self.loading = False
        self._request_id += 1

    def _start_request(self) -> asyncio.Task:
        self._request_id += 1
        self.detail = None
        self.failure = None
        self.loading = True
        self._changed()
        self._task = asyncio.ensure_future(self.load(self.chapter_number, self._request_id))
        return self._task

    async def load(self, chapter_number: int, request_id: Optional[int] = None):
        if 1 <= chapter_number <= TOTAL_SURAHS:
            result = await self.repository.fetch_chapter_detail(chapter_number)
        else:
            result = Failure(FailureReason.NOT_FOUND, f"There is no surah {chapter_number}", chapter_number)

        if request_id is None:
            request_id = self._request_id
        if chapter_number != self.chapter_number or request_id != self._request_id:
            logger.debug("Discarding stale response for chapter %s (active: %s)", chapter_number, self.chapter_number)
            return

        self.loading = False
        if isinstance(result, Failure):
            self.failure = result
        else:
            self.detail = result
        self._changed()

    def jump_to(self, verse_number: int, locate_element: Optional[LocateElement] = None) -> bool:
        if self.detail is None:
            return False
        return self.jump.jump_to(verse_number, self.detail.verse_count, locate_element)

    def _changed(self):
        if self.on_change is not None:
            self.on_change()
