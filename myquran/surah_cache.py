# myquran/surah_cache.py
from typing import Dict, List, Optional

from .models import ChapterDetail, ChapterSummary


class SurahCache:
    """
    Session cache of fetched Quran data.

    Append-only: a record stored for a chapter number is never replaced or
    evicted, so every reader of a chapter sees one consistent ChapterDetail.
    Nothing is written to disk.
    """

    def __init__(self):
        self._chapter_list: Optional[List[ChapterSummary]] = None
        self._details: Dict[int, ChapterDetail] = {}

    def get_chapter_list(self) -> Optional[List[ChapterSummary]]:
        """Cached chapter list, or None if it was never fetched"""
        if self._chapter_list is None:
            return None
        return list(self._chapter_list)

    def save_chapter_list(self, summaries: List[ChapterSummary]) -> List[ChapterSummary]:
        if self._chapter_list is None:
            self._chapter_list = list(summaries)
        return list(self._chapter_list)

    def get_surah(self, number: int) -> Optional[ChapterDetail]:
        return self._details.get(number)

    def save_surah(self, number: int, detail: ChapterDetail) -> ChapterDetail:
        """Store detail unless one is already cached; returns the cached record."""
        return self._details.setdefault(number, detail)

    def __contains__(self, number: int) -> bool:
        return number in self._details

    def __len__(self) -> int:
        return len(self._details)
