# myquran/search.py
from typing import Iterable, List

from .models import ChapterSummary


def filter_chapters(summaries: Iterable[ChapterSummary], query: str) -> List[ChapterSummary]:
    """Chapters whose transliterated name contains query, ignoring case. Order is kept."""
    needle = (query or "").casefold()
    if not needle:
        return list(summaries)
    return [summary for summary in summaries if needle in summary.name_latin.casefold()]
