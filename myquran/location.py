# myquran/location.py
"""
Shareable location strings and the view state they describe.

Two shapes exist: the root ``#/`` (chapter list) and ``#/chapter/<n>``
(chapter detail). Anything else degrades to the chapter list.
"""
import re
from dataclasses import dataclass
from typing import Callable, List, Union

ROOT_LOCATION = "#/"
CHAPTER_PREFIX = "#/chapter/"


@dataclass(frozen=True)
class ChapterListState:
    pass


@dataclass(frozen=True)
class ChapterDetailState:
    chapter_number: int


ViewState = Union[ChapterListState, ChapterDetailState]


class LocationCodec:
    """Maps location strings to view states and back."""

    _CHAPTER_PATTERN = re.compile(r"#/chapter/(\d+)/?")

    @classmethod
    def decode(cls, location: str) -> ViewState:
        match = cls._CHAPTER_PATTERN.fullmatch((location or "").strip())
        if match:
            chapter_number = int(match.group(1))
            if chapter_number > 0:
                return ChapterDetailState(chapter_number)
        return ChapterListState()

    @staticmethod
    def encode(state: ViewState) -> str:
        if isinstance(state, ChapterDetailState):
            return f"{CHAPTER_PREFIX}{state.chapter_number}"
        return ROOT_LOCATION


decode = LocationCodec.decode
encode = LocationCodec.encode


LocationListener = Callable[[str], None]


class Location:
    """
    Observable address bar with a back/forward history.

    Every change, whichever code path causes it, is announced to subscribers
    synchronously with the new href.
    """

    def __init__(self, href: str = ROOT_LOCATION):
        self._entries: List[str] = [href or ROOT_LOCATION]
        self._index = 0
        self._listeners: List[LocationListener] = []

    @property
    def href(self) -> str:
        return self._entries[self._index]

    @property
    def can_go_back(self) -> bool:
        return self._index > 0

    @property
    def can_go_forward(self) -> bool:
        return self._index < len(self._entries) - 1

    def assign(self, href: str):
        """Navigate to href, pushing a new history entry."""
        href = href or ROOT_LOCATION
        if href == self.href:
            return
        # Drop the forward branch, like a browser does
        del self._entries[self._index + 1:]
        self._entries.append(href)
        self._index += 1
        self._notify()

    def replace(self, href: str):
        """Swap the current entry without growing the history."""
        href = href or ROOT_LOCATION
        if href == self.href:
            return
        self._entries[self._index] = href
        self._notify()

    def back(self) -> bool:
        if not self.can_go_back:
            return False
        self._index -= 1
        self._notify()
        return True

    def forward(self) -> bool:
        if not self.can_go_forward:
            return False
        self._index += 1
        self._notify()
        return True

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        href = self.href
        for listener in list(self._listeners):
            listener(href)
