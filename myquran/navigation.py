# myquran/navigation.py
from typing import Callable, List

from ._logging import get_logger
from .location import ChapterDetailState, ChapterListState, Location, LocationCodec, ViewState

logger = get_logger(__name__)

ViewListener = Callable[[ViewState], None]


class NavigationController:
    """
    Decides whether the chapter list or a chapter detail is on screen.

    The location is the single source of truth: internal transitions write an
    encoded location, and every location change (ours or external, such as
    back/forward or a typed deep link) is decoded into the current state.
    """

    def __init__(self, location: Location):
        self.location = location
        self._state: ViewState = LocationCodec.decode(location.href)
        self._listeners: List[ViewListener] = []
        self._unsubscribe = location.subscribe(self._on_location_change)

    @property
    def state(self) -> ViewState:
        return self._state

    def select_chapter(self, chapter_number: int):
        self.location.assign(LocationCodec.encode(ChapterDetailState(chapter_number)))

    def go_back(self):
        self.location.assign(LocationCodec.encode(ChapterListState()))

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self):
        """Stop following the location."""
        self._unsubscribe()
        self._listeners.clear()

    def _on_location_change(self, href: str):
        state = LocationCodec.decode(href)
        if state == self._state:
            return
        logger.debug("View changed: %s -> %s (%s)", self._state, state, href)
        self._state = state
        for listener in list(self._listeners):
            listener(state)
