# myquran/jump.py
"""
Jump-to-ayah support for the chapter detail view.

The controller owns the jump button's dropdown, the selected and highlighted
ayah, and the timer that removes the highlight again. It scrolls through a
ScrollContainer supplied by the view.
"""
import asyncio
import dataclasses
from dataclasses import dataclass
from typing import Callable, Hashable, Optional, Protocol

from ._logging import get_logger
from .events import PointerEventBus
from .exceptions import VerseOutOfRangeError

logger = get_logger(__name__)

HIGHLIGHT_DURATION = 4.5  # seconds
SCROLL_MARGIN = 20


@dataclass
class JumpState:
    selected_verse: Optional[int] = None
    highlighted_verse: Optional[int] = None
    dropdown_open: bool = False


class ScrollContainer(Protocol):
    scroll_top: float

    def scroll_to(self, top: float, smooth: bool = True) -> None:
        ...


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Anything with asyncio's ``call_later``."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


# Resolves an ayah number to its offset from the container's visible top,
# or None when the ayah is not laid out.
LocateElement = Callable[[int], Optional[float]]


def validate_verse_number(verse_number: int, verse_count: int) -> int:
    if not 1 <= verse_number <= verse_count:
        raise VerseOutOfRangeError(verse_number, verse_count)
    return verse_number


class AyatJumpController:
    """
    Jump state for one chapter detail view.

    At most one highlight-clear timer is pending at a time; scheduling a new
    one cancels the previous handle. The outside-click listener is attached
    only while the dropdown is open.
    """

    def __init__(
        self,
        pointer_events: Optional[PointerEventBus] = None,
        scheduler: Optional[Scheduler] = None,
        highlight_duration: float = HIGHLIGHT_DURATION,
        scroll_margin: float = SCROLL_MARGIN,
        scroll_container: Optional[ScrollContainer] = None,
        contains: Optional[Callable[[Hashable], bool]] = None,
        on_change: Optional[Callable[[JumpState], None]] = None,
    ):
        self.pointer_events = pointer_events
        self.highlight_duration = highlight_duration
        self.scroll_margin = scroll_margin
        self.scroll_container = scroll_container
        self.on_change = on_change
        self._scheduler = scheduler
        self._contains = contains or (lambda target: False)
        self._state = JumpState()
        self._clear_handle: Optional[TimerHandle] = None
        self._remove_outside_listener: Optional[Callable[[], None]] = None

    @property
    def state(self) -> JumpState:
        return dataclasses.replace(self._state)

    @property
    def has_pending_clear(self) -> bool:
        return self._clear_handle is not None

    # --- Dropdown ---

    def toggle_dropdown(self):
        if self._state.dropdown_open:
            self.close_dropdown()
        else:
            self.open_dropdown()

    def open_dropdown(self):
        if self._state.dropdown_open:
            return
        self._state.dropdown_open = True
        if self.pointer_events is not None:
            self._remove_outside_listener = self.pointer_events.add_listener(self._on_pointer_down)
        self._changed()

    def close_dropdown(self):
        # Every close path goes through here so the listener is always released
        self._detach_outside_listener()
        if not self._state.dropdown_open:
            return
        self._state.dropdown_open = False
        self._changed()

    def _on_pointer_down(self, target: Hashable):
        if not self._contains(target):
            self.close_dropdown()

    def _detach_outside_listener(self):
        if self._remove_outside_listener is not None:
            remove, self._remove_outside_listener = self._remove_outside_listener, None
            remove()

    # --- Jumping ---

    def jump_to(self, verse_number: int, verse_count: int, locate_element: Optional[LocateElement] = None) -> bool:
        """
        Scroll to an ayah and highlight it.

        Out-of-range targets are declined silently: returns False and leaves
        the state untouched.
        """
        try:
            validate_verse_number(verse_number, verse_count)
        except VerseOutOfRangeError as e:
            logger.debug("Jump declined: %s", e)
            return False

        # Raises before any state changes when there is no loop to clear on
        scheduler = self._scheduler or asyncio.get_running_loop()

        self._scroll_to_verse(verse_number, locate_element)
        self._state.selected_verse = verse_number
        self._state.highlighted_verse = verse_number
        self._detach_outside_listener()
        self._state.dropdown_open = False
        self._schedule_clear(scheduler)
        self._changed()
        return True

    def _scroll_to_verse(self, verse_number: int, locate_element: Optional[LocateElement]):
        container = self.scroll_container
        if container is None or locate_element is None:
            return
        delta = locate_element(verse_number)
        if delta is None:
            return
        container.scroll_to(container.scroll_top + delta - self.scroll_margin, smooth=True)

    def _schedule_clear(self, scheduler: Scheduler):
        self._cancel_clear()
        self._clear_handle = scheduler.call_later(self.highlight_duration, self._clear_highlight)

    def _cancel_clear(self):
        if self._clear_handle is not None:
            handle, self._clear_handle = self._clear_handle, None
            handle.cancel()

    def _clear_highlight(self):
        self._clear_handle = None
        if self._state.highlighted_verse is None:
            return
        self._state.highlighted_verse = None
        self._changed()

    # --- Lifecycle ---

    def reset(self):
        """Forget everything; used when the owning chapter changes."""
        self._cancel_clear()
        self._detach_outside_listener()
        changed = self._state != JumpState()
        self._state = JumpState()
        if changed:
            self._changed()

    def dispose(self):
        """Release the timer and listener without notifying anyone."""
        self._cancel_clear()
        self._detach_outside_listener()
        self._state = JumpState()

    def _changed(self):
        if self.on_change is not None:
            self.on_change(self.state)
