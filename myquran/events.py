# myquran/events.py
from typing import Callable, Hashable, List

PointerListener = Callable[[Hashable], None]


class PointerEventBus:
    """
    Document-wide pointer-down notifications.

    ``target`` identifies what the pointer landed on; listeners decide whether
    that is inside or outside the region they care about.
    """

    def __init__(self):
        self._listeners: List[PointerListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: PointerListener) -> Callable[[], None]:
        self._listeners.append(listener)
        removed = False

        def remove():
            nonlocal removed
            if not removed:
                removed = True
                self._listeners.remove(listener)

        return remove

    def dispatch(self, target: Hashable):
        for listener in list(self._listeners):
            listener(target)
