# myquran/viewport.py
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

# (ayah number or None for non-ayah lines, text)
ViewportLine = Tuple[Optional[int], str]


class TerminalViewport:
    """
    Line-based scroll container for the chapter detail screen.

    Positions are measured in terminal lines. ``locate`` reports where an
    ayah's first line sits relative to the top of the visible window.
    """

    def __init__(self, height: int = 20):
        self.height = max(1, height)
        self.scroll_top = 0
        self.last_scroll_smooth = False
        self._lines: List[ViewportLine] = []
        self._anchors: Dict[int, int] = {}

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def max_scroll(self) -> int:
        return max(0, len(self._lines) - self.height)

    def layout(self, blocks: Iterable[Tuple[Optional[int], Sequence[str]]]):
        """Replace the content. Each block is (ayah number or None, lines)."""
        self._lines = []
        self._anchors = {}
        for verse_number, lines in blocks:
            if verse_number is not None and verse_number not in self._anchors:
                self._anchors[verse_number] = len(self._lines)
            self._lines.extend((verse_number, line) for line in lines)
        self.scroll_top = min(self.scroll_top, self.max_scroll)

    def clear(self):
        self._lines = []
        self._anchors = {}
        self.scroll_top = 0

    def locate(self, verse_number: int) -> Optional[int]:
        offset = self._anchors.get(verse_number)
        if offset is None:
            return None
        return offset - self.scroll_top

    def scroll_to(self, top: float, smooth: bool = True):
        # A terminal redraws in one frame; smoothness is only recorded
        self.scroll_top = int(min(max(0, round(top)), self.max_scroll))
        self.last_scroll_smooth = smooth

    def scroll_by(self, lines: int):
        self.scroll_to(self.scroll_top + lines, smooth=False)

    def page_down(self):
        self.scroll_by(self.height)

    def page_up(self):
        self.scroll_by(-self.height)

    def visible_lines(self) -> List[ViewportLine]:
        return self._lines[self.scroll_top:self.scroll_top + self.height]
