from myquran.jump import AyatJumpController
from myquran.viewport import TerminalViewport

from tests.conftest import FakeScheduler


def build(height=5):
    viewport = TerminalViewport(height=height)
    viewport.layout([
        (None, ["hero", "hero"]),
        (1, ["[1]", "a", "b"]),
        (2, ["[2]", "c", "d"]),
        (3, ["[3]", "e", "f"]),
    ])
    return viewport


def test_layout_records_anchors():
    viewport = build()
    assert viewport.line_count == 11
    assert viewport.locate(1) == 2
    assert viewport.locate(3) == 8
    assert viewport.locate(4) is None


def test_locate_is_relative_to_visible_top():
    viewport = build()
    viewport.scroll_to(4)
    assert viewport.locate(2) == 1
    assert viewport.locate(1) == -2


def test_scroll_is_clamped():
    viewport = build()
    viewport.scroll_to(-10)
    assert viewport.scroll_top == 0
    viewport.scroll_to(100)
    assert viewport.scroll_top == viewport.max_scroll == 6


def test_paging():
    viewport = build(height=4)
    viewport.page_down()
    assert viewport.scroll_top == 4
    assert viewport.visible_lines()[0] == (1, "b")
    viewport.page_up()
    assert viewport.scroll_top == 0


def test_jump_scrolls_ayah_to_top_with_margin():
    viewport = build()
    jump = AyatJumpController(scheduler=FakeScheduler(), scroll_container=viewport, scroll_margin=1)
    jump.jump_to(2, 3, viewport.locate)
    assert viewport.scroll_top == 4
    assert viewport.visible_lines()[1] == (2, "[2]")
    assert viewport.last_scroll_smooth is True


def test_clear_resets_scroll():
    viewport = build()
    viewport.scroll_to(3)
    viewport.clear()
    assert viewport.scroll_top == 0
    assert viewport.visible_lines() == []
