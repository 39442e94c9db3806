# myquran/app.py
import argparse
import asyncio
import sys
import threading
from typing import Optional

from colorama import Fore, Style, init

from ._logging import disable_logging, enable_debug_logging, get_logger
from .config import ReaderConfig, default_settings_path, load_config, save_config
from .events import PointerEventBus
from .jump import AyatJumpController, JumpState
from .location import ROOT_LOCATION, ChapterDetailState, Location, ViewState
from .models import TOTAL_SURAHS
from .navigation import NavigationController
from .surah_repository import SurahRepository
from .ui import COLOR_MAP, UI
from .views import ChapterDetailView, ChapterListView
from .viewport import TerminalViewport

logger = get_logger(__name__)

PROMPT = Fore.RED + "  ❯ " + Fore.WHITE
# Pointer targets: what a command "clicks" on
DROPDOWN_TARGET = "ayat-dropdown"
PAGE_TARGET = "page"


class QuranApp:
    """
    Interactive reader loop.

    Runs on one asyncio loop; terminal input is read on a daemon thread so
    that fetch completions and the highlight timer keep being processed while
    the reader is typing.
    """

    def __init__(self, config: Optional[ReaderConfig] = None, location: str = ROOT_LOCATION,
                 repository: Optional[SurahRepository] = None, term_size=None,
                 settings_path: Optional[str] = None):
        self.config = config or ReaderConfig()
        self.settings_path = settings_path
        self.ui = UI(self.config, term_size)
        self.location = Location(location)
        self.navigation = NavigationController(self.location)
        self.repository = repository or SurahRepository(
            base_url=self.config.base_url, timeout=self.config.request_timeout
        )
        self.pointer_events = PointerEventBus()
        self.viewport = TerminalViewport(height=max(5, self.ui.term_size.lines - 18))
        self.jump = AyatJumpController(
            pointer_events=self.pointer_events,
            highlight_duration=self.config.highlight_duration,
            scroll_margin=self.config.scroll_margin,
            scroll_container=self.viewport,
            contains=lambda target: target == DROPDOWN_TARGET,
            on_change=self._on_jump_change,
        )
        self.list_view = ChapterListView(self.repository)
        self.detail_view = ChapterDetailView(self.repository, self.jump, on_change=self._on_detail_change)
        self.message = ""
        self.running = False
        self._pending: Optional[asyncio.Future] = None
        self._laid_out: Optional[int] = None
        self._waiting_for_input = False
        self.navigation.subscribe(self._on_view_change)

    # --- Wiring ---

    def _on_view_change(self, state: ViewState):
        self.viewport.clear()
        self._laid_out = None
        if isinstance(state, ChapterDetailState):
            self._pending = self.detail_view.show(state.chapter_number)
        else:
            self.detail_view.close()
            self._pending = asyncio.ensure_future(self.list_view.load())

    def _on_detail_change(self):
        detail = self.detail_view.detail
        if detail is not None and self._laid_out != detail.number:
            self.viewport.layout(self.ui.layout_chapter(detail))
            self._laid_out = detail.number

    def _on_jump_change(self, state: JumpState):
        # The highlight timer fires while the reader may be at the prompt
        if self._waiting_for_input:
            self.render()
            print(Style.BRIGHT + Fore.GREEN + "\nEnter command:" + Style.RESET_ALL)
            print(PROMPT, end="", flush=True)

    # --- Loop ---

    async def run(self):
        self.running = True
        self._on_view_change(self.navigation.state)
        try:
            while self.running:
                await self._settle()
                self.render()
                print(Style.BRIGHT + Fore.GREEN + "\nEnter command:" + Style.RESET_ALL)
                command = await self._read_command()
                self.message = ""
                self.handle_command(command)
        finally:
            self.detail_view.close()
            self.navigation.close()
            await self.repository.close()

    async def _settle(self):
        """Wait for the fetch started by the last transition, showing the loading screen meanwhile."""
        pending = self._pending
        if pending is not None and not pending.done():
            self.render()
            await pending
        self._pending = None

    async def _read_command(self) -> str:
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def deliver(line: str):
            if not future.done():
                future.set_result(line)

        def reader():
            try:
                line = input(PROMPT)
            except EOFError:
                line = "quit"
            if not loop.is_closed():
                loop.call_soon_threadsafe(deliver, line)

        threading.Thread(target=reader, daemon=True).start()
        self._waiting_for_input = True
        try:
            return await future
        finally:
            self._waiting_for_input = False

    def render(self):
        if isinstance(self.navigation.state, ChapterDetailState):
            self.ui.render_chapter_detail(self.detail_view, self.viewport, self.location.href)
        else:
            self.ui.render_chapter_list(self.list_view, self.location.href)
        if self.message:
            print(Fore.YELLOW + self.message + Style.RESET_ALL)

    # --- Commands ---

    def handle_command(self, command: str):
        command = command.strip()
        lowered = command.lower()
        logger.debug("Command %r at %s", command, self.location.href)

        if lowered in ('quit', 'q', 'exit'):
            self.running = False
        elif lowered.startswith('go '):
            self.location.assign(command[3:].strip())
        elif lowered in ('hb', 'history back'):
            if not self.location.back():
                self.message = "Already at the oldest location."
        elif lowered in ('hf', 'history forward'):
            if not self.location.forward():
                self.message = "Already at the newest location."
        elif lowered == 'theme' or lowered.startswith('theme '):
            self._set_theme(lowered[5:].strip())
        elif isinstance(self.navigation.state, ChapterDetailState):
            self._handle_detail_command(command, lowered)
        else:
            self._handle_list_command(command, lowered)

    def _handle_list_command(self, command: str, lowered: str):
        if lowered.isdigit():
            number = int(lowered)
            if 1 <= number <= TOTAL_SURAHS:
                self.navigation.select_chapter(number)
            else:
                self.message = f"Please enter a Surah number between 1 and {TOTAL_SURAHS}."
        elif lowered in ('clear', 'c'):
            self.list_view.set_query("")
        elif lowered in ('retry', 'r') and self.list_view.failure is not None:
            self._pending = asyncio.ensure_future(self.list_view.load(force=True))
        elif command:
            self.list_view.set_query(command)

    def _handle_detail_command(self, command: str, lowered: str):
        parts = lowered.split()
        dropdown_open = self.jump.state.dropdown_open
        targets_dropdown = (
            lowered in ('a', 'ayat')
            or (dropdown_open and lowered.isdigit())
            or (parts and parts[0] in ('j', 'jump'))
        )
        self.pointer_events.dispatch(DROPDOWN_TARGET if targets_dropdown else PAGE_TARGET)

        if lowered in ('b', 'back'):
            self.navigation.go_back()
        elif lowered in ('a', 'ayat'):
            if self.detail_view.detail is not None:
                self.jump.toggle_dropdown()
        elif dropdown_open and lowered.isdigit():
            self._jump(int(lowered))
        elif parts and parts[0] in ('j', 'jump'):
            if len(parts) == 2 and parts[1].isdigit():
                self._jump(int(parts[1]))
            else:
                self.message = "Usage: jump <ayah number>"
        elif lowered in ('n', ''):
            self.viewport.page_down()
        elif lowered == 'p':
            self.viewport.page_up()
        elif lowered in ('next', '>'):
            self._open_neighbour(next_chapter=True)
        elif lowered in ('prev', '<'):
            self._open_neighbour(next_chapter=False)
        elif lowered in ('retry', 'r'):
            task = self.detail_view.retry()
            if task is not None:
                self._pending = task
        else:
            self.message = "Invalid option. Please try again."

    def _set_theme(self, color: str):
        if color not in COLOR_MAP:
            self.message = f"Choose a theme from: {', '.join(COLOR_MAP)}"
            return
        self.config.theme_color = color
        if save_config(self.config, self.settings_path):
            self.message = f"Theme set to {color.capitalize()}."

    def _jump(self, verse_number: int):
        # Out-of-range numbers are ignored without comment
        self.detail_view.jump_to(verse_number, self.viewport.locate)

    def _open_neighbour(self, next_chapter: bool):
        detail = self.detail_view.detail
        if detail is None:
            return
        link = detail.next_chapter if next_chapter else detail.previous_chapter
        if link is None:
            self.message = "This is the last Surah." if next_chapter else "This is the first Surah."
            return
        self.navigation.select_chapter(link.number)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="myquran", description="Browse and read the Qur'an in your terminal.")
    parser.add_argument("--location", default=ROOT_LOCATION,
                        help="Location to open, e.g. '#/chapter/36' (default: '#/')")
    parser.add_argument("--base-url", default=None, help="Base URL of the Quran API")
    parser.add_argument("--settings", default=None, help="Path of the settings JSON file")
    parser.add_argument("--debug", action="store_true", help="Log debug information to stderr")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    init(autoreset=True)

    if args.debug:
        enable_debug_logging()
    else:
        disable_logging()

    settings_path = args.settings or default_settings_path()
    config = load_config(settings_path)
    # A --base-url override is for this run only and is never saved
    repository = None
    if args.base_url:
        repository = SurahRepository(base_url=args.base_url, timeout=config.request_timeout)

    try:
        asyncio.run(QuranApp(config, location=args.location, repository=repository,
                             settings_path=settings_path).run())
    except KeyboardInterrupt:
        print(Style.BRIGHT + Fore.YELLOW + "\n⚠ Interrupted. Goodbye!" + Style.RESET_ALL)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
