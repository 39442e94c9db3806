# myquran/ui.py
import shutil
import sys
from typing import List, Optional, Sequence, Tuple

from colorama import Back, Fore, Style

from .config import ReaderConfig
from .jump import JumpState
from .models import ChapterDetail
from .utils import fix_arabic_text, strip_ansi, strip_html, wrap_text
from .version import VERSION
from .views import ChapterDetailView, ChapterListView
from .viewport import TerminalViewport

COLOR_MAP = {
    'red': Fore.RED,
    'white': Fore.WHITE,
    'green': Fore.GREEN,
    'blue': Fore.BLUE,
    'yellow': Fore.YELLOW,
    'magenta': Fore.MAGENTA,
    'cyan': Fore.CYAN,
}

Command = Tuple[str, str]


class UI:
    """Draws the two screens. Holds no state of its own besides terminal size."""

    def __init__(self, config: ReaderConfig, term_size=None):
        self.config = config
        self.term_size = term_size or shutil.get_terminal_size()

    @property
    def accent(self) -> str:
        return COLOR_MAP.get(self.config.theme_color, Fore.RED)

    @property
    def text_width(self) -> int:
        return max(20, self.term_size.columns - 6)

    def clear_terminal(self):
        """Clear terminal with fallback and scroll reset"""
        print("\033[2J", end="")
        print("\033[H", end="")
        sys.stdout.write("\033[3J")
        sys.stdout.flush()

    def display_header(self, location: str):
        accent = self.accent
        print(accent + "╭──" + Style.BRIGHT + Fore.GREEN + "✨ Assalamu'alaikum " + accent + Style.NORMAL + "─" * 29 + "╮")
        print(accent + "│ " + Style.BRIGHT + Fore.WHITE + "My Qur'an".ljust(49) + Style.NORMAL + accent + "│")
        print(accent + "│ " + Style.DIM + Fore.WHITE + f"v{VERSION}".ljust(49) + Style.NORMAL + accent + "│")
        print(accent + "├" + "─" * 50 + "┤")
        print(accent + "│ " + Fore.CYAN + "Location: " + Fore.WHITE + location.ljust(39) + accent + "│")
        print(accent + "╰" + "─" * 50 + "╯" + Style.RESET_ALL)

    def display_commands(self, title: str, commands: Sequence[Command]):
        accent = self.accent
        max_cmd_len = max(len(strip_ansi(cmd)) for cmd, _ in commands)
        print(accent + "\n╭─ " + Style.BRIGHT + Fore.GREEN + title)
        for cmd, desc in commands:
            pad = " " * (max_cmd_len - len(strip_ansi(cmd)))
            print(accent + f"│ → {cmd}{pad} : {Style.NORMAL}{Fore.WHITE}{desc}{Style.RESET_ALL}")
        print(accent + "╰" + "─" * 38 + Style.RESET_ALL)

    def display_loading(self):
        print(Fore.CYAN + "\n  ⏳ Loading..." + Style.RESET_ALL)

    # --- Chapter list ---

    def render_chapter_list(self, view: ChapterListView, location: str):
        self.clear_terminal()
        self.display_header(location)

        if view.query:
            print(Fore.CYAN + "\n🔍 Search: " + Fore.WHITE + view.query + Style.RESET_ALL)

        if view.loading:
            self.display_loading()
        else:
            surahs = view.visible
            if not surahs:
                print(Style.DIM + Fore.WHITE + f'\n  No surah found matching "{view.query}"' + Style.RESET_ALL)
            for surah in surahs:
                print(
                    Fore.GREEN + f"{surah.number:>4}. "
                    + Style.BRIGHT + Fore.WHITE + surah.name_latin.ljust(22) + Style.NORMAL
                    + Style.DIM + f"{surah.revelation_place.label} • {surah.verse_count} Ayat".ljust(22) + Style.NORMAL
                    + Fore.CYAN + fix_arabic_text(surah.name_native) + "  "
                    + Style.DIM + Fore.WHITE + surah.meaning + Style.RESET_ALL
                )

        self.display_commands("📜 Available Commands", [
            (f"{Fore.CYAN}1-114{Style.RESET_ALL}", "Open Surah by number"),
            (f"{Fore.CYAN}Surah Name{Style.RESET_ALL}", f"Search Surah {Style.DIM}(e.g., 'Rahman'){Style.RESET_ALL}"),
            (f"{Fore.CYAN}clear{Style.DIM}/c{Style.RESET_ALL}", "Clear search"),
            (f"{Fore.CYAN}go{Style.DIM} <location>{Style.RESET_ALL}", "Open a location, e.g. #/chapter/36"),
            (f"{Fore.CYAN}history{Style.DIM}/hb, hf{Style.RESET_ALL}", "History back / forward"),
            (f"{Fore.CYAN}retry{Style.DIM}/r{Style.RESET_ALL}", "Reload the list after a failure"),
            (f"{Fore.CYAN}theme{Style.DIM} <color>{Style.RESET_ALL}", "Change and save the theme color"),
            (f"{Fore.RED}quit{Style.DIM}/q{Style.RESET_ALL}", "Exit the application"),
        ])

    # --- Chapter detail ---

    def layout_chapter(self, detail: ChapterDetail) -> List[Tuple[Optional[int], List[str]]]:
        """Plain-text blocks for the viewport: the hero block, then one block per ayah."""
        width = self.text_width
        hero = [
            "",
            fix_arabic_text(detail.name_native).center(width),
            detail.name_latin.center(width),
            f"{detail.revelation_place.adjective} • {detail.verse_count} Ayat".center(width),
        ]
        if detail.description:
            hero.append("")
            hero.extend(wrap_text(strip_html(detail.description), width).split("\n"))
        hero.append("")
        blocks: List[Tuple[Optional[int], List[str]]] = [(None, hero)]

        for verse in detail.verses:
            lines = [f"[{verse.number}]", "    " + fix_arabic_text(verse.text_native)]
            if self.config.show_transliteration and verse.text_transliterated:
                lines.extend("    " + line for line in wrap_text(verse.text_transliterated, width - 4).split("\n"))
            if self.config.show_translation and verse.text_translation:
                lines.extend("    " + line for line in wrap_text(verse.text_translation, width - 4).split("\n"))
            lines.append("─" * min(40, width))
            blocks.append((verse.number, lines))
        return blocks

    def render_chapter_detail(self, view: ChapterDetailView, viewport: TerminalViewport, location: str):
        self.clear_terminal()
        self.display_header(location)
        jump = view.jump.state

        if view.loading:
            self.display_loading()
        elif view.detail is None:
            # Failed fetch: an empty screen, recoverable with 'retry'
            print(Style.DIM + Fore.WHITE + "\n  Nothing to show here." + Style.RESET_ALL)
        else:
            detail = view.detail
            label = f"Ayat {jump.selected_verse}" if jump.selected_verse else "Ayat"
            arrow = "▲" if jump.dropdown_open else "▼"
            print(self.accent + "\n" + Style.BRIGHT + f" {detail.number}. {detail.name_latin} " + Style.NORMAL
                  + Back.CYAN + Fore.WHITE + f" {label} {arrow} " + Style.RESET_ALL)
            if jump.dropdown_open:
                self.render_jump_dropdown(detail.verse_count, jump)
            self._render_viewport(viewport, jump)

        commands = [
            (f"{Fore.CYAN}ayat{Style.DIM}/a{Style.RESET_ALL}", "Open/close the Jump to Ayat list"),
            (f"{Fore.CYAN}jump{Style.DIM}/j <n>{Style.RESET_ALL}", "Jump to Ayat n"),
            (f"{Fore.CYAN}n{Style.DIM}/p{Style.RESET_ALL}", "Scroll down / up"),
            (f"{Fore.CYAN}next{Style.DIM}/>, prev/<{Style.RESET_ALL}", "Next / previous Surah"),
            (f"{Fore.CYAN}go{Style.DIM} <location>{Style.RESET_ALL}", "Open a location"),
            (f"{Fore.CYAN}history{Style.DIM}/hb, hf{Style.RESET_ALL}", "History back / forward"),
            (f"{Fore.CYAN}retry{Style.DIM}/r{Style.RESET_ALL}", "Reload after a failure"),
            (f"{Fore.RED}back{Style.DIM}/b{Style.RESET_ALL}", "Return to the Surah list"),
        ]
        if jump.dropdown_open:
            commands.insert(0, (f"{Fore.GREEN}<n>{Style.RESET_ALL}", "Jump to Ayat n"))
        self.display_commands("🧭 Navigation", commands)

    def render_jump_dropdown(self, verse_count: int, jump: JumpState):
        columns = self.config.dropdown_columns
        cell = len(str(verse_count)) + 2
        print(Fore.WHITE + Style.DIM + "  Select Ayat Number" + Style.RESET_ALL)
        row = []
        for number in range(1, verse_count + 1):
            text = str(number).center(cell)
            if number == jump.selected_verse:
                row.append(Back.CYAN + Fore.WHITE + text + Style.RESET_ALL)
            else:
                row.append(Fore.WHITE + text + Style.RESET_ALL)
            if len(row) == columns:
                print("  " + " ".join(row))
                row = []
        if row:
            print("  " + " ".join(row))

    def _render_viewport(self, viewport: TerminalViewport, jump: JumpState):
        print(Style.DIM + f"  lines {viewport.scroll_top + 1}-{min(viewport.line_count, viewport.scroll_top + viewport.height)} of {viewport.line_count}" + Style.RESET_ALL)
        for verse_number, text in viewport.visible_lines():
            if verse_number is not None and verse_number == jump.highlighted_verse:
                print(Back.YELLOW + " " + Style.RESET_ALL + " " + Style.BRIGHT + Fore.YELLOW + text + Style.RESET_ALL)
            elif text.startswith("[") and verse_number is not None:
                print("  " + Style.BRIGHT + self.accent + text + Style.RESET_ALL)
            else:
                print("  " + Fore.WHITE + text + Style.RESET_ALL)
