# myquran/utils.py
import os
import re

import arabic_reshaper
import platformdirs
from bidi.algorithm import get_display

# --- Define constants for platformdirs ---
APP_NAME = "MyQuran"
APP_AUTHOR = "devit"

_ANSI_ESCAPE = re.compile(r'\x1B\[[0-?]*[ -/]*[@-~]')


def get_config_path(filename: str) -> str:
    """Path of a file in the user's config directory, creating the directory."""
    config_dir = platformdirs.user_config_dir(APP_NAME, APP_AUTHOR)
    os.makedirs(config_dir, exist_ok=True)
    return os.path.join(config_dir, filename)


def strip_ansi(s: str) -> str:
    """Remove ANSI escape codes for accurate length calculation."""
    return _ANSI_ESCAPE.sub('', s)


def wrap_text(text: str, width: int) -> str:
    """Wrap text to specified width"""
    words = text.split()
    lines = []
    current_line = []
    current_length = 0

    for word in words:
        if current_line and current_length + len(word) + 1 > width:
            lines.append(' '.join(current_line))
            current_line = [word]
            current_length = len(word)
        else:
            current_line.append(word)
            current_length += len(word) + (1 if current_length else 0)

    if current_line:
        lines.append(' '.join(current_line))

    return '\n'.join(lines)


def fix_arabic_text(text: str) -> str:
    """Reshapes and applies the BiDi algorithm so Arabic reads correctly in a terminal."""
    if not text:
        return ""
    return str(get_display(arabic_reshaper.reshape(text)))


def strip_html(text: str) -> str:
    """Chapter descriptions arrive with inline HTML tags."""
    return re.sub(r'<[^>]+>', '', text or '')
