# myquran/config.py
import json
from typing import Optional

from colorama import Fore, Style
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .utils import get_config_path

SETTINGS_FILENAME = "MyQuran-Settings.json"


class ReaderConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    base_url: str = "https://equran.id/api/v2/"
    request_timeout: float = Field(default=10, gt=0)
    highlight_duration: float = Field(default=4.5, ge=0)   # seconds
    scroll_margin: int = Field(default=1, ge=0)            # lines kept above a jumped-to ayah
    dropdown_columns: int = Field(default=10, ge=1)
    theme_color: str = "red"
    show_transliteration: bool = True
    show_translation: bool = True


def default_settings_path() -> Optional[str]:
    try:
        return get_config_path(SETTINGS_FILENAME)
    except OSError as e:
        print(f"{Fore.RED}Critical Error determining preferences path: {e}")
        print(f"{Fore.YELLOW}Preferences may not save correctly.{Style.RESET_ALL}")
        return None


def load_config(path: Optional[str] = None) -> ReaderConfig:
    """Load preferences from file; anything unreadable falls back to defaults."""
    if not path:
        return ReaderConfig()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        return ReaderConfig()
    except json.JSONDecodeError:
        print(Fore.YELLOW + f"Preferences file '{path}' is corrupted, using defaults." + Style.RESET_ALL)
        return ReaderConfig()
    except OSError as e:
        print(Fore.RED + f"Error loading preferences from '{path}': {e}" + Style.RESET_ALL)
        return ReaderConfig()

    if not isinstance(data, dict):
        print(Fore.YELLOW + f"Preferences file '{path}' is not a JSON object, using defaults." + Style.RESET_ALL)
        return ReaderConfig()
    try:
        return ReaderConfig.model_validate(data)
    except ValidationError as e:
        print(Fore.YELLOW + f"Invalid preferences in '{path}', using defaults: {e.error_count()} problem(s)." + Style.RESET_ALL)
        return ReaderConfig()


def save_config(config: ReaderConfig, path: Optional[str]) -> bool:
    if not path:
        print(Fore.RED + "Error: Preferences file path not determined. Cannot save." + Style.RESET_ALL)
        return False
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.model_dump(), f, ensure_ascii=False, indent=2)
    except OSError as e:
        print(Fore.RED + f"Error saving preferences to '{path}': {e}" + Style.RESET_ALL)
        return False
    return True
