"""
pacdex.config – startup settings stored as JSON in the user config dir
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import appdirs

from .localdb import LOCAL_DB_PATH
from .models import SortMode
from .navigation import DEFAULT_PAGE_SIZE

LOGGER = logging.getLogger(__name__)

APP_NAME = "pacdex"
CONFIG_DIR = Path(appdirs.user_config_dir(appname=APP_NAME))
CONFIG_FILE = CONFIG_DIR / "settings.json"


@dataclass
class Settings:
    local_db_path: str = str(LOCAL_DB_PATH)
    page_size: int = DEFAULT_PAGE_SIZE
    sort_mode: SortMode = SortMode.ALPHABETICAL
    explicit_only: bool = True
    include_optional: bool = True
    show_help: bool = True
    theme: str = "nord"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["sort_mode"] = self.sort_mode.value
        return data


def _coerce(name: str, value: Any, default: Any) -> Any:
    if name == "sort_mode":
        return SortMode(value)
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"expected true/false, got {value!r}")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"expected a positive integer, got {value!r}")
        return value
    if not isinstance(value, str) or not value:
        raise ValueError(f"expected a non-empty string, got {value!r}")
    return value


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings, falling back to defaults for anything missing or invalid."""
    path = Path(path) if path is not None else CONFIG_FILE
    settings = Settings()
    if not path.exists():
        LOGGER.debug(f"No settings file at {path}, using defaults")
        return settings

    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        LOGGER.warning(f"Could not read settings from {path}: {e}")
        return settings
    if not isinstance(data, dict):
        LOGGER.warning(f"Ignoring settings in {path}: expected a JSON object")
        return settings

    known = {f.name for f in fields(Settings)}
    for key, value in data.items():
        if key not in known:
            LOGGER.warning(f"Unknown setting {key!r} in {path}")
            continue
        try:
            setattr(settings, key, _coerce(key, value, getattr(settings, key)))
        except ValueError as e:
            LOGGER.warning(f"Invalid value for {key!r} in {path}: {e}")
    return settings


def save_settings(settings: Settings, path: Optional[Union[str, Path]] = None) -> Path:
    path = Path(path) if path is not None else CONFIG_FILE
    os.makedirs(path.parent, exist_ok=True)
    with open(path, "w") as f:
        json.dump(settings.to_dict(), f, indent=4)
    LOGGER.info(f"Settings saved to {path}")
    return path
