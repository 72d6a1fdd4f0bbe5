# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Literal, Optional, TypedDict

import platformdirs

APP_NAME = "goodday"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"
DEFAULT_DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)

ITEMS_DIR_NAME = "items"
GROUPS_DIR_NAME = "groups"
COMPLETIONS_DIR_NAME = "completions"
VERDICTS_DIR_NAME = "verdicts"
REFLECTIONS_DIR_NAME = "reflections"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Configuration(TypedDict):
    data_path: Optional[str]
    max_lookback_days: int  # Upper bound for every backward date walk
    week_start: str  # "monday" ... "sunday"
    default_window_days: int  # Statistics window when none is given
    lock_on_startup: bool
    log_level: LogLevel


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "max_lookback_days": 365,
        "week_start": "monday",
        "default_window_days": 30,
        "lock_on_startup": True,
        "log_level": "WARNING",
    }


def resolve_data_path(config: Configuration) -> Path:
    if config["data_path"] is not None:
        return Path(config["data_path"])
    return DEFAULT_DATA_PATH
