# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from goodday import configuration
from goodday.errors import PersistenceFailure, ValidationError
from goodday.time import WEEKDAYS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationRepository:
    def __init__(self, path: Path = configuration.APP_CONFIG_PATH) -> None:
        self.path = path
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not self.path.is_file():
            self._config = configuration.get_default_configuration()
            self.is_dirty = True
            return

        try:
            self._config = load(self.path.read_text(), Loader=Loader)
        except (OSError, YAMLError) as e:
            raise PersistenceFailure(f"Cannot read {self.path}: {e}") from e

        if self._config is None:
            self._config = configuration.get_default_configuration()
            self.is_dirty = True
            return

        # Migration: fill in settings added after the file was written
        for key, value in configuration.get_default_configuration().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]
                self.is_dirty = True

    def __save_data(self, config: configuration.Configuration) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(dump(config, Dumper=Dumper))
        except OSError as e:
            raise PersistenceFailure(f"Cannot write {self.path}: {e}") from e

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        max_lookback_days: Optional[int] = None,
        week_start: Optional[str] = None,
        default_window_days: Optional[int] = None,
        lock_on_startup: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> None:
        if max_lookback_days is not None and max_lookback_days < 1:
            raise ValidationError("max_lookback_days must be at least 1")
        if default_window_days is not None and default_window_days < 1:
            raise ValidationError("default_window_days must be at least 1")
        if week_start is not None and week_start not in WEEKDAYS:
            raise ValidationError(
                f"Invalid week start: {week_start}. "
                f"Valid options: {', '.join(WEEKDAYS)}"
            )
        if log_level is not None and log_level.upper() not in LOG_LEVELS:
            raise ValidationError(
                f"Invalid log level: {log_level}. "
                f"Valid options: {', '.join(LOG_LEVELS)}"
            )

        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if max_lookback_days is not None:
            self.config["max_lookback_days"] = max_lookback_days
        if week_start is not None:
            self.config["week_start"] = week_start
        if default_window_days is not None:
            self.config["default_window_days"] = default_window_days
        if lock_on_startup is not None:
            self.config["lock_on_startup"] = lock_on_startup
        if log_level is not None:
            self.config["log_level"] = log_level.upper()  # type: ignore[typeddict-item]
