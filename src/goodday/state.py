# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from typing import Optional

from goodday.repository.configuration import ConfigurationRepository
from goodday.service.habit import HabitTracker

_tracker: ContextVar[Optional[HabitTracker]] = ContextVar("tracker", default=None)
_configuration_repo: ContextVar[Optional[ConfigurationRepository]] = ContextVar(
    "configuration_repo", default=None
)
_show_header: ContextVar[bool] = ContextVar("show_header", default=True)


def set_tracker(tracker: HabitTracker) -> None:
    _tracker.set(tracker)


def get_tracker() -> HabitTracker:
    tracker = _tracker.get()
    if tracker is None:
        raise RuntimeError("goodday has not been initialized")
    return tracker


def set_configuration_repo(repository: ConfigurationRepository) -> None:
    _configuration_repo.set(repository)


def get_configuration_repo() -> ConfigurationRepository:
    repository = _configuration_repo.get()
    if repository is None:
        raise RuntimeError("goodday has not been initialized")
    return repository


def set_show_header(value: bool) -> None:
    _show_header.set(value)


def get_show_header() -> bool:
    return _show_header.get()
