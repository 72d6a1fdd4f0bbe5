# SPDX-License-Identifier: MIT

import pendulum
import pytest

from goodday import state as app_state
from goodday.configuration import Configuration, get_default_configuration
from goodday.repository.configuration import ConfigurationRepository
from goodday.repository.storage import YamlStorage
from goodday.service.habit import HabitTracker

# A Wednesday
TODAY = pendulum.date(2024, 3, 13)
START = pendulum.date(2024, 1, 1)


class FixedClock:
    """A clock that tests can move forward."""

    def __init__(self, day: pendulum.Date) -> None:
        self.day = day

    def __call__(self) -> pendulum.Date:
        return self.day


@pytest.fixture
def today() -> pendulum.Date:
    return TODAY


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def config() -> Configuration:
    return get_default_configuration()


@pytest.fixture
def storage(tmp_path) -> YamlStorage:
    yaml_storage = YamlStorage(tmp_path / "data")
    yaml_storage.ensure_data_dirs()
    return yaml_storage


@pytest.fixture
def tracker(storage, config, clock) -> HabitTracker:
    return HabitTracker(storage, config, clock=clock)


@pytest.fixture
def cli_state(tmp_path, tracker):
    """Point the CLI at the test tracker and a throwaway config file."""
    configuration_repo = ConfigurationRepository(tmp_path / "config.yaml")
    app_state.set_configuration_repo(configuration_repo)
    app_state.set_tracker(tracker)
    app_state.set_show_header(False)
    return tracker
