# SPDX-License-Identifier: MIT

import logging
import sys

from goodday import configuration
from goodday import state as app_state
from goodday.repository.configuration import ConfigurationRepository
from goodday.repository.storage import YamlStorage
from goodday.service.habit import HabitTracker

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def initialize() -> None:
    configuration_repo = ConfigurationRepository(configuration.APP_CONFIG_PATH)
    config = configuration_repo.get_config()
    # Writes the defaults on first run and any settings added since
    configuration_repo.flush()

    setup_logging(config["log_level"])

    storage = YamlStorage(configuration.resolve_data_path(config))
    storage.ensure_data_dirs()

    tracker = HabitTracker(storage, config)
    if config["lock_on_startup"]:
        tracker.run_lock_pass()

    app_state.set_configuration_repo(configuration_repo)
    app_state.set_tracker(tracker)
    logger.debug("Initialized with data in %s", storage.data_path)
