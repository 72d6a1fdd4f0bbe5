# SPDX-License-Identifier: MIT

import logging
from abc import ABC, abstractmethod
from copy import deepcopy
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from goodday.errors import PersistenceFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


class YamlDirectoryRepository(ABC, Generic[T]):
    """
    Keeps one YAML file per entity in a directory.

    Entities are loaded lazily on first access and cached. Mutations mark the
    entity dirty; flush() writes dirty entities and removes deleted files.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self._entities: Optional[dict[str, T]] = None
        self.is_dirty = False
        self._dirty_keys: set[str] = set()
        self._deleted_keys: set[str] = set()

    @abstractmethod
    def key_for(self, entity: T) -> str: ...

    @abstractmethod
    def convert_for_serialization(self, entity: T) -> dict[str, Any]: ...

    @abstractmethod
    def convert_for_deserialization(self, raw: dict[str, Any]) -> T: ...

    @property
    def entities(self) -> dict[str, T]:
        if self._entities is None:
            self.__load_data()
        if self._entities is None:
            raise ValueError()
        return self._entities

    def __load_data(self) -> None:
        self._entities = {}
        if not self.directory.is_dir():
            return
        try:
            for file_path in sorted(self.directory.iterdir()):
                if file_path.suffix != ".yaml":
                    continue
                raw_entity = load(file_path.read_text(), Loader=Loader)
                if raw_entity is not None:
                    entity = self.convert_for_deserialization(raw_entity)
                    self._entities[self.key_for(entity)] = entity
        except (OSError, YAMLError, KeyError, ValueError) as e:
            self._entities = None
            raise PersistenceFailure(f"Cannot load {self.directory}: {e}") from e
        logger.debug("Loaded %d entities from %s", len(self._entities), self.directory)

    def __save_data(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)

            # Write dirty entities
            for key in self._dirty_keys:
                if key not in self.entities:
                    continue
                serializable_entity = self.convert_for_serialization(
                    deepcopy(self.entities[key])
                )
                file_path = self.directory / f"{key}.yaml"
                file_path.write_text(dump(serializable_entity, Dumper=Dumper))

            # Remove hard-deleted entity files
            for key in self._deleted_keys:
                file_path = self.directory / f"{key}.yaml"
                if file_path.exists():
                    file_path.unlink()
        except (OSError, YAMLError) as e:
            raise PersistenceFailure(f"Cannot write {self.directory}: {e}") from e

        logger.debug(
            "Wrote %d and removed %d entities in %s",
            len(self._dirty_keys),
            len(self._deleted_keys),
            self.directory,
        )

        # Clear tracking sets
        self._dirty_keys.clear()
        self._deleted_keys.clear()

    def flush(self) -> bool:
        if self._entities is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def save(self, entity: T) -> None:
        key = self.key_for(entity)
        self.is_dirty = True
        self.entities[key] = deepcopy(entity)
        self._dirty_keys.add(key)
        self._deleted_keys.discard(key)

    def delete(self, key: str) -> None:
        if key not in self.entities:
            return
        self.is_dirty = True
        del self.entities[key]
        self._dirty_keys.discard(key)
        self._deleted_keys.add(key)

    def get_all(self) -> list[T]:
        return deepcopy(list(self.entities.values()))
