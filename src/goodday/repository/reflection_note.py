# SPDX-License-Identifier: MIT

from typing import Any, cast

from goodday import time
from goodday.model.reflection_note import ReflectionNote
from goodday.repository.base import YamlDirectoryRepository


class ReflectionNoteRepository(YamlDirectoryRepository[ReflectionNote]):
    def key_for(self, entity: ReflectionNote) -> str:
        return time.day_to_str(entity["day"])

    def convert_for_serialization(self, entity: ReflectionNote) -> dict[str, Any]:
        serializable_note = cast(dict[str, Any], entity)
        serializable_note["day"] = time.day_to_str(serializable_note["day"])
        serializable_note["created"] = time.datetime_to_iso_str(
            serializable_note["created"]
        )
        serializable_note["updated"] = time.datetime_to_iso_str(
            serializable_note["updated"]
        )
        return serializable_note

    def convert_for_deserialization(self, raw: dict[str, Any]) -> ReflectionNote:
        deserializable_note = raw
        deserializable_note["day"] = time.day_key(deserializable_note["day"])
        deserializable_note["created"] = time.datetime_from_str(
            deserializable_note["created"]
        )
        deserializable_note["updated"] = time.datetime_from_str(
            deserializable_note["updated"]
        )
        return cast(ReflectionNote, deserializable_note)
