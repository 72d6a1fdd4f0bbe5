# SPDX-License-Identifier: MIT

from typing import Any, cast

from goodday import time
from goodday.model.completion import CompletionRecord
from goodday.model.entity_id import EntityId
from goodday.repository.base import YamlDirectoryRepository


def completion_key(item_id: EntityId, day_str: str) -> str:
    return f"{item_id}_{day_str}"


class CompletionRepository(YamlDirectoryRepository[CompletionRecord]):
    # The file name is the (item, day) identity, so a second record for the
    # same day can only overwrite the first one.
    def key_for(self, entity: CompletionRecord) -> str:
        return completion_key(entity["item_id"], time.day_to_str(entity["day"]))

    def convert_for_serialization(self, entity: CompletionRecord) -> dict[str, Any]:
        serializable_record = cast(dict[str, Any], entity)
        serializable_record["day"] = time.day_to_str(serializable_record["day"])
        serializable_record["updated"] = time.datetime_to_iso_str(
            serializable_record["updated"]
        )
        return serializable_record

    def convert_for_deserialization(self, raw: dict[str, Any]) -> CompletionRecord:
        deserializable_record = raw
        deserializable_record["day"] = time.day_key(deserializable_record["day"])
        deserializable_record["updated"] = time.datetime_from_str(
            deserializable_record["updated"]
        )
        if deserializable_record.get("photo_refs") is None:
            deserializable_record["photo_refs"] = []
        return cast(CompletionRecord, deserializable_record)

    def get_for_item(self, item_id: EntityId) -> list[CompletionRecord]:
        return sorted(
            (
                record
                for record in self.get_all()
                if record["item_id"] == item_id
            ),
            key=lambda record: record["day"],
        )

    def delete_for_item(self, item_id: EntityId) -> None:
        for key, record in list(self.entities.items()):
            if record["item_id"] == item_id:
                self.delete(key)
