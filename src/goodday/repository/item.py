# SPDX-License-Identifier: MIT

from typing import Any, cast

from goodday import time
from goodday.model.item import Item
from goodday.repository.base import YamlDirectoryRepository


class ItemRepository(YamlDirectoryRepository[Item]):
    def key_for(self, entity: Item) -> str:
        if entity["id"] is None:
            raise ValueError("Item must have an ID")
        return entity["id"]

    def convert_for_serialization(self, entity: Item) -> dict[str, Any]:
        serializable_item = cast(dict[str, Any], entity)
        serializable_item["created"] = time.day_to_str(serializable_item["created"])
        return serializable_item

    def convert_for_deserialization(self, raw: dict[str, Any]) -> Item:
        deserializable_item = raw
        deserializable_item["created"] = time.day_key(deserializable_item["created"])
        # Migration: items written before options existed
        deserializable_item.setdefault("options", None)
        deserializable_item.setdefault("success_criteria", None)
        return cast(Item, deserializable_item)
