# SPDX-License-Identifier: MIT

from typing import Any, cast

from goodday import time
from goodday.model.group import Group
from goodday.repository.base import YamlDirectoryRepository


class GroupRepository(YamlDirectoryRepository[Group]):
    def key_for(self, entity: Group) -> str:
        if entity["id"] is None:
            raise ValueError("Group must have an ID")
        return entity["id"]

    def convert_for_serialization(self, entity: Group) -> dict[str, Any]:
        serializable_group = cast(dict[str, Any], entity)
        serializable_group["created"] = time.day_to_str(serializable_group["created"])
        return serializable_group

    def convert_for_deserialization(self, raw: dict[str, Any]) -> Group:
        deserializable_group = raw
        deserializable_group["created"] = time.day_key(deserializable_group["created"])
        deserializable_group["member_ids"] = list(
            dict.fromkeys(deserializable_group["member_ids"] or [])
        )
        return cast(Group, deserializable_group)
