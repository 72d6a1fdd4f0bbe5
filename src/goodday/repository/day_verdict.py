# SPDX-License-Identifier: MIT

from typing import Any, cast

from goodday import time
from goodday.model.day_verdict import DayVerdict
from goodday.repository.base import YamlDirectoryRepository


class DayVerdictRepository(YamlDirectoryRepository[DayVerdict]):
    def key_for(self, entity: DayVerdict) -> str:
        return time.day_to_str(entity["day"])

    def convert_for_serialization(self, entity: DayVerdict) -> dict[str, Any]:
        serializable_verdict = cast(dict[str, Any], entity)
        serializable_verdict["day"] = time.day_to_str(serializable_verdict["day"])
        serializable_verdict["locked_at"] = time.day_to_str_optional(
            serializable_verdict["locked_at"]
        )
        return serializable_verdict

    def convert_for_deserialization(self, raw: dict[str, Any]) -> DayVerdict:
        deserializable_verdict = raw
        deserializable_verdict["day"] = time.day_key(deserializable_verdict["day"])
        deserializable_verdict["locked_at"] = time.day_key_optional(
            deserializable_verdict["locked_at"]
        )
        return cast(DayVerdict, deserializable_verdict)
