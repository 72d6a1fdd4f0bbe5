# SPDX-License-Identifier: MIT

from goodday.model.entity_type import EntityType
from goodday.model.group import Group
from goodday.time import today


def get_group_template() -> Group:
    return {
        "id": None,
        "entity_type": EntityType.GROUP,
        "name": "",
        "priority": "mandatory",
        "require_count": 1,
        "member_ids": [],
        "sort_order": 0,
        "created": today(),
    }
