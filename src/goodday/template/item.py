# SPDX-License-Identifier: MIT

from goodday.model.entity_type import EntityType
from goodday.model.item import Item
from goodday.time import today


def get_item_template() -> Item:
    return {
        "id": None,
        "entity_type": EntityType.ITEM,
        "name": "",
        "description": None,
        "kind": "positive",
        "priority": "mandatory",
        "frequency": "daily",
        "frequency_target": 1,
        "success_criteria": None,
        "options": None,
        "group_id": None,
        "current_streak": 0,
        "best_streak": 0,
        "active": True,
        "created": today(),
        "sort_order": 0,
    }
