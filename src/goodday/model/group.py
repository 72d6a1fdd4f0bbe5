# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from goodday.model.entity_id import EntityId
from goodday.model.item import Priority


class Group(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "group"
    name: str  # e.g., "Do something creative"
    priority: Priority
    require_count: int  # N of len(member_ids)
    member_ids: list[EntityId]  # Order irrelevant, no duplicates
    sort_order: int
    created: pendulum.Date
