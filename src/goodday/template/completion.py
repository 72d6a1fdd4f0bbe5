# SPDX-License-Identifier: MIT

import pendulum

from goodday.model.completion import CompletionRecord
from goodday.model.entity_id import EntityId
from goodday.model.entity_type import EntityType
from goodday.time import now_utc


def get_completion_template(item_id: EntityId, day: pendulum.Date) -> CompletionRecord:
    return {
        "entity_type": EntityType.COMPLETION,
        "item_id": item_id,
        "day": day,
        "completed": False,
        "measured_value": None,
        "note": None,
        "photo_refs": [],
        "selected_option": None,
        "updated": now_utc(),
    }
