# SPDX-License-Identifier: MIT

import pendulum

from goodday.model.entity_type import EntityType
from goodday.model.reflection_note import ReflectionNote
from goodday.time import now_utc


def get_reflection_note_template(day: pendulum.Date) -> ReflectionNote:
    now = now_utc()
    return {
        "entity_type": EntityType.REFLECTION_NOTE,
        "day": day,
        "text": "",
        "score": 5,
        "created": now,
        "updated": now,
        "locked": False,
    }
