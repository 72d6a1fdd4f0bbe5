# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum


class ReflectionNote(TypedDict):
    entity_type: str  # "reflection_note"
    day: pendulum.Date  # One note per day
    text: str
    score: int  # Fulfilment, 1-10
    created: pendulum.DateTime
    updated: pendulum.DateTime
    locked: bool
