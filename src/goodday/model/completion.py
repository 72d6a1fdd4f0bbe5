# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from goodday.model.entity_id import EntityId


class CompletionRecord(TypedDict):
    entity_type: str  # "completion"
    item_id: EntityId
    day: pendulum.Date  # Unique together with item_id
    completed: bool
    measured_value: Optional[float]
    note: Optional[str]
    photo_refs: list[str]  # Ordered references into external photo storage
    selected_option: Optional[str]
    updated: pendulum.DateTime


class CompletionPatch(TypedDict, total=False):
    """
    Partial update of the optional fields of a CompletionRecord.

    A missing key leaves the stored value untouched, a present key (even
    None) replaces it.
    """

    note: Optional[str]
    photo_refs: list[str]
    selected_option: Optional[str]
