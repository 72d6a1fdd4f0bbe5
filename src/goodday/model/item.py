# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from goodday.model.entity_id import EntityId

Kind = Literal["positive", "negative"]
Priority = Literal["mandatory", "optional"]
Frequency = Literal["once", "daily", "weekly", "monthly"]

KINDS: tuple[Kind, ...] = ("positive", "negative")
PRIORITIES: tuple[Priority, ...] = ("mandatory", "optional")
FREQUENCIES: tuple[Frequency, ...] = ("once", "daily", "weekly", "monthly")


class Item(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "item"
    name: str  # e.g., "Brush teeth"
    description: Optional[str]
    kind: Kind  # positive = build, negative = avoid
    priority: Priority  # mandatory = must do, optional = nice to do
    frequency: Frequency
    frequency_target: int  # Completions per period for weekly/monthly
    success_criteria: Optional[str]  # e.g., "3L", "15 mins"
    options: Optional[list[str]]  # Choices recorded as selected_option

    # Denormalized cache of the owning group's membership
    group_id: Optional[EntityId]

    # Derived from the ledger, never authoritative
    current_streak: int
    best_streak: int

    active: bool  # False once archived
    created: pendulum.Date
    sort_order: int
