# SPDX-License-Identifier: MIT


class EntityType:
    ITEM = "item"
    GROUP = "group"
    COMPLETION = "completion"
    DAY_VERDICT = "day_verdict"
    REFLECTION_NOTE = "reflection_note"
