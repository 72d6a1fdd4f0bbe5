# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Iterable, Optional

import pendulum

from goodday.model.completion import CompletionPatch, CompletionRecord
from goodday.model.entity_id import EntityId
from goodday.repository.persistence import Persistence
from goodday.template.completion import get_completion_template
from goodday.time import DayLike, day_key, now_utc

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = ("note", "photo_refs", "selected_option")


class CompletionLedger:
    """
    Per-(item, day) completion records.

    Upsert is the only mutation path. Records are never removed by marking
    an item incomplete; only remove_item() drops them.
    """

    def __init__(
        self,
        persistence: Optional[Persistence] = None,
        records: Iterable[CompletionRecord] = (),
    ) -> None:
        self._persistence = persistence
        self._records: dict[EntityId, dict[pendulum.Date, CompletionRecord]] = {}
        self.load(records)

    def load(self, records: Iterable[CompletionRecord]) -> None:
        for record in records:
            day = day_key(record["day"])
            stored = deepcopy(record)
            stored["day"] = day
            self._records.setdefault(record["item_id"], {})[day] = stored

    def upsert(
        self,
        item_id: EntityId,
        day: DayLike,
        completed: bool,
        measured_value: Optional[float] = None,
        patch: Optional[CompletionPatch] = None,
    ) -> CompletionRecord:
        day = day_key(day)
        item_records = self._records.setdefault(item_id, {})
        existing = item_records.get(day)

        record = (
            deepcopy(existing)
            if existing is not None
            else get_completion_template(item_id, day)
        )
        record["completed"] = completed
        record["measured_value"] = measured_value
        if patch is not None:
            for field in PATCHABLE_FIELDS:
                if field in patch:
                    record[field] = deepcopy(patch[field])  # type: ignore[literal-required]
            if record["photo_refs"] is None:
                record["photo_refs"] = []

        if existing is not None and _same_content(existing, record):
            return deepcopy(existing)

        record["updated"] = now_utc()
        item_records[day] = record
        logger.debug(
            "Upserted completion %s on %s (completed=%s)", item_id, day, completed
        )

        if self._persistence is not None:
            self._persistence.upsert_completion_record(deepcopy(record))

        return deepcopy(record)

    def query(self, item_id: EntityId, day: DayLike) -> Optional[CompletionRecord]:
        record = self._records.get(item_id, {}).get(day_key(day))
        if record is None:
            return None
        return deepcopy(record)

    def is_completed(self, item_id: EntityId, day: DayLike) -> bool:
        record = self._records.get(item_id, {}).get(day_key(day))
        return record is not None and record["completed"]

    def completion_count(
        self, item_id: EntityId, start: pendulum.Date, end: pendulum.Date
    ) -> int:
        """Number of completed days in [start, end], both inclusive."""
        return sum(
            1
            for day, record in self._records.get(item_id, {}).items()
            if record["completed"] and start <= day <= end
        )

    def last_completed_on_or_before(
        self, item_id: EntityId, day: pendulum.Date
    ) -> Optional[pendulum.Date]:
        completed_days = [
            record_day
            for record_day, record in self._records.get(item_id, {}).items()
            if record["completed"] and record_day <= day
        ]
        return max(completed_days) if completed_days else None

    def records_for(self, item_id: EntityId) -> list[CompletionRecord]:
        item_records = self._records.get(item_id, {})
        return [deepcopy(item_records[day]) for day in sorted(item_records)]

    def remove_item(self, item_id: EntityId) -> None:
        removed = self._records.pop(item_id, {})
        logger.debug("Dropped %d completion records of %s", len(removed), item_id)
        if self._persistence is not None:
            self._persistence.delete_completion_records(item_id)


def _same_content(left: CompletionRecord, right: CompletionRecord) -> bool:
    return all(
        left[field] == right[field]  # type: ignore[literal-required]
        for field in ("completed", "measured_value", *PATCHABLE_FIELDS)
    )
