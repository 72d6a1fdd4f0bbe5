# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Callable, Optional

import pendulum

from goodday.configuration import Configuration
from goodday.errors import NotFoundError, ValidationError
from goodday.model.completion import CompletionPatch, CompletionRecord
from goodday.model.day_verdict import DayVerdict
from goodday.model.entity_id import EntityId, generate_entity_id
from goodday.model.entity_type import EntityType
from goodday.model.group import Group
from goodday.model.item import (
    FREQUENCIES,
    KINDS,
    PRIORITIES,
    Frequency,
    Item,
    Kind,
    Priority,
)
from goodday.model.reflection_note import ReflectionNote
from goodday.repository.persistence import Persistence
from goodday.service import good_day, statistics, streak
from goodday.service import group as group_service
from goodday.service.ledger import CompletionLedger
from goodday.service.lock import LockManager
from goodday.template.group import get_group_template
from goodday.template.item import get_item_template
from goodday.time import DayLike, day_key
from goodday.time import today as local_today

logger = logging.getLogger(__name__)

CompletionListener = Callable[[Item, CompletionRecord], None]


def validate_item(item: Item) -> None:
    """Raise ValidationError if the item breaks a model invariant."""
    if item["name"].strip() == "":
        raise ValidationError("Item name cannot be empty")
    if item["kind"] not in KINDS:
        raise ValidationError(
            f"Invalid kind: {item['kind']}. Valid options: {', '.join(KINDS)}"
        )
    if item["priority"] not in PRIORITIES:
        raise ValidationError(
            f"Invalid priority: {item['priority']}. "
            f"Valid options: {', '.join(PRIORITIES)}"
        )
    if item["frequency"] not in FREQUENCIES:
        raise ValidationError(
            f"Invalid frequency: {item['frequency']}. "
            f"Valid options: {', '.join(FREQUENCIES)}"
        )
    if item["frequency_target"] < 1:
        raise ValidationError("Frequency target must be at least 1")
    if item["frequency"] == "once" and (
        item["priority"] != "optional" or item["kind"] != "positive"
    ):
        raise ValidationError(
            "One-off tasks must be optional and positive (to do, not to avoid)"
        )


class HabitTracker:
    """
    Entry point for the UI, automation and scheduling collaborators.

    Holds items, groups and the ledger in memory and writes every mutation
    through the persistence collaborator. A failed write is raised as
    PersistenceFailure after the in-memory change has been made.
    """

    def __init__(
        self,
        persistence: Persistence,
        configuration: Configuration,
        clock: Callable[[], pendulum.Date] = local_today,
    ) -> None:
        self.configuration = configuration
        self._persistence = persistence
        self._clock = clock
        self._listeners: list[CompletionListener] = []

        self._items: dict[EntityId, Item] = {
            item["id"]: item for item in persistence.load_items() if item["id"]
        }
        self._groups: dict[EntityId, Group] = {
            group["id"]: group for group in persistence.load_groups() if group["id"]
        }

        self.ledger = CompletionLedger(persistence)
        for item_id in self._items:
            self.ledger.load(persistence.load_completion_records(item_id))

        self.locks = LockManager(
            self._evaluate_live,
            persistence,
            verdicts=persistence.load_day_verdicts(),
            notes=persistence.load_reflection_notes(),
        )

        logger.debug(
            "Loaded %d items and %d groups", len(self._items), len(self._groups)
        )

    def today(self) -> pendulum.Date:
        return self._clock()

    def _day(self, day: Optional[DayLike]) -> pendulum.Date:
        return self.today() if day is None else day_key(day)

    def _evaluate_live(self, day: pendulum.Date) -> bool:
        return good_day.is_good_day_live(
            day, list(self._items.values()), list(self._groups.values()), self.ledger
        )

    # ─────────────────────────────────────────────────────────────
    # Items
    # ─────────────────────────────────────────────────────────────

    def items(self, include_archived: bool = False) -> list[Item]:
        return sorted(
            (
                deepcopy(item)
                for item in self._items.values()
                if include_archived or item["active"]
            ),
            key=lambda item: item["sort_order"],
        )

    def get_item(self, item_id: EntityId) -> Item:
        return deepcopy(self._item(item_id))

    def _item(self, item_id: EntityId) -> Item:
        if item_id not in self._items:
            raise NotFoundError(EntityType.ITEM, item_id)
        return self._items[item_id]

    def add_item(
        self,
        name: str,
        kind: Kind = "positive",
        priority: Priority = "mandatory",
        frequency: Frequency = "daily",
        frequency_target: int = 1,
        description: Optional[str] = None,
        success_criteria: Optional[str] = None,
        options: Optional[list[str]] = None,
        created: Optional[DayLike] = None,
    ) -> Item:
        item = get_item_template()
        item["name"] = name
        item["kind"] = kind
        item["priority"] = priority
        item["frequency"] = frequency
        item["frequency_target"] = frequency_target
        item["description"] = description
        item["success_criteria"] = success_criteria
        item["options"] = list(dict.fromkeys(options)) if options else None
        item["created"] = self._day(created)
        validate_item(item)

        item["id"] = generate_entity_id()
        item["sort_order"] = (
            max((other["sort_order"] for other in self._items.values()), default=0) + 1
        )
        item = streak.apply_streak(item, self.today(), self.ledger, self.configuration)

        self._items[item["id"]] = item
        self._persistence.save_item(deepcopy(item))
        logger.info("Added item %s (%s)", item["id"], name)
        return deepcopy(item)

    def update_item(
        self,
        item_id: EntityId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        kind: Optional[Kind] = None,
        priority: Optional[Priority] = None,
        frequency: Optional[Frequency] = None,
        frequency_target: Optional[int] = None,
        success_criteria: Optional[str] = None,
        options: Optional[list[str]] = None,
        remove_description: bool = False,
        remove_success_criteria: bool = False,
        remove_options: bool = False,
    ) -> Item:
        item = deepcopy(self._item(item_id))
        if name is not None:
            item["name"] = name
        if description is not None:
            item["description"] = description
        if kind is not None:
            item["kind"] = kind
        if priority is not None:
            item["priority"] = priority
        if frequency is not None:
            item["frequency"] = frequency
        if frequency_target is not None:
            item["frequency_target"] = frequency_target
        if success_criteria is not None:
            item["success_criteria"] = success_criteria
        if options is not None:
            item["options"] = list(dict.fromkeys(options))

        if remove_description:
            item["description"] = None
        if remove_success_criteria:
            item["success_criteria"] = None
        if remove_options:
            item["options"] = None

        validate_item(item)
        return self._store_item(
            streak.apply_streak(item, self.today(), self.ledger, self.configuration)
        )

    def archive_item(self, item_id: EntityId) -> Item:
        item = deepcopy(self._item(item_id))
        item["active"] = False
        logger.info("Archived item %s", item_id)
        return self._store_item(item)

    def unarchive_item(self, item_id: EntityId) -> Item:
        item = deepcopy(self._item(item_id))
        item["active"] = True
        logger.info("Unarchived item %s", item_id)
        return self._store_item(
            streak.apply_streak(item, self.today(), self.ledger, self.configuration)
        )

    def delete_item(self, item_id: EntityId) -> None:
        """Delete an item with its completion records and group membership."""
        item = self._item(item_id)
        group = self._group_of(item_id)
        if group is not None:
            self._check_member_removal(group, item_id)

        if group is not None:
            group["member_ids"] = [
                member_id for member_id in group["member_ids"] if member_id != item_id
            ]
            self._persistence.save_group(deepcopy(group))

        del self._items[item_id]
        self.ledger.remove_item(item_id)
        self._persistence.delete_item(item_id)
        logger.info("Deleted item %s (%s)", item_id, item["name"])

    def reorder_items(self, item_ids: list[EntityId]) -> list[Item]:
        for item_id in item_ids:
            self._item(item_id)
        for position, item_id in enumerate(item_ids, start=1):
            item = deepcopy(self._items[item_id])
            item["sort_order"] = position
            self._store_item(item)
        return self.items(include_archived=True)

    def _store_item(self, item: Item) -> Item:
        if item["id"] is None:
            raise ValueError("Item must have an ID")
        self._items[item["id"]] = item
        self._persistence.save_item(deepcopy(item))
        return deepcopy(item)

    # ─────────────────────────────────────────────────────────────
    # Groups
    # ─────────────────────────────────────────────────────────────

    def groups(self) -> list[Group]:
        return sorted(
            (deepcopy(group) for group in self._groups.values()),
            key=lambda group: group["sort_order"],
        )

    def get_group(self, group_id: EntityId) -> Group:
        return deepcopy(self._group(group_id))

    def _group(self, group_id: EntityId) -> Group:
        if group_id not in self._groups:
            raise NotFoundError(EntityType.GROUP, group_id)
        return self._groups[group_id]

    def _group_of(self, item_id: EntityId) -> Optional[Group]:
        for group in self._groups.values():
            if item_id in group["member_ids"]:
                return group
        return None

    def _check_member_removal(self, group: Group, item_id: EntityId) -> None:
        if len(group["member_ids"]) - 1 < group["require_count"]:
            raise ValidationError(
                f"Removing {item_id} would leave group '{group['name']}' with fewer "
                f"members than its require count ({group['require_count']})"
            )

    def add_group(
        self,
        name: str,
        priority: Priority = "mandatory",
        require_count: int = 1,
        member_ids: Optional[list[EntityId]] = None,
    ) -> Group:
        members = list(dict.fromkeys(member_ids or []))
        if name.strip() == "":
            raise ValidationError("Group name cannot be empty")
        if priority not in PRIORITIES:
            raise ValidationError(
                f"Invalid priority: {priority}. Valid options: {', '.join(PRIORITIES)}"
            )
        for member_id in members:
            self._item(member_id)
            other_group = self._group_of(member_id)
            if other_group is not None:
                raise ValidationError(
                    f"Item {member_id} already belongs to group '{other_group['name']}'"
                )
        self._validate_require_count(require_count, len(members))

        group = get_group_template()
        group["id"] = generate_entity_id()
        group["name"] = name
        group["priority"] = priority
        group["require_count"] = require_count
        group["member_ids"] = members
        group["created"] = self.today()
        group["sort_order"] = (
            max((other["sort_order"] for other in self._groups.values()), default=0)
            + 1
        )

        self._groups[group["id"]] = group
        self._persistence.save_group(deepcopy(group))
        for member_id in members:
            self._set_group_reference(member_id, group["id"])

        logger.info("Added group %s (%s)", group["id"], name)
        return deepcopy(group)

    def update_group(
        self,
        group_id: EntityId,
        name: Optional[str] = None,
        priority: Optional[Priority] = None,
        require_count: Optional[int] = None,
    ) -> Group:
        group = deepcopy(self._group(group_id))
        if name is not None:
            if name.strip() == "":
                raise ValidationError("Group name cannot be empty")
            group["name"] = name
        if priority is not None:
            if priority not in PRIORITIES:
                raise ValidationError(
                    f"Invalid priority: {priority}. "
                    f"Valid options: {', '.join(PRIORITIES)}"
                )
            group["priority"] = priority
        if require_count is not None:
            self._validate_require_count(require_count, len(group["member_ids"]))
            group["require_count"] = require_count

        self._groups[group_id] = group
        self._persistence.save_group(deepcopy(group))
        return deepcopy(group)

    def add_item_to_group(self, item_id: EntityId, group_id: EntityId) -> Group:
        self._item(item_id)
        group = self._group(group_id)
        if item_id in group["member_ids"]:
            return deepcopy(group)

        other_group = self._group_of(item_id)
        if other_group is not None:
            raise ValidationError(
                f"Item {item_id} already belongs to group '{other_group['name']}'"
            )

        group["member_ids"].append(item_id)
        self._persistence.save_group(deepcopy(group))
        self._set_group_reference(item_id, group_id)
        return deepcopy(group)

    def remove_item_from_group(self, item_id: EntityId, group_id: EntityId) -> Group:
        self._item(item_id)
        group = self._group(group_id)
        if item_id not in group["member_ids"]:
            raise ValidationError(f"Item {item_id} is not in group '{group['name']}'")
        self._check_member_removal(group, item_id)

        group["member_ids"] = [
            member_id for member_id in group["member_ids"] if member_id != item_id
        ]
        self._persistence.save_group(deepcopy(group))
        self._set_group_reference(item_id, None)
        return deepcopy(group)

    def delete_group(self, group_id: EntityId) -> None:
        group = self._group(group_id)
        for member_id in group["member_ids"]:
            if member_id in self._items:
                self._set_group_reference(member_id, None)
        del self._groups[group_id]
        self._persistence.delete_group(group_id)
        logger.info("Deleted group %s (%s)", group_id, group["name"])

    def _validate_require_count(self, require_count: int, member_count: int) -> None:
        if require_count < 1:
            raise ValidationError("Require count must be at least 1")
        if require_count > member_count:
            raise ValidationError(
                f"Require count ({require_count}) cannot exceed the number of "
                f"members ({member_count})"
            )

    def _set_group_reference(
        self, item_id: EntityId, group_id: Optional[EntityId]
    ) -> None:
        item = deepcopy(self._items[item_id])
        if item["group_id"] != group_id:
            item["group_id"] = group_id
            self._store_item(item)

    # ─────────────────────────────────────────────────────────────
    # Completion
    # ─────────────────────────────────────────────────────────────

    def add_completion_listener(self, listener: CompletionListener) -> None:
        """
        Register a callback run after every completion change.

        Listeners reach external services (notification rescheduling, sync).
        Their failures are logged and never undo the completion change.
        """
        self._listeners.append(listener)

    def _trackable_item(self, item_id: EntityId) -> Item:
        item = self._item(item_id)
        if not item["active"]:
            raise ValidationError(f"Item '{item['name']}' is archived")
        return item

    def toggle_completion(
        self, item_id: EntityId, day: Optional[DayLike] = None
    ) -> CompletionRecord:
        self._trackable_item(item_id)
        # best_streak must hold the run that this change may end
        self.refresh_streak(item_id)
        day = self._day(day)
        existing = self.ledger.query(item_id, day)
        completed = existing is None or not existing["completed"]
        measured_value = existing["measured_value"] if existing is not None else None
        record = self.ledger.upsert(item_id, day, completed, measured_value)
        self._after_completion_change(item_id, record)
        return record

    def set_completion(
        self,
        item_id: EntityId,
        day: Optional[DayLike] = None,
        completed: bool = True,
        value: Optional[float] = None,
    ) -> CompletionRecord:
        """Shared entry point for the UI and for automatic completions."""
        self._trackable_item(item_id)
        self.refresh_streak(item_id)
        record = self.ledger.upsert(item_id, self._day(day), completed, value)
        self._after_completion_change(item_id, record)
        return record

    def log_details(
        self,
        item_id: EntityId,
        day: Optional[DayLike],
        patch: CompletionPatch,
        completed: Optional[bool] = None,
    ) -> CompletionRecord:
        """Attach a note, photos or an option without clobbering completion."""
        item = self._trackable_item(item_id)
        option = patch.get("selected_option")
        if option is not None and option not in (item["options"] or []):
            raise ValidationError(f"'{option}' is not an option of '{item['name']}'")

        self.refresh_streak(item_id)
        day = self._day(day)
        existing = self.ledger.query(item_id, day)
        if completed is None:
            completed = existing is not None and existing["completed"]
        measured_value = existing["measured_value"] if existing is not None else None
        record = self.ledger.upsert(item_id, day, completed, measured_value, patch)
        self._after_completion_change(item_id, record)
        return record

    def record_selected_option(
        self, item_id: EntityId, option: str, day: Optional[DayLike] = None
    ) -> CompletionRecord:
        return self.log_details(item_id, day, {"selected_option": option})

    def completion(
        self, item_id: EntityId, day: Optional[DayLike] = None
    ) -> Optional[CompletionRecord]:
        self._item(item_id)
        return self.ledger.query(item_id, self._day(day))

    def records_for(self, item_id: EntityId) -> list[CompletionRecord]:
        self._item(item_id)
        return self.ledger.records_for(item_id)

    def refresh_streak(self, item_id: EntityId) -> Item:
        """Recompute the cached streaks as of today and store them if changed."""
        item = self._item(item_id)
        updated_item = streak.apply_streak(
            item, self.today(), self.ledger, self.configuration
        )
        if (
            updated_item["current_streak"] == item["current_streak"]
            and updated_item["best_streak"] == item["best_streak"]
        ):
            return deepcopy(item)
        return self._store_item(updated_item)

    def refresh_streaks(self) -> list[Item]:
        return [
            self.refresh_streak(item_id)
            for item_id, item in list(self._items.items())
            if item["active"]
        ]

    def _after_completion_change(
        self, item_id: EntityId, record: CompletionRecord
    ) -> None:
        item = self.refresh_streak(item_id)
        for listener in self._listeners:
            try:
                listener(deepcopy(item), deepcopy(record))
            except Exception:
                logger.exception(
                    "Completion listener %r failed for %s", listener, item_id
                )

    # ─────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────

    def is_good_day(self, day: Optional[DayLike] = None) -> bool:
        return self.locks.is_good_day(self._day(day))

    def day_verdict(self, day: Optional[DayLike] = None) -> Optional[DayVerdict]:
        return self.locks.day_verdict(self._day(day))

    def streak_for(
        self, item_id: EntityId, as_of: Optional[DayLike] = None
    ) -> tuple[int, int]:
        return streak.compute_streak(
            self._item(item_id), self._day(as_of), self.ledger, self.configuration
        )

    def group_status(
        self, group_id: EntityId, day: Optional[DayLike] = None
    ) -> dict[str, Any]:
        return group_service.group_status(
            self._group(group_id),
            self._day(day),
            list(self._items.values()),
            self.ledger,
        )

    def mandatory_progress(self, day: Optional[DayLike] = None) -> tuple[int, int]:
        return good_day.mandatory_progress(
            self._day(day),
            list(self._items.values()),
            list(self._groups.values()),
            self.ledger,
        )

    def completion_rate(
        self,
        item_id: EntityId,
        window_days: Optional[int] = None,
        as_of: Optional[DayLike] = None,
    ) -> float:
        return statistics.completion_rate(
            self._item(item_id),
            window_days or self.configuration["default_window_days"],
            self._day(as_of),
            self.ledger,
        )

    def good_day_rate(
        self, window_days: Optional[int] = None, as_of: Optional[DayLike] = None
    ) -> float:
        return statistics.good_day_rate(
            window_days or self.configuration["default_window_days"],
            self._day(as_of),
            self.locks.is_good_day,
        )

    def good_day_streak(self, as_of: Optional[DayLike] = None) -> int:
        return statistics.current_good_day_streak(
            self._day(as_of), self.locks.is_good_day, self.configuration
        )

    def good_days(self, start: DayLike, end: DayLike) -> list[pendulum.Date]:
        return statistics.good_days(start, end, self.locks.is_good_day)

    # ─────────────────────────────────────────────────────────────
    # Locking and reflections
    # ─────────────────────────────────────────────────────────────

    def first_tracked_day(self) -> Optional[pendulum.Date]:
        return min((item["created"] for item in self._items.values()), default=None)

    def lock_day(self, day: DayLike) -> DayVerdict:
        return self.locks.lock_day(day, self.today())

    def run_lock_pass(
        self, today: Optional[DayLike] = None
    ) -> tuple[list[DayVerdict], list[ReflectionNote]]:
        """
        Lock every finished day and every reflection past its edit window.

        Also refreshes the cached streaks, which change with the date alone.
        """
        today = self._day(today)
        verdicts = self.locks.lock_elapsed_days(
            today, self.first_tracked_day(), self.configuration["max_lookback_days"]
        )
        notes = self.locks.lock_expired_notes(today)
        self.refresh_streaks()
        if verdicts or notes:
            logger.info(
                "Lock pass locked %d days and %d reflection notes",
                len(verdicts),
                len(notes),
            )
        return verdicts, notes

    def save_reflection_note(
        self, text: str, score: int, day: Optional[DayLike] = None
    ) -> ReflectionNote:
        return self.locks.save_reflection_note(
            self._day(day), text, score, self.today()
        )

    def reflection_note(
        self, day: Optional[DayLike] = None
    ) -> Optional[ReflectionNote]:
        return self.locks.reflection_note(self._day(day), self.today())

    def recent_reflection_notes(
        self, days: Optional[int] = None
    ) -> list[ReflectionNote]:
        return self.locks.recent_reflection_notes(
            days or self.configuration["default_window_days"], self.today()
        )
