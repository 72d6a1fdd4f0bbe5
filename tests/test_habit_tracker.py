# SPDX-License-Identifier: MIT

import pendulum
import pytest

from goodday.errors import NotFoundError, PersistenceFailure, ValidationError
from goodday.repository.storage import YamlStorage
from goodday.service.habit import HabitTracker

from conftest import START, TODAY

# ─────────────────────────────────────────────────────────────
# Items
# ─────────────────────────────────────────────────────────────


def test_add_item_assigns_id_and_order(tracker):
    first = tracker.add_item("Brush teeth")
    second = tracker.add_item("Drink water", success_criteria="3L")
    assert first["id"] is not None
    assert first["created"] == TODAY
    assert (first["sort_order"], second["sort_order"]) == (1, 2)
    assert [item["name"] for item in tracker.items()] == ["Brush teeth", "Drink water"]


@pytest.mark.parametrize(
    "fields",
    [
        {"name": "  "},
        {"kind": "neutral"},
        {"priority": "urgent"},
        {"frequency": "hourly"},
        {"frequency": "weekly", "frequency_target": 0},
        {"frequency": "once"},
        {"frequency": "once", "priority": "optional", "kind": "negative"},
    ],
)
def test_add_item_rejects_invalid_items(tracker, fields):
    arguments = {"name": "Item"}
    arguments.update(fields)
    with pytest.raises(ValidationError):
        tracker.add_item(**arguments)
    assert tracker.items() == []


def test_one_off_task_must_be_optional_and_positive(tracker):
    task = tracker.add_item("Call the bank", frequency="once", priority="optional")
    assert task["frequency"] == "once"


def test_unknown_item_raises_not_found(tracker):
    with pytest.raises(NotFoundError):
        tracker.get_item("missing")
    with pytest.raises(NotFoundError):
        tracker.set_completion("missing")


def test_update_item(tracker):
    item = tracker.add_item("Read", description="Any book")
    updated = tracker.update_item(
        item["id"], name="Read fiction", frequency="weekly", frequency_target=3
    )
    assert updated["name"] == "Read fiction"
    assert updated["description"] == "Any book"
    assert updated["frequency_target"] == 3

    cleared = tracker.update_item(item["id"], remove_description=True)
    assert cleared["description"] is None


def test_update_item_validates_before_changing(tracker):
    item = tracker.add_item("Read")
    with pytest.raises(ValidationError):
        tracker.update_item(item["id"], frequency_target=0)
    assert tracker.get_item(item["id"])["frequency_target"] == 1


def test_archived_item_rejects_completion(tracker):
    item = tracker.add_item("Read")
    tracker.archive_item(item["id"])
    assert tracker.items() == []
    assert len(tracker.items(include_archived=True)) == 1
    with pytest.raises(ValidationError):
        tracker.toggle_completion(item["id"])

    tracker.unarchive_item(item["id"])
    assert tracker.toggle_completion(item["id"])["completed"] is True


def test_delete_item_removes_history(tracker, storage):
    item = tracker.add_item("Read")
    tracker.set_completion(item["id"])
    tracker.delete_item(item["id"])
    with pytest.raises(NotFoundError):
        tracker.get_item(item["id"])
    assert storage.load_items() == []
    assert storage.load_completion_records(item["id"]) == []


def test_reorder_items(tracker):
    first = tracker.add_item("First")
    second = tracker.add_item("Second")
    tracker.reorder_items([second["id"], first["id"]])
    assert [item["name"] for item in tracker.items()] == ["Second", "First"]


# ─────────────────────────────────────────────────────────────
# Groups
# ─────────────────────────────────────────────────────────────


def test_add_group_sets_back_references(tracker):
    draw = tracker.add_item("Draw")
    write = tracker.add_item("Write")
    group = tracker.add_group("Creative", member_ids=[draw["id"], write["id"]])
    assert tracker.get_item(draw["id"])["group_id"] == group["id"]
    assert tracker.get_item(write["id"])["group_id"] == group["id"]


def test_item_belongs_to_one_group(tracker):
    draw = tracker.add_item("Draw")
    tracker.add_group("Creative", member_ids=[draw["id"]])
    with pytest.raises(ValidationError):
        tracker.add_group("Art", member_ids=[draw["id"]])
    other = tracker.add_group("Other", member_ids=[tracker.add_item("x")["id"]])
    with pytest.raises(ValidationError):
        tracker.add_item_to_group(draw["id"], other["id"])


def test_group_rejects_unknown_members(tracker):
    with pytest.raises(NotFoundError):
        tracker.add_group("Creative", member_ids=["missing"])


@pytest.mark.parametrize("require_count", [0, 3])
def test_group_require_count_bounds(tracker, require_count):
    members = [tracker.add_item("Draw")["id"], tracker.add_item("Write")["id"]]
    with pytest.raises(ValidationError):
        tracker.add_group("Creative", require_count=require_count, member_ids=members)
    assert tracker.groups() == []


def test_removing_member_cannot_break_quorum(tracker):
    draw = tracker.add_item("Draw")
    write = tracker.add_item("Write")
    group = tracker.add_group(
        "Creative", require_count=2, member_ids=[draw["id"], write["id"]]
    )
    with pytest.raises(ValidationError):
        tracker.remove_item_from_group(draw["id"], group["id"])
    with pytest.raises(ValidationError):
        tracker.delete_item(write["id"])

    tracker.update_group(group["id"], require_count=1)
    tracker.remove_item_from_group(draw["id"], group["id"])
    assert tracker.get_group(group["id"])["member_ids"] == [write["id"]]
    assert tracker.get_item(draw["id"])["group_id"] is None


def test_delete_group_clears_back_references(tracker):
    draw = tracker.add_item("Draw")
    group = tracker.add_group("Creative", member_ids=[draw["id"]])
    tracker.delete_group(group["id"])
    assert tracker.groups() == []
    assert tracker.get_item(draw["id"])["group_id"] is None


def test_group_status(tracker):
    members = [tracker.add_item(name)["id"] for name in ("Draw", "Write", "Music")]
    group = tracker.add_group("Creative", require_count=2, member_ids=members)
    tracker.set_completion(members[0])
    assert tracker.group_status(group["id"])["satisfied"] is False
    tracker.set_completion(members[2])
    assert tracker.group_status(group["id"])["satisfied"] is True


# ─────────────────────────────────────────────────────────────
# Completion
# ─────────────────────────────────────────────────────────────


def test_toggle_completion_updates_streak(tracker):
    item = tracker.add_item("Read", created=START)
    tracker.set_completion(item["id"], TODAY.subtract(days=1))
    record = tracker.toggle_completion(item["id"])
    assert record["completed"] is True
    assert tracker.get_item(item["id"])["current_streak"] == 2
    assert tracker.get_item(item["id"])["best_streak"] == 2

    assert tracker.toggle_completion(item["id"])["completed"] is False
    assert tracker.get_item(item["id"])["current_streak"] == 0
    assert tracker.get_item(item["id"])["best_streak"] == 2


def test_toggle_keeps_measured_value(tracker):
    item = tracker.add_item("Water", success_criteria="3L")
    tracker.set_completion(item["id"], value=2.5)
    assert tracker.toggle_completion(item["id"])["measured_value"] == 2.5


def test_log_details_keeps_completion(tracker):
    item = tracker.add_item("Workout", options=["run", "swim"])
    tracker.set_completion(item["id"])
    record = tracker.log_details(item["id"], None, {"note": "legs", "photo_refs": []})
    assert record["completed"] is True
    assert record["note"] == "legs"

    record = tracker.record_selected_option(item["id"], "swim")
    assert record["selected_option"] == "swim"
    assert record["note"] == "legs"


def test_log_details_rejects_unknown_option(tracker):
    item = tracker.add_item("Workout", options=["run"])
    with pytest.raises(ValidationError):
        tracker.record_selected_option(item["id"], "fly")
    assert tracker.completion(item["id"]) is None


def test_listener_failure_does_not_undo_completion(tracker, caplog):
    item = tracker.add_item("Read")
    received = []

    def failing_listener(item, record):
        raise RuntimeError("notification service down")

    tracker.add_completion_listener(failing_listener)
    tracker.add_completion_listener(lambda item, record: received.append(record))

    record = tracker.set_completion(item["id"])
    assert record["completed"] is True
    assert tracker.completion(item["id"])["completed"] is True
    assert len(received) == 1
    assert "notification service down" in caplog.text


# ─────────────────────────────────────────────────────────────
# Good days and locking
# ─────────────────────────────────────────────────────────────


def test_is_good_day(tracker):
    teeth = tracker.add_item("Teeth", created=START)
    smoking = tracker.add_item("Smoking", kind="negative", created=START)
    assert not tracker.is_good_day()
    tracker.set_completion(teeth["id"])
    assert tracker.is_good_day()
    tracker.set_completion(smoking["id"])
    assert not tracker.is_good_day()
    assert tracker.mandatory_progress() == (1, 1)


def test_locked_day_ignores_later_changes(tracker):
    teeth = tracker.add_item("Teeth", created=START)
    yesterday = TODAY.subtract(days=1)
    tracker.set_completion(teeth["id"], yesterday)

    verdicts, _ = tracker.run_lock_pass()
    assert verdicts[-1]["day"] == yesterday
    assert tracker.is_good_day(yesterday)

    tracker.set_completion(teeth["id"], yesterday, completed=False)
    assert tracker.is_good_day(yesterday)
    tracker.add_item("Water", created=START)
    assert tracker.is_good_day(yesterday)
    assert not tracker.is_good_day(yesterday.subtract(days=1))


def test_lock_pass_is_idempotent(tracker):
    tracker.add_item("Teeth", created=TODAY.subtract(days=3))
    verdicts, _ = tracker.run_lock_pass()
    assert len(verdicts) == 3
    assert tracker.run_lock_pass() == ([], [])


def test_good_day_statistics(tracker):
    teeth = tracker.add_item("Teeth", created=START)
    for offset in range(3):
        tracker.set_completion(teeth["id"], TODAY.subtract(days=offset))
    assert tracker.good_day_streak() == 3
    assert tracker.good_day_rate(window_days=6) == pytest.approx(0.5)
    assert tracker.completion_rate(teeth["id"], window_days=3) == pytest.approx(1.0)
    assert tracker.good_days(TODAY.subtract(days=5), TODAY) == [
        TODAY.subtract(days=2),
        TODAY.subtract(days=1),
        TODAY,
    ]


def test_reflection_notes(tracker):
    tracker.save_reflection_note("Productive", 8)
    tracker.save_reflection_note("Tired", 4, TODAY.subtract(days=1))
    assert tracker.reflection_note()["score"] == 8
    assert [note["text"] for note in tracker.recent_reflection_notes(7)] == [
        "Productive",
        "Tired",
    ]
    with pytest.raises(ValidationError):
        tracker.save_reflection_note("Too late", 5, TODAY.subtract(days=2))


def test_closed_reflection_reads_as_locked_before_lock_pass(tracker, clock):
    tracker.save_reflection_note("Productive", 8)
    clock.day = TODAY.add(days=1)
    assert tracker.reflection_note(TODAY)["locked"] is False

    clock.day = TODAY.add(days=2)
    assert tracker.reflection_note(TODAY)["locked"] is True
    assert tracker.recent_reflection_notes(7)[0]["locked"] is True


def test_slip_keeps_clean_run_as_best_streak(tracker, clock):
    clock.day = TODAY.subtract(days=10)
    smoking = tracker.add_item("Smoking", kind="negative")
    clock.day = TODAY
    assert tracker.streak_for(smoking["id"]) == (10, 10)

    tracker.toggle_completion(smoking["id"])
    item = tracker.get_item(smoking["id"])
    assert item["current_streak"] == 0
    assert item["best_streak"] == 10
    assert tracker.streak_for(smoking["id"]) == (0, 10)


def test_set_completion_keeps_run_before_reset(tracker, clock):
    clock.day = TODAY.subtract(days=3)
    read = tracker.add_item("Read")
    for offset in (3, 2, 1):
        tracker.set_completion(read["id"], TODAY.subtract(days=offset))
    clock.day = TODAY
    tracker.set_completion(read["id"], completed=False)
    assert tracker.get_item(read["id"])["best_streak"] == 3


def test_lock_pass_refreshes_streaks(tracker, clock):
    clock.day = TODAY.subtract(days=4)
    smoking = tracker.add_item("Smoking", kind="negative")
    clock.day = TODAY
    tracker.run_lock_pass()
    item = tracker.get_item(smoking["id"])
    assert (item["current_streak"], item["best_streak"]) == (4, 4)


# ─────────────────────────────────────────────────────────────
# Persistence
# ─────────────────────────────────────────────────────────────


def test_state_survives_reload(tracker, storage, config):
    teeth = tracker.add_item("Teeth", created=START)
    draw = tracker.add_item("Draw", created=START)
    group = tracker.add_group("Creative", member_ids=[draw["id"]])
    tracker.set_completion(teeth["id"], TODAY.subtract(days=1))
    tracker.set_completion(draw["id"], TODAY.subtract(days=1))
    tracker.run_lock_pass()
    tracker.save_reflection_note("Fine", 6)

    reloaded = HabitTracker(storage, config, clock=lambda: TODAY)
    assert [item["name"] for item in reloaded.items()] == ["Teeth", "Draw"]
    assert reloaded.get_group(group["id"])["member_ids"] == [draw["id"]]
    assert reloaded.completion(teeth["id"], TODAY.subtract(days=1))["completed"]
    assert reloaded.locks.is_locked(TODAY.subtract(days=1))
    assert reloaded.is_good_day(TODAY.subtract(days=1))
    assert reloaded.reflection_note()["text"] == "Fine"


class FailingStorage:
    """Wraps a storage and fails every completion write."""

    def __init__(self, storage):
        self._storage = storage

    def __getattr__(self, name):
        return getattr(self._storage, name)

    def upsert_completion_record(self, record):
        raise PersistenceFailure("disk full")


def test_persistence_failure_propagates(storage, config):
    tracker = HabitTracker(storage, config, clock=lambda: TODAY)
    item = tracker.add_item("Read")

    failing = HabitTracker(FailingStorage(storage), config, clock=lambda: TODAY)
    with pytest.raises(PersistenceFailure):
        failing.set_completion(item["id"])


def test_storage_errors_become_persistence_failures(tmp_path, config):
    data_path = tmp_path / "data"
    storage_path = data_path / "items"
    storage_path.mkdir(parents=True)
    (storage_path / "broken.yaml").write_text("name: [unclosed")

    with pytest.raises(PersistenceFailure):
        HabitTracker(YamlStorage(data_path), config, clock=lambda: TODAY)


def test_day_argument_accepts_timestamps(tracker):
    item = tracker.add_item("Read")
    evening = pendulum.datetime(2024, 3, 13, 21, 0, tz="local")
    tracker.set_completion(item["id"], evening)
    assert tracker.completion(item["id"], TODAY)["completed"] is True
