# SPDX-License-Identifier: MIT

import pendulum

from goodday.service.ledger import CompletionLedger

DAY = pendulum.date(2024, 3, 13)


def test_upsert_creates_record():
    ledger = CompletionLedger()
    record = ledger.upsert("item", DAY, True, 2.5)
    assert record["completed"] is True
    assert record["measured_value"] == 2.5
    assert record["photo_refs"] == []
    assert ledger.is_completed("item", DAY)


def test_upsert_accepts_timestamps():
    ledger = CompletionLedger()
    ledger.upsert("item", pendulum.datetime(2024, 3, 13, 22, 0, tz="local"), True)
    assert ledger.is_completed("item", DAY)


def test_upsert_twice_keeps_one_identical_record():
    ledger = CompletionLedger()
    first = ledger.upsert("item", DAY, True)
    second = ledger.upsert("item", DAY, True)
    assert first == second
    assert len(ledger.records_for("item")) == 1


def test_incomplete_keeps_the_record():
    ledger = CompletionLedger()
    ledger.upsert("item", DAY, True, patch={"note": "felt great"})
    ledger.upsert("item", DAY, False)
    record = ledger.query("item", DAY)
    assert record is not None
    assert record["completed"] is False
    assert record["note"] == "felt great"
    assert not ledger.is_completed("item", DAY)


def test_patch_only_touches_present_fields():
    ledger = CompletionLedger()
    ledger.upsert(
        "item",
        DAY,
        True,
        patch={"note": "first", "photo_refs": ["a.jpg"], "selected_option": "run"},
    )
    record = ledger.upsert("item", DAY, True, patch={"note": "second"})
    assert record["note"] == "second"
    assert record["photo_refs"] == ["a.jpg"]
    assert record["selected_option"] == "run"


def test_patch_with_none_clears_field():
    ledger = CompletionLedger()
    ledger.upsert("item", DAY, True, patch={"note": "first"})
    record = ledger.upsert("item", DAY, True, patch={"note": None})
    assert record["note"] is None


def test_returned_records_are_copies():
    ledger = CompletionLedger()
    record = ledger.upsert("item", DAY, True)
    record["completed"] = False
    assert ledger.is_completed("item", DAY)


def test_completion_count_is_inclusive():
    ledger = CompletionLedger()
    for offset in range(5):
        ledger.upsert("item", DAY.subtract(days=offset), offset != 2)
    assert ledger.completion_count("item", DAY.subtract(days=4), DAY) == 4
    assert ledger.completion_count("item", DAY.subtract(days=1), DAY) == 2
    assert ledger.completion_count("other", DAY.subtract(days=4), DAY) == 0


def test_last_completed_on_or_before():
    ledger = CompletionLedger()
    ledger.upsert("item", DAY.subtract(days=5), True)
    ledger.upsert("item", DAY.subtract(days=2), False)
    ledger.upsert("item", DAY.add(days=1), True)
    assert ledger.last_completed_on_or_before("item", DAY) == DAY.subtract(days=5)
    assert ledger.last_completed_on_or_before("item", DAY.subtract(days=6)) is None


def test_records_for_is_sorted_by_day():
    ledger = CompletionLedger()
    ledger.upsert("item", DAY, True)
    ledger.upsert("item", DAY.subtract(days=3), True)
    assert [record["day"] for record in ledger.records_for("item")] == [
        DAY.subtract(days=3),
        DAY,
    ]


def test_remove_item_drops_all_records():
    ledger = CompletionLedger()
    ledger.upsert("item", DAY, True)
    ledger.upsert("other", DAY, True)
    ledger.remove_item("item")
    assert ledger.records_for("item") == []
    assert ledger.is_completed("other", DAY)


def test_unchanged_upsert_does_not_write(storage):
    ledger = CompletionLedger(storage)
    ledger.upsert("item", DAY, True)
    ledger.upsert("item", DAY, True)
    assert len(storage.load_completion_records("item")) == 1
    assert len(list(storage.completions.directory.iterdir())) == 1
