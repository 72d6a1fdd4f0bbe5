# SPDX-License-Identifier: MIT

import pendulum

from goodday.service.good_day import is_good_day_live, mandatory_progress
from goodday.service.ledger import CompletionLedger
from goodday.template.group import get_group_template
from goodday.template.item import get_item_template

DAY = pendulum.date(2024, 3, 13)


def make_item(item_id, **fields):
    item = get_item_template()
    item["id"] = item_id
    item["name"] = item_id
    item["created"] = pendulum.date(2024, 1, 1)
    item.update(fields)
    return item


def make_group(member_ids, require_count, priority="mandatory"):
    group = get_group_template()
    group["id"] = "group"
    group["name"] = "group"
    group["priority"] = priority
    group["require_count"] = require_count
    group["member_ids"] = member_ids
    return group


def test_nothing_mandatory_is_never_a_good_day():
    items = [
        make_item("optional", priority="optional"),
        make_item("smoking", kind="negative"),
    ]
    ledger = CompletionLedger()
    ledger.upsert("optional", DAY, True)
    assert not is_good_day_live(DAY, items, [], ledger)
    assert not is_good_day_live(DAY, [], [], ledger)


def test_all_mandatory_items_done():
    items = [make_item("teeth"), make_item("water")]
    ledger = CompletionLedger()
    ledger.upsert("teeth", DAY, True)
    assert not is_good_day_live(DAY, items, [], ledger)
    ledger.upsert("water", DAY, True)
    assert is_good_day_live(DAY, items, [], ledger)


def test_optional_items_are_ignored():
    items = [make_item("teeth"), make_item("read", priority="optional")]
    ledger = CompletionLedger()
    ledger.upsert("teeth", DAY, True)
    assert is_good_day_live(DAY, items, [], ledger)


def test_negative_item_done_spoils_the_day():
    items = [make_item("teeth"), make_item("smoking", kind="negative")]
    ledger = CompletionLedger()
    ledger.upsert("teeth", DAY, True)
    assert is_good_day_live(DAY, items, [], ledger)
    ledger.upsert("smoking", DAY, True)
    assert not is_good_day_live(DAY, items, [], ledger)


def test_mandatory_group_replaces_its_members():
    items = [make_item("draw"), make_item("write"), make_item("music")]
    groups = [make_group(["draw", "write", "music"], 1)]
    ledger = CompletionLedger()
    assert not is_good_day_live(DAY, items, groups, ledger)
    ledger.upsert("music", DAY, True)
    assert is_good_day_live(DAY, items, groups, ledger)


def test_optional_group_members_are_not_required():
    items = [make_item("teeth"), make_item("draw"), make_item("write")]
    groups = [make_group(["draw", "write"], 1, priority="optional")]
    ledger = CompletionLedger()
    ledger.upsert("teeth", DAY, True)
    assert is_good_day_live(DAY, items, groups, ledger)


def test_items_created_later_do_not_count():
    items = [make_item("teeth"), make_item("new", created=DAY.add(days=1))]
    ledger = CompletionLedger()
    ledger.upsert("teeth", DAY, True)
    assert is_good_day_live(DAY, items, [], ledger)


def test_archived_items_do_not_count():
    items = [make_item("teeth"), make_item("old", active=False)]
    ledger = CompletionLedger()
    ledger.upsert("teeth", DAY, True)
    assert is_good_day_live(DAY, items, [], ledger)


def test_mandatory_progress():
    items = [
        make_item("teeth"),
        make_item("water"),
        make_item("draw"),
        make_item("write"),
    ]
    groups = [make_group(["draw", "write"], 1)]
    ledger = CompletionLedger()
    ledger.upsert("teeth", DAY, True)
    ledger.upsert("write", DAY, True)
    assert mandatory_progress(DAY, items, groups, ledger) == (2, 3)
