# SPDX-License-Identifier: MIT

import pendulum

from goodday.service.group import (
    group_completed_count,
    group_status,
    is_group_satisfied,
)
from goodday.service.ledger import CompletionLedger
from goodday.template.group import get_group_template
from goodday.template.item import get_item_template

DAY = pendulum.date(2024, 3, 13)


def make_items(count):
    items = []
    for index in range(count):
        item = get_item_template()
        item["id"] = f"item-{index}"
        item["name"] = f"Item {index}"
        items.append(item)
    return items


def make_group(items, require_count):
    group = get_group_template()
    group["id"] = "group"
    group["name"] = "Creative"
    group["require_count"] = require_count
    group["member_ids"] = [item["id"] for item in items]
    return group


def test_two_of_three_is_satisfied():
    items = make_items(3)
    group = make_group(items, 2)
    ledger = CompletionLedger()
    ledger.upsert("item-0", DAY, True)
    ledger.upsert("item-2", DAY, True)
    assert is_group_satisfied(group, DAY, items, ledger)


def test_one_of_three_is_not_satisfied():
    items = make_items(3)
    group = make_group(items, 2)
    ledger = CompletionLedger()
    ledger.upsert("item-1", DAY, True)
    assert not is_group_satisfied(group, DAY, items, ledger)


def test_archived_members_do_not_count():
    items = make_items(3)
    items[0]["active"] = False
    group = make_group(items, 2)
    ledger = CompletionLedger()
    ledger.upsert("item-0", DAY, True)
    ledger.upsert("item-1", DAY, True)
    assert group_completed_count(group, DAY, items, ledger) == 1
    assert not is_group_satisfied(group, DAY, items, ledger)


def test_group_status_lists_members():
    items = make_items(3)
    group = make_group(items, 2)
    ledger = CompletionLedger()
    ledger.upsert("item-1", DAY, True)
    status = group_status(group, DAY, items, ledger)
    assert status["completed"] == 1
    assert status["required"] == 2
    assert status["satisfied"] is False
    assert [member["completed"] for member in status["members"]] == [
        False,
        True,
        False,
    ]
