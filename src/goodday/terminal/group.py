# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import pendulum
import typer

from goodday import state as app_state
from goodday.model.item import Priority
from goodday.terminal.custom_typer import AliasedTyperGroup, report_errors
from goodday.terminal.item import DayOption
from goodday.terminal.parse import resolve_group_id, resolve_item_id
from goodday.view import group as group_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _show_group(group_id: str, day: Optional[pendulum.Date] = None) -> None:
    tracker = app_state.get_tracker()
    day = day or tracker.today()
    group_report.group_status_view(
        day, tracker.get_group(group_id), tracker.group_status(group_id, day)
    )


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    members: Annotated[
        Optional[list[str]],
        typer.Option("--member", "-m", help="Item id or name (repeatable)"),
    ] = None,
    require: Annotated[
        int,
        typer.Option(
            "--require", "-r", help="Members to complete for the group to count"
        ),
    ] = 1,
    priority: Annotated[
        str, typer.Option("--priority", "-p", help="mandatory, optional")
    ] = "mandatory",
) -> None:
    """Create a group of interchangeable items."""
    tracker = app_state.get_tracker()
    with report_errors():
        member_ids = [resolve_item_id(tracker, member) for member in members or []]
        group = tracker.add_group(
            name,
            priority=cast(Priority, priority),
            require_count=require,
            member_ids=member_ids,
        )
        _show_group(group["id"] or "")


@app.command("list, ls")
def list_groups(day: DayOption = None) -> None:
    """List groups with their progress for a day."""
    tracker = app_state.get_tracker()
    day = day or tracker.today()
    groups = tracker.groups()
    statuses = {
        group["id"]: tracker.group_status(group["id"], day)
        for group in groups
        if group["id"] is not None
    }
    group_report.groups_view(day, groups, statuses)


@app.command("status, s", no_args_is_help=True)
def status(group_ref: str, day: DayOption = None) -> None:
    """Show which members of a group are done for a day."""
    tracker = app_state.get_tracker()
    with report_errors():
        _show_group(resolve_group_id(tracker, group_ref), day)


@app.command("add-member, am", no_args_is_help=True)
def add_member(group_ref: str, item_ref: str) -> None:
    """Add an item to a group."""
    tracker = app_state.get_tracker()
    with report_errors():
        group_id = resolve_group_id(tracker, group_ref)
        tracker.add_item_to_group(resolve_item_id(tracker, item_ref), group_id)
        _show_group(group_id)


@app.command("remove-member, rm", no_args_is_help=True)
def remove_member(group_ref: str, item_ref: str) -> None:
    """Remove an item from a group."""
    tracker = app_state.get_tracker()
    with report_errors():
        group_id = resolve_group_id(tracker, group_ref)
        tracker.remove_item_from_group(resolve_item_id(tracker, item_ref), group_id)
        _show_group(group_id)


@app.command("modify, m", no_args_is_help=True)
def modify(
    group_ref: str,
    name: Annotated[Optional[str], typer.Option("--name", "-nm")] = None,
    require: Annotated[Optional[int], typer.Option("--require", "-r")] = None,
    priority: Annotated[Optional[str], typer.Option("--priority", "-p")] = None,
) -> None:
    """Modify the name, priority or require count of a group."""
    tracker = app_state.get_tracker()
    with report_errors():
        group_id = resolve_group_id(tracker, group_ref)
        tracker.update_group(
            group_id,
            name=name,
            priority=cast(Optional[Priority], priority),
            require_count=require,
        )
        _show_group(group_id)


@app.command("delete, del", no_args_is_help=True)
def delete(group_ref: str) -> None:
    """Delete a group; its members become standalone items."""
    tracker = app_state.get_tracker()
    with report_errors():
        group = tracker.get_group(resolve_group_id(tracker, group_ref))
        tracker.delete_group(group["id"] or "")
    typer.echo(f"Deleted group {group['name']}")
