# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import pendulum
import typer

from goodday import state as app_state
from goodday.model.completion import CompletionPatch
from goodday.model.item import Frequency, Item, Kind, Priority
from goodday.service.habit import HabitTracker
from goodday.terminal.custom_typer import AliasedTyperGroup, report_errors
from goodday.terminal.parse import parse_day, resolve_item_id
from goodday.view import item as item_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _with_live_streak(
    tracker: HabitTracker, item: Item, day: Optional[pendulum.Date] = None
) -> Item:
    """Replace the cached streaks of an active item with ones computed for day."""
    if item["active"] and item["id"] is not None:
        item["current_streak"], item["best_streak"] = tracker.streak_for(
            item["id"], day
        )
    return item


DayOption = Annotated[
    Optional[pendulum.Date],
    typer.Option(
        "--day",
        "-dy",
        parser=parse_day,
        help="YYYY-MM-DD, today/t, yesterday/y or a day offset (default: today)",
    ),
]


# ─────────────────────────────────────────────────────────────
# Item Management
# ─────────────────────────────────────────────────────────────


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    kind: Annotated[
        str, typer.Option("--kind", "-k", help="positive, negative")
    ] = "positive",
    priority: Annotated[
        str, typer.Option("--priority", "-p", help="mandatory, optional")
    ] = "mandatory",
    frequency: Annotated[
        str,
        typer.Option("--frequency", "-f", help="once, daily, weekly, monthly"),
    ] = "daily",
    target: Annotated[
        int,
        typer.Option(
            "--target", "-n", help="Completions per period for weekly and monthly"
        ),
    ] = 1,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    success_criteria: Annotated[
        Optional[str],
        typer.Option("--criteria", "-c", help='e.g. "3L", "15 mins"'),
    ] = None,
    options: Annotated[
        Optional[list[str]],
        typer.Option("--option", "-o", help="Selectable option (repeatable)"),
    ] = None,
) -> None:
    """Create a new habit or task."""
    tracker = app_state.get_tracker()
    with report_errors():
        item = tracker.add_item(
            name,
            kind=cast(Kind, kind),
            priority=cast(Priority, priority),
            frequency=cast(Frequency, frequency),
            frequency_target=target,
            description=description,
            success_criteria=success_criteria,
            options=options,
        )
    item_report.single_item_view(tracker.today(), item, [])


@app.command("list, ls")
def list_items(
    include_archived: Annotated[
        bool, typer.Option("--all", "-a", help="Include archived items")
    ] = False,
    day: DayOption = None,
) -> None:
    """List items with their completion for a day."""
    tracker = app_state.get_tracker()
    day = day or tracker.today()
    items = [
        _with_live_streak(tracker, item, day)
        for item in tracker.items(include_archived=include_archived)
    ]
    completed_ids = {
        item["id"]
        for item in items
        if item["id"] is not None and tracker.ledger.is_completed(item["id"], day)
    }
    item_report.items_view(day, "items", items, completed_ids)


@app.command("show, s", no_args_is_help=True)
def show(item_ref: str) -> None:
    """Show an item and its recent completion records."""
    tracker = app_state.get_tracker()
    with report_errors():
        item_id = resolve_item_id(tracker, item_ref)
        item_report.single_item_view(
            tracker.today(),
            _with_live_streak(tracker, tracker.get_item(item_id)),
            tracker.records_for(item_id),
        )


@app.command("modify, m", no_args_is_help=True)
def modify(
    item_ref: str,
    name: Annotated[Optional[str], typer.Option("--name", "-nm")] = None,
    kind: Annotated[Optional[str], typer.Option("--kind", "-k")] = None,
    priority: Annotated[Optional[str], typer.Option("--priority", "-p")] = None,
    frequency: Annotated[Optional[str], typer.Option("--frequency", "-f")] = None,
    target: Annotated[Optional[int], typer.Option("--target", "-n")] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    success_criteria: Annotated[
        Optional[str], typer.Option("--criteria", "-c")
    ] = None,
    options: Annotated[
        Optional[list[str]],
        typer.Option("--option", "-o", help="Replaces all options (repeatable)"),
    ] = None,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
    remove_success_criteria: Annotated[
        bool, typer.Option("--remove-criteria", "-rc")
    ] = False,
    remove_options: Annotated[bool, typer.Option("--remove-options", "-ro")] = False,
) -> None:
    """Modify an existing item."""
    tracker = app_state.get_tracker()
    with report_errors():
        item_id = resolve_item_id(tracker, item_ref)
        item = tracker.update_item(
            item_id,
            name=name,
            description=description,
            kind=cast(Optional[Kind], kind),
            priority=cast(Optional[Priority], priority),
            frequency=cast(Optional[Frequency], frequency),
            frequency_target=target,
            success_criteria=success_criteria,
            options=options,
            remove_description=remove_description,
            remove_success_criteria=remove_success_criteria,
            remove_options=remove_options,
        )
    item_report.single_item_view(tracker.today(), item, [])


@app.command("archive, ar", no_args_is_help=True)
def archive(item_ref: str) -> None:
    """Archive an item; its history is kept."""
    tracker = app_state.get_tracker()
    with report_errors():
        item = tracker.archive_item(resolve_item_id(tracker, item_ref))
    item_report.single_item_view(tracker.today(), item, [])


@app.command("unarchive, ua", no_args_is_help=True)
def unarchive(item_ref: str) -> None:
    """Restore an archived item."""
    tracker = app_state.get_tracker()
    with report_errors():
        item = tracker.unarchive_item(resolve_item_id(tracker, item_ref))
    item_report.single_item_view(tracker.today(), item, [])


@app.command("delete, del", no_args_is_help=True)
def delete(
    item_ref: str,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """Delete an item together with its completion history."""
    tracker = app_state.get_tracker()
    with report_errors():
        item = tracker.get_item(resolve_item_id(tracker, item_ref))
        if not yes:
            typer.confirm(
                f"Delete '{item['name']}' and all of its history?", abort=True
            )
        tracker.delete_item(item["id"] or "")
    typer.echo(f"Deleted {item['name']}")


# ─────────────────────────────────────────────────────────────
# Completion
# ─────────────────────────────────────────────────────────────


@app.command("done, x", no_args_is_help=True)
def done(item_ref: str, day: DayOption = None) -> None:
    """Toggle the completion of an item for a day."""
    tracker = app_state.get_tracker()
    with report_errors():
        item_id = resolve_item_id(tracker, item_ref)
        record = tracker.toggle_completion(item_id, day)
        item_report.completion_view(tracker.get_item(item_id), record)


@app.command("set, st", no_args_is_help=True)
def set_completion(
    item_ref: str,
    day: DayOption = None,
    value: Annotated[
        Optional[float],
        typer.Option("--value", "-v", help="Measured value, e.g. litres or minutes"),
    ] = None,
    not_done: Annotated[
        bool, typer.Option("--not-done", "-nd", help="Mark as not completed")
    ] = False,
) -> None:
    """Set the completion of an item for a day."""
    tracker = app_state.get_tracker()
    with report_errors():
        item_id = resolve_item_id(tracker, item_ref)
        record = tracker.set_completion(item_id, day, not not_done, value)
        item_report.completion_view(tracker.get_item(item_id), record)


@app.command("note, n", no_args_is_help=True)
def note(
    item_ref: str,
    day: DayOption = None,
    text: Annotated[Optional[str], typer.Option("--text", "-t")] = None,
    photos: Annotated[
        Optional[list[str]],
        typer.Option("--photo", "-ph", help="Photo reference (repeatable)"),
    ] = None,
    option: Annotated[Optional[str], typer.Option("--option", "-o")] = None,
    remove_text: Annotated[bool, typer.Option("--remove-text", "-rt")] = False,
    remove_photos: Annotated[bool, typer.Option("--remove-photos", "-rp")] = False,
) -> None:
    """Attach a note, photos or a selected option to a day's record."""
    patch: CompletionPatch = {}
    if text is not None:
        patch["note"] = text
    if remove_text:
        patch["note"] = None
    if photos is not None:
        patch["photo_refs"] = photos
    if remove_photos:
        patch["photo_refs"] = []
    if option is not None:
        patch["selected_option"] = option

    tracker = app_state.get_tracker()
    with report_errors():
        item_id = resolve_item_id(tracker, item_ref)
        record = tracker.log_details(item_id, day, patch)
        item_report.completion_view(tracker.get_item(item_id), record)


# ─────────────────────────────────────────────────────────────
# Statistics
# ─────────────────────────────────────────────────────────────


@app.command("streak, sk", no_args_is_help=True)
def streak(item_ref: str, day: DayOption = None) -> None:
    """Show the current and best streak of an item."""
    tracker = app_state.get_tracker()
    with report_errors():
        item_id = resolve_item_id(tracker, item_ref)
        current, best = tracker.streak_for(item_id, day)
    typer.echo(f"current: {current}, best: {best}")


@app.command("stats, sts", no_args_is_help=True)
def stats(
    item_ref: str,
    window: Annotated[
        Optional[int], typer.Option("--window", "-w", help="Window in days")
    ] = None,
    day: DayOption = None,
) -> None:
    """Show streaks and the completion rate of an item."""
    tracker = app_state.get_tracker()
    day = day or tracker.today()
    window_days = window or tracker.configuration["default_window_days"]
    with report_errors():
        item_id = resolve_item_id(tracker, item_ref)
        current, best = tracker.streak_for(item_id, day)
        rate = tracker.completion_rate(item_id, window_days, day)
        item_report.item_stats_view(
            day,
            tracker.get_item(item_id),
            current,
            best,
            rate,
            window_days,
            tracker.ledger.last_completed_on_or_before(item_id, day),
        )
