# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from goodday import configuration
from goodday import state as app_state
from goodday.terminal.custom_typer import AliasedTyperGroup, report_errors

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, v")
def show() -> None:
    """Display current configuration settings."""
    config = app_state.get_configuration_repo().get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.resolve_data_path(config)))
    table.add_row("max_lookback_days", str(config["max_lookback_days"]))
    table.add_row("week_start", config["week_start"])
    table.add_row("default_window_days", str(config["default_window_days"]))
    table.add_row(
        "lock_on_startup",
        "✓ Enabled" if config["lock_on_startup"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])

    console.print(table)

    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")
    console.print(f"Config file: {app_state.get_configuration_repo().path}")


@app.command("set, s", no_args_is_help=True)
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory for the data files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path", help="Use the default user data directory"
        ),
    ] = False,
    max_lookback_days: Annotated[
        Optional[int],
        typer.Option(
            "--max-lookback-days", help="How far back streaks and locks look"
        ),
    ] = None,
    week_start: Annotated[
        Optional[str],
        typer.Option("--week-start", help="First day of a week, e.g. monday"),
    ] = None,
    default_window_days: Annotated[
        Optional[int],
        typer.Option("--default-window-days", help="Default statistics window"),
    ] = None,
    lock_on_startup: Annotated[
        Optional[bool],
        typer.Option(
            "--lock-on-startup/--no-lock-on-startup",
            help="Lock finished days every time the CLI starts",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR, CRITICAL"),
    ] = None,
) -> None:
    """Change configuration settings."""
    repository = app_state.get_configuration_repo()
    with report_errors():
        repository.update_config(
            data_path=data_path,
            remove_data_path=remove_data_path,
            max_lookback_days=max_lookback_days,
            week_start=week_start.lower() if week_start is not None else None,
            default_window_days=default_window_days,
            lock_on_startup=lock_on_startup,
            log_level=log_level,
        )
        repository.flush()
    show()
