# SPDX-License-Identifier: MIT

import re
from contextlib import contextmanager
from typing import Iterator, Optional

import click
import typer
import typer.core
from rich.console import Console

from goodday.errors import GoodDayError

error_console = Console(stderr=True)


@contextmanager
def report_errors() -> Iterator[None]:
    """Turn core errors into a red message and exit code 1."""
    try:
        yield
    except GoodDayError as e:
        error_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


class AliasedTyperGroup(typer.core.TyperGroup):
    """Custom TyperGroup that supports comma-separated command aliases"""

    _CMD_SPLIT_P = re.compile(r" ?, ?")

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        """Override to resolve aliases to the full command name"""
        cmd_name = self._group_cmd_name(cmd_name)
        return super().get_command(ctx, cmd_name)

    def _group_cmd_name(self, default_name: str) -> str:
        """Find the full command name if default_name is an alias"""
        for cmd in self.commands.values():
            name = cmd.name
            if name and default_name in self._CMD_SPLIT_P.split(name):
                return name
        return default_name


class OrderedAliasedTyperGroup(AliasedTyperGroup):
    """Lists top-level commands in a fixed order instead of alphabetically"""

    desired_order = [
        "item, i",
        "group, g",
        "day, d",
        "reflect, r",
        "config, c",
    ]

    def list_commands(self, ctx: click.Context) -> list[str]:
        result = [name for name in self.desired_order if name in self.commands]
        result.extend(name for name in self.commands if name not in result)
        return result
