# SPDX-License-Identifier: MIT

from typing import Optional


def format_check(value: bool) -> str:
    return "[green]✓[/green]" if value else "[red]✗[/red]"


def format_percent(value: float) -> str:
    return f"{value * 100:.0f}%"


def format_optional(value: Optional[object]) -> str:
    return "" if value is None else str(value)


def short_id(entity_id: Optional[str]) -> str:
    return "" if entity_id is None else entity_id[:8]
