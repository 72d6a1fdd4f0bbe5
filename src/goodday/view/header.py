# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import print
from rich.padding import Padding

from goodday.state import get_show_header
from goodday.time import day_to_display_str


def header(day: pendulum.Date, sub_header: Optional[str] = None) -> None:
    """Print the application header with the day a report is about.

    Args:
        day: The day the report is about
        sub_header: Optional sub-header text to display
    """
    if not get_show_header():
        return

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"

    print(Padding("[dark_orange]goodday[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(additional, (0, 1)))
    print(Padding(f"[plum1]{day_to_display_str(day)}[/plum1]", (0, 1)))
