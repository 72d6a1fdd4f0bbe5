# SPDX-License-Identifier: MIT

import sys

from goodday.errors import GoodDayError
from goodday.initialize import initialize
from goodday.terminal.app import run
from goodday.terminal.custom_typer import error_console


def main() -> None:
    try:
        initialize()
    except GoodDayError as e:
        error_console.print(f"[red]{e}[/red]")
        sys.exit(1)
    run()


if __name__ == "__main__":
    main()
