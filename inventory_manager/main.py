"""Entry point: delegates to the CLI app; exit code 1 on an unrecoverable startup error."""

import sys

from rich.traceback import install

from inventory_manager.cli import app
from inventory_manager.cli.shared import console, logger
from inventory_manager.errors import InventoryError


def run() -> None:
    install(show_locals=False, max_frames=5, word_wrap=True)
    try:
        app()
    except InventoryError as e:
        console.print(f"[red]{e}[/red]")
        logger.error("main.startup_failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    run()
