"""CLI commands: one module per group (items, reports, transfer, interactive menu)."""

from pathlib import Path
from typing import Optional

import typer
from typer import Typer

from inventory_manager.cli import interactive_mode, item_commands, report_commands, transfer_commands

app = Typer(help="Inventory Management System")


@app.callback()
def main(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Inventory data file (defaults to INVENTORY_FILE)",
    ),
) -> None:
    """Track stock items in a CSV-backed inventory."""
    ctx.obj = {"file": file}


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(item_commands.add)
    app.command()(item_commands.update)
    app.command()(item_commands.delete)
    app.command()(item_commands.adjust)
    app.command(name="list")(report_commands.list_items)
    app.command()(report_commands.search)
    app.command()(report_commands.category)
    app.command(name="low-stock")(report_commands.low_stock)
    app.command()(report_commands.expiring)
    app.command()(report_commands.report)
    app.command()(transfer_commands.export)
    app.command(name="import")(transfer_commands.import_items)
    app.command()(interactive_mode.menu)


register_commands()
