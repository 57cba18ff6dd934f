"""Shared CLI helpers: console, logger, store lifecycle, table rendering."""

from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator

import typer
from rich.console import Console
from rich.table import Table

from inventory_manager.config import EXPIRY_WARNING_DAYS, INVENTORY_FILE
from inventory_manager.models import InventoryItem, InventoryReport, OperationResult
from inventory_manager.service import InventoryService
from inventory_manager.store import InventoryStore
from inventory_manager.utils.logger import get_logger

console = Console()
logger = get_logger("inventory_manager.cli")

_STATUS_STYLES = {"expired": "red", "expiring": "yellow", "low": "magenta", "ok": "green"}


def data_file(ctx: typer.Context) -> Path:
    """Backing file chosen with --file, else INVENTORY_FILE."""
    if ctx.obj and ctx.obj.get("file"):
        return Path(ctx.obj["file"])
    return INVENTORY_FILE


@contextmanager
def open_service(ctx: typer.Context) -> Iterator[InventoryService]:
    """Load the store, yield a service over it, and save on the way out."""
    path = data_file(ctx)
    store = InventoryStore(path)
    try:
        yield InventoryService(store)
    finally:
        if not store.close():
            console.print(f"[red]Could not save inventory to {path}.[/red]")


def format_date(epoch: int) -> str:
    if not epoch:
        return "-"
    return datetime.fromtimestamp(epoch).strftime("%Y-%m-%d")


def to_epoch(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(value.timestamp())


def print_result(result: OperationResult) -> None:
    style = "green" if result.ok else "red"
    console.print(f"[{style}]{result.message}[/{style}]")
    for error in result.errors:
        console.print(f"  [yellow]{error}[/yellow]")


def print_items(items: list[InventoryItem], title: str = "Inventory") -> None:
    if not items:
        console.print("[dim]No items in the inventory.[/dim]")
        return
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Category", style="green")
    table.add_column("Qty", justify="right")
    table.add_column("Min", justify="right", style="dim")
    table.add_column("Cost", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Supplier", style="yellow")
    table.add_column("Location", style="dim")
    table.add_column("Barcode", style="dim")
    table.add_column("Expires", justify="center")
    table.add_column("Status", justify="center")
    for item in items:
        status = item.status(EXPIRY_WARNING_DAYS)
        style = _STATUS_STYLES[status]
        table.add_row(
            str(item.id),
            item.name,
            item.category,
            str(item.quantity),
            str(item.minimum_stock),
            f"{item.cost:.2f}",
            f"{item.selling_price:.2f}",
            f"{item.total_value:.2f}",
            item.supplier,
            item.location,
            item.barcode,
            format_date(item.expiry_date),
            f"[{style}]{status}[/{style}]",
        )
    console.print(table)


def print_report(report: InventoryReport) -> None:
    console.print("\n[bold]Inventory Report[/bold]")
    console.print(f"  Items: {report.total_items} ({report.total_units} units)")
    console.print(f"  Stock value: {report.total_value:.2f}")
    console.print(f"  Potential revenue: {report.potential_revenue:.2f}")
    console.print(f"  Potential profit: {report.total_profit:.2f}")
    console.print(
        f"  Low stock: {report.low_stock_count}  "
        f"Expiring in {report.expiry_window_days} days: {report.expiring_soon_count}  "
        f"Expired: {report.expired_count}"
    )
    if report.categories:
        table = Table(title="By category")
        table.add_column("Category", style="green")
        table.add_column("Items", justify="right")
        table.add_column("Value", justify="right")
        for summary in report.categories:
            table.add_row(summary.category, str(summary.item_count), f"{summary.total_value:.2f}")
        console.print(table)
    if report.top_items:
        table = Table(title="Top items by value")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Name")
        table.add_column("Qty", justify="right")
        table.add_column("Value", justify="right")
        for top in report.top_items:
            table.add_row(str(top.id), top.name, str(top.quantity), f"{top.total_value:.2f}")
        console.print(table)
