"""Read-only commands: listings, search and the analytics report."""

from typing import Optional

import typer

from .shared import console, open_service, print_items, print_report


def list_items(ctx: typer.Context) -> None:
    """Show every item in store order."""
    with open_service(ctx) as service:
        items = service.list_items()
    print_items(items)


def search(
    ctx: typer.Context,
    term: str = typer.Argument(..., help="Text to look for in name, category, supplier or barcode"),
) -> None:
    """Search items."""
    with open_service(ctx) as service:
        items = service.search(term)
    print_items(items, title=f"Search: {term}")


def category(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Category (case-insensitive)"),
) -> None:
    """List items in one category."""
    with open_service(ctx) as service:
        items = service.filter_by_category(name)
    print_items(items, title=f"Category: {name}")


def low_stock(ctx: typer.Context) -> None:
    """List items at or below their minimum stock."""
    with open_service(ctx) as service:
        items = service.low_stock_items()
    if not items:
        console.print("[green]No low-stock items.[/green]")
        return
    print_items(items, title="Low stock")


def expiring(
    ctx: typer.Context,
    days: Optional[int] = typer.Option(None, "--days", help="Look-ahead window in days"),
) -> None:
    """List expired items and items expiring soon."""
    with open_service(ctx) as service:
        items = service.expiring_items(days)
    if not items:
        console.print("[green]Nothing expired or expiring.[/green]")
        return
    print_items(items, title="Expired / expiring")


def report(ctx: typer.Context) -> None:
    """Print totals, the per-category breakdown and the most valuable items."""
    with open_service(ctx) as service:
        summary = service.analytics()
    print_report(summary)
