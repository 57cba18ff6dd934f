"""Item commands: add, update, delete, adjust."""

from datetime import datetime
from typing import Optional

import typer

from inventory_manager.config import DEFAULT_CATEGORY

from .shared import logger, open_service, print_result, to_epoch


def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Item name"),
    quantity: int = typer.Argument(..., help="Units in stock"),
    cost: float = typer.Argument(..., help="Unit cost"),
    category: str = typer.Option(DEFAULT_CATEGORY, "--category", "-c"),
    price: Optional[float] = typer.Option(None, "--price", "-p", help="Unit selling price"),
    supplier: Optional[str] = typer.Option(None, "--supplier", "-s"),
    location: Optional[str] = typer.Option(None, "--location", "-l"),
    minimum_stock: Optional[int] = typer.Option(None, "--min-stock", "-m", help="Low-stock threshold (default 5)"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    expires: Optional[datetime] = typer.Option(None, "--expires", formats=["%Y-%m-%d"]),
) -> None:
    """Add an item to the inventory."""
    log = logger.bind(command="add", name=name)
    with open_service(ctx) as service:
        result = service.add_item(
            name,
            category,
            quantity,
            cost,
            selling_price=price,
            supplier=supplier,
            location=location,
            minimum_stock=minimum_stock,
            description=description,
            expiry_date=to_epoch(expires),
        )
    print_result(result)
    log.info("add.complete", ok=result.ok, item_id=result.item_id)
    if not result.ok:
        raise typer.Exit(1)


def update(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Item ID"),
    name: Optional[str] = typer.Option(None, "--name", "-n"),
    quantity: Optional[int] = typer.Option(None, "--quantity", "-q"),
    cost: Optional[float] = typer.Option(None, "--cost"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    price: Optional[float] = typer.Option(None, "--price", "-p"),
    supplier: Optional[str] = typer.Option(None, "--supplier", "-s"),
    location: Optional[str] = typer.Option(None, "--location", "-l"),
    minimum_stock: Optional[int] = typer.Option(None, "--min-stock", "-m"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    expires: Optional[datetime] = typer.Option(None, "--expires", formats=["%Y-%m-%d"]),
) -> None:
    """Change some fields of an item; omitted fields stay as they are."""
    with open_service(ctx) as service:
        result = service.update_item(
            item_id,
            name=name,
            quantity=quantity,
            cost=cost,
            category=category,
            selling_price=price,
            supplier=supplier,
            location=location,
            minimum_stock=minimum_stock,
            description=description,
            expiry_date=to_epoch(expires),
        )
    print_result(result)
    logger.info("update.complete", item_id=item_id, ok=result.ok)
    if not result.ok:
        raise typer.Exit(1)


def delete(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Item ID"),
) -> None:
    """Delete an item."""
    with open_service(ctx) as service:
        result = service.delete_item(item_id)
    print_result(result)
    if not result.ok:
        raise typer.Exit(1)


def adjust(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Item ID"),
    delta: int = typer.Argument(..., help="Units to add (negative to remove)"),
) -> None:
    """Add or remove stock units."""
    with open_service(ctx) as service:
        result = service.adjust_quantity(item_id, delta)
    print_result(result)
    if not result.ok:
        raise typer.Exit(1)
