"""Interactive mode: numbered menu over one open inventory until the user exits."""

from typing import Callable

import typer

from inventory_manager.service import InventoryService
from inventory_manager.utils.logger import bind_context, clear_context

from .shared import console, logger, open_service, print_items, print_report, print_result

MENU = (
    ("1", "Add item"),
    ("2", "Display items"),
    ("3", "Update item"),
    ("4", "Delete item"),
    ("5", "Search"),
    ("6", "Adjust quantity"),
    ("7", "Low-stock items"),
    ("8", "Report"),
    ("9", "Exit"),
)


def _ask(prompt: str, cast: Callable = str, optional: bool = False):
    """Prompt until the answer converts with ``cast``; empty returns None when optional."""
    while True:
        raw = console.input(f"{prompt}: ").strip()
        if not raw and optional:
            return None
        try:
            return cast(raw)
        except ValueError:
            console.print(f"[red]Invalid value: {raw!r}[/red]")


def _add(service: InventoryService) -> None:
    name = _ask("Name")
    category = _ask("Category (Enter for General)", optional=True) or "General"
    quantity = _ask("Quantity", int)
    cost = _ask("Cost", float)
    price = _ask("Selling price (optional)", float, optional=True)
    supplier = _ask("Supplier (optional)", optional=True)
    location = _ask("Location (optional)", optional=True)
    minimum_stock = _ask("Minimum stock (Enter for 5)", int, optional=True)
    print_result(
        service.add_item(
            name,
            category,
            quantity,
            cost,
            selling_price=price,
            supplier=supplier,
            location=location,
            minimum_stock=minimum_stock,
        )
    )


def _update(service: InventoryService) -> None:
    item_id = _ask("Item ID", int)
    console.print("[dim]Press Enter to keep a value.[/dim]")
    name = _ask("New name", optional=True)
    quantity = _ask("New quantity", int, optional=True)
    cost = _ask("New cost", float, optional=True)
    print_result(service.update_item(item_id, name=name, quantity=quantity, cost=cost))


def _delete(service: InventoryService) -> None:
    print_result(service.delete_item(_ask("Item ID", int)))


def _search(service: InventoryService) -> None:
    term = _ask("Search for")
    print_items(service.search(term), title=f"Search: {term}")


def _adjust(service: InventoryService) -> None:
    item_id = _ask("Item ID", int)
    delta = _ask("Change (e.g. 5 or -3)", int)
    print_result(service.adjust_quantity(item_id, delta))


_ACTIONS: dict[str, Callable[[InventoryService], None]] = {
    "1": _add,
    "2": lambda service: print_items(service.list_items()),
    "3": _update,
    "4": _delete,
    "5": _search,
    "6": _adjust,
    "7": lambda service: print_items(service.low_stock_items(), title="Low stock"),
    "8": lambda service: print_report(service.analytics()),
}


def menu(ctx: typer.Context) -> None:
    """Interactive menu: add, display, update and delete items until Exit."""
    log = logger.bind(command="menu")
    log.info("menu.start")
    bind_context(command="menu")
    try:
        with open_service(ctx) as service:
            while True:
                console.print("\n[bold]Inventory Management System[/bold]")
                for key, label in MENU:
                    console.print(f"  {key}. {label}")
                choice = console.input("Choose an option: ").strip()
                if choice == "9":
                    console.print("Exiting program.")
                    break
                action = _ACTIONS.get(choice)
                if action is None:
                    console.print("[red]Invalid option. Please try again.[/red]")
                    log.warning("menu.invalid_option", choice=choice)
                    continue
                action(service)
    except (EOFError, KeyboardInterrupt):
        console.print("\nExiting program.")
        log.info("menu.interrupted")
    finally:
        clear_context()
    log.info("menu.exit")
