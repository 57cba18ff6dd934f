"""Operations the CLI calls: store mutations returned as success/failure values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from inventory_manager.config import DEFAULT_CATEGORY, DEFAULT_MINIMUM_STOCK
from inventory_manager.errors import StorageError, ValidationError
from inventory_manager.models.item import InventoryItem
from inventory_manager.models.reports import InventoryReport, OperationResult
from inventory_manager.store import InventoryStore
from inventory_manager.utils.logger import get_logger

logger = get_logger("inventory_manager.service")


def _unsaved_note(store: InventoryStore) -> list[str]:
    if store.dirty:
        return [f"changes could not be saved to {store.path}"]
    return []


class InventoryService:
    """Thin facade over an InventoryStore for interactive and command-line use."""

    def __init__(self, store: InventoryStore):
        self.store = store

    def add_item(
        self,
        name: str,
        category: str,
        quantity: int,
        cost: float,
        selling_price: float | None = None,
        supplier: str | None = None,
        location: str | None = None,
        minimum_stock: int | None = None,
        description: str | None = None,
        expiry_date: int | None = None,
    ) -> OperationResult:
        """Add an item. Omitted optional fields (None) take their defaults; 0 is a real value."""
        try:
            item_id = self.store.add(
                name=name,
                category=category,
                quantity=quantity,
                cost=cost,
                selling_price=0.0 if selling_price is None else selling_price,
                supplier=supplier or "",
                location=location or "",
                minimum_stock=DEFAULT_MINIMUM_STOCK if minimum_stock is None else minimum_stock,
                description=description or "",
                expiry_date=0 if expiry_date is None else expiry_date,
            )
        except ValidationError as e:
            logger.warning("service.add_rejected", name=name, field=e.field, error=str(e))
            return OperationResult(ok=False, message=f"Item not added: {e}", errors=[str(e)])
        return OperationResult(
            ok=True,
            message=f"Item added with ID {item_id}.",
            item_id=item_id,
            errors=_unsaved_note(self.store),
        )

    def quick_add(self, name: str, quantity: int, cost: float) -> OperationResult:
        """Shorthand add into the default category."""
        return self.add_item(name, DEFAULT_CATEGORY, quantity, cost)

    def update_item(
        self,
        item_id: int,
        name: str | None = None,
        quantity: int | None = None,
        cost: float | None = None,
        **changes: Any,
    ) -> OperationResult:
        report = self.store.update_fields(item_id, name=name, quantity=quantity, cost=cost, **changes)
        if not report.found:
            return OperationResult(ok=False, message=f"Item {item_id} not found.", item_id=item_id)
        errors = [f"{field}: rejected ({reason})" for field, reason in report.rejected.items()]
        if not report.applied:
            message = "Nothing updated." if not errors else "No changes applied."
            return OperationResult(ok=not errors, message=message, item_id=item_id, errors=errors)
        return OperationResult(
            ok=True,
            message=f"Item {item_id} updated: {', '.join(report.applied)}.",
            item_id=item_id,
            errors=errors + _unsaved_note(self.store),
        )

    def delete_item(self, item_id: int) -> OperationResult:
        if not self.store.delete(item_id):
            return OperationResult(ok=False, message=f"Item {item_id} not found.", item_id=item_id)
        return OperationResult(
            ok=True,
            message=f"Item {item_id} deleted.",
            item_id=item_id,
            errors=_unsaved_note(self.store),
        )

    def adjust_quantity(self, item_id: int, delta: int) -> OperationResult:
        try:
            found = self.store.adjust_quantity(item_id, delta)
        except ValidationError as e:
            return OperationResult(ok=False, message=f"Quantity not changed: {e}", item_id=item_id, errors=[str(e)])
        if not found:
            return OperationResult(ok=False, message=f"Item {item_id} not found.", item_id=item_id)
        item = self.store.get(item_id)
        return OperationResult(
            ok=True,
            message=f"Item {item_id} quantity is now {item.quantity}.",
            item_id=item_id,
            errors=_unsaved_note(self.store),
        )

    # Queries pass straight through

    def list_items(self) -> list[InventoryItem]:
        return self.store.all_items()

    def search(self, term: str) -> list[InventoryItem]:
        return self.store.search(term)

    def filter_by_category(self, category: str) -> list[InventoryItem]:
        return self.store.filter_by_category(category)

    def low_stock_items(self) -> list[InventoryItem]:
        return self.store.low_stock_items()

    def expiring_items(self, days: int | None = None) -> list[InventoryItem]:
        return self.store.expired_items() + self.store.expiring_soon_items(days)

    def analytics(self) -> InventoryReport:
        return self.store.analytics()

    def export_to(self, path: str | Path) -> OperationResult:
        if not self.store.export_to(path):
            return OperationResult(ok=False, message=f"Could not export to {path}.")
        return OperationResult(ok=True, message=f"Exported {len(self.store)} items to {path}.")

    def import_from(self, path: str | Path, clear_existing: bool = False) -> OperationResult:
        try:
            result = self.store.import_from(path, clear_existing=clear_existing)
        except StorageError as e:
            return OperationResult(ok=False, message=f"Could not import from {path}.", errors=[str(e)])
        return OperationResult(
            ok=True,
            message=f"Imported {result.imported} items ({result.errors} errors).",
            errors=result.error_messages + _unsaved_note(self.store),
            import_result=result,
        )
