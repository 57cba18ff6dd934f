"""Pydantic models for inventory items and reports."""

from inventory_manager.models.item import InventoryItem, generate_barcode, now_epoch
from inventory_manager.models.reports import (
    CategorySummary,
    ImportResult,
    InventoryReport,
    ItemSummary,
    OperationResult,
    UpdateReport,
)

__all__ = [
    "InventoryItem",
    "generate_barcode",
    "now_epoch",
    "CategorySummary",
    "ImportResult",
    "InventoryReport",
    "ItemSummary",
    "OperationResult",
    "UpdateReport",
]
