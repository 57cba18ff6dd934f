"""Result and report models returned by the store and service layers."""

from typing import Optional

from pydantic import BaseModel


class CategorySummary(BaseModel):
    """Item count and stock value for one category."""

    category: str
    item_count: int
    total_value: float


class ItemSummary(BaseModel):
    """Compact view of one item for ranked listings."""

    id: int
    name: str
    category: str
    quantity: int
    total_value: float


class InventoryReport(BaseModel):
    """Aggregate analytics over the whole store."""

    total_items: int
    total_units: int
    total_value: float
    potential_revenue: float
    total_profit: float
    categories: list[CategorySummary] = []
    low_stock_count: int
    expiring_soon_count: int
    expired_count: int
    expiry_window_days: int
    top_items: list[ItemSummary] = []


class ImportResult(BaseModel):
    """Outcome of a bulk import: how many lines landed and how many were rejected."""

    imported: int
    errors: int
    error_messages: list[str] = []


class UpdateReport(BaseModel):
    """Per-field outcome of a partial update."""

    found: bool
    applied: list[str] = []
    rejected: dict[str, str] = {}


class OperationResult(BaseModel):
    """Success/failure value handed to the CLI layer."""

    ok: bool
    message: str
    item_id: Optional[int] = None
    errors: list[str] = []
    import_result: Optional[ImportResult] = None
