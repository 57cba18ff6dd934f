"""In-memory inventory store with CSV persistence.

The store is the only owner of its items: every query hands back copies, and
every successful mutation rewrites the backing file (when one is configured).
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Any, Iterable, Iterator

from inventory_manager.codec import RawRecord, decode_fields
from inventory_manager.config import DEFAULT_CATEGORY, DEFAULT_MINIMUM_STOCK, EXPIRY_WARNING_DAYS
from inventory_manager.errors import FormatError, StorageError, ValidationError
from inventory_manager.ids import IdAllocator
from inventory_manager.models.item import MUTABLE_FIELDS, InventoryItem
from inventory_manager.models.reports import (
    CategorySummary,
    ImportResult,
    InventoryReport,
    ItemSummary,
    UpdateReport,
)
from inventory_manager.storage import CsvInventoryFile
from inventory_manager.utils.logger import get_logger

logger = get_logger("inventory_manager.store")

TOP_ITEMS_LIMIT = 5


class InventoryStore:
    """Ordered collection of inventory items keyed by id."""

    def __init__(
        self,
        path: str | Path | None = None,
        expiry_window_days: int = EXPIRY_WARNING_DAYS,
    ):
        self._items: list[InventoryItem] = []
        self._index: dict[int, int] = {}  # item id -> position in _items
        self._ids = IdAllocator()
        self._file = CsvInventoryFile(path) if path is not None else None
        self.expiry_window_days = expiry_window_days
        self.dirty = False  # True when the last save failed
        if self._file is not None:
            self._load()

    # Lifecycle

    @property
    def path(self) -> Path | None:
        return self._file.path if self._file is not None else None

    @property
    def next_id(self) -> int:
        return self._ids.next_id

    def _load(self) -> None:
        """Populate from the backing file; a missing or unreadable file means empty."""
        if not self._file.exists():
            logger.info("store.no_backing_file", path=str(self._file.path))
            return
        try:
            records = self._file.read_records()
        except StorageError as e:
            logger.warning("store.load_error", path=str(self._file.path), error=str(e))
            return
        result = self._ingest(records, source=str(self._file.path))
        logger.info(
            "store.loaded",
            path=str(self._file.path),
            items=len(self._items),
            skipped=result.errors,
            next_id=self._ids.next_id,
        )

    def _ingest(self, records: Iterable[RawRecord], source: str) -> ImportResult:
        """Decode raw records one by one; bad ones are logged and counted, never fatal."""
        imported = 0
        messages: list[str] = []
        for line_number, fields in records:
            try:
                if isinstance(fields, FormatError):
                    raise fields
                item = decode_fields(fields, ids=self._ids, line_number=line_number)
                if item.id in self._index:
                    raise FormatError(f"duplicate id {item.id}", line_number=line_number)
            except FormatError as e:
                messages.append(str(e))
                logger.warning("store.line_skipped", source=source, line=line_number, error=str(e))
                continue
            self._index[item.id] = len(self._items)
            self._items.append(item)
            imported += 1
        return ImportResult(imported=imported, errors=len(messages), error_messages=messages)

    def save(self) -> None:
        """Rewrite the backing file from current contents. Raises StorageError."""
        if self._file is None:
            return
        self._file.write(self._items)
        self.dirty = False

    def _persist(self) -> bool:
        try:
            self.save()
        except StorageError as e:
            self.dirty = True
            logger.error("store.persist_failed", path=str(self._file.path), error=str(e))
            return False
        return True

    def close(self) -> bool:
        """Final save at shutdown; returns False when it could not be written."""
        saved = self._persist()
        logger.info("store.closed", items=len(self._items), saved=saved)
        return saved

    def __enter__(self) -> "InventoryStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Lookup

    def _find(self, item_id: int) -> InventoryItem | None:
        position = self._index.get(item_id)
        if position is None:
            return None
        return self._items[position]

    def _reindex(self) -> None:
        self._index = {item.id: position for position, item in enumerate(self._items)}

    def get(self, item_id: int) -> InventoryItem | None:
        """Copy of the item with ``item_id``, or None."""
        item = self._find(item_id)
        return item.model_copy() if item is not None else None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[InventoryItem]:
        return iter(self.all_items())

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._index

    def all_items(self) -> list[InventoryItem]:
        return [item.model_copy() for item in self._items]

    # Mutations

    def add(
        self,
        name: str,
        category: str = DEFAULT_CATEGORY,
        quantity: int = 0,
        cost: float = 0.0,
        selling_price: float = 0.0,
        supplier: str = "",
        location: str = "",
        minimum_stock: int = DEFAULT_MINIMUM_STOCK,
        description: str = "",
        expiry_date: int = 0,
    ) -> int:
        """Create an item and return its new id. Raises ValidationError, leaving the store unchanged."""
        item = InventoryItem(
            id=self._ids.next_id,
            name=name,
            category=category,
            quantity=quantity,
            cost=cost,
            selling_price=selling_price,
            supplier=supplier,
            location=location,
            minimum_stock=minimum_stock,
            description=description,
            expiry_date=expiry_date,
        )
        self._ids.allocate()
        self._index[item.id] = len(self._items)
        self._items.append(item)
        logger.info("store.item_added", item_id=item.id, name=item.name, category=item.category)
        self._persist()
        return item.id

    def update_fields(self, item_id: int, **changes: Any) -> UpdateReport:
        """Apply each non-None change independently; bad values are rejected one field at a time."""
        unknown = sorted(set(changes) - MUTABLE_FIELDS)
        if unknown:
            raise TypeError(f"cannot update field(s): {', '.join(unknown)}")
        item = self._find(item_id)
        if item is None:
            logger.info("store.update_missing", item_id=item_id)
            return UpdateReport(found=False)
        applied: list[str] = []
        rejected: dict[str, str] = {}
        for field, value in changes.items():
            if value is None:
                continue
            try:
                setattr(item, field, value)
            except ValidationError as e:
                rejected[field] = str(e)
                logger.warning("store.update_rejected", item_id=item_id, field=field, error=str(e))
                continue
            applied.append(field)
        if applied:
            logger.info("store.item_updated", item_id=item_id, fields=applied)
            self._persist()
        return UpdateReport(found=True, applied=applied, rejected=rejected)

    def update(self, item_id: int, **changes: Any) -> bool:
        """Partial update; False when no item has ``item_id``."""
        return self.update_fields(item_id, **changes).found

    def delete(self, item_id: int) -> bool:
        position = self._index.get(item_id)
        if position is None:
            logger.info("store.delete_missing", item_id=item_id)
            return False
        del self._items[position]
        self._reindex()
        logger.info("store.item_deleted", item_id=item_id)
        self._persist()
        return True

    def adjust_quantity(self, item_id: int, delta: int) -> bool:
        """Add ``delta`` to an item's quantity. False if absent; ValidationError if it would go negative."""
        item = self._find(item_id)
        if item is None:
            logger.info("store.adjust_missing", item_id=item_id)
            return False
        item.adjust_quantity(delta)
        logger.info("store.quantity_adjusted", item_id=item_id, delta=delta, quantity=item.quantity)
        self._persist()
        return True

    def clear(self) -> None:
        """Drop every item. Ids already handed out are not reused."""
        self._items.clear()
        self._index.clear()
        logger.info("store.cleared")
        self._persist()

    # Queries

    def search(self, term: str) -> list[InventoryItem]:
        """Items whose name, category or supplier contains ``term`` (any case), or whose barcode contains it exactly."""
        needle = term.casefold()
        return [
            item.model_copy()
            for item in self._items
            if needle in item.name.casefold()
            or needle in item.category.casefold()
            or needle in item.supplier.casefold()
            or term in item.barcode
        ]

    def filter_by_category(self, category: str) -> list[InventoryItem]:
        wanted = category.casefold()
        return [item.model_copy() for item in self._items if item.category.casefold() == wanted]

    def categories(self) -> list[str]:
        return sorted({item.category for item in self._items})

    def low_stock_items(self) -> list[InventoryItem]:
        return [item.model_copy() for item in self._items if item.is_low_stock]

    def expired_items(self, now: int | None = None) -> list[InventoryItem]:
        return [item.model_copy() for item in self._items if item.is_expired(now)]

    def expiring_soon_items(self, days: int | None = None, now: int | None = None) -> list[InventoryItem]:
        """Items expiring within ``days`` that have not expired yet."""
        window = self.expiry_window_days if days is None else days
        return [
            item.model_copy()
            for item in self._items
            if item.is_expiring_soon(window, now) and not item.is_expired(now)
        ]

    def count(self) -> int:
        return len(self._items)

    def total_value(self) -> float:
        return sum(item.total_value for item in self._items)

    def total_profit(self) -> float:
        return sum(item.profit for item in self._items)

    def analytics(self, now: int | None = None) -> InventoryReport:
        by_category: dict[str, list[InventoryItem]] = defaultdict(list)
        for item in self._items:
            by_category[item.category].append(item)
        categories = [
            CategorySummary(
                category=name,
                item_count=len(members),
                total_value=sum(member.total_value for member in members),
            )
            for name, members in sorted(by_category.items())
        ]
        # sorted() is stable, so equal values keep store order
        ranked = sorted(self._items, key=lambda item: item.total_value, reverse=True)
        top_items = [
            ItemSummary(
                id=item.id,
                name=item.name,
                category=item.category,
                quantity=item.quantity,
                total_value=item.total_value,
            )
            for item in ranked[:TOP_ITEMS_LIMIT]
        ]
        return InventoryReport(
            total_items=len(self._items),
            total_units=sum(item.quantity for item in self._items),
            total_value=self.total_value(),
            potential_revenue=sum(item.potential_revenue for item in self._items),
            total_profit=self.total_profit(),
            categories=categories,
            low_stock_count=sum(1 for item in self._items if item.is_low_stock),
            expiring_soon_count=len(self.expiring_soon_items(now=now)),
            expired_count=len(self.expired_items(now)),
            expiry_window_days=self.expiry_window_days,
            top_items=top_items,
        )

    # Bulk import / export

    def export_to(self, path: str | Path) -> bool:
        """Write all items to ``path``; the store and its backing file are untouched."""
        try:
            count = CsvInventoryFile(path).write(self._items)
        except StorageError as e:
            logger.error("store.export_failed", path=str(path), error=str(e))
            return False
        logger.info("store.exported", path=str(path), items=count)
        return True

    def import_from(self, path: str | Path, clear_existing: bool = False) -> ImportResult:
        """Load items from ``path`` keeping their ids; bad lines are counted and skipped.

        Raises StorageError (store untouched) when the file cannot be read.
        """
        records = CsvInventoryFile(path).read_records()
        if clear_existing:
            self._items.clear()
            self._index.clear()
        result = self._ingest(records, source=str(path))
        if result.imported or clear_existing:
            self._persist()
        logger.info(
            "store.imported",
            path=str(path),
            imported=result.imported,
            errors=result.errors,
            cleared=clear_existing,
        )
        return result
