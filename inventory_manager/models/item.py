"""Inventory item: stored fields, derived figures, and mutation rules."""

from __future__ import annotations

import random
import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from inventory_manager.config import DEFAULT_CATEGORY, DEFAULT_MINIMUM_STOCK
from inventory_manager.errors import ValidationError

SECONDS_PER_DAY = 86400

# Fields a caller may change after creation; each change stamps last_modified.
MUTABLE_FIELDS = frozenset(
    {
        "name",
        "category",
        "quantity",
        "cost",
        "selling_price",
        "supplier",
        "location",
        "minimum_stock",
        "description",
        "expiry_date",
    }
)


def now_epoch() -> int:
    """Current wall-clock time as integer epoch seconds."""
    return int(time.time())


def generate_barcode() -> str:
    """Random 9-digit numeric token."""
    return str(random.randint(100_000_000, 999_999_999))


def _as_validation_error(exc: PydanticValidationError) -> ValidationError:
    first = exc.errors()[0]
    loc = first.get("loc") or ()
    field = str(loc[0]) if loc else None
    message = first.get("msg", str(exc))
    if field:
        message = f"{field}: {message}"
    return ValidationError(message, field=field)


class InventoryItem(BaseModel):
    """One inventory line item.

    Construction and every assignment are validated; a rejected assignment
    raises ``ValidationError`` and leaves the item as it was.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(ge=1, frozen=True)
    name: str
    category: str = DEFAULT_CATEGORY
    quantity: int = Field(ge=0)
    cost: float = Field(ge=0, allow_inf_nan=False)
    selling_price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    supplier: str = ""
    location: str = ""
    minimum_stock: int = Field(default=DEFAULT_MINIMUM_STOCK, ge=0)
    barcode: str = Field(default_factory=generate_barcode, frozen=True)
    description: str = ""
    date_added: int = Field(default_factory=now_epoch, ge=0, frozen=True)
    last_modified: int = Field(default_factory=now_epoch, ge=0)
    expiry_date: int = Field(default=0, ge=0)  # 0 = no expiry

    def __init__(self, **data: Any):
        if "date_added" not in data:
            stamp = now_epoch()
            data["date_added"] = stamp
            data.setdefault("last_modified", stamp)
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise _as_validation_error(exc) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        # Model-level checks run after pydantic has stored the value, so keep
        # the previous state to put back on rejection.
        previous = dict(self.__dict__)
        previous_fields_set = set(self.__pydantic_fields_set__)
        try:
            super().__setattr__(name, value)
        except PydanticValidationError as exc:
            object.__setattr__(self, "__dict__", previous)
            object.__setattr__(self, "__pydantic_fields_set__", previous_fields_set)
            raise _as_validation_error(exc) from exc
        if name in MUTABLE_FIELDS:
            self.touch()

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("name must not be empty")
        return value

    @field_validator("cost", "selling_price")
    @classmethod
    def _round_money(cls, value: float) -> float:
        return round(value, 2)

    @model_validator(mode="after")
    def _modified_after_added(self) -> "InventoryItem":
        if self.last_modified < self.date_added:
            raise ValueError("last_modified must not precede date_added")
        return self

    def touch(self) -> None:
        """Stamp last_modified with the current time (never before date_added)."""
        super().__setattr__("last_modified", max(now_epoch(), self.date_added))

    def adjust_quantity(self, delta: int) -> None:
        """Add ``delta`` (may be negative) to quantity; refuse to go below zero."""
        new_quantity = self.quantity + delta
        if new_quantity < 0:
            raise ValidationError(
                f"quantity: adjusting {self.quantity} by {delta} would go negative",
                field="quantity",
            )
        self.quantity = new_quantity

    # Derived figures

    @property
    def total_value(self) -> float:
        return self.quantity * self.cost

    @property
    def potential_revenue(self) -> float:
        return self.quantity * self.selling_price

    @property
    def profit(self) -> float:
        return (self.selling_price - self.cost) * self.quantity

    @property
    def profit_margin(self) -> float:
        """Markup over cost in percent; 0 when cost is 0."""
        if self.cost == 0:
            return 0.0
        return (self.selling_price - self.cost) / self.cost * 100

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.minimum_stock

    def is_expired(self, now: int | None = None) -> bool:
        if self.expiry_date == 0:
            return False
        return self.expiry_date <= (now_epoch() if now is None else now)

    def is_expiring_soon(self, days: int, now: int | None = None) -> bool:
        if self.expiry_date == 0:
            return False
        current = now_epoch() if now is None else now
        return self.expiry_date <= current + days * SECONDS_PER_DAY

    def status(self, expiry_days: int, now: int | None = None) -> str:
        """Single-word stock status for display: expired, expiring, low or ok."""
        if self.is_expired(now):
            return "expired"
        if self.is_expiring_soon(expiry_days, now):
            return "expiring"
        if self.is_low_stock:
            return "low"
        return "ok"
