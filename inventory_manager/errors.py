"""Error kinds raised by the inventory core."""

from __future__ import annotations


class InventoryError(Exception):
    """Base class for inventory errors."""


class ValidationError(InventoryError, ValueError):
    """A field value broke an item rule (empty name, negative number, ...)."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class FormatError(InventoryError, ValueError):
    """A record line could not be decoded."""

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class StorageError(InventoryError, OSError):
    """A data file could not be read or written."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
