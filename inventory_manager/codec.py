"""Encode and decode inventory items as CSV lines.

Column order is fixed (see ``COLUMNS``). Money is written with two decimals,
timestamps as integer epoch seconds, and text fields are quoted CSV-style
whenever they contain a comma, a quote or a line break.
"""

from __future__ import annotations

import csv
import io
import re
from typing import Iterable, Iterator, Sequence, Union

from inventory_manager.errors import FormatError, ValidationError
from inventory_manager.ids import IdAllocator
from inventory_manager.models.item import InventoryItem

COLUMNS = (
    "ID",
    "Name",
    "Category",
    "Supplier",
    "Barcode",
    "Quantity",
    "MinimumStock",
    "Cost",
    "SellingPrice",
    "DateAdded",
    "LastModified",
    "ExpiryDate",
    "Location",
    "Description",
)

_CSV_OPTIONS = {"delimiter": ",", "quotechar": '"', "doublequote": True}
# CR and LF both in the terminator, so QUOTE_MINIMAL quotes either character.
_WRITER_TERMINATOR = "\r\n"

# Numbers exactly as encode writes them: ASCII digits, optional sign and fraction.
_INTEGER = re.compile(r"-?[0-9]+")
_DECIMAL = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")

RawRecord = tuple[int, Union[list[str], FormatError]]


def header() -> str:
    """Column-name line written first in every data file."""
    return ",".join(COLUMNS)


def _fields(item: InventoryItem) -> list[str]:
    return [
        str(item.id),
        item.name,
        item.category,
        item.supplier,
        item.barcode,
        str(item.quantity),
        str(item.minimum_stock),
        f"{item.cost:.2f}",
        f"{item.selling_price:.2f}",
        str(item.date_added),
        str(item.last_modified),
        str(item.expiry_date),
        item.location,
        item.description,
    ]


def encode(item: InventoryItem) -> str:
    """Render one item as a single CSV record (no trailing newline)."""
    buffer = io.StringIO(newline="")
    writer = csv.writer(
        buffer,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator=_WRITER_TERMINATOR,
        **_CSV_OPTIONS,
    )
    writer.writerow(_fields(item))
    return buffer.getvalue()[: -len(_WRITER_TERMINATOR)]


def split_records(lines: Iterable[str], start_line: int = 1) -> Iterator[RawRecord]:
    """Yield ``(line_number, fields)`` for each CSV record in ``lines``.

    A quoted field may span physical lines; ``line_number`` is where the
    record starts. Blank lines are skipped. A record with broken quoting is
    yielded as ``(line_number, FormatError)`` and reading carries on with the
    next physical line.
    """
    reader = csv.reader(lines, strict=True, **_CSV_OPTIONS)
    line_number = start_line
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            yield line_number, FormatError(f"malformed quoting ({exc})", line_number=line_number)
        else:
            if row:
                yield line_number, row
        line_number = start_line + reader.line_num


def _parse_int(value: str, column: str, line_number: int | None) -> int:
    if not _INTEGER.fullmatch(value):
        raise FormatError(f"{column} is not an integer: {value!r}", line_number=line_number)
    return int(value)


def _parse_float(value: str, column: str, line_number: int | None) -> float:
    if not _DECIMAL.fullmatch(value):
        raise FormatError(f"{column} is not a number: {value!r}", line_number=line_number)
    return float(value)


def decode_fields(
    fields: Sequence[str],
    ids: IdAllocator | None = None,
    line_number: int | None = None,
) -> InventoryItem:
    """Build an item from already-split CSV fields.

    Columns beyond the fourteenth are ignored. When ``ids`` is given it is
    advanced past the decoded id.
    """
    if len(fields) < len(COLUMNS):
        raise FormatError(
            f"expected {len(COLUMNS)} fields, got {len(fields)}",
            line_number=line_number,
        )
    (
        raw_id,
        name,
        category,
        supplier,
        barcode,
        raw_quantity,
        raw_minimum_stock,
        raw_cost,
        raw_selling_price,
        raw_date_added,
        raw_last_modified,
        raw_expiry_date,
        location,
        description,
    ) = fields[: len(COLUMNS)]
    try:
        item = InventoryItem(
            id=_parse_int(raw_id, "ID", line_number),
            name=name,
            category=category,
            supplier=supplier,
            barcode=barcode,
            quantity=_parse_int(raw_quantity, "Quantity", line_number),
            minimum_stock=_parse_int(raw_minimum_stock, "MinimumStock", line_number),
            cost=_parse_float(raw_cost, "Cost", line_number),
            selling_price=_parse_float(raw_selling_price, "SellingPrice", line_number),
            date_added=_parse_int(raw_date_added, "DateAdded", line_number),
            last_modified=_parse_int(raw_last_modified, "LastModified", line_number),
            expiry_date=_parse_int(raw_expiry_date, "ExpiryDate", line_number),
            location=location,
            description=description,
        )
    except ValidationError as exc:
        raise FormatError(f"invalid value ({exc})", line_number=line_number) from exc
    if ids is not None:
        ids.observe(item.id)
    return item


def decode(line: str, ids: IdAllocator | None = None) -> InventoryItem:
    """Parse one encoded record (which may span physical lines) into an item."""
    records = list(split_records(io.StringIO(line, newline="")))
    if not records:
        raise FormatError("empty record")
    if len(records) > 1:
        raise FormatError(f"expected one record, found {len(records)}")
    _, fields = records[0]
    if isinstance(fields, FormatError):
        raise fields
    return decode_fields(fields, ids=ids)
