"""CSV data file: read every record, write the whole file atomically."""

from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path
from typing import Iterable

from inventory_manager.codec import RawRecord, encode, header, split_records
from inventory_manager.errors import FormatError, StorageError
from inventory_manager.models.item import InventoryItem
from inventory_manager.utils.logger import get_logger

logger = get_logger("inventory_manager.storage")


def _reject_undecodable(line_number: int, fields) -> RawRecord:
    """Turn a record carrying undecodable bytes (escaped as surrogates) into a FormatError."""
    if isinstance(fields, list) and any(
        "\udc80" <= ch <= "\udcff" for field in fields for ch in field
    ):
        return line_number, FormatError("not valid UTF-8", line_number=line_number)
    return line_number, fields


class CsvInventoryFile:
    """One inventory data file on disk (backing file or import/export target)."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read_records(self) -> list[RawRecord]:
        """Return the raw records after the header line.

        The first record is treated as the header when its first column is
        ``ID``; a file without a header is read from the top. A record holding
        bytes that are not UTF-8 comes back as a ``FormatError`` so only that
        record is lost.
        """
        try:
            data = self.path.read_bytes()
        except OSError as e:
            raise StorageError(f"cannot read {self.path}: {e}", path=str(self.path)) from e
        text = data.decode("utf-8", errors="surrogateescape")
        records = [
            _reject_undecodable(line_number, fields)
            for line_number, fields in split_records(io.StringIO(text, newline=""))
        ]
        if records:
            _, first = records[0]
            if isinstance(first, list) and first[0].strip().lower() == "id":
                records = records[1:]
        logger.debug("storage.read", path=str(self.path), records=len(records))
        return records

    def write(self, items: Iterable[InventoryItem]) -> int:
        """Replace the file with a header plus one line per item; returns the item count.

        Content goes to a temporary sibling first and is renamed over the
        target, so a failed write leaves the previous file intact.
        """
        lines = [header()]
        lines.extend(encode(item) for item in items)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write("\n".join(lines))
                f.write("\n")
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error("storage.write_error", path=str(self.path), error=str(e))
            raise StorageError(f"cannot write {self.path}: {e}", path=str(self.path)) from e
        count = len(lines) - 1
        logger.debug("storage.written", path=str(self.path), records=count)
        return count
