# SPDX-License-Identifier: Apache-2.0
"""Read bilateral treaty tables exported as delimited text."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field as dc_field
from pathlib import Path
from typing import Any, Iterable

LOGGER = logging.getLogger(__name__)

# Canonical field -> accepted column headers (exported Korean headers first).
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "country": ("체결대상국가", "country", "counterparty"),
    "field": ("분야", "field", "category"),
    "title": ("조약명", "title", "treaty"),
    "signed": ("서명일/각서교환일", "signed", "signed_date"),
    "effective": ("발효일", "effective", "effective_date"),
}


class TreatyTableError(ValueError):
    """Raised when a treaty table is missing required columns."""


@dataclass(frozen=True)
class TreatyRecord:
    country: str
    field: str = ""
    title: str = ""
    signed: str = ""
    effective: str = ""
    extra: dict[str, str] = dc_field(default_factory=dict, compare=False)

    @classmethod
    def from_row(cls, row: dict[str, Any], columns: dict[str, str]) -> TreatyRecord:
        """Build a record from a ``csv.DictReader`` row using resolved ``columns``."""

        values = {
            name: str(row.get(header) or "").strip() for name, header in columns.items()
        }
        used = set(columns.values())
        extra = {
            str(k).strip(): str(v or "").strip()
            for k, v in row.items()
            if k is not None and k not in used
        }
        return cls(extra=extra, **values)


def resolve_columns(headers: Iterable[str]) -> dict[str, str]:
    """Map canonical field names to the headers present in the table."""

    stripped = {str(h).strip().lower(): h for h in headers if h is not None}
    columns: dict[str, str] = {}
    for name, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            header = stripped.get(alias.lower())
            if header is not None:
                columns[name] = header
                break
    if "country" not in columns:
        raise TreatyTableError(
            "Treaty table has no country column; expected one of: "
            + ", ".join(COLUMN_ALIASES["country"])
        )
    return columns


def _sniff_delimiter(sample: str) -> str:
    try:
        return csv.Sniffer().sniff(sample, delimiters=",\t;").delimiter
    except csv.Error:
        return "\t" if sample.count("\t") > sample.count(",") else ","


def read_treaties(
    path: str | Path,
    *,
    delimiter: str | None = None,
    encoding: str = "utf-8-sig",
) -> list[TreatyRecord]:
    """Load treaty records from a CSV or tab-separated export.

    The header row is required. Rows with an empty counterparty country are
    skipped.
    """

    src = Path(path).expanduser()
    if not src.is_file():
        raise FileNotFoundError(f"Treaty table not found: {src}")

    with src.open(newline="", encoding=encoding) as fh:
        if delimiter is None:
            delimiter = _sniff_delimiter(fh.read(4096))
            fh.seek(0)
        reader = csv.DictReader(fh, delimiter=delimiter)
        columns = resolve_columns(reader.fieldnames or ())
        records: list[TreatyRecord] = []
        for line_no, row in enumerate(reader, start=2):
            record = TreatyRecord.from_row(row, columns)
            if not record.country:
                LOGGER.debug("Skipping row %d of %s: no country", line_no, src)
                continue
            records.append(record)

    LOGGER.info("Read %d treaty records from %s", len(records), src)
    return records


__all__ = [
    "COLUMN_ALIASES",
    "TreatyRecord",
    "TreatyTableError",
    "read_treaties",
    "resolve_columns",
]
