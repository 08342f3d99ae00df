# Copyright (c) Syntropy Systems
"""Load records from uploaded workbooks and JSON."""
from __future__ import annotations

import io
import json
import logging
import zipfile
from datetime import date, datetime, time
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, cast

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ladderlens.errors import UnsupportedInputError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ladderlens.models import JSONValue, Record

logger = logging.getLogger(__name__)

WORKBOOK_SUFFIXES = (".xlsx", ".xlsm")
JSON_SUFFIXES = (".json",)

UNSUPPORTED_FORMAT = (
    "Unsupported file format. Please upload an Excel file (.xlsx) or JSON (.json)."
)
INVALID_WORKBOOK = "Error parsing file. Please make sure it's a valid Excel file."
INVALID_JSON = "Error parsing JSON data. Please make sure it's valid JSON."
INVALID_JSON_SHAPE = "Invalid JSON format. Expected object or array of objects."


def _cell_value(cell: object) -> JSONValue:
    if cell is None:
        return ""
    if isinstance(cell, (datetime, date, time)):
        return cell.isoformat()
    if isinstance(cell, (str, int, float, bool)):
        return cell
    return str(cell)


def _header_names(header: tuple[object, ...]) -> list[str]:
    return [
        str(name) if name not in (None, "") else f"column_{index + 1}"
        for index, name in enumerate(header)
    ]


def _rows_to_records(rows: Iterator[tuple[object, ...]]) -> list[Record]:
    header = next(rows, None)
    if header is None:
        return []
    headers = _header_names(header)

    records: list[Record] = []
    for row in rows:
        if all(cell in (None, "") for cell in row):
            continue
        record: Record = {}
        for index, name in enumerate(headers):
            cell = row[index] if index < len(row) else None
            record[name] = _cell_value(cell)
        records.append(record)
    return records


def read_workbook(source: Path | BinaryIO) -> list[Record]:
    """Records from the first sheet of a workbook; row one holds field names."""
    try:
        workbook = load_workbook(source, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise UnsupportedInputError(INVALID_WORKBOOK) from e

    try:
        sheet = workbook.worksheets[0]
        rows = cast("Iterator[tuple[object, ...]]", sheet.iter_rows(values_only=True))
        records = _rows_to_records(rows)
    finally:
        workbook.close()

    logger.debug("Read %d records from sheet %r", len(records), sheet.title)
    return records


def records_from_json(value: object) -> list[Record]:
    """A single object becomes a one-record list; an array is taken as-is."""
    if isinstance(value, dict):
        return [cast("Record", value)]
    if isinstance(value, list):
        if not all(isinstance(item, dict) for item in value):
            raise UnsupportedInputError(INVALID_JSON_SHAPE)
        return cast("list[Record]", value)
    raise UnsupportedInputError(INVALID_JSON_SHAPE)


def parse_json_text(text: str) -> list[Record]:
    """Records from pasted JSON text."""
    try:
        value = cast("object", json.loads(text))
    except (ValueError, RecursionError) as e:
        raise UnsupportedInputError(INVALID_JSON) from e
    return records_from_json(value)


def load_upload(filename: str, data: bytes) -> list[Record]:
    """Records from an uploaded file, dispatched on its extension."""
    suffix = Path(filename).suffix.lower()
    if suffix in WORKBOOK_SUFFIXES:
        return read_workbook(io.BytesIO(data))
    if suffix in JSON_SUFFIXES:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise UnsupportedInputError(INVALID_JSON) from e
        return parse_json_text(text)
    raise UnsupportedInputError(UNSUPPORTED_FORMAT)


def load_records(path: Path) -> list[Record]:
    """Records from a workbook or JSON file on disk."""
    if not path.exists():
        msg = f"File not found: {path}"
        raise UnsupportedInputError(msg)
    return load_upload(path.name, path.read_bytes())
