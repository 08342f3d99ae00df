# Copyright (c) Syntropy Systems
"""Tests for loading records from workbooks and JSON."""

import io
import json
from datetime import datetime
from pathlib import Path

import pytest
from openpyxl import Workbook

from ladderlens.errors import UnsupportedInputError
from ladderlens.ingest import (
    INVALID_JSON,
    INVALID_JSON_SHAPE,
    INVALID_WORKBOOK,
    UNSUPPORTED_FORMAT,
    load_records,
    load_upload,
    parse_json_text,
    read_workbook,
    records_from_json,
)


def _workbook_bytes(*rows: list[object]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class TestWorkbook:
    """Tests for workbook reading."""

    def test_records_xlsx(self, records_xlsx: Path, sample_record: dict[str, object]) -> None:
        """Test the header row names the fields."""
        records = load_records(records_xlsx)
        assert len(records) == 2
        assert records[0]["vid"] == "v123"
        assert records[1]["vid"] == "v999"
        assert records[0]["ladder_info"] == sample_record["ladder_info"]
        assert records[0]["user_id"] == 42

    def test_blank_cells(self, records_xlsx: Path) -> None:
        """Test empty cells read as empty strings."""
        records = load_records(records_xlsx)
        assert records[0]["device_id"] == ""

    def test_zero_kept(self) -> None:
        """Test a zero cell stays zero."""
        data = _workbook_bytes(["vid", "count"], ["v1", 0])
        assert load_upload("data.xlsx", data) == [{"vid": "v1", "count": 0}]

    def test_missing_header_and_empty_rows(self) -> None:
        """Test unnamed columns and blank rows."""
        data = _workbook_bytes(["vid", None], ["v1", "x"], [None, None], ["v2"])
        records = load_upload("data.xlsx", data)
        assert records == [
            {"vid": "v1", "column_2": "x"},
            {"vid": "v2", "column_2": ""},
        ]

    def test_dates_as_text(self) -> None:
        """Test date cells become ISO strings."""
        data = _workbook_bytes(["vid", "when"], ["v1", datetime(2024, 5, 1, 12, 30)])
        records = load_upload("data.xlsx", data)
        assert records[0]["when"] == "2024-05-01T12:30:00"

    def test_header_only(self) -> None:
        """Test a sheet with no data rows."""
        assert load_upload("data.xlsx", _workbook_bytes(["vid"])) == []

    def test_corrupt_workbook(self) -> None:
        """Test bytes that aren't a workbook."""
        with pytest.raises(UnsupportedInputError, match=INVALID_WORKBOOK):
            _ = read_workbook(io.BytesIO(b"not a zip file"))


class TestJson:
    """Tests for JSON records."""

    def test_records_json(self, records_json: Path) -> None:
        """Test an array of objects."""
        records = load_records(records_json)
        assert [r["vid"] for r in records] == ["v123", "v999"]

    def test_single_object(self) -> None:
        """Test a single object becomes one record."""
        assert records_from_json({"vid": "v1"}) == [{"vid": "v1"}]

    @pytest.mark.parametrize("value", [42, "text", None, [{"vid": "v1"}, 3]])
    def test_bad_shape(self, value: object) -> None:
        """Test values that aren't objects or arrays of objects."""
        with pytest.raises(UnsupportedInputError, match=INVALID_JSON_SHAPE):
            _ = records_from_json(value)

    def test_invalid_text(self) -> None:
        """Test pasted text that isn't JSON."""
        with pytest.raises(UnsupportedInputError, match=INVALID_JSON):
            _ = parse_json_text("{nope")

    def test_deeply_nested_text(self) -> None:
        """Test pasted JSON nested too deep to decode."""
        with pytest.raises(UnsupportedInputError, match=INVALID_JSON):
            _ = parse_json_text("[" * 200000)

    def test_byte_order_mark(self) -> None:
        """Test JSON files saved with a BOM."""
        data = "\ufeff".encode() + json.dumps([{"vid": "v1"}]).encode()
        assert load_upload("records.JSON", data) == [{"vid": "v1"}]

    def test_not_utf8(self) -> None:
        """Test JSON uploads that aren't UTF-8."""
        with pytest.raises(UnsupportedInputError, match=INVALID_JSON):
            _ = load_upload("records.json", b"\xff\xfe\x00")


class TestDispatch:
    """Tests for format dispatch."""

    @pytest.mark.parametrize("filename", ["data.xls", "data.csv", "data"])
    def test_unsupported_format(self, filename: str) -> None:
        """Test unknown extensions are rejected."""
        with pytest.raises(UnsupportedInputError) as exc_info:
            _ = load_upload(filename, b"")
        assert str(exc_info.value) == UNSUPPORTED_FORMAT

    def test_missing_file(self, temp_dir: Path) -> None:
        """Test a path that doesn't exist."""
        with pytest.raises(UnsupportedInputError, match="File not found"):
            _ = load_records(temp_dir / "missing.json")
