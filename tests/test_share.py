# Copyright (c) Syntropy Systems
"""Tests for share tokens and links."""

import base64
import zlib

import pytest

from ladderlens.errors import DecodeFailure, LadderlensError, ShareDecodeError
from ladderlens.share import (
    build_share_url,
    decode_token,
    encode_record,
    extract_token,
    strip_settings,
)


def _token(payload: bytes) -> str:
    return base64.urlsafe_b64encode(zlib.compress(payload)).decode("ascii").rstrip("=")


class TestEncodeDecode:
    """Tests for encode_record and decode_token."""

    def test_round_trip(self) -> None:
        """Test a record without settings survives unchanged."""
        record = {
            "vid": "v1",
            "count": 3,
            "ratio": 0.5,
            "flag": True,
            "missing": None,
            "nested": {"a": [1, 2]},
            "title": "café ✓",
        }
        assert decode_token(encode_record(record)) == record

    def test_settings_removed(self) -> None:
        """Test configuration fields are dropped and the input is untouched."""
        record = {"vid": "v1", "strategy_settings": {"a": 1}, "x_settings": "{}"}
        token = encode_record(record)
        assert decode_token(token) == {"vid": "v1"}
        assert "strategy_settings" in record
        assert "x_settings" in record

    def test_token_is_url_safe(self, sample_record: dict[str, object]) -> None:
        """Test the token needs no escaping in a query string."""
        token = encode_record(sample_record)
        assert "=" not in token
        assert "+" not in token
        assert "/" not in token

    def test_empty_record(self) -> None:
        """Test an empty record."""
        assert decode_token(encode_record({})) == {}

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_payload(self, token: str | None) -> None:
        """Test no token at all."""
        with pytest.raises(ShareDecodeError) as exc_info:
            _ = decode_token(token)
        assert exc_info.value.reason is DecodeFailure.MISSING_PAYLOAD
        assert exc_info.value.reason.message == "No data found in URL"

    @pytest.mark.parametrize("token", ["!!!!", "bm90IHpsaWI", _token(b"")])
    def test_decompression_failed(self, token: str) -> None:
        """Test tokens that don't decode to any text."""
        with pytest.raises(ShareDecodeError) as exc_info:
            _ = decode_token(token)
        assert exc_info.value.reason is DecodeFailure.DECOMPRESSION_FAILED
        assert exc_info.value.reason.message == "Failed to decompress data"

    def test_invalid_utf8(self) -> None:
        """Test a payload that isn't UTF-8 text."""
        with pytest.raises(ShareDecodeError) as exc_info:
            _ = decode_token(_token(b"\xff\xfe\xfd"))
        assert exc_info.value.reason is DecodeFailure.DECOMPRESSION_FAILED

    def test_invalid_content(self) -> None:
        """Test text that isn't JSON."""
        with pytest.raises(ShareDecodeError) as exc_info:
            _ = decode_token(_token(b"not json"))
        assert exc_info.value.reason is DecodeFailure.INVALID_CONTENT
        assert exc_info.value.reason.message == "Invalid data format"

    def test_non_object_content(self) -> None:
        """Test JSON that isn't an object."""
        with pytest.raises(ShareDecodeError) as exc_info:
            _ = decode_token(_token(b"[1, 2]"))
        assert exc_info.value.reason is DecodeFailure.INVALID_CONTENT

    def test_error_hierarchy(self) -> None:
        """Test decode errors share the package base class."""
        assert issubclass(ShareDecodeError, LadderlensError)


class TestStripSettings:
    """Tests for strip_settings."""

    def test_returns_copy(self) -> None:
        """Test a new mapping is returned."""
        record = {"vid": "v1"}
        stripped = strip_settings(record)
        assert stripped == record
        assert stripped is not record


class TestShareUrl:
    """Tests for building and reading share URLs."""

    def test_build_share_url(self) -> None:
        """Test the token goes in the data parameter."""
        record = {"vid": "v1"}
        url = build_share_url(record, "https://ladders.example.com/")
        assert url.startswith("https://ladders.example.com/shared?data=")
        assert url.endswith(encode_record(record))

    def test_custom_route(self) -> None:
        """Test a configured route."""
        url = build_share_url({"vid": "v1"}, "http://host", "view/shared")
        assert url.startswith("http://host/view/shared?data=")

    def test_extract_token_round_trip(self, sample_record: dict[str, object]) -> None:
        """Test a built URL decodes back to the stripped record."""
        url = build_share_url(sample_record, "http://localhost:8265")
        record = decode_token(extract_token(url))
        assert record == strip_settings(sample_record)

    def test_extract_bare_token(self) -> None:
        """Test bare tokens pass through."""
        assert extract_token("  abc123 ") == "abc123"
        assert extract_token("") is None

    def test_extract_missing_param(self) -> None:
        """Test URLs without a data parameter."""
        assert extract_token("http://localhost:8265/shared") is None
        assert extract_token("http://localhost:8265/shared?other=1") is None


class TestDecodeDeepNesting:
    """Tests for payloads nested deeper than the JSON decoder allows."""

    def test_deep_array_is_invalid_content(self) -> None:
        """Test deeply nested JSON is reported, not raised as RecursionError."""
        with pytest.raises(ShareDecodeError) as exc_info:
            _ = decode_token(_token(b"[" * 200000))
        assert exc_info.value.reason is DecodeFailure.INVALID_CONTENT
