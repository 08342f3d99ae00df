# Copyright (c) Syntropy Systems
"""Share links: pack one record into a compact URL-safe token and back.

Token format: the record (minus ``*_settings`` fields) as compact UTF-8
JSON, zlib-compressed, then URL-safe base64 with the padding stripped.
"""
from __future__ import annotations

import base64
import binascii
import json
import zlib
from typing import TYPE_CHECKING, cast
from urllib.parse import parse_qs, urlencode, urlsplit

from ladderlens.errors import DecodeFailure, ShareDecodeError
from ladderlens.fields import is_settings_field

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ladderlens.models import JSONValue, Record

SHARE_QUERY_PARAM = "data"
DEFAULT_SHARE_ROUTE = "/shared"


def strip_settings(record: Mapping[str, JSONValue]) -> Record:
    """Copy of ``record`` without configuration fields."""
    return {key: value for key, value in record.items() if not is_settings_field(key)}


def encode_record(record: Mapping[str, JSONValue]) -> str:
    """Encode a record into a share token. The input is left untouched."""
    payload = json.dumps(
        strip_settings(record), ensure_ascii=False, separators=(",", ":")
    )
    compressed = zlib.compress(payload.encode("utf-8"), 9)
    return base64.urlsafe_b64encode(compressed).decode("ascii").rstrip("=")


def _decompress(token: str) -> str:
    padded = token + "=" * (-len(token) % 4)
    try:
        compressed = base64.urlsafe_b64decode(padded)
        text = zlib.decompress(compressed).decode("utf-8")
    except (binascii.Error, ValueError, zlib.error) as e:
        raise ShareDecodeError(DecodeFailure.DECOMPRESSION_FAILED, str(e)) from e
    if not text:
        raise ShareDecodeError(DecodeFailure.DECOMPRESSION_FAILED, "empty payload")
    return text


def decode_token(token: str | None) -> Record:
    """Turn a share token back into a record.

    Raises:
        ShareDecodeError: ``reason`` tells a missing token, a token that
            does not decompress, and a payload that is not a JSON object
            apart.

    """
    if not token:
        raise ShareDecodeError(DecodeFailure.MISSING_PAYLOAD)

    text = _decompress(token)
    try:
        data = cast("object", json.loads(text))
    except (ValueError, RecursionError) as e:
        raise ShareDecodeError(DecodeFailure.INVALID_CONTENT, str(e)) from e

    if not isinstance(data, dict):
        raise ShareDecodeError(
            DecodeFailure.INVALID_CONTENT,
            f"expected an object, got {type(data).__name__}",
        )
    return cast("Record", data)


def build_share_url(
    record: Mapping[str, JSONValue],
    base_url: str,
    route: str = DEFAULT_SHARE_ROUTE,
) -> str:
    """Full share URL for a record."""
    query = urlencode({SHARE_QUERY_PARAM: encode_record(record)})
    return f"{base_url.rstrip('/')}/{route.lstrip('/')}?{query}"


def extract_token(value: str) -> str | None:
    """Pull the token out of a share URL; bare tokens are returned as-is."""
    value = value.strip()
    if "?" not in value and "://" not in value:
        return value or None
    params = parse_qs(urlsplit(value).query)
    tokens = params.get(SHARE_QUERY_PARAM)
    return tokens[0] if tokens else None
