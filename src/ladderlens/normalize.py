# Copyright (c) Syntropy Systems
"""Normalize raw record field values into display item sequences.

A stage field may arrive as a list (pasted JSON), a JSON-encoded string
(spreadsheet cells), a plain scalar, or a nested object. The value is
resolved once into a :class:`FieldValue` and everything downstream works
on the resulting list of strings.
"""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import cast

EMPTY_ARRAY_TEXT = "[]"


class ValueKind(str, Enum):
    """Shape of a raw field value."""

    EMPTY = "empty"
    SEQUENCE = "sequence"
    STRUCTURED = "structured"
    SCALAR = "scalar"
    TEXT = "text"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a best-effort JSON parse.

    ``value`` is the parsed structure when ``ok`` is true; otherwise it is
    the untouched input text.
    """

    ok: bool
    value: object


@dataclass(frozen=True)
class FieldValue:
    """A raw value tagged with its resolved shape."""

    kind: ValueKind
    value: object


def try_parse_json(text: str) -> ParseResult:
    """Parse JSON text without raising."""
    try:
        return ParseResult(ok=True, value=json.loads(text))
    except (ValueError, RecursionError):
        return ParseResult(ok=False, value=text)


def display_string(value: object) -> str:
    """Render a single value the way the viewer displays it.

    Booleans and null use their JSON spelling and whole floats drop the
    trailing ``.0``, so ``1.0`` and ``1`` look the same.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def pretty_json(value: object) -> str:
    """Indented JSON, falling back to ``str`` when it can't be serialized."""
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def is_blank(value: object) -> bool:
    """True for values shown as missing: None, "", zero, False and NaN."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def classify_value(raw: object) -> FieldValue:
    """Resolve the shape of a raw field value."""
    if raw is None:
        return FieldValue(ValueKind.EMPTY, None)
    if isinstance(raw, str):
        if raw in ("", EMPTY_ARRAY_TEXT):
            return FieldValue(ValueKind.EMPTY, None)
        parsed = try_parse_json(raw)
        if not parsed.ok:
            return FieldValue(ValueKind.TEXT, raw)
        if isinstance(parsed.value, list):
            return FieldValue(ValueKind.SEQUENCE, parsed.value)
        if isinstance(parsed.value, dict):
            return FieldValue(ValueKind.STRUCTURED, parsed.value)
        return FieldValue(ValueKind.SCALAR, parsed.value)
    if isinstance(raw, (list, tuple)):
        return FieldValue(ValueKind.SEQUENCE, list(raw))
    if isinstance(raw, dict):
        return FieldValue(ValueKind.STRUCTURED, raw)
    return FieldValue(ValueKind.SCALAR, raw)


def normalize_items(raw: object) -> list[str]:
    """Turn one raw field value into an ordered list of display strings.

    Never raises: malformed input degrades to its string form.

    Examples:
        >>> normalize_items("[1,2,3]")
        ['1', '2', '3']
        >>> normalize_items("not json")
        ['not json']
        >>> normalize_items([])
        []

    """
    field = classify_value(raw)
    if field.kind is ValueKind.EMPTY:
        return []
    if field.kind is ValueKind.SEQUENCE:
        items = cast("list[object]", field.value)
        return [display_string(item) for item in items]
    if field.kind is ValueKind.STRUCTURED:
        return [pretty_json(field.value)]
    if field.kind is ValueKind.TEXT:
        return [str(field.value)]
    return [display_string(field.value)]
