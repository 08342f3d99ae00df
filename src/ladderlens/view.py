# Copyright (c) Syntropy Systems
"""Build the render model for one record."""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, cast

from ladderlens.fields import (
    KEY_IDENTIFIER_FIELDS,
    FieldGroup,
    field_label,
    is_detail_field,
    partition_fields,
)
from ladderlens.ladder import classify
from ladderlens.metrics import compute_metrics, summary_cards
from ladderlens.models import (
    FieldDetail,
    LadderInfoView,
    RecordSections,
    RecordView,
    SettingsBlock,
)
from ladderlens.normalize import display_string, is_blank, pretty_json, try_parse_json
from ladderlens.pipeline import build_stages

if TYPE_CHECKING:
    from ladderlens.models import JSONValue, Record

MISSING = "N/A"
_TRUE_TEXT = ("true", "1")
_FALSE_TEXT = ("false", "0")
_BOOLEAN_NAME_HINTS = ("enable", "disable", "flag", "is_", "has_")


def key_identifiers(record: Record) -> dict[str, str]:
    identifiers: dict[str, str] = {}
    for name in KEY_IDENTIFIER_FIELDS:
        value = record.get(name)
        identifiers[name] = MISSING if is_blank(value) else display_string(value)
    return identifiers


def record_sections(record: Record) -> RecordSections:
    groups = partition_fields(record.keys())
    return RecordSections(
        key_identifiers=key_identifiers(record),
        ladder_info_fields=groups[FieldGroup.LADDER_INFO],
        settings_fields=groups[FieldGroup.SETTINGS],
        other_fields=[name for name in record if is_detail_field(name)],
    )


def is_boolean_field(name: str, value: JSONValue) -> bool:
    """Guess whether a field holds a flag, from its value or its name."""
    text = display_string(value).lower()
    if text in _TRUE_TEXT or text in _FALSE_TEXT:
        return True
    return any(hint in name for hint in _BOOLEAN_NAME_HINTS)


def boolean_value(value: JSONValue) -> bool | None:
    """True/False for flag-like values, None when the value isn't one."""
    text = display_string(value).lower()
    if text in _TRUE_TEXT:
        return True
    if text in _FALSE_TEXT:
        return False
    return None


def display_value(value: JSONValue) -> tuple[str, bool]:
    """Text for a detail field and whether it is formatted JSON."""
    if value is None or value == "":
        return MISSING, False
    if isinstance(value, (dict, list)):
        return pretty_json(value), True
    if isinstance(value, str):
        parsed = try_parse_json(value)
        if parsed.ok and isinstance(parsed.value, (dict, list)):
            return pretty_json(parsed.value), True
        return value, False
    return display_string(value), False


def _drop_empty(settings: dict[str, object]) -> dict[str, object]:
    return {k: v for k, v in settings.items() if v is not None and v != ""}


def format_settings(value: JSONValue, show_nulls: bool = False) -> tuple[str, bool]:
    """Pretty JSON for a settings field.

    Returns the text and whether null or empty entries were hidden.
    """
    data: object = value
    if isinstance(value, str):
        parsed = try_parse_json(value)
        if not parsed.ok:
            return value, False
        data = parsed.value
    elif value is None:
        return MISSING, False

    if isinstance(data, dict) and not show_nulls:
        settings = cast("dict[str, object]", data)
        filtered = _drop_empty(settings)
        if len(filtered) != len(settings):
            return json.dumps(filtered, indent=2, ensure_ascii=False), True
    return pretty_json(data), False


def field_details(record: Record, names: list[str]) -> list[FieldDetail]:
    details: list[FieldDetail] = []
    for name in names:
        value = record.get(name)
        if is_boolean_field(name, value):
            flag = boolean_value(value)
            details.append(
                FieldDetail(
                    name=name,
                    label=field_label(name),
                    text=display_string(value) if flag is None else str(flag),
                    is_boolean=True,
                    boolean_value=flag,
                )
            )
            continue
        text, is_json = display_value(value)
        details.append(
            FieldDetail(name=name, label=field_label(name), text=text, is_json=is_json)
        )
    return details


def build_record_view(
    record: Record,
    shared: bool = False,
    show_nulls: bool = False,
) -> RecordView:
    """Render model for one record.

    Shared views never include configuration fields.
    """
    sections = record_sections(record)
    stages = build_stages(record)

    ladder_info = [
        LadderInfoView(field=name, label=field_label(name), groups=classify(record[name]))
        for name in sections.ladder_info_fields
    ]

    settings: list[SettingsBlock] = []
    if not shared:
        for name in sections.settings_fields:
            text, hidden = format_settings(record[name], show_nulls=show_nulls)
            settings.append(
                SettingsBlock(
                    name=name,
                    label=field_label(name),
                    text=text,
                    has_hidden_nulls=hidden,
                )
            )

    return RecordView(
        shared=shared,
        sections=sections,
        cards=summary_cards(record),
        stages=stages,
        metrics=compute_metrics(stages),
        ladder_info=ladder_info,
        details=field_details(record, sections.other_fields),
        settings=settings,
    )
