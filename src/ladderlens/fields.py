# Copyright (c) Syntropy Systems
"""Record field naming conventions."""
from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

KEY_IDENTIFIER_FIELDS = ("vid", "item_id", "device_id", "user_id")
SETTINGS_SUFFIX = "_settings"
LADDER_INFO_MARKER = "ladder_info"
STAGE_FIELD_PREFIX = "ladders_"

# Shown on the metric cards, so left out of the detail listing
CARD_FIELDS = (
    "priority_region",
    "device_platform",
    "video_duration",
    "overall_score",
    "access_type",
)

# Pipeline order matters: each stage filters the one before it.
STAGE_FIELDS: tuple[tuple[str, str], ...] = (
    ("ladders_before_filter_adaptive_video", "Before Adaptive Video Filter"),
    ("ladders_after_filter_adaptive_video", "After Adaptive Video Filter"),
    (
        "ladders_after_filter_ladder_based_on_strategy_info",
        "After Strategy Based Filter",
    ),
    (
        "ladders_after_filter_ladder_based_on_create_time",
        "After Create Time Filter",
    ),
    ("ladders_after_filter_ab_test_encode_user_tag", "After Encode User Tags Filter"),
    (
        "ladders_after_filter_video_play_qualities",
        "After Video Play Qualities Filter",
    ),
    (
        "ladders_after_filter_irregular_bitrate_ladder_group",
        "After Irregular Bitrate Group Filter",
    ),
    ("ladders_after_filter_irregular_bitrate_ladder", "Final Result"),
)
STAGE_FIELD_NAMES = frozenset(field for field, _ in STAGE_FIELDS)

_WORD_START = re.compile(r"\b\w")


class FieldGroup(str, Enum):
    """Which part of the view a record field belongs to."""

    KEY = "key"
    SETTINGS = "settings"
    LADDER_INFO = "ladder_info"
    STAGE = "stage"
    OTHER = "other"


def is_key_identifier(name: str) -> bool:
    return name in KEY_IDENTIFIER_FIELDS


def is_settings_field(name: str) -> bool:
    return name.endswith(SETTINGS_SUFFIX)


def is_ladder_info_field(name: str) -> bool:
    return LADDER_INFO_MARKER in name.lower()


def is_stage_field(name: str) -> bool:
    return name in STAGE_FIELD_NAMES


def field_group(name: str) -> FieldGroup:
    """Classify a field name, first match wins.

    Key identifiers beat every other rule, then settings, ladder info and
    the reserved stage names.
    """
    if is_key_identifier(name):
        return FieldGroup.KEY
    if is_settings_field(name):
        return FieldGroup.SETTINGS
    if is_ladder_info_field(name):
        return FieldGroup.LADDER_INFO
    if is_stage_field(name):
        return FieldGroup.STAGE
    return FieldGroup.OTHER


def partition_fields(names: Iterable[str]) -> dict[FieldGroup, list[str]]:
    """Group field names, keeping their original order within each group."""
    groups: dict[FieldGroup, list[str]] = {group: [] for group in FieldGroup}
    for name in names:
        groups[field_group(name)].append(name)
    return groups


def is_detail_field(name: str) -> bool:
    """True for fields listed under additional information.

    Anything starting with ``ladders_`` is left out, not only the eight
    reserved stage fields.
    """
    return (
        field_group(name) is FieldGroup.OTHER
        and not name.startswith(STAGE_FIELD_PREFIX)
        and name not in CARD_FIELDS
    )


def field_label(name: str) -> str:
    """Turn ``video_play_quality`` into ``Video Play Quality``."""
    return _WORD_START.sub(lambda match: match.group().upper(), name.replace("_", " "))
