# Copyright (c) Syntropy Systems
"""Funnel metrics and headline cards for a single record."""
from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from ladderlens.models import FunnelMetrics, MetricCard
from ladderlens.normalize import display_string, is_blank
from ladderlens.stages import compute_removed

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ladderlens.models import PipelineStage, Record

MIN_STAGE_WIDTH = 60.0
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def percent_of(count: int, base: int) -> float:
    """``count`` as a percentage of ``base``; 0 when ``base`` is 0."""
    if base <= 0:
        return 0.0
    return count / base * 100


def stage_percentages(counts: Sequence[int]) -> list[float]:
    """Each stage's count relative to the first stage.

    The first stage is always 100.
    """
    if not counts:
        return []
    first = counts[0]
    return [100.0] + [percent_of(count, first) for count in counts[1:]]


def compute_metrics(stages: Sequence[PipelineStage]) -> FunnelMetrics:
    """Derive funnel metrics from an ordered stage list."""
    if not stages:
        return FunnelMetrics()

    counts = [stage.count for stage in stages]
    removed = compute_removed(stages)

    return FunnelMetrics(
        stage_percentages=stage_percentages(counts),
        total_initial=counts[0],
        total_final=counts[-1],
        stage_count=len(stages),
        retention_percent=percent_of(counts[-1], counts[0]),
        total_removed=sum(len(items) for items in removed),
    )


def stage_width(count: int, max_count: int, index: int, total: int) -> float:
    """Display width of a funnel bar, as a percentage of the full width.

    Uses square-root scaling over a minimum that grows with depth, so
    late stages stay wide enough to label.
    """
    if max_count <= 0 or total <= 0:
        return MIN_STAGE_WIDTH
    minimum = 70 + (index / total) * 15
    scaled = math.sqrt(count / max_count)
    return max(minimum + scaled * (100 - minimum), minimum)


def leading_float(value: object) -> float:
    """Parse the numeric prefix of a value ("12.5s" -> 12.5); 0.0 if none."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, float):
        return 0.0 if math.isnan(value) else value
    if value is None:
        return 0.0
    match = _LEADING_NUMBER.match(str(value))
    if match is None:
        return 0.0
    return float(match.group())


def _text(record: Record, *keys: str, default: str = "Unknown") -> str:
    for key in keys:
        value = record.get(key)
        if not is_blank(value):
            return display_string(value)
    return default


def summary_cards(record: Record) -> list[MetricCard]:
    """Headline values for one record."""
    duration = leading_float(record.get("video_duration"))
    score = leading_float(record.get("overall_score"))

    return [
        MetricCard(title="Region", value=_text(record, "priority_region")),
        MetricCard(
            title="DeviceType",
            value=_text(record, "device_type", "device_platform"),
        ),
        MetricCard(title="Client Version", value=_text(record, "client_version")),
        MetricCard(title="Duration", value=f"{duration:.1f}s"),
        MetricCard(title="Access", value=_text(record, "access_type")),
        MetricCard(title="Score", value=f"{score:.1f}"),
    ]
