# Copyright (c) Syntropy Systems
"""Pydantic models for ladderlens."""

from .base import ExtraAllowModel, JSONValue, LadderlensModel, Record
from .view import (
    FieldDetail,
    FunnelMetrics,
    LadderCandidate,
    LadderGroups,
    LadderInfoView,
    MetricCard,
    PipelineStage,
    RecordSections,
    RecordView,
    SettingsBlock,
)

__all__ = [
    "ExtraAllowModel",
    "FieldDetail",
    "FunnelMetrics",
    "JSONValue",
    "LadderCandidate",
    "LadderGroups",
    "LadderInfoView",
    "LadderlensModel",
    "MetricCard",
    "PipelineStage",
    "Record",
    "RecordSections",
    "RecordView",
    "SettingsBlock",
]
