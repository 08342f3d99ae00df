# Copyright (c) Syntropy Systems
"""Pydantic models for the single-record render model."""

from __future__ import annotations

from pydantic import Field

from ladderlens.normalize import display_string, is_blank

from .base import ExtraAllowModel, JSONValue, LadderlensModel


class PipelineStage(LadderlensModel):
    """One point in the filtering pipeline."""

    name: str
    source_field: str
    items: list[str] = Field(default_factory=list)
    count: int = 0
    percentage: float = 0.0
    removed: list[str] = Field(default_factory=list)


class FunnelMetrics(LadderlensModel):
    """Counts and ratios derived from the stage list."""

    stage_percentages: list[float] = Field(default_factory=list)
    total_initial: int = 0
    total_final: int = 0
    stage_count: int = 0
    retention_percent: float = 0.0
    total_removed: int = 0


class MetricCard(LadderlensModel):
    """A headline value shown above the funnel."""

    title: str
    value: str


class LadderCandidate(ExtraAllowModel):
    """One encoding ladder evaluated for the final set.

    Fields other than the well-known ones are kept as extras.
    """

    name: str
    bitrate: JSONValue = None
    universal_vmaf: JSONValue = None
    status: JSONValue = None
    reason: JSONValue = None
    definition: JSONValue = None

    @property
    def bitrate_label(self) -> str:
        if is_blank(self.bitrate):
            return "N/A"
        return f"{display_string(self.bitrate)}bps"

    @property
    def vmaf_label(self) -> str:
        vmaf = self.universal_vmaf
        if is_blank(vmaf):
            return "N/A"
        if isinstance(vmaf, (int, float)):
            try:
                return f"{vmaf:.2f}"
            except OverflowError:
                return display_string(vmaf)
        return str(vmaf)

    @property
    def definition_label(self) -> str:
        if is_blank(self.definition):
            return "N/A"
        return display_string(self.definition)

    @property
    def reason_label(self) -> str:
        if is_blank(self.reason):
            return "N/A"
        return display_string(self.reason)


class LadderGroups(LadderlensModel):
    """Candidates split by selection status."""

    selected: list[LadderCandidate] = Field(default_factory=list)
    rejected: list[LadderCandidate] = Field(default_factory=list)
    # Status neither "1" nor "0"; kept out of both groups
    unclassified: list[LadderCandidate] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.selected) + len(self.rejected) + len(self.unclassified)


class LadderInfoView(LadderlensModel):
    """Classified candidates of one ladder-info field."""

    field: str
    label: str
    groups: LadderGroups


class FieldDetail(LadderlensModel):
    """A record field prepared for the detail listing."""

    name: str
    label: str
    text: str
    is_boolean: bool = False
    boolean_value: bool | None = None
    is_json: bool = False


class SettingsBlock(LadderlensModel):
    """A configuration field rendered as JSON."""

    name: str
    label: str
    text: str
    has_hidden_nulls: bool = False


class RecordSections(LadderlensModel):
    """Record fields grouped the way the view lays them out."""

    key_identifiers: dict[str, str] = Field(default_factory=dict)
    ladder_info_fields: list[str] = Field(default_factory=list)
    settings_fields: list[str] = Field(default_factory=list)
    other_fields: list[str] = Field(default_factory=list)


class RecordView(LadderlensModel):
    """Everything needed to render one record."""

    shared: bool = False
    sections: RecordSections
    cards: list[MetricCard] = Field(default_factory=list)
    stages: list[PipelineStage] = Field(default_factory=list)
    metrics: FunnelMetrics
    ladder_info: list[LadderInfoView] = Field(default_factory=list)
    details: list[FieldDetail] = Field(default_factory=list)
    settings: list[SettingsBlock] = Field(default_factory=list)
