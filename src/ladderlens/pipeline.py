# Copyright (c) Syntropy Systems
"""Assemble the ordered stage list for a record."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ladderlens.fields import STAGE_FIELDS
from ladderlens.metrics import stage_percentages
from ladderlens.models import PipelineStage
from ladderlens.normalize import normalize_items
from ladderlens.stages import removed_per_stage

if TYPE_CHECKING:
    from ladderlens.models import Record


def build_stages(record: Record) -> list[PipelineStage]:
    """Normalize every reserved stage field into a :class:`PipelineStage`.

    Missing fields give empty stages, so the list always has one entry
    per reserved stage.
    """
    item_lists = [normalize_items(record.get(field)) for field, _ in STAGE_FIELDS]
    percentages = stage_percentages([len(items) for items in item_lists])
    removed = removed_per_stage(item_lists)

    return [
        PipelineStage(
            name=label,
            source_field=field,
            items=items,
            count=len(items),
            percentage=percentages[index],
            removed=removed[index],
        )
        for index, ((field, label), items) in enumerate(zip(STAGE_FIELDS, item_lists))
    ]
