# Copyright (c) Syntropy Systems
"""Stage-to-stage diffing of ladder item lists.

Removal is counted per distinct value, not by membership: if a stage
holds ``["a", "a", "b"]`` and the next holds ``["a"]``, one ``a`` and the
``b`` were removed. Removed items are listed grouped by value, in the
order each value first appears in the earlier stage.
"""
from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ladderlens.models import PipelineStage


def count_occurrences(items: Iterable[str]) -> Counter[str]:
    """Count each value, keyed in order of first appearance."""
    return Counter(items)


def removed_between(previous: Sequence[str], current: Sequence[str]) -> list[str]:
    """Items whose occurrence count dropped from ``previous`` to ``current``.

    Values that only show up in ``current`` are ignored.
    """
    before = count_occurrences(previous)
    after = count_occurrences(current)
    removed: list[str] = []
    for item, count in before.items():
        removed.extend([item] * max(0, count - after[item]))
    return removed


def removed_per_stage(item_lists: Sequence[Sequence[str]]) -> list[list[str]]:
    """Removed items for each stage; the first stage never removes anything."""
    removed: list[list[str]] = []
    for index, items in enumerate(item_lists):
        if index == 0:
            removed.append([])
        else:
            removed.append(removed_between(item_lists[index - 1], items))
    return removed


def compute_removed(stages: Sequence[PipelineStage]) -> list[list[str]]:
    """Removed items for each stage of a pipeline, same length as ``stages``."""
    return removed_per_stage([stage.items for stage in stages])
