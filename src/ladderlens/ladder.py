# Copyright (c) Syntropy Systems
"""Parse ladder info into candidates and split them by selection status.

Ladder info arrives in several shapes:

* a mapping of ladder name to info object,
* a list of such mappings,
* either of the above as a JSON string, with info values that may
  themselves be JSON strings (spreadsheet exports encode twice).

Parsing never raises. Anything that cannot be read as an info object is
skipped.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ladderlens.models import LadderCandidate, LadderGroups
from ladderlens.normalize import display_string, is_blank, try_parse_json

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

SELECTED_STATUS = "1"
REJECTED_STATUS = "0"


def numeric_bitrate(value: object) -> float:
    """Bitrate as a number; missing or non-numeric values count as 0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int):
        try:
            number = float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return 0.0 if math.isnan(number) else number


def reason_key(value: object) -> str:
    """Case-insensitive reason text; missing reasons sort as ""."""
    if is_blank(value):
        return ""
    return display_string(value).lower()


def status_text(candidate: LadderCandidate) -> str:
    return display_string(candidate.status)


def rejected_sort_key(candidate: LadderCandidate) -> tuple[str, float]:
    """Reason ascending, then bitrate descending."""
    return reason_key(candidate.reason), -numeric_bitrate(candidate.bitrate)


def selected_sort_key(candidate: LadderCandidate) -> float:
    """Bitrate descending."""
    return -numeric_bitrate(candidate.bitrate)


def _make_candidate(
    name: str,
    info: Mapping[str, object],
    log: logging.Logger,
) -> LadderCandidate | None:
    # Info keys win over the mapping key, including "name"
    data: dict[str, object] = {"name": name, **info}
    if not isinstance(data["name"], str):
        data["name"] = display_string(data["name"])
    try:
        return LadderCandidate.model_validate(data)
    except ValidationError as e:
        log.debug("Skipping ladder %r: %s", name, e)
        return None


def _from_list(entries: list[object], log: logging.Logger) -> list[LadderCandidate]:
    candidates: list[LadderCandidate] = []
    for entry in entries:
        if not isinstance(entry, dict):
            log.debug("Skipping non-object ladder entry: %r", entry)
            continue
        for name, info in entry.items():
            if not isinstance(info, dict):
                log.debug("Skipping non-object ladder info for %r", name)
                continue
            candidate = _make_candidate(str(name), info, log)
            if candidate is not None:
                candidates.append(candidate)
    return candidates


def _from_mapping(
    mapping: dict[str, object],
    log: logging.Logger,
) -> list[LadderCandidate]:
    candidates: list[LadderCandidate] = []
    for name, info in mapping.items():
        if isinstance(info, str):
            inner = try_parse_json(info)
            if inner.ok:
                log.debug("Parsed inner ladder info for %r", name)
                info = inner.value
            else:
                info = {"value": info}
        if not isinstance(info, dict):
            log.debug(
                "Skipping non-object ladder info for %r: %s",
                name,
                type(info).__name__,
            )
            continue
        candidate = _make_candidate(str(name), info, log)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def parse_candidates(
    raw: object,
    log: logging.Logger | None = None,
) -> list[LadderCandidate]:
    """Parse a ladder-info value into candidates, in source order.

    Args:
        raw: Ladder-info field value in any supported shape.
        log: Logger for parse tracing; defaults to this module's logger.

    Returns:
        Every candidate found, whatever its status.

    """
    log = log or logger
    data = raw
    if isinstance(raw, str):
        parsed = try_parse_json(raw)
        if not parsed.ok:
            log.debug("Ladder info is not valid JSON; ignoring it")
            return []
        data = parsed.value

    if isinstance(data, list):
        candidates = _from_list(data, log)
    elif isinstance(data, dict):
        candidates = _from_mapping(data, log)
    else:
        candidates = []

    log.debug("Parsed %d ladder candidates", len(candidates))
    return candidates


def split_by_status(
    candidates: Iterable[LadderCandidate],
) -> tuple[list[LadderCandidate], list[LadderCandidate], list[LadderCandidate]]:
    """Split into (selected, rejected, unclassified), keeping input order."""
    selected: list[LadderCandidate] = []
    rejected: list[LadderCandidate] = []
    unclassified: list[LadderCandidate] = []
    for candidate in candidates:
        status = status_text(candidate)
        if status == SELECTED_STATUS:
            selected.append(candidate)
        elif status == REJECTED_STATUS:
            rejected.append(candidate)
        else:
            unclassified.append(candidate)
    return selected, rejected, unclassified


def classify(raw: object, log: logging.Logger | None = None) -> LadderGroups:
    """Parse ladder info and sort it into selected and rejected groups.

    Candidates whose status is neither "1" nor "0" land in neither group;
    they are reported separately as ``unclassified``.
    """
    selected, rejected, unclassified = split_by_status(parse_candidates(raw, log))
    if unclassified:
        (log or logger).debug(
            "%d ladder candidates have an unknown status", len(unclassified)
        )
    return LadderGroups(
        selected=sorted(selected, key=selected_sort_key),
        rejected=sorted(rejected, key=rejected_sort_key),
        unclassified=unclassified,
    )
