# Copyright (c) Syntropy Systems
"""Exceptions raised by ladderlens."""
from __future__ import annotations

from enum import Enum


class LadderlensError(Exception):
    """Base class for ladderlens errors."""


class DecodeFailure(str, Enum):
    """Why a share token could not be turned back into a record."""

    MISSING_PAYLOAD = "No data found in URL"
    DECOMPRESSION_FAILED = "Failed to decompress data"
    INVALID_CONTENT = "Invalid data format"

    @property
    def message(self) -> str:
        return self.value


class ShareDecodeError(LadderlensError):
    """A share token was missing, corrupt, or did not hold a record."""

    def __init__(self, reason: DecodeFailure, detail: str | None = None) -> None:
        self.reason = reason
        self.detail = detail
        message = reason.message if not detail else f"{reason.message}: {detail}"
        super().__init__(message)


class UnsupportedInputError(LadderlensError):
    """Uploaded data could not be turned into records."""
