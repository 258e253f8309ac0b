"""Core type definitions shared across the vehicle tax modules."""

from __future__ import annotations

from enum import StrEnum


class Region(StrEnum):
    """Belgian tax region the vehicle is registered in."""

    WALLONIA_BRUSSELS = "wallonia_brussels"
    FLANDERS = "flanders"


class ReportStatus(StrEnum):
    """Whether the engine produced amounts for a profile."""

    COMPUTED = "computed"
    UNSUPPORTED_REGION = "unsupported_region"


class TaxBurden(StrEnum):
    """Qualitative label for the one-time registration cost."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
