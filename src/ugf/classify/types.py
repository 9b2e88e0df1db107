"""Types for masterplan land-cover classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ugf.ingest.types import NormalizedImage


class Category(StrEnum):
    """The simplified Urban Greening Factor categories."""

    TREES_AND_SHRUBS = "TREES_AND_SHRUBS"
    GREEN_OPEN_SPACE = "GREEN_OPEN_SPACE"
    PERMEABLE_SURFACES = "PERMEABLE_SURFACES"
    IMPERMEABLE_SURFACES = "IMPERMEABLE_SURFACES"
    INCIDENTAL_PLAY_AREA = "INCIDENTAL_PLAY_AREA"


CATEGORY_NAMES: frozenset[str] = frozenset(c.value for c in Category)


@dataclass(frozen=True, slots=True)
class ClassificationEntry:
    """Share of the development area covered by one category."""

    category: str
    description: str
    percentage: float


# Ordered as returned by the model; replaced wholesale by each analysis
ClassificationResult = list[ClassificationEntry]


@dataclass(slots=True)
class ClassificationRequest:
    """One multimodal request: fixed prompt plus the masterplan image."""

    prompt: str
    model: str
    image: NormalizedImage
    temperature: float = 0.1
    timeout_seconds: float = 120.0
