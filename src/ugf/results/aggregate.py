"""Ordering and totals for classification results."""

from __future__ import annotations

from dataclasses import dataclass

from ugf.classify.types import ClassificationEntry


@dataclass(frozen=True, slots=True)
class AggregatedResult:
    """Entries sorted by share plus their display total."""

    entries: tuple[ClassificationEntry, ...]
    total_percentage: float


def aggregate(entries: list[ClassificationEntry]) -> AggregatedResult:
    """Sort by percentage descending and sum the shares.

    Ties keep their original relative order. The total is not clamped or
    renormalized, so it may differ from 100.
    """
    ordered = sorted(entries, key=lambda e: e.percentage, reverse=True)
    total = sum((e.percentage for e in entries), 0.0)
    return AggregatedResult(entries=tuple(ordered), total_percentage=total)
