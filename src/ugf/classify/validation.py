"""Explicit validation of classification responses.

Each element of the model's JSON array is checked on its own and either
accepted as a ClassificationEntry or rejected with a reason.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any

from ugf.classify.errors import (
    EMPTY_RESULT,
    INVALID_RESPONSE_FORMAT,
    ClassificationError,
)
from ugf.classify.types import CATEGORY_NAMES, ClassificationEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EntryValidation:
    """Accept/reject verdict for one response element."""

    entry: ClassificationEntry | None
    reason: str | None = None

    @property
    def accepted(self) -> bool:
        return self.entry is not None


def _is_number(value: Any) -> bool:
    # bool is an int subclass but JSON true/false is not a number
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def validate_entry(item: Any, *, enforce_categories: bool = True) -> EntryValidation:
    """Check one element against the entry schema."""
    if not isinstance(item, dict):
        return EntryValidation(None, "not_an_object")

    for key in ("category", "description", "percentage"):
        if key not in item:
            return EntryValidation(None, f"missing_{key}")

    category = item["category"]
    description = item["description"]
    percentage = item["percentage"]

    if not isinstance(category, str):
        return EntryValidation(None, "category_not_string")
    if not isinstance(description, str):
        return EntryValidation(None, "description_not_string")
    if not _is_number(percentage):
        return EntryValidation(None, "percentage_not_number")
    if enforce_categories and category not in CATEGORY_NAMES:
        return EntryValidation(None, "unknown_category")

    return EntryValidation(
        ClassificationEntry(
            category=category,
            description=description,
            percentage=float(percentage),
        )
    )


def parse_classification_response(
    text: str | None, *, enforce_categories: bool = True
) -> list[ClassificationEntry]:
    """Parse and validate the raw response text.

    Malformed elements are dropped with a warning.

    Raises:
        ClassificationError: ``invalid_response_format`` if the text is not
            a JSON array, ``empty_result`` if no element survives.
    """
    stripped = (text or "").strip()
    if not stripped:
        raise ClassificationError(INVALID_RESPONSE_FORMAT, "Empty response text")

    try:
        parsed = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise ClassificationError(
            INVALID_RESPONSE_FORMAT, f"Response is not valid JSON: {e}"
        ) from e

    if not isinstance(parsed, list):
        raise ClassificationError(
            INVALID_RESPONSE_FORMAT,
            f"Expected a JSON array, got {type(parsed).__name__}",
        )

    entries: list[ClassificationEntry] = []
    rejected: dict[str, int] = {}
    for item in parsed:
        verdict = validate_entry(item, enforce_categories=enforce_categories)
        if verdict.entry is not None:
            entries.append(verdict.entry)
        else:
            reason = verdict.reason or "invalid"
            rejected[reason] = rejected.get(reason, 0) + 1

    if rejected:
        logger.warning(
            "classification_entries_dropped",
            extra={
                "entries.received": len(parsed),
                "entries.dropped": len(parsed) - len(entries),
                "entries.reasons": rejected,
            },
        )

    if not entries:
        raise ClassificationError(
            EMPTY_RESULT, "Response contained no valid classification entries"
        )
    return entries
