"""Masterplan land-cover classification."""

from ugf.classify.errors import ClassificationError
from ugf.classify.gemini import GeminiClassificationProvider
from ugf.classify.service import ClassificationClient
from ugf.classify.types import (
    Category,
    ClassificationEntry,
    ClassificationRequest,
    ClassificationResult,
)
from ugf.classify.validation import parse_classification_response, validate_entry

__all__ = [
    "Category",
    "ClassificationClient",
    "ClassificationEntry",
    "ClassificationError",
    "ClassificationRequest",
    "ClassificationResult",
    "GeminiClassificationProvider",
    "parse_classification_response",
    "validate_entry",
]
