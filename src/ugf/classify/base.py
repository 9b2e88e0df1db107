"""Classification provider interface."""

from __future__ import annotations

from typing import Protocol

from ugf.classify.types import ClassificationRequest


class ClassificationProvider(Protocol):
    """Provider contract for masterplan classification."""

    @property
    def name(self) -> str:
        """Stable provider name."""
        ...

    async def generate(self, request: ClassificationRequest) -> str:
        """Send the request and return the raw response text."""
        ...
