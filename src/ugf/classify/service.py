"""Classification client orchestration."""

from __future__ import annotations

import asyncio
import logging
import time

from ugf.classify.base import ClassificationProvider
from ugf.classify.errors import CLASSIFICATION_FAILED, ClassificationError
from ugf.classify.prompt import CLASSIFICATION_PROMPT
from ugf.classify.types import ClassificationRequest, ClassificationResult
from ugf.classify.validation import parse_classification_response
from ugf.config.models import ClassificationConfig, GeminiConfig
from ugf.ingest.types import NormalizedImage

logger = logging.getLogger(__name__)


class ClassificationClient:
    """Sends one image to the provider and returns validated entries.

    Each call is a single remote attempt. Nothing is cached, so identical
    images produce independent calls.
    """

    def __init__(
        self,
        *,
        provider: ClassificationProvider,
        gemini: GeminiConfig | None = None,
        classification: ClassificationConfig | None = None,
    ) -> None:
        self._provider = provider
        self._gemini = gemini or GeminiConfig()
        self._classification = classification or ClassificationConfig()

    def build_request(self, image: NormalizedImage) -> ClassificationRequest:
        return ClassificationRequest(
            prompt=CLASSIFICATION_PROMPT,
            model=self._gemini.model,
            image=image,
            temperature=self._gemini.temperature,
            timeout_seconds=self._gemini.request_timeout_seconds,
        )

    async def classify(self, image: NormalizedImage) -> ClassificationResult:
        """Classify ``image``.

        Raises:
            ClassificationError: ``classification_failed`` for transport or
                service failures and timeouts, ``invalid_response_format``
                or ``empty_result`` for unusable responses.
        """
        request = self.build_request(image)
        started = time.monotonic()
        try:
            text = await asyncio.wait_for(
                self._provider.generate(request),
                timeout=request.timeout_seconds,
            )
        except TimeoutError as e:
            raise ClassificationError(
                CLASSIFICATION_FAILED,
                f"{self._provider.name} request timed out after "
                f"{request.timeout_seconds:g}s",
            ) from e
        except Exception as e:
            raise ClassificationError(
                CLASSIFICATION_FAILED, f"{self._provider.name} API error: {e}"
            ) from e

        entries = parse_classification_response(
            text, enforce_categories=self._classification.enforce_categories
        )
        logger.info(
            "classification_completed",
            extra={
                "classification.provider": self._provider.name,
                "classification.model": request.model,
                "entries.count": len(entries),
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return entries
