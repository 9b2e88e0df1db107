"""Gemini-backed classification provider."""

from __future__ import annotations

import logging

from google import genai
from google.genai import types

from ugf.classify.base import ClassificationProvider
from ugf.classify.prompt import FIELD_DESCRIPTIONS, REQUIRED_FIELDS
from ugf.classify.types import ClassificationRequest

logger = logging.getLogger(__name__)


def build_response_schema() -> types.Schema:
    """Array of {category, description, percentage}, all required."""
    return types.Schema(
        type=types.Type.ARRAY,
        items=types.Schema(
            type=types.Type.OBJECT,
            properties={
                "category": types.Schema(
                    type=types.Type.STRING,
                    description=FIELD_DESCRIPTIONS["category"],
                ),
                "description": types.Schema(
                    type=types.Type.STRING,
                    description=FIELD_DESCRIPTIONS["description"],
                ),
                "percentage": types.Schema(
                    type=types.Type.NUMBER,
                    description=FIELD_DESCRIPTIONS["percentage"],
                ),
            },
            required=list(REQUIRED_FIELDS),
        ),
    )


class GeminiClassificationProvider(ClassificationProvider):
    """google-genai implementation of the classification call."""

    def __init__(self, api_key: str, client: genai.Client | None = None) -> None:
        self._client = client or genai.Client(api_key=api_key)

    @property
    def name(self) -> str:
        return "gemini"

    async def generate(self, request: ClassificationRequest) -> str:
        contents = [
            types.Part.from_text(text=request.prompt),
            types.Part.from_bytes(
                data=request.image.data,
                mime_type=request.image.mime_type,
            ),
        ]
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=build_response_schema(),
            temperature=request.temperature,
        )
        logger.debug(
            "gemini_request",
            extra={
                "gemini.model": request.model,
                "image.mime_type": request.image.mime_type,
                "image.bytes": request.image.size,
            },
        )
        response = await self._client.aio.models.generate_content(
            model=request.model,
            contents=contents,
            config=config,
        )
        return response.text or ""
