"""Configuration models using Pydantic."""

import logging

from pydantic import BaseModel, Field, SecretStr, field_validator

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_RENDER_PIXELS = 64_000_000

SUPPORTED_MIME_TYPES: tuple[str, ...] = (
    "application/pdf",
    "image/jpeg",
    "image/png",
    "image/webp",
)


class GeminiConfig(BaseModel):
    """Configuration for the Gemini classification model.

    The model identifier names a fixed model version so results stay
    comparable between runs.
    """

    api_key: SecretStr | None = None
    model: str = "gemini-2.5-flash"
    temperature: float = 0.1
    request_timeout_seconds: float = 120.0

    @field_validator("request_timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return value


class UploadConfig(BaseModel):
    """Limits and rendering parameters for uploaded masterplans."""

    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    allowed_mime_types: tuple[str, ...] = SUPPORTED_MIME_TYPES
    # PDF page 1 is rendered at this multiple of its native size
    pdf_render_scale: float = 2.0
    # Pillow 1-100 scale; 95 is the 0.95 encoder quality
    jpeg_quality: int = Field(default=95, ge=1, le=100)
    # Pages rendering larger than this are refused before allocation
    max_render_pixels: int = Field(default=DEFAULT_MAX_RENDER_PIXELS, ge=1)


class ClassificationConfig(BaseModel):
    """Response validation settings."""

    # Reject entries whose category is outside the five UGF categories
    enforce_categories: bool = True


class ServerConfig(BaseModel):
    """Configuration for the HTTP server."""

    host: str = "127.0.0.1"
    port: int = 8080
    max_sessions: int = Field(default=256, ge=1)


class ConfigError(Exception):
    """Configuration error."""

    pass


class UgfConfig(BaseModel):
    """Root configuration model."""

    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def require_api_key(config: UgfConfig) -> SecretStr:
    """Return the Gemini credential or fail start-up.

    Raises:
        ConfigError: If no non-blank API key is configured.
    """
    api_key = config.gemini.api_key
    if api_key is None or not api_key.get_secret_value().strip():
        raise ConfigError(
            "Gemini API key not set. Set GEMINI_API_KEY (or API_KEY) "
            "or add [gemini] api_key to the config file."
        )
    return api_key
