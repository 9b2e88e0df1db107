"""Configuration module."""

from ugf.config.loader import load_config
from ugf.config.models import (
    SUPPORTED_MIME_TYPES,
    ClassificationConfig,
    ConfigError,
    GeminiConfig,
    ServerConfig,
    UgfConfig,
    UploadConfig,
    require_api_key,
)
from ugf.config.paths import get_config_path, get_ugf_home

__all__ = [
    "SUPPORTED_MIME_TYPES",
    "ClassificationConfig",
    "ConfigError",
    "GeminiConfig",
    "ServerConfig",
    "UgfConfig",
    "UploadConfig",
    "get_config_path",
    "get_ugf_home",
    "load_config",
    "require_api_key",
]
