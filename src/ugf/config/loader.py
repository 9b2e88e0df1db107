"""Configuration loading from TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import SecretStr

from ugf.config.models import UgfConfig
from ugf.config.paths import get_config_path

logger = logging.getLogger(__name__)

# First match wins; API_KEY is the variable older deployments used
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("ugf.toml"),  # Current directory
        get_config_path(),  # ~/.ugf/config.toml (or UGF_HOME)
    ]


def _resolve_env_secrets(config: dict[str, Any]) -> dict[str, Any]:
    """Resolve the Gemini API key from the environment if not set in config."""
    gemini = config.setdefault("gemini", {})
    if gemini.get("api_key"):
        return config
    for env_var in API_KEY_ENV_VARS:
        value = os.environ.get(env_var)
        if value:
            gemini["api_key"] = SecretStr(value)
            break
    return config


def load_config(path: Path | None = None) -> UgfConfig:
    """Load configuration from an optional TOML file plus the environment.

    Args:
        path: Explicit path to config file. If None, searches default
            locations and falls back to defaults when none exists.

    Returns:
        Validated UgfConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ValueError: If the config file is invalid.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        logger.debug("config_loaded", extra={"config.path": str(config_path)})
        with config_path.open("rb") as f:
            raw_config = tomllib.load(f)

    raw_config = _resolve_env_secrets(raw_config)

    return UgfConfig.model_validate(raw_config)
