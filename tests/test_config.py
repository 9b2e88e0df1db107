"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import SecretStr, ValidationError

from ugf.config import (
    ConfigError,
    GeminiConfig,
    UgfConfig,
    UploadConfig,
    get_config_path,
    load_config,
    require_api_key,
)


class TestDefaults:
    def test_defaults_without_file(self, isolated_env):
        config = load_config()

        assert config.gemini.api_key is None
        assert config.gemini.model == "gemini-2.5-flash"
        assert config.gemini.temperature == 0.1
        assert config.upload.max_bytes == 10 * 1024 * 1024
        assert config.upload.pdf_render_scale == 2.0
        assert config.upload.jpeg_quality == 95
        assert config.classification.enforce_categories is True
        assert config.server.port == 8080

    def test_config_path_under_home(self, isolated_env):
        assert get_config_path() == isolated_env / "ugf-home" / "config.toml"


class TestApiKeyResolution:
    def test_gemini_api_key_env(self, isolated_env, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "AIza-from-env")

        config = load_config()

        assert config.gemini.api_key.get_secret_value() == "AIza-from-env"

    def test_api_key_env_fallback(self, isolated_env, monkeypatch):
        monkeypatch.setenv("API_KEY", "legacy-key")

        assert load_config().gemini.api_key.get_secret_value() == "legacy-key"

    def test_gemini_api_key_preferred(self, isolated_env, monkeypatch):
        monkeypatch.setenv("API_KEY", "legacy-key")
        monkeypatch.setenv("GEMINI_API_KEY", "new-key")

        assert load_config().gemini.api_key.get_secret_value() == "new-key"

    def test_file_key_wins_over_env(self, isolated_env, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        Path("ugf.toml").write_text('[gemini]\napi_key = "file-key"\n')

        assert load_config().gemini.api_key.get_secret_value() == "file-key"


class TestConfigFile:
    def test_loads_cwd_file(self, isolated_env):
        Path("ugf.toml").write_text(
            "[gemini]\n"
            'model = "gemini-2.5-pro"\n'
            "request_timeout_seconds = 30\n"
            "[upload]\n"
            "max_bytes = 2048\n"
            "[server]\n"
            "port = 9000\n"
        )

        config = load_config()

        assert config.gemini.model == "gemini-2.5-pro"
        assert config.gemini.request_timeout_seconds == 30
        assert config.upload.max_bytes == 2048
        assert config.server.port == 9000

    def test_loads_home_file(self, isolated_env):
        home = isolated_env / "ugf-home"
        home.mkdir()
        (home / "config.toml").write_text("[classification]\nenforce_categories = false\n")

        assert load_config().classification.enforce_categories is False

    def test_explicit_path(self, isolated_env):
        path = isolated_env / "custom.toml"
        path.write_text("[server]\nhost = '0.0.0.0'\n")

        assert load_config(path).server.host == "0.0.0.0"

    def test_explicit_missing_path(self, isolated_env):
        with pytest.raises(FileNotFoundError):
            load_config(isolated_env / "missing.toml")

    def test_invalid_values_rejected(self, isolated_env):
        Path("ugf.toml").write_text("[upload]\njpeg_quality = 0\n")

        with pytest.raises(ValidationError):
            load_config()


class TestRequireApiKey:
    def test_returns_key(self, config):
        assert require_api_key(config).get_secret_value() == "AIza-test-key"

    @pytest.mark.parametrize("api_key", [None, SecretStr(""), SecretStr("   ")])
    def test_missing_key(self, api_key):
        config = UgfConfig(gemini=GeminiConfig(api_key=api_key))

        with pytest.raises(ConfigError, match="Gemini API key not set"):
            require_api_key(config)


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        GeminiConfig(request_timeout_seconds=0)


def test_secret_not_in_repr(config):
    assert "AIza-test-key" not in repr(config)


def test_upload_quality_bounds():
    with pytest.raises(ValidationError):
        UploadConfig(jpeg_quality=101)
