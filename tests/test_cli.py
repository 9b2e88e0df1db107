"""Tests for the command line entry point."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ugf.cli.app import app


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr("ugf.logging.configure_logging", lambda **kwargs: None)


def test_help(cli_runner):
    result = cli_runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "serve" in result.output


def test_serve_requires_api_key(cli_runner, isolated_env):
    result = cli_runner.invoke(app, ["serve"])

    assert result.exit_code == 1
    assert "Gemini API key not set" in result.output


def test_serve_missing_config_file(cli_runner, isolated_env):
    result = cli_runner.invoke(app, ["serve", "--config", str(isolated_env / "nope.toml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_serve_uses_config_and_overrides(cli_runner, isolated_env, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "AIza-cli-key")
    Path("ugf.toml").write_text("[server]\nhost = '0.0.0.0'\nport = 9000\n")
    calls: list[tuple[str, int]] = []

    async def _fake_run_server(config, *, host, port):
        assert config.gemini.api_key.get_secret_value() == "AIza-cli-key"
        calls.append((host, port))

    monkeypatch.setattr("ugf.cli.app._run_server", _fake_run_server)

    result = cli_runner.invoke(app, ["serve", "--port", "9100"])

    assert result.exit_code == 0
    assert calls == [("0.0.0.0", 9100)]
