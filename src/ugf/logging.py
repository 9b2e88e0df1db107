"""Centralized logging configuration for UGF.

All entry points (CLI, server) should call configure_logging() early.

Logging Levels:
- DEBUG: Request payload sizes, config discovery
- INFO: File normalization and analysis start/finish
- WARNING: Dropped response entries, stale results, user-facing failures
- ERROR: Unexpected failures at an action boundary

Event names are snake_case with structured fields passed via ``extra``.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any

# Default patterns for secret detection and redaction
DEFAULT_REDACT_PATTERNS: list[str] = [
    # Google API keys (Gemini)
    r"\b(AIza[0-9A-Za-z\-_]{20,})\b",
    # Other common API key prefixes
    r"\b(sk-[A-Za-z0-9_-]{20,})\b",
    # ENV-style assignments: API_KEY=secret or API_KEY: secret
    # Requires at least one char before keyword to avoid matching standalone words like "Token:"
    r"\b[A-Z0-9_]+(?:KEY|TOKEN|SECRET|PASSWORD|PASSWD)\s*[=:]\s*([^\s\"']{8,})",
    # API key passed as a query parameter
    r"[?&]key=([A-Za-z0-9._\-]{12,})",
    # Bearer tokens in headers
    r"\bBearer\s+([A-Za-z0-9._\-+=]{20,})\b",
]


@dataclass
class SecretRedactor:
    """Redacts sensitive information from log messages.

    Patterns match common secret formats (API keys, tokens, passwords)
    and replace them with partially masked versions for debuggability.
    """

    patterns: list[re.Pattern[str]] = field(default_factory=list)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.patterns:
            self.patterns = [
                re.compile(p, re.IGNORECASE) for p in DEFAULT_REDACT_PATTERNS
            ]

    def redact(self, text: str) -> str:
        """Redact secrets from text, preserving partial info for debugging."""
        if not self.enabled or not text:
            return text
        result = text
        for pattern in self.patterns:
            result = pattern.sub(self._mask_match, result)
        return result

    def _mask_match(self, match: re.Match[str]) -> str:
        """Mask a matched secret, preserving start/end for identification."""
        full = match.group(0)
        token = match.group(1) if match.lastindex else full

        # Already masked by an earlier pattern
        if "..." in token:
            return full

        if len(token) < 12:
            return full.replace(token, "***") if token != full else "***"

        masked = f"{token[:4]}...{token[-4:]}"
        return full.replace(token, masked) if token != full else masked


_redactor = SecretRedactor()

# Attributes every LogRecord carries; anything else came from ``extra``.
# uvicorn repeats the message with ANSI colors as ``color_message``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "component", "color_message"}


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the structured fields passed to the log call via ``extra``."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


def _format_value(value: Any) -> str:
    if isinstance(value, str) and value and not any(c.isspace() for c in value):
        return value
    return json.dumps(value, default=str)


class RedactingFilter(logging.Filter):
    """Masks secrets in each record's message and string ``extra`` fields.

    The message is rendered once and args are cleared so handlers
    downstream format the redacted text.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _redactor.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        for key, value in record_extras(record).items():
            if isinstance(value, str):
                setattr(record, key, _redactor.redact(value))
        return True


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - ugf.classify.service -> classify
    - ugf.ingest.normalizer -> ingest
    - ugf.server.app -> server

    Structured ``extra`` fields are appended to the first line as
    ``key=value`` pairs, and the whole output (tracebacks included) is
    passed through the secret redactor.
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "ugf":
            record.component = parts[1]
        else:
            record.component = parts[0]
        output = super().format(record)

        extras = record_extras(record)
        if extras:
            fields = " ".join(f"{k}={_format_value(v)}" for k, v in extras.items())
            head, sep, tail = output.partition("\n")
            output = f"{head} {fields}{sep}{tail}"
        return _redactor.redact(output)


# Third-party loggers that are too noisy at INFO level
NOISY_LOGGERS = [
    "httpx",  # HTTP client used by google-genai
    "httpcore",  # httpx dependency
    "google_genai",  # Gemini SDK
    "uvicorn.access",  # Request logging
    "multipart",  # Form parsing
]


def configure_logging(
    level: str | None = None,
    use_rich: bool = False,
) -> None:
    """Configure logging for UGF.

    Call this once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses UGF_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful output (server mode).
    """
    if level is None:
        level = os.environ.get("UGF_LOG_LEVEL", "INFO").upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            level = "INFO"

    log_level = getattr(logging, level)

    if use_rich:
        from rich.logging import RichHandler

        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        console_handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    console_handler.addFilter(RedactingFilter())
    handlers = [console_handler]

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,
    )

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    # Route uvicorn through the same handlers (server mode)
    if use_rich:
        for logger_name in ("uvicorn", "uvicorn.error"):
            uv_logger = logging.getLogger(logger_name)
            uv_logger.handlers = list(handlers)
            uv_logger.propagate = False
