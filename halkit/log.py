"""Logging support for halkit.

Two layers are involved:

- Every module logs through the standard library
  (``logging.getLogger(__name__)``).
- The transport additionally invokes a per-request ``RequestLogger`` hook
  (``debug``/``error``) so host applications can observe traffic without
  configuring logging. The default hook does nothing.

Sensitive header values are redacted before they reach either layer.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

REDACTED = "***REDACTED***"

SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "set-cookie",
        "proxy-authorization",
        "x-api-key",
        "x-auth-token",
    }
)

# Environment name -> log level
LOG_LEVEL_MAP: dict[str, int] = {
    "moto": logging.DEBUG,
    "development": logging.DEBUG,
    "staging": logging.WARNING,
    "production": logging.ERROR,
}


def get_log_level_for_environment(environment: str | None) -> int:
    """Determine the log level for an environment name (INFO when unknown)."""
    if not environment:
        return logging.INFO
    return LOG_LEVEL_MAP.get(environment.lower(), logging.INFO)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy headers with credential-bearing values replaced."""
    return {
        key: (REDACTED if key.lower() in SENSITIVE_HEADERS else value)
        for key, value in headers.items()
    }


@runtime_checkable
class RequestLogger(Protocol):
    """Hook invoked by the transport for every request and response."""

    def debug(self, message: str, context: dict[str, Any] | None = None) -> None: ...

    def error(self, message: str, context: dict[str, Any] | None = None) -> None: ...


class NullRequestLogger:
    """Default hook: discards everything."""

    def debug(self, message: str, context: dict[str, Any] | None = None) -> None:
        pass

    def error(self, message: str, context: dict[str, Any] | None = None) -> None:
        pass


class StdlibRequestLogger:
    """Forward request hooks to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("halkit.requests")

    def debug(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.logger.debug("%s %s", message, context or {})

    def error(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.logger.error("%s %s", message, context or {})


class SensitiveDataFilter(logging.Filter):
    """Logging filter that redacts credentials from log records."""

    DEFAULT_PATTERNS = [
        (
            re.compile(r"(password|passwd|pwd)['\"]?\s*[:=]\s*['\"]?([^\s'\"]+)", re.IGNORECASE),
            rf"\1={REDACTED}",
        ),
        (
            re.compile(
                r"(token|api_key|apikey|secret)['\"]?\s*[:=]\s*['\"]?([^\s'\",}]+)", re.IGNORECASE
            ),
            rf"\1={REDACTED}",
        ),
        (
            re.compile(r"(bearer|basic)\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
            rf"\1 {REDACTED}",
        ),
    ]

    def __init__(self, additional_patterns: list[tuple[re.Pattern[str], str]] | None = None) -> None:
        super().__init__()
        self.patterns = list(self.DEFAULT_PATTERNS)
        if additional_patterns:
            self.patterns.extend(additional_patterns)

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self._redact(record.msg)
        if record.args:
            if isinstance(record.args, tuple):
                record.args = tuple(
                    self._redact(arg) if isinstance(arg, str) else arg for arg in record.args
                )
        return True

    def _redact(self, message: str) -> str:
        for pattern, replacement in self.patterns:
            message = pattern.sub(replacement, message)
        return message


def setup_logging(verbose: bool = False, environment: str | None = None) -> None:
    """Configure root logging for command line use."""
    if verbose:
        level = logging.DEBUG
    else:
        level = get_log_level_for_environment(environment) if environment else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    for handler in logging.root.handlers:
        if not any(isinstance(f, SensitiveDataFilter) for f in handler.filters):
            handler.addFilter(SensitiveDataFilter())


__all__ = [
    "LOG_LEVEL_MAP",
    "NullRequestLogger",
    "RequestLogger",
    "SensitiveDataFilter",
    "StdlibRequestLogger",
    "get_log_level_for_environment",
    "redact_headers",
    "setup_logging",
]
