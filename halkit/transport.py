"""Async HTTP transport for HAL APIs.

The transport issues raw requests, merges headers, enforces a per-call
timeout and turns failures into the halkit error taxonomy:

    NetworkError        no HTTP response (status 0)
    RequestTimeoutError the configured timeout aborted the call (status 408)
    HttpError           non-2xx response, with the parsed or synthesized
                        ``{"error": {"code", "message", "details"}}`` envelope

There are no retries, no queuing and no request coalescing. Each call owns
its own timeout; to abandon a pending call, cancel the task awaiting it.

Example:
    >>> async with TransportClient("https://api.example.com") as transport:
    ...     users = await transport.get("/users")
    ...     created = await transport.post("/users", {"name": "Alice"})
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Literal
from urllib.parse import urlencode

import httpx

from halkit.errors import (
    ConfigurationError,
    HttpError,
    NetworkError,
    RequestTimeoutError,
    ResponseParseError,
)
from halkit.log import NullRequestLogger, RequestLogger, redact_headers
from halkit.models import ApiError, Resource

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000

Mode = Literal["development", "production"]


def _validate_base_url(base_url: str) -> str:
    """Validate and normalize a base URL.

    Raises:
        ConfigurationError: If the URL is empty or not http(s).
    """
    if not base_url or not base_url.strip():
        raise ConfigurationError("Base URL cannot be empty", field="base_url", value=base_url)

    base_url = base_url.strip()
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(
            "Base URL must start with http:// or https://",
            field="base_url",
            value=base_url,
        )
    return base_url.rstrip("/")


def _validate_timeout(timeout_ms: float) -> float:
    if timeout_ms <= 0:
        raise ConfigurationError("timeout_ms must be positive", field="timeout_ms", value=timeout_ms)
    return timeout_ms


class TransportClient:
    """HTTP client that returns HAL resources and raises typed errors."""

    def __init__(
        self,
        base_url: str,
        timeout_ms: float = DEFAULT_TIMEOUT_MS,
        default_headers: dict[str, str] | None = None,
        credentials: bool = True,
        mode: Mode = "production",
        request_logger: RequestLogger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = _validate_base_url(base_url)
        self.timeout_ms = _validate_timeout(timeout_ms)
        self.default_headers: dict[str, str] = dict(default_headers or {})
        self.credentials = credentials
        self.mode: Mode = mode
        self.request_logger: RequestLogger = request_logger or NullRequestLogger()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    async def connect(self) -> None:
        """Initialize the underlying httpx client."""
        self._client = httpx.AsyncClient(
            timeout=self.timeout_seconds,
            transport=self._transport,
        )
        logger.info(f"Transport connected to {self.base_url}")

    async def disconnect(self) -> None:
        """Close the underlying httpx client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> TransportClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()

    def build_url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}{path}" if path.startswith("/") else f"{self.base_url}/{path}"

    def build_headers(self, headers: dict[str, str] | None = None) -> httpx.Headers:
        """Merge default and call-specific headers; call-specific wins."""
        merged = httpx.Headers(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )
        merged.update(self.default_headers)
        # Normally set by the load balancer in front of the API.
        if self.mode == "development":
            merged["X-Forwarded-For"] = "127.0.0.1"
        if headers:
            merged.update(headers)
        return merged

    async def request(
        self,
        path: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        content: str | bytes | None = None,
    ) -> Resource:
        """Make an HTTP request and return the HAL resource it produced.

        Args:
            path: API path (e.g. ``/users/123``) or absolute URL.
            method: HTTP method.
            headers: Call-specific headers, overriding the defaults.
            content: Pre-encoded request body.

        Raises:
            RequestTimeoutError: The configured timeout expired.
            NetworkError: No HTTP response was received.
            HttpError: The server returned a non-2xx status.
            ResponseParseError: A 2xx body was not a JSON object.
        """
        if not self._client:
            await self.connect()
        assert self._client is not None

        url = self.build_url(path)
        merged = self.build_headers(headers)

        if not self.credentials:
            self._client.cookies.clear()

        self.request_logger.debug(
            "API Request",
            {
                "method": method,
                "url": url,
                "headers": redact_headers(merged),
                "body": content,
            },
        )
        logger.debug(f"{method} {url}")

        try:
            response = await asyncio.wait_for(
                self._client.request(method, url, headers=merged, content=content),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"Request timed out after {self.timeout_ms}ms: {method} {url}")
            raise RequestTimeoutError(cause=e) from e
        except httpx.RequestError as e:
            logger.error(f"Request error: {e}")
            raise NetworkError(cause=e) from e
        finally:
            if not self.credentials and self._client is not None:
                self._client.cookies.clear()

        if not response.is_success:
            self._raise_for_error(response)

        resource = self._parse_resource(response)
        self.request_logger.debug(
            "API Response",
            {"status": response.status_code, "data": resource.to_hal()},
        )
        return resource

    def _raise_for_error(self, response: httpx.Response) -> None:
        """Raise HttpError with the parsed or synthesized error envelope."""
        try:
            payload = response.json()
        except ValueError:
            error = ApiError(
                code="PARSE_ERROR",
                message=f"HTTP {response.status_code}: {response.reason_phrase}",
            )
        else:
            envelope = payload.get("error") if isinstance(payload, dict) else None
            if isinstance(envelope, dict) and (envelope.get("code") or envelope.get("message")):
                error = ApiError(
                    code=str(envelope.get("code") or "UNKNOWN_ERROR"),
                    message=str(envelope.get("message") or "An error occurred"),
                    details=envelope.get("details") if isinstance(envelope.get("details"), dict) else None,
                )
            else:
                message = payload.get("message") if isinstance(payload, dict) else None
                error = ApiError(code="UNKNOWN_ERROR", message=str(message or "An error occurred"))

        self.request_logger.error(
            "API Error",
            {"status": response.status_code, "error": error.model_dump(exclude_none=True)},
        )
        logger.info(f"HTTP {response.status_code} {error.code}: {error.message}")
        raise HttpError(response.status_code, error, response=response)

    def _parse_resource(self, response: httpx.Response) -> Resource:
        if not response.content or not response.content.strip():
            return Resource()
        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseParseError(
                response.status_code,
                ApiError(code="PARSE_ERROR", message="Response body is not valid JSON"),
                response=response,
                cause=e,
            ) from e
        if not isinstance(payload, dict):
            raise ResponseParseError(
                response.status_code,
                ApiError(code="PARSE_ERROR", message="Response body is not a JSON object"),
                response=response,
            )
        return Resource.from_hal(payload)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Resource:
        if params:
            separator = "&" if "?" in path else "?"
            path = f"{path}{separator}{urlencode({k: str(v) for k, v in params.items()})}"
        return await self.request(path)

    async def post(self, path: str, data: Any = None) -> Resource:
        return await self.request(path, method="POST", content=_json_body(data))

    async def put(self, path: str, data: Any = None) -> Resource:
        return await self.request(path, method="PUT", content=_json_body(data))

    async def patch(self, path: str, data: Any = None) -> Resource:
        return await self.request(path, method="PATCH", content=_json_body(data))

    async def delete(self, path: str) -> Resource:
        return await self.request(path, method="DELETE")

    async def health(self) -> dict[str, Any]:
        """Fetch ``/health`` and return its status and timestamp."""
        resource = await self.get("/health")
        return {"status": resource.get("status"), "timestamp": resource.get("timestamp")}

    def get_config(self) -> dict[str, Any]:
        """Return a copy of the current configuration."""
        return {
            "base_url": self.base_url,
            "timeout_ms": self.timeout_ms,
            "default_headers": dict(self.default_headers),
            "credentials": self.credentials,
            "mode": self.mode,
        }

    def set_base_url(self, base_url: str) -> None:
        self.base_url = _validate_base_url(base_url)

    def set_headers(self, headers: dict[str, str]) -> None:
        """Merge headers into the defaults (e.g. an auth token)."""
        self.default_headers = {**self.default_headers, **headers}

    def clear_header(self, key: str) -> None:
        self.default_headers.pop(key, None)


def _json_body(data: Any) -> str | None:
    return json.dumps(data) if data is not None else None


__all__ = ["DEFAULT_TIMEOUT_MS", "TransportClient"]
