"""Explicit wiring of the halkit components.

The host builds one Runtime at startup and passes it (or its parts) to
whatever needs them. Nothing here is a module-level singleton.

Example:
    >>> config = load_config("halkit.yaml")
    >>> async with Runtime.from_config(config, on_auth_error=go_to_login) as runtime:
    ...     outcome = await runtime.client.fetch("/users")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from halkit.client import AuthErrorCallback, HypermediaClient
from halkit.collection.inference import InferenceOptions
from halkit.config import HalkitConfig
from halkit.log import RequestLogger, StdlibRequestLogger
from halkit.navigator import LinkNavigator
from halkit.transport import TransportClient

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    config: HalkitConfig
    transport: TransportClient
    client: HypermediaClient
    navigator: LinkNavigator
    inference_options: InferenceOptions

    @classmethod
    def from_config(
        cls,
        config: HalkitConfig,
        on_auth_error: AuthErrorCallback | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        request_logger: RequestLogger | None = None,
    ) -> Runtime:
        """Build every component from one configuration.

        Args:
            config: Loaded configuration.
            on_auth_error: Called on HTTP 401; see HypermediaClient.
            transport: httpx transport override (e.g. MockTransport in tests).
            request_logger: Per-request hook; defaults to forwarding to
                the ``halkit.requests`` logger.
        """
        transport_client = TransportClient(
            base_url=config.base_url,
            timeout_ms=config.timeout_ms,
            default_headers=config.default_headers,
            credentials=config.credentials,
            mode=config.mode,
            request_logger=request_logger or StdlibRequestLogger(),
            transport=transport,
        )
        logger.debug(f"Runtime configured for {config.base_url} ({config.mode})")
        return cls(
            config=config,
            transport=transport_client,
            client=HypermediaClient(transport_client, on_auth_error=on_auth_error),
            navigator=LinkNavigator(),
            inference_options=InferenceOptions(
                sample_size=config.sample_size,
                sort_by_priority=config.sort_by_priority,
            ),
        )

    async def close(self) -> None:
        await self.transport.disconnect()

    async def __aenter__(self) -> Runtime:
        await self.transport.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


__all__ = ["Runtime"]
