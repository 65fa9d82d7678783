"""Pytest fixtures for halkit tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from halkit.client import HypermediaClient
from halkit.models import Resource
from halkit.transport import TransportClient

BASE_URL = "http://api.example.com"

Reply = Any


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays canned responses.

    Routes map ``(METHOD, path)`` to ``(status, body)``, a ready-made
    ``httpx.Response`` factory, or a callable taking the request.
    Unrouted requests get ``200 {}``.
    """

    def __init__(self, routes: dict[tuple[str, str], Reply] | None = None) -> None:
        self.routes: dict[tuple[str, str], Reply] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.routes.get((request.method, request.url.path), (200, {}))
        if callable(reply):
            return reply(request)
        status, body = reply
        if body is None:
            return httpx.Response(status)
        if isinstance(body, (str, bytes)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def make_transport() -> Callable[..., TransportClient]:
    def _make(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> TransportClient:
        return TransportClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)

    return _make


@pytest.fixture
def transport(handler: RecordingHandler, make_transport: Callable[..., TransportClient]) -> TransportClient:
    return make_transport(handler)


@pytest.fixture
def client(transport: TransportClient) -> HypermediaClient:
    return HypermediaClient(transport)


@pytest.fixture
def user_payload() -> dict[str, Any]:
    return {
        "userId": "123",
        "name": "Alice Example",
        "email": "alice@example.com",
        "role": "admin",
        "createdAt": "2024-01-15T10:30:00Z",
        "isActive": True,
        "_links": {
            "self": {"href": "/users/123", "title": "Alice"},
            "sessions": {"href": "/users/123/sessions{?limit,cursor}", "templated": True},
            "avatar": [
                {"href": "/users/123/avatar.png", "type": "image/png"},
                {"href": "/users/123/avatar.webp", "type": "image/webp"},
            ],
        },
        "_templates": {
            "default": {"method": "GET", "target": "/users/123"},
            "update": {
                "method": "PUT",
                "target": "/users/123",
                "title": "Update User",
                "properties": [
                    {"name": "name", "type": "text", "required": True, "prompt": "Name"},
                    {"name": "email", "type": "email", "required": True},
                ],
            },
            "delete": {
                "method": "DELETE",
                "target": "/users/123",
                "title": "Delete User",
                "properties": [{"name": "userId", "type": "hidden", "value": "123"}],
            },
        },
    }


@pytest.fixture
def user(user_payload: dict[str, Any]) -> Resource:
    return Resource.from_hal(user_payload)


@pytest.fixture
def sessions_payload() -> dict[str, Any]:
    return {
        "page": {"number": 2, "size": 2, "totalElements": 5},
        "_links": {
            "self": {"href": "/users/123/sessions?page=2"},
            "next": {"href": "/users/123/sessions?page=3"},
        },
        "_embedded": {
            "sessions": [
                {
                    "sessionId": "s-1",
                    "deviceName": "Laptop",
                    "ipAddress": "10.0.0.1",
                    "status": "active",
                    "lastAccessedAt": "2024-02-01T08:00:00Z",
                    "_links": {"self": {"href": "/sessions/s-1"}},
                },
                {
                    "sessionId": "s-2",
                    "deviceName": "Phone",
                    "ipAddress": "10.0.0.2",
                    "status": "expired",
                    "lastAccessedAt": "2024-01-20T08:00:00Z",
                    "secretToken": "hidden-value",
                },
            ]
        },
        "_templates": {
            "bulkDelete": {
                "method": "DELETE",
                "target": "/users/123/sessions",
                "title": "Delete Sessions",
                "properties": [{"name": "sessionIds", "type": "array", "required": True}],
            },
            "next": {
                "method": "POST",
                "target": "/users/123/sessions",
                "properties": [{"name": "cursor", "type": "hidden", "value": "abc"}],
            },
        },
    }


@pytest.fixture
def sessions(sessions_payload: dict[str, Any]) -> Resource:
    return Resource.from_hal(sessions_payload)
