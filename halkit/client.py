"""HAL-FORMS client.

Fetches HAL resources, executes ``_templates`` operations and validates
template data before submission.

Every call returns a tagged outcome (see ``halkit.outcome``) instead of
raising, so an authentication redirect is an explicit result rather than a
call that never completes.

Example:
    >>> client = HypermediaClient(transport, on_auth_error=redirect_to_login)
    >>> outcome = await client.fetch("/users/123")
    >>> if outcome.is_ok:
    ...     template = outcome.value.templates["update"]
    ...     result = await client.submit_template(template, {"name": "Alice"})
"""

from __future__ import annotations

import inspect
import json
import logging
import math
import re
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Union
from urllib.parse import urlencode, urlparse

from halkit._encoding import stringify
from halkit.errors import ApiClientError
from halkit.models import Resource, Template, TemplateProperty, ValidationError
from halkit.outcome import Failed, Invalid, Ok, Outcome, Redirecting
from halkit.transport import TransportClient

logger = logging.getLogger(__name__)

HAL_JSON = "application/hal+json"
JSON = "application/json"
FORM_URLENCODED = "application/x-www-form-urlencoded"

# Verbs tunnelled through POST with a ``_method`` body field.
OVERRIDDEN_METHODS = frozenset({"DELETE", "PUT"})

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

AuthErrorCallback = Callable[[], Union[None, Awaitable[None]]]


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _to_number(value: Any) -> float | None:
    """Parse a submitted value as a finite number, or return None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _is_valid_url(value: Any) -> bool:
    try:
        parsed = urlparse(str(value))
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def validate_property(prop: TemplateProperty, value: Any) -> list[ValidationError]:
    """Validate one value against a property's declared constraints."""
    errors: list[ValidationError] = []
    label = prop.prompt or prop.name

    def fail(message: str) -> None:
        errors.append(ValidationError(field=prop.name, message=f"{label} {message}"))

    if _is_empty(value):
        if prop.required:
            fail("is required")
        return errors

    field_type = prop.type or "text"

    if field_type == "number":
        number = _to_number(value)
        if number is None:
            fail("must be a number")
            return errors
        if prop.min is not None:
            minimum = _to_number(prop.min)
            if minimum is None:
                logger.warning(f"Ignoring non-numeric min {prop.min!r} on '{prop.name}'")
            elif number < minimum:
                fail(f"must be at least {stringify(prop.min)}")
        if prop.max is not None:
            maximum = _to_number(prop.max)
            if maximum is None:
                logger.warning(f"Ignoring non-numeric max {prop.max!r} on '{prop.name}'")
            elif number > maximum:
                fail(f"must be at most {stringify(prop.max)}")

    if field_type == "email" and not EMAIL_PATTERN.match(stringify(value)):
        fail("must be a valid email address")

    if field_type == "url" and not _is_valid_url(value):
        fail("must be a valid URL")

    if isinstance(value, str):
        if prop.min_length is not None and len(value) < prop.min_length:
            fail(f"must be at least {prop.min_length} characters")
        if prop.max_length is not None and len(value) > prop.max_length:
            fail(f"must be at most {prop.max_length} characters")

        if prop.regex:
            try:
                pattern = re.compile(prop.regex)
            except re.error as e:
                logger.warning(f"Skipping invalid regex on '{prop.name}': {e}")
            else:
                if not pattern.search(value):
                    fail("has an invalid format")

    return errors


def validate_template_data(template: Template, data: Mapping[str, Any]) -> list[ValidationError]:
    """Check data against every declared property, in declaration order.

    All problems across all fields are returned together. Within one field a
    missing required value produces a single error and nothing else.
    """
    errors: list[ValidationError] = []
    for prop in template.properties:
        errors.extend(validate_property(prop, data.get(prop.name)))
    return errors


def encode_template_body(content_type: str | None, data: Mapping[str, Any]) -> tuple[str, str]:
    """Encode a request body for a template's content type.

    Returns:
        ``(content_type, body)``. Anything other than form encoding is sent
        as JSON.
    """
    if content_type == FORM_URLENCODED:
        return FORM_URLENCODED, urlencode([(key, stringify(value)) for key, value in data.items()])
    return JSON, json.dumps(dict(data))


class HypermediaClient:
    """Client for HAL resources and HAL-FORMS templates.

    Args:
        transport: The TransportClient that issues the requests.
        on_auth_error: Called (and awaited, when it returns an awaitable) on
            HTTP 401. The call then resolves to ``Redirecting()``. Without a
            callback a 401 is an ordinary ``Failed`` outcome.
    """

    def __init__(
        self,
        transport: TransportClient,
        on_auth_error: AuthErrorCallback | None = None,
    ) -> None:
        self.transport = transport
        self.on_auth_error = on_auth_error

    async def _call(
        self,
        url: str,
        method: str,
        headers: dict[str, str],
        content: str | None = None,
    ) -> Outcome[Resource]:
        try:
            resource = await self.transport.request(url, method=method, headers=headers, content=content)
        except ApiClientError as e:
            return await self._handle_error(e)
        return Ok(resource)

    async def _handle_error(self, error: ApiClientError) -> Redirecting | Failed:
        if error.status == 401 and self.on_auth_error is not None:
            logger.info("Authentication required, invoking auth error callback")
            result = self.on_auth_error()
            if inspect.isawaitable(result):
                await result
            return Redirecting()
        return Failed(error)

    async def fetch(self, url: str, headers: dict[str, str] | None = None) -> Outcome[Resource]:
        """GET a HAL resource."""
        return await self._call(url, "GET", {"Accept": HAL_JSON, **(headers or {})})

    async def get(self, url: str) -> Outcome[Resource]:
        return await self._call(url, "GET", {"Accept": HAL_JSON})

    async def post(self, url: str, data: Any = None) -> Outcome[Resource]:
        return await self._send(url, "POST", data)

    async def put(self, url: str, data: Any = None) -> Outcome[Resource]:
        return await self._send(url, "PUT", data)

    async def patch(self, url: str, data: Any = None) -> Outcome[Resource]:
        return await self._send(url, "PATCH", data)

    async def delete(self, url: str) -> Outcome[Resource]:
        return await self._call(url, "DELETE", {"Accept": HAL_JSON})

    async def _send(self, url: str, method: str, data: Any) -> Outcome[Resource]:
        content = json.dumps(data) if data else None
        return await self._call(url, method, {"Accept": HAL_JSON, "Content-Type": JSON}, content)

    async def execute_template(self, template: Template, data: Mapping[str, Any]) -> Outcome[Resource]:
        """Submit data to a template's target.

        DELETE and PUT are sent as POST with ``_method`` set to the
        lowercased verb in the body. The body is form encoded when the
        template declares ``application/x-www-form-urlencoded`` and JSON
        otherwise.
        """
        method = template.method.upper()
        payload = dict(data)
        wire_method = method
        if method in OVERRIDDEN_METHODS:
            payload["_method"] = method.lower()
            wire_method = "POST"

        content_type, body = encode_template_body(template.content_type, payload)
        logger.debug(f"Executing template {method} {template.target} as {wire_method}")
        return await self._call(
            template.target,
            wire_method,
            {"Accept": HAL_JSON, "Content-Type": content_type},
            body,
        )

    def validate_template_data(self, template: Template, data: Mapping[str, Any]) -> list[ValidationError]:
        return validate_template_data(template, data)

    async def submit_template(self, template: Template, data: Mapping[str, Any]) -> Outcome[Resource]:
        """Validate, then execute. Invalid data never reaches the network."""
        errors = validate_template_data(template, data)
        if errors:
            logger.debug(f"Template data rejected with {len(errors)} validation error(s)")
            return Invalid(errors)
        return await self.execute_template(template, data)


__all__ = [
    "FORM_URLENCODED",
    "HAL_JSON",
    "HypermediaClient",
    "encode_template_body",
    "validate_property",
    "validate_template_data",
]
