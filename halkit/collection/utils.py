"""Helpers for extracting and describing collection data in HAL resources."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import urlparse

from halkit.models import METADATA_PREFIX, PaginationInfo, Resource

# Probed in order when no embedded key is given.
COMMON_COLLECTION_KEYS = ("items", "results", "data", "records")

DEFAULT_PAGE_SIZE = 10

ACRONYMS = {
    "id": "ID",
    "api": "API",
    "url": "URL",
    "uri": "URI",
    "uuid": "UUID",
    "ip": "IP",
    "http": "HTTP",
    "https": "HTTPS",
    "aws": "AWS",
    "sdk": "SDK",
    "ui": "UI",
    "ux": "UX",
}

_ISO_DATE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?(Z|[+-]\d{2}:?\d{2})?)?$"
)
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})$")
_EPOCH = re.compile(r"^\d{10,13}$")
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_WHITESPACE = re.compile(r"\s")


def fields_of(item: Any) -> Mapping[str, Any]:
    """Business fields of a Resource or plain mapping; empty for anything else."""
    if isinstance(item, Resource):
        return item.data
    if isinstance(item, Mapping):
        return item
    return {}


def humanize_label(name: str) -> str:
    """Turn a field name into a display label.

    Splits camelCase, snake_case, kebab-case and letter/digit boundaries,
    title-cases each word and uppercases known acronyms.

    Example:
        >>> humanize_label("apiKey")
        'API Key'
        >>> humanize_label("user_name")
        'User Name'
    """
    result = re.sub(r"^[_-]+|[_-]+$", "", name)
    result = re.sub(r"([a-z])([A-Z])", r"\1 \2", result)
    result = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", result)
    result = re.sub(r"[_-]", " ", result)
    result = re.sub(r"([a-zA-Z])(\d)", r"\1 \2", result)
    result = re.sub(r"(\d)([a-zA-Z])", r"\1 \2", result)

    words = []
    for word in result.split():
        lower = word.lower()
        words.append(ACRONYMS.get(lower, word[:1].upper() + word[1:].lower()))
    return " ".join(words)


def get_unique_keys(
    items: Iterable[Any],
    exclude_metadata: bool = True,
    sample_size: int = 10,
) -> list[str]:
    """Union of field keys across the first ``sample_size`` items, first-seen order."""
    keys: dict[str, None] = {}
    for index, item in enumerate(items):
        if index >= sample_size:
            break
        for key in fields_of(item):
            if exclude_metadata and key.startswith(METADATA_PREFIX):
                continue
            keys.setdefault(key, None)
    return list(keys)


def _is_valid_slash_date(match: re.Match[str]) -> bool:
    month, day, year = (int(part) for part in match.groups())
    if year < 100:
        year += 2000 if year < 50 else 1900
    try:
        datetime(year, month, day)
    except ValueError:
        return False
    return True


def _is_valid_epoch(value: str) -> bool:
    seconds = int(value) / 1000 if len(value) == 13 else int(value)
    try:
        datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return False
    return True


def is_date_value(value: Any) -> bool:
    """Whether a value is an ISO-8601 date, a MM/DD/YYYY date or a Unix timestamp string."""
    if not isinstance(value, str):
        return False
    if _ISO_DATE.match(value):
        return True
    slash = _SLASH_DATE.match(value)
    if slash:
        return _is_valid_slash_date(slash)
    if _EPOCH.match(value):
        return _is_valid_epoch(value)
    return False


def is_url_value(value: Any) -> bool:
    """Whether a string parses as an absolute URL."""
    if not isinstance(value, str) or not value or _WHITESPACE.search(value):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def is_email_value(value: Any) -> bool:
    return isinstance(value, str) and bool(_EMAIL.match(value))


def matches_pattern(name: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    return any(pattern.search(name) for pattern in patterns)


def extract_embedded_items(resource: Resource, key: str | None = None) -> list[Resource]:
    """Locate the item array of a collection resource.

    Uses ``key`` when given (empty when it is not an array), otherwise the
    first of the common collection keys holding an array, otherwise the first
    array-valued embedded entry.
    """
    embedded = resource.embedded
    if not embedded:
        return []

    if key:
        items = embedded.get(key)
        return list(items) if isinstance(items, list) else []

    for candidate in COMMON_COLLECTION_KEYS:
        items = embedded.get(candidate)
        if isinstance(items, list):
            return list(items)

    for items in embedded.values():
        if isinstance(items, list):
            return list(items)
    return []


def _first_int(*values: Any) -> Optional[int]:
    for value in values:
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
    return None


def get_pagination_info(resource: Resource) -> Optional[PaginationInfo]:
    """Normalize pagination metadata.

    Understands a nested page object (``{number, size, totalElements}`` or
    ``{page, limit, total}``) and flat ``page``/``size``/``total`` fields.

    Example:
        >>> get_pagination_info(Resource.from_hal({"page": {"number": 2, "size": 10, "totalElements": 45}}))
        PaginationInfo(page=2, size=10, total=45)
    """
    page = resource.get("page")
    if isinstance(page, Mapping):
        number = _first_int(page.get("number"), page.get("page"))
        size = _first_int(page.get("size"), page.get("limit"))
        return PaginationInfo(
            page=0 if number is None else number,
            size=DEFAULT_PAGE_SIZE if size is None else size,
            total=_first_int(page.get("totalElements"), page.get("total")),
        )

    number = _first_int(page)
    size = _first_int(resource.get("size"))
    if number is not None or size is not None:
        return PaginationInfo(
            page=0 if number is None else number,
            size=DEFAULT_PAGE_SIZE if size is None else size,
            total=_first_int(resource.get("total")),
        )
    return None


def get_collection_key(resource: Resource) -> str | None:
    """Key of the embedded entry holding the collection items."""
    for candidate in COMMON_COLLECTION_KEYS:
        if isinstance(resource.embedded.get(candidate), list):
            return candidate
    for key, value in resource.embedded.items():
        if isinstance(value, list):
            return key
    return None


__all__ = [
    "ACRONYMS",
    "COMMON_COLLECTION_KEYS",
    "extract_embedded_items",
    "fields_of",
    "get_collection_key",
    "get_pagination_info",
    "get_unique_keys",
    "humanize_label",
    "is_date_value",
    "is_email_value",
    "is_url_value",
    "matches_pattern",
]
