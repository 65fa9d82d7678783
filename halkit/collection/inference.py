"""Field inference engine.

Infers a display descriptor (type, label, visibility, order) for every field
of an untyped JSON collection from field names and sampled values.

Type inference is a ladder; the first match wins:

1. explicit override from the options
2. name matches a hidden convention
3. name matches a boolean, date, badge, url, email or code convention
4. first non-null sample value: bool, number, date string, URL, email,
   UUID or hex hash
5. text

Everything here is a pure function of its inputs.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from halkit.collection.conventions import FieldConventions, PatternLike, merge_conventions
from halkit.collection.utils import (
    fields_of,
    get_unique_keys,
    humanize_label,
    is_date_value,
    is_email_value,
    is_url_value,
    matches_pattern,
)
from halkit.models import FieldType, InferredField

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 10

_UUID = re.compile(r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$", re.IGNORECASE)
_HEX_HASH = re.compile(r"^[a-f0-9]{32,}$", re.IGNORECASE)

# Identifier fields shown first in priority mode and in resource overviews.
PRIMARY_FIELD = re.compile(r"^(name|title|label)$", re.IGNORECASE)

# Lower scores are shown first when sorting by priority.
PRIORITY_SCORES: dict[FieldType, int] = {
    FieldType.BADGE: 10,
    FieldType.DATE: 20,
    FieldType.TEXT: 30,
    FieldType.EMAIL: 30,
    FieldType.NUMBER: 40,
    FieldType.BOOLEAN: 40,
    FieldType.CODE: 60,
    FieldType.URL: 70,
    FieldType.HIDDEN: 100,
}
PRIMARY_SCORE = 0


@dataclass
class InferenceOptions:
    """Caller customizations for field inference.

    Attributes:
        conventions: Extra name patterns, appended to the defaults.
        sample_size: Number of items sampled from a collection.
        hide_fields: Fields always hidden.
        show_fields: Fields shown even when their type is ``hidden``.
        field_type_overrides: Field name to forced type.
        label_overrides: Field name to display label.
        sort_by_priority: Order columns by semantic importance instead of
            source order.
    """

    conventions: Union[FieldConventions, Mapping[str, Iterable[PatternLike]], None] = None
    sample_size: int = DEFAULT_SAMPLE_SIZE
    hide_fields: list[str] = field(default_factory=list)
    show_fields: list[str] = field(default_factory=list)
    field_type_overrides: dict[str, Union[FieldType, str]] = field(default_factory=dict)
    label_overrides: dict[str, str] = field(default_factory=dict)
    sort_by_priority: bool = False


def _type_from_value(value: Any) -> FieldType:
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, (int, float)):
        return FieldType.NUMBER
    if isinstance(value, str):
        if is_date_value(value):
            return FieldType.DATE
        if is_url_value(value):
            return FieldType.URL
        if is_email_value(value):
            return FieldType.EMAIL
        if _UUID.match(value) or _HEX_HASH.match(value):
            return FieldType.CODE
    return FieldType.TEXT


def infer_field_type(
    name: str,
    sample_values: Sequence[Any],
    options: InferenceOptions | None = None,
) -> FieldType:
    """Infer how a field should be rendered.

    Example:
        >>> infer_field_type("createdAt", [])
        <FieldType.DATE: 'date'>
        >>> infer_field_type("value", [True, False])
        <FieldType.BOOLEAN: 'boolean'>
    """
    options = options or InferenceOptions()

    override = options.field_type_overrides.get(name)
    if override:
        return FieldType(override)

    conventions = merge_conventions(options.conventions)
    if matches_pattern(name, conventions.hidden):
        return FieldType.HIDDEN

    for field_type, patterns in (
        (FieldType.BOOLEAN, conventions.boolean),
        (FieldType.DATE, conventions.date),
        (FieldType.BADGE, conventions.badge),
        (FieldType.URL, conventions.url),
        (FieldType.EMAIL, conventions.email),
        (FieldType.CODE, conventions.code),
    ):
        if matches_pattern(name, patterns):
            return field_type

    for value in sample_values:
        if value is not None:
            return _type_from_value(value)
    return FieldType.TEXT


def is_sortable(field_type: FieldType) -> bool:
    return field_type != FieldType.HIDDEN


def priority_score(key: str, field_type: FieldType) -> int:
    """Semantic importance of a field; lower is more important."""
    if field_type != FieldType.HIDDEN and PRIMARY_FIELD.match(key):
        return PRIMARY_SCORE
    return PRIORITY_SCORES[field_type]


def describe_field(
    key: str,
    sample_values: Sequence[Any],
    index: int,
    options: InferenceOptions,
) -> InferredField:
    """Build the descriptor for one field at its first-seen position."""
    field_type = infer_field_type(key, sample_values, options)
    hidden = key in options.hide_fields or (
        field_type == FieldType.HIDDEN and key not in options.show_fields
    )
    return InferredField(
        key=key,
        label=options.label_overrides.get(key) or humanize_label(key),
        type=field_type,
        sortable=is_sortable(field_type),
        hidden=hidden,
        priority=priority_score(key, field_type) if options.sort_by_priority else index,
    )


def order_fields(columns: list[InferredField], options: InferenceOptions) -> list[InferredField]:
    """Sort by priority score in priority mode; keep source order otherwise."""
    if not options.sort_by_priority:
        return columns
    indexed = sorted(enumerate(columns), key=lambda pair: (pair[1].priority, pair[0]))
    return [column for _, column in indexed]


def infer_columns(items: Sequence[Any], options: InferenceOptions | None = None) -> list[InferredField]:
    """Infer a column descriptor for every non-metadata key of a collection.

    Keys are the union over the first ``sample_size`` items, in first-seen
    order. Items may be Resources or plain mappings.
    """
    options = options or InferenceOptions()
    if not items:
        return []

    sampled = list(items[: max(options.sample_size, 0)])
    keys = get_unique_keys(sampled, exclude_metadata=True, sample_size=len(sampled))

    columns = []
    for index, key in enumerate(keys):
        values = [fields_of(item)[key] for item in sampled if key in fields_of(item)]
        columns.append(describe_field(key, values, index, options))

    logger.debug(f"Inferred {len(columns)} column(s) from {len(sampled)} sampled item(s)")
    return order_fields(columns, options)


def infer_visible_columns(
    items: Sequence[Any],
    options: InferenceOptions | None = None,
) -> list[InferredField]:
    return [column for column in infer_columns(items, options) if not column.hidden]


__all__ = [
    "DEFAULT_SAMPLE_SIZE",
    "InferenceOptions",
    "PRIMARY_FIELD",
    "describe_field",
    "infer_columns",
    "infer_field_type",
    "infer_visible_columns",
    "is_sortable",
    "order_fields",
    "priority_score",
]
