"""Assemble template submission data from the sources a UI has at hand.

Each property is filled from one of three sources:

- value: the property's own server-supplied value (hidden or pre-filled)
- selection: the IDs selected in a table, for ``array`` or ``*Ids``
  properties used by bulk operations
- form: form input, then the matching field of the current resource
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from halkit.errors import TemplateDataError
from halkit.models import Resource, Template, TemplateProperty

logger = logging.getLogger(__name__)


class PropertySource(str, Enum):
    VALUE = "value"
    SELECTION = "selection"
    FORM = "form"


@dataclass
class TemplateExecutionContext:
    """Everything that can supply a template property value."""

    template: Template
    form_data: Mapping[str, Any] = field(default_factory=dict)
    selections: Sequence[str] = field(default_factory=list)
    resource: Optional[Resource] = None


def get_property_source(prop: TemplateProperty) -> PropertySource:
    if prop.has_value:
        return PropertySource.VALUE
    if prop.type == "array" or prop.name.endswith("Ids"):
        return PropertySource.SELECTION
    return PropertySource.FORM


def build_template_data(context: TemplateExecutionContext) -> dict[str, Any]:
    """Build the payload for a template from its execution context.

    Read-only properties are never submitted.

    Raises:
        TemplateDataError: A required property has no value in any source.
    """
    data: dict[str, Any] = {}

    for prop in context.template.properties:
        if prop.read_only:
            continue

        source = get_property_source(prop)
        if source is PropertySource.VALUE:
            data[prop.name] = prop.value
        elif source is PropertySource.SELECTION:
            if context.selections:
                data[prop.name] = list(context.selections)
            elif prop.required:
                raise TemplateDataError(
                    f"At least one item must be selected for {prop.name}", field=prop.name
                )
        elif prop.name in context.form_data:
            data[prop.name] = context.form_data[prop.name]
        elif context.resource is not None and prop.name in context.resource:
            data[prop.name] = context.resource[prop.name]
        elif prop.required:
            raise TemplateDataError(f"Required field {prop.name} is missing", field=prop.name)

    logger.debug(f"Built template data with {len(data)} field(s)")
    return data


__all__ = [
    "PropertySource",
    "TemplateExecutionContext",
    "build_template_data",
    "get_property_source",
]
