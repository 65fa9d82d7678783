"""Collection extraction and resource field organization.

Combines item extraction, pagination and field inference into the shapes a
table or detail view renders.

Example:
    >>> data = extract_collection(resource)
    >>> [column.label for column in data.columns]
    ['Device Name', 'Created At', 'Status']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from halkit.collection.inference import (
    PRIMARY_FIELD,
    InferenceOptions,
    describe_field,
    infer_columns,
    infer_visible_columns,
    order_fields,
)
from halkit.collection.utils import extract_embedded_items, get_pagination_info
from halkit.models import CollectionData, InferredField, PageRef, Resource

DEFAULT_PAGE_TITLE = "Resource Details"


def extract_collection(
    resource: Resource,
    options: InferenceOptions | None = None,
    embedded_key: str | None = None,
    include_hidden: bool = False,
) -> CollectionData:
    """Extract items, inferred columns and pagination from a collection resource."""
    items = extract_embedded_items(resource, embedded_key)
    columns = infer_columns(items, options) if include_hidden else infer_visible_columns(items, options)
    pagination = get_pagination_info(resource)
    return CollectionData(
        items=items,
        columns=columns,
        total=pagination.total if pagination else None,
        page=PageRef(number=pagination.page, size=pagination.size) if pagination else None,
    )


def is_collection(resource: Optional[Resource]) -> bool:
    """Whether the resource embeds an item array or carries pagination fields."""
    if resource is None:
        return False
    if any(isinstance(value, list) for value in resource.embedded.values()):
        return True
    return any(key in resource for key in ("page", "total", "size"))


def extract_resource_fields(
    resource: Optional[Resource],
    options: InferenceOptions | None = None,
) -> list[InferredField]:
    """Infer a descriptor for each business field of a single resource."""
    if resource is None:
        return []
    options = options or InferenceOptions()
    fields = [
        describe_field(key, [value], index, options)
        for index, (key, value) in enumerate(resource.data.items())
    ]
    return order_fields(fields, options)


@dataclass
class OrganizedFields:
    """Visible fields of a resource split for a detail view.

    ``overview`` holds the primary identifiers (name, title, label);
    ``details`` holds everything else.
    """

    overview: list[InferredField] = field(default_factory=list)
    details: list[InferredField] = field(default_factory=list)


def organize_fields(
    resource: Optional[Resource],
    options: InferenceOptions | None = None,
) -> OrganizedFields:
    organized = OrganizedFields()
    for inferred in extract_resource_fields(resource, options):
        if inferred.hidden:
            continue
        if PRIMARY_FIELD.match(inferred.key):
            organized.overview.append(inferred)
        else:
            organized.details.append(inferred)
    return organized


def infer_page_title(
    resource: Optional[Resource],
    overview_fields: list[InferredField] | None = None,
    fallback: str = DEFAULT_PAGE_TITLE,
) -> str:
    """Pick a title for a resource detail page.

    Tries the ``self`` link title, then the ``title``/``name``/``label``
    fields, then the first non-empty overview field, then ``fallback``.
    """
    if resource is None:
        return fallback

    self_link = resource.links.get("self")
    if isinstance(self_link, list):
        self_link = self_link[0] if self_link else None
    if self_link is not None and self_link.title:
        return self_link.title

    for key in ("title", "name", "label"):
        value = resource.get(key)
        if value:
            return str(value)

    for overview in overview_fields or []:
        value = resource.get(overview.key)
        if value:
            return str(value)
    return fallback


__all__ = [
    "DEFAULT_PAGE_TITLE",
    "OrganizedFields",
    "extract_collection",
    "extract_resource_fields",
    "infer_page_title",
    "is_collection",
    "organize_fields",
]
