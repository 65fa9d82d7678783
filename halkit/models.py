"""
Data models for halkit.

This module defines the wire-level HAL / HAL-FORMS structures (links,
templates, template properties), the tagged Resource structure that keeps
business data apart from hypermedia controls, and the records produced by
the inference and validation layers.

All models use Pydantic for validation and serialization. Wire names such
as ``contentType`` or ``minLength`` are accepted through aliases; the
Python attribute names are snake_case.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

# Prefix shared by every HAL metadata key (_links, _embedded, _templates).
METADATA_PREFIX = "_"

LINKS_KEY = "_links"
TEMPLATES_KEY = "_templates"
EMBEDDED_KEY = "_embedded"


class Link(BaseModel):
    """
    A HAL link to a related resource.

    Attributes:
        href: URI of the target, or a URI template when ``templated`` is true
        title: Human-readable title
        templated: Whether ``href`` contains expandable placeholders
        type: Media type hint for the target
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    href: str = Field(..., description="Target URI or URI template")
    title: Optional[str] = Field(default=None, description="Human-readable title")
    templated: bool = Field(default=False, description="href is a URI template")
    type: Optional[str] = Field(default=None, description="Media type hint")
    name: Optional[str] = Field(default=None, description="Secondary key among same-rel links")
    hreflang: Optional[str] = Field(default=None, description="Language of the target")
    profile: Optional[str] = Field(default=None, description="Profile URI")
    deprecation: Optional[str] = Field(default=None, description="Deprecation notice URI")


def _default_if_null(model: type[BaseModel], value: Any, info: ValidationInfo) -> Any:
    # Servers send explicit nulls for omitted template fields.
    if value is None and info.field_name is not None:
        return model.model_fields[info.field_name].get_default(call_default_factory=True)
    return value


class TemplatePropertyOption(BaseModel):
    """One allowed value of an enumerated template property."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    value: Any = Field(..., description="Submitted value")
    prompt: Optional[str] = Field(default=None, description="Display label")


class TemplateProperty(BaseModel):
    """
    A single input declared by a HAL-FORMS template.

    A property with ``options`` is an enumerated field.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(..., description="Property name")
    type: str = Field(default="text", description="Input type (text, number, hidden, ...)")
    required: bool = Field(default=False, description="Value must be supplied")
    prompt: Optional[str] = Field(default=None, description="Human-readable prompt")
    value: Any = Field(default=None, description="Default or pre-filled value")
    min: Optional[Union[int, float, str]] = Field(default=None, description="Minimum numeric value")
    max: Optional[Union[int, float, str]] = Field(default=None, description="Maximum numeric value")
    min_length: Optional[int] = Field(default=None, alias="minLength")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    regex: Optional[str] = Field(default=None, description="Pattern the value must match")
    read_only: bool = Field(default=False, alias="readOnly")
    options: Optional[List[TemplatePropertyOption]] = Field(
        default=None, description="Allowed values for enumerated fields"
    )

    @field_validator("type", "required", "read_only", mode="before")
    @classmethod
    def null_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        return _default_if_null(cls, v, info)

    @property
    def is_enum(self) -> bool:
        return bool(self.options)

    @property
    def has_value(self) -> bool:
        """True when the server supplied an explicit value for this property."""
        return "value" in self.model_fields_set


class Template(BaseModel):
    """
    A HAL-FORMS template: one possible state transition of its resource.

    Attributes:
        method: HTTP method (GET, POST, PUT, DELETE, PATCH, ...)
        target: URI the operation is submitted to
        content_type: Body encoding (defaults to JSON when absent)
        title: Human-readable title
        properties: Declared inputs, in order
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    method: str = Field(default="GET", description="HTTP method")
    target: str = Field(default="", description="Submission URI")
    content_type: Optional[str] = Field(default=None, alias="contentType")
    title: Optional[str] = Field(default=None, description="Human-readable title")
    properties: List[TemplateProperty] = Field(default_factory=list)

    @field_validator("method", "target", "properties", mode="before")
    @classmethod
    def null_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        return _default_if_null(cls, v, info)

    def get_property(self, name: str) -> Optional[TemplateProperty]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


class Resource(BaseModel):
    """
    A fetched HAL resource with its hypermedia controls separated out.

    ``data`` holds the business fields; ``links``, ``templates`` and
    ``embedded`` hold the ``_links``, ``_templates`` and ``_embedded``
    sections. Mapping-style access reads from ``data``::

        resource = Resource.from_hal({"name": "Alice", "_links": {...}})
        resource["name"]  # "Alice"

    Resources are transient: they describe a single response and are not
    cached anywhere in halkit.
    """

    data: Dict[str, Any] = Field(default_factory=dict)
    links: Dict[str, Union[Link, List[Link]]] = Field(default_factory=dict)
    templates: Dict[str, Template] = Field(default_factory=dict)
    embedded: Dict[str, Union["Resource", List["Resource"]]] = Field(default_factory=dict)

    @classmethod
    def from_hal(cls, payload: Mapping[str, Any]) -> Resource:
        """Split a HAL wire object into a Resource.

        Malformed links, templates and embedded entries are skipped with a
        warning so that one bad control does not hide the whole response.
        """
        if isinstance(payload, Resource):
            return payload
        if not isinstance(payload, Mapping):
            raise TypeError(f"HAL resource must be an object, got {type(payload).__name__}")

        data = {
            key: value
            for key, value in payload.items()
            if key not in (LINKS_KEY, TEMPLATES_KEY, EMBEDDED_KEY)
        }
        return cls(
            data=data,
            links=_parse_links(payload.get(LINKS_KEY)),
            templates=_parse_templates(payload.get(TEMPLATES_KEY)),
            embedded=_parse_embedded(payload.get(EMBEDDED_KEY)),
        )

    def to_hal(self) -> dict[str, Any]:
        """Rebuild the HAL wire object."""
        result: dict[str, Any] = dict(self.data)
        if self.links:
            result[LINKS_KEY] = {
                rel: (
                    [link.model_dump(exclude_none=True) for link in value]
                    if isinstance(value, list)
                    else value.model_dump(exclude_none=True)
                )
                for rel, value in self.links.items()
            }
        if self.templates:
            result[TEMPLATES_KEY] = {
                key: template.model_dump(by_alias=True, exclude_none=True)
                for key, template in self.templates.items()
            }
        if self.embedded:
            result[EMBEDDED_KEY] = {
                key: (
                    [item.to_hal() for item in value]
                    if isinstance(value, list)
                    else value.to_hal()
                )
                for key, value in self.embedded.items()
            }
        return result

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def keys(self) -> list[str]:
        return list(self.data.keys())

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data


def _parse_links(raw: Any) -> dict[str, Union[Link, list[Link]]]:
    links: dict[str, Union[Link, list[Link]]] = {}
    if not isinstance(raw, Mapping):
        return links
    for rel, value in raw.items():
        try:
            if isinstance(value, list):
                links[rel] = [Link.model_validate(item) for item in value]
            else:
                links[rel] = Link.model_validate(value)
        except PydanticValidationError as e:
            logger.warning(f"Skipping malformed link '{rel}': {e.error_count()} error(s)")
    return links


def _parse_templates(raw: Any) -> dict[str, Template]:
    templates: dict[str, Template] = {}
    if not isinstance(raw, Mapping):
        return templates
    for key, value in raw.items():
        try:
            templates[key] = Template.model_validate(value)
        except PydanticValidationError as e:
            logger.warning(f"Skipping malformed template '{key}': {e.error_count()} error(s)")
    return templates


def _parse_embedded(raw: Any) -> dict[str, Union[Resource, list[Resource]]]:
    embedded: dict[str, Union[Resource, list[Resource]]] = {}
    if not isinstance(raw, Mapping):
        return embedded
    for key, value in raw.items():
        if isinstance(value, list):
            items = [Resource.from_hal(item) for item in value if isinstance(item, Mapping)]
            if len(items) != len(value):
                logger.warning(f"Dropped non-object entries from embedded '{key}'")
            embedded[key] = items
        elif isinstance(value, Mapping):
            embedded[key] = Resource.from_hal(value)
        else:
            logger.warning(f"Skipping non-object embedded entry '{key}'")
    return embedded


class FieldType(str, Enum):
    """Rendering strategy for an inferred field."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    CODE = "code"
    BADGE = "badge"
    BOOLEAN = "boolean"
    URL = "url"
    EMAIL = "email"
    HIDDEN = "hidden"


class InferredField(BaseModel):
    """
    Display descriptor inferred for one field of a resource or collection.

    ``priority`` is the field's first-seen position by default, or a
    semantic importance score when priority sorting is enabled.
    """

    key: str = Field(..., description="Field key in the data object")
    label: str = Field(..., description="Human-readable label")
    type: FieldType = Field(..., description="Inferred field type")
    sortable: bool = Field(default=True)
    hidden: bool = Field(default=False)
    priority: int = Field(default=0, description="Display order")
    width: Optional[str] = Field(default=None, description="Column width hint")
    null_text: Optional[str] = Field(default=None, description="Placeholder for empty values")


class ValidationError(BaseModel):
    """An advisory problem found in template data before submission."""

    field: str = Field(..., description="Property name")
    message: str = Field(..., description="Human-readable message")


class ApiError(BaseModel):
    """Body of the ``{"error": {...}}`` envelope returned on failures."""

    model_config = ConfigDict(extra="allow")

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable message")
    details: Optional[Dict[str, Any]] = Field(default=None)


class PaginationInfo(BaseModel):
    """Normalized pagination metadata."""

    page: int = Field(default=0)
    size: int = Field(default=10)
    total: Optional[int] = Field(default=None)


class PageRef(BaseModel):
    number: int
    size: int


class CollectionData(BaseModel):
    """Items, inferred columns and pagination extracted from a collection resource."""

    items: List[Resource] = Field(default_factory=list)
    columns: List[InferredField] = Field(default_factory=list)
    total: Optional[int] = Field(default=None)
    page: Optional[PageRef] = Field(default=None)


Resource.model_rebuild()
