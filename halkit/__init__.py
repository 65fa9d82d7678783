"""halkit - HAL and HAL-FORMS client runtime.

halkit lets a frontend operate a hypermedia API without per-resource code.
It discovers operations from ``_links`` and ``_templates``, infers how to
display untyped JSON, classifies templates into navigation, form and action
patterns, and validates input before any request is made.

Key Features:
    - Transport: async httpx client with per-call timeouts and typed errors
    - Navigation: link lookup and URI template expansion ({var}, {?q}, {&q})
    - Templates: method override, form/JSON encoding, pre-flight validation
    - Inference: field types, labels and ordering from names and values
    - Collections: embedded item and pagination extraction

Example:
    >>> from halkit import HypermediaClient, LinkNavigator, TransportClient
    >>> from halkit.collection import extract_collection
    >>>
    >>> async with TransportClient("https://api.example.com") as transport:
    ...     client = HypermediaClient(transport)
    ...     outcome = await client.fetch("/users")
    ...     users = outcome.unwrap()
    ...     table = extract_collection(users)
    ...     next_page = LinkNavigator().get_href(users, "next")
"""

from halkit.client import HypermediaClient, validate_template_data
from halkit.config import HalkitConfig, load_config
from halkit.errors import (
    ApiClientError,
    AuthRedirectError,
    ConfigurationError,
    ErrorCode,
    HalkitError,
    HttpError,
    NetworkError,
    RequestTimeoutError,
    ResponseParseError,
    TemplateDataError,
    TimeoutError,
    ValidationFailedError,
)
from halkit.models import (
    ApiError,
    CollectionData,
    FieldType,
    InferredField,
    Link,
    PaginationInfo,
    Resource,
    Template,
    TemplateProperty,
    ValidationError,
)
from halkit.navigator import LinkNavigator, expand_template
from halkit.outcome import Failed, Invalid, Ok, Outcome, Redirecting
from halkit.runtime import Runtime
from halkit.templates import TemplateCategory, categorize_template
from halkit.transport import TransportClient

__version__ = "0.1.0"

__all__ = [
    "ApiClientError",
    "ApiError",
    "AuthRedirectError",
    "CollectionData",
    "ConfigurationError",
    "ErrorCode",
    "Failed",
    "FieldType",
    "HalkitConfig",
    "HalkitError",
    "HttpError",
    "HypermediaClient",
    "InferredField",
    "Invalid",
    "Link",
    "LinkNavigator",
    "NetworkError",
    "Ok",
    "Outcome",
    "PaginationInfo",
    "Redirecting",
    "RequestTimeoutError",
    "Resource",
    "ResponseParseError",
    "Runtime",
    "Template",
    "TemplateCategory",
    "TemplateDataError",
    "TemplateProperty",
    "TimeoutError",
    "TransportClient",
    "ValidationError",
    "ValidationFailedError",
    "categorize_template",
    "expand_template",
    "load_config",
    "validate_template_data",
]
