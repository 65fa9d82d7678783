"""Convention-based rendering support for HAL collections and resources."""

from halkit.collection.collection import (
    DEFAULT_PAGE_TITLE,
    OrganizedFields,
    extract_collection,
    extract_resource_fields,
    infer_page_title,
    is_collection,
    organize_fields,
)
from halkit.collection.conventions import DEFAULT_CONVENTIONS, FieldConventions, merge_conventions
from halkit.collection.inference import (
    InferenceOptions,
    infer_columns,
    infer_field_type,
    infer_visible_columns,
    is_sortable,
    priority_score,
)
from halkit.collection.utils import (
    extract_embedded_items,
    get_collection_key,
    get_pagination_info,
    get_unique_keys,
    humanize_label,
    is_date_value,
    is_email_value,
    is_url_value,
    matches_pattern,
)

__all__ = [
    "DEFAULT_CONVENTIONS",
    "DEFAULT_PAGE_TITLE",
    "FieldConventions",
    "InferenceOptions",
    "OrganizedFields",
    "extract_collection",
    "extract_embedded_items",
    "extract_resource_fields",
    "get_collection_key",
    "get_pagination_info",
    "get_unique_keys",
    "humanize_label",
    "infer_columns",
    "infer_field_type",
    "infer_page_title",
    "infer_visible_columns",
    "is_collection",
    "is_date_value",
    "is_email_value",
    "is_sortable",
    "is_url_value",
    "matches_pattern",
    "merge_conventions",
    "organize_fields",
    "priority_score",
]
