"""Tests for collection extraction and resource field organization."""

from __future__ import annotations

from halkit.collection import (
    DEFAULT_PAGE_TITLE,
    InferenceOptions,
    extract_collection,
    extract_embedded_items,
    extract_resource_fields,
    get_collection_key,
    get_pagination_info,
    infer_page_title,
    is_collection,
    organize_fields,
)
from halkit.models import FieldType, Link, PaginationInfo, Resource


class TestExtractEmbeddedItems:
    """Tests for locating collection items."""

    def test_explicit_key(self, sessions: Resource) -> None:
        items = extract_embedded_items(sessions, "sessions")

        assert [item["sessionId"] for item in items] == ["s-1", "s-2"]

    def test_explicit_key_missing_or_not_array(self) -> None:
        resource = Resource.from_hal({"_embedded": {"owner": {"name": "x"}, "items": [{"a": 1}]}})

        assert extract_embedded_items(resource, "owner") == []
        assert extract_embedded_items(resource, "missing") == []

    def test_common_keys_probed_in_order(self) -> None:
        resource = Resource.from_hal(
            {"_embedded": {"other": [{"o": 1}], "results": [{"r": 1}], "items": [{"i": 1}]}}
        )

        assert extract_embedded_items(resource)[0]["i"] == 1
        assert get_collection_key(resource) == "items"

    def test_falls_back_to_first_array(self, sessions: Resource) -> None:
        assert len(extract_embedded_items(sessions)) == 2
        assert get_collection_key(sessions) == "sessions"

    def test_no_embedded(self, user: Resource) -> None:
        assert extract_embedded_items(user) == []
        assert get_collection_key(user) is None


class TestPaginationInfo:
    """Tests for pagination normalization."""

    def test_nested_spring_style(self, sessions: Resource) -> None:
        assert get_pagination_info(sessions) == PaginationInfo(page=2, size=2, total=5)

    def test_nested_page_limit_total(self) -> None:
        resource = Resource(data={"page": {"page": 1, "limit": 25, "total": 100}})

        assert get_pagination_info(resource) == PaginationInfo(page=1, size=25, total=100)

    def test_nested_defaults(self) -> None:
        resource = Resource(data={"page": {}})

        assert get_pagination_info(resource) == PaginationInfo(page=0, size=10, total=None)

    def test_flat_fields(self) -> None:
        resource = Resource(data={"page": 3, "size": 20, "total": 200})

        assert get_pagination_info(resource) == PaginationInfo(page=3, size=20, total=200)

    def test_absent(self, user: Resource) -> None:
        assert get_pagination_info(user) is None


class TestExtractCollection:
    """Tests for the combined collection view."""

    def test_items_columns_and_page(self, sessions: Resource) -> None:
        data = extract_collection(sessions)

        assert len(data.items) == 2
        assert [c.key for c in data.columns] == [
            "sessionId",
            "deviceName",
            "ipAddress",
            "status",
            "lastAccessedAt",
        ]
        assert data.total == 5
        assert data.page is not None
        assert (data.page.number, data.page.size) == (2, 2)

    def test_include_hidden(self, sessions: Resource) -> None:
        data = extract_collection(sessions, include_hidden=True)

        assert data.columns[-1].key == "secretToken"
        assert data.columns[-1].hidden is True

    def test_options_passed_through(self, sessions: Resource) -> None:
        data = extract_collection(sessions, InferenceOptions(sort_by_priority=True))

        assert data.columns[0].key == "status"

    def test_no_pagination(self) -> None:
        resource = Resource.from_hal({"_embedded": {"items": [{"name": "a"}]}})

        data = extract_collection(resource)

        assert data.total is None
        assert data.page is None

    def test_empty_resource(self) -> None:
        data = extract_collection(Resource())

        assert data.items == []
        assert data.columns == []


class TestIsCollection:
    """Tests for collection detection."""

    def test_embedded_array(self) -> None:
        assert is_collection(Resource.from_hal({"_embedded": {"things": []}})) is True

    def test_pagination_keys(self) -> None:
        assert is_collection(Resource(data={"total": 0})) is True
        assert is_collection(Resource(data={"size": 10})) is True

    def test_single_resources(self, user: Resource) -> None:
        assert is_collection(user) is False
        assert is_collection(Resource.from_hal({"_embedded": {"owner": {"name": "x"}}})) is False
        assert is_collection(None) is False


class TestResourceFields:
    """Tests for single-resource field descriptors."""

    def test_fields_in_source_order(self, user: Resource) -> None:
        fields = extract_resource_fields(user)

        assert [f.key for f in fields] == ["userId", "name", "email", "role", "createdAt", "isActive"]
        assert [f.type for f in fields] == [
            FieldType.CODE,
            FieldType.TEXT,
            FieldType.EMAIL,
            FieldType.BADGE,
            FieldType.DATE,
            FieldType.BOOLEAN,
        ]

    def test_none_resource(self) -> None:
        assert extract_resource_fields(None) == []

    def test_organize_fields(self, user: Resource) -> None:
        organized = organize_fields(user)

        assert [f.key for f in organized.overview] == ["name"]
        assert [f.key for f in organized.details] == ["userId", "email", "role", "createdAt", "isActive"]

    def test_organize_drops_hidden(self) -> None:
        resource = Resource(data={"title": "Doc", "passwordHash": "x", "body": "text"})

        organized = organize_fields(resource)

        assert [f.key for f in organized.overview] == ["title"]
        assert [f.key for f in organized.details] == ["body"]

    def test_organize_respects_options(self, user: Resource) -> None:
        organized = organize_fields(user, InferenceOptions(hide_fields=["role"]))

        assert "role" not in [f.key for f in organized.details]


class TestInferPageTitle:
    """Tests for detail page titles."""

    def test_self_link_title(self, user: Resource) -> None:
        assert infer_page_title(user) == "Alice"

    def test_title_field_before_name(self) -> None:
        resource = Resource(data={"name": "n", "title": "t"})

        assert infer_page_title(resource) == "t"

    def test_name_field(self) -> None:
        resource = Resource(data={"name": "Widget"}, links={"self": Link(href="/w/1")})

        assert infer_page_title(resource) == "Widget"

    def test_overview_fields(self) -> None:
        resource = Resource(data={"heading": "From overview"})
        overview = [f for f in extract_resource_fields(resource) if f.key == "heading"]

        assert infer_page_title(resource, overview) == "From overview"

    def test_fallback(self) -> None:
        assert infer_page_title(Resource(data={"name": ""})) == DEFAULT_PAGE_TITLE
        assert infer_page_title(None, fallback="Untitled") == "Untitled"
