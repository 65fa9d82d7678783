"""Tests for template categorization, data assembly, confirmation and enums."""

from __future__ import annotations

import pytest

from halkit.errors import TemplateDataError
from halkit.models import Resource, Template, TemplateProperty
from halkit.templates import (
    EnumOption,
    PropertySource,
    TemplateCategory,
    TemplateExecutionContext,
    build_template_data,
    categorize_template,
    categorize_templates,
    count_bitflags,
    filter_displayable_templates,
    format_bitfield,
    get_confirmation_config,
    get_enum_label,
    get_enum_label_safe,
    get_enum_options,
    get_property_source,
    has_bitflag,
    is_all_hidden,
    is_enum_property,
    parse_bitfield,
    set_bitflag,
    toggle_bitflag,
    unset_bitflag,
)


def _template(method: str, *types: str) -> Template:
    return Template(
        method=method,
        target="/t",
        properties=[{"name": f"p{i}", "type": t} for i, t in enumerate(types)],
    )


class TestCategorizeTemplate:
    """Tests for the navigation/form/action classification."""

    @pytest.mark.parametrize(
        "method,types,expected",
        [
            ("GET", (), TemplateCategory.NAVIGATION),
            ("POST", ("hidden",), TemplateCategory.NAVIGATION),
            ("post", ("hidden", "hidden"), TemplateCategory.NAVIGATION),
            ("DELETE", ("hidden",), TemplateCategory.ACTION),
            ("PUT", (), TemplateCategory.ACTION),
            ("PATCH", ("hidden",), TemplateCategory.ACTION),
            ("POST", ("text",), TemplateCategory.FORM),
            ("DELETE", ("hidden", "text"), TemplateCategory.FORM),
            ("GET", ("number",), TemplateCategory.FORM),
        ],
    )
    def test_categories(self, method: str, types: tuple[str, ...], expected: TemplateCategory) -> None:
        assert categorize_template(_template(method, *types)) is expected

    def test_key_does_not_affect_result(self) -> None:
        template = _template("DELETE", "hidden")

        assert categorize_template(template, "next") is categorize_template(template, "delete")

    def test_is_all_hidden_vacuous(self) -> None:
        assert is_all_hidden(Template()) is True
        assert is_all_hidden(_template("GET", "hidden", "text")) is False

    def test_categorize_resource_templates(self, user: Resource, sessions: Resource) -> None:
        assert categorize_templates(user) == {
            "default": TemplateCategory.NAVIGATION,
            "update": TemplateCategory.FORM,
            "delete": TemplateCategory.ACTION,
        }
        assert categorize_templates(sessions) == {
            "bulkDelete": TemplateCategory.FORM,
            "next": TemplateCategory.NAVIGATION,
        }

    def test_category_values(self) -> None:
        assert [c.value for c in TemplateCategory] == ["navigation", "form", "action"]


class TestFilterDisplayableTemplates:
    """Tests for detail-view template filtering."""

    def test_drops_structural_and_delete(self, user: Resource) -> None:
        keys = [key for key, _ in filter_displayable_templates(user.templates)]

        assert keys == ["update"]

    def test_drops_delete_method_under_other_key(self, sessions: Resource) -> None:
        keys = [key for key, _ in filter_displayable_templates(sessions.templates)]

        assert keys == ["next"]


class TestPropertySource:
    """Tests for property source resolution."""

    def test_value_wins(self) -> None:
        prop = TemplateProperty(name="ids", type="array", value=[])

        assert get_property_source(prop) is PropertySource.VALUE

    def test_explicit_null_value_counts(self) -> None:
        prop = TemplateProperty(name="note", value=None)

        assert get_property_source(prop) is PropertySource.VALUE

    def test_selection(self) -> None:
        assert get_property_source(TemplateProperty(name="items", type="array")) is PropertySource.SELECTION
        assert get_property_source(TemplateProperty(name="sessionIds")) is PropertySource.SELECTION

    def test_form(self) -> None:
        assert get_property_source(TemplateProperty(name="name")) is PropertySource.FORM


class TestBuildTemplateData:
    """Tests for assembling submission data."""

    def test_hidden_value_used(self, user: Resource) -> None:
        context = TemplateExecutionContext(template=user.templates["delete"])

        assert build_template_data(context) == {"userId": "123"}

    def test_form_then_resource(self, user: Resource) -> None:
        context = TemplateExecutionContext(
            template=user.templates["update"],
            form_data={"name": "Alice Updated"},
            resource=user,
        )

        assert build_template_data(context) == {"name": "Alice Updated", "email": "alice@example.com"}

    def test_missing_required_form_field(self, user: Resource) -> None:
        context = TemplateExecutionContext(template=user.templates["update"], form_data={"name": "A"})

        with pytest.raises(TemplateDataError) as exc_info:
            build_template_data(context)

        assert str(exc_info.value.message) == "Required field email is missing"
        assert exc_info.value.field == "email"

    def test_optional_missing_field_omitted(self) -> None:
        template = Template(properties=[{"name": "note"}])

        assert build_template_data(TemplateExecutionContext(template=template)) == {}

    def test_selections(self, sessions: Resource) -> None:
        context = TemplateExecutionContext(
            template=sessions.templates["bulkDelete"],
            selections=["s-1", "s-2"],
        )

        assert build_template_data(context) == {"sessionIds": ["s-1", "s-2"]}

    def test_required_selection_missing(self, sessions: Resource) -> None:
        context = TemplateExecutionContext(template=sessions.templates["bulkDelete"])

        with pytest.raises(TemplateDataError, match="At least one item must be selected for sessionIds"):
            build_template_data(context)

    def test_read_only_skipped(self) -> None:
        template = Template(
            properties=[
                {"name": "id", "readOnly": True, "value": "1"},
                {"name": "name", "required": True},
            ]
        )
        context = TemplateExecutionContext(template=template, form_data={"name": "x", "id": "2"})

        assert build_template_data(context) == {"name": "x"}


class TestConfirmationConfig:
    """Tests for confirmation dialog wording."""

    def test_single_delete(self, user: Resource) -> None:
        template = user.templates["delete"]

        config = get_confirmation_config(template, TemplateExecutionContext(template=template))

        assert config.title == "Delete User"
        assert config.message == "Are you sure you want to delete this item? This action cannot be undone."
        assert config.confirm_label == "Delete"
        assert config.cancel_label == "Cancel"
        assert config.variant == "destructive"

    def test_bulk_delete(self, sessions: Resource) -> None:
        template = sessions.templates["bulkDelete"]
        context = TemplateExecutionContext(template=template, selections=["s-1", "s-2"])

        config = get_confirmation_config(template, context)

        assert config.message == "Are you sure you want to delete 2 items? This action cannot be undone."

    def test_bulk_single_item(self, sessions: Resource) -> None:
        template = sessions.templates["bulkDelete"]
        context = TemplateExecutionContext(template=template, selections=["s-1"])

        assert get_confirmation_config(template, context).message == (
            "Are you sure you want to delete 1 item? This action cannot be undone."
        )

    def test_bulk_non_delete(self) -> None:
        template = Template(method="POST", title="Archive")
        context = TemplateExecutionContext(template=template, selections=["a", "b", "c"])

        config = get_confirmation_config(template, context)

        assert config.message == "Apply this action to 3 items?"
        assert config.variant == "default"
        assert config.confirm_label == "Confirm"

    def test_titled_action(self) -> None:
        template = Template(method="PATCH", title="Resend Invitation")

        config = get_confirmation_config(template, TemplateExecutionContext(template=template))

        assert config.title == "Resend Invitation"
        assert config.message == "Are you sure you want to Resend Invitation?"

    def test_untitled_action(self) -> None:
        template = Template(method="PATCH")

        config = get_confirmation_config(template, TemplateExecutionContext(template=template))

        assert config.title == "Confirm Action"
        assert config.message == "Are you sure you want to continue?"


@pytest.fixture
def status_prop() -> TemplateProperty:
    return TemplateProperty(
        name="status",
        options=[
            {"value": "active", "prompt": "Active"},
            {"value": "suspended", "prompt": "Suspended"},
            {"value": "archived"},
        ],
    )


@pytest.fixture
def permission_options() -> list[EnumOption]:
    return [EnumOption(1, "Contacts"), EnumOption(2, "Campaigns"), EnumOption(4, "Links")]


class TestEnums:
    """Tests for option-driven enum labels."""

    def test_is_enum_property(self, status_prop: TemplateProperty) -> None:
        assert is_enum_property(status_prop) is True
        assert is_enum_property(TemplateProperty(name="x")) is False
        assert is_enum_property(TemplateProperty(name="x", options=[])) is False
        assert is_enum_property(None) is False

    def test_label_lookup(self, status_prop: TemplateProperty) -> None:
        assert get_enum_label("active", status_prop) == "Active"

    def test_unknown_value_falls_back(self, status_prop: TemplateProperty) -> None:
        assert get_enum_label("deleted", status_prop) == "deleted"
        assert get_enum_label("deleted", status_prop, fallback="Unknown") == "Unknown"

    def test_option_without_prompt(self, status_prop: TemplateProperty) -> None:
        assert get_enum_label("archived", status_prop) == "archived"

    def test_non_enum_property(self) -> None:
        assert get_enum_label(3, TemplateProperty(name="n")) == "3"
        assert get_enum_label_safe(3, TemplateProperty(name="n")) is None

    def test_safe_label(self, status_prop: TemplateProperty) -> None:
        assert get_enum_label_safe("suspended", status_prop) == "Suspended"

    def test_booleans_do_not_match_integers(self) -> None:
        prop = TemplateProperty(name="flag", options=[{"value": 1, "prompt": "One"}, {"value": True, "prompt": "Yes"}])

        assert get_enum_label(True, prop) == "Yes"
        assert get_enum_label(1, prop) == "One"

    def test_options(self, status_prop: TemplateProperty) -> None:
        assert get_enum_options(status_prop) == [
            EnumOption("active", "Active"),
            EnumOption("suspended", "Suspended"),
            EnumOption("archived", "archived"),
        ]
        assert get_enum_options(None) == []


class TestBitfields:
    """Tests for bitfield helpers."""

    def test_parse(self, permission_options: list[EnumOption]) -> None:
        assert parse_bitfield(5, permission_options) == ["Contacts", "Links"]
        assert parse_bitfield(0, permission_options) == []
        assert parse_bitfield(None, permission_options) == []

    def test_format(self, permission_options: list[EnumOption]) -> None:
        assert format_bitfield(7, permission_options) == "Contacts, Campaigns, Links"
        assert format_bitfield(3, permission_options, separator=" | ") == "Contacts | Campaigns"
        assert format_bitfield(0, permission_options) == "None"

    def test_count(self, permission_options: list[EnumOption]) -> None:
        assert count_bitflags(6, permission_options) == 2

    def test_has_flag(self) -> None:
        assert has_bitflag(5, 4) is True
        assert has_bitflag(5, 2) is False
        assert has_bitflag(None, 1) is False
        assert has_bitflag(5, 0) is False

    def test_mutations(self) -> None:
        assert toggle_bitflag(5, 4) == 1
        assert toggle_bitflag(1, 4) == 5
        assert set_bitflag(None, 2) == 2
        assert set_bitflag(3, 2) == 3
        assert unset_bitflag(7, 2) == 5
        assert unset_bitflag(None, 2) == 0
