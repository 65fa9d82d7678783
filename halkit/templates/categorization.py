"""Template categorization.

Classifies a HAL-FORMS template into the UX pattern it needs, from its
method and the visibility of its properties:

- navigation: execute immediately and follow the result (pagination,
  parameterized collection access)
- form: collect input in a dialog (create, update, a delete that asks for
  a reason)
- action: confirm, then execute a pre-configured mutation
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from halkit.models import Resource, Template

NAVIGATION_METHODS = frozenset({"GET", "POST"})

# Structural templates with no operational meaning in a detail view.
STRUCTURAL_TEMPLATE_KEYS = frozenset({"self", "default"})


class TemplateCategory(str, Enum):
    NAVIGATION = "navigation"
    FORM = "form"
    ACTION = "action"


def is_all_hidden(template: Template) -> bool:
    """True when every property is hidden; vacuously true with no properties."""
    return all(prop.type == "hidden" for prop in template.properties)


def categorize_template(template: Template, key: str | None = None) -> TemplateCategory:
    """Classify a template.

    All-hidden GET/POST templates are navigation, all-hidden templates with
    any other method are actions, and anything with a visible property is a
    form regardless of method. ``key`` does not affect the result.

    Example:
        >>> categorize_template(Template(method="DELETE", properties=[{"name": "id", "type": "hidden"}]))
        <TemplateCategory.ACTION: 'action'>
    """
    if not is_all_hidden(template):
        return TemplateCategory.FORM
    if template.method.upper() in NAVIGATION_METHODS:
        return TemplateCategory.NAVIGATION
    return TemplateCategory.ACTION


def categorize_templates(resource: Resource) -> dict[str, TemplateCategory]:
    """Categorize every template of a resource, keyed like ``_templates``."""
    return {key: categorize_template(template, key) for key, template in resource.templates.items()}


def filter_displayable_templates(templates: Mapping[str, Template]) -> list[tuple[str, Template]]:
    """Templates worth offering in a detail view header.

    Drops the structural ``self``/``default`` templates and delete
    operations, which belong in list views.
    """
    return [
        (key, template)
        for key, template in templates.items()
        if key not in STRUCTURAL_TEMPLATE_KEYS
        and key != "delete"
        and template.method.upper() != "DELETE"
    ]


__all__ = [
    "TemplateCategory",
    "categorize_template",
    "categorize_templates",
    "filter_displayable_templates",
    "is_all_hidden",
]
