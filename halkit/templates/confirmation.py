"""Confirmation dialog wording for action templates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from halkit.models import Template
from halkit.templates.execution import TemplateExecutionContext

Variant = Literal["default", "destructive"]

DEFAULT_TITLE = "Confirm Action"


@dataclass(frozen=True)
class ConfirmationConfig:
    title: str
    message: str
    confirm_label: str = "Confirm"
    cancel_label: str = "Cancel"
    variant: Variant = "default"


def get_confirmation_config(template: Template, context: TemplateExecutionContext) -> ConfirmationConfig:
    """Describe the confirmation dialog for executing ``template``.

    Bulk operations mention the selection count; DELETE gets destructive
    styling and an irreversibility warning.
    """
    is_delete = template.method.upper() == "DELETE"
    count = len(context.selections)

    if count:
        noun = "item" if count == 1 else "items"
        if is_delete:
            message = f"Are you sure you want to delete {count} {noun}? This action cannot be undone."
        else:
            message = f"Apply this action to {count} {noun}?"
    elif is_delete:
        message = "Are you sure you want to delete this item? This action cannot be undone."
    elif template.title:
        message = f"Are you sure you want to {template.title}?"
    else:
        message = "Are you sure you want to continue?"

    return ConfirmationConfig(
        title=template.title or DEFAULT_TITLE,
        message=message,
        confirm_label="Delete" if is_delete else "Confirm",
        cancel_label="Cancel",
        variant="destructive" if is_delete else "default",
    )


__all__ = ["ConfirmationConfig", "get_confirmation_config"]
