"""Enum and bitfield helpers driven by template property options.

The server describes enumerated values through HAL-FORMS ``options``
(``{value, prompt}``); these helpers resolve display labels from them and
manipulate integer bitfields whose flags are listed the same way.

Example:
    >>> options = [EnumOption(1, "Contacts"), EnumOption(2, "Campaigns"), EnumOption(4, "Links")]
    >>> format_bitfield(5, options)
    'Contacts, Links'
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional

from halkit._encoding import stringify
from halkit.models import TemplateProperty

NO_FLAGS_LABEL = "None"


@dataclass(frozen=True)
class EnumOption:
    value: Any
    label: str


def _same_value(left: Any, right: Any) -> bool:
    # True == 1 in Python but not on the wire.
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    return left == right


def is_enum_property(prop: Optional[TemplateProperty]) -> bool:
    return prop is not None and prop.is_enum


def get_enum_label(value: Any, prop: Optional[TemplateProperty], fallback: str | None = None) -> str:
    """Display label for an enum value, falling back to ``fallback`` or the raw value."""
    default = fallback if fallback is not None else stringify(value)
    if not is_enum_property(prop):
        return default
    assert prop is not None and prop.options is not None
    for option in prop.options:
        if _same_value(option.value, value):
            return option.prompt if option.prompt is not None else default
    return default


def get_enum_options(prop: Optional[TemplateProperty]) -> list[EnumOption]:
    if not is_enum_property(prop):
        return []
    assert prop is not None and prop.options is not None
    return [
        EnumOption(
            value=option.value,
            label=option.prompt if option.prompt is not None else stringify(option.value),
        )
        for option in prop.options
    ]


def get_enum_label_safe(value: Any, prop: Optional[TemplateProperty]) -> Optional[str]:
    """Like get_enum_label, but None when the property is not an enum."""
    if not is_enum_property(prop):
        return None
    return get_enum_label(value, prop)


def _flag(option: EnumOption) -> int:
    return int(option.value)


def parse_bitfield(value: Optional[int], options: Sequence[EnumOption]) -> list[str]:
    """Labels of the flags set in ``value``, in option order."""
    if not value:
        return []
    labels = []
    for option in options:
        flag = _flag(option)
        if flag != 0 and value & flag == flag:
            labels.append(option.label)
    return labels


def has_bitflag(value: Optional[int], flag: int) -> bool:
    if value is None or flag == 0:
        return False
    return value & flag == flag


def format_bitfield(value: Optional[int], options: Sequence[EnumOption], separator: str = ", ") -> str:
    labels = parse_bitfield(value, options)
    return separator.join(labels) if labels else NO_FLAGS_LABEL


def count_bitflags(value: Optional[int], options: Sequence[EnumOption]) -> int:
    return len(parse_bitfield(value, options))


def toggle_bitflag(value: Optional[int], flag: int) -> int:
    return (value or 0) ^ flag


def set_bitflag(value: Optional[int], flag: int) -> int:
    return (value or 0) | flag


def unset_bitflag(value: Optional[int], flag: int) -> int:
    return (value or 0) & ~flag


__all__ = [
    "EnumOption",
    "count_bitflags",
    "format_bitfield",
    "get_enum_label",
    "get_enum_label_safe",
    "get_enum_options",
    "has_bitflag",
    "is_enum_property",
    "parse_bitfield",
    "set_bitflag",
    "toggle_bitflag",
    "unset_bitflag",
]
