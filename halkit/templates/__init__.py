"""HAL-FORMS template helpers: categorization, data assembly, confirmation and enums."""

from halkit.templates.categorization import (
    TemplateCategory,
    categorize_template,
    categorize_templates,
    filter_displayable_templates,
    is_all_hidden,
)
from halkit.templates.confirmation import ConfirmationConfig, get_confirmation_config
from halkit.templates.enums import (
    EnumOption,
    count_bitflags,
    format_bitfield,
    get_enum_label,
    get_enum_label_safe,
    get_enum_options,
    has_bitflag,
    is_enum_property,
    parse_bitfield,
    set_bitflag,
    toggle_bitflag,
    unset_bitflag,
)
from halkit.templates.execution import (
    PropertySource,
    TemplateExecutionContext,
    build_template_data,
    get_property_source,
)

__all__ = [
    "ConfirmationConfig",
    "EnumOption",
    "PropertySource",
    "TemplateCategory",
    "TemplateExecutionContext",
    "build_template_data",
    "categorize_template",
    "categorize_templates",
    "count_bitflags",
    "filter_displayable_templates",
    "format_bitfield",
    "get_confirmation_config",
    "get_enum_label",
    "get_enum_label_safe",
    "get_enum_options",
    "get_property_source",
    "has_bitflag",
    "is_all_hidden",
    "is_enum_property",
    "parse_bitfield",
    "set_bitflag",
    "toggle_bitflag",
    "unset_bitflag",
]
