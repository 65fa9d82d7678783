"""Value stringification shared by URI expansion and form encoding."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_COMPONENT_SAFE = "-_.!~*'()"


def stringify(value: Any) -> str:
    """Render a parameter value the way a JSON client would.

    Booleans become ``true``/``false``, integral floats lose their
    fractional part, lists are comma-joined and mappings are JSON encoded.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def encode_component(value: Any) -> str:
    """Percent-encode a single URI component."""
    return quote(stringify(value), safe=_COMPONENT_SAFE)
