"""Naming conventions used to infer field types.

Each convention is a list of compiled patterns matched against a field
name. Custom conventions extend the defaults and never replace them.

Example:
    >>> conventions = merge_conventions({"badge": [re.compile(r"^tier$", re.I)]})
    >>> any(p.search("tier") for p in conventions.badge)
    True
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from typing import Union

PatternLike = Union[str, re.Pattern]


def _compile(patterns: Iterable[PatternLike]) -> list[re.Pattern[str]]:
    return [p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns]


@dataclass(frozen=True)
class FieldConventions:
    """Field-name patterns for each inferred type."""

    date: list[re.Pattern[str]] = field(default_factory=list)
    code: list[re.Pattern[str]] = field(default_factory=list)
    badge: list[re.Pattern[str]] = field(default_factory=list)
    url: list[re.Pattern[str]] = field(default_factory=list)
    email: list[re.Pattern[str]] = field(default_factory=list)
    hidden: list[re.Pattern[str]] = field(default_factory=list)
    boolean: list[re.Pattern[str]] = field(default_factory=list)


_I = re.IGNORECASE

DEFAULT_CONVENTIONS = FieldConventions(
    # createdAt, updated_at, dateCreated, expiresOn, timestamp
    date=[
        re.compile(r"^date", _I),
        re.compile(r"date$", _I),
        re.compile(r"^created", _I),
        re.compile(r"^updated", _I),
        re.compile(r"^modified", _I),
        re.compile(r"^expires", _I),
        re.compile(r"^deleted", _I),
        re.compile(r"timestamp$", _I),
        re.compile(r"_at$", _I),
        re.compile(r"_on$", _I),
    ],
    # id, userId, apiKey, token, hash, uuid
    code=[
        re.compile(r"^id$", _I),
        re.compile(r"id$", _I),
        re.compile(r"^uuid$", _I),
        re.compile(r"^key$", _I),
        re.compile(r"key$", _I),
        re.compile(r"^token$", _I),
        re.compile(r"token$", _I),
        re.compile(r"^hash$", _I),
        re.compile(r"hash$", _I),
        re.compile(r"^code$", _I),
        re.compile(r"^api", _I),
    ],
    badge=[
        re.compile(r"^status$", _I),
        re.compile(r"^state$", _I),
        re.compile(r"^type$", _I),
        re.compile(r"^role$", _I),
        re.compile(r"^level$", _I),
        re.compile(r"^priority$", _I),
        re.compile(r"^category$", _I),
        re.compile(r"^tag$", _I),
        re.compile(r"^badge$", _I),
    ],
    url=[
        re.compile(r"^url$", _I),
        re.compile(r"url$", _I),
        re.compile(r"^link$", _I),
        re.compile(r"link$", _I),
        re.compile(r"^href$", _I),
        re.compile(r"href$", _I),
        re.compile(r"^website$", _I),
        re.compile(r"^homepage$", _I),
    ],
    email=[
        re.compile(r"^email$", _I),
        re.compile(r"email$", _I),
        re.compile(r"^mail$", _I),
        re.compile(r"mail$", _I),
    ],
    hidden=[
        re.compile(r"^_"),
        re.compile(r"^password$", _I),
        re.compile(r"password$", _I),
        re.compile(r"^secret$", _I),
        re.compile(r"secret$", _I),
        re.compile(r"secret.*token", _I),
        re.compile(r"auth.*token", _I),
        re.compile(r"^salt$", _I),
        re.compile(r"^password.*hash$", _I),
    ],
    # Case-sensitive: isActive matches, island does not.
    boolean=[
        re.compile(r"^is[A-Z]"),
        re.compile(r"^has[A-Z]"),
        re.compile(r"^can[A-Z]"),
        re.compile(r"^should[A-Z]"),
        re.compile(r"^enabled$", _I),
        re.compile(r"^disabled$", _I),
        re.compile(r"^active$", _I),
        re.compile(r"^verified$", _I),
    ],
)


def merge_conventions(
    custom: FieldConventions | Mapping[str, Iterable[PatternLike]] | None = None,
) -> FieldConventions:
    """Append caller patterns to the defaults.

    Args:
        custom: A FieldConventions, or a partial mapping of convention name
            (``date``, ``code``, ...) to patterns or pattern strings.

    Raises:
        ValueError: If the mapping names an unknown convention.
    """
    if custom is None:
        return DEFAULT_CONVENTIONS

    names = [f.name for f in fields(FieldConventions)]
    if isinstance(custom, FieldConventions):
        extra = {name: getattr(custom, name) for name in names}
    else:
        unknown = set(custom) - set(names)
        if unknown:
            raise ValueError(f"Unknown field convention(s): {', '.join(sorted(unknown))}")
        extra = dict(custom)

    return FieldConventions(
        **{
            name: [*getattr(DEFAULT_CONVENTIONS, name), *_compile(extra.get(name, ()))]
            for name in names
        }
    )


__all__ = ["DEFAULT_CONVENTIONS", "FieldConventions", "merge_conventions"]
