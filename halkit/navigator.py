"""Link navigation for HAL resources.

Locates link relations in a resource and expands templated hrefs. Only a
subset of RFC 6570 is supported:

- ``{name}``      simple expansion, percent-encoded
- ``{?a,b}``      query form, ``?a=..&b=..``
- ``{&a,b}``      query continuation, ``&a=..&b=..``

A simple placeholder whose parameter is missing is left in place
unexpanded (``/users/{userId}`` stays as is), so callers can detect an
incompletely expanded URI downstream. Query-form placeholders only emit
the parameters that are present and vanish when none are.

Example:
    >>> navigator = LinkNavigator()
    >>> navigator.expand_template("/search{?q,limit}", {"q": "test", "limit": 10})
    '/search?q=test&limit=10'
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Union

from halkit._encoding import encode_component
from halkit.models import Link, Resource

Rel = Union[str, Sequence[str]]

_SIMPLE_PATTERN = re.compile(r"\{([^}]+)\}")
_QUERY_PATTERN = re.compile(r"\{\?([^}]+)\}")
_CONTINUATION_PATTERN = re.compile(r"\{&([^}]+)\}")


def _present(params: Mapping[str, Any], key: str) -> bool:
    return params.get(key) is not None


def _query_pairs(names: str, params: Mapping[str, Any]) -> list[str]:
    keys = [name.strip() for name in names.split(",")]
    return [
        f"{encode_component(key)}={encode_component(params[key])}"
        for key in keys
        if _present(params, key)
    ]


def expand_template(template: str, params: Mapping[str, Any] | None = None) -> str:
    """Expand a URI template with the given parameters.

    Args:
        template: URI template, e.g. ``/users/{userId}/sessions{?limit}``.
        params: Parameter values. ``None`` values count as absent.

    Returns:
        The expanded URI.
    """
    params = params or {}

    def simple(match: re.Match[str]) -> str:
        key = match.group(1)
        if key.startswith(("?", "&")):
            return match.group(0)
        if not _present(params, key):
            return match.group(0)
        return encode_component(params[key])

    def query(match: re.Match[str]) -> str:
        pairs = _query_pairs(match.group(1), params)
        return f"?{'&'.join(pairs)}" if pairs else ""

    def continuation(match: re.Match[str]) -> str:
        pairs = _query_pairs(match.group(1), params)
        return f"&{'&'.join(pairs)}" if pairs else ""

    result = _SIMPLE_PATTERN.sub(simple, template)
    result = _QUERY_PATTERN.sub(query, result)
    return _CONTINUATION_PATTERN.sub(continuation, result)


class LinkNavigator:
    """Navigate HAL resources by link relation.

    Stateless; the host application constructs one and passes it to
    whatever needs it.

    Example:
        >>> navigator = LinkNavigator()
        >>> link = navigator.find_link(user, ["sessions", "alternate"])
        >>> url = navigator.get_href(user, "search", {"q": "test"})
        >>> can_delete = navigator.has_capability(session, "delete")
    """

    def find_link(self, resource: Resource, rel: Rel) -> Link | None:
        """Find the first link matching one of the candidate relations.

        When a relation maps to several links the first one is returned.

        Returns:
            The matching Link, or None when no candidate is present.
        """
        rels = [rel] if isinstance(rel, str) else list(rel)
        for candidate in rels:
            link = resource.links.get(candidate)
            if isinstance(link, list):
                if link:
                    return link[0]
                continue
            if link is not None:
                return link
        return None

    def get_href(
        self,
        resource: Resource,
        rel: Rel,
        params: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Resolve a relation to a URL, expanding it when templated.

        Returns:
            The href, or None when the relation is absent.
        """
        link = self.find_link(resource, rel)
        if link is None:
            return None
        if link.templated and params is not None:
            return expand_template(link.href, params)
        return link.href

    def expand_template(self, template: str, params: Mapping[str, Any] | None = None) -> str:
        return expand_template(template, params)

    def has_capability(self, resource: Resource, rel: Rel) -> bool:
        """Whether the resource advertises the relation (used to enable UI actions)."""
        return self.find_link(resource, rel) is not None

    def get_available_relations(self, resource: Resource) -> list[str]:
        return list(resource.links.keys())

    def get_all_links(self, resource: Resource) -> dict[str, Link | list[Link]]:
        return dict(resource.links)

    def is_templated(self, link: Link) -> bool:
        return link.templated is True

    def find_link_by_type(self, resource: Resource, rel: str, media_type: str) -> Link | None:
        """Find a link whose media type matches.

        A link without a declared type is assumed to match.
        """
        link = self.find_link(resource, rel)
        if link is None:
            return None
        if not link.type:
            return link
        return link if link.type == media_type else None


__all__ = ["LinkNavigator", "expand_template"]
