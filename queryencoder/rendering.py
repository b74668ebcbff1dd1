from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote

from queryencoder.datastructures import QueryItem

# Sub-delimiters and query characters left as they are. `&`, `=`, `+` and
# `#` are always escaped since they change how a query is read.
QUERY_SAFE_CHARACTERS = "!$'()*,;:@/?"


def percent_encode(value: str) -> str:
    """
    Escapes `value` for use as a name or value of a query component.

    >>> percent_encode("id[role]")
    'id%5Brole%5D'
    """
    return quote(value, safe=QUERY_SAFE_CHARACTERS)


def _escape(item: QueryItem) -> QueryItem:
    value = None if item.value is None else percent_encode(item.value)
    return QueryItem(percent_encode(item.name), value)


def _join(parts: list[str]) -> str | None:
    if not parts:
        return None
    return "&".join(parts)


def render_query(items: Iterable[QueryItem]) -> str | None:
    """
    The query before percent escaping, `None` when there are no items.
    """
    return _join([str(item) for item in items])


def render_percent_encoded_query(items: Iterable[QueryItem]) -> str | None:
    """
    The query with every name and value percent escaped, `None` when there are no items.
    """
    return _join([str(_escape(item)) for item in items])
