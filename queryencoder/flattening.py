from __future__ import annotations

from queryencoder.datastructures import QueryItems
from queryencoder.exceptions import UnsupportedStructureError
from queryencoder.options import EncodingOptions
from queryencoder.traversal import MAX_DEPTH, LeafEvent

FIELD_SEPARATOR = ","


def flatten(items: QueryItems, event: LeafEvent, options: EncodingOptions) -> None:
    """
    Adds one leaf to the query items.

    Exploded values always get their own pair. Record fields are named after
    the field alone, or `key[field]` for deep objects; the root key is not
    part of the name of an exploded, non deep object field.

    Non exploded values are merged into the last pair when it carries the
    same key: primitives and sequence elements are joined with the
    delimiter, record fields are written as `field,value` and always joined
    with a comma.
    """
    coding_path = event.coding_path
    if not 0 < len(coding_path) <= MAX_DEPTH:
        raise UnsupportedStructureError(
            f"Coding path {coding_path!r} cannot be flattened into a query.",
            coding_path=coding_path,
        )

    key = options.key_strategy.encode_key(coding_path)
    is_field = len(coding_path) == MAX_DEPTH

    if options.explode:
        if not is_field:
            items.append(key, event.value)
        elif options.deep_object:
            items.append(f"{key}[{coding_path[1]}]", event.value)
        else:
            items.append(coding_path[1], event.value)
        return

    if is_field:
        value = f"{coding_path[1]}{FIELD_SEPARATOR}{event.value}"
        separator = FIELD_SEPARATOR
    else:
        value = event.value
        separator = options.delimiter

    last = items.last
    if last is not None and last.name == key:
        items.merge_last(value, separator)
    else:
        items.append(key, value)
