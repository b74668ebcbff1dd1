"""
Walks a value and reports every primitive found in it, with its coding path.

A query string can only express two levels of nesting: a root key holding
either a primitive, a sequence of primitives or a record of primitives. The
walk enforces that limit and raises `UnsupportedStructureError` for anything
deeper instead of producing a partial query.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, cast

from queryencoder._internal._adapters import (
    LeafAdapterProtocol,
    LeafValue,
    RecordAdapterProtocol,
    SequenceAdapterProtocol,
    get_adapter,
)
from queryencoder._internal._encoding import force_str
from queryencoder.enums import LeafKind, ValueShape
from queryencoder.exceptions import UnsupportedStructureError
from queryencoder.logging import logger
from queryencoder.options import EncodingOptions
from queryencoder.strategies import DateStrategy
from queryencoder.types import CodingPath

MAX_DEPTH = 2


@dataclass(frozen=True)
class LeafEvent:
    coding_path: CodingPath
    kind: LeafKind
    value: str


def format_leaf(leaf: LeafValue, date_strategy: DateStrategy) -> str:
    if leaf.kind is LeafKind.BOOLEAN:
        return "true" if leaf.value else "false"
    if leaf.kind is LeafKind.DATE:
        return date_strategy.format(leaf.value)
    return force_str(leaf.value)


def _unsupported(coding_path: CodingPath, reason: str) -> UnsupportedStructureError:
    location = ".".join(coding_path) or "<root>"
    logger.debug(f"Rejecting value at '{location}': {reason}")
    return UnsupportedStructureError(
        f"Cannot encode the value at '{location}' into a query: {reason}.",
        coding_path=coding_path,
    )


def walk(
    value: Any,
    coding_path: CodingPath,
    options: EncodingOptions,
    *,
    in_sequence: bool = False,
) -> Iterator[LeafEvent]:
    """
    Yields a `LeafEvent` for every primitive in `value`, in value order.

    `None` values produce no events, wherever they appear. Elements of a
    sequence share the sequence's coding path and fields of a record extend
    it with the field name.
    """
    if value is None:
        return

    adapter = get_adapter(value)

    if adapter.shape is ValueShape.LEAF:
        if not coding_path:
            raise _unsupported(coding_path, "a primitive value needs a key")
        leaf = cast(LeafAdapterProtocol, adapter).to_leaf(value)
        yield LeafEvent(coding_path, leaf.kind, format_leaf(leaf, options.date_strategy))

    elif adapter.shape is ValueShape.SEQUENCE:
        if in_sequence:
            raise _unsupported(coding_path, "sequences of sequences are not supported")
        if len(coding_path) != 1:
            raise _unsupported(coding_path, "sequences are only supported directly under a key")
        for element in cast(SequenceAdapterProtocol, adapter).elements(value):
            yield from walk(element, coding_path, options, in_sequence=True)

    else:
        if in_sequence:
            raise _unsupported(coding_path, "sequences of records are not supported")
        if len(coding_path) >= MAX_DEPTH:
            raise _unsupported(coding_path, "nested records are not supported")
        for name, field in cast(RecordAdapterProtocol, adapter).fields(value):
            yield from walk(field, (*coding_path, name), options)


def traverse(key: str, value: Any, options: EncodingOptions) -> list[LeafEvent]:
    """
    Collects the events of `value` encoded under `key`.

    The events are gathered before returning, so a structure error surfaces
    before any of them is flattened.
    """
    return list(walk(value, (key,), options))


def traverse_record(record: Any, options: EncodingOptions) -> list[LeafEvent]:
    """
    Collects the events of a top-level record, each field being a root key.
    """
    if record is None:
        return []
    if get_adapter(record).shape is not ValueShape.RECORD:
        raise _unsupported((), f"expected a record, got '{type(record).__name__}'")
    return list(walk(record, (), options))
