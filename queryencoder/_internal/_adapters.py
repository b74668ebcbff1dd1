from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from contextvars import Token
from dataclasses import dataclass, fields, is_dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from inspect import isclass
from pathlib import PurePath
from types import GeneratorType
from typing import Any, ClassVar, Protocol, cast, runtime_checkable
from urllib.parse import ParseResult, SplitResult
from uuid import UUID

from monkay import TransparentCage

from queryencoder._internal._encoding import force_str
from queryencoder.enums import LeafKind, ValueShape
from queryencoder.exceptions import UnsupportedValueError


@dataclass(frozen=True)
class LeafValue:
    """
    A primitive value tagged with its kind, ready to be rendered as text.
    """

    kind: LeafKind
    value: Any


@runtime_checkable
class LeafAdapterProtocol(Protocol):
    shape: ClassVar[ValueShape]

    def is_type(self, value: Any) -> bool:
        """Check if the adapter is applicable for values of this type"""

    def to_leaf(self, value: Any) -> LeafValue:
        """Wrap the value into a tagged leaf."""


@runtime_checkable
class SequenceAdapterProtocol(Protocol):
    shape: ClassVar[ValueShape]

    def is_type(self, value: Any) -> bool:
        """Check if the adapter is applicable for values of this type"""

    def elements(self, value: Any) -> Iterable[Any]:
        """The elements of the sequence, in order."""


@runtime_checkable
class RecordAdapterProtocol(Protocol):
    shape: ClassVar[ValueShape]

    def is_type(self, value: Any) -> bool:
        """Check if the adapter is applicable for values of this type"""

    def fields(self, value: Any) -> Iterable[tuple[str, Any]]:
        """The `(name, value)` pairs of the record, in declaration order."""


AdapterProtocol = LeafAdapterProtocol | SequenceAdapterProtocol | RecordAdapterProtocol


class Adapter:
    """
    The base class for any custom adapter added to the system.

    Subclasses declare the `shape` they expose and, usually, the `__type__`
    they apply to.
    """

    name: str | None = None
    shape: ClassVar[ValueShape] = ValueShape.LEAF
    __type__: type | tuple[type, ...] | None = None

    def is_type(self, value: Any) -> bool:
        return self.__type__ is not None and isinstance(value, self.__type__)


class LeafAdapter(Adapter):
    shape = ValueShape.LEAF
    kind: ClassVar[LeafKind] = LeafKind.STRING

    def to_leaf(self, value: Any) -> LeafValue:
        return LeafValue(self.kind, value)


class SequenceAdapter(Adapter):
    shape = ValueShape.SEQUENCE

    def elements(self, value: Any) -> Iterable[Any]:
        return list(value)


class RecordAdapter(Adapter):
    shape = ValueShape.RECORD

    def fields(self, value: Any) -> Iterable[tuple[str, Any]]:
        raise NotImplementedError("`fields()` must be implemented in subclasses.")


class EnumAdapter(LeafAdapter):
    name: str = "EnumAdapter"
    __type__ = Enum

    def to_leaf(self, value: Enum) -> LeafValue:
        return adapt_leaf(value.value)


class StringAdapter(LeafAdapter):
    name: str = "StringAdapter"
    __type__ = (str, bytes)
    kind = LeafKind.STRING

    def to_leaf(self, value: str | bytes) -> LeafValue:
        return LeafValue(self.kind, force_str(value))


class BooleanAdapter(LeafAdapter):
    name: str = "BooleanAdapter"
    __type__ = bool
    kind = LeafKind.BOOLEAN


class IntegerAdapter(LeafAdapter):
    name: str = "IntegerAdapter"
    __type__ = int
    kind = LeafKind.INTEGER


class FloatAdapter(LeafAdapter):
    name: str = "FloatAdapter"
    __type__ = (float, Decimal)
    kind = LeafKind.FLOAT


class DateAdapter(LeafAdapter):
    name: str = "DateAdapter"
    __type__ = date
    kind = LeafKind.DATE


class TimedeltaAdapter(LeafAdapter):
    name: str = "TimedeltaAdapter"
    __type__ = timedelta
    kind = LeafKind.FLOAT

    def to_leaf(self, value: timedelta) -> LeafValue:
        return LeafValue(self.kind, value.total_seconds())


class UUIDAdapter(LeafAdapter):
    name: str = "UUIDAdapter"
    __type__ = UUID

    def to_leaf(self, value: UUID) -> LeafValue:
        return LeafValue(self.kind, str(value))


class PurePathAdapter(LeafAdapter):
    name: str = "PurePathAdapter"
    __type__ = PurePath

    def to_leaf(self, value: PurePath) -> LeafValue:
        return LeafValue(self.kind, str(value))


class URLAdapter(LeafAdapter):
    name: str = "URLAdapter"
    __type__ = (SplitResult, ParseResult)
    kind = LeafKind.URL

    def to_leaf(self, value: SplitResult | ParseResult) -> LeafValue:
        return LeafValue(self.kind, value.geturl())


class DataclassAdapter(RecordAdapter):
    name: str = "DataclassAdapter"

    def is_type(self, value: Any) -> bool:
        return is_dataclass(value) and not isclass(value)

    def fields(self, value: Any) -> Iterable[tuple[str, Any]]:
        return [(field.name, getattr(value, field.name)) for field in fields(value)]


class NamedTupleAdapter(RecordAdapter):
    name: str = "NamedTupleAdapter"

    def is_type(self, value: Any) -> bool:
        return isinstance(value, tuple) and hasattr(value, "_asdict")

    def fields(self, value: Any) -> Iterable[tuple[str, Any]]:
        return list(zip(value._fields, value, strict=True))


class ModelDumpAdapter(RecordAdapter):
    name: str = "ModelDumpAdapter"
    # e.g. pydantic

    def is_type(self, value: Any) -> bool:
        # Root models dumping to a list or a primitive are not records.
        return (
            hasattr(value, "model_dump")
            and not isclass(value)
            and isinstance(value.model_dump(), Mapping)
        )

    def fields(self, value: Any) -> Iterable[tuple[str, Any]]:
        return list(value.model_dump().items())


class ModelDumpSequenceAdapter(SequenceAdapter):
    name: str = "ModelDumpSequenceAdapter"
    # e.g. pydantic RootModel[list[int]]

    def is_type(self, value: Any) -> bool:
        return (
            hasattr(value, "model_dump")
            and not isclass(value)
            and isinstance(value.model_dump(), (list, tuple, set, frozenset))
        )

    def elements(self, value: Any) -> Iterable[Any]:
        return list(value.model_dump())


class ModelDumpLeafAdapter(LeafAdapter):
    name: str = "ModelDumpLeafAdapter"
    # e.g. pydantic RootModel[int]

    def is_type(self, value: Any) -> bool:
        return hasattr(value, "model_dump") and not isclass(value)

    def to_leaf(self, value: Any) -> LeafValue:
        return adapt_leaf(value.model_dump())


class MappingAdapter(RecordAdapter):
    name: str = "MappingAdapter"
    __type__ = Mapping

    def fields(self, value: Mapping[Any, Any]) -> Iterable[tuple[str, Any]]:
        return [(force_str(key), item) for key, item in value.items()]


class StructureAdapter(SequenceAdapter):
    name: str = "StructureAdapter"
    __type__ = (list, set, frozenset, GeneratorType, tuple, deque)


DEFAULT_ADAPTER_TYPES: deque[AdapterProtocol] = deque(
    (
        EnumAdapter(),
        StringAdapter(),
        BooleanAdapter(),
        IntegerAdapter(),
        FloatAdapter(),
        DateAdapter(),
        TimedeltaAdapter(),
        UUIDAdapter(),
        PurePathAdapter(),
        URLAdapter(),
        DataclassAdapter(),
        NamedTupleAdapter(),
        ModelDumpAdapter(),
        ModelDumpSequenceAdapter(),
        ModelDumpLeafAdapter(),
        MappingAdapter(),
        StructureAdapter(),
    )
)


_ADAPTER_TYPES_TYPE_BASE = Sequence[AdapterProtocol]


class ADAPTER_TYPES_TYPE(_ADAPTER_TYPES_TYPE_BASE):
    # ContextVar interface
    name: str

    def set(self, value: _ADAPTER_TYPES_TYPE_BASE) -> Token: ...

    def get(
        self, default: _ADAPTER_TYPES_TYPE_BASE | None = None
    ) -> _ADAPTER_TYPES_TYPE_BASE | None: ...

    def reset(self, token: Token) -> None: ...


# TransparentCage merges the sequence behavior into the ContextVar interface,
# so a call can swap the adapters without touching the global registry.
ADAPTER_TYPES: ADAPTER_TYPES_TYPE = DEFAULT_ADAPTER_TYPES  # type: ignore
TransparentCage(globals(), name="ADAPTER_TYPES")


def get_adapter_name(adapter: Any) -> str:
    if getattr(adapter, "name", None):
        return cast(str, adapter.name)
    else:
        return type(adapter).__name__


def is_adapter(adapter: Any) -> bool:
    return isinstance(
        adapter, (LeafAdapterProtocol, SequenceAdapterProtocol, RecordAdapterProtocol)
    ) and getattr(adapter, "shape", None) in set(ValueShape)


def register_adapter(adapter: AdapterProtocol | type[AdapterProtocol]) -> None:
    """
    Registers an adapter in front of the existing ones.

    An already registered adapter with the same name is replaced.
    """
    if isclass(adapter):
        adapter = adapter()
    if not is_adapter(adapter):
        raise RuntimeError(
            f'"{adapter}" is not implementing the LeafAdapterProtocol, '
            "SequenceAdapterProtocol or RecordAdapterProtocol."
        )

    adapter_types = ADAPTER_TYPES.get()
    if not isinstance(adapter_types, deque):
        raise TypeError(
            'For registering a new adapter a "deque" is required as set "ADAPTER_TYPES" value. '
            f"Found: {adapter_types!r}"
        )

    adapter_name = get_adapter_name(adapter)

    remove_elements: list[AdapterProtocol] = []
    for value in adapter_types:
        if get_adapter_name(value) == adapter_name:
            remove_elements.append(value)
            break
    for element in remove_elements:
        adapter_types.remove(element)
    adapter_types.appendleft(adapter)


def get_adapter(value: Any) -> AdapterProtocol:
    """
    Returns the first registered adapter applicable to `value`.

    Raises:
        UnsupportedValueError: If no adapter knows the value.
    """
    for adapter in ADAPTER_TYPES.get():
        if adapter.is_type(value):
            return adapter

    raise UnsupportedValueError(
        f"Object of type '{type(value).__name__}' cannot be encoded into a query.",
        value=value,
    )


def adapt_leaf(value: Any) -> LeafValue:
    """
    Returns `value` as a `LeafValue`.

    Raises:
        UnsupportedValueError: If the applicable adapter is not a leaf adapter.
    """
    adapter = get_adapter(value)
    if adapter.shape is not ValueShape.LEAF:
        raise UnsupportedValueError(
            f"Object of type '{type(value).__name__}' is not a primitive value.",
            value=value,
        )
    return cast(LeafAdapterProtocol, adapter).to_leaf(value)
