from __future__ import annotations

from collections.abc import Generator, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, overload

from multidict import MultiDict as BaseMultiDict, MultiDictProxy

from queryencoder.types import QueryPair


@dataclass(frozen=True)
class QueryItem:
    """
    A single `name=value` pair of a query. A `None` value renders as the bare name.
    """

    name: str
    value: str | None = None

    def as_tuple(self) -> QueryPair:
        return self.name, self.value

    def __str__(self) -> str:
        if self.value is None:
            return self.name
        return f"{self.name}={self.value}"


class QueryParams(MultiDictProxy[str | None]):
    """
    Read only multi dict view over query items. Keeps the insertion order and
    every duplicated name.
    """

    def __init__(self, args: Iterable[QueryPair] | None = None) -> None:
        super().__init__(BaseMultiDict(list(args or [])))

    def multi_items(self) -> Generator[QueryPair, None, None]:
        """Get all keys and values, including duplicates, in order."""
        yield from self.items()

    def getlist(self, key: str) -> list[str | None]:
        return self.getall(key, [])

    def dict(self) -> dict[str, list[str | None]]:
        """Return the multi-dict as a dict of lists."""
        return {key: self.getall(key) for key in dict.fromkeys(self.keys())}

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return list(self.multi_items()) == list(other.multi_items())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self.multi_items())!r})"


class QueryItems(Sequence[QueryItem]):
    """
    The ordered pairs produced by an encoder.

    Names may repeat. Pairs are only ever appended, or merged into the last
    pair, never reordered or deduplicated.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[QueryItem | QueryPair] | None = None) -> None:
        self._items: list[QueryItem] = [
            item if isinstance(item, QueryItem) else QueryItem(*item) for item in items or ()
        ]

    @property
    def last(self) -> QueryItem | None:
        return self._items[-1] if self._items else None

    def append(self, name: str, value: str | None) -> None:
        self._items.append(QueryItem(name, value))

    def merge_last(self, value: str, separator: str) -> None:
        """
        Joins `value` to the value of the last pair with `separator`.
        """
        last = self._items[-1]
        merged = separator.join(part for part in (last.value, value) if part is not None)
        self._items[-1] = QueryItem(last.name, merged)

    def items(self) -> list[QueryPair]:
        return [item.as_tuple() for item in self._items]

    def to_multidict(self) -> QueryParams:
        return QueryParams(self.items())

    def copy(self) -> QueryItems:
        return QueryItems(self._items)

    @overload
    def __getitem__(self, index: int) -> QueryItem: ...

    @overload
    def __getitem__(self, index: slice) -> list[QueryItem]: ...

    def __getitem__(self, index: int | slice) -> QueryItem | list[QueryItem]:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[QueryItem]:
        return iter(list(self._items))

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, QueryItems):
            return self._items == other._items
        if isinstance(other, list):
            return self.items() == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.items()!r})"
