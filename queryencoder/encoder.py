from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Annotated, Any

from typing_extensions import Doc, Self

from queryencoder._internal._adapters import ADAPTER_TYPES, AdapterProtocol
from queryencoder.datastructures import QueryItems
from queryencoder.enums import QueryStyle
from queryencoder.flattening import flatten
from queryencoder.logging import logger
from queryencoder.options import EncodingOptions, resolve_style
from queryencoder.rendering import render_percent_encoded_query, render_query
from queryencoder.strategies import (
    DateStrategy,
    KeyStrategy,
    resolve_date_strategy,
    resolve_key_strategy,
)
from queryencoder.traversal import LeafEvent, traverse, traverse_record
from queryencoder.types import QueryPair


class QueryEncoder:
    """
    Encodes values into the query component of a URL following the OpenAPI
    `form`, `spaceDelimited`, `pipeDelimited` and `deepObject` styles.

    Every call to `encode()` appends to the same query items, so a whole
    query can be built parameter by parameter, each with its own style.

    **Example**

    ```python
    from queryencoder import QueryEncoder

    encoder = QueryEncoder()
    encoder.encode("ids", [3, 4, 5], explode=False)
    encoder.encode("user", {"role": "admin"}, style="deepObject")

    encoder.query  # ids=3,4,5&user[role]=admin
    ```

    An encoder is not thread safe, use one instance per thread.
    """

    def __init__(
        self,
        explode: Annotated[
            bool | None,
            Doc(
                """
                Produce one pair per value instead of a single combined pair.
                Defaults to `settings.explode`.
                """
            ),
        ] = None,
        delimiter: Annotated[
            str | None,
            Doc(
                """
                The separator of combined values when not exploding.
                Defaults to `settings.delimiter`.
                """
            ),
        ] = None,
        deep_object: Annotated[
            bool | None,
            Doc(
                """
                Render record fields as `key[field]`. Defaults to `settings.deep_object`.
                """
            ),
        ] = None,
        *,
        style: Annotated[
            QueryStyle | str | None,
            Doc(
                """
                Sets `delimiter` and `deep_object` from an OpenAPI style name.
                Cannot be combined with them.
                """
            ),
        ] = None,
        date_encoding: Annotated[
            DateStrategy | str | Callable[..., Any] | None,
            Doc(
                """
                How dates are rendered. Defaults to `settings.date_encoding`.
                """
            ),
        ] = None,
        key_encoding: Annotated[
            KeyStrategy | str | Callable[..., Any] | None,
            Doc(
                """
                How root keys are rendered. Defaults to `settings.key_encoding`.
                """
            ),
        ] = None,
        with_adapters: Annotated[
            Sequence[AdapterProtocol] | None,
            Doc(
                """
                Use these adapters instead of the registered ones for every
                call of this encoder.
                """
            ),
        ] = None,
    ) -> None:
        defaults = EncodingOptions.from_settings()
        delimiter, deep_object = resolve_style(style, delimiter, deep_object)

        self.explode: bool = defaults.explode if explode is None else explode
        self.delimiter: str = defaults.delimiter if delimiter is None else delimiter
        self.deep_object: bool = defaults.deep_object if deep_object is None else deep_object
        self.date_encoding = defaults.date_strategy if date_encoding is None else date_encoding
        self.key_encoding = defaults.key_strategy if key_encoding is None else key_encoding
        self.with_adapters = with_adapters
        self._query_items = QueryItems()

    @classmethod
    def from_body(cls, body: Any, **kwargs: Any) -> QueryEncoder:
        """
        Returns a new encoder holding `body` encoded under `settings.root_key`.

        Meant for a record that represents the whole query.
        """
        from queryencoder.conf import settings

        return cls(**kwargs).encode(settings.root_key, body)

    @property
    def date_encoding(self) -> DateStrategy:
        return self._date_strategy

    @date_encoding.setter
    def date_encoding(self, value: DateStrategy | str | Callable[..., Any]) -> None:
        self._date_strategy = resolve_date_strategy(value)

    @property
    def key_encoding(self) -> KeyStrategy:
        return self._key_strategy

    @key_encoding.setter
    def key_encoding(self, value: KeyStrategy | str | Callable[..., Any]) -> None:
        self._key_strategy = resolve_key_strategy(value)

    @property
    def options(self) -> EncodingOptions:
        """
        A snapshot of the persistent configuration.
        """
        return EncodingOptions(
            explode=self.explode,
            delimiter=self.delimiter,
            deep_object=self.deep_object,
            date_strategy=self._date_strategy,
            key_strategy=self._key_strategy,
        )

    def encode(
        self,
        key: str,
        value: Any,
        *,
        explode: bool | None = None,
        delimiter: str | None = None,
        deep_object: bool | None = None,
        style: QueryStyle | str | None = None,
    ) -> Self:
        """
        Encodes `value` under `key`.

        The keyword arguments override the persistent configuration for this
        call only.

        Raises:
            UnsupportedStructureError: If the value is nested deeper than a
                record or a sequence of primitives.
            UnsupportedValueError: If no adapter can introspect a value.
        """
        options = self.options.override(
            explode=explode, delimiter=delimiter, deep_object=deep_object, style=style
        )
        events = self._collect(traverse, key, value, options)
        self._flatten(events, options)
        logger.debug(f"Encoded '{key}' into {len(events)} value(s).")
        return self

    def encode_record(
        self,
        record: Any,
        *,
        explode: bool | None = None,
        delimiter: str | None = None,
        deep_object: bool | None = None,
        style: QueryStyle | str | None = None,
    ) -> Self:
        """
        Encodes every field of `record` under its own name.

        `encoder.encode_record({"id": ids})` is the same as
        `encoder.encode("id", ids)`.
        """
        options = self.options.override(
            explode=explode, delimiter=delimiter, deep_object=deep_object, style=style
        )
        events = self._collect(traverse_record, record, options)
        self._flatten(events, options)
        logger.debug(
            f"Encoded a record of type '{type(record).__name__}' into {len(events)} value(s)."
        )
        return self

    def _collect(
        self, walker: Callable[..., list[LeafEvent]], *args: Any
    ) -> list[LeafEvent]:
        if self.with_adapters is None:
            return walker(*args)

        token = ADAPTER_TYPES.set(self.with_adapters)
        try:
            return walker(*args)
        finally:
            ADAPTER_TYPES.reset(token)

    def _flatten(self, events: list[LeafEvent], options: EncodingOptions) -> None:
        for event in events:
            flatten(self._query_items, event, options)

    @property
    def query_items(self) -> QueryItems:
        """
        A copy of the encoded pairs. Changing it does not change the encoder.
        """
        return self._query_items.copy()

    @property
    def items(self) -> list[QueryPair]:
        return self._query_items.items()

    @property
    def query(self) -> str | None:
        """
        The query before percent escaping, e.g. `id=3 4 5`.
        """
        return render_query(self._query_items)

    @property
    def percent_encoded_query(self) -> str | None:
        """
        The query ready to be appended to a URL, e.g. `id=3%204%205`.
        """
        return render_percent_encoded_query(self._query_items)

    def __str__(self) -> str:
        return self.percent_encoded_query or ""

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(explode={self.explode!r}, "
            f"delimiter={self.delimiter!r}, deep_object={self.deep_object!r})"
        )


def encode_query(values: Any, **kwargs: Any) -> str:
    """
    Encodes a top-level record into a percent escaped query string.

    The keyword arguments are passed to `QueryEncoder`.

    ```python
    encode_query({"ids": [3, 4, 5], "q": "a b"}, explode=False)  # ids=3,4,5&q=a%20b
    ```
    """
    return str(QueryEncoder(**kwargs).encode_record(values))
