from __future__ import annotations

from dataclasses import dataclass, field, replace

from queryencoder.enums import QueryStyle
from queryencoder.exceptions import ImproperlyConfigured
from queryencoder.strategies import (
    DateStrategy,
    DefaultKeysStrategy,
    ISO8601Strategy,
    KeyStrategy,
    resolve_date_strategy,
    resolve_key_strategy,
)


def resolve_style(
    style: QueryStyle | str | None,
    delimiter: str | None = None,
    deep_object: bool | None = None,
) -> tuple[str | None, bool | None]:
    """
    Expands a `style` into its `(delimiter, deep_object)` pair.

    Without a style the given values are returned untouched.

    Raises:
        ImproperlyConfigured: If a style is combined with an explicit
            `delimiter` or `deep_object`, or the style is unknown.
    """
    if style is None:
        return delimiter, deep_object

    if delimiter is not None or deep_object is not None:
        raise ImproperlyConfigured(
            "`style` cannot be combined with `delimiter` or `deep_object`, "
            "the style already defines both."
        )
    try:
        style = QueryStyle(style)
    except ValueError:
        available = ", ".join(value.value for value in QueryStyle)
        raise ImproperlyConfigured(
            f"'{style}' is not a valid query style. Available styles: '{available}'."
        ) from None
    return style.delimiter, style.is_deep_object


@dataclass(frozen=True)
class EncodingOptions:
    """
    The options a single encode call runs with.

    An encoder keeps its persistent configuration on its own attributes and
    takes a snapshot of them as `EncodingOptions` for each call, applying the
    per-call overrides with `override()`.
    """

    explode: bool = True
    delimiter: str = ","
    deep_object: bool = False
    date_strategy: DateStrategy = field(default_factory=ISO8601Strategy)
    key_strategy: KeyStrategy = field(default_factory=DefaultKeysStrategy)

    @classmethod
    def from_settings(cls) -> EncodingOptions:
        from queryencoder.conf import settings

        return cls(
            explode=settings.explode,
            delimiter=settings.delimiter,
            deep_object=settings.deep_object,
            date_strategy=resolve_date_strategy(settings.date_encoding),
            key_strategy=resolve_key_strategy(settings.key_encoding),
        )

    def override(
        self,
        *,
        explode: bool | None = None,
        delimiter: str | None = None,
        deep_object: bool | None = None,
        style: QueryStyle | str | None = None,
    ) -> EncodingOptions:
        delimiter, deep_object = resolve_style(style, delimiter, deep_object)
        return replace(
            self,
            explode=self.explode if explode is None else explode,
            delimiter=self.delimiter if delimiter is None else delimiter,
            deep_object=self.deep_object if deep_object is None else deep_object,
        )
