from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any

from queryencoder._internal._encoding import force_str
from queryencoder.enums import DateEncoding, KeyEncoding
from queryencoder.exceptions import ImproperlyConfigured
from queryencoder.types import CodingPath, DateFormatter, KeyFormatter

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
CAMEL_CASE_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def as_utc_datetime(value: date) -> datetime:
    """
    Returns the instant represented by `value` in UTC.

    Naive datetimes are read as UTC and plain dates as midnight UTC.
    """
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DateStrategy(ABC):
    """
    How `date` and `datetime` leaves are rendered.
    """

    @abstractmethod
    def format(self, value: date) -> str:
        raise NotImplementedError("`format()` must be implemented in subclasses.")


@dataclass(frozen=True)
class ISO8601Strategy(DateStrategy):
    """
    RFC 3339 in UTC, for example `2023-11-14T22:13:20Z`.

    Plain dates keep their full-date form (`2023-11-14`).
    """

    def format(self, value: date) -> str:
        if not isinstance(value, datetime):
            return value.isoformat()
        return as_utc_datetime(value).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class SecondsSince1970Strategy(DateStrategy):
    def format(self, value: date) -> str:
        return str(as_utc_datetime(value).timestamp())


@dataclass(frozen=True)
class MillisecondsSince1970Strategy(DateStrategy):
    """
    Whole milliseconds, truncated toward zero.
    """

    def format(self, value: date) -> str:
        microseconds = (as_utc_datetime(value) - EPOCH) // timedelta(microseconds=1)
        milliseconds = abs(microseconds) // 1000
        return str(-milliseconds if microseconds < 0 else milliseconds)


@dataclass(frozen=True)
class FormattedDateStrategy(DateStrategy):
    """
    Renders with a `strftime` pattern, in the value's own timezone.
    """

    pattern: str

    def format(self, value: date) -> str:
        return value.strftime(self.pattern)


@dataclass(frozen=True)
class CustomDateStrategy(DateStrategy):
    function: DateFormatter

    def format(self, value: date) -> str:
        return force_str(self.function(value))


class KeyStrategy(ABC):
    """
    How the root key of a coding path becomes a query name.
    """

    @abstractmethod
    def encode_key(self, coding_path: CodingPath) -> str:
        raise NotImplementedError("`encode_key()` must be implemented in subclasses.")


@dataclass(frozen=True)
class DefaultKeysStrategy(KeyStrategy):
    def encode_key(self, coding_path: CodingPath) -> str:
        return coding_path[0]


def to_snake_case(key: str) -> str:
    """
    `shortName` -> `short_name`.
    """
    return CAMEL_CASE_BOUNDARY.sub(lambda match: f"{match[1]}_{match[2].lower()}", key)


@dataclass(frozen=True)
class SnakeCaseKeysStrategy(KeyStrategy):
    def encode_key(self, coding_path: CodingPath) -> str:
        return to_snake_case(coding_path[0])


@dataclass(frozen=True)
class CustomKeyStrategy(KeyStrategy):
    """
    Delegates to `function`, which receives the whole coding path (root key
    and, for record fields, the field name) and returns the name used in
    place of the root key.
    """

    function: KeyFormatter

    def encode_key(self, coding_path: CodingPath) -> str:
        return force_str(self.function(coding_path))


DATE_STRATEGIES: dict[DateEncoding, type[DateStrategy]] = {
    DateEncoding.ISO8601: ISO8601Strategy,
    DateEncoding.SECONDS_SINCE_1970: SecondsSince1970Strategy,
    DateEncoding.MILLISECONDS_SINCE_1970: MillisecondsSince1970Strategy,
}

KEY_STRATEGIES: dict[KeyEncoding, type[KeyStrategy]] = {
    KeyEncoding.USE_DEFAULT_KEYS: DefaultKeysStrategy,
    KeyEncoding.CONVERT_TO_SNAKE_CASE: SnakeCaseKeysStrategy,
}


def resolve_date_strategy(
    value: DateStrategy | DateEncoding | str | Callable[..., Any],
) -> DateStrategy:
    """
    Turns a strategy instance, an encoding name or a plain callable into a `DateStrategy`.
    """
    if isinstance(value, DateStrategy):
        return value
    if isinstance(value, str):
        try:
            return DATE_STRATEGIES[DateEncoding(value)]()
        except ValueError:
            available = ", ".join(encoding.value for encoding in DateEncoding)
            raise ImproperlyConfigured(
                f"'{value}' is not a valid date encoding. Available encodings: '{available}'."
            ) from None
    if callable(value):
        return CustomDateStrategy(value)
    raise ImproperlyConfigured(f"{value!r} cannot be used as a date encoding strategy.")


def resolve_key_strategy(
    value: KeyStrategy | KeyEncoding | str | Callable[..., Any],
) -> KeyStrategy:
    """
    Turns a strategy instance, an encoding name or a plain callable into a `KeyStrategy`.
    """
    if isinstance(value, KeyStrategy):
        return value
    if isinstance(value, str):
        try:
            return KEY_STRATEGIES[KeyEncoding(value)]()
        except ValueError:
            available = ", ".join(encoding.value for encoding in KeyEncoding)
            raise ImproperlyConfigured(
                f"'{value}' is not a valid key encoding. Available encodings: '{available}'."
            ) from None
    if callable(value):
        return CustomKeyStrategy(value)
    raise ImproperlyConfigured(f"{value!r} cannot be used as a key encoding strategy.")
