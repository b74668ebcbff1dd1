from datetime import date, datetime, timedelta, timezone

import pytest

from queryencoder.enums import DateEncoding, KeyEncoding
from queryencoder.exceptions import ImproperlyConfigured
from queryencoder.strategies import (
    CustomDateStrategy,
    CustomKeyStrategy,
    DefaultKeysStrategy,
    FormattedDateStrategy,
    ISO8601Strategy,
    MillisecondsSince1970Strategy,
    SecondsSince1970Strategy,
    SnakeCaseKeysStrategy,
    resolve_date_strategy,
    resolve_key_strategy,
    to_snake_case,
)

MOMENT = datetime(2023, 11, 14, 22, 13, 20, 123456, tzinfo=timezone.utc)


def test_iso8601():
    strategy = ISO8601Strategy()

    assert strategy.format(MOMENT) == "2023-11-14T22:13:20Z"
    assert strategy.format(MOMENT.replace(tzinfo=None)) == "2023-11-14T22:13:20Z"
    assert strategy.format(date(2023, 11, 14)) == "2023-11-14"


def test_iso8601_converts_to_utc():
    lisbon_summer = timezone(timedelta(hours=1))
    moment = datetime(2023, 7, 1, 12, 0, 0, tzinfo=lisbon_summer)

    assert ISO8601Strategy().format(moment) == "2023-07-01T11:00:00Z"


def test_seconds_since_1970():
    strategy = SecondsSince1970Strategy()

    assert strategy.format(MOMENT.replace(microsecond=0)) == "1700000000.0"
    assert strategy.format(MOMENT.replace(microsecond=500000)) == "1700000000.5"
    assert strategy.format(date(1970, 1, 2)) == "86400.0"


def test_milliseconds_since_1970():
    strategy = MillisecondsSince1970Strategy()

    assert strategy.format(MOMENT) == "1700000000123"
    assert strategy.format(date(1970, 1, 1)) == "0"


def test_formatted():
    assert FormattedDateStrategy("%Y/%m/%d").format(MOMENT) == "2023/11/14"


def test_custom_date():
    assert CustomDateStrategy(lambda value: value.year).format(MOMENT) == "2023"


@pytest.mark.parametrize(
    "key,expected",
    [
        ("shortName", "short_name"),
        ("role", "role"),
        ("aBC", "a_bC"),
        ("already_snake", "already_snake"),
        ("userID", "user_iD"),
    ],
)
def test_to_snake_case(key, expected):
    assert to_snake_case(key) == expected


def test_key_strategies_use_the_root_key():
    path = ("shortName", "fieldName")

    assert DefaultKeysStrategy().encode_key(path) == "shortName"
    assert SnakeCaseKeysStrategy().encode_key(path) == "short_name"
    assert CustomKeyStrategy(lambda coding_path: "-".join(coding_path)).encode_key(path) == (
        "shortName-fieldName"
    )


@pytest.mark.parametrize(
    "value,expected",
    [
        ("iso8601", ISO8601Strategy),
        (DateEncoding.SECONDS_SINCE_1970, SecondsSince1970Strategy),
        ("milliseconds_since_1970", MillisecondsSince1970Strategy),
        (FormattedDateStrategy("%Y"), FormattedDateStrategy),
        (str, CustomDateStrategy),
    ],
)
def test_resolve_date_strategy(value, expected):
    assert isinstance(resolve_date_strategy(value), expected)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("use_default_keys", DefaultKeysStrategy),
        (KeyEncoding.CONVERT_TO_SNAKE_CASE, SnakeCaseKeysStrategy),
        (lambda coding_path: coding_path[0], CustomKeyStrategy),
    ],
)
def test_resolve_key_strategy(value, expected):
    assert isinstance(resolve_key_strategy(value), expected)


def test_unknown_strategies():
    with pytest.raises(ImproperlyConfigured):
        resolve_date_strategy("rfc2822")

    with pytest.raises(ImproperlyConfigured):
        resolve_key_strategy("kebab")

    with pytest.raises(ImproperlyConfigured):
        resolve_key_strategy(42)


def test_milliseconds_truncate_toward_zero():
    strategy = MillisecondsSince1970Strategy()

    assert strategy.format(datetime(1969, 12, 31, 23, 59, 59, 999500, tzinfo=timezone.utc)) == "0"
    assert strategy.format(datetime(1969, 12, 31, 23, 59, 58, 998500, tzinfo=timezone.utc)) == (
        "-1001"
    )
