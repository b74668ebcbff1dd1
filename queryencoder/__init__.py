__version__ = "0.1.0"

from queryencoder.adapters import register_adapter
from queryencoder.datastructures import QueryItem, QueryItems, QueryParams
from queryencoder.encoder import QueryEncoder, encode_query
from queryencoder.enums import DateEncoding, KeyEncoding, QueryStyle
from queryencoder.exceptions import (
    ImproperlyConfigured,
    QueryEncoderException,
    UnsupportedStructureError,
    UnsupportedValueError,
)
from queryencoder.rendering import percent_encode
from queryencoder.strategies import (
    CustomDateStrategy,
    CustomKeyStrategy,
    DefaultKeysStrategy,
    FormattedDateStrategy,
    ISO8601Strategy,
    MillisecondsSince1970Strategy,
    SecondsSince1970Strategy,
    SnakeCaseKeysStrategy,
)

__all__ = [
    "CustomDateStrategy",
    "CustomKeyStrategy",
    "DateEncoding",
    "DefaultKeysStrategy",
    "FormattedDateStrategy",
    "ISO8601Strategy",
    "ImproperlyConfigured",
    "KeyEncoding",
    "MillisecondsSince1970Strategy",
    "QueryEncoder",
    "QueryEncoderException",
    "QueryItem",
    "QueryItems",
    "QueryParams",
    "QueryStyle",
    "SecondsSince1970Strategy",
    "SnakeCaseKeysStrategy",
    "UnsupportedStructureError",
    "UnsupportedValueError",
    "encode_query",
    "percent_encode",
    "register_adapter",
]
