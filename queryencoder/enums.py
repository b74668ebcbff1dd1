from __future__ import annotations

from enum import Enum


class StrEnum(str, Enum):
    def __str__(self) -> str:
        return self.value  # type: ignore

    def __repr__(self) -> str:
        return str(self)


class QueryStyle(StrEnum):
    """
    The OpenAPI serialization styles for query parameters.
    """

    FORM = "form"
    SPACE_DELIMITED = "spaceDelimited"
    PIPE_DELIMITED = "pipeDelimited"
    DEEP_OBJECT = "deepObject"

    @property
    def delimiter(self) -> str:
        if self is QueryStyle.SPACE_DELIMITED:
            return " "
        if self is QueryStyle.PIPE_DELIMITED:
            return "|"
        return ","

    @property
    def is_deep_object(self) -> bool:
        return self is QueryStyle.DEEP_OBJECT


class DateEncoding(StrEnum):
    ISO8601 = "iso8601"
    SECONDS_SINCE_1970 = "seconds_since_1970"
    MILLISECONDS_SINCE_1970 = "milliseconds_since_1970"


class KeyEncoding(StrEnum):
    USE_DEFAULT_KEYS = "use_default_keys"
    CONVERT_TO_SNAKE_CASE = "convert_to_snake_case"


class LeafKind(StrEnum):
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    URL = "url"


class ValueShape(StrEnum):
    LEAF = "leaf"
    SEQUENCE = "sequence"
    RECORD = "record"
