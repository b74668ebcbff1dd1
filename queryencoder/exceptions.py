from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class QueryEncoderException(Exception):
    def __init__(self, *args: Any, detail: str = ""):
        self.detail = detail
        super().__init__(*(str(arg) for arg in args if arg), self.detail)

    def __repr__(self) -> str:  # pragma: no cover
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return "".join(self.args).strip()


class ImproperlyConfigured(QueryEncoderException, ValueError): ...


class UnsupportedValueError(QueryEncoderException, TypeError):
    """
    Raised when no registered adapter knows how to introspect a value.
    """

    def __init__(self, *args: Any, value: Any = None, detail: str = "") -> None:
        self.value = value
        super().__init__(*args, detail=detail)


class UnsupportedStructureError(QueryEncoderException, TypeError):
    """
    Raised when a value is nested deeper than a query string can express.

    Records may hold leaves and sequences may hold leaves; anything else
    (records of records, lists of lists, records holding lists) is rejected.
    """

    def __init__(self, *args: Any, coding_path: Sequence[str] = (), detail: str = "") -> None:
        self.coding_path = tuple(coding_path)
        super().__init__(*args, detail=detail)
