from __future__ import annotations

from typing import Any

import attrs
import pytest
from msgspec import Struct

from queryencoder.adapters import RecordAdapter, register_adapter
from queryencoder.conf import settings
from queryencoder.logging import logger


class MsgSpecAdapter(RecordAdapter):
    def is_type(self, value: Any) -> bool:
        """
        Check if the value is an instance of msgspec.Struct.
        """
        return isinstance(value, Struct)

    def fields(self, value: Struct) -> list[tuple[str, Any]]:
        return [(name, getattr(value, name)) for name in value.__struct_fields__]


register_adapter(MsgSpecAdapter())


class AttrsAdapter(RecordAdapter):
    def is_type(self, value: Any) -> bool:
        return attrs.has(type(value))

    def fields(self, value: Any) -> list[tuple[str, Any]]:
        return [(field.name, getattr(value, field.name)) for field in attrs.fields(type(value))]


register_adapter(AttrsAdapter())


@pytest.fixture(autouse=True)
def reset_logger():
    logger.bind_logger(None)
    yield
    logger.bind_logger(None)


@pytest.fixture
def override_settings():
    """
    Temporarily changes attributes of the global settings.
    """
    originals: dict[str, Any] = {}

    def override(**kwargs: Any) -> None:
        for key, value in kwargs.items():
            originals.setdefault(key, getattr(settings, key))
            setattr(settings, key, value)

    yield override

    for key, value in originals.items():
        setattr(settings, key, value)
