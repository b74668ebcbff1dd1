from __future__ import annotations

import inspect
import os
from functools import cached_property
from types import UnionType
from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from typing_extensions import Doc

from queryencoder.enums import DateEncoding, KeyEncoding
from queryencoder.exceptions import ImproperlyConfigured

if TYPE_CHECKING:
    from queryencoder.logging import LoggingConfig


def safe_get_type_hints(cls: type) -> dict[str, Any]:
    """
    Get the resolved type hints of a settings class.

    The hints are evaluated against the module namespaces only, so the
    `dict()` and `tuple()` methods of the settings do not shadow the builtins
    used in the annotations.

    Args:
        cls (type): The class to get type hints for.
    Returns:
        dict[str, Any]: A dictionary of type hints for the class.
    Raises:
        ImproperlyConfigured: If an annotation cannot be resolved.
    """
    try:
        return get_type_hints(cls, localns={}, include_extras=True)
    except Exception as exc:
        raise ImproperlyConfigured(
            f"Cannot resolve the annotations of the settings '{cls.__name__}': {exc}"
        ) from exc


class BaseSettings:
    """
    Base of all the settings for any system.
    """

    __type_hints__: dict[str, Any] = None
    __env_prefix__ = ""
    __truthy__: set[str] = {"true", "1", "yes", "on", "y"}

    def __init__(self, **kwargs: Any) -> None:
        """
        Initializes the settings by loading environment variables
        and casting them to the appropriate types.

        Every annotated attribute is looked up as an upper cased environment
        variable, prefixed with `__env_prefix__`. Explicit keyword arguments
        win over the environment and the environment wins over the class
        defaults.
        """
        cls = self.__class__
        if cls.__dict__.get("__type_hints__") is None:
            cls.__type_hints__ = safe_get_type_hints(cls)

        for key, typ in cls.__type_hints__.items():
            if key.startswith("__"):
                continue
            if key in kwargs:
                value = kwargs[key]
            else:
                env_value = os.getenv(f"{self.__env_prefix__}{key.upper()}", None)
                if env_value is not None:
                    value = self._cast(env_value, self._extract_base_type(typ))
                else:
                    value = getattr(self, key, None)
            setattr(self, key, value)

        self.post_init()

    def post_init(self) -> None:
        """
        Post-initialization method that can be overridden by subclasses.
        This method is called after all settings have been initialized.
        """
        ...

    def _extract_base_type(self, typ: Any) -> Any:
        if isinstance(typ, str):
            raise ImproperlyConfigured(f"The annotation '{typ}' of the settings is not resolved.")
        origin = get_origin(typ)
        if origin is Annotated:
            return get_args(typ)[0]
        return typ

    def _cast(self, value: str, typ: type[Any]) -> Any:
        """
        Casts the value to the specified type.
        If the type is `bool`, it checks for common truthy values.

        Raises:
            ValueError: If the value cannot be cast to the specified type.
        """
        try:
            origin = get_origin(typ)
            if origin is Union or origin is UnionType:
                non_none_types = [t for t in get_args(typ) if t is not type(None)]
                if len(non_none_types) == 1:
                    typ = non_none_types[0]
                else:
                    raise ValueError(f"Cannot cast to ambiguous Union type: {typ}")

            if typ is bool or str(typ) == "bool":
                return value.lower() in self.__truthy__
            return typ(value)
        except Exception:
            type_name = getattr(typ, "__name__", str(typ))
            raise ValueError(f"Cannot cast value '{value}' to type '{type_name}'") from None

    def dict(
        self,
        exclude_none: bool = False,
        upper: bool = False,
        exclude: set[str] | None = None,
        include_properties: bool = False,
    ) -> dict[str, Any]:
        """
        Dumps all the settings into a python dictionary.
        """
        result = {}
        exclude = exclude or set()

        for key in self.__type_hints__:
            if key in exclude or key.startswith("__"):
                continue
            value = getattr(self, key, None)
            if exclude_none and value is None:
                continue
            result_key = key.upper() if upper else key
            result[result_key] = value

        if include_properties:
            for name, _ in inspect.getmembers(
                type(self),
                lambda o: isinstance(
                    o,
                    (property, cached_property),
                ),
            ):
                if name in exclude or name in self.__type_hints__:
                    continue
                try:
                    value = getattr(self, name)
                    if exclude_none and value is None:
                        continue
                    result_key = name.upper() if upper else name
                    result[result_key] = value
                except Exception:
                    # Skip properties that raise errors
                    continue

        return result

    def tuple(
        self,
        exclude_none: bool = False,
        upper: bool = False,
        exclude: set[str] | None = None,
        include_properties: bool = False,
    ) -> list[tuple[str, Any]]:
        """
        Dumps all the settings into a tuple.
        """
        return list(
            self.dict(
                exclude_none=exclude_none,
                upper=upper,
                exclude=exclude,
                include_properties=include_properties,
            ).items()
        )


class Settings(BaseSettings):
    __env_prefix__ = "QUERYENCODER_"

    explode: Annotated[
        bool,
        Doc(
            """
            Whether multi valued parameters produce one pair per value
            (`id=3&id=4`) or a single pair with a combined value (`id=3,4`).
            """
        ),
    ] = True
    delimiter: Annotated[
        str,
        Doc(
            """
            The separator used to combine values when `explode` is `False`.
            Ignored when exploding.
            """
        ),
    ] = ","
    deep_object: Annotated[
        bool,
        Doc(
            """
            Render record fields as `name[field]=value`.
            """
        ),
    ] = False
    date_encoding: Annotated[
        str,
        Doc(
            """
            The default strategy name for dates. One of `iso8601`,
            `seconds_since_1970` or `milliseconds_since_1970`.
            """
        ),
    ] = DateEncoding.ISO8601.value
    key_encoding: Annotated[
        str,
        Doc(
            """
            The default strategy name for keys. One of `use_default_keys` or
            `convert_to_snake_case`.
            """
        ),
    ] = KeyEncoding.USE_DEFAULT_KEYS.value
    root_key: Annotated[
        str,
        Doc(
            """
            The synthetic key used by `QueryEncoder.from_body()` to wrap a bare value.
            """
        ),
    ] = "value"
    logging_level: Annotated[
        str,
        Doc(
            """
            The level used by the default logging configuration.
            """
        ),
    ] = "INFO"

    @property
    def logging_config(self) -> LoggingConfig:
        from queryencoder.logging import StandardLoggingConfig

        return StandardLoggingConfig(level=self.logging_level)
