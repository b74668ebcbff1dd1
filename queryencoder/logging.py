from __future__ import annotations

import logging.config
import threading
from abc import ABC, abstractmethod
from typing import Annotated, Any, cast

from typing_extensions import Doc

from queryencoder.protocols.logging import LoggerProtocol


class LoggerProxy:
    """
    Proxy for the real logger used by the encoder.
    """

    def __init__(self) -> None:
        self._logger: LoggerProtocol | None = None
        self._lock: threading.RLock = threading.RLock()

    def bind_logger(self, logger: LoggerProtocol | None) -> None:  # noqa
        with self._lock:
            self._logger = logger

    def __getattr__(self, item: str) -> Any:
        with self._lock:
            if not self._logger:
                setup_logging()
                return getattr(self._logger, item)
            return getattr(self._logger, item)


logger: LoggerProtocol = cast(LoggerProtocol, LoggerProxy())


class LoggingConfig(ABC):
    """
    Base for the logging configurations.

    **Example**

    ```python
    from queryencoder.logging import StandardLoggingConfig, setup_logging

    setup_logging(StandardLoggingConfig(level="DEBUG"))
    ```
    """

    __logging_levels__: list[str] = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    def __init__(
        self,
        level: Annotated[
            str,
            Doc(
                """
                The logging level.
                """
            ),
        ] = "INFO",
        **kwargs: Any,
    ) -> None:
        levels: str = ", ".join(self.__logging_levels__)
        assert isinstance(level, str) and level.upper() in self.__logging_levels__, (
            f"'{level}' is not a valid logging level. Available levels: '{levels}'."
        )

        self.level = level.upper()
        self.options = kwargs
        self.skip_setup_configure: bool = kwargs.get("skip_setup_configure", False)

    def configure(self) -> None:
        """
        Configures the logging settings.
        """
        raise NotImplementedError("`configure()` must be implemented in subclasses.")

    @abstractmethod
    def get_logger(self) -> Any:
        """
        Returns the logger instance.
        """
        raise NotImplementedError("`get_logger()` must be implemented in subclasses.")


class StandardLoggingConfig(LoggingConfig):
    def __init__(self, config: dict[str, Any] | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.config = config or self.default_config()

    def default_config(self) -> dict[str, Any]:  # noqa
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "loggers": {
                "queryencoder": {
                    "level": self.level,
                    "propagate": True,
                },
            },
        }

    def configure(self) -> None:
        logging.config.dictConfig(self.config)

    def get_logger(self) -> Any:
        return logging.getLogger("queryencoder")


def setup_logging(logging_config: LoggingConfig | None = None) -> None:
    """
    Sets up the logging system for the encoder.

    If a custom `LoggingConfig` is provided, it will be used. Otherwise the
    configuration declared by the active settings (`settings.logging_config`)
    is applied, which is a `StandardLoggingConfig` by default.

    This allows using the standard Python `logging`, `loguru`, `structlog`
    or any custom implementation based on the `LoggingConfig` interface.

    Raises:
        ValueError: If the provided `logging_config` is not an instance of `LoggingConfig`.
    """
    if logging_config is not None and not isinstance(logging_config, LoggingConfig):
        raise ValueError("`logging_config` must be an instance of LoggingConfig.")

    if logging_config is None:
        from queryencoder.conf import settings

        logging_config = settings.logging_config

    if not logging_config.skip_setup_configure:
        logging_config.configure()

    # Gets the logger instance from the logging_config
    _logger = logging_config.get_logger()
    logger.bind_logger(_logger)
