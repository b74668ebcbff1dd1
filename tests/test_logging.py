import threading
from typing import Any

import loguru
import pytest
import structlog
from loguru import logger as loguru_logger

from queryencoder import QueryEncoder, UnsupportedStructureError
from queryencoder.logging import LoggingConfig, StandardLoggingConfig, logger, setup_logging


class CustomLoguruLoggingConfig(LoggingConfig):
    def __init__(self, sink_list, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.sink_list = sink_list

    def configure(self) -> None:
        loguru_logger.remove()
        loguru_logger.add(
            sink=self.sink_list.append,
            level=self.level,
            format="<level>{level}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
        )

    def get_logger(self) -> Any:
        return loguru.logger


class ListLogger:
    def __init__(self, sink: list[str]):
        self.sink = sink

    def info(self, event: str, **kwargs):
        self.sink.append(event)

    def debug(self, event: str, **kwargs):
        self.sink.append(event)

    def warning(self, event: str, **kwargs):
        self.sink.append(event)

    def error(self, event: str, **kwargs):
        self.sink.append(event)

    def critical(self, event: str, **kwargs):
        self.sink.append(event)


class CustomStructlogLoggingConfig(LoggingConfig):
    def __init__(self, sink_list, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.sink_list = sink_list

    def configure(self) -> None:
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger("debug"),
            processors=[],
            context_class=dict,
            logger_factory=lambda *_: ListLogger(self.sink_list),
        )

    def get_logger(self) -> Any:
        return structlog.get_logger(__name__)


def test_loguru_captures_encode_calls():
    sink = []
    setup_logging(CustomLoguruLoggingConfig(sink_list=sink, level="DEBUG"))

    QueryEncoder().encode("ids", [1, 2, 3])

    assert any("Encoded 'ids' into 3 value(s)." in message for message in sink)


def test_structlog_captures_rejected_values():
    sink = []
    setup_logging(CustomStructlogLoggingConfig(sink_list=sink, level="DEBUG"))

    with pytest.raises(UnsupportedStructureError):
        QueryEncoder().encode("user", {"address": {"city": "Lisbon"}})

    assert any("user.address" in message for message in sink)


def test_invalid_logging_config():
    with pytest.raises(ValueError):
        setup_logging(logging_config="not_a_valid_config")


def test_standard_logging_fallback():
    setup_logging()

    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")


def test_standard_logging_uses_the_package_logger(caplog):
    setup_logging(StandardLoggingConfig(level="debug"))

    with caplog.at_level("DEBUG", logger="queryencoder"):
        QueryEncoder().encode("id", 1)

    assert "Encoded 'id' into 1 value(s)." in caplog.text


def test_logging_level_from_settings(override_settings):
    override_settings(logging_level="WARNING")

    setup_logging()

    assert logger.getEffectiveLevel() == 30


@pytest.mark.parametrize(
    "level", [None, "queryencoder", 1, 2.5, "5-da"], ids=["none", "str", "int", "float", "str-int"]
)
def test_raises_assert_error(level):
    with pytest.raises(AssertionError):

        class CustomLog(LoggingConfig):
            def __init__(self):
                super().__init__(level=level)

            def configure(self) -> None:
                return None

            def get_logger(self) -> Any:
                return structlog.get_logger(__name__)

        CustomLog()


def test_concurrent_access_binds_a_single_logger():
    sink = []
    setup_logging(CustomStructlogLoggingConfig(sink_list=sink))

    def work(index: int) -> None:
        logger.info(f"message {index}")

    threads = [threading.Thread(target=work, args=(index,)) for index in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(sink) == sorted(f"message {index}" for index in range(10))


def test_standard_logging_installs_no_handlers():
    setup_logging(StandardLoggingConfig())

    assert logger.propagate is True
    assert logger.handlers == []
