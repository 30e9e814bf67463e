# tests/test_logging_config.py

import logging

import pytest
from rich.logging import RichHandler

from annomath.config import AnnomathConfig
from annomath.utils.logging_config import PACKAGE_LOGGER, setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logging.getLogger(PACKAGE_LOGGER).handlers.clear()


def _console_handlers():
    return [h for h in logging.getLogger(PACKAGE_LOGGER).handlers if isinstance(h, RichHandler)]


@pytest.mark.parametrize("verbosity, level", [
    (0, logging.WARNING),
    (1, logging.INFO),
    (2, logging.DEBUG),
    (5, logging.DEBUG),
])
def test_console_level_follows_verbosity(verbosity, level):
    assert setup_logging(AnnomathConfig(), verbosity) is None
    handlers = _console_handlers()
    assert len(handlers) == 1
    assert handlers[0].level == level

def test_quiet_has_no_console_handler():
    setup_logging(AnnomathConfig(), -1)
    assert _console_handlers() == []

def test_reconfiguration_replaces_handlers():
    setup_logging(AnnomathConfig(), 0)
    setup_logging(AnnomathConfig(), 1)
    assert len(_console_handlers()) == 1

def test_file_logging(tmp_path):
    config = AnnomathConfig(
        paths={"log_directory": tmp_path / "logs"},
        logging={"log_file_enabled": True, "log_level_file": "INFO"},
    )
    log_path = setup_logging(config, -1)
    assert log_path is not None
    assert log_path.parent == (tmp_path / "logs").resolve()

    logging.getLogger(f"{PACKAGE_LOGGER}.test").info("hello from the test")
    for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
        handler.flush()
    text = log_path.read_text(encoding="utf-8")
    assert "Log Start" in text
    assert "hello from the test" in text
