import logging

import pytest

from mobile_version.logging_config import PACKAGE_LOGGER, get_logger, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    original_handlers = list(logger.handlers)
    original_level = logger.level

    yield logger

    for handler in list(logger.handlers):
        if handler not in original_handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(original_level)


def _installed(logger):
    return [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]


def test_setup_logging_configures_package_logger(package_logger):
    logger = setup_logging(level=logging.DEBUG)

    assert logger is package_logger
    assert logger.level == logging.DEBUG
    assert len(_installed(logger)) == 1
    assert logging.getLogger("httpx").level == logging.WARNING


def test_repeated_setup_replaces_handlers(package_logger):
    setup_logging()
    setup_logging()
    setup_logging(level=logging.INFO)

    assert len(_installed(package_logger)) == 1
    assert package_logger.level == logging.INFO


def test_log_file_receives_module_records(package_logger, tmp_path):
    log_file = tmp_path / "logs" / "lookup.log"

    setup_logging(level=logging.DEBUG, log_file=log_file)
    get_logger("mobile_version.cache").debug("Cache hit for %s", "com.example.app")

    for handler in package_logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "mobile_version.cache - DEBUG - Cache hit for com.example.app" in content


def test_root_logger_untouched(package_logger):
    root_handlers = list(logging.getLogger().handlers)

    setup_logging()

    assert logging.getLogger().handlers == root_handlers
