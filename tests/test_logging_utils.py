import logging

import pytest

from vibematch.core import configure_logging, log_warning
from vibematch.core.logging_utils import logger


@pytest.fixture
def clean_logger():
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def test_configure_logging_is_idempotent(clean_logger) -> None:
    configure_logging("info")
    configure_logging("debug")

    ours = [h for h in clean_logger.handlers if h.get_name() == "vibematch-stdout"]
    assert len(ours) == 1
    assert clean_logger.level == logging.DEBUG


def test_unknown_level_name_falls_back_to_info(clean_logger) -> None:
    configure_logging("chatty")

    assert clean_logger.level == logging.INFO


def test_configure_logging_leaves_root_logger_alone(clean_logger) -> None:
    root_handlers = list(logging.getLogger().handlers)

    configure_logging(logging.WARNING)

    assert logging.getLogger().handlers == root_handlers


def test_warning_helper_prefixes_message(clean_logger, caplog) -> None:
    configure_logging(logging.INFO)

    with caplog.at_level(logging.WARNING, logger="vibematch"):
        log_warning("store slow")

    assert "⚠️ store slow" in caplog.text
