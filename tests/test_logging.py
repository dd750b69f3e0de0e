import logging

import pytest

from hotel_console.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_levels():
    yield
    setup_logging()


def test_app_loggers_follow_requested_level():
    setup_logging("debug")

    assert logging.getLogger("hotel_console").level == logging.DEBUG
    assert logging.getLogger("hotel_console.services.privilege_service").getEffectiveLevel() == logging.DEBUG


def test_noisy_loggers_stay_quiet():
    setup_logging("debug")

    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    setup_logging("chatty")

    assert logging.getLogger("hotel_console").level == logging.INFO
