import io
import logging

from expense_core.logging_setup import configure_logging, get_logger, parse_level


def test_parse_level_accepts_names_and_numbers():
    assert parse_level("info") == logging.INFO
    assert parse_level("10") == logging.DEBUG
    assert parse_level(logging.ERROR) == logging.ERROR
    assert parse_level(None) == logging.WARNING


def test_unconfigured_loggers_stay_silent():
    logger = get_logger("expense_core.services")
    assert any(isinstance(h, logging.NullHandler) for h in logging.getLogger("expense_core").handlers)
    logger.warning("nobody listens")


def test_configure_logging_routes_both_packages_once():
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)
    configure_logging("DEBUG", stream=io.StringIO())

    get_logger("expense_core.storage").info("saved")
    get_logger("expense_tracker.cli").debug("hidden")
    get_logger("expense_tracker.cli").warning("shown")

    output = stream.getvalue()
    assert "expense_core.storage INFO saved" in output
    assert "hidden" not in output
    assert "expense_tracker.cli WARNING shown" in output
    assert len(logging.getLogger("expense_core").handlers) == 1
