"""Tests for setup_logging."""
import logging

from brepdistance.logging_config import setup_logging


def _close_handlers(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_console_handler_only():
    logger = setup_logging(logging.DEBUG)
    try:
        assert logger.name == "brepdistance"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        _close_handlers(logger)


def test_repeated_setup_does_not_duplicate_handlers():
    setup_logging()
    logger = setup_logging()
    try:
        assert len(logger.handlers) == 1
    finally:
        _close_handlers(logger)


def test_log_file(tmp_path):
    log_file = tmp_path / "distance.log"
    logger = setup_logging(logging.INFO, str(log_file))
    try:
        logging.getLogger("brepdistance.measure.relation").info("resolved")
        for handler in logger.handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "Logging initialized." in content
        assert "brepdistance.measure.relation - INFO - resolved" in content
    finally:
        _close_handlers(logger)


def test_no_relation_is_logged_at_debug(caplog):
    from brepdistance.model.geometry_primitives import Point3
    from brepdistance.measure import resolve

    with caplog.at_level(logging.DEBUG, logger="brepdistance"):
        resolve(Point3(0, 0, 0), Point3(0, 0, 0))
    assert any("No relation" in record.getMessage() for record in caplog.records)
