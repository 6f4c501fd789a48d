import logging

from pythonjsonlogger import jsonlogger

from biohost.config import Settings
from biohost.logging_config import VisitorRedactingFilter, configure_logging


def make_record(msg, *args):
    return logging.LogRecord("biohost", logging.INFO, __file__, 1, msg, args, None)


def test_visitor_details_are_redacted():
    record = make_record("Denied %s for %s", "203.0.113.7", "visitor@example.com")
    assert VisitorRedactingFilter().filter(record)
    assert record.getMessage() == "Denied [REDACTED_IP] for [REDACTED_EMAIL]"


def test_configure_logging_installs_json_handler():
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    try:
        configure_logging(Settings(LOG_JSON=True, LOG_LEVEL="debug"))
        assert root.level == logging.DEBUG
        (handler,) = root.handlers
        assert isinstance(handler.formatter, jsonlogger.JsonFormatter)
        assert any(isinstance(f, VisitorRedactingFilter) for f in handler.filters)

        configure_logging(Settings(LOG_JSON=False))
        assert not isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)


def test_configure_logging_leaves_server_loggers_alone():
    access = logging.getLogger("uvicorn.access")
    previous_level = access.level
    root = logging.getLogger()
    previous_handlers, previous_root_level = root.handlers[:], root.level
    try:
        access.setLevel(logging.WARNING)
        configure_logging(Settings(LOG_JSON=False, LOG_LEVEL="debug"))
        assert access.level == logging.WARNING
    finally:
        access.setLevel(previous_level)
        root.handlers = previous_handlers
        root.setLevel(previous_root_level)
