import logging
import re

from pythonjsonlogger import jsonlogger

from .config import Settings


class VisitorRedactingFilter(logging.Filter):
    _ipv4_re = re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b")
    _email_re = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except (TypeError, ValueError):
            return True
        msg = self._ipv4_re.sub("[REDACTED_IP]", msg)
        msg = self._email_re.sub("[REDACTED_EMAIL]", msg)
        record.msg = msg
        record.args = ()
        return True


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    handler = logging.StreamHandler()

    if settings.LOG_JSON:
        formatter = jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s"
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s"
        )

    handler.setFormatter(formatter)
    handler.addFilter(VisitorRedactingFilter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]
