"""Structured logging configuration with JSON output."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from pythonjsonlogger.json import JsonFormatter

if TYPE_CHECKING:
    from fcm_client.config import Settings


class CallIDFilter(logging.Filter):
    """Add the current client call ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add call_id field to log record."""
        from fcm_client.utils.request_context import get_call_id

        record.call_id = get_call_id() or "no-call-id"
        return True


def configure_json_logging(
    log_level: str = "INFO",
    use_json: bool = True,
) -> None:
    """Configure application logging with optional JSON output.

    The client itself never calls this; applications opt in, usually
    through configure_logging(load_settings()).

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_json: Whether to use JSON output (True) or text output (False)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(getattr(logging, log_level.upper()))
    stream_handler.addFilter(CallIDFilter())

    if use_json:
        stream_handler.setFormatter(build_json_formatter())
    else:
        text_formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - [%(call_id)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        stream_handler.setFormatter(text_formatter)

    root_logger.addHandler(stream_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google.auth").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_json_formatter() -> JsonFormatter:
    """JSON formatter with timestamp, level, logger name, message and call_id."""
    return JsonFormatter(
        fmt="%(levelname)s %(name)s %(message)s %(call_id)s",
        rename_fields={"levelname": "level"},
        timestamp=True,
    )


def configure_logging(settings: Settings) -> None:
    """Apply the ``logging`` section of the settings (level and JSON switch)."""
    configure_json_logging(log_level=settings.log_level, use_json=settings.log_json)
