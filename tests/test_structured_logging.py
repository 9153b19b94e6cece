"""Tests for structured JSON logging configuration and output."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from io import StringIO

import pytest
from pythonjsonlogger.json import JsonFormatter

from fcm_client.config import Settings, load_settings
from fcm_client.logging_config import CallIDFilter, build_json_formatter, configure_json_logging, configure_logging
from fcm_client.utils.request_context import call_context


@pytest.fixture
def json_logger() -> Iterator[tuple[logging.Logger, StringIO]]:
    """Create a JSON logger writing to an in-memory stream."""
    log_stream = StringIO()
    handler = logging.StreamHandler(log_stream)
    handler.setFormatter(build_json_formatter())
    handler.addFilter(CallIDFilter())

    logger = logging.getLogger("test_fcm_logger")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    yield logger, log_stream

    logger.removeHandler(handler)
    handler.close()


def read_log(log_stream: StringIO) -> dict:
    return json.loads(log_stream.getvalue().strip())


def test_structured_logging_outputs_json(json_logger) -> None:
    """Verify logs are output as valid JSON."""
    logger, log_stream = json_logger

    logger.info("Message accepted", extra={"message_name": "projects/p/messages/1"})

    log_data = read_log(log_stream)
    assert log_data["message"] == "Message accepted"
    assert log_data["message_name"] == "projects/p/messages/1"
    assert log_data["level"] == "INFO"
    assert log_data["name"] == "test_fcm_logger"
    assert "timestamp" in log_data


def test_structured_logging_preserves_field_types(json_logger) -> None:
    logger, log_stream = json_logger

    logger.info(
        "Topic management call completed",
        extra={"token_count": 3, "failure_count": 0, "validate_only": True, "error_code": None},
    )

    log_data = read_log(log_stream)
    assert log_data["token_count"] == 3
    assert log_data["failure_count"] == 0
    assert log_data["validate_only"] is True
    assert log_data["error_code"] is None


def test_call_id_outside_call(json_logger) -> None:
    logger, log_stream = json_logger

    logger.info("Idle")

    assert read_log(log_stream)["call_id"] == "no-call-id"


def test_call_id_inside_call(json_logger) -> None:
    logger, log_stream = json_logger

    with call_context("call-123"):
        logger.warning("Inside call")

    log_data = read_log(log_stream)
    assert log_data["call_id"] == "call-123"
    assert log_data["level"] == "WARNING"


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level

    yield

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
def test_configure_json_logging() -> None:
    configure_json_logging("DEBUG", use_json=True)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert any(isinstance(f, CallIDFilter) for f in root_logger.handlers[0].filters)
    assert logging.getLogger("httpx").level == logging.WARNING


@pytest.mark.usefixtures("restore_root_logger")
def test_configure_text_logging() -> None:
    configure_json_logging("INFO", use_json=False)

    formatter = logging.getLogger().handlers[0].formatter
    assert formatter is not None
    assert "%(call_id)s" in formatter._fmt  # type: ignore[attr-defined]


@pytest.mark.usefixtures("restore_root_logger")
def test_configure_logging_from_settings() -> None:
    configure_logging(Settings(log_level="debug", log_json=False))

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    formatter = root_logger.handlers[0].formatter
    assert not isinstance(formatter, JsonFormatter)
    assert "%(call_id)s" in formatter._fmt  # type: ignore[union-attr]


@pytest.mark.usefixtures("restore_root_logger")
def test_configure_logging_from_yaml_section(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("logging:\n  level: WARNING\n  json: true\n")

    configure_logging(load_settings(config_path))

    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING
    assert isinstance(root_logger.handlers[0].formatter, JsonFormatter)
