"""Tests for structured logging functionality."""

import json
import logging
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from auth0_frontend.utils.logging_utils import (
    ROOT_LOGGER_NAME,
    ColoredFormatter,
    DetailedFormatter,
    OperationFilter,
    StructuredFormatter,
    configure_from_env,
    configure_from_yaml,
    get_logger,
    init_default_logging,
    setup_logging,
)


def make_record(msg="Test message"):
    return logging.LogRecord(
        name="auth0_frontend.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Leave the package logger without handlers after each test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


class TestStructuredFormatter:
    """Test structured JSON formatter."""

    def test_basic_formatting(self):
        """Test basic log record formatting."""
        result = StructuredFormatter().format(make_record())
        log_data = json.loads(result)

        assert log_data["level"] == "INFO"
        assert log_data["logger"] == "auth0_frontend.test"
        assert log_data["message"] == "Test message"
        assert log_data["line"] == 42
        assert "timestamp" in log_data

    def test_context_fields(self):
        """Test that request context fields are included."""
        record = make_record()
        record.operation = "users.get"
        record.api_endpoint = "/api/v2/users/x"
        record.status_code = 503
        record.attempt = 2
        record.delay = 0.75

        log_data = json.loads(StructuredFormatter().format(record))

        assert log_data["operation"] == "users.get"
        assert log_data["api_endpoint"] == "/api/v2/users/x"
        assert log_data["status_code"] == 503
        assert log_data["attempt"] == 2
        assert log_data["delay"] == 0.75


class TestDetailedFormatter:
    """Test detailed formatter."""

    def test_context_appended(self):
        formatter = DetailedFormatter(fmt="%(message)s")
        record = make_record("Retrying")
        record.operation = "users.list"
        record.method = "GET"
        record.api_endpoint = "/api/v2/users"
        record.status_code = 429
        record.attempt = 1

        result = formatter.format(record)

        assert result == (
            "Retrying [op=users.list, GET /api/v2/users, status=429, attempt=1]"
        )

    def test_without_context(self):
        formatter = DetailedFormatter(fmt="%(message)s")
        assert formatter.format(make_record("plain")) == "plain"


class TestColoredFormatter:
    def test_disabled_colors(self):
        formatter = ColoredFormatter(fmt="%(levelname)s %(message)s", disable_colors=True)
        assert formatter.format(make_record()) == "INFO Test message"


class TestOperationFilter:
    def test_default_operation_added(self):
        record = make_record()
        OperationFilter("doctor").filter(record)
        assert record.operation == "doctor"

    def test_existing_operation_kept(self):
        record = make_record()
        record.operation = "users.get"
        OperationFilter("doctor").filter(record)
        assert record.operation == "users.get"


class TestSetupLogging:
    """Test logging setup."""

    def test_console_handler(self):
        logger = setup_logging(level="DEBUG")

        assert logger.name == ROOT_LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, ColoredFormatter)

    def test_json_console(self):
        logger = setup_logging(log_format="json")
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_file_logging(self):
        """Test that the file handler writes JSON lines."""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "logs" / "frontend.log"
            logger = setup_logging(log_file=str(log_file))

            get_logger("tests").info("to file", extra={"operation": "users.list"})
            for handler in logger.handlers:
                handler.flush()

            line = log_file.read_text().strip().splitlines()[-1]
            log_data = json.loads(line)
            assert log_data["message"] == "to file"
            assert log_data["operation"] == "users.list"

            for handler in list(logger.handlers):
                handler.close()
            logger.handlers.clear()

    def test_configure_from_env(self):
        with patch.dict(
            os.environ,
            {"AUTH0_FRONTEND_LOG_LEVEL": "WARNING", "AUTH0_FRONTEND_LOG_FORMAT": "detailed"},
        ):
            logger = configure_from_env()

        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0].formatter, DetailedFormatter)


class TestGetLogger:
    def test_prefixes_foreign_names(self):
        assert get_logger("tests").name == "auth0_frontend.tests"

    def test_keeps_package_names(self):
        assert get_logger("auth0_frontend.core.dispatcher").name == (
            "auth0_frontend.core.dispatcher"
        )


class TestYamlConfig:
    """Test YAML based configuration."""

    def test_configure_from_yaml(self):
        config = (
            "version: 1\n"
            "disable_existing_loggers: false\n"
            "handlers:\n"
            "  console:\n"
            "    class: logging.StreamHandler\n"
            "loggers:\n"
            "  auth0_frontend:\n"
            "    level: ERROR\n"
            "    handlers: [console]\n"
        )
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "logging.yaml"
            path.write_text(config)

            logger = configure_from_yaml(path)

        assert logger.level == logging.ERROR

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            configure_from_yaml("/nonexistent/logging.yaml")

    def test_invalid_config(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "logging.yaml"
            path.write_text("version: 99\n")

            with pytest.raises(ValueError):
                configure_from_yaml(path)


class TestInitDefaultLogging:
    def test_keeps_existing_handlers(self):
        logger = setup_logging(level="ERROR")
        handler = logger.handlers[0]

        assert init_default_logging().handlers == [handler]

    def test_uses_environment(self):
        with patch.dict(os.environ, {"AUTH0_FRONTEND_LOG_LEVEL": "DEBUG"}):
            os.environ.pop("AUTH0_FRONTEND_LOG_CONFIG", None)
            logger = init_default_logging()

        assert logger.level == logging.DEBUG
