"""
Tests for Logging Utilities

Tests setup_logging, get_logger, LoggerMixin, and PipelineLogger.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from credit_default.core.logger import (
    setup_logging,
    get_logger,
    LoggerMixin,
    PipelineLogger,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test suite for setup_logging function."""

    def test_default_level(self):
        setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_custom_format(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(log_file=log_file, log_format='%(levelname)s:%(message)s')

        logging.getLogger("test_format").warning("formatted")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "WARNING:formatted\n" in log_file.read_text()

    def test_custom_level(self):
        setup_logging(log_level='WARNING')

        assert logging.getLogger().level == logging.WARNING

    def test_console_handler_only_by_default(self):
        setup_logging()

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)

    def test_file_handler_writes(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        setup_logging(log_file=log_file)

        logging.getLogger("test_file").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert "hello file" in log_file.read_text()

    def test_file_handler_lowers_root_level(self, tmp_path):
        setup_logging(log_level='WARNING', log_file=tmp_path / "run.log")

        assert logging.getLogger().level == logging.DEBUG

    def test_file_handler_rotates(self, tmp_path):
        setup_logging(log_file=tmp_path / "run.log")

        handler = logging.getLogger().handlers[-1]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 10 * 1024 * 1024
        assert handler.backupCount == 5

    def test_quiet_loggers(self):
        setup_logging(log_level='DEBUG')

        assert logging.getLogger('joblib').level == logging.WARNING
        assert logging.getLogger('urllib3').level == logging.WARNING


class TestGetLogger:
    """Test suite for get_logger function."""

    def test_returns_named_logger(self):
        assert get_logger("credit.test").name == "credit.test"

    def test_cached(self):
        assert get_logger("credit.same") is get_logger("credit.same")


class TestLoggerMixin:
    """Test suite for LoggerMixin."""

    def test_logger_named_after_class(self):
        class Exporter(LoggerMixin):
            pass

        assert Exporter().logger.name == "Exporter"


class TestPipelineLogger:
    """Test suite for PipelineLogger."""

    def test_context_prefix(self, caplog):
        plog = PipelineLogger("credit.pipeline.test")
        plog.set_context(run_id="abc")

        with caplog.at_level(logging.INFO, logger="credit.pipeline.test"):
            plog.info("hello")

        assert "[run_id=abc] hello" in caplog.text

    def test_clear_context(self, caplog):
        plog = PipelineLogger("credit.pipeline.clear")
        plog.set_context(run_id="abc")
        plog.clear_context()

        with caplog.at_level(logging.INFO, logger="credit.pipeline.clear"):
            plog.info("plain")

        assert "[run_id" not in caplog.text

    def test_step_and_metric_messages(self, caplog):
        plog = PipelineLogger("credit.pipeline.steps")

        with caplog.at_level(logging.INFO, logger="credit.pipeline.steps"):
            plog.step_start("fit")
            plog.step_complete("fit", 1.5)
            plog.metric("auc", 0.81)
            plog.data_stats("input", 1200, 8)

        assert "Starting: fit" in caplog.text
        assert "Completed: fit (1.50s)" in caplog.text
        assert "METRIC | auc: 0.81" in caplog.text
        assert "DATA | input: 1,200 rows, 8 columns" in caplog.text
