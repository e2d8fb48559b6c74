"""
Logging Utilities

Centralized logging configuration for training and scoring runs.
Console output goes to stdout; a rotating file handler is added when a
log file is given (the training CLI points it at the run's ``logs/``).
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional, Union


DEFAULT_FORMAT = "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers capped at WARNING
QUIET_LOGGERS = ("joblib", "urllib3")

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

BANNER = "=" * 20

_loggers: Dict[str, logging.Logger] = {}


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: Optional[str] = None
) -> None:
    """
    Replace the root logger's handlers for a run.

    Args:
        log_level: Console (and root) level
        log_file: Path to a log file; adds a rotating file handler at DEBUG
        log_format: Log message format
    """
    formatter = logging.Formatter(log_format or DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)
    level = getattr(logging, log_level.upper())

    root = logging.getLogger()
    root.handlers = []
    root.setLevel(level)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        root.addHandler(handler)
        # The run log keeps DEBUG records even when the console is quieter
        root.setLevel(logging.DEBUG)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Cached ``logging.getLogger``."""
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


class LoggerMixin:
    """
    Gives a class a ``logger`` named after the class.

    Usage:
        class Exporter(LoggerMixin):
            def write(self):
                self.logger.info("Writing")
    """

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_logger(type(self).__name__)
        return self._logger


class PipelineLogger:
    """
    Logger for stage-by-stage runs.

    Every message is prefixed with the current ``key=value`` context
    (e.g. ``[run_id=20240115_103000_a1b2c3]``). Stage banners, metrics and
    dataset sizes have fixed formats so run logs can be grepped.
    """

    def __init__(self, name: str):
        self.logger = get_logger(name)
        self._context: Dict[str, Any] = {}

    def set_context(self, **kwargs) -> None:
        self._context.update(kwargs)

    def clear_context(self) -> None:
        self._context = {}

    def _log(self, level: int, message: str, **kwargs) -> None:
        if self._context:
            prefix = " ".join(f"{k}={v}" for k, v in self._context.items())
            message = f"[{prefix}] {message}"
        self.logger.log(level, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        kwargs.setdefault('exc_info', True)
        self._log(logging.ERROR, message, **kwargs)

    def step_start(self, step_name: str) -> None:
        self.info(f"{BANNER} Starting: {step_name} {BANNER}")

    def step_complete(self, step_name: str, duration: Optional[float] = None) -> None:
        timing = "" if duration is None else f" ({duration:.2f}s)"
        self.info(f"{BANNER} Completed: {step_name}{timing} {BANNER}")

    def metric(self, name: str, value: Any) -> None:
        self.info(f"METRIC | {name}: {value}")

    def data_stats(self, name: str, count: int, columns: Optional[int] = None) -> None:
        """Log a dataset's row (and column) count."""
        shape = f"{count:,} rows" if not columns else f"{count:,} rows, {columns} columns"
        self.info(f"DATA | {name}: {shape}")
