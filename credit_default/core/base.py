"""
Base Classes for Pipeline Components

Components carry a config dict, a logger named after the component and
start/end timestamps of their last execution.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from datetime import datetime
import logging

import pandas as pd


class PipelineComponent(ABC):
    """
    Abstract base class for all pipeline components.

    Args:
        config: Configuration dictionary for this component
        name: Component name, also the logger name (defaults to class name)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, name: Optional[str] = None):
        self.config = config or {}
        self.name = name or type(self).__name__
        self.logger = logging.getLogger(self.name)
        self._execution_start: Optional[datetime] = None
        self._execution_end: Optional[datetime] = None

    @abstractmethod
    def run(self, *args, **kwargs) -> Any:
        """Execute the component's main logic."""

    @abstractmethod
    def validate(self) -> bool:
        """Return False when the component's configuration is unusable."""

    def get_config(self, key: str, default: Any = None) -> Any:
        """
        Look up a config value by dot-notation key, e.g. ``'params.max_iter'``.

        Returns default when any segment is missing.
        """
        value: Any = self.config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def _start_execution(self) -> None:
        self._execution_start = datetime.now()
        self._execution_end = None
        self.logger.debug(f"Starting {self.name}")

    def _end_execution(self) -> None:
        self._execution_end = datetime.now()
        if self.execution_duration is not None:
            self.logger.info(f"Completed {self.name} in {self.execution_duration:.2f} seconds")

    @property
    def execution_duration(self) -> Optional[float]:
        """Seconds taken by the last execution, or None if it has not finished."""
        if self._execution_start is None or self._execution_end is None:
            return None
        return (self._execution_end - self._execution_start).total_seconds()


class PandasComponent(PipelineComponent):
    """
    Component operating on in-memory pandas DataFrames.
    """

    def validate(self) -> bool:
        return True

    def describe_frame(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Row count, column count and deep memory usage of a DataFrame."""
        total_bytes = int(df.memory_usage(deep=True).sum())
        return {
            'rows': len(df),
            'columns': len(df.columns),
            'memory_mb': round(total_bytes / (1024 * 1024), 3),
        }
