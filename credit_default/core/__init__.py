"""
Credit Default Pipeline - Core Package

This package provides the core infrastructure for the pipeline:
- Base classes for all components
- Logging utilities
- Custom exceptions
"""

from credit_default.core.base import PipelineComponent, PandasComponent
from credit_default.core.logger import get_logger, setup_logging
from credit_default.core.exceptions import (
    PipelineException,
    ConfigurationError,
    DataValidationError,
    SchemaValidationError,
    DataReaderError,
    ModelTrainingError,
    EvaluationError,
    ArtifactError,
    ExportError,
)

__all__ = [
    # Base classes
    "PipelineComponent",
    "PandasComponent",
    # Logging
    "get_logger",
    "setup_logging",
    # Exceptions
    "PipelineException",
    "ConfigurationError",
    "DataValidationError",
    "SchemaValidationError",
    "DataReaderError",
    "ModelTrainingError",
    "EvaluationError",
    "ArtifactError",
    "ExportError",
]
