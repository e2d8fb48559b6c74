"""
Custom Exceptions for the Pipeline

One hierarchy for every stage of a credit default run, so callers can tell
a bad input file from a failed fit or a failed export. Each error renders
as ``message | Details: ... | Caused by: ...`` followed by any context the
subclass adds (source file, model name, record index).
"""

from typing import Any, Dict, List, Optional


class PipelineException(Exception):
    """Base exception for all pipeline errors.

    Args:
        message: Error message
        details: Additional error details
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def _context(self) -> List[str]:
        """Extra ``Label: value`` parts appended by subclasses."""
        return []

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        parts.extend(self._context())
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "cause": None if self.cause is None else str(self.cause),
        }


class ConfigurationError(PipelineException):
    """Unparseable config file or invalid config values."""


class DataValidationError(PipelineException):
    """Dataset content is unusable: non-binary label, prediction/row count mismatch."""

    def __init__(
        self,
        message: str,
        validation_errors: Optional[List[Dict[str, Any]]] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors or []

    def _context(self) -> List[str]:
        if self.validation_errors:
            return [f"{len(self.validation_errors)} validation error(s)"]
        return []


class SchemaValidationError(DataValidationError):
    """The input file lacks required columns."""

    def __init__(
        self,
        message: str,
        missing_columns: Optional[List[str]] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.missing_columns = missing_columns or []


class DataReaderError(PipelineException):
    """The input dataset is missing or cannot be parsed."""

    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source

    def _context(self) -> List[str]:
        return [f"Source: {self.source}"] if self.source else []


class ModelTrainingError(PipelineException):
    """Fitting failed, or a model was used before fitting."""

    def __init__(self, message: str, model_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.model_name = model_name

    def _context(self) -> List[str]:
        return [f"Model: {self.model_name}"] if self.model_name else []


class EvaluationError(PipelineException):
    """A metric could not be computed (e.g. single-class ground truth)."""

    def __init__(self, message: str, metric_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.metric_name = metric_name


class ArtifactError(PipelineException):
    """A model bundle or run artifact could not be saved or loaded."""

    def __init__(self, message: str, artifact_path: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.artifact_path = artifact_path


class ExportError(PipelineException):
    """A dataset could not be written as JSON lines.

    Carries the destination path and, for unrepresentable values, the
    zero-based index of the offending record.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        record_index: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.path = path
        self.record_index = record_index

    def _context(self) -> List[str]:
        parts = []
        if self.record_index is not None:
            parts.append(f"Record: {self.record_index}")
        if self.path:
            parts.append(f"Path: {self.path}")
        return parts
