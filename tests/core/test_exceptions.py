"""
Tests for Custom Exceptions

Tests exception attributes, inheritance, and chaining.
"""

import pytest

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


class TestPipelineException:
    """Test suite for base PipelineException."""

    def test_message(self):
        error = PipelineException("Test error message")

        assert "Test error message" in str(error)
        assert error.message == "Test error message"

    def test_details_in_str(self):
        error = PipelineException("Test error", details={'key': 'value'})

        assert error.details == {'key': 'value'}
        assert "Details" in str(error)

    def test_cause(self):
        original = ValueError("Original error")
        error = PipelineException("Wrapper error", cause=original)

        assert error.cause is original
        assert "Original error" in str(error)

    def test_to_dict(self):
        error = ConfigurationError("bad", details={'a': 1}, cause=KeyError('k'))
        result = error.to_dict()

        assert result['type'] == 'ConfigurationError'
        assert result['message'] == 'bad'
        assert result['details'] == {'a': 1}
        assert "k" in result['cause']

    def test_to_dict_without_cause(self):
        assert PipelineException("x").to_dict()['cause'] is None


class TestHierarchy:
    """All pipeline errors share the PipelineException base."""

    @pytest.mark.parametrize("exc_class", [
        ConfigurationError,
        DataValidationError,
        SchemaValidationError,
        DataReaderError,
        ModelTrainingError,
        EvaluationError,
        ArtifactError,
        ExportError,
    ])
    def test_subclass_of_base(self, exc_class):
        assert issubclass(exc_class, PipelineException)

    def test_schema_error_is_validation_error(self):
        with pytest.raises(DataValidationError):
            raise SchemaValidationError("missing", missing_columns=["id"])


class TestSpecificExceptions:
    """Test extra attributes of the specific exceptions."""

    def test_validation_errors_counted(self):
        error = DataValidationError("bad", validation_errors=[{'a': 1}, {'b': 2}])

        assert len(error.validation_errors) == 2
        assert "2 validation error(s)" in str(error)

    def test_schema_missing_columns(self):
        error = SchemaValidationError("missing", missing_columns=["id", "label"])

        assert error.missing_columns == ["id", "label"]

    def test_reader_source(self):
        error = DataReaderError("not found", source="data.csv")

        assert error.source == "data.csv"
        assert "Source: data.csv" in str(error)

    def test_model_name(self):
        error = ModelTrainingError("failed", model_name="LR")

        assert "Model: LR" in str(error)

    def test_metric_name(self):
        assert EvaluationError("x", metric_name="auc").metric_name == "auc"

    def test_artifact_path(self):
        assert ArtifactError("x", artifact_path="m.joblib").artifact_path == "m.joblib"

    def test_export_error_location(self):
        error = ExportError("bad value", path="out.json", record_index=3)

        assert error.record_index == 3
        assert "Record: 3" in str(error)
        assert "Path: out.json" in str(error)

    def test_export_error_record_zero(self):
        assert "Record: 0" in str(ExportError("bad", record_index=0))
