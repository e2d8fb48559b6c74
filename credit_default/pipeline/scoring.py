"""
Scoring

Reloads a persisted model bundle in a separate invocation and predicts
labels for single records or whole files.
"""

from pathlib import Path
from typing import Any, Mapping, Union
import logging

from credit_default.data.loader import load_dataset
from credit_default.export.jsonl import write_json_lines
from credit_default.export.scored import prepare_scored_frame
from credit_default.models.base_model import BaseModel
from credit_default.models.model_factory import ModelFactory


logger = logging.getLogger(__name__)


def load_model(model_path: Union[str, Path]) -> BaseModel:
    """Load the bundle written by a training run."""
    return ModelFactory.load(model_path)


def score_record(model_path: Union[str, Path], record: Mapping[str, Any]) -> Any:
    """Predict the label of one record matching the input schema.

    Args:
        model_path: Persisted model bundle.
        record: Column name to value mapping (id/label may be present).

    Returns:
        Predicted label.
    """
    model = load_model(model_path)
    label = model.predict_record(record)
    logger.info("Predicted label: %r", label)
    return label


def score_file(
    model_path: Union[str, Path],
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    delimiter: str = ",",
    label_column: str = "label",
) -> Path:
    """Score a delimited file and write it as JSON lines.

    When the file carries the label column, the output uses the monitoring
    layout (score and label_value in front); otherwise a score column is
    prepended to the raw columns.

    Returns:
        The path written.
    """
    model = load_model(model_path)
    df = load_dataset(input_path, delimiter=delimiter, required_columns=None, target_column=None)
    predictions = model.predict(df)

    if label_column in df.columns:
        scored = prepare_scored_frame(df, predictions, label_column=label_column)
    else:
        scored = df.copy()
        scored.insert(0, "score", predictions)

    logger.info("Scored %d records from %s", len(scored), input_path)
    return write_json_lines(scored, output_path)
