"""
Monitoring Export

Prepares the scored splits and writes the four monitoring files:

    df_baseline.json          train split, raw columns
    df_sample.json            test split, raw columns
    df_baseline_scored.json   train split with score/label_value in front
    df_sample_scored.json     test split with score/label_value in front
"""

from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np
import pandas as pd

from credit_default.config.schema import ExportConfig
from credit_default.core.exceptions import DataValidationError
from credit_default.core.logger import LoggerMixin
from credit_default.data.splitter import DataSplit
from credit_default.export.jsonl import write_json_lines


def prepare_scored_frame(
    df: pd.DataFrame,
    predictions: Sequence[Any],
    label_column: str = "label",
    prediction_column: str = "prediction",
    label_value_column: str = "label_value",
    score_column: str = "score",
) -> pd.DataFrame:
    """Attach predictions and rename label/prediction for the monitor.

    The label column becomes ``label_value`` and the prediction column
    becomes ``score``; both move to the front (score first). Every other
    column keeps its position relative to the rest and its values.

    Args:
        df: Split with raw columns, including the label.
        predictions: One prediction per row, in row order.
        label_column: Name of the label column in df.
        prediction_column: Name given to the predictions before renaming.
        label_value_column: New name for the label column.
        score_column: New name for the prediction column.

    Returns:
        New DataFrame; df is not modified.
    """
    if label_column not in df.columns:
        raise DataValidationError(f"Label column '{label_column}' not in dataset")

    if len(predictions) != len(df):
        raise DataValidationError(
            f"Got {len(predictions)} predictions for {len(df)} rows"
        )

    clashes = [
        c for c in (prediction_column, label_value_column, score_column)
        if c in df.columns and c != label_column
    ]
    if clashes:
        raise DataValidationError(f"Dataset already has column(s): {clashes}")

    scored = df.copy()
    scored[prediction_column] = np.asarray(predictions)
    scored = scored.rename(columns={
        label_column: label_value_column,
        prediction_column: score_column,
    })

    front = [score_column, label_value_column]
    rest = [c for c in scored.columns if c not in front]
    return scored[front + rest]


class MonitoringExporter(LoggerMixin):
    """
    Writes the datasets the monitoring platform expects into one directory.

    Args:
        output_dir: Directory receiving the JSON lines files.
        config: Export file names and column names.
        label_column: Label column of the raw dataset.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        config: Optional[ExportConfig] = None,
        label_column: str = "label",
    ):
        self.output_dir = Path(output_dir)
        self.config = config or ExportConfig()
        self.label_column = label_column

    def export_splits(self, split: DataSplit) -> Dict[str, Path]:
        """Write the pre-transform baseline (train) and sample (test) files."""
        return {
            "baseline": write_json_lines(split.train, self.output_dir / self.config.baseline_file),
            "sample": write_json_lines(split.test, self.output_dir / self.config.sample_file),
        }

    def scored_frame(self, df: pd.DataFrame, predictions: Sequence[Any]) -> pd.DataFrame:
        return prepare_scored_frame(
            df,
            predictions,
            label_column=self.label_column,
            label_value_column=self.config.label_value_column,
            score_column=self.config.score_column,
        )

    def export_scored(
        self,
        split: DataSplit,
        train_predictions: Sequence[Any],
        test_predictions: Sequence[Any],
    ) -> Dict[str, Path]:
        """Write the scored baseline and sample files."""
        baseline_scored = self.scored_frame(split.train, train_predictions)
        sample_scored = self.scored_frame(split.test, test_predictions)

        self.logger.debug(
            "Scored columns: %s", list(baseline_scored.columns[:3])
        )

        return {
            "baseline_scored": write_json_lines(
                baseline_scored, self.output_dir / self.config.baseline_scored_file
            ),
            "sample_scored": write_json_lines(
                sample_scored, self.output_dir / self.config.sample_scored_file
            ),
        }
