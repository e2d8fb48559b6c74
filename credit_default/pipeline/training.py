"""
Training Pipeline

Runs the credit default workflow end to end:

    load -> split -> export splits -> fit -> score -> evaluate
         -> export scored splits -> save model

Each stage is a function taking the previous stage's output and returning
a new value; the pipeline object only sequences them and records results.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional
import time

import numpy as np
import pandas as pd

from credit_default.config.schema import PipelineConfig
from credit_default.core.logger import PipelineLogger
from credit_default.data.loader import load_dataset
from credit_default.data.splitter import DataSplit, DataSplitter
from credit_default.evaluation.metrics import ClassificationMetrics
from credit_default.export.scored import MonitoringExporter
from credit_default.io.output_manager import OutputManager
from credit_default.models.base_model import BaseModel
from credit_default.models.model_factory import ModelFactory


@dataclass
class PipelineResult:
    """Aggregate result of a pipeline run.

    Attributes:
        status: 'success' or 'failed'.
        run_id: OutputManager run id.
        n_rows: Rows in the input dataset.
        n_train: Rows in the baseline (train) split.
        n_test: Rows in the sample (test) split.
        metrics: Metrics per split ('train', 'test').
        export_paths: Monitoring file paths by key.
        model_path: Persisted model bundle, if saved.
        coefficients: Signed model coefficients.
        stage_durations: Seconds spent per stage.
        total_duration: Total wall-clock time in seconds.
    """

    status: str = "pending"
    run_id: str = ""
    n_rows: int = 0
    n_train: int = 0
    n_test: int = 0
    metrics: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    export_paths: Dict[str, Path] = field(default_factory=dict)
    model_path: Optional[Path] = None
    coefficients: Dict[str, float] = field(default_factory=dict)
    stage_durations: Dict[str, float] = field(default_factory=dict)
    total_duration: float = 0.0

    def summary(self) -> str:
        """Human-readable multi-line summary of the run."""
        lines = [
            f"Pipeline {self.status} in {self.total_duration:.1f}s (run {self.run_id})",
            f"  Rows: {self.n_rows} (train {self.n_train}, test {self.n_test})",
        ]
        test_metrics = self.metrics.get("test", {})
        if test_metrics:
            lines.append(
                f"  Test: accuracy={test_metrics.get('accuracy')} "
                f"auc={test_metrics.get('auc')} f1={test_metrics.get('f1_score')}"
            )
        for key, path in self.export_paths.items():
            lines.append(f"  {key}: {path}")
        if self.model_path:
            lines.append(f"  model: {self.model_path}")
        return "\n".join(lines)


def model_config_for(config: PipelineConfig) -> Dict[str, Any]:
    """Flatten the pipeline config into the model's config dict."""
    exclude = list(config.data.exclude_columns)
    if not config.model.include_sensitive:
        exclude += [c for c in config.data.sensitive_columns if c not in exclude]

    return {
        "params": dict(config.model.params),
        "target_column": config.data.target_column,
        "id_columns": [config.data.id_column],
        "exclude_columns": exclude,
        "categorical_columns": config.data.categorical_columns,
        "positive_label": config.data.positive_label,
        "random_state": config.reproducibility.global_seed,
    }


def split_dataset(df: pd.DataFrame, config: PipelineConfig) -> DataSplit:
    """Split the raw dataset into baseline (train) and sample (test)."""
    splitter = DataSplitter(
        test_size=config.splitting.test_size,
        random_state=config.reproducibility.global_seed,
        stratify=config.splitting.stratify,
    )
    return splitter.split(df, config.data.target_column)


def fit_model(train: pd.DataFrame, config: PipelineConfig) -> BaseModel:
    """Fit the recipe and classifier on the train split."""
    target = config.data.target_column
    model = ModelFactory.create(config.model.algorithm, model_config_for(config))
    return model.fit(train.drop(columns=[target]), train[target])


def score_split(model: BaseModel, df: pd.DataFrame, score_type: str = "class") -> np.ndarray:
    """Predicted class labels, or positive-class probabilities."""
    if score_type == "probability":
        return model.predict_proba(df)
    return model.predict(df)


def evaluate_split(
    model: BaseModel,
    df: pd.DataFrame,
    config: PipelineConfig,
) -> Dict[str, Any]:
    """Metrics of the fitted model on one split."""
    return ClassificationMetrics.calculate_all_metrics(
        df[config.data.target_column],
        model.predict_proba(df),
        y_pred=model.predict(df),
        positive_label=getattr(model, "positive_label", 1),
        threshold=config.evaluation.threshold,
    )


class CreditDefaultPipeline:
    """Sequences the stages of one credit default run.

    Args:
        config: Frozen pipeline configuration.
        output_manager: OutputManager for the run; created from config
            when omitted.
    """

    def __init__(self, config: PipelineConfig, output_manager: Optional[OutputManager] = None):
        self.config = config
        self.output_manager = output_manager or OutputManager(config)
        self.model: Optional[BaseModel] = None
        self._result = PipelineResult(run_id=self.output_manager.run_id)
        self.plog = PipelineLogger(__name__)
        self.plog.set_context(run_id=self.output_manager.run_id)

    def _stage(self, name: str, func: Callable[..., Any], *args: Any) -> Any:
        self.plog.step_start(name)
        start = time.time()
        value = func(*args)
        duration = time.time() - start
        self._result.stage_durations[name] = round(duration, 3)
        self.plog.step_complete(name, duration)
        return value

    def run(self) -> PipelineResult:
        """Run all stages; any failure marks the run failed and is re-raised."""
        config = self.config
        result = self._result
        start_time = time.time()

        exporter = MonitoringExporter(
            self.output_manager.data_dir,
            config.export,
            label_column=config.data.target_column,
        )

        try:
            df = self._stage(
                "load",
                load_dataset,
                config.data.input_path,
                config.data.delimiter,
                config.data.required_columns,
                config.data.target_column,
            )
            result.n_rows = len(df)
            self.plog.data_stats("input", len(df), len(df.columns))

            split = self._stage("split", split_dataset, df, config)
            result.n_train, result.n_test = split.n_train, split.n_test

            result.export_paths.update(self._stage("export_splits", exporter.export_splits, split))

            self.model = self._stage("fit", fit_model, split.train, config)
            if hasattr(self.model, "get_coefficients"):
                result.coefficients = self.model.get_coefficients()

            score_type = config.export.score_type
            train_scores = self._stage("score_train", score_split, self.model, split.train, score_type)
            test_scores = self._stage("score_test", score_split, self.model, split.test, score_type)

            result.metrics["train"] = self._stage("evaluate_train", evaluate_split, self.model, split.train, config)
            result.metrics["test"] = self._stage("evaluate_test", evaluate_split, self.model, split.test, config)
            for name, value in result.metrics["test"].items():
                if not isinstance(value, dict):
                    self.plog.metric(f"test_{name}", value)

            result.export_paths.update(
                self._stage("export_scored", exporter.export_scored, split, train_scores, test_scores)
            )

            if config.output.save_model:
                result.model_path = self._stage(
                    "save_model",
                    self.model.save,
                    self.output_manager.model_dir / config.output.model_filename,
                )

            self.output_manager.save_artifact(
                "metrics",
                {"metrics": result.metrics, "coefficients": result.coefficients},
                fmt="json",
                subdir="reports",
            )

        except Exception as e:
            result.status = "failed"
            result.total_duration = time.time() - start_time
            self.output_manager.mark_failed()
            self.plog.error(f"Pipeline failed: {e}")
            self._finish()
            raise

        result.status = "success"
        result.total_duration = time.time() - start_time
        self.output_manager.mark_complete("success")
        self._finish()

        self.plog.info(result.summary())
        return result

    def _finish(self) -> None:
        if self.config.reproducibility.save_metadata:
            self.output_manager.save_run_metadata()
