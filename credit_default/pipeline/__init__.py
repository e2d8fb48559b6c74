"""
Pipeline Module

End-to-end training run and reload-and-score entry points.
"""

from credit_default.pipeline.training import (
    CreditDefaultPipeline,
    PipelineResult,
    evaluate_split,
    fit_model,
    model_config_for,
    score_split,
    split_dataset,
)
from credit_default.pipeline.scoring import load_model, score_file, score_record

__all__ = [
    "CreditDefaultPipeline",
    "PipelineResult",
    "evaluate_split",
    "fit_model",
    "model_config_for",
    "score_split",
    "split_dataset",
    "load_model",
    "score_file",
    "score_record",
]
