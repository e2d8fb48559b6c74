"""
Config Module

Pydantic-based configuration for the credit default pipeline.
"""

from credit_default.config.schema import (
    PipelineConfig,
    DataConfig,
    SplittingConfig,
    ModelConfig,
    ExportConfig,
    EvaluationConfig,
    OutputConfig,
    ReproducibilityConfig,
)
from credit_default.config.loader import load_config, save_config

__all__ = [
    "PipelineConfig",
    "DataConfig",
    "SplittingConfig",
    "ModelConfig",
    "ExportConfig",
    "EvaluationConfig",
    "OutputConfig",
    "ReproducibilityConfig",
    "load_config",
    "save_config",
]
