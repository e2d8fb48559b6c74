"""
Pydantic Configuration Schema

Defines all configuration models for the credit default pipeline.
Defaults reproduce the reference run: 75/25 split, seed 42, logistic
regression, and the four monitoring files.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator


class DataConfig(BaseModel):
    """Input dataset configuration."""

    model_config = {"frozen": True}

    input_path: str = "data/sample/credit_default.csv"
    delimiter: str = ","
    id_column: str = "id"
    target_column: str = "label"
    sensitive_columns: List[str] = Field(default_factory=lambda: ["gender"])
    categorical_columns: Optional[List[str]] = None
    exclude_columns: List[str] = Field(default_factory=list)
    positive_label: Optional[Any] = None

    @property
    def required_columns(self) -> List[str]:
        """Columns every input file must carry."""
        return [self.id_column, *self.sensitive_columns, self.target_column]


class SplittingConfig(BaseModel):
    """Train (baseline) / test (sample) split configuration."""

    model_config = {"frozen": True}

    test_size: float = Field(default=0.25, gt=0.0, lt=1.0)
    stratify: bool = True


class ModelConfig(BaseModel):
    """Logistic regression configuration."""

    model_config = {"frozen": True}

    algorithm: Literal["logistic_regression"] = "logistic_regression"
    include_sensitive: bool = False
    params: Dict[str, Any] = Field(
        default_factory=lambda: {
            "penalty": None,
            "solver": "lbfgs",
            "max_iter": 1000,
        }
    )


class ExportConfig(BaseModel):
    """Monitoring export configuration."""

    model_config = {"frozen": True}

    baseline_file: str = "df_baseline.json"
    sample_file: str = "df_sample.json"
    baseline_scored_file: str = "df_baseline_scored.json"
    sample_scored_file: str = "df_sample_scored.json"
    label_value_column: str = "label_value"
    score_column: str = "score"
    score_type: Literal["class", "probability"] = "class"

    @model_validator(mode="after")
    def file_names_unique(self) -> "ExportConfig":
        names = [
            self.baseline_file,
            self.sample_file,
            self.baseline_scored_file,
            self.sample_scored_file,
        ]
        if len(set(names)) != len(names):
            raise ValueError(f"Export file names must be distinct: {names}")
        return self


class EvaluationConfig(BaseModel):
    """Model evaluation configuration."""

    model_config = {"frozen": True}

    threshold: float = Field(default=0.5, gt=0.0, lt=1.0)


class OutputConfig(BaseModel):
    """Output configuration."""

    model_config = {"frozen": True}

    base_dir: str = "outputs/credit_default"
    save_model: bool = True
    model_filename: str = "credit_default_model.joblib"


class ReproducibilityConfig(BaseModel):
    """Reproducibility and logging configuration."""

    model_config = {"frozen": True}

    global_seed: int = 42
    save_config: bool = True
    save_metadata: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration combining all sections."""

    model_config = {"frozen": True}

    data: DataConfig = Field(default_factory=DataConfig)
    splitting: SplittingConfig = Field(default_factory=SplittingConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    evaluation: EvaluationConfig = Field(default_factory=EvaluationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    reproducibility: ReproducibilityConfig = Field(default_factory=ReproducibilityConfig)
