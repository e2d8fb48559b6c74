"""
Pytest Configuration and Shared Fixtures

Provides common fixtures for all test modules including:
- Sample configurations (Pydantic-based)
- Synthetic credit data with a known default signal
- Pre-split train/test data
- Temporary input files and output directories
"""

import sys
from pathlib import Path
from typing import Any, Dict

import numpy as np
import pandas as pd
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


# ===================================================================
# DATA FIXTURES
# ===================================================================

def make_credit_data(n: int = 400, seed: int = 42) -> pd.DataFrame:
    """Synthetic credit dataset.

    Properties:
    - columns: id, gender, age, income, utilization, late_payments,
      education (categorical), label (0/1)
    - label driven by utilization and late_payments, ~30% positive
    """
    rng = np.random.default_rng(seed)

    utilization = rng.uniform(0, 1, n)
    late_payments = rng.poisson(0.8, n)
    logit = -2.0 + 2.5 * utilization + 0.6 * late_payments
    label = (rng.uniform(size=n) < 1 / (1 + np.exp(-logit))).astype(int)

    return pd.DataFrame({
        "id": np.arange(1, n + 1),
        "gender": rng.choice(["female", "male"], size=n),
        "age": rng.integers(21, 70, n),
        "income": np.round(rng.lognormal(10, 0.4, n), 2),
        "utilization": np.round(utilization, 4),
        "late_payments": late_payments,
        "education": rng.choice(["graduate", "university", "high_school"], size=n),
        "label": label,
    })


@pytest.fixture
def credit_data() -> pd.DataFrame:
    """400-row synthetic credit dataset."""
    return make_credit_data()


@pytest.fixture
def credit_csv(tmp_path, credit_data) -> Path:
    """credit_data written to a CSV file."""
    path = tmp_path / "credit.csv"
    credit_data.to_csv(path, index=False)
    return path


@pytest.fixture
def train_test_data(credit_data):
    """Deterministic 75/25 split of credit_data (first rows train)."""
    cut = int(len(credit_data) * 0.75)
    train = credit_data.iloc[:cut].reset_index(drop=True)
    test = credit_data.iloc[cut:].reset_index(drop=True)
    return train, test


# ===================================================================
# CONFIGURATION FIXTURES
# ===================================================================

@pytest.fixture
def model_config() -> Dict[str, Any]:
    """Model config dict as built by the pipeline from defaults."""
    return {
        "params": {"penalty": None, "solver": "lbfgs", "max_iter": 1000},
        "target_column": "label",
        "id_columns": ["id"],
        "exclude_columns": ["gender"],
        "categorical_columns": None,
        "positive_label": 1,
        "random_state": 42,
    }


@pytest.fixture
def sample_config_dict(tmp_path, credit_csv) -> Dict[str, Any]:
    """Minimal valid config dict pointing at credit_csv and tmp_path."""
    return {
        "data": {
            "input_path": str(credit_csv),
            "id_column": "id",
            "target_column": "label",
            "sensitive_columns": ["gender"],
            "positive_label": 1,
        },
        "splitting": {"test_size": 0.25, "stratify": True},
        "output": {"base_dir": str(tmp_path / "outputs")},
        "reproducibility": {"global_seed": 42, "log_level": "DEBUG"},
    }


@pytest.fixture
def sample_config(sample_config_dict):
    """Create a PipelineConfig from the sample dict."""
    from credit_default.config.schema import PipelineConfig

    return PipelineConfig(**sample_config_dict)


@pytest.fixture
def tmp_config_yaml(tmp_path, sample_config_dict):
    """Write sample config to a temp YAML file and return its path."""
    import yaml

    config_path = tmp_path / "test_config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config_dict, f, default_flow_style=False)
    return config_path


@pytest.fixture
def fitted_model(model_config, train_test_data):
    """LogisticRegressionModel fitted on the train part of train_test_data."""
    from credit_default.models.logistic_model import LogisticRegressionModel

    train, _ = train_test_data
    model = LogisticRegressionModel(config=model_config)
    return model.fit(train.drop(columns=["label"]), train["label"])
