"""
Base Model

Abstract base class for classifiers trained by the pipeline.
"""

from abc import abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import joblib
import numpy as np
import pandas as pd

from credit_default.core.base import PandasComponent
from credit_default.core.exceptions import (
    ArtifactError,
    DataValidationError,
    ModelTrainingError,
)


ARTIFACT_VERSION = 1


def read_artifact(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Unpickle a model bundle and check its shape.

    Raises:
        ArtifactError: If the file is missing, unreadable or not a bundle.
    """
    path = Path(path)
    if not path.exists():
        raise ArtifactError("Model artifact not found", artifact_path=str(path))

    try:
        artifact = joblib.load(path)
    except Exception as e:
        raise ArtifactError("Failed to load model", artifact_path=str(path), cause=e)

    if not isinstance(artifact, dict) or 'model' not in artifact:
        raise ArtifactError("Invalid model artifact format", artifact_path=str(path))
    return artifact


class BaseModel(PandasComponent):
    """
    Abstract base class for ML models.

    Provides a consistent interface for training, prediction and
    persistence. The persisted bundle is a joblib dump of a dict, opaque to
    everything except ``read_artifact`` and ``restore``.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ):
        super().__init__(config, name)
        self.model = None
        self.is_fitted = False
        self.feature_names: List[str] = []

    @abstractmethod
    def fit(self, X: pd.DataFrame, y: pd.Series) -> 'BaseModel':
        """
        Fit the model to training data.

        Args:
            X: Training records (raw, untransformed columns)
            y: Training target

        Returns:
            Self
        """
        pass

    @abstractmethod
    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Generate class predictions in the label's own domain."""
        pass

    @abstractmethod
    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """Generate positive-class probabilities (1D array)."""
        pass

    def run(self, X: pd.DataFrame, y: pd.Series, **kwargs) -> 'BaseModel':
        """Run is implemented as fit."""
        return self.fit(X, y, **kwargs)

    def get_params(self) -> Dict[str, Any]:
        """Get model parameters."""
        if self.model is not None and hasattr(self.model, 'get_params'):
            return self.model.get_params()
        return self.get_config('params', {})

    def predict_record(self, record: Mapping[str, Any]) -> Any:
        """
        Predict the label of a single record.

        Args:
            record: Mapping from column name to value, matching the
                input schema (extra columns such as id or label are ignored)

        Returns:
            Predicted label as a native Python value
        """
        prediction = self.predict(pd.DataFrame([dict(record)]))[0]
        return prediction.item() if hasattr(prediction, 'item') else prediction

    def _artifact_payload(self) -> Dict[str, Any]:
        """Extra entries subclasses persist alongside the model."""
        return {}

    def _restore_payload(self, artifact: Dict[str, Any]) -> None:
        """Restore subclass entries from a loaded bundle."""
        pass

    def save(self, path: Union[str, Path]) -> Path:
        """
        Save the fitted model bundle to disk.

        Args:
            path: Destination file

        Returns:
            Path written
        """
        if not self.is_fitted:
            raise ModelTrainingError("Cannot save an unfitted model", model_name=self.name)

        path = Path(path)
        artifact = {
            'artifact_version': ARTIFACT_VERSION,
            'model_class': self.__class__.__name__,
            'model': self.model,
            'feature_names': self.feature_names,
            'config': self.config,
            **self._artifact_payload(),
        }

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            joblib.dump(artifact, path)
        except OSError as e:
            raise ArtifactError("Failed to save model", artifact_path=str(path), cause=e)

        self.logger.info(f"Model saved to {path}")
        return path

    def load(self, path: Union[str, Path]) -> 'BaseModel':
        """
        Load a model bundle from disk.

        Args:
            path: Path to load model from

        Returns:
            Self
        """
        return self.restore(read_artifact(path), path)

    def restore(self, artifact: Dict[str, Any], path: Optional[Union[str, Path]] = None) -> 'BaseModel':
        """
        Restore fitted state from an already loaded bundle.

        Args:
            artifact: Bundle dict as returned by read_artifact
            path: Where the bundle came from, for error messages and logs

        Returns:
            Self
        """
        source = None if path is None else str(path)
        if artifact.get('model_class') != self.__class__.__name__:
            raise ArtifactError(
                f"Artifact holds {artifact.get('model_class')}, expected {self.__class__.__name__}",
                artifact_path=source,
            )

        self.model = artifact['model']
        self.feature_names = list(artifact.get('feature_names', []))
        self.config = artifact.get('config', {})
        self._restore_payload(artifact)
        self.is_fitted = True

        self.logger.info(f"Model loaded from {source or 'bundle'}")

        return self

    def _validate_input(
        self,
        X: pd.DataFrame,
        y: Optional[pd.Series] = None
    ) -> Tuple[pd.DataFrame, Optional[pd.Series]]:
        """
        Validate and prepare input data.

        Args:
            X: Records
            y: Target (optional)

        Returns:
            Validated (X, y) tuple
        """
        if not isinstance(X, pd.DataFrame):
            X = pd.DataFrame(X)

        if self.is_fitted:
            missing = [c for c in self.feature_names if c not in X.columns]
            if missing:
                raise DataValidationError(
                    f"Missing features: {missing}",
                    details={"expected": self.feature_names},
                )
            X = X[self.feature_names]

        if y is not None:
            if not isinstance(y, pd.Series):
                y = pd.Series(y)

            if len(X) != len(y):
                raise DataValidationError(f"X and y length mismatch: {len(X)} vs {len(y)}")

        return X, y
