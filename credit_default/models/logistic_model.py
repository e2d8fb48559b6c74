"""
Logistic Regression Model

Binomial GLM (logit link) fitted behind the preprocessing recipe, as a
single scikit-learn Pipeline so the persisted bundle scores raw records.
"""

from typing import Any, Dict, List, Optional
import numpy as np
import pandas as pd

from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline

from credit_default.core.exceptions import (
    DataValidationError,
    ModelTrainingError,
    PipelineException,
)
from credit_default.features.recipe import build_recipe, predictor_columns
from credit_default.models.base_model import BaseModel


DEFAULT_PARAMS: Dict[str, Any] = {
    'penalty': None,
    'solver': 'lbfgs',
    'max_iter': 1000,
}


class LogisticRegressionModel(BaseModel):
    """
    Logistic Regression classifier for credit default.

    Config keys:
        params: LogisticRegression keyword arguments
        target_column: Label column name (excluded from predictors)
        id_columns: Identifier columns (excluded from predictors)
        exclude_columns: Further non-predictor columns
        categorical_columns: Optional explicit categorical predictors
        positive_label: Label value treated as the positive class
            (defaults to the larger of the two sorted classes)
        random_state: Seed passed to the solver
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ):
        super().__init__(config, name or "LogisticRegressionModel")

        self.default_params = {**DEFAULT_PARAMS, **self.get_config('params', {})}
        if 'random_state' not in self.default_params and self.get_config('random_state') is not None:
            self.default_params['random_state'] = self.get_config('random_state')

        self.classes_: List[Any] = []
        self.positive_label: Any = self.get_config('positive_label')

    def fit(self, X: pd.DataFrame, y: pd.Series) -> 'LogisticRegressionModel':
        """
        Fit the recipe and the classifier.

        Args:
            X: Training records with raw columns (id/label columns are dropped)
            y: Training target

        Returns:
            Self
        """
        self._start_execution()

        try:
            X, y = self._validate_input(X, y)

            target_column = self.get_config('target_column', 'label')
            id_columns = self.get_config('id_columns', ['id'])
            exclude_columns = self.get_config('exclude_columns', [])

            self.feature_names = predictor_columns(
                X, target_column, id_columns, exclude_columns
            )

            recipe = build_recipe(
                X[self.feature_names],
                target_column,
                id_columns=id_columns,
                exclude_columns=exclude_columns,
                categorical_columns=self.get_config('categorical_columns'),
            )
            params = self._validate_params(self.default_params.copy())

            self.model = Pipeline([
                ('recipe', recipe),
                ('glm', LogisticRegression(**params)),
            ])
            self.model.fit(X[self.feature_names], y)

            self.classes_ = [c.item() if hasattr(c, 'item') else c for c in self.model.classes_]
            if self.positive_label is None:
                self.positive_label = self.classes_[-1]
            elif self.positive_label not in self.classes_:
                raise DataValidationError(
                    f"positive_label {self.positive_label!r} not among classes {self.classes_}"
                )

            self.is_fitted = True
            self.logger.info(
                f"Model fitted on {len(X)} samples, {len(self.feature_names)} predictors, "
                f"positive class {self.positive_label!r}"
            )

            self._end_execution()
            return self

        except PipelineException:
            self._end_execution()
            raise
        except Exception as e:
            self._end_execution()
            raise ModelTrainingError(
                f"Logistic Regression training failed: {e}",
                model_name=self.name,
                cause=e
            )

    def _check_fitted(self) -> None:
        if not self.is_fitted:
            raise ModelTrainingError("Model not fitted", model_name=self.name)

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """
        Generate class predictions.

        Args:
            X: Records with at least the predictor columns

        Returns:
            Predicted labels
        """
        self._check_fitted()
        X, _ = self._validate_input(X)
        return self.model.predict(X)

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """
        Generate probability predictions for the positive class.

        Args:
            X: Records with at least the predictor columns

        Returns:
            Positive-class probabilities (1D array)
        """
        self._check_fitted()
        X, _ = self._validate_input(X)
        positive_idx = self.classes_.index(self.positive_label)
        return self.model.predict_proba(X)[:, positive_idx]

    def _validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Fix solver/penalty combinations scikit-learn would reject.

        Args:
            params: Parameter dictionary

        Returns:
            Fixed parameters
        """
        solver = params.get('solver', 'lbfgs')
        penalty = params.get('penalty', 'l2')

        compatibility = {
            'lbfgs': ['l2', None],
            'liblinear': ['l1', 'l2'],
            'saga': ['l1', 'l2', 'elasticnet', None],
            'newton-cg': ['l2', None],
            'newton-cholesky': ['l2', None],
            'sag': ['l2', None],
        }

        if solver in compatibility:
            valid_penalties = compatibility[solver]
            if penalty not in valid_penalties:
                new_penalty = valid_penalties[0]
                self.logger.warning(
                    f"Penalty '{penalty}' not compatible with solver '{solver}'. "
                    f"Using '{new_penalty}'"
                )
                params['penalty'] = new_penalty

        if params.get('penalty') != 'elasticnet' and 'l1_ratio' in params:
            del params['l1_ratio']

        return params

    def get_coefficients(self) -> Dict[str, float]:
        """
        Get signed coefficients by encoded feature name.

        Coefficients refer to the log-odds of the positive class.

        Returns:
            Dictionary of encoded feature name to coefficient, plus
            '(intercept)'
        """
        self._check_fitted()

        glm = self.model.named_steps['glm']
        names = self.model.named_steps['recipe'].get_feature_names_out()
        coefficients = glm.coef_[0]
        intercept = float(glm.intercept_[0])

        # sklearn's coef_ is for classes_[1]
        if self.positive_label != self.classes_[-1]:
            coefficients = -coefficients
            intercept = -intercept

        result = {'(intercept)': intercept}
        result.update({str(n): float(c) for n, c in zip(names, coefficients)})
        return result

    def _artifact_payload(self) -> Dict[str, Any]:
        return {
            'classes': self.classes_,
            'positive_label': self.positive_label,
        }

    def _restore_payload(self, artifact: Dict[str, Any]) -> None:
        self.classes_ = list(artifact.get('classes', []))
        self.positive_label = artifact.get('positive_label')
        self.default_params = {**DEFAULT_PARAMS, **self.get_config('params', {})}
