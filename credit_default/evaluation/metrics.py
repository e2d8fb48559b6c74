"""
Classification Metrics

Test-split metrics for the credit default classifier.
"""

from typing import Any, Dict, Optional, Sequence, Tuple
import numpy as np
import pandas as pd

from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    f1_score,
    log_loss,
    precision_score,
    recall_score,
    roc_auc_score,
)

from credit_default.core.exceptions import EvaluationError


def to_binary(y: Sequence[Any], positive_label: Any) -> np.ndarray:
    """Map labels to 1 (positive) / 0 (anything else)."""
    return (np.asarray(y) == positive_label).astype(int)


class ClassificationMetrics:
    """
    Binary classification metrics.

    Includes:
    - Accuracy, precision, recall, F1
    - ROC AUC, Gini coefficient, KS statistic
    - Log loss and confusion matrix
    """

    @staticmethod
    def gini_coefficient(y_true: np.ndarray, y_score: np.ndarray) -> float:
        """
        Calculate Gini coefficient.

        Gini = 2 * AUC - 1
        """
        return 2 * roc_auc_score(y_true, y_score) - 1

    @staticmethod
    def ks_statistic(y_true: np.ndarray, y_score: np.ndarray) -> Tuple[float, float]:
        """
        Calculate Kolmogorov-Smirnov statistic.

        Maximum separation between the cumulative score distributions of
        positives and negatives.

        Args:
            y_true: Binary labels (1 = positive)
            y_score: Positive-class probabilities

        Returns:
            Tuple of (KS statistic, score at max separation)
        """
        df = pd.DataFrame({
            'score': np.asarray(y_score, dtype=float),
            'target': np.asarray(y_true, dtype=int),
        }).sort_values('score', ascending=False).reset_index(drop=True)

        total_pos = df['target'].sum()
        total_neg = len(df) - total_pos
        if total_pos == 0 or total_neg == 0:
            raise EvaluationError(
                "KS statistic needs both classes in ground truth",
                metric_name="ks_statistic",
            )

        df['cum_pos'] = df['target'].cumsum() / total_pos
        df['cum_neg'] = (1 - df['target']).cumsum() / total_neg
        df['ks'] = (df['cum_pos'] - df['cum_neg']).abs()

        max_idx = df['ks'].idxmax()
        return float(df.loc[max_idx, 'ks']), float(df.loc[max_idx, 'score'])

    @staticmethod
    def calculate_all_metrics(
        y_true: Sequence[Any],
        y_score: Sequence[float],
        y_pred: Optional[Sequence[Any]] = None,
        positive_label: Any = 1,
        threshold: float = 0.5
    ) -> Dict[str, Any]:
        """
        Calculate all metrics on one split.

        Args:
            y_true: True labels (original label domain)
            y_score: Positive-class probabilities
            y_pred: Predicted labels (original label domain); thresholded
                from y_score if not provided
            positive_label: Label value treated as positive
            threshold: Classification threshold used when y_pred is None

        Returns:
            Dictionary of metrics rounded to 4 decimal places
        """
        y_bin = to_binary(y_true, positive_label)
        y_score = np.asarray(y_score, dtype=float)

        if len(y_bin) != len(y_score):
            raise EvaluationError(
                f"Length mismatch: {len(y_bin)} labels vs {len(y_score)} scores"
            )
        if len(np.unique(y_bin)) < 2:
            raise EvaluationError(
                "Ground truth contains a single class; AUC is undefined",
                metric_name="auc",
            )

        if y_pred is None:
            pred_bin = (y_score >= threshold).astype(int)
        else:
            pred_bin = to_binary(y_pred, positive_label)

        try:
            auc = roc_auc_score(y_bin, y_score)
            ks_stat, ks_threshold = ClassificationMetrics.ks_statistic(y_bin, y_score)
            tn, fp, fn, tp = confusion_matrix(y_bin, pred_bin, labels=[0, 1]).ravel()
            logloss = log_loss(y_bin, y_score, labels=[0, 1])
        except ValueError as e:
            raise EvaluationError("Metric calculation failed", cause=e)

        return {
            'n_samples': int(len(y_bin)),
            'positive_rate': round(float(y_bin.mean()), 4),
            'accuracy': round(float(accuracy_score(y_bin, pred_bin)), 4),
            'auc': round(float(auc), 4),
            'gini': round(float(2 * auc - 1), 4),
            'ks_statistic': round(ks_stat, 4),
            'ks_threshold': round(ks_threshold, 4),
            'precision': round(float(precision_score(y_bin, pred_bin, zero_division=0)), 4),
            'recall': round(float(recall_score(y_bin, pred_bin, zero_division=0)), 4),
            'f1_score': round(float(f1_score(y_bin, pred_bin, zero_division=0)), 4),
            'log_loss': round(float(logloss), 4),
            'confusion_matrix': {
                'tn': int(tn),
                'fp': int(fp),
                'fn': int(fn),
                'tp': int(tp)
            },
        }
