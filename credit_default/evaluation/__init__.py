"""
Evaluation Module

Provides classification metrics for the credit default model.
"""

from credit_default.evaluation.metrics import ClassificationMetrics, to_binary

__all__ = [
    "ClassificationMetrics",
    "to_binary",
]
