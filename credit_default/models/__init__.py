"""
Models Module

Provides model training, prediction and persistence.
"""

from credit_default.models.base_model import BaseModel
from credit_default.models.model_factory import ModelFactory
from credit_default.models.logistic_model import LogisticRegressionModel

__all__ = [
    "BaseModel",
    "ModelFactory",
    "LogisticRegressionModel",
]
