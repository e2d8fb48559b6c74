"""
Features Module

Preprocessing recipe (dummy encoding and normalization) for the model.
"""

from credit_default.features.recipe import (
    build_recipe,
    predictor_columns,
    split_column_types,
)

__all__ = [
    "build_recipe",
    "predictor_columns",
    "split_column_types",
]
