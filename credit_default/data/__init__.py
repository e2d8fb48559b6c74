"""
Data Module

Provides dataset loading, validation and splitting.
"""

from credit_default.data.loader import load_dataset, validate_columns, validate_binary_target
from credit_default.data.splitter import DataSplit, DataSplitter

__all__ = [
    "load_dataset",
    "validate_columns",
    "validate_binary_target",
    "DataSplit",
    "DataSplitter",
]
