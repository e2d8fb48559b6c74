"""
Dataset Loader

Reads the delimited credit dataset fully into memory and checks that it
carries the id, sensitive-attribute and binary label columns.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union
import logging

import pandas as pd

from credit_default.core.exceptions import (
    DataReaderError,
    DataValidationError,
    SchemaValidationError,
)


logger = logging.getLogger(__name__)

DEFAULT_REQUIRED_COLUMNS = ("id", "gender", "label")


def validate_columns(df: pd.DataFrame, required_columns: Sequence[str]) -> None:
    """Raise SchemaValidationError if any required column is absent.

    Args:
        df: Loaded dataset.
        required_columns: Column names that must be present.
    """
    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise SchemaValidationError(
            f"Missing required columns: {missing}",
            missing_columns=missing,
            details={"available": list(df.columns)},
        )


def validate_binary_target(df: pd.DataFrame, target_column: str) -> List[object]:
    """Check the target has exactly two distinct non-null values.

    Args:
        df: Loaded dataset.
        target_column: Name of the label column.

    Returns:
        The two label values, sorted.
    """
    values = df[target_column].dropna().unique().tolist()
    if len(values) != 2:
        raise DataValidationError(
            f"Target column '{target_column}' must be binary, "
            f"found {len(values)} distinct value(s)",
            validation_errors=[{"column": target_column, "values": values[:10]}],
        )

    n_missing = int(df[target_column].isna().sum())
    if n_missing:
        raise DataValidationError(
            f"Target column '{target_column}' has {n_missing} missing value(s)",
            validation_errors=[{"column": target_column, "missing": n_missing}],
        )

    return sorted(values, key=str)


def load_dataset(
    path: Union[str, Path],
    delimiter: str = ",",
    required_columns: Optional[Sequence[str]] = DEFAULT_REQUIRED_COLUMNS,
    target_column: Optional[str] = "label",
) -> pd.DataFrame:
    """Load a delimited tabular file into a DataFrame.

    Args:
        path: Path to the delimited file.
        delimiter: Field separator.
        required_columns: Columns that must be present (None skips the check).
        target_column: Label column checked for being binary (None skips it).

    Returns:
        The full dataset in file order.

    Raises:
        DataReaderError: If the file is missing or cannot be parsed.
        SchemaValidationError: If a required column is missing.
        DataValidationError: If the label is not binary.
    """
    path = Path(path)
    if not path.exists():
        raise DataReaderError("Input file not found", source=str(path))

    try:
        df = pd.read_csv(path, sep=delimiter)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataReaderError("Failed to parse input file", source=str(path), cause=e)

    logger.info("Loaded %s: %d rows, %d columns", path.name, len(df), len(df.columns))

    if required_columns:
        validate_columns(df, required_columns)

    if target_column is not None:
        labels = validate_binary_target(df, target_column)
        counts = df[target_column].value_counts()
        logger.info(
            "Label distribution: %s",
            ", ".join(f"{k}={counts.get(k, 0)}" for k in labels),
        )

    return df
