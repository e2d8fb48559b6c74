"""
Preprocessing Recipe

Builds the scikit-learn ColumnTransformer applied in front of the
classifier: categorical predictors are dummy-encoded, numeric predictors
are normalized.
"""

from typing import List, Optional, Sequence, Tuple
import logging

import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import FunctionTransformer, OneHotEncoder, StandardScaler

from credit_default.core.exceptions import DataValidationError


logger = logging.getLogger(__name__)

def is_categorical_dtype(dtype) -> bool:
    """True for text (object or str), category and bool dtypes."""
    return (
        pd.api.types.is_object_dtype(dtype)
        or pd.api.types.is_string_dtype(dtype)
        or isinstance(dtype, pd.CategoricalDtype)
        or pd.api.types.is_bool_dtype(dtype)
    )


def _as_object(X):
    """Cast categorical inputs to object with NaN as the missing marker.

    SimpleImputer rejects bool data and does not see pd.NA as missing.
    """
    X = pd.DataFrame(X).astype(object)
    return X.where(X.notna(), np.nan)


def predictor_columns(
    df: pd.DataFrame,
    target_column: str,
    id_columns: Sequence[str] = ("id",),
    exclude_columns: Sequence[str] = (),
) -> List[str]:
    """Columns used as model inputs, in dataset order.

    Args:
        df: Raw dataset or split.
        target_column: Label column (never a predictor).
        id_columns: Identifier columns (never predictors).
        exclude_columns: Any further columns to leave out.

    Returns:
        Predictor column names.
    """
    dropped = {target_column, *id_columns, *exclude_columns}
    predictors = [c for c in df.columns if c not in dropped]
    if not predictors:
        raise DataValidationError(
            "No predictor columns left after excluding id/target columns",
            details={"dropped": sorted(dropped, key=str)},
        )
    return predictors


def split_column_types(
    df: pd.DataFrame,
    predictors: Sequence[str],
    categorical_columns: Optional[Sequence[str]] = None,
) -> Tuple[List[str], List[str]]:
    """Partition predictors into (categorical, numeric).

    Explicitly listed categorical columns win; otherwise text (object or
    str), category and bool dtypes are categorical and everything else is
    numeric.
    """
    if categorical_columns is not None:
        unknown = [c for c in categorical_columns if c not in predictors]
        if unknown:
            raise DataValidationError(
                f"Categorical columns are not predictors: {unknown}"
            )
        categorical = [c for c in predictors if c in set(categorical_columns)]
    else:
        categorical = [
            c for c in predictors
            if is_categorical_dtype(df[c].dtype)
        ]

    numeric = [c for c in predictors if c not in set(categorical)]
    return categorical, numeric


def build_recipe(
    df: pd.DataFrame,
    target_column: str,
    id_columns: Sequence[str] = ("id",),
    exclude_columns: Sequence[str] = (),
    categorical_columns: Optional[Sequence[str]] = None,
) -> ColumnTransformer:
    """Build the (unfitted) preprocessing recipe for a dataset.

    Args:
        df: Dataset whose columns define the recipe (usually the train split).
        target_column: Label column.
        id_columns: Identifier columns.
        exclude_columns: Columns to drop before modelling.
        categorical_columns: Optional explicit list of categorical predictors.

    Returns:
        ColumnTransformer producing a dense numeric matrix.
    """
    predictors = predictor_columns(df, target_column, id_columns, exclude_columns)
    categorical, numeric = split_column_types(df, predictors, categorical_columns)

    logger.info(
        "Recipe: %d numeric (normalized), %d categorical (dummy-encoded)",
        len(numeric), len(categorical),
    )
    logger.debug("Numeric predictors: %s", numeric)
    logger.debug("Categorical predictors: %s", categorical)

    transformers = []
    if numeric:
        transformers.append((
            "numeric",
            Pipeline([
                ("impute", SimpleImputer(strategy="median")),
                ("normalize", StandardScaler()),
            ]),
            numeric,
        ))
    if categorical:
        transformers.append((
            "categorical",
            Pipeline([
                ("to_object", FunctionTransformer(_as_object, feature_names_out="one-to-one")),
                ("impute", SimpleImputer(strategy="most_frequent")),
                ("dummy", OneHotEncoder(
                    drop="first",
                    handle_unknown="ignore",
                    sparse_output=False,
                )),
            ]),
            categorical,
        ))

    return ColumnTransformer(transformers, remainder="drop", verbose_feature_names_out=True)
