"""
Data Splitter

Splits the dataset into a training (baseline) and test (sample) set,
stratified on the label by default.
"""

from typing import Optional
from dataclasses import dataclass

import pandas as pd
from sklearn.model_selection import train_test_split

from credit_default.core.base import PandasComponent
from credit_default.core.exceptions import DataValidationError


@dataclass
class DataSplit:
    """Container for the baseline (train) and sample (test) splits."""
    train: pd.DataFrame
    test: pd.DataFrame

    @property
    def n_train(self) -> int:
        return len(self.train)

    @property
    def n_test(self) -> int:
        return len(self.test)


class DataSplitter(PandasComponent):
    """
    Handles the train/test split of the raw dataset.

    Supports:
    - Stratified splitting by the label
    - Reproducible splits with a random seed

    Splits carry the untransformed columns; preprocessing is fitted later
    as part of the model pipeline.
    """

    def __init__(
        self,
        test_size: float = 0.25,
        random_state: int = 42,
        stratify: bool = True,
        name: Optional[str] = None
    ):
        super().__init__(
            {"test_size": test_size, "random_state": random_state, "stratify": stratify},
            name or "DataSplitter",
        )
        self.test_size = test_size
        self.random_state = random_state
        self.stratify = stratify

    def validate(self) -> bool:
        """Validate split configuration."""
        if not 0.0 < self.test_size < 1.0:
            self.logger.error(f"test_size must be in (0, 1), got {self.test_size}")
            return False
        return True

    def run(self, df: pd.DataFrame, target_column: str = "label") -> DataSplit:
        """Run the splitting."""
        return self.split(df, target_column)

    def split(self, df: pd.DataFrame, target_column: str = "label") -> DataSplit:
        """
        Split data into train and test sets.

        Args:
            df: Dataset to split
            target_column: Column to stratify by

        Returns:
            DataSplit with fresh 0..n-1 indices on both sides
        """
        if not self.validate():
            raise DataValidationError(
                "Invalid split configuration",
                details={"test_size": self.test_size},
            )

        self._start_execution()
        self.logger.debug(f"Input: {self.describe_frame(df)}")

        stratify_on = None
        if self.stratify and target_column in df.columns:
            stratify_on = df[target_column]

        try:
            train, test = train_test_split(
                df,
                test_size=self.test_size,
                random_state=self.random_state,
                stratify=stratify_on,
            )
        except ValueError as e:
            raise DataValidationError(
                f"Could not split {len(df)} rows",
                details={"test_size": self.test_size, "stratify": stratify_on is not None},
                cause=e,
            )

        result = DataSplit(
            train=train.reset_index(drop=True),
            test=test.reset_index(drop=True),
        )

        total = len(df)
        self.logger.info(f"Train set: {result.n_train:,} rows ({result.n_train/total*100:.1f}%)")
        self.logger.info(f"Test set: {result.n_test:,} rows ({result.n_test/total*100:.1f}%)")

        self._end_execution()
        return result
