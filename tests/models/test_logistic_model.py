"""
Tests for LogisticRegressionModel.
"""

import numpy as np
import pandas as pd
import pytest

from credit_default.core.exceptions import (
    ArtifactError,
    DataValidationError,
    ModelTrainingError,
)
from credit_default.models.logistic_model import LogisticRegressionModel


class TestFit:
    """Test model fitting."""

    def test_fit_sets_state(self, fitted_model):
        assert fitted_model.is_fitted
        assert fitted_model.classes_ == [0, 1]
        assert fitted_model.positive_label == 1

    def test_feature_names_exclude_id_label_and_sensitive(self, fitted_model):
        assert fitted_model.feature_names == [
            "age", "income", "utilization", "late_payments", "education"
        ]

    def test_gender_kept_when_not_excluded(self, model_config, train_test_data):
        train, _ = train_test_data
        config = {**model_config, "exclude_columns": []}
        model = LogisticRegressionModel(config=config).fit(
            train.drop(columns=["label"]), train["label"]
        )
        assert "gender" in model.feature_names

    def test_default_positive_label_is_last_class(self, model_config, train_test_data):
        train, _ = train_test_data
        config = {**model_config, "positive_label": None}
        model = LogisticRegressionModel(config=config).fit(
            train.drop(columns=["label"]), train["label"]
        )
        assert model.positive_label == 1

    def test_unknown_positive_label(self, model_config, train_test_data):
        train, _ = train_test_data
        config = {**model_config, "positive_label": "yes"}
        with pytest.raises(DataValidationError):
            LogisticRegressionModel(config=config).fit(
                train.drop(columns=["label"]), train["label"]
            )

    def test_single_class_wrapped(self, model_config, train_test_data):
        train, _ = train_test_data
        y = pd.Series(np.zeros(len(train), dtype=int))
        with pytest.raises(ModelTrainingError):
            LogisticRegressionModel(config=model_config).fit(train.drop(columns=["label"]), y)

    def test_length_mismatch(self, model_config, train_test_data):
        train, _ = train_test_data
        with pytest.raises(DataValidationError):
            LogisticRegressionModel(config=model_config).fit(
                train.drop(columns=["label"]), train["label"].iloc[:-5]
            )

    def test_random_state_passed_to_solver(self, fitted_model):
        assert fitted_model.model.named_steps["glm"].random_state == 42

    def test_incompatible_penalty_fixed(self, model_config):
        config = {**model_config, "params": {"solver": "liblinear", "penalty": None}}
        model = LogisticRegressionModel(config=config)
        params = model._validate_params(dict(model.default_params))
        assert params["penalty"] == "l1"


class TestPredict:
    """Test predictions."""

    def test_predict_returns_label_domain(self, fitted_model, train_test_data):
        _, test = train_test_data
        preds = fitted_model.predict(test)
        assert len(preds) == len(test)
        assert set(np.unique(preds)) <= {0, 1}

    def test_predict_ignores_extra_columns(self, fitted_model, train_test_data):
        _, test = train_test_data
        with_label = fitted_model.predict(test)
        without = fitted_model.predict(test.drop(columns=["label", "id", "gender"]))
        np.testing.assert_array_equal(with_label, without)

    def test_predict_proba_range(self, fitted_model, train_test_data):
        _, test = train_test_data
        proba = fitted_model.predict_proba(test)
        assert proba.ndim == 1
        assert ((proba >= 0) & (proba <= 1)).all()

    def test_predict_consistent_with_proba(self, fitted_model, train_test_data):
        _, test = train_test_data
        preds = fitted_model.predict(test)
        proba = fitted_model.predict_proba(test)
        np.testing.assert_array_equal(preds, (proba > 0.5).astype(int))

    def test_signal_learned(self, fitted_model, train_test_data):
        _, test = train_test_data
        from sklearn.metrics import roc_auc_score

        assert roc_auc_score(test["label"], fitted_model.predict_proba(test)) > 0.6

    def test_missing_feature(self, fitted_model, train_test_data):
        _, test = train_test_data
        with pytest.raises(DataValidationError):
            fitted_model.predict(test.drop(columns=["utilization"]))

    def test_predict_unfitted(self, model_config, credit_data):
        with pytest.raises(ModelTrainingError):
            LogisticRegressionModel(config=model_config).predict(credit_data)

    def test_predict_record(self, fitted_model, credit_data):
        record = credit_data.iloc[0].to_dict()
        label = fitted_model.predict_record(record)
        assert label in (0, 1)
        assert type(label) is int


class TestCoefficients:

    def test_names_and_intercept(self, fitted_model):
        coefs = fitted_model.get_coefficients()
        assert "(intercept)" in coefs
        assert "numeric__utilization" in coefs
        assert all(isinstance(v, float) for v in coefs.values())

    def test_utilization_increases_default_odds(self, fitted_model):
        assert fitted_model.get_coefficients()["numeric__utilization"] > 0

    def test_sign_flips_with_positive_label(self, model_config, train_test_data):
        train, _ = train_test_data
        X, y = train.drop(columns=["label"]), train["label"]
        pos = LogisticRegressionModel(config=model_config).fit(X, y)
        neg = LogisticRegressionModel(config={**model_config, "positive_label": 0}).fit(X, y)
        assert neg.get_coefficients()["numeric__utilization"] == pytest.approx(
            -pos.get_coefficients()["numeric__utilization"]
        )


class TestPersistence:
    """Test save/load round trip."""

    def test_save_and_load(self, fitted_model, train_test_data, tmp_path):
        _, test = train_test_data
        path = fitted_model.save(tmp_path / "model.joblib")

        loaded = LogisticRegressionModel().load(path)
        assert loaded.is_fitted
        assert loaded.feature_names == fitted_model.feature_names
        assert loaded.positive_label == 1
        np.testing.assert_array_equal(loaded.predict(test), fitted_model.predict(test))

    def test_save_unfitted(self, model_config, tmp_path):
        with pytest.raises(ModelTrainingError):
            LogisticRegressionModel(config=model_config).save(tmp_path / "m.joblib")

    def test_load_missing(self, tmp_path):
        with pytest.raises(ArtifactError):
            LogisticRegressionModel().load(tmp_path / "missing.joblib")

    def test_load_invalid_bundle(self, tmp_path):
        import joblib

        path = tmp_path / "bad.joblib"
        joblib.dump([1, 2, 3], path)
        with pytest.raises(ArtifactError):
            LogisticRegressionModel().load(path)

    def test_load_corrupt_file(self, tmp_path):
        path = tmp_path / "corrupt.joblib"
        path.write_bytes(b"not a pickle")
        with pytest.raises(ArtifactError):
            LogisticRegressionModel().load(path)
