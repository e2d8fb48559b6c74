"""
Tests for ModelFactory.
"""

import joblib
import numpy as np
import pytest

from credit_default.core.exceptions import ArtifactError
from credit_default.models.base_model import BaseModel, read_artifact
from credit_default.models.logistic_model import LogisticRegressionModel
from credit_default.models.model_factory import ModelFactory


class TestModelFactory:

    def test_list_models(self):
        assert "logistic_regression" in ModelFactory.list_models()

    def test_create(self, model_config):
        model = ModelFactory.create("logistic_regression", model_config)
        assert isinstance(model, LogisticRegressionModel)
        assert model.get_config("target_column") == "label"

    def test_create_case_insensitive(self, model_config):
        model = ModelFactory.create("Logistic_Regression", model_config, name="lr")
        assert model.name == "lr"

    def test_create_unknown(self, model_config):
        with pytest.raises(ValueError, match="Unknown model type"):
            ModelFactory.create("random_forest", model_config)

    def test_register_rejects_non_model(self):
        with pytest.raises(TypeError):
            ModelFactory.register("dict", dict)

    def test_register_subclass(self, model_config):
        class TunedLogistic(LogisticRegressionModel):
            pass

        ModelFactory.register("tuned_logistic", TunedLogistic)
        try:
            assert isinstance(ModelFactory.create("tuned_logistic", model_config), TunedLogistic)
        finally:
            ModelFactory._models.pop("tuned_logistic")


class TestFactoryLoad:

    def test_load_dispatches_on_class(self, fitted_model, tmp_path):
        path = fitted_model.save(tmp_path / "model.joblib")
        loaded = ModelFactory.load(path)
        assert isinstance(loaded, LogisticRegressionModel)
        assert isinstance(loaded, BaseModel)
        assert loaded.is_fitted

    def test_load_missing(self, tmp_path):
        with pytest.raises(ArtifactError):
            ModelFactory.load(tmp_path / "missing.joblib")

    def test_load_unknown_class(self, tmp_path):
        path = tmp_path / "other.joblib"
        joblib.dump({"model_class": "GradientBoosting", "model": None}, path)
        with pytest.raises(ArtifactError, match="No registered model class"):
            ModelFactory.load(path)

    def test_load_not_a_bundle(self, tmp_path):
        path = tmp_path / "list.joblib"
        joblib.dump([1, 2], path)
        with pytest.raises(ArtifactError):
            ModelFactory.load(path)

    def test_load_reads_bundle_once(self, fitted_model, tmp_path, monkeypatch):
        path = fitted_model.save(tmp_path / "model.joblib")
        calls = []
        real_load = joblib.load

        def counting_load(*args, **kwargs):
            calls.append(args)
            return real_load(*args, **kwargs)

        monkeypatch.setattr(joblib, "load", counting_load)
        loaded = ModelFactory.load(path)
        assert len(calls) == 1
        assert loaded.feature_names == fitted_model.feature_names

    def test_restore_from_loaded_bundle(self, fitted_model, tmp_path, train_test_data):
        path = fitted_model.save(tmp_path / "model.joblib")
        artifact = read_artifact(path)
        restored = LogisticRegressionModel().restore(artifact)
        _, test = train_test_data
        np.testing.assert_allclose(restored.predict_proba(test), fitted_model.predict_proba(test))

    def test_restore_rejects_other_class(self, tmp_path):
        artifact = {"model_class": "GradientBoosting", "model": None}
        with pytest.raises(ArtifactError, match="expected LogisticRegressionModel"):
            LogisticRegressionModel().restore(artifact, tmp_path / "other.joblib")
