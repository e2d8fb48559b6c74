"""
Model Factory

Factory pattern for creating model instances and reloading bundles.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Type, Union

from credit_default.core.exceptions import ArtifactError
from credit_default.models.base_model import BaseModel, read_artifact
from credit_default.models.logistic_model import LogisticRegressionModel


class ModelFactory:
    """
    Factory for creating model instances.

    Supports dynamic model registration and creation.
    """

    _models: Dict[str, Type[BaseModel]] = {
        'logistic_regression': LogisticRegressionModel,
    }

    @classmethod
    def register(cls, name: str, model_class: Type[BaseModel]) -> None:
        """
        Register a new model type.

        Args:
            name: Model name for lookup
            model_class: Model class
        """
        if not issubclass(model_class, BaseModel):
            raise TypeError(f"{model_class} must be a subclass of BaseModel")
        cls._models[name] = model_class

    @classmethod
    def create(
        cls,
        model_type: str,
        config: Dict[str, Any],
        name: Optional[str] = None
    ) -> BaseModel:
        """
        Create a model instance.

        Args:
            model_type: Type of model ('logistic_regression')
            config: Model configuration
            name: Optional instance name

        Returns:
            Model instance
        """
        model_type = model_type.lower()

        if model_type not in cls._models:
            raise ValueError(
                f"Unknown model type: {model_type}. "
                f"Available: {list(cls._models.keys())}"
            )

        return cls._models[model_type](config, name)

    @classmethod
    def load(cls, path: Union[str, Path]) -> BaseModel:
        """
        Reload a saved bundle into an instance of the class that wrote it.

        Args:
            path: Path to a bundle written by BaseModel.save

        Returns:
            Fitted model
        """
        artifact = read_artifact(path)
        model_class_name = artifact.get('model_class')

        for model_class in cls._models.values():
            if model_class.__name__ == model_class_name:
                return model_class().restore(artifact, path)

        raise ArtifactError(
            f"No registered model class named {model_class_name!r}",
            artifact_path=str(path),
        )

    @classmethod
    def list_models(cls) -> list:
        """List all available model types."""
        return list(cls._models.keys())
