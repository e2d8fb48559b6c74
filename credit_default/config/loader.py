"""
Config Loader

Builds the frozen PipelineConfig from, in increasing precedence: model
defaults, a YAML file, dot-notation CLI overrides and a nested override
dict.
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging

import yaml
from pydantic import ValidationError

from credit_default.config.schema import PipelineConfig
from credit_default.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


def _set_nested(d: Dict[str, Any], dotted_key: str, value: Any) -> None:
    """``_set_nested(d, "splitting.test_size", 0.3)`` sets ``d["splitting"]["test_size"]``."""
    *parents, leaf = dotted_key.split(".")
    for key in parents:
        d = d.setdefault(key, {})
    d[leaf] = value


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base (in-place)."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def _read_yaml(yaml_path: str) -> Dict[str, Any]:
    path = Path(yaml_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {yaml_path}", cause=e)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config root must be a mapping, got {type(raw).__name__}",
            details={"path": str(yaml_path)},
        )

    # A relative input file is looked up next to the YAML first
    data_section = raw.get("data") or {}
    input_path = data_section.get("input_path")
    if input_path and not Path(input_path).is_absolute():
        candidate = (path.parent / input_path).resolve()
        if candidate.exists():
            data_section["input_path"] = str(candidate)

    logger.info("Loaded config from %s", yaml_path)
    return raw


def load_config(
    yaml_path: Optional[str] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> PipelineConfig:
    """Load pipeline configuration.

    Args:
        yaml_path: YAML config file; defaults only when None.
        cli_overrides: Flat ``{"section.field": value}`` dict, typically
            from argparse. None values are skipped so unset flags do not
            clobber the file.
        overrides: Nested dict merged last.

    Returns:
        Frozen PipelineConfig.

    Raises:
        FileNotFoundError: yaml_path does not exist.
        ConfigurationError: The YAML cannot be parsed or is not a mapping.
        pydantic.ValidationError: A value fails validation.
    """
    raw = _read_yaml(yaml_path) if yaml_path is not None else {}

    for key, value in (cli_overrides or {}).items():
        if value is not None:
            _set_nested(raw, key, value)

    if overrides:
        _deep_merge(raw, overrides)

    try:
        return PipelineConfig(**raw)
    except ValidationError as e:
        logger.error("Invalid pipeline configuration (%d error(s))", e.error_count())
        raise


def save_config(config: PipelineConfig, path: str) -> None:
    """Write a PipelineConfig as YAML (.yaml/.yml) or JSON (anything else)."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump()

    with open(out_path, "w", encoding="utf-8") as f:
        if out_path.suffix in (".yaml", ".yml"):
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2, default=str)

    logger.info("Config saved to %s", path)
