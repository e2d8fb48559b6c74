"""
Output Manager

Owns the directory of one training run: the monitoring exports, the model
bundle, reports, the config snapshot, logs and run metadata all land under
``{output.base_dir}/{run_id}/``.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
import importlib.metadata
import hashlib
import json
import logging
import platform
import subprocess
import sys

import joblib
import pandas as pd
import yaml

from credit_default.config.schema import PipelineConfig
from credit_default.core.exceptions import ArtifactError
from credit_default.export.jsonl import write_json_lines


logger = logging.getLogger(__name__)

RUN_SUBDIRS = ["config", "data", "model", "reports", "logs"]

TRACKED_PACKAGES = ["pandas", "numpy", "scikit-learn", "joblib", "pydantic", "PyYAML"]


def _write_json(obj: Any, path: Path) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, default=str)
    return path


def _write_csv(obj: Any, path: Path) -> Path:
    frame = obj if isinstance(obj, pd.DataFrame) else pd.DataFrame(obj)
    frame.to_csv(path, index=False)
    return path


def _write_joblib(obj: Any, path: Path) -> Path:
    joblib.dump(obj, path)
    return path


# fmt -> (file extension, writer)
ARTIFACT_WRITERS: Dict[str, Tuple[str, Callable[[Any, Path], Path]]] = {
    "json": (".json", _write_json),
    "jsonl": (".json", write_json_lines),
    "csv": (".csv", _write_csv),
    "joblib": (".joblib", _write_joblib),
}


def _git_revision() -> str:
    """``git describe`` of the working tree ('abc1234' or 'abc1234-dirty'), or 'no-git'."""
    try:
        result = subprocess.run(
            ["git", "describe", "--always", "--dirty"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return "no-git"
    return result.stdout.strip() if result.returncode == 0 else "no-git"


def _package_versions() -> Dict[str, str]:
    versions = {}
    for package in TRACKED_PACKAGES:
        try:
            versions[package] = importlib.metadata.version(package)
        except importlib.metadata.PackageNotFoundError:
            versions[package] = "not installed"
    return versions


def _file_md5(path: str) -> str:
    """MD5 of a file's bytes, or 'unknown' if it cannot be read."""
    digest = hashlib.md5()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(1 << 20), b""):
                digest.update(chunk)
    except OSError:
        return "unknown"
    return digest.hexdigest()


class OutputManager:
    """Run directory and artifact writer for one pipeline run.

    Layout::

        {base_dir}/{run_id}/
            config/     pipeline_config.yaml
            data/       df_baseline.json, df_sample.json and the scored pair
            model/      persisted model bundle
            reports/    metrics.json
            logs/       pipeline.log
            run_metadata.json

    ``run_id`` is ``{YYYYMMDD}_{HHMMSS}_{hash}``, the hash being the first
    six hex digits of the MD5 of the config's JSON dump, so two runs of the
    same config in the same second share a directory.

    Args:
        config: The pipeline configuration.
        run_start: Start time used in the run id; defaults to now.
    """

    def __init__(self, config: PipelineConfig, run_start: Optional[datetime] = None):
        self._config = config
        self._started = run_start or datetime.now()
        self._finished: Optional[datetime] = None
        self._status = "running"

        config_hash = hashlib.md5(config.model_dump_json().encode()).hexdigest()
        self._run_id = f"{self._started:%Y%m%d_%H%M%S}_{config_hash[:6]}"
        self._run_dir = Path(config.output.base_dir) / self._run_id

        for subdir in RUN_SUBDIRS:
            (self._run_dir / subdir).mkdir(parents=True, exist_ok=True)

        logger.info("Run directory: %s", self._run_dir)

    @property
    def run_id(self) -> str:
        return self._run_id

    @property
    def run_dir(self) -> Path:
        return self._run_dir

    @property
    def data_dir(self) -> Path:
        """Where the monitoring JSON lines files are written."""
        return self._run_dir / "data"

    @property
    def model_dir(self) -> Path:
        return self._run_dir / "model"

    @property
    def status(self) -> str:
        """'running' until marked 'success' or 'failed'."""
        return self._status

    def save_config_snapshot(self, config: PipelineConfig) -> Path:
        """Write the resolved config as YAML to ``config/pipeline_config.yaml``."""
        path = self._run_dir / "config" / "pipeline_config.yaml"
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)

        logger.debug("Config snapshot: %s", path)
        return path

    def save_artifact(
        self,
        name: str,
        obj: Any,
        fmt: str = "json",
        subdir: str = "data",
    ) -> Path:
        """Write ``obj`` to ``{subdir}/{name}{ext}`` in the run directory.

        Args:
            name: File name without extension.
            obj: Object to persist. ``jsonl`` and ``csv`` take a DataFrame
                (or records); ``json`` anything ``json.dump`` accepts.
            fmt: One of 'json', 'jsonl', 'csv', 'joblib'. ``jsonl`` files get
                the ``.json`` extension the monitoring platform expects.
            subdir: Subdirectory of the run directory.

        Returns:
            Path written.
        """
        if fmt not in ARTIFACT_WRITERS:
            raise ArtifactError(
                f"Unsupported artifact format '{fmt}'; "
                f"expected one of {sorted(ARTIFACT_WRITERS)}",
                artifact_path=str(self._run_dir / subdir / name),
            )

        extension, writer = ARTIFACT_WRITERS[fmt]
        target_dir = self._run_dir / subdir
        target_dir.mkdir(parents=True, exist_ok=True)

        path = writer(obj, target_dir / f"{name}{extension}")
        logger.debug("Saved %s artifact: %s", fmt, path)
        return path

    def save_run_metadata(self) -> Path:
        """Write ``run_metadata.json``: status, timing, input file and environment."""
        finished = self._finished or datetime.now()
        input_path = self._config.data.input_path

        metadata = {
            "run_id": self._run_id,
            "status": self._status,
            "run_start": self._started.isoformat(),
            "run_end": finished.isoformat(),
            "duration_seconds": round((finished - self._started).total_seconds(), 2),
            "input_path": input_path,
            "input_file_hash": _file_md5(input_path),
            "git_commit": _git_revision(),
            "python_version": sys.version,
            "package_versions": _package_versions(),
            "os_info": {
                "system": platform.system(),
                "release": platform.release(),
                "machine": platform.machine(),
            },
        }

        path = _write_json(metadata, self._run_dir / "run_metadata.json")
        logger.info("Run metadata: %s", path)
        return path

    def get_log_path(self) -> Path:
        return self._run_dir / "logs" / "pipeline.log"

    def mark_complete(self, status: str = "success") -> None:
        self._status = status
        self._finished = datetime.now()

    def mark_failed(self) -> None:
        self.mark_complete(status="failed")
