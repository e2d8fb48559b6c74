"""
JSON Lines Export

Writes tabular datasets as one JSON object per line, the layout the
monitoring platform ingests. Every record is serialized on its own and
the lines are joined with a newline; there is no enclosing array.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union
import json
import logging
import math

import numpy as np
import pandas as pd

from credit_default.core.exceptions import DataReaderError, ExportError


logger = logging.getLogger(__name__)

Records = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


def _to_native(value: Any) -> Any:
    """Convert a cell value to something json.dumps accepts.

    Missing values (None, NaN, pd.NA, NaT) become None. NumPy scalars and
    arrays become Python values. Infinite floats and any other type raise
    TypeError/ValueError.
    """
    if value is None or value is pd.NA or value is pd.NaT:
        return None

    if isinstance(value, np.ndarray):
        return [_to_native(v) for v in value.tolist()]

    if isinstance(value, (np.datetime64, np.timedelta64)):
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

    if isinstance(value, np.generic):
        value = value.item()

    if isinstance(value, (str, bool, int)):
        return value

    if isinstance(value, float):
        if math.isnan(value):
            return None
        if math.isinf(value):
            raise ValueError(f"Out of range float value: {value}")
        return value

    if isinstance(value, Mapping):
        # json.dumps would silently turn 1 into "1"
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"Keys must be str, got {type(key).__name__} key {key!r}")
        return {k: _to_native(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [_to_native(v) for v in value]

    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_record(record: Mapping[str, Any]) -> str:
    """Serialize one record to a compact single-line JSON object.

    Keys, nested ones included, must be ``str``; anything else raises TypeError.
    """
    if not isinstance(record, Mapping):
        raise TypeError(f"Record must be a mapping, got {type(record).__name__}")
    return json.dumps(
        _to_native(record),
        separators=(",", ":"),
        allow_nan=False,
    )


def records_from_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Ordered list of row mappings, index dropped.

    Args:
        df: DataFrame to convert.

    Returns:
        One dict per row, keys in column order.
    """
    if df.columns.duplicated().any():
        duplicated = df.columns[df.columns.duplicated()].tolist()
        raise ExportError(f"Duplicate column names: {duplicated}")
    return df.to_dict(orient="records")


def write_json_lines(records: Records, path: Union[str, Path]) -> Path:
    """Write records as line-delimited JSON.

    The file holds exactly one line per record, each terminated by a
    newline. All records are serialized before the destination is opened.

    Args:
        records: DataFrame or ordered iterable of mappings.
        path: Destination file, created or overwritten.

    Returns:
        The path written.

    Raises:
        ExportError: If a value is not representable as JSON or the
            destination cannot be written.
    """
    path = Path(path)

    if isinstance(records, pd.DataFrame):
        records = records_from_frame(records)

    lines: List[str] = []
    for index, record in enumerate(records):
        try:
            lines.append(serialize_record(record))
        except (TypeError, ValueError) as e:
            raise ExportError(
                "Record is not representable as JSON",
                path=str(path),
                record_index=index,
                cause=e,
            )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line)
                f.write("\n")
    except OSError as e:
        raise ExportError("Failed to write export file", path=str(path), cause=e)

    logger.info("Exported %d records to %s", len(lines), path)
    return path


def read_json_lines(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read a line-delimited JSON file back into a list of records.

    Blank lines are skipped.

    Args:
        path: File written by write_json_lines.

    Returns:
        Records in file order.
    """
    path = Path(path)
    if not path.exists():
        raise DataReaderError("JSON lines file not found", source=str(path))

    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise DataReaderError(
                    f"Invalid JSON on line {line_no}", source=str(path), cause=e
                )
    return records
