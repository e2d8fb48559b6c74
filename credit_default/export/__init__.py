"""
Export Module

Line-delimited JSON export of datasets for the model monitoring platform.
"""

from credit_default.export.jsonl import (
    read_json_lines,
    records_from_frame,
    serialize_record,
    write_json_lines,
)
from credit_default.export.scored import MonitoringExporter, prepare_scored_frame

__all__ = [
    "read_json_lines",
    "records_from_frame",
    "serialize_record",
    "write_json_lines",
    "MonitoringExporter",
    "prepare_scored_frame",
]
