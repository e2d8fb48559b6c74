"""
IO Module

Output management for pipeline runs.
"""

from credit_default.io.output_manager import OutputManager

__all__ = [
    "OutputManager",
]
