"""
SQLite ground-truth adapter.

Provides a lightweight, file-based stand-in for the platform database,
suitable for local stacks and the test suite.
"""

from .adapter import SQLiteGroundTruthAdapter

__all__ = ["SQLiteGroundTruthAdapter"]
