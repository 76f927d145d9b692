"""
PostgreSQL ground-truth adapter.

Reads the tables the Agent Factory and Orchestrator write in production.
"""

from .adapter import PostgresGroundTruthAdapter

__all__ = ["PostgresGroundTruthAdapter"]
