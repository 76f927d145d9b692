"""
Ground-truth adapters for the agent platform data store.

This package provides read adapters (plus best-effort cleanup) over the
agent, prompt-history and task records the platform persists.
"""

from .base import BaseGroundTruthAdapter
from .config import create_adapter, load_config
from .schemas import (
    AgentRecord,
    AgentStatus,
    PromptHistoryRecord,
    TaskRecord,
)

__all__ = [
    "BaseGroundTruthAdapter",
    "create_adapter",
    "load_config",
    "AgentStatus",
    "AgentRecord",
    "PromptHistoryRecord",
    "TaskRecord",
]
