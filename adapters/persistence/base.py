"""
Base ground-truth adapter interface.

The harness reads platform state through this interface; adapters
implement storage logic.
"""
from abc import ABC, abstractmethod
from typing import Any

from .schemas import AgentRecord, PromptHistoryRecord, TaskRecord


class BaseGroundTruthAdapter(ABC):
    """
    Base adapter over the platform data store.

    Adapters handle:
    - Connection management
    - Query translation (native rows → Pydantic)
    - Best-effort cleanup of entities left behind by earlier runs
    """

    def __init__(self, config: dict[str, Any]):
        """Initialize adapter with an already-loaded config"""
        self.config = config

    async def __aenter__(self) -> "BaseGroundTruthAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    # ============================================
    # CONNECTION LIFECYCLE
    # ============================================

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection"""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection"""
        pass

    @abstractmethod
    async def health_check(self) -> dict:
        """Check adapter health"""
        pass

    # ============================================
    # AGENTS
    # ============================================

    @abstractmethod
    async def get_agent(self, agent_id: str) -> AgentRecord | None:
        """Get agent by ID"""
        pass

    @abstractmethod
    async def get_agent_by_name(self, name: str) -> AgentRecord | None:
        """Get agent by its unique name"""
        pass

    @abstractmethod
    async def delete_agent_by_name(self, name: str) -> None:
        """
        Delete an agent and its dependent rows.
        Raises RecordNotFoundError if no agent has that name.
        """
        pass

    # ============================================
    # PROMPT HISTORY
    # ============================================

    @abstractmethod
    async def list_prompt_history(self, agent_id: str) -> list[PromptHistoryRecord]:
        """Prompt history for an agent, newest version first"""
        pass

    # ============================================
    # TASKS
    # ============================================

    @abstractmethod
    async def list_tasks(self, agent_id: str) -> list[TaskRecord]:
        """Tasks created for an agent, newest first"""
        pass
