"""
Ground-truth schemas for the platform data store.

These are storage-agnostic Pydantic models mirroring the records the
Agent Factory and Orchestrator persist. Adapters translate native rows
into these models; the harness never writes them back.
"""
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AgentStatus(str, Enum):
    """Publication status of an agent definition"""

    DRAFT = "DRAFT"
    LIVE = "LIVE"


# ============================================
# AGENT SCHEMAS
# ============================================


class AgentRecord(BaseModel):
    """Agent definition as stored by the Factory"""

    id: str = Field(..., description="Factory-generated ID")
    name: str = Field(..., description="Unique agent name")
    role: str = Field(..., description="Role, also used as webhook source")
    goal: str = ""
    system_prompt: str = ""
    workspace: str | None = None
    knowledge_base_id: str | None = None
    status: AgentStatus = AgentStatus.DRAFT
    tools: list[Any] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PromptHistoryRecord(BaseModel):
    """One stored version of an agent's system prompt"""

    id: str
    agent_id: str
    version: int
    prompt: str
    created_at: datetime | None = None


# ============================================
# TASK SCHEMAS
# ============================================


class TaskRecord(BaseModel):
    """Task created by the Orchestrator for an incoming event"""

    id: str
    agent_id: str
    status: str | None = None
    input: dict[str, Any] | None = None
    created_at: datetime
