"""
SQLite ground-truth adapter implementation.

Handles schema translation and migrations internally.

Besides the read interface it carries test-stack writers (``list_agents``,
``insert_agent``, ``replace_agent``, ``add_prompt_history``,
``insert_task``). The suites never call them; they back the in-process
fake Factory and Orchestrator in ``tests/suites/conftest.py``.
"""
import json
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from ..base import BaseGroundTruthAdapter
from ..exceptions import (
    ConnectionError as PersistenceConnectionError,
)
from ..exceptions import (
    QueryError,
    RecordNotFoundError,
)
from ..schemas import AgentRecord, AgentStatus, PromptHistoryRecord, TaskRecord
from .migrations import run_migrations


class SQLiteGroundTruthAdapter(BaseGroundTruthAdapter):
    """SQLite implementation of the ground-truth adapter"""

    def __init__(self, config: dict[str, Any]):
        super().__init__(config)
        self.db_path: Path | None = None
        self.conn: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Connect to SQLite and run migrations"""
        try:
            assert "database" in self.config, "Config missing database section"

            self.db_path = Path(self.config["database"]["path"])
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.conn = await aiosqlite.connect(str(self.db_path))
            self.conn.row_factory = aiosqlite.Row

            await self.conn.execute(
                f"PRAGMA journal_mode={self.config['database'].get('journal_mode', 'WAL')}"
            )
            await self.conn.execute(
                f"PRAGMA synchronous={self.config['database'].get('synchronous', 'NORMAL')}"
            )

            await run_migrations(self.conn)

        except Exception as e:
            raise PersistenceConnectionError(f"Failed to connect to SQLite: {e}") from e

    async def disconnect(self) -> None:
        """Close connection"""
        if self.conn:
            await self.conn.close()
            self.conn = None

    async def health_check(self) -> dict:
        """Check adapter health"""
        assert self.conn is not None, "Adapter not connected"
        try:
            cursor = await self.conn.execute("SELECT 1")
            await cursor.fetchone()
            return {"status": "healthy", "database": str(self.db_path)}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}

    # ============================================
    # AGENTS
    # ============================================

    def _agent_from_row(self, row: aiosqlite.Row) -> AgentRecord:
        return AgentRecord(
            id=row["id"],
            name=row["name"],
            role=row["role"],
            goal=row["goal"],
            system_prompt=row["system_prompt"],
            workspace=row["workspace"],
            knowledge_base_id=row["knowledge_base_id"],
            status=AgentStatus(row["status"]),
            tools=json.loads(row["tools"]),  # JSON → List
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    async def get_agent(self, agent_id: str) -> AgentRecord | None:
        """Get agent by ID - translate SQL to Pydantic"""
        assert self.conn is not None, "Adapter not connected"
        try:
            cursor = await self.conn.execute(
                "SELECT * FROM agents WHERE id = ?", (agent_id,)
            )
            row = await cursor.fetchone()
            return self._agent_from_row(row) if row else None
        except Exception as e:
            raise QueryError(f"Failed to get agent: {e}") from e

    async def get_agent_by_name(self, name: str) -> AgentRecord | None:
        """Get agent by name"""
        assert self.conn is not None, "Adapter not connected"
        try:
            cursor = await self.conn.execute(
                "SELECT * FROM agents WHERE name = ?", (name,)
            )
            row = await cursor.fetchone()
            return self._agent_from_row(row) if row else None
        except Exception as e:
            raise QueryError(f"Failed to get agent by name: {e}") from e

    async def list_agents(self, status: AgentStatus | None = None) -> list[AgentRecord]:
        """List agents, optionally filtered by status"""
        assert self.conn is not None, "Adapter not connected"
        try:
            if status:
                cursor = await self.conn.execute(
                    "SELECT * FROM agents WHERE status = ? ORDER BY created_at",
                    (status.value,),
                )
            else:
                cursor = await self.conn.execute(
                    "SELECT * FROM agents ORDER BY created_at"
                )
            rows = await cursor.fetchall()
            return [self._agent_from_row(row) for row in rows]
        except Exception as e:
            raise QueryError(f"Failed to list agents: {e}") from e

    async def insert_agent(self, agent: dict[str, Any]) -> AgentRecord:
        """Insert an agent definition; returns the stored record"""
        assert self.conn is not None, "Adapter not connected"
        agent_id = str(uuid.uuid4())
        now = datetime.now(UTC).isoformat()

        try:
            await self.conn.execute(
                """
                INSERT INTO agents (
                    id, name, role, goal, system_prompt, workspace,
                    knowledge_base_id, status, tools, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    agent_id,
                    agent["name"],
                    agent["role"],
                    agent.get("goal", ""),
                    agent.get("system_prompt", ""),
                    agent.get("workspace"),
                    agent.get("knowledge_base_id"),
                    AgentStatus(agent.get("status", AgentStatus.DRAFT)).value,
                    json.dumps(agent.get("tools", [])),  # List → JSON
                    now,
                    now,
                ),
            )
            await self.conn.commit()
        except Exception as e:
            raise QueryError(f"Failed to insert agent: {e}") from e

        record = await self.get_agent(agent_id)
        assert record is not None
        return record

    async def replace_agent(self, agent_id: str, agent: dict[str, Any]) -> AgentRecord:
        """Full-replace an agent definition"""
        assert self.conn is not None, "Adapter not connected"
        now = datetime.now(UTC).isoformat()
        try:
            cursor = await self.conn.execute(
                """
                UPDATE agents
                SET name = ?, role = ?, goal = ?, system_prompt = ?, workspace = ?,
                    knowledge_base_id = ?, status = ?, tools = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    agent["name"],
                    agent["role"],
                    agent.get("goal", ""),
                    agent.get("system_prompt", ""),
                    agent.get("workspace"),
                    agent.get("knowledge_base_id"),
                    AgentStatus(agent.get("status", AgentStatus.DRAFT)).value,
                    json.dumps(agent.get("tools", [])),
                    now,
                    agent_id,
                ),
            )
            await self.conn.commit()
        except Exception as e:
            raise QueryError(f"Failed to replace agent: {e}") from e

        if cursor.rowcount == 0:
            raise RecordNotFoundError(f"Agent '{agent_id}' not found")

        record = await self.get_agent(agent_id)
        assert record is not None
        return record

    async def delete_agent_by_name(self, name: str) -> None:
        """Delete agent and its dependent history and tasks"""
        assert self.conn is not None, "Adapter not connected"
        agent = await self.get_agent_by_name(name)
        if not agent:
            raise RecordNotFoundError(f"Agent '{name}' not found")

        try:
            await self.conn.execute("DELETE FROM tasks WHERE agent_id = ?", (agent.id,))
            await self.conn.execute(
                "DELETE FROM prompt_history WHERE agent_id = ?", (agent.id,)
            )
            await self.conn.execute("DELETE FROM agents WHERE id = ?", (agent.id,))
            await self.conn.commit()
        except Exception as e:
            raise QueryError(f"Failed to delete agent: {e}") from e

    # ============================================
    # PROMPT HISTORY
    # ============================================

    async def add_prompt_history(self, agent_id: str, prompt: str) -> PromptHistoryRecord:
        """Append a prompt snapshot as the next version"""
        assert self.conn is not None, "Adapter not connected"
        now = datetime.now(UTC).isoformat()
        try:
            cursor = await self.conn.execute(
                "SELECT MAX(version) FROM prompt_history WHERE agent_id = ?",
                (agent_id,),
            )
            row = await cursor.fetchone()
            version = (row[0] or 0) + 1

            record_id = str(uuid.uuid4())
            await self.conn.execute(
                """
                INSERT INTO prompt_history (id, agent_id, version, prompt, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (record_id, agent_id, version, prompt, now),
            )
            await self.conn.commit()
        except Exception as e:
            raise QueryError(f"Failed to add prompt history: {e}") from e

        return PromptHistoryRecord(
            id=record_id,
            agent_id=agent_id,
            version=version,
            prompt=prompt,
            created_at=datetime.fromisoformat(now),
        )

    async def list_prompt_history(self, agent_id: str) -> list[PromptHistoryRecord]:
        """Prompt history, newest version first"""
        assert self.conn is not None, "Adapter not connected"
        try:
            cursor = await self.conn.execute(
                """
                SELECT * FROM prompt_history
                WHERE agent_id = ?
                ORDER BY version DESC
                """,
                (agent_id,),
            )
            rows = await cursor.fetchall()
            return [
                PromptHistoryRecord(
                    id=row["id"],
                    agent_id=row["agent_id"],
                    version=row["version"],
                    prompt=row["prompt"],
                    created_at=datetime.fromisoformat(row["created_at"]),
                )
                for row in rows
            ]
        except Exception as e:
            raise QueryError(f"Failed to list prompt history: {e}") from e

    # ============================================
    # TASKS
    # ============================================

    async def insert_task(
        self, agent_id: str, input: dict[str, Any] | None = None, status: str = "PENDING"
    ) -> TaskRecord:
        """Record a task for an agent"""
        assert self.conn is not None, "Adapter not connected"
        task_id = str(uuid.uuid4())
        now = datetime.now(UTC).isoformat()
        try:
            await self.conn.execute(
                """
                INSERT INTO tasks (id, agent_id, status, input, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (task_id, agent_id, status, json.dumps(input) if input else None, now),
            )
            await self.conn.commit()
        except Exception as e:
            raise QueryError(f"Failed to insert task: {e}") from e

        return TaskRecord(
            id=task_id,
            agent_id=agent_id,
            status=status,
            input=input,
            created_at=datetime.fromisoformat(now),
        )

    async def list_tasks(self, agent_id: str) -> list[TaskRecord]:
        """Tasks for an agent, newest first"""
        assert self.conn is not None, "Adapter not connected"
        try:
            cursor = await self.conn.execute(
                """
                SELECT * FROM tasks
                WHERE agent_id = ?
                ORDER BY created_at DESC, rowid DESC
                """,
                (agent_id,),
            )
            rows = await cursor.fetchall()
            return [
                TaskRecord(
                    id=row["id"],
                    agent_id=row["agent_id"],
                    status=row["status"],
                    input=json.loads(row["input"]) if row["input"] else None,
                    created_at=datetime.fromisoformat(row["created_at"]),
                )
                for row in rows
            ]
        except Exception as e:
            raise QueryError(f"Failed to list tasks: {e}") from e
