"""PostgreSQL ground-truth adapter implementation."""

import json
import logging
import os
import time
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from ..base import BaseGroundTruthAdapter
from ..exceptions import (
    ConnectionError as PersistenceConnectionError,
)
from ..exceptions import (
    QueryError,
    RecordNotFoundError,
)
from ..schemas import AgentRecord, AgentStatus, PromptHistoryRecord, TaskRecord

logger = logging.getLogger(__name__)

# Table and column names follow the Factory's ORM defaults (PascalCase
# models, camelCase fields), so identifiers must be quoted.
_AGENT_COLUMNS = """
    id, name, role, goal, "systemPrompt", workspace, "knowledgeBaseId",
    status, tools, "createdAt", "updatedAt"
"""


def split_dsn(dsn: str) -> tuple[str, dict[str, str]]:
    """Move a Prisma-style ``schema`` query parameter into server settings.

    asyncpg forwards unknown query keys as server settings, and PostgreSQL
    rejects ``schema`` as an unrecognized parameter.

    Returns:
        The DSN without ``schema`` and the matching ``search_path`` setting
    """
    parts = urlsplit(dsn)
    query = parse_qsl(parts.query, keep_blank_values=True)
    schema = next((value for key, value in query if key == "schema"), None)
    if schema is None:
        return dsn, {}

    kept = urlencode([(key, value) for key, value in query if key != "schema"])
    return urlunsplit(parts._replace(query=kept)), {"search_path": schema}


class PostgresGroundTruthAdapter(BaseGroundTruthAdapter):
    """PostgreSQL adapter over the platform database."""

    def __init__(self, config: dict[str, Any]):
        """Initialize PostgreSQL adapter.

        Args:
            config: Loaded adapter config with a ``database`` section
        """
        super().__init__(config)
        self.pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        """Establish connection pool to PostgreSQL."""
        db = self.config.get("database", {})
        dsn = os.getenv("DATABASE_URL") or db.get("dsn")
        server_settings = {"search_path": db["schema"]} if db.get("schema") else {}
        try:
            if dsn:
                dsn, dsn_settings = split_dsn(dsn)
                server_settings.update(dsn_settings)
                self.pool = await asyncpg.create_pool(
                    dsn=dsn,
                    min_size=db.get("pool_min_size", 1),
                    max_size=db.get("pool_max_size", 2),
                    server_settings=server_settings or None,
                )
            else:
                self.pool = await asyncpg.create_pool(
                    host=db["host"],
                    port=db["port"],
                    user=db["user"],
                    password=db["password"],
                    database=db["database"],
                    min_size=db.get("pool_min_size", 1),
                    max_size=db.get("pool_max_size", 2),
                    server_settings=server_settings or None,
                )
        except Exception as e:
            raise PersistenceConnectionError(
                f"Failed to connect to PostgreSQL: {e}"
            ) from e
        logger.info("Connected to platform database")

    async def disconnect(self) -> None:
        """Close connection pool to PostgreSQL."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Disconnected from platform database")

    async def health_check(self) -> dict:
        """Check PostgreSQL connectivity and latency."""
        if not self.pool:
            return {"status": "unhealthy", "error": "Connection pool not initialized"}

        try:
            start = time.time()
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            latency = (time.time() - start) * 1000
            return {"status": "healthy", "latency_ms": latency}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}

    # ============================================
    # AGENTS
    # ============================================

    @staticmethod
    def _agent_from_row(row: asyncpg.Record) -> AgentRecord:
        tools = row["tools"]
        if isinstance(tools, str):
            tools = json.loads(tools)

        return AgentRecord(
            id=str(row["id"]),
            name=row["name"],
            role=row["role"],
            goal=row["goal"] or "",
            system_prompt=row["systemPrompt"] or "",
            workspace=row["workspace"],
            knowledge_base_id=row["knowledgeBaseId"],
            status=AgentStatus(row["status"]),
            tools=list(tools or []),
            created_at=row["createdAt"],
            updated_at=row["updatedAt"],
        )

    async def get_agent(self, agent_id: str) -> AgentRecord | None:
        """Get agent by ID"""
        assert self.pool is not None, "Adapter not connected"
        try:
            row = await self.pool.fetchrow(
                f'SELECT {_AGENT_COLUMNS} FROM "Agent" WHERE id = $1', agent_id
            )
        except Exception as e:
            raise QueryError(f"Failed to get agent: {e}") from e
        return self._agent_from_row(row) if row else None

    async def get_agent_by_name(self, name: str) -> AgentRecord | None:
        """Get agent by name"""
        assert self.pool is not None, "Adapter not connected"
        try:
            row = await self.pool.fetchrow(
                f'SELECT {_AGENT_COLUMNS} FROM "Agent" WHERE name = $1', name
            )
        except Exception as e:
            raise QueryError(f"Failed to get agent by name: {e}") from e
        return self._agent_from_row(row) if row else None

    async def delete_agent_by_name(self, name: str) -> None:
        """Delete agent and its dependent rows in one transaction"""
        assert self.pool is not None, "Adapter not connected"
        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    agent_id = await conn.fetchval(
                        'SELECT id FROM "Agent" WHERE name = $1', name
                    )
                    if agent_id is None:
                        raise RecordNotFoundError(f"Agent '{name}' not found")

                    await conn.execute('DELETE FROM "Task" WHERE "agentId" = $1', agent_id)
                    await conn.execute(
                        'DELETE FROM "PromptHistory" WHERE "agentId" = $1', agent_id
                    )
                    await conn.execute('DELETE FROM "Agent" WHERE id = $1', agent_id)
        except RecordNotFoundError:
            raise
        except Exception as e:
            raise QueryError(f"Failed to delete agent: {e}") from e

    # ============================================
    # PROMPT HISTORY
    # ============================================

    async def list_prompt_history(self, agent_id: str) -> list[PromptHistoryRecord]:
        """Prompt history, newest version first"""
        assert self.pool is not None, "Adapter not connected"
        try:
            rows = await self.pool.fetch(
                """
                SELECT id, "agentId", version, prompt, "createdAt"
                FROM "PromptHistory"
                WHERE "agentId" = $1
                ORDER BY version DESC
                """,
                agent_id,
            )
        except Exception as e:
            raise QueryError(f"Failed to list prompt history: {e}") from e

        return [
            PromptHistoryRecord(
                id=str(row["id"]),
                agent_id=str(row["agentId"]),
                version=row["version"],
                prompt=row["prompt"],
                created_at=row["createdAt"],
            )
            for row in rows
        ]

    # ============================================
    # TASKS
    # ============================================

    async def list_tasks(self, agent_id: str) -> list[TaskRecord]:
        """Tasks for an agent, newest first"""
        assert self.pool is not None, "Adapter not connected"
        try:
            rows = await self.pool.fetch(
                """
                SELECT id, "agentId", status, "createdAt"
                FROM "Task"
                WHERE "agentId" = $1
                ORDER BY "createdAt" DESC
                """,
                agent_id,
            )
        except Exception as e:
            raise QueryError(f"Failed to list tasks: {e}") from e

        return [
            TaskRecord(
                id=str(row["id"]),
                agent_id=str(row["agentId"]),
                status=row["status"],
                created_at=row["createdAt"],
            )
            for row in rows
        ]
