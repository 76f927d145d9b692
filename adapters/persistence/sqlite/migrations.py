"""
Migration logic for SQLite adapter.

Mirrors the shape of the platform's agent, prompt-history and task tables
so local stacks and tests can stand in for the production database.
"""
import logging
from datetime import UTC, datetime

import aiosqlite

logger = logging.getLogger(__name__)


async def run_migrations(conn: aiosqlite.Connection) -> None:
    """Run all migrations"""
    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version INTEGER PRIMARY KEY,
            applied_at TEXT NOT NULL
        )
    """
    )

    cursor = await conn.execute("SELECT MAX(version) as version FROM schema_migrations")
    row = await cursor.fetchone()
    current_version = row[0] if row[0] else 0

    migrations = [
        (1, create_agent_table),
        (2, create_prompt_history_table),
        (3, create_task_table),
    ]

    for version, migration_func in migrations:
        if version > current_version:
            await migration_func(conn)
            await conn.execute(
                "INSERT INTO schema_migrations (version, applied_at) VALUES (?, ?)",
                (version, datetime.now(UTC).isoformat()),
            )
            await conn.commit()
            logger.debug(f"Applied migration v{version}: {migration_func.__name__}")


async def create_agent_table(conn: aiosqlite.Connection):
    """Migration 1: Agent definitions"""
    await conn.execute(
        """
        CREATE TABLE agents (
            id TEXT PRIMARY KEY,
            name TEXT UNIQUE NOT NULL,
            role TEXT NOT NULL,
            goal TEXT NOT NULL,
            system_prompt TEXT NOT NULL,
            workspace TEXT,
            knowledge_base_id TEXT,
            status TEXT NOT NULL,
            tools TEXT NOT NULL,          -- JSON array
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """
    )
    await conn.execute("CREATE INDEX idx_agents_role ON agents(role)")
    await conn.execute("CREATE INDEX idx_agents_status ON agents(status)")


async def create_prompt_history_table(conn: aiosqlite.Connection):
    """Migration 2: Prompt history"""
    await conn.execute(
        """
        CREATE TABLE prompt_history (
            id TEXT PRIMARY KEY,
            agent_id TEXT NOT NULL REFERENCES agents(id),
            version INTEGER NOT NULL,
            prompt TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
    """
    )
    await conn.execute(
        "CREATE INDEX idx_prompt_history_agent ON prompt_history(agent_id, version)"
    )


async def create_task_table(conn: aiosqlite.Connection):
    """Migration 3: Orchestrator tasks"""
    await conn.execute(
        """
        CREATE TABLE tasks (
            id TEXT PRIMARY KEY,
            agent_id TEXT NOT NULL REFERENCES agents(id),
            status TEXT,
            input TEXT,                   -- JSON object
            created_at TEXT NOT NULL
        )
    """
    )
    await conn.execute("CREATE INDEX idx_tasks_agent ON tasks(agent_id, created_at)")
