"""
Pytest fixtures for ground-truth adapter tests.
"""
import pytest
import yaml  # type: ignore[import-untyped]

from adapters.persistence.sqlite import SQLiteGroundTruthAdapter


@pytest.fixture
def sqlite_config_path(tmp_path):
    """Write a file-based SQLite config and return its path"""
    config = {
        "adapter": {"type": "sqlite", "version": "1.0.0"},
        "database": {
            "path": str(tmp_path / "platform.db"),
            "journal_mode": "WAL",
            "synchronous": "NORMAL",
        },
    }
    config_path = tmp_path / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)
    return str(config_path)


@pytest.fixture
async def sqlite_adapter():
    """Create test adapter with in-memory DB"""
    adapter = SQLiteGroundTruthAdapter(
        {
            "adapter": {"type": "sqlite", "version": "1.0.0"},
            "database": {"path": ":memory:"},
        }
    )
    await adapter.connect()

    yield adapter

    await adapter.disconnect()


@pytest.fixture
def sample_agent():
    """Sample agent definition as the fake Factory would store it"""
    return {
        "name": "Test-Bot-Beta",
        "role": "qa-bot",
        "goal": "Test regression",
        "system_prompt": "You are a test bot v1",
        "workspace": "QA_Team",
        "knowledge_base_id": "kb-test-001",
        "status": "DRAFT",
        "tools": [],
    }
