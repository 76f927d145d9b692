"""
Pytest fixtures for suite tests.

A FastAPI stand-in for the Factory, Ingress and ACC mirror runs over the
SQLite ground-truth adapter and is mounted into the platform client's
transport, so suites exercise their real HTTP and DB paths in-process.
"""
from dataclasses import dataclass
from typing import Any

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.persistence.schemas import AgentRecord, AgentStatus
from adapters.persistence.sqlite import SQLiteGroundTruthAdapter
from adapters.platform import PlatformClient
from services.bootstrap.settings import HarnessSettings
from services.verification import PollPolicy


@dataclass
class PlatformBehavior:
    """Switches for injecting platform faults"""

    draft_agents_receive_tasks: bool = False
    export_includes_drafts: bool = False
    record_prompt_history: bool = True
    mirror_lag_reads: int = 0
    mirror_never_syncs: bool = False
    mirror_bare_list: bool = False


def _from_wire(body: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": body["name"],
        "role": body["role"],
        "goal": body.get("goal", ""),
        "system_prompt": body.get("systemPrompt", ""),
        "workspace": body.get("workspace"),
        "knowledge_base_id": body.get("knowledgeBaseId"),
        "status": body.get("status", "DRAFT"),
        "tools": body.get("tools", []),
    }


def _to_wire(agent: AgentRecord) -> dict[str, Any]:
    return {
        "id": agent.id,
        "name": agent.name,
        "role": agent.role,
        "workspace": agent.workspace,
        "status": agent.status.value,
    }


def create_platform_app(
    store: SQLiteGroundTruthAdapter, behavior: PlatformBehavior
) -> FastAPI:
    """Factory, Ingress and ACC endpoints over one store"""
    app = FastAPI(title="Fake agent platform")
    mirror_reads = {"count": 0}

    @app.post("/api/agents")
    async def create_agent(request: Request):
        body = await request.json()
        if await store.get_agent_by_name(body["name"]):
            return JSONResponse({"error": "Agent name already exists"}, status_code=409)
        agent = await store.insert_agent(_from_wire(body))
        return JSONResponse(_to_wire(agent), status_code=201)

    @app.put("/api/agents/{agent_id}")
    async def update_agent(agent_id: str, request: Request):
        body = await request.json()
        previous = await store.get_agent(agent_id)
        if not previous:
            return JSONResponse({"error": "Agent not found"}, status_code=404)
        if (
            behavior.record_prompt_history
            and previous.system_prompt != body.get("systemPrompt")
        ):
            await store.add_prompt_history(agent_id, previous.system_prompt)
        agent = await store.replace_agent(agent_id, _from_wire(body))
        return _to_wire(agent)

    @app.post("/webhook")
    async def webhook(request: Request):
        event = await request.json()
        for agent in await store.list_agents():
            if agent.role != event["source"]:
                continue
            if agent.status == AgentStatus.LIVE or behavior.draft_agents_receive_tasks:
                await store.insert_task(agent.id, {"payload": event["payload"]})
        return JSONResponse({"status": "queued"}, status_code=202)

    @app.get("/.well-known/agent.json")
    async def export():
        status = None if behavior.export_includes_drafts else AgentStatus.LIVE
        return {"agents": [_to_wire(a) for a in await store.list_agents(status)]}

    @app.get("/api/agents")
    async def mirror():
        mirror_reads["count"] += 1
        agents = []
        if not behavior.mirror_never_syncs and mirror_reads["count"] > behavior.mirror_lag_reads:
            agents = [_to_wire(a) for a in await store.list_agents(AgentStatus.LIVE)]
        return agents if behavior.mirror_bare_list else {"agents": agents}

    return app


@pytest.fixture
async def ground_truth(tmp_path):
    """File-backed SQLite store shared by the fake platform and the suite"""
    adapter = SQLiteGroundTruthAdapter(
        {
            "adapter": {"type": "sqlite", "version": "1.0.0"},
            "database": {"path": str(tmp_path / "platform.db")},
        }
    )
    await adapter.connect()
    yield adapter
    await adapter.disconnect()


@pytest.fixture
def behavior():
    return PlatformBehavior()


@pytest.fixture
def settings():
    return HarnessSettings(
        factory_url="http://factory",
        ingress_url="http://ingress/webhook",
        acc_url="http://acc",
        webhook_wait_s=0.01,
        task_poll=PollPolicy(interval_s=0.01, max_attempts=5),
        mirror_poll=PollPolicy(interval_s=0.01, max_attempts=5),
    )


@pytest.fixture
async def platform(ground_truth, behavior, settings):
    """Platform client wired to the fake platform app"""
    app = create_platform_app(ground_truth, behavior)
    client = PlatformClient(
        factory_url=settings.factory_url,
        ingress_url=settings.ingress_url,
        acc_url=settings.acc_url,
        transport=httpx.ASGITransport(app=app),
    )
    yield client
    await client.close()
