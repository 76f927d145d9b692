#!/usr/bin/env python3
"""
Final regression test for the agent lifecycle.

Drives the Factory and Ingress, then checks ground truth in the platform
database:
1. A DRAFT agent is persisted with its workspace and knowledge base
2. Updating the system prompt preserves the previous version in history
3. A DRAFT agent ignores webhooks (no task is created)
4. Once LIVE, the same webhook produces a task

Run with: python -m suites.regression
"""
import logging

from adapters.persistence import AgentStatus, BaseGroundTruthAdapter, create_adapter
from adapters.persistence.exceptions import ConnectionError as PersistenceConnectionError
from adapters.platform import AgentDefinition, PlatformClient, WebhookEvent
from services.bootstrap.settings import HarnessSettings
from services.verification import (
    AssertionFailure,
    CheckRunner,
    assert_remains_false,
    check_equal,
    poll_until,
    wait_then_observe,
)

logger = logging.getLogger(__name__)

AGENT_NAME = "Test-Bot-Beta"
AGENT_ROLE = "qa-bot"  # Unique role so webhooks target only this agent
WORKSPACE = "QA_Team"
KNOWLEDGE_BASE_ID = "kb-test-001"


def agent_definition(prompt_version: str, status: AgentStatus) -> AgentDefinition:
    """Full definition of the regression agent (PUT replaces everything)."""
    return AgentDefinition(
        name=AGENT_NAME,
        role=AGENT_ROLE,
        goal="Test regression",
        system_prompt=f"You are a test bot {prompt_version}",
        workspace=WORKSPACE,
        knowledge_base_id=KNOWLEDGE_BASE_ID,
        status=status,
        tools=[],
    )


class RegressionSuite:
    """Ordered lifecycle checks; each one builds on the state left by the last."""

    def __init__(
        self,
        settings: HarnessSettings,
        platform: PlatformClient,
        ground_truth: BaseGroundTruthAdapter,
        runner: CheckRunner | None = None,
    ):
        self.settings = settings
        self.platform = platform
        self.ground_truth = ground_truth
        self.runner = runner or CheckRunner()
        self.agent_id = ""

    async def run(self) -> None:
        self.runner.banner("Starting Final Regression Test")

        await self.runner.cleanup(
            lambda: self.ground_truth.delete_agent_by_name(AGENT_NAME),
            f"delete leftover agent {AGENT_NAME}",
        )

        await self.runner.run_check(
            "Create Draft Agent in QA_Team Workspace", self.check_create_draft
        )
        await self.runner.run_check(
            "Update System Prompt & Check Version History", self.check_version_history
        )
        await self.runner.run_check(
            "Safety: Draft Agents Ignore Webhooks", self.check_draft_ignores_webhooks
        )
        await self.runner.run_check(
            "Live: Publish Agent & Verify Processing", self.check_live_processes_webhooks
        )

        self.runner.summary()

    async def _tasks(self):
        return await self.ground_truth.list_tasks(self.agent_id)

    async def check_create_draft(self) -> bool:
        created = await self.platform.create_agent(
            agent_definition("v1", AgentStatus.DRAFT)
        )
        self.agent_id = created.id

        record = await self.ground_truth.get_agent(self.agent_id)
        if not record:
            raise AssertionFailure("Agent not found in DB")
        check_equal("Workspace", record.workspace, WORKSPACE)
        check_equal("Status", record.status.value, AgentStatus.DRAFT.value)
        check_equal("KB ID", record.knowledge_base_id, KNOWLEDGE_BASE_ID)
        return True

    async def check_version_history(self) -> bool:
        await self.platform.update_agent(
            self.agent_id, agent_definition("v2", AgentStatus.DRAFT)
        )

        history = await self.ground_truth.list_prompt_history(self.agent_id)
        if not history:
            raise AssertionFailure("No history entries found")
        if not any("v1" in entry.prompt for entry in history):
            raise AssertionFailure("Version 1 prompt not found in history")
        return True

    async def check_draft_ignores_webhooks(self) -> bool:
        await self.platform.send_webhook(
            WebhookEvent(source=AGENT_ROLE, payload={"message": "Hello Draft Agent"})
        )

        # Ingress hands off to the Orchestrator asynchronously.
        tasks = await wait_then_observe(
            self.settings.webhook_wait_s,
            lambda: assert_remains_false(
                self._tasks,
                lambda tasks: len(tasks) > 0,
                "Safety Failure: Orchestrator created task(s) for a DRAFT agent!",
            ),
        )
        logger.debug(f"Draft agent has {len(tasks)} task(s)")
        return True

    async def check_live_processes_webhooks(self) -> bool:
        await self.platform.update_agent(
            self.agent_id, agent_definition("v2", AgentStatus.LIVE)
        )
        await self.platform.send_webhook(
            WebhookEvent(source=AGENT_ROLE, payload={"message": "Hello Live Agent"})
        )

        policy = self.settings.task_poll
        print(f"   (Polling up to {policy.window_s:g}s for async processing...)")
        result = await poll_until(self._tasks, lambda tasks: len(tasks) > 0, policy)
        if not result.satisfied:
            raise AssertionFailure(
                "Live Failure: Orchestrator DID NOT create a task for a LIVE agent."
            )
        return True


async def main() -> int:
    """Run the regression suite; returns the process exit status."""
    settings = HarnessSettings.from_env()
    ground_truth = create_adapter(settings.persistence_config)

    try:
        async with PlatformClient(
            factory_url=settings.factory_url,
            ingress_url=settings.ingress_url,
            acc_url=settings.acc_url,
            timeout=settings.http_timeout,
        ) as platform:
            await ground_truth.connect()
            health = await ground_truth.health_check()
            if health["status"] != "healthy":
                raise PersistenceConnectionError(
                    f"Ground-truth store unhealthy: {health.get('error')}"
                )
            logger.info(f"Ground-truth store healthy: {health}")

            await RegressionSuite(settings, platform, ground_truth).run()
        return 0
    except Exception as e:
        logger.error(f"Regression run aborted: {e}", exc_info=True)
        return 1
    finally:
        await ground_truth.disconnect()


if __name__ == "__main__":
    from suites.cli import regression

    regression()
