#!/usr/bin/env python3
"""
ACC sync verification.

Creates one LIVE and one DRAFT agent, then checks that:
- the Factory export (source of truth) lists the LIVE agent in its
  workspace and omits the DRAFT agent entirely
- the ACC mirror converges to the same filtered view within its sync window

Mirror non-convergence is reported as a warning unless
MIRROR_SYNC_STRICT is set, since the mirror's own sync cycle may be
longer than the polling window.

Run with: python -m suites.acc_sync
"""
import logging
import time

from adapters.persistence import AgentStatus
from adapters.platform import AgentDefinition, AgentListing, PlatformClient
from services.bootstrap.settings import HarnessSettings
from services.verification import (
    AssertionFailure,
    CheckRunner,
    assert_remains_false,
    poll_until,
    report_convergence,
)

logger = logging.getLogger(__name__)

LIVE_WORKSPACE = "IT"
DRAFT_WORKSPACE = "HR"


def run_suffix() -> str:
    """Last four digits of the epoch milliseconds, to keep names unique per run."""
    return str(int(time.time() * 1000))[-4:]


class AccSyncSuite:
    """Export filtering and mirror convergence for published agents."""

    def __init__(
        self,
        settings: HarnessSettings,
        platform: PlatformClient,
        runner: CheckRunner | None = None,
        suffix: str | None = None,
    ):
        self.settings = settings
        self.platform = platform
        self.runner = runner or CheckRunner()
        self.suffix = suffix or run_suffix()

        self.live_agent = AgentDefinition(
            name=f"ACC-Test-Live-Bot-{self.suffix}",
            role="IT Support",
            goal="Assist with tickets",
            system_prompt="You are an IT bot.",
            workspace=LIVE_WORKSPACE,
            status=AgentStatus.LIVE,
            tools=[],
        )
        self.draft_agent = AgentDefinition(
            name=f"ACC-Test-Draft-Bot-{self.suffix}",
            role="HR Assistant",
            goal="Drafting policies",
            system_prompt="You are an HR bot.",
            workspace=DRAFT_WORKSPACE,
            status=AgentStatus.DRAFT,
            tools=[],
        )

    async def run(self) -> bool:
        """
        Run the suite.

        Returns:
            Whether the mirror converged within the polling window
        """
        self.runner.banner("Starting ACC Sync Verification...")

        await self.runner.run_check("Create LIVE and DRAFT agents", self.create_agents)
        await self.runner.run_check(
            "Factory Export filters drafts", self.check_factory_export
        )

        if self.settings.mirror_sync_strict:
            await self.runner.run_check("ACC Mirror converges", self.check_mirror)
            return True

        print("🔍 Checking ACC API (Mirror)...")
        return await self.check_mirror()

    async def create_agents(self) -> bool:
        print(
            f"\n📝 Creating LIVE agent: {self.live_agent.name} "
            f"in {LIVE_WORKSPACE} workspace..."
        )
        await self.platform.create_agent(self.live_agent)

        print(
            f"📝 Creating DRAFT agent: {self.draft_agent.name} "
            f"in {DRAFT_WORKSPACE} workspace..."
        )
        await self.platform.create_agent(self.draft_agent)
        return True

    async def check_factory_export(self) -> bool:
        export = await assert_remains_false(
            self.platform.get_export,
            lambda listing: self.draft_agent.name in listing.names(),
            "Factory Export: DRAFT agent FOUND! Filtering failed.",
        )

        # Entries without a status are taken as published.
        unpublished = [
            agent.name
            for agent in export.agents
            if agent.status not in (None, AgentStatus.LIVE.value)
        ]
        if unpublished:
            raise AssertionFailure(
                f"Factory Export: non-LIVE agent(s) listed: {', '.join(unpublished)}"
            )

        live = export.find(self.live_agent.name)
        if not live:
            raise AssertionFailure("Factory Export: LIVE agent MISSING!")
        if live.workspace != LIVE_WORKSPACE:
            raise AssertionFailure(
                f"Factory Export: Workspace mismatch. "
                f"Expected {LIVE_WORKSPACE}, got {live.workspace}"
            )
        return True

    def mirror_converged(self, listing: AgentListing) -> bool:
        """LIVE agent present in its workspace and DRAFT agent absent."""
        live = listing.find(self.live_agent.name)
        return (
            live is not None
            and live.workspace == LIVE_WORKSPACE
            and listing.find(self.draft_agent.name) is None
        )

    async def check_mirror(self) -> bool:
        policy = self.settings.mirror_poll
        logger.info(
            f"Polling ACC mirror every {policy.interval_s:g}s "
            f"(up to {policy.max_attempts} attempts)"
        )
        result = await poll_until(
            self.platform.get_mirror, self.mirror_converged, policy
        )
        return report_convergence(
            result,
            "ACC Sync Verified! Live agent found in IT, Draft filtered out.",
            "ACC Sync not yet reflected (Poll interval is 60s). "
            "Please restart ACC service to force immediate sync.",
            strict=self.settings.mirror_sync_strict,
        )


async def main() -> int:
    """Run the ACC sync suite; returns the process exit status."""
    settings = HarnessSettings.from_env()

    try:
        async with PlatformClient(
            factory_url=settings.factory_url,
            ingress_url=settings.ingress_url,
            acc_url=settings.acc_url,
            timeout=settings.http_timeout,
        ) as platform:
            await AccSyncSuite(settings, platform).run()
        return 0
    except Exception as e:
        logger.error(f"ACC sync verification aborted: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    from suites.cli import acc_sync

    acc_sync()
