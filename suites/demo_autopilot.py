#!/usr/bin/env python3
"""
Demo autopilot.

Replays a short incident narrative against the ingress webhook:
T=0s a code push, T=2s a critical Slack alert, T=4s a suspicious payload.
Nothing is asserted; responses are printed as they arrive.

Run with: python -m suites.demo_autopilot
"""
import logging

from adapters.platform import WebhookEvent
from services.bootstrap.settings import HarnessSettings
from services.scenario import ScenarioSequencer, TimedEvent

logger = logging.getLogger(__name__)

DEMO_EVENTS = [
    TimedEvent(
        name="TRIGGER",
        delay_ms=0,
        payload=WebhookEvent(
            source="github",
            payload={"repo": "egap-core", "sender": "aditya", "event": "push"},
        ),
        description="🚀 [DEMO] Developer pushes code to GitHub...",
    ),
    TimedEvent(
        name="CHAOS",
        delay_ms=2000,
        payload=WebhookEvent(
            source="slack",
            payload={"channel": "#ops", "text": "DB Connection Failed"},
        ),
        description="🚨 [DEMO] Critical Alert received from Slack...",
    ),
    TimedEvent(
        name="SECURITY",
        delay_ms=4000,
        payload=WebhookEvent(source="unknown", payload="DROP TABLE"),
        description="🛡️ [DEMO] Suspicious activity detected...",
    ),
]


async def main() -> int:
    """Dispatch the demo events; transport failures never change the exit status."""
    settings = HarnessSettings.from_env()
    sequencer = ScenarioSequencer(
        settings.demo_ingress_url, DEMO_EVENTS, timeout=settings.http_timeout
    )
    results = await sequencer.run()

    delivered = sum(1 for result in results if result.delivered)
    logger.info(f"Demo finished: {delivered}/{len(results)} events delivered")
    return 0


if __name__ == "__main__":
    from suites.cli import demo_autopilot

    demo_autopilot()
