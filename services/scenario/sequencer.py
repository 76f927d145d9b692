"""
Scenario sequencer.

Replays a narrative sequence of webhook events with realistic timing,
for live observation rather than assertion.
"""
import asyncio
import logging
import sys

import aiohttp

from .schemas import DispatchResult, TimedEvent

logger = logging.getLogger(__name__)


class ScenarioSequencer:
    """Fires each event once at its own offset; no retries, no assertions."""

    def __init__(self, url: str, events: list[TimedEvent], timeout: float = 10.0):
        """
        Initialize sequencer.

        Args:
            url: Webhook endpoint every event is posted to
            events: Events to dispatch; offsets are absolute from ``run()``
            timeout: Per-request timeout in seconds
        """
        self.url = url
        self.events = events
        self.timeout = timeout

    async def run(self) -> list[DispatchResult]:
        """
        Schedule every event at once and wait for all of them.

        An event at 4000ms does not wait for the one at 2000ms; response
        lines may appear out of order when latency varies.

        Returns:
            Dispatch results in declaration order
        """
        async with aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        ) as session:
            tasks = [
                asyncio.create_task(self._fire(session, event), name=f"event-{event.name}")
                for event in self.events
            ]
            return list(await asyncio.gather(*tasks))

    async def _fire(
        self, session: aiohttp.ClientSession, event: TimedEvent
    ) -> DispatchResult:
        await asyncio.sleep(event.delay_ms / 1000)
        print(event.description)

        try:
            async with session.post(
                self.url, json=event.payload.model_dump(mode="json")
            ) as response:
                body = await response.text(errors="replace")
                status = response.status
        except asyncio.TimeoutError:
            error = f"Timeout after {self.timeout:g} seconds"
            print(f"[{event.name}] Request Error: {error}", file=sys.stderr)
            logger.error(f"Dispatch {event.name} timed out")
            return DispatchResult(name=event.name, error=error)
        except Exception as e:
            print(f"[{event.name}] Request Error: {e}", file=sys.stderr)
            logger.error(f"Dispatch {event.name} failed: {e}")
            return DispatchResult(name=event.name, error=str(e))

        print(f"[{event.name}] Status: {status} | Response: {body}")
        return DispatchResult(name=event.name, status_code=status, body=body)
