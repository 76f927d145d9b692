"""
Eventual-consistency polling.

Tolerates propagation delay between a write and its observable effect.
Two styles are offered: a fixed wait followed by one observation, and a
bounded retry loop that stops on the first matching observation.
"""
import asyncio
import logging
import sys
import time
from collections.abc import Callable
from typing import Any

from .exceptions import AssertionFailure, ConvergenceTimeout
from .runner import invoke_action
from .schemas import PollAttempt, PollPolicy, PollResult

logger = logging.getLogger(__name__)

Query = Callable[[], Any]
Predicate = Callable[[Any], bool]


async def wait_then_observe(delay_s: float, observe: Query, announce: bool = True) -> Any:
    """
    Sleep a fixed duration, then observe exactly once.

    Only suitable when the processing latency of the system under test is
    known and bounded.
    """
    if announce:
        print(f"   (Waiting {delay_s:g}s for async processing...)")
    await asyncio.sleep(delay_s)
    return await invoke_action(observe)


async def poll_until(
    query: Query,
    predicate: Predicate,
    policy: PollPolicy,
    on_attempt: Callable[[PollAttempt], None] | None = None,
    progress: bool = True,
) -> PollResult:
    """
    Query repeatedly until ``predicate`` holds or attempts run out.

    The predicate must be a pure read of the query result. Exhausting the
    attempts is not an error; callers decide how to report it. Exceptions
    raised by ``query`` propagate.

    Args:
        query: Sync or async read of the eventually consistent endpoint
        predicate: Test applied to each query result
        policy: Interval and attempt budget
        on_attempt: Optional observer called with every attempt
        progress: Write a dot to stdout after each unmatched attempt

    Returns:
        Poll result with the last observed value
    """
    start = time.monotonic()
    value: Any = None

    for index in range(policy.max_attempts):
        value = await invoke_action(query)
        attempt = PollAttempt(
            value=value, attempt_index=index, elapsed_s=time.monotonic() - start
        )
        if on_attempt:
            on_attempt(attempt)

        if predicate(value):
            logger.debug(f"Predicate matched on attempt {index + 1}")
            return PollResult(
                satisfied=True,
                attempts=index + 1,
                elapsed_s=time.monotonic() - start,
                last_value=value,
            )

        if progress:
            sys.stdout.write(".")
            sys.stdout.flush()

        if index + 1 < policy.max_attempts:
            await asyncio.sleep(policy.interval_s)

    elapsed = time.monotonic() - start
    logger.debug(
        f"Predicate not matched after {policy.max_attempts} attempts ({elapsed:.1f}s)"
    )
    return PollResult(
        satisfied=False,
        attempts=policy.max_attempts,
        elapsed_s=elapsed,
        last_value=value,
    )


async def assert_remains_false(query: Query, predicate: Predicate, message: str) -> Any:
    """
    Negative propagation: one observation, failing if ``predicate`` holds.

    More attempts cannot prove an absence more strongly, so this never
    retries.
    """
    value = await invoke_action(query)
    if predicate(value):
        raise AssertionFailure(message)
    return value


def report_convergence(
    result: PollResult,
    success_message: str,
    warning_message: str,
    strict: bool = False,
) -> bool:
    """
    Report a poll outcome, keeping a soft timeout distinct from a failure.

    Returns:
        True if the poll converged, False on a soft timeout

    Raises:
        ConvergenceTimeout: If the poll did not converge and ``strict`` is set
    """
    if result.satisfied:
        print(f"\n✅ {success_message}")
        return True

    if strict:
        raise ConvergenceTimeout(warning_message, result.attempts, result.elapsed_s)

    print(f"\n⚠️  {warning_message}", file=sys.stderr)
    logger.warning(
        f"Not converged after {result.attempts} attempts ({result.elapsed_s:.1f}s)"
    )
    return False
