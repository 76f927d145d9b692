"""
Sequential check runner.

Runs named checks one at a time against a live platform, prints a
pass/fail line per check, and terminates the process on the first
failure so later checks never run on invalidated state.
"""
import asyncio
import inspect
import logging
import sys
import time
from collections.abc import Awaitable, Callable
from typing import Any

from .exceptions import AssertionFailure, CheckTimeoutError
from .schemas import CheckResult

logger = logging.getLogger(__name__)

CheckAction = Callable[[], Awaitable[bool | None] | bool | None]


async def invoke_action(action: Callable[[], Any], timeout: float | None = None) -> Any:
    """Call a sync or async action, awaiting the result when needed."""
    outcome = action()
    if not inspect.isawaitable(outcome):
        return outcome
    if timeout is None:
        return await outcome
    return await asyncio.wait_for(outcome, timeout)


class CheckRunner:
    """Runs checks strictly in declaration order, aborting on first failure."""

    def __init__(self, exit_code: int = 1):
        """
        Initialize check runner.

        Args:
            exit_code: Process exit status used when a check fails
        """
        self.exit_code = exit_code
        self.results: list[CheckResult] = []

    def banner(self, title: str) -> None:
        print(f"🚀 {title}\n")

    async def cleanup(self, action: Callable[[], Any], description: str) -> None:
        """
        Best-effort removal of leftovers from an earlier run.

        Any failure is swallowed: the entity may legitimately not exist.
        """
        try:
            await invoke_action(action)
            logger.debug(f"Cleanup done: {description}")
        except Exception as e:
            logger.debug(f"Cleanup skipped ({description}): {e}")

    async def run_check(
        self, name: str, action: CheckAction, timeout: float | None = None
    ) -> CheckResult:
        """
        Run one named check.

        The name is printed before the action starts so it stays visible
        if the action hangs. A check passes when the action neither raises
        nor returns ``False``.

        Args:
            name: Human-readable check name
            action: Sync or async callable returning ``bool | None``
            timeout: Optional limit in seconds for an async action

        Returns:
            The passing check result

        Raises:
            SystemExit: On failure, after reporting it
        """
        print(f"⏳ Checking: {name}... ", end="", flush=True)
        start = time.monotonic()

        try:
            try:
                outcome = await invoke_action(action, timeout)
            except asyncio.TimeoutError as e:
                if timeout is None:
                    raise
                raise CheckTimeoutError(name, timeout) from e

            if outcome is False:
                raise AssertionFailure("Assertion failed")

        except Exception as e:
            self._fail(name, e, time.monotonic() - start)

        result = CheckResult(
            name=name, passed=True, duration_s=time.monotonic() - start
        )
        self.results.append(result)
        print("✅ PASS")
        logger.debug(f"Check passed: {name} ({result.duration_s:.2f}s)")
        return result

    def _fail(self, name: str, error: Exception, duration_s: float) -> None:
        result = CheckResult(
            name=name, passed=False, error=str(error), duration_s=duration_s
        )
        self.results.append(result)

        print("❌ FAIL")
        print(f"   Error: {error}", file=sys.stderr)
        logger.debug(f"Check failed: {name}", exc_info=error)

        # SystemExit still runs the caller's finally blocks.
        sys.exit(self.exit_code)

    def summary(self, message: str = "ALL REGRESSION TESTS PASSED!") -> None:
        print(f"\n🎉 {message}")


def check_equal(label: str, actual: Any, expected: Any) -> None:
    """Raise ``AssertionFailure`` unless ``actual == expected``."""
    if actual != expected:
        raise AssertionFailure(f"{label} mismatch: {actual}")
