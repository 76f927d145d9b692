"""Console entry points for the suites."""
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable


def _run(main: Callable[[], Awaitable[int]]) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(asyncio.run(main()))


def regression() -> None:
    from suites.regression import main

    _run(main)


def acc_sync() -> None:
    from suites.acc_sync import main

    _run(main)


def demo_autopilot() -> None:
    from suites.demo_autopilot import main

    _run(main)
