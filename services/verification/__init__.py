"""Check harness and eventual-consistency polling."""

from .exceptions import (
    AssertionFailure,
    CheckTimeoutError,
    ConvergenceTimeout,
    VerificationError,
)
from .poller import (
    assert_remains_false,
    poll_until,
    report_convergence,
    wait_then_observe,
)
from .runner import CheckRunner, check_equal, invoke_action
from .schemas import CheckResult, PollAttempt, PollPolicy, PollResult

__all__ = [
    "CheckRunner",
    "check_equal",
    "invoke_action",
    "wait_then_observe",
    "poll_until",
    "assert_remains_false",
    "report_convergence",
    "CheckResult",
    "PollPolicy",
    "PollAttempt",
    "PollResult",
    "VerificationError",
    "AssertionFailure",
    "CheckTimeoutError",
    "ConvergenceTimeout",
]
