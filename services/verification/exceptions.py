"""
Verification-specific exceptions.

These exceptions carry the messages reported next to a failed check.
"""


class VerificationError(Exception):
    """Base exception for verification errors."""

    pass


class AssertionFailure(VerificationError):
    """Raised when observed platform state does not match expectations."""

    pass


class CheckTimeoutError(VerificationError):
    """Raised when a check's action exceeds its own timeout."""

    def __init__(self, name: str, timeout: float):
        self.name = name
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout:g}s")


class ConvergenceTimeout(VerificationError):
    """Raised when a strict poll exhausts its attempts without a match."""

    def __init__(self, message: str, attempts: int, elapsed_s: float):
        self.attempts = attempts
        self.elapsed_s = elapsed_s
        super().__init__(
            f"{message} (no match after {attempts} attempts, {elapsed_s:.1f}s)"
        )
