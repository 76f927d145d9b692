"""
Transient records produced while running checks and polls.
"""
from typing import Any

from pydantic import BaseModel, Field, model_validator


class CheckResult(BaseModel):
    """Outcome of one named check"""

    name: str
    passed: bool
    error: str | None = None
    duration_s: float = 0.0


class PollPolicy(BaseModel):
    """Interval and attempt budget for a bounded-retry poll"""

    interval_s: float = Field(..., gt=0, description="Sleep between attempts")
    max_attempts: int = Field(..., gt=0, description="Queries before giving up")

    @property
    def window_s(self) -> float:
        """Worst-case observation window"""
        return self.interval_s * self.max_attempts


class PollAttempt(BaseModel):
    """One query made by a polling loop"""

    value: Any = None
    attempt_index: int
    elapsed_s: float


class PollResult(BaseModel):
    """Outcome of a polling loop; exhaustion is not an error"""

    satisfied: bool
    attempts: int
    elapsed_s: float
    last_value: Any = None

    @model_validator(mode="after")
    def _attempts_made(self) -> "PollResult":
        if self.attempts < 1:
            raise ValueError("a poll makes at least one attempt")
        return self
