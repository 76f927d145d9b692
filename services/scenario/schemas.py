"""
Schemas for timed demo scenarios.
"""
from pydantic import BaseModel, Field

from adapters.platform.schemas import WebhookEvent


class TimedEvent(BaseModel):
    """One webhook injection, scheduled at an absolute offset from start"""

    name: str = Field(..., description="Short tag used in dispatch log lines")
    delay_ms: int = Field(..., ge=0, description="Offset from t=0 in milliseconds")
    payload: WebhookEvent
    description: str = Field(..., description="Line printed at dispatch time")


class DispatchResult(BaseModel):
    """What came back for one dispatched event"""

    name: str
    status_code: int | None = None
    body: str | None = None
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.error is None
