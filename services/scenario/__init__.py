"""Timed event replay for live demonstrations."""

from .schemas import DispatchResult, TimedEvent
from .sequencer import ScenarioSequencer

__all__ = ["ScenarioSequencer", "TimedEvent", "DispatchResult"]
