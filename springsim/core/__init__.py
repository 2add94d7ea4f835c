"""Core: simulation session, history buffer, tick scheduling and configuration."""

from springsim.core.config import ParameterBounds, SessionConfig
from springsim.core.history import HistoryBuffer, HistorySample
from springsim.core.scheduler import AsyncioScheduler, ManualScheduler, TickScheduler
from springsim.core.session import Phase, SimulationSession, TickResult

__all__ = [
    "SessionConfig",
    "ParameterBounds",
    "HistoryBuffer",
    "HistorySample",
    "TickScheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    "Phase",
    "SimulationSession",
    "TickResult",
]
