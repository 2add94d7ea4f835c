"""
springsim: mass-spring-damper simulation engine with history playback.
"""

__version__ = "0.1.0"

from springsim.core.config import SessionConfig
from springsim.core.history import HistoryBuffer, HistorySample
from springsim.core.session import SimulationSession
from springsim.physics.params import SystemParameters, SystemState
from springsim.physics.presets import PresetCatalog

__all__ = [
    "__version__",
    "SimulationSession",
    "SessionConfig",
    "HistoryBuffer",
    "HistorySample",
    "SystemParameters",
    "SystemState",
    "PresetCatalog",
]
