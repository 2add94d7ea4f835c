"""Session configuration: timing, retention, defaults and optional parameter bounds."""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional, Tuple

from springsim.physics.forcing import forcing_from_dict
from springsim.physics.params import SystemParameters

Range = Tuple[float, float]


def _clamp(value: float, bounds: Range) -> float:
    return min(max(value, bounds[0]), bounds[1])


@dataclass(frozen=True)
class ParameterBounds:
    """Allowed ranges for mass, damping and stiffness (slider ranges of a UI)."""

    mass: Range = (0.1, 5.0)
    damping: Range = (0.1, 5.0)
    stiffness: Range = (10.0, 500.0)

    def clamp(self, params: SystemParameters) -> SystemParameters:
        """Parameters with m, c, k clamped into range (same object if already inside)."""
        m = _clamp(params.mass, self.mass)
        c = _clamp(params.damping, self.damping)
        k = _clamp(params.stiffness, self.stiffness)
        if (m, c, k) == (params.mass, params.damping, params.stiffness):
            return params
        return params.with_changes(mass=m, damping=c, stiffness=k)


@dataclass(frozen=True)
class SessionConfig:
    """
    Tunables of a SimulationSession.

    Attributes:
        tick_interval: nominal tick period (s); also the lower bound of a step.
        max_step: upper bound of a single integration step (s).
        max_history_duration: seconds of history retained for scrubbing.
        default_params: parameters restored by reset().
        initial_displacement, initial_velocity: default (y0, v0).
        rewind_seconds: default rewind distance.
        min_height: floor of the rendered spring height.
        bounds: optional clamping of m, c, k (None = no clamping).
    """

    tick_interval: float = 1.0 / 60.0
    max_step: float = 0.05
    max_history_duration: float = 120.0
    default_params: SystemParameters = field(default_factory=SystemParameters)
    initial_displacement: float = 0.1
    initial_velocity: float = 0.0
    rewind_seconds: float = 10.0
    min_height: float = 0.05
    bounds: Optional[ParameterBounds] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        p = self.default_params
        data["default_params"] = {
            "mass": p.mass,
            "damping": p.damping,
            "stiffness": p.stiffness,
            "rest_length": p.rest_length,
            "forcing": p.forcing.to_dict(),
        }
        data["bounds"] = asdict(self.bounds) if self.bounds is not None else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        kwargs = dict(data)
        params = kwargs.get("default_params")
        if isinstance(params, dict):
            params = dict(params)
            if "forcing" in params:
                params["forcing"] = forcing_from_dict(params["forcing"])
            kwargs["default_params"] = SystemParameters(**params)
        bounds = kwargs.get("bounds")
        if isinstance(bounds, dict):
            kwargs["bounds"] = ParameterBounds(**{k: tuple(v) for k, v in bounds.items()})
        return cls(**kwargs)
