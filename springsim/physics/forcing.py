"""
External forcing functions F(t) applied to the mass.

Each variant is an immutable dataclass; value(t) is pure and total.
The impulse variant contributes no continuous force: it is delivered as an
instantaneous velocity kick by the integrator, via impulse_kick().
"""

import math
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type


class Waveform(str, Enum):
    """Shape of a harmonic forcing."""

    SINE = "sine"
    COSINE = "cosine"


class Forcing(ABC):
    """Base interface for forcing functions."""

    kind: str = ""

    @abstractmethod
    def value(self, t: float) -> float:
        """Continuous force at time t."""

    def impulse_kick(self, start: float, dt: float) -> Optional[float]:
        """
        Impulse magnitude delivered within [start, start + dt], if any.
        Only ImpulseForcing returns a value.
        """
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)  # type: ignore[call-overload]
        for key, val in data.items():
            if isinstance(val, Enum):
                data[key] = val.value
        data["kind"] = self.kind
        return data


@dataclass(frozen=True)
class NoForcing(Forcing):
    """Free motion, F(t) = 0."""

    kind = "none"

    def value(self, t: float) -> float:
        return 0.0


@dataclass(frozen=True)
class HarmonicForcing(Forcing):
    """A * sin(2*pi*f*t + phase), or cos(...) for the cosine waveform."""

    amplitude: float = 0.0
    frequency_hz: float = 1.0
    phase: float = 0.0
    waveform: Waveform = Waveform.SINE

    kind = "harmonic"

    def __post_init__(self) -> None:
        if not isinstance(self.waveform, Waveform):
            object.__setattr__(self, "waveform", Waveform(self.waveform))

    def value(self, t: float) -> float:
        theta = 2.0 * math.pi * self.frequency_hz * t + self.phase
        if self.waveform is Waveform.SINE:
            return self.amplitude * math.sin(theta)
        return self.amplitude * math.cos(theta)


@dataclass(frozen=True)
class ConstantForcing(Forcing):
    """Constant force."""

    force: float = 0.0

    kind = "constant"

    def value(self, t: float) -> float:
        return self.force


@dataclass(frozen=True)
class StepForcing(Forcing):
    """0 before trigger_time, magnitude at and after it (hard edge)."""

    magnitude: float = 0.0
    trigger_time: float = 0.0

    kind = "step"

    def value(self, t: float) -> float:
        return self.magnitude if t >= self.trigger_time else 0.0


@dataclass(frozen=True)
class ImpulseForcing(Forcing):
    """Dirac-like kick of the given magnitude (N*s) at trigger_time."""

    magnitude: float = 0.0
    trigger_time: float = 0.0

    kind = "impulse"

    def value(self, t: float) -> float:
        return 0.0

    def impulse_kick(self, start: float, dt: float) -> Optional[float]:
        end = start + dt
        # widened window so a fixed step cannot jump over the trigger
        tolerance = max(1e-4, 0.25 * dt)
        if start - tolerance <= self.trigger_time <= end + tolerance:
            return self.magnitude
        return None


FORCING_TYPES: Dict[str, Type[Forcing]] = {
    cls.kind: cls
    for cls in (NoForcing, HarmonicForcing, ConstantForcing, StepForcing, ImpulseForcing)
}


def make_forcing(kind: str, **fields: Any) -> Forcing:
    """Build a forcing by type name ("none", "harmonic", "constant", "step", "impulse")."""
    try:
        cls = FORCING_TYPES[kind]
    except KeyError:
        raise ValueError(
            f"Unknown forcing kind {kind!r}; expected one of {sorted(FORCING_TYPES)}"
        ) from None
    return cls(**fields)


def forcing_from_dict(data: Dict[str, Any]) -> Forcing:
    """Inverse of Forcing.to_dict()."""
    fields = dict(data)
    kind = fields.pop("kind", "none")
    return make_forcing(kind, **fields)
