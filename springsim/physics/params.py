"""Parameters and state of the mass-spring-damper: m*y'' + c*y' + k*y = F(t)."""

import math
from dataclasses import dataclass, field, replace
from typing import Any

from springsim.physics.forcing import Forcing, NoForcing

# floor used when deriving acceleration for display/history
MIN_MASS = 1e-6


@dataclass(frozen=True)
class SystemParameters:
    """
    Physical parameters read by the integrator at each step.

    Immutable: edits build a new instance (see with_changes) and the session
    swaps it in between two steps.
    """

    mass: float = 1.0
    damping: float = 0.2
    stiffness: float = 15.0
    rest_length: float = 0.5
    forcing: Forcing = field(default_factory=NoForcing)

    def __post_init__(self) -> None:
        for name in ("mass", "damping", "stiffness", "rest_length"):
            object.__setattr__(self, name, float(getattr(self, name)))

    def with_changes(self, **changes: Any) -> "SystemParameters":
        """Copy with some fields replaced."""
        return replace(self, **changes)

    def acceleration(self, t: float, x: float, v: float) -> float:
        """(F(t) - c*v - k*x) / m, with the mass floored to stay finite."""
        m = max(self.mass, MIN_MASS)
        return (self.forcing.value(t) - self.damping * v - self.stiffness * x) / m

    @property
    def natural_frequency(self) -> float:
        """omega_n = sqrt(k/m) in rad/s (0 for a degenerate mass)."""
        if self.mass <= 0 or self.stiffness <= 0:
            return 0.0
        return math.sqrt(self.stiffness / self.mass)

    @property
    def critical_damping(self) -> float:
        """c_crit = 2*sqrt(m*k)."""
        return 2.0 * math.sqrt(max(self.mass, 0.0) * max(self.stiffness, 0.0))

    @property
    def damping_ratio(self) -> float:
        """zeta = c / c_crit (inf when c_crit is 0)."""
        c_crit = self.critical_damping
        return self.damping / c_crit if c_crit > 0 else math.inf


@dataclass
class SystemState:
    """Time, displacement from rest and velocity of the mass."""

    time: float = 0.0
    displacement: float = 0.0
    velocity: float = 0.0

    def copy(self) -> "SystemState":
        return SystemState(self.time, self.displacement, self.velocity)


def spring_height(displacement: float, rest_length: float, min_height: float = 0.05) -> float:
    """Visual spring length for a renderer: rest length plus displacement, floored."""
    return max(min_height, rest_length + displacement)
