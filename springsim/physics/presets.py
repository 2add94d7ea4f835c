"""
Ready-made damping presets.

Damping is derived from the critical value c_crit = 2*sqrt(m*k):
overdamped 1.5*c_crit, critically damped c_crit, underdamped 0.2*c_crit,
undamped 0. Presets are recomputed on every call; nothing is cached.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from springsim.physics.forcing import NoForcing
from springsim.physics.params import SystemParameters

PRESET_REST_LENGTH = 0.5
PRESET_Y0 = 0.1
PRESET_V0 = 0.0


class DampingCategory(str, Enum):
    OVER = "over"
    CRIT = "crit"
    UNDER = "under"
    UNDAMPED = "undamped"


# fraction of critical damping per category
DAMPING_FACTORS: Dict[DampingCategory, float] = {
    DampingCategory.OVER: 1.5,
    DampingCategory.CRIT: 1.0,
    DampingCategory.UNDER: 0.2,
    DampingCategory.UNDAMPED: 0.0,
}

PRESET_NAMES: Dict[DampingCategory, str] = {
    DampingCategory.OVER: "Over",
    DampingCategory.CRIT: "Crit",
    DampingCategory.UNDER: "Under",
    DampingCategory.UNDAMPED: "Undamped",
}


@dataclass(frozen=True)
class Preset:
    """Named parameter set plus initial conditions (y0, v0)."""

    name: str
    params: SystemParameters
    y0: float
    v0: float


def critical_damping(mass: float, stiffness: float) -> float:
    """c_crit = 2*sqrt(m*k)."""
    return 2.0 * math.sqrt(mass * stiffness)


def damping_for(category: DampingCategory, mass: float, stiffness: float) -> float:
    """Damping coefficient giving the requested behaviour for (m, k)."""
    category = DampingCategory(category)
    # m floored, k clamped at 0: a transient bad slider value must not raise
    return DAMPING_FACTORS[category] * critical_damping(max(mass, 1e-6), max(stiffness, 0.0))


class PresetCatalog:
    """Factory of presets. Stateless."""

    DEFAULT_MASS = 0.1
    DEFAULT_STIFFNESS = 10.0

    @staticmethod
    def get(
        category: DampingCategory,
        mass: float = DEFAULT_MASS,
        stiffness: float = DEFAULT_STIFFNESS,
    ) -> Preset:
        category = DampingCategory(category)
        damping = damping_for(category, mass, stiffness)
        params = SystemParameters(
            mass=mass,
            damping=damping,
            stiffness=stiffness,
            rest_length=PRESET_REST_LENGTH,
            forcing=NoForcing(),
        )
        return Preset(name=PRESET_NAMES[category], params=params, y0=PRESET_Y0, v0=PRESET_V0)

    @classmethod
    def overdamped(cls, mass: float = DEFAULT_MASS, stiffness: float = DEFAULT_STIFFNESS) -> Preset:
        return cls.get(DampingCategory.OVER, mass, stiffness)

    @classmethod
    def critically_damped(cls, mass: float = DEFAULT_MASS, stiffness: float = DEFAULT_STIFFNESS) -> Preset:
        return cls.get(DampingCategory.CRIT, mass, stiffness)

    @classmethod
    def underdamped(cls, mass: float = DEFAULT_MASS, stiffness: float = DEFAULT_STIFFNESS) -> Preset:
        return cls.get(DampingCategory.UNDER, mass, stiffness)

    @classmethod
    def undamped(cls, mass: float = DEFAULT_MASS, stiffness: float = DEFAULT_STIFFNESS) -> Preset:
        return cls.get(DampingCategory.UNDAMPED, mass, stiffness)

    @classmethod
    def match(cls, params: SystemParameters) -> Optional[DampingCategory]:
        """
        Category whose default preset has exactly these (m, c, k), else None.
        Used to keep a preset picker in sync with hand-edited parameters.
        """
        for category in DampingCategory:
            p = cls.get(category).params
            if (p.mass, p.damping, p.stiffness) == (params.mass, params.damping, params.stiffness):
                return category
        return None
