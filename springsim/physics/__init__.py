"""
Physics of the single-degree-of-freedom mass-spring-damper.

Hierarchy:
  - forcing: external force F(t) and impulse kicks
  - params: SystemParameters, SystemState
  - integrators: RK4 step (rk4_step, step_state)
  - simulator: stateful MassSpringSimulator
  - presets: damping presets from c_crit = 2*sqrt(m*k)
"""

from springsim.physics.forcing import (
    ConstantForcing,
    Forcing,
    HarmonicForcing,
    ImpulseForcing,
    NoForcing,
    StepForcing,
    Waveform,
    forcing_from_dict,
    make_forcing,
)
from springsim.physics.params import SystemParameters, SystemState, spring_height
from springsim.physics.integrators import mass_spring_rhs, rk4_step, step_state
from springsim.physics.simulator import MassSpringSimulator
from springsim.physics.presets import (
    DampingCategory,
    Preset,
    PresetCatalog,
    critical_damping,
    damping_for,
)

__all__ = [
    # Forcing
    "Forcing",
    "NoForcing",
    "HarmonicForcing",
    "ConstantForcing",
    "StepForcing",
    "ImpulseForcing",
    "Waveform",
    "make_forcing",
    "forcing_from_dict",
    # Model
    "SystemParameters",
    "SystemState",
    "spring_height",
    # Integration
    "rk4_step",
    "mass_spring_rhs",
    "step_state",
    "MassSpringSimulator",
    # Presets
    "DampingCategory",
    "Preset",
    "PresetCatalog",
    "critical_damping",
    "damping_for",
]
