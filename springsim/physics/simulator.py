"""Stateful mass-spring-damper simulator built on step_state()."""

from typing import Optional

from springsim.physics.forcing import ImpulseForcing
from springsim.physics.integrators import step_state
from springsim.physics.params import SystemParameters, SystemState


class MassSpringSimulator:
    """
    Owns one SystemState and advances it with RK4.

    params can be swapped at any time; the change takes effect at the next step.
    An impulse is delivered exactly once even if two adjacent steps both fall
    within its tolerance window. Reseeding to a time at or before the start
    of the step that delivered it re-arms it.
    """

    def __init__(
        self,
        params: Optional[SystemParameters] = None,
        state: Optional[SystemState] = None,
    ) -> None:
        self.params = params or SystemParameters()
        self._state = state.copy() if state is not None else SystemState()
        self._delivered_impulse: Optional[ImpulseForcing] = None
        # start time of the step that applied the kick
        self._delivered_at = 0.0

    @property
    def state(self) -> SystemState:
        """Copy of the current state."""
        return self._state.copy()

    @property
    def time(self) -> float:
        return self._state.time

    def step(self, dt: float) -> SystemState:
        """Advance by dt seconds and return the new state."""
        forcing = self.params.forcing
        apply_impulse = True
        if isinstance(forcing, ImpulseForcing):
            if forcing == self._delivered_impulse:
                apply_impulse = False
            elif dt > 0 and self.params.mass > 0 and forcing.impulse_kick(self._state.time, dt) is not None:
                self._delivered_impulse = forcing
                self._delivered_at = self._state.time
        self._state = step_state(self._state, self.params, dt, apply_impulse=apply_impulse)
        return self.state

    def reset(self, time: float = 0.0, displacement: float = 0.0, velocity: float = 0.0) -> None:
        """Reseed the state. A state from before the kicking step re-arms the impulse."""
        self._state = SystemState(float(time), float(displacement), float(velocity))
        if self._delivered_impulse is not None and time <= self._delivered_at:
            self._delivered_impulse = None

