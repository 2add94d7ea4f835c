"""
Numerical integration of the mass-spring-damper: state [y, v], y' = v, v' = a(t, y, v).

Pure numerical level: no session, no history.
Interface: rk4_step(f, x, t, dt) -> x_next; step_state(state, params, dt) -> new state.
"""

from typing import Callable

import numpy as np

from springsim.physics.params import SystemParameters, SystemState

# Type for ODE right-hand side: (x, t) -> dx/dt
RHS = Callable[[np.ndarray, float], np.ndarray]


def rk4_step(f: RHS, x: np.ndarray, t: float, dt: float) -> np.ndarray:
    """Runge-Kutta 4, order 4."""
    k1 = f(x, t)
    k2 = f(x + 0.5 * dt * k1, t + 0.5 * dt)
    k3 = f(x + 0.5 * dt * k2, t + 0.5 * dt)
    k4 = f(x + dt * k3, t + dt)
    return x + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


def mass_spring_rhs(params: SystemParameters) -> RHS:
    """Right-hand side [v, (F(t) - c*v - k*y) / m] for the given parameters."""
    m = params.mass
    c = params.damping
    k = params.stiffness
    force = params.forcing.value

    def rhs(x: np.ndarray, t: float) -> np.ndarray:
        y, v = x[0], x[1]
        return np.array([v, (force(t) - c * v - k * y) / m])

    return rhs


def step_state(
    state: SystemState,
    params: SystemParameters,
    dt: float,
    apply_impulse: bool = True,
) -> SystemState:
    """
    Advance state by dt with RK4 and return the new state (input untouched).

    dt <= 0 or mass <= 0 only advances time by max(0, dt): nothing is
    integrated and nothing is raised.
    An impulse falling inside the step is added as impulse/m to the starting
    velocity, once, before the four stages.
    """
    if dt <= 0 or params.mass <= 0:
        return SystemState(state.time + max(0.0, dt), state.displacement, state.velocity)

    v_start = state.velocity
    if apply_impulse:
        impulse = params.forcing.impulse_kick(state.time, dt)
        if impulse is not None:
            v_start += impulse / params.mass

    x0 = np.array([state.displacement, v_start], dtype=float)
    x1 = rk4_step(mass_spring_rhs(params), x0, state.time, dt)
    return SystemState(state.time + dt, float(x1[0]), float(x1[1]))
