"""Simulation session: tick loop, parameter edits, history and playback."""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from springsim.core.config import SessionConfig
from springsim.core.history import HistoryBuffer, HistorySample
from springsim.core.scheduler import ManualScheduler, TickScheduler
from springsim.physics.forcing import Forcing
from springsim.physics.params import SystemParameters, SystemState, spring_height
from springsim.physics.presets import DampingCategory, Preset, PresetCatalog, damping_for
from springsim.physics.simulator import MassSpringSimulator

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass
class TickResult:
    """Result of one tick: step used, new state and the recorded sample."""

    dt: float
    state: SystemState
    sample: HistorySample
    height: float


TickListener = Callable[[TickResult], None]


class SimulationSession:
    """
    Owns the simulator and the history buffer of one run.

    Lifecycle: IDLE -> start() -> RUNNING -> stop()/scrub() -> PAUSED -> reset() -> IDLE.
    All methods are expected on one thread; ticks and commands are applied in
    the order received, so a parameter edit between two ticks takes effect at
    the next tick.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        scheduler: Optional[TickScheduler] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            config: timing/retention/defaults (default SessionConfig()).
            scheduler: tick source (default ManualScheduler: the host calls tick()).
            clock: monotonic wall clock in seconds.
        """
        self.config = config or SessionConfig()
        self.scheduler = scheduler or ManualScheduler()
        self._clock = clock
        self._listeners: List[TickListener] = []
        self.history = HistoryBuffer(self.config.max_history_duration)
        self._simulator: Optional[MassSpringSimulator] = None
        self._last_tick: Optional[float] = None
        self._phase = Phase.IDLE
        self.is_scrubbing = False
        self.playback_time = 0.0
        self._restore_defaults()

    # ------------------------------------------------------------------
    # Observed state
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._phase is Phase.RUNNING

    @property
    def params(self) -> SystemParameters:
        return self._params

    @property
    def initial_displacement(self) -> float:
        return self._y0

    @property
    def initial_velocity(self) -> float:
        return self._v0

    @property
    def state(self) -> SystemState:
        """Live simulator state, or (0, y0, v0) as a preview when there is none."""
        if self._simulator is None:
            return SystemState(0.0, self._y0, self._v0)
        return self._simulator.state

    @property
    def time(self) -> float:
        return self.state.time

    @property
    def displacement(self) -> float:
        return self.state.displacement

    @property
    def velocity(self) -> float:
        return self.state.velocity

    @property
    def height(self) -> float:
        """Spring length for the renderer."""
        return spring_height(self.displacement, self._params.rest_length, self.config.min_height)

    @property
    def max_playback_time(self) -> float:
        return self.history.max_time

    @property
    def selected_preset(self) -> Optional[DampingCategory]:
        """Preset whose defaults match the current m, c, k, if any."""
        return PresetCatalog.match(self._params)

    def add_listener(self, listener: TickListener) -> None:
        """Register a callback invoked after every tick."""
        self._listeners.append(listener)

    def remove_listener(self, listener: TickListener) -> None:
        self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start a new run from the initial conditions. No-op if already running."""
        if self.is_running:
            return
        self.history.clear()
        self.playback_time = 0.0
        self.is_scrubbing = False
        self._simulator = self._make_simulator()
        self._begin_ticking()
        logger.debug("session started: %s y0=%s v0=%s", self._params, self._y0, self._v0)

    def resume(self) -> None:
        """Continue ticking from the current (possibly scrubbed) state, keeping history."""
        if self.is_running:
            return
        if self._simulator is None:
            self.start()
            return
        self.is_scrubbing = False
        self._begin_ticking()
        logger.debug("session resumed at t=%.4f", self._simulator.time)

    def stop(self) -> None:
        """Cancel ticking. State and history are kept."""
        self.scheduler.cancel()
        self._last_tick = None
        if self._phase is Phase.RUNNING:
            self._phase = Phase.PAUSED
            logger.debug("session stopped at t=%.4f", self.time)

    def reset(self) -> None:
        """Cancel ticking and restore defaults; drops simulator and history."""
        self.scheduler.cancel()
        self._last_tick = None
        self._simulator = None
        self.history.clear()
        self.playback_time = 0.0
        self.is_scrubbing = False
        self._restore_defaults()
        self._phase = Phase.IDLE
        logger.debug("session reset")

    def tick(self, now: Optional[float] = None) -> Optional[TickResult]:
        """
        Advance the simulation by one step.

        The wall-clock delta since the previous tick is clamped into
        [tick_interval, max_step]. Returns None unless running.
        """
        if not self.is_running or self._simulator is None:
            return None
        now = self._clock() if now is None else now
        previous = self._last_tick if self._last_tick is not None else now
        self._last_tick = now
        dt = min(max(now - previous, self.config.tick_interval), self.config.max_step)

        state = self._simulator.step(dt)
        accel = self._params.acceleration(state.time, state.displacement, state.velocity)
        sample = self.history.record(state.time, state.displacement, state.velocity, accel)
        if not self.is_scrubbing:
            self.playback_time = state.time

        result = TickResult(dt=dt, state=state, sample=sample, height=self.height)
        for listener in list(self._listeners):
            listener(result)
        return result

    def set_initial_conditions(self, displacement: float, velocity: float = 0.0) -> None:
        """Set (y0, v0) used by the next start() or state reset."""
        self._y0 = float(displacement)
        self._v0 = float(velocity)

    def apply_parameters(self, params: SystemParameters, reset_state: bool = False) -> None:
        """
        Replace the parameters. The live simulator keeps its time and state
        unless reset_state, which reseeds it at (0, y0, v0).
        """
        if self.config.bounds is not None:
            params = self.config.bounds.clamp(params)
        self._params = params
        if self._simulator is None:
            return
        self._simulator.params = params
        if reset_state:
            self._simulator.reset(0.0, self._y0, self._v0)
            if self.is_running:
                self._last_tick = self._clock()
        logger.debug("parameters applied (reset_state=%s): %s", reset_state, params)

    def apply_forcing(self, forcing: Forcing) -> None:
        """Replace only the forcing function."""
        self.apply_parameters(self._params.with_changes(forcing=forcing))

    def apply_preset(self, preset: Preset) -> None:
        """Take m, c, k and (y0, v0) from a preset and reseed the state."""
        self.set_initial_conditions(preset.y0, preset.v0)
        params = self._params.with_changes(
            mass=preset.params.mass,
            damping=preset.params.damping,
            stiffness=preset.params.stiffness,
        )
        self.apply_parameters(params, reset_state=True)

    def set_damping_preset(self, category: DampingCategory) -> None:
        """Recompute damping for the category, keeping the current m and k."""
        c = damping_for(category, self._params.mass, self._params.stiffness)
        self.apply_parameters(self._params.with_changes(damping=c))

    def begin_scrub(self) -> None:
        """The user started dragging the playback cursor; ticks stop moving it."""
        self.is_scrubbing = True

    def end_scrub(self) -> None:
        self.is_scrubbing = False

    def scrub(self, to_time: float) -> Optional[HistorySample]:
        """
        Jump to the recorded sample nearest to `to_time` (clamped to
        [0, max_playback_time]) and reseed the simulator from it in place.
        Pauses a running session. Returns the sample, None if history is empty.
        """
        if self.is_running:
            self.stop()
        self.playback_time = max(0.0, min(to_time, self.max_playback_time))
        sample = self.history.nearest(self.playback_time)
        if sample is None:
            logger.warning("scrub to t=%.4f ignored: no history recorded", to_time)
            return None
        # in place: keeps the record of an impulse already delivered
        if self._simulator is None:
            self._simulator = self._make_simulator()
        self._simulator.params = self._params
        self._simulator.reset(sample.time, sample.displacement, sample.velocity)
        self._phase = Phase.PAUSED
        logger.debug("scrubbed to t=%.4f (requested %.4f)", sample.time, to_time)
        return sample

    def rewind(self, seconds: Optional[float] = None) -> Optional[HistorySample]:
        """scrub(playback_time - seconds); default distance from config."""
        if seconds is None:
            seconds = self.config.rewind_seconds
        return self.scrub(self.playback_time - seconds)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _restore_defaults(self) -> None:
        params = self.config.default_params
        if self.config.bounds is not None:
            params = self.config.bounds.clamp(params)
        self._params = params
        self._y0 = float(self.config.initial_displacement)
        self._v0 = float(self.config.initial_velocity)

    def _make_simulator(self) -> MassSpringSimulator:
        return MassSpringSimulator(self._params, SystemState(0.0, self._y0, self._v0))

    def _begin_ticking(self) -> None:
        self._last_tick = self._clock()
        self._phase = Phase.RUNNING
        self.scheduler.start(self.config.tick_interval, self._on_scheduled_tick)

    def _on_scheduled_tick(self, now: float) -> None:
        # the scheduler timestamp may come from another clock; deltas use ours
        self.tick()
