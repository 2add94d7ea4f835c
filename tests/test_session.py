"""Tests for SimulationSession: lifecycle, ticking, parameters, scrubbing."""

import pytest

from springsim.core import ManualScheduler, ParameterBounds, Phase, SessionConfig, SimulationSession
from springsim.physics import (
    ConstantForcing,
    DampingCategory,
    ImpulseForcing,
    PresetCatalog,
    SystemParameters,
    SystemState,
)

DT = 1.0 / 60.0


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_session(**config) -> tuple:
    clock = FakeClock()
    scheduler = ManualScheduler()
    session = SimulationSession(SessionConfig(**config), scheduler=scheduler, clock=clock)
    return session, scheduler, clock


def run_ticks(scheduler: ManualScheduler, clock: FakeClock, n: int, dt: float = DT) -> None:
    for _ in range(n):
        clock.now += dt
        scheduler.fire(clock.now)


def test_idle_preview_uses_initial_conditions() -> None:
    session, _, _ = make_session()
    assert session.phase is Phase.IDLE
    assert session.state == SystemState(0.0, 0.1, 0.0)
    assert session.height == pytest.approx(0.6)
    session.set_initial_conditions(-0.7, 0.2)
    assert session.displacement == -0.7
    assert session.velocity == 0.2
    assert session.height == pytest.approx(0.05)


def test_start_ticks_and_records() -> None:
    session, scheduler, clock = make_session()
    session.start()
    assert session.is_running
    assert scheduler.active
    assert scheduler.interval == pytest.approx(DT)
    run_ticks(scheduler, clock, 60)
    assert len(session.history) == 60
    assert session.time == pytest.approx(1.0)
    assert session.playback_time == pytest.approx(session.time)
    latest = session.history.latest
    assert latest.time == pytest.approx(session.time)
    expected_accel = session.params.acceleration(latest.time, latest.displacement, latest.velocity)
    assert latest.acceleration == pytest.approx(expected_accel)


def test_start_is_noop_while_running() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 5)
    session.start()
    assert len(session.history) == 5


def test_tick_delta_is_clamped() -> None:
    session, scheduler, clock = make_session()
    session.start()
    clock.now += 5.0
    result = session.tick()
    assert result.dt == pytest.approx(0.05)
    clock.now += 0.0001
    result = session.tick()
    assert result.dt == pytest.approx(DT)


def test_tick_ignored_when_not_running() -> None:
    session, _, _ = make_session()
    assert session.tick(1.0) is None
    assert len(session.history) == 0


def test_stop_cancels_and_keeps_history() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 10)
    session.stop()
    assert session.phase is Phase.PAUSED
    assert not scheduler.active
    assert scheduler.fire(clock.now + 1.0) is False
    assert len(session.history) == 10
    t = session.time
    assert session.tick(clock.now + 1.0) is None
    assert session.time == t


def test_start_after_stop_clears_history() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 10)
    session.stop()
    session.start()
    assert len(session.history) == 0
    assert session.state == SystemState(0.0, 0.1, 0.0)


def test_reset_restores_defaults() -> None:
    session, scheduler, clock = make_session()
    session.apply_parameters(SystemParameters(mass=3.0, damping=1.0, stiffness=20.0))
    session.set_initial_conditions(0.3, 0.1)
    session.start()
    run_ticks(scheduler, clock, 10)
    session.reset()
    assert session.phase is Phase.IDLE
    assert not scheduler.active
    assert len(session.history) == 0
    assert session.playback_time == 0.0
    assert session.params == SystemParameters()
    assert session.state == SystemState(0.0, 0.1, 0.0)


def test_apply_parameters_keeps_live_state() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 30)
    before = session.state
    session.apply_parameters(session.params.with_changes(stiffness=40.0))
    assert session.state == before
    run_ticks(scheduler, clock, 1)
    assert session.time == pytest.approx(before.time + DT)


def test_apply_parameters_with_reset_state() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 30)
    session.apply_parameters(session.params.with_changes(damping=1.0), reset_state=True)
    assert session.state == SystemState(0.0, 0.1, 0.0)


def test_apply_forcing_takes_effect_next_tick() -> None:
    session, scheduler, clock = make_session()
    session.apply_parameters(SystemParameters(mass=1.0, damping=0.0, stiffness=0.0))
    session.set_initial_conditions(0.0, 0.0)
    session.start()
    run_ticks(scheduler, clock, 3)
    assert session.velocity == 0.0
    session.apply_forcing(ConstantForcing(6.0))
    assert session.velocity == 0.0
    run_ticks(scheduler, clock, 1)
    assert session.velocity == pytest.approx(6.0 * DT)


def test_apply_preset_resets_state() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 30)
    preset = PresetCatalog.overdamped()
    session.apply_preset(preset)
    assert session.params.damping == pytest.approx(preset.params.damping)
    assert session.selected_preset is DampingCategory.OVER
    assert session.state == SystemState(0.0, preset.y0, preset.v0)


def test_set_damping_preset_keeps_mass_and_stiffness() -> None:
    session, _, _ = make_session()
    session.set_damping_preset(DampingCategory.CRIT)
    assert session.params.mass == 1.0
    assert session.params.stiffness == 15.0
    assert session.params.damping == pytest.approx(2 * 15.0 ** 0.5)


def test_bounds_clamp_parameters() -> None:
    session, _, _ = make_session(bounds=ParameterBounds())
    session.apply_parameters(SystemParameters(mass=50.0, damping=0.0, stiffness=1.0))
    assert session.params.mass == 5.0
    assert session.params.damping == 0.1
    assert session.params.stiffness == 10.0


def test_scrub_reseeds_from_exact_sample() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 120)
    target = list(session.history)[40]
    sample = session.scrub(target.time)
    assert sample == target
    assert not session.is_running
    assert session.phase is Phase.PAUSED
    assert session.state == SystemState(target.time, target.displacement, target.velocity)


def test_scrub_clamps_time() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 60)
    session.scrub(1000.0)
    assert session.playback_time == pytest.approx(session.max_playback_time)
    assert session.time == pytest.approx(session.max_playback_time)
    session.scrub(-5.0)
    assert session.playback_time == 0.0
    assert session.time == pytest.approx(session.history.min_time)


def test_scrub_with_empty_history_is_noop() -> None:
    session, _, _ = make_session()
    before = session.state
    assert session.scrub(3.0) is None
    assert session.state == before
    assert session.phase is Phase.IDLE


def test_rewind() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 180)
    end = session.playback_time
    sample = session.rewind(1.0)
    assert sample.time == pytest.approx(end - 1.0, abs=DT)
    assert session.rewind() is not None
    assert session.playback_time == 0.0


def test_resume_after_scrub_rewrites_future() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 120)
    session.scrub(1.0)
    t = session.time
    session.resume()
    assert session.is_running
    run_ticks(scheduler, clock, 1)
    assert session.history.max_time == pytest.approx(t + DT)
    assert len(session.history.between(t + 0.5 * DT, 100.0)) == 1
    times = session.history.get("time")
    assert all(b > a for a, b in zip(times, times[1:]))


def test_scrubbing_freezes_playback_cursor() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 10)
    session.begin_scrub()
    cursor = session.playback_time
    run_ticks(scheduler, clock, 10)
    assert session.playback_time == cursor
    session.end_scrub()
    run_ticks(scheduler, clock, 1)
    assert session.playback_time == pytest.approx(session.time)


def test_listeners_receive_tick_results() -> None:
    session, scheduler, clock = make_session()
    results = []
    session.add_listener(results.append)
    session.start()
    run_ticks(scheduler, clock, 3)
    assert len(results) == 3
    assert results[-1].sample == session.history.latest
    assert results[-1].height == pytest.approx(session.height)
    session.remove_listener(results.append)
    run_ticks(scheduler, clock, 1)
    assert len(results) == 3


def test_degenerate_mass_does_not_crash_live_session() -> None:
    session, scheduler, clock = make_session()
    session.start()
    run_ticks(scheduler, clock, 5)
    before = session.state
    session.apply_parameters(session.params.with_changes(mass=0.0))
    run_ticks(scheduler, clock, 1)
    assert session.displacement == before.displacement
    assert session.time == pytest.approx(before.time + DT)


def test_scrub_then_resume_keeps_impulse_delivered_once() -> None:
    session, scheduler, clock = make_session()
    session.apply_parameters(SystemParameters(mass=1.0, damping=0.0, stiffness=0.0, forcing=ImpulseForcing(1.0, 0.5)))
    session.set_initial_conditions(0.0, 0.0)
    session.start()
    run_ticks(scheduler, clock, 60)
    assert session.velocity == pytest.approx(1.0)
    session.scrub(0.5)
    assert session.velocity == pytest.approx(1.0)
    session.resume()
    run_ticks(scheduler, clock, 5)
    assert session.velocity == pytest.approx(1.0)


def test_scrub_before_impulse_replays_it() -> None:
    session, scheduler, clock = make_session()
    session.apply_parameters(SystemParameters(mass=1.0, damping=0.0, stiffness=0.0, forcing=ImpulseForcing(1.0, 0.5)))
    session.set_initial_conditions(0.0, 0.0)
    session.start()
    run_ticks(scheduler, clock, 60)
    session.scrub(0.2)
    assert session.velocity == 0.0
    session.resume()
    run_ticks(scheduler, clock, 30)
    assert session.velocity == pytest.approx(1.0)
