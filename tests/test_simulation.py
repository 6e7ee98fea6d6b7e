import pytest

from orrery.camera import ButtonEvent, PointerButton, PointerMotion, ScrollEvent
from orrery.constants import SENSITIVITY, TIMESTEP
from orrery.presets import SOLAR_SYSTEM
from orrery.simulation import SimulationController
from orrery.trails import to_screen


def make_sim(**kwargs):
    kwargs.setdefault("tick_rate", 10.0)
    return SimulationController(SOLAR_SYSTEM, **kwargs)


def test_tick_integrates_then_records_trails():
    sim = make_sim()
    sim.tick()
    assert sim.ticks == 1
    assert sim.sim_time == TIMESTEP
    for body in sim.registry:
        assert list(body.trail) == [to_screen(body.position)]
        assert (body.screen_transform.x, body.screen_transform.y) == to_screen(body.position)


def test_advance_runs_fixed_ticks():
    sim = make_sim()
    assert sim.advance(0.05) == 0
    assert sim.advance(0.06) == 1
    assert sim.advance(0.25) == 2
    assert sim.ticks == 3


def test_advance_caps_ticks_per_frame():
    sim = make_sim(max_ticks_per_frame=4)
    assert sim.advance(10.0) == 4
    # Backlog beyond the cap is dropped
    assert sim.advance(0.05) == 0


def test_paused_simulation_does_not_advance():
    sim = make_sim()
    sim.set_playing(False)
    assert sim.advance(1.0) == 0
    sim.step_once()
    assert sim.ticks == 1
    assert sim.toggle_playing() is True


def test_trail_length_never_exceeds_bound():
    sim = make_sim(trail_length=5)
    for _ in range(12):
        sim.tick()
    assert all(len(b.trail) == 5 for b in sim.registry)

    sim.set_trail_length(3)
    assert all(len(b.trail) == 3 for b in sim.registry)
    sim.clear_trails()
    assert all(len(b.trail) == 0 for b in sim.registry)


def test_reset_and_replace():
    sim = make_sim()
    for _ in range(5):
        sim.tick()
    sim.reset()
    assert sim.ticks == 0
    assert sim.registry[3].position == SOLAR_SYSTEM[3].position

    sim.replace_specs(SOLAR_SYSTEM[:2])
    assert len(sim.registry) == 2
    assert sim.primary_body().name == "Sun"


def test_camera_input_is_independent_of_physics():
    sim = make_sim()
    before = sim.registry.snapshot()
    sim.apply_input([ButtonEvent(PointerButton.RIGHT, True)])
    sim.apply_input([PointerMotion(2.0, 0.0), ScrollEvent(-1)])
    assert sim.view.pan[0] == pytest.approx(-2.0 * SENSITIVITY)
    assert sim.view.zoom == pytest.approx(2.0 * SENSITIVITY)
    assert sim.registry.snapshot() == before


def test_momentum_readout_is_stable():
    sim = make_sim()
    start = sim.momentum()
    energy = sim.energy()
    sim.tick()
    largest = max(abs(b.mass * b.velocity[1]) for b in sim.registry)
    assert sim.momentum()[1] == pytest.approx(start[1], abs=largest * 1e-9)
    assert energy < 0


def test_invalid_settings():
    with pytest.raises(ValueError):
        make_sim(tick_rate=0)
    sim = make_sim()
    with pytest.raises(ValueError):
        sim.set_tick_rate(-1)
    with pytest.raises(ValueError):
        sim.set_trail_length(0)
