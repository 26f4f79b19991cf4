"""
Tests for flock_sim/boids/flock_controller.py

Timer ticks are driven by calling _tick() directly; no event loop runs.
"""

from unittest.mock import MagicMock

import pytest

from flock_sim.boids import AgentMark, FlockController, SimulationConfig
from flock_sim.config import STATS_LOG_INTERVAL


@pytest.fixture
def controller(qapp):
    ctrl = FlockController(SimulationConfig(population_count=10, seed=123))
    yield ctrl
    ctrl.stop()


@pytest.fixture
def received(controller):
    snapshots = []
    controller.snapshot_updated.connect(snapshots.append)
    return snapshots


class TestLifecycle:

    def test_reset_emits_seed_and_snapshot(self, controller, received):
        seeds = []
        controller.population_reset.connect(seeds.append)
        assert controller.reset() == 123
        assert seeds == [123]
        assert len(received) == 1
        assert len(received[0]) == 10
        assert all(isinstance(m, AgentMark) for m in received[0])

    def test_start_populates_and_runs(self, controller):
        states = []
        controller.running_changed.connect(states.append)
        controller.start()
        assert controller.running
        assert controller.flock.populated
        controller.stop()
        assert not controller.running
        assert states == [True, False]

    def test_start_twice_is_noop(self, controller):
        states = []
        controller.running_changed.connect(states.append)
        controller.start()
        controller.start()
        assert states == [True]

    def test_toggle(self, controller):
        controller.toggle()
        assert controller.running
        controller.toggle()
        assert not controller.running

    def test_reset_while_running_keeps_running(self, controller):
        controller.start()
        controller.reset(seed=5)
        assert controller.running
        assert controller.flock.seed == 5


class TestTick:

    def test_tick_advances_and_emits(self, controller, received):
        controller.reset()
        controller._tick()
        assert controller.flock.tick_count == 1
        assert received[-1] == controller.flock.snapshot()

    def test_tick_before_reset_stops_instead_of_raising(self, controller, received):
        controller._timer.start()
        controller._tick()
        assert received == []
        assert not controller.running

    def test_stats_logged_periodically(self, controller, monkeypatch):
        mock_logger = MagicMock()
        monkeypatch.setattr("flock_sim.boids.flock_controller.logger", mock_logger)
        controller.reset()
        for _ in range(STATS_LOG_INTERVAL):
            controller._tick()
        assert mock_logger.flock.call_count == 1
        assert f"Tick {STATS_LOG_INTERVAL}" in mock_logger.flock.call_args[0][0]


class TestConfiguration:

    def test_resize_updates_field(self, controller):
        sizes = []
        controller.field_resized.connect(lambda w, h: sizes.append((w, h)))
        controller.resize(1024, 768)
        assert sizes == [(1024.0, 768.0)]
        assert controller.flock.field.width == 1024.0

    def test_resize_ignores_empty_size(self, controller):
        controller.resize(0, 0)
        assert controller.flock.field.width == 800.0

    def test_configure_then_reset(self, controller):
        controller.configure(SimulationConfig(population_count=4))
        controller.reset()
        assert len(controller.flock) == 4
