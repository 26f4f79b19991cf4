"""
Tests for flock_sim/boids/agent.py

Per-rule velocity adjustments and the full update step.
"""

import math
from dataclasses import replace

import pytest

from flock_sim.boids import Agent, AgentMark, Field


def make_agent(x, y, vx=0.0, vy=0.0) -> Agent:
    agent = Agent()
    agent.initialize((x, y), (vx, vy))
    return agent


class TestInitialization:
    """Direct and random initialization."""

    def test_initialize_sets_state(self):
        agent = make_agent(3, 4, -1, 2)
        assert agent.position == (3.0, 4.0)
        assert agent.velocity == (-1.0, 2.0)

    def test_initialize_random_uses_field_and_velocity_range(self):
        values = iter([0.5, 0.25, 0.0, 0.999])

        def rng(lo, hi):
            return lo + next(values) * (hi - lo)

        agent = Agent()
        agent.initialize_random(Field(800, 600), rng)
        assert agent.position == (400.0, 150.0)
        assert agent.vx == -5.0
        assert agent.vy == pytest.approx(4.99)

    def test_idents_are_unique(self):
        assert Agent().ident != Agent().ident

    def test_copy_keeps_identity_and_detaches(self):
        agent = make_agent(1, 2, 3, 4)
        clone = agent.copy()
        assert clone.ident == agent.ident
        clone.x = 99.0
        assert agent.x == 1.0


class TestDerivedValues:
    """Speed, heading and renderer mark."""

    def test_speed(self):
        assert make_agent(0, 0, 3, 4).speed == 5.0

    def test_heading_points_marker_forward(self):
        assert make_agent(0, 0, 1, 0).heading == pytest.approx(-math.pi / 2)
        assert make_agent(0, 0, 0, 1).heading == pytest.approx(0.0)

    def test_mark(self):
        agent = make_agent(5, 6, 0, 2)
        agent.color_seed = 42
        assert agent.mark() == AgentMark(5.0, 6.0, 0.0, 42)

    def test_distance_to(self):
        assert make_agent(0, 0).distance_to(make_agent(3, 4)) == 5.0


class TestCohesion:
    """fly_towards_center()."""

    def test_self_counts_as_neighbor(self, pair, open_config):
        a, b = pair
        a.fly_towards_center([a, b], open_config)
        # Center of (0,0) and (10,0) is (5,0)
        assert a.vx == pytest.approx(1.0 + 5 * 0.005)
        assert a.vy == 0.0

    def test_exclude_self(self, pair, open_config):
        a, b = pair
        a.fly_towards_center([a, b], replace(open_config, include_self=False))
        assert a.vx == pytest.approx(1.0 + 10 * 0.005)

    def test_no_neighbors_no_change(self, open_config):
        a = make_agent(0, 0, 1, 1)
        far = make_agent(500, 500)
        a.fly_towards_center([far], open_config)
        assert a.velocity == (1.0, 1.0)

    def test_non_positive_visual_range_means_no_neighbors(self, pair, open_config):
        a, b = pair
        a.fly_towards_center([a, b], replace(open_config, visual_range=0.0))
        assert a.velocity == (1.0, 0.0)


class TestSeparation:
    """avoid_others()."""

    def test_pushes_apart(self, pair, open_config):
        a, b = pair
        a.avoid_others([a, b], open_config)
        assert a.vx == pytest.approx(1.0 - 10 * 0.05)

    def test_ignores_same_position(self, open_config):
        a = make_agent(5, 5, 1, 0)
        twin = make_agent(5, 5, -1, 0)
        a.avoid_others([a, twin], open_config)
        assert a.velocity == (1.0, 0.0)

    def test_outside_min_distance_ignored(self, open_config):
        a = make_agent(0, 0, 1, 0)
        other = make_agent(25, 0)
        a.avoid_others([a, other], open_config)
        assert a.velocity == (1.0, 0.0)

    def test_raw_displacement_is_summed(self, open_config):
        a = make_agent(0, 0)
        others = [make_agent(4, 0), make_agent(0, -3)]
        a.avoid_others(others, open_config)
        assert a.vx == pytest.approx(-4 * 0.05)
        assert a.vy == pytest.approx(3 * 0.05)


class TestAlignment:
    """match_velocity()."""

    def test_pulls_toward_average(self, pair, open_config):
        a, b = pair
        a.match_velocity([a, b], open_config)
        # Average of (1,0) and (-1,0) is zero
        assert a.vx == pytest.approx(1.0 - 1.0 * 0.05)

    def test_exclude_self(self, pair, open_config):
        a, b = pair
        a.match_velocity([a, b], replace(open_config, include_self=False))
        assert a.vx == pytest.approx(1.0 + (-1.0 - 1.0) * 0.05)

    def test_alone_no_change(self, open_config):
        a = make_agent(0, 0, 2, 3)
        a.match_velocity([a], open_config)
        assert a.velocity == (2.0, 3.0)


class TestSpeedLimit:
    """limit_speed()."""

    def test_rescales_to_limit(self, config):
        a = make_agent(0, 0, 20, 0)
        a.limit_speed(config)
        assert a.velocity == pytest.approx((15.0, 0.0))

    def test_keeps_direction(self, config):
        a = make_agent(0, 0, 30, 40)
        a.limit_speed(config)
        assert a.speed == pytest.approx(15.0)
        assert a.vy / a.vx == pytest.approx(40 / 30)

    def test_slow_untouched(self, config):
        a = make_agent(0, 0, 3, 4)
        a.limit_speed(config)
        assert a.velocity == (3.0, 4.0)


class TestBoundaryNudge:
    """keep_within_bounds() on an 800x600 field with margin 200."""

    @pytest.mark.parametrize("x, y, expected", [
        (199, 300, (1.0, 0.0)),
        (601, 300, (-1.0, 0.0)),
        (400, 199, (0.0, 1.0)),
        (400, 401, (0.0, -1.0)),
        (400, 300, (0.0, 0.0)),
        (100, 500, (1.0, -1.0)),
    ])
    def test_nudge_sign(self, config, x, y, expected):
        a = make_agent(x, y)
        a.keep_within_bounds(config)
        assert a.velocity == expected

    def test_is_not_a_clamp(self, config):
        a = make_agent(-50, 300, -10, 0)
        a.keep_within_bounds(config)
        assert a.position == (-50.0, 300.0)
        assert a.vx == -9.0

    def test_uses_config_field(self, config):
        a = make_agent(500, 300)
        a.keep_within_bounds(config.with_field(600, 600))
        assert a.vx == -1.0


class TestUpdate:
    """Full update step."""

    def test_scenario_two_agents(self, pair, open_config):
        a, b = pair
        a.update([a, b], open_config)

        # cohesion +0.025, separation -0.5, alignment against own updated velocity
        vx = 1.0 + 0.025 - 0.5
        vx += ((vx - 1.0) / 2 - vx) * 0.05
        assert a.vx == pytest.approx(vx)
        assert a.vy == 0.0
        assert a.x == pytest.approx(vx)

        b.update([a, b], open_config)
        assert -1.0 < b.vx < 0.0
        assert b.x < 10.0
        assert b.x - a.x < 10.0

    def test_lone_agent_moves_by_velocity(self, config):
        a = make_agent(400, 300, 3, 4)
        a.update([a], config)
        assert a.velocity == (3.0, 4.0)
        assert a.position == (403.0, 304.0)

    def test_speed_limited_before_move(self, config):
        a = make_agent(400, 300, 20, 0)
        a.update([a], config)
        assert a.velocity == pytest.approx((15.0, 0.0))
        assert a.position == pytest.approx((415.0, 300.0))

    def test_isolated_agents_only_feel_boundary(self, config):
        a = make_agent(100, 300, 2, 0)
        far = make_agent(500, 300, -3, 1)
        a.update([a, far], config)
        assert a.velocity == (3.0, 0.0)

    def test_pure_given_inputs(self, config):
        results = []
        for _ in range(3):
            a = make_agent(300, 250, 4, -2)
            b = make_agent(310, 260, -1, 3)
            a.update([a, b], config)
            results.append((a.position, a.velocity))
        assert results[0] == results[1] == results[2]

    def test_speed_bound_without_boundary_nudge(self, config):
        a = make_agent(400, 300, 14, 14)
        b = make_agent(405, 300, -14, 14)
        a.update([a, b], config)
        assert a.speed <= config.speed_limit + 1e-9

    def test_degenerate_ranges_change_nothing(self, pair, open_config):
        a, b = pair
        cfg = replace(open_config, visual_range=-1.0, min_distance=0.0)
        a.update([a, b], cfg)
        assert a.velocity == (1.0, 0.0)
        assert a.position == (1.0, 0.0)
