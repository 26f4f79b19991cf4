"""
Agent - A single flocking agent (boid)

Pure data plus the per-rule velocity adjustments. Rendering is derived
from mark() only; nothing here knows about Qt.

Rules applied by update(), in order:
- Cohesion: steer toward the center of mass of agents in visual range
- Separation: steer away from agents closer than min_distance
- Alignment: steer toward the average velocity of agents in visual range
- Speed limit
- Boundary containment (soft per-axis nudge, not a clamp)
"""

import itertools
import math
from dataclasses import dataclass, field, replace
from typing import Callable, NamedTuple, Sequence, Tuple

from flock_sim import config as defaults
from flock_sim.boids.flock_state import Field, SimulationConfig

_agent_ids = itertools.count(1)


class AgentMark(NamedTuple):
    """Read-only per-agent record handed to the renderer."""
    x: float
    y: float
    heading: float
    color_seed: int


@dataclass
class Agent:
    """Single agent with position and per-tick velocity in field units."""
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    color_seed: int = 0
    ident: int = field(default_factory=lambda: next(_agent_ids))

    # === Initialization ===

    def initialize(self, position: Tuple[float, float],
                   velocity: Tuple[float, float]) -> None:
        """Set position and velocity directly."""
        self.x, self.y = float(position[0]), float(position[1])
        self.vx, self.vy = float(velocity[0]), float(velocity[1])

    def initialize_random(self, bounds: Field, rng: Callable[[float, float], float]) -> None:
        """
        Uniform random position inside the field, random velocity per axis.

        rng(lo, hi) must return a float in [lo, hi).
        """
        self.initialize(
            (rng(0.0, bounds.width), rng(0.0, bounds.height)),
            (rng(defaults.INITIAL_VELOCITY_MIN, defaults.INITIAL_VELOCITY_MAX),
             rng(defaults.INITIAL_VELOCITY_MIN, defaults.INITIAL_VELOCITY_MAX)),
        )

    def copy(self) -> "Agent":
        """Detached copy keeping the same identity."""
        return replace(self)

    # === Derived values ===

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> Tuple[float, float]:
        return (self.vx, self.vy)

    @property
    def speed(self) -> float:
        return math.sqrt(self.vx * self.vx + self.vy * self.vy)

    @property
    def heading(self) -> float:
        """Marker rotation: atan2(dy, dx) - pi/2, so the mark's tip points forward."""
        return math.atan2(self.vy, self.vx) - math.pi / 2

    def distance_to(self, other: "Agent") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def mark(self) -> AgentMark:
        return AgentMark(self.x, self.y, self.heading, self.color_seed)

    # === Rules ===

    def _in_visual_range(self, other: "Agent", cfg: SimulationConfig) -> bool:
        if not cfg.include_self and other.ident == self.ident:
            return False
        # Self is at distance 0, so it counts whenever visual_range > 0
        return self.distance_to(other) < cfg.visual_range

    def fly_towards_center(self, neighbors: Sequence["Agent"], cfg: SimulationConfig) -> None:
        """Adjust velocity slightly toward the center of mass of nearby agents."""
        center_x, center_y = 0.0, 0.0
        count = 0

        for other in neighbors:
            if self._in_visual_range(other, cfg):
                center_x += other.x
                center_y += other.y
                count += 1

        if count > 0:
            center_x /= count
            center_y /= count
            self.vx += (center_x - self.x) * cfg.centering_factor
            self.vy += (center_y - self.y) * cfg.centering_factor

    def avoid_others(self, neighbors: Sequence["Agent"], cfg: SimulationConfig) -> None:
        """Move away from agents that are too close (raw displacement, not normalized)."""
        move_x, move_y = 0.0, 0.0

        for other in neighbors:
            if other.x == self.x and other.y == self.y:
                continue
            if self.distance_to(other) < cfg.min_distance:
                move_x += self.x - other.x
                move_y += self.y - other.y

        self.vx += move_x * cfg.avoid_factor
        self.vy += move_y * cfg.avoid_factor

    def match_velocity(self, neighbors: Sequence["Agent"], cfg: SimulationConfig) -> None:
        """Adjust velocity slightly toward the average velocity of nearby agents."""
        avg_vx, avg_vy = 0.0, 0.0
        count = 0

        for other in neighbors:
            if self._in_visual_range(other, cfg):
                avg_vx += other.vx
                avg_vy += other.vy
                count += 1

        if count > 0:
            avg_vx /= count
            avg_vy /= count
            self.vx += (avg_vx - self.vx) * cfg.matching_factor
            self.vy += (avg_vy - self.vy) * cfg.matching_factor

    def limit_speed(self, cfg: SimulationConfig) -> None:
        """Rescale to speed_limit when faster, keeping direction."""
        speed = self.speed
        if speed > cfg.speed_limit:
            self.vx = (self.vx / speed) * cfg.speed_limit
            self.vy = (self.vy / speed) * cfg.speed_limit

    def keep_within_bounds(self, cfg: SimulationConfig) -> None:
        """Nudge velocity back toward the field when inside the margin band."""
        bounds = cfg.field
        if self.x < cfg.margin:
            self.vx += cfg.turn_factor
        if self.x > bounds.width - cfg.margin:
            self.vx -= cfg.turn_factor
        if self.y < cfg.margin:
            self.vy += cfg.turn_factor
        if self.y > bounds.height - cfg.margin:
            self.vy -= cfg.turn_factor

    def update(self, neighbors: Sequence["Agent"], cfg: SimulationConfig) -> None:
        """Apply every rule, then advance position by the resulting velocity."""
        self.fly_towards_center(neighbors, cfg)
        self.avoid_others(neighbors, cfg)
        self.match_velocity(neighbors, cfg)
        self.limit_speed(cfg)
        self.keep_within_bounds(cfg)

        self.x += self.vx
        self.y += self.vy
