"""
Flock Stats - Population summary for the periodic debug log
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from flock_sim.boids.agent import Agent
from flock_sim.boids.flock_state import SimulationConfig


@dataclass(frozen=True)
class FlockStats:
    count: int
    centroid: Tuple[float, float]
    mean_speed: float
    max_speed: float
    polarization: float   # |mean unit heading|: 0 = disordered, 1 = aligned
    outside_band: int     # agents outside the [margin, size - margin] interior

    def summary(self) -> str:
        return (f"n={self.count} centroid=({self.centroid[0]:.0f},{self.centroid[1]:.0f}) "
                f"speed={self.mean_speed:.2f}/{self.max_speed:.2f} "
                f"order={self.polarization:.2f} edge={self.outside_band}")


def compute_stats(agents: Sequence[Agent], cfg: SimulationConfig) -> FlockStats:
    if not agents:
        return FlockStats(0, (0.0, 0.0), 0.0, 0.0, 0.0, 0)

    pos = np.array([a.position for a in agents], dtype=float)
    vel = np.array([a.velocity for a in agents], dtype=float)

    speeds = np.linalg.norm(vel, axis=1)
    moving = speeds > 1e-12
    if moving.any():
        units = vel[moving] / speeds[moving, None]
        polarization = float(np.linalg.norm(units.sum(0)) / len(agents))
    else:
        polarization = 0.0

    lo = cfg.margin
    hi = np.array([cfg.field.width - cfg.margin, cfg.field.height - cfg.margin])
    outside = ((pos < lo) | (pos > hi)).any(axis=1)

    centroid = pos.mean(0)
    return FlockStats(
        count=len(agents),
        centroid=(float(centroid[0]), float(centroid[1])),
        mean_speed=float(speeds.mean()),
        max_speed=float(speeds.max()),
        polarization=polarization,
        outside_band=int(outside.sum()),
    )
