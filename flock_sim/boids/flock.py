"""
Flock - Owns the agent population and advances it one tick at a time

The caller (frame clock) must reset() before the first tick(). After that,
tick() may be called at any rate; there is no delta-time scaling, so
perceived speed follows the tick rate.

Update ordering (config.update_mode):
- sequential: agents update in place, in stored order; later agents see
  neighbors already moved this tick
- snapshot: every agent reads a frozen copy of the population as it was
  at the start of the tick, then all results are committed together
"""

import random
from typing import List, Optional

from flock_sim import config as defaults
from flock_sim.boids.agent import Agent, AgentMark
from flock_sim.boids.flock_state import Field, FlockError, SimulationConfig
from flock_sim.utils.logger import logger


class FlockNotPopulatedError(FlockError, RuntimeError):
    """Raised when the flock is ticked before the first reset()."""
    pass


class XorShift32:
    """Deterministic PRNG using xorshift32 algorithm."""

    def __init__(self, seed: int):
        self._state = (seed & 0xFFFFFFFF) or 1

    def next_uint32(self) -> int:
        x = self._state
        x ^= (x << 13) & 0xFFFFFFFF
        x ^= (x >> 17) & 0xFFFFFFFF
        x ^= (x << 5) & 0xFFFFFFFF
        self._state = x
        return x

    def next_float(self) -> float:
        """Random float in [0, 1)."""
        return self.next_uint32() * 2.3283064365386963e-10

    def next_float_range(self, lo: float, hi: float) -> float:
        """Random float in [lo, hi)."""
        return lo + self.next_float() * (hi - lo)


def generate_random_seed() -> int:
    """Generate a random seed value."""
    return random.randint(0, 0x7FFFFFFF)


class Flock:
    """
    Fixed-size population of agents in a single field.

    Two states: empty (before the first reset) and populated. reset() is
    the only way into the populated state and always rebuilds every agent.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self._config = (config or SimulationConfig()).validate()
        self._agents: List[Agent] = []
        self._rng: Optional[XorShift32] = None
        self._seed: Optional[int] = None
        self._tick_count = 0

    # === Configuration ===

    def configure(self, config: SimulationConfig) -> None:
        """Replace the config; takes effect on the next tick or reset."""
        self._config = config.validate()

    def resize(self, width: float, height: float) -> None:
        """Change field bounds; the boundary rule uses them from the next tick."""
        self._config = self._config.with_field(width, height).validate()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def field(self) -> Field:
        return self._config.field

    # === Lifecycle ===

    def reset(self, config: Optional[SimulationConfig] = None,
              seed: Optional[int] = None) -> int:
        """
        Discard all agents and create population_count fresh random ones.

        Seed precedence: explicit seed, then config.seed, then a new random
        seed. Returns the seed used.
        """
        if config is not None:
            self.configure(config)
        cfg = self._config

        if seed is None:
            seed = cfg.seed if cfg.seed is not None else generate_random_seed()
        self._seed = seed
        self._rng = XorShift32(seed)

        agents = []
        for _ in range(cfg.population_count):
            agent = Agent(color_seed=self._rng.next_uint32())
            agent.initialize_random(cfg.field, self._rng.next_float_range)
            agents.append(agent)
        self._agents = agents
        self._tick_count = 0

        logger.flock(f"Reset {len(agents)} agents in "
                     f"{cfg.field.width:g}x{cfg.field.height:g}", details=f"seed={seed}")
        return seed

    def tick(self, config: Optional[SimulationConfig] = None) -> None:
        """Advance every agent by one update."""
        if not self._agents:
            raise FlockNotPopulatedError("Flock.tick() called before reset()")
        if config is not None:
            self.configure(config)
        cfg = self._config

        if cfg.update_mode == defaults.UPDATE_MODE_SNAPSHOT:
            frozen = [agent.copy() for agent in self._agents]
            for agent in self._agents:
                agent.update(frozen, cfg)
        else:
            for agent in self._agents:
                agent.update(self._agents, cfg)

        self._tick_count += 1

    def populate(self, agents: List[Agent]) -> None:
        """Install a hand-built population (deterministic scenarios)."""
        if not agents:
            raise FlockError("populate() needs at least one agent")
        self._agents = list(agents)
        self._seed = None
        self._tick_count = 0

    # === Read-only views ===

    @property
    def agents(self) -> List[Agent]:
        """The live agents, in update order. Do not mutate."""
        return self._agents

    @property
    def populated(self) -> bool:
        return bool(self._agents)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def snapshot(self) -> List[AgentMark]:
        """Renderer view of the population, valid until the next tick or reset."""
        return [agent.mark() for agent in self._agents]

    def __len__(self) -> int:
        return len(self._agents)
