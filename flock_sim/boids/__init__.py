"""
Flocking Simulation

Cohesion, separation and alignment over a fixed population of agents
in a bounded 2D field, with speed limiting and soft boundary turning.
"""

from .flock_state import Field, SimulationConfig, FlockError, ConfigError, load_config
from .agent import Agent, AgentMark
from .flock import Flock, FlockNotPopulatedError, generate_random_seed
from .flock_stats import FlockStats, compute_stats
from .flock_controller import FlockController

__all__ = [
    'Field',
    'SimulationConfig',
    'FlockError',
    'ConfigError',
    'load_config',
    'Agent',
    'AgentMark',
    'Flock',
    'FlockNotPopulatedError',
    'generate_random_seed',
    'FlockStats',
    'compute_stats',
    'FlockController',
]
