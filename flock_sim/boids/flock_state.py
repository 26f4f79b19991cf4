"""
Flock State - Field and configuration values for the flocking simulation

Both are frozen: a config is read-only for the duration of a run, and a
resize produces a new value instead of mutating shared state.
Handles JSON loading and dict round-trip for --config files.
"""

import json
from dataclasses import dataclass, asdict, replace
from dataclasses import field as dataclass_field
from pathlib import Path
from typing import Dict, Any, Optional, Union

from flock_sim import config as defaults


class FlockError(Exception):
    """Base class for flock simulation errors."""
    pass


class ConfigError(FlockError, ValueError):
    """Raised when a simulation config is invalid or cannot be loaded."""
    pass


def _as_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false (got {value!r})")
    return value


def _as_int(data: Dict[str, Any], key: str, default: Optional[int]) -> Optional[int]:
    value = data.get(key, default)
    if value is None and default is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be a whole number (got {value!r})")
    return value


@dataclass(frozen=True)
class Field:
    """Rectangular simulation bounds."""
    width: float = defaults.FIELD_WIDTH
    height: float = defaults.FIELD_HEIGHT

    def contains(self, x: float, y: float) -> bool:
        return 0.0 <= x <= self.width and 0.0 <= y <= self.height


@dataclass(frozen=True)
class SimulationConfig:
    """
    Every tunable of a run.

    Degenerate rule values (visual_range <= 0, min_distance <= 0) are
    accepted and simply mean no neighbor ever qualifies for that rule.
    """

    population_count: int = defaults.POPULATION_COUNT
    visual_range: float = defaults.VISUAL_RANGE
    centering_factor: float = defaults.CENTERING_FACTOR
    min_distance: float = defaults.MIN_DISTANCE
    avoid_factor: float = defaults.AVOID_FACTOR
    matching_factor: float = defaults.MATCHING_FACTOR
    speed_limit: float = defaults.SPEED_LIMIT
    margin: float = defaults.MARGIN
    turn_factor: float = defaults.TURN_FACTOR
    field: Field = dataclass_field(default_factory=Field)

    # Count the agent itself in cohesion/alignment averages (reference quirk)
    include_self: bool = True
    update_mode: str = defaults.DEFAULT_UPDATE_MODE

    # None = draw a fresh seed on every reset
    seed: Optional[int] = None

    def validate(self) -> "SimulationConfig":
        """Raise ConfigError on precondition violations, return self otherwise."""
        if not defaults.MIN_POPULATION <= self.population_count <= defaults.MAX_POPULATION:
            raise ConfigError(
                f"population_count must be {defaults.MIN_POPULATION}-{defaults.MAX_POPULATION} "
                f"(got {self.population_count})")
        if self.field.width <= 0 or self.field.height <= 0:
            raise ConfigError(
                f"field must have positive size (got {self.field.width}x{self.field.height})")
        if self.speed_limit < 0:
            raise ConfigError(f"speed_limit must be >= 0 (got {self.speed_limit})")
        if self.update_mode not in defaults.UPDATE_MODES:
            raise ConfigError(
                f"update_mode must be one of {', '.join(defaults.UPDATE_MODES)} "
                f"(got {self.update_mode!r})")
        return self

    def with_field(self, width: float, height: float) -> "SimulationConfig":
        """Copy of this config with new field bounds."""
        return replace(self, field=Field(float(width), float(height)))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        data = asdict(self)
        data["field"] = [self.field.width, self.field.height]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """Deserialize, filling missing keys with defaults and ignoring unknown ones."""
        base = cls()
        try:
            size = data.get("field", [base.field.width, base.field.height])
            if isinstance(size, dict):
                size = [size.get("width", base.field.width),
                        size.get("height", base.field.height)]
            width, height = size

            return cls(
                population_count=_as_int(data, "population_count", base.population_count),
                visual_range=float(data.get("visual_range", base.visual_range)),
                centering_factor=float(data.get("centering_factor", base.centering_factor)),
                min_distance=float(data.get("min_distance", base.min_distance)),
                avoid_factor=float(data.get("avoid_factor", base.avoid_factor)),
                matching_factor=float(data.get("matching_factor", base.matching_factor)),
                speed_limit=float(data.get("speed_limit", base.speed_limit)),
                margin=float(data.get("margin", base.margin)),
                turn_factor=float(data.get("turn_factor", base.turn_factor)),
                field=Field(float(width), float(height)),
                include_self=_as_bool(data, "include_self", base.include_self),
                update_mode=str(data.get("update_mode", base.update_mode)),
                seed=_as_int(data, "seed", base.seed),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config value: {e}") from e


def load_config(path: Union[str, Path]) -> SimulationConfig:
    """Load and validate a SimulationConfig from a JSON file."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    return SimulationConfig.from_dict(data).validate()
