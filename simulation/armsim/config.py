"""Simulation settings with JSON overrides."""

import json
import math
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

from armsim.kinematics import FIXED_JOINT_TOLERANCE
from armsim.motion import DEFAULT_DURATION_MS, DEFAULT_SAMPLE_RATE, frames_for
from armsim.state import RobotParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    """Arm geometry, motion timing and home pose. Lengths are in cm."""

    l1: float = 12.0
    l2: float = 12.0
    tool_length: float = 2.0
    duration_ms: float = DEFAULT_DURATION_MS
    sample_rate: float = DEFAULT_SAMPLE_RATE
    fixed_joint_tolerance: float = FIXED_JOINT_TOLERANCE
    home_position: Tuple[float, float] = (14.0, 14.0)
    # Shoulder angle pinned by go_home (radians); None derives it from the home point
    home_q1: Optional[float] = None
    initial_angles: Tuple[float, float] = (0.0, 0.0)
    log_level: str = "INFO"

    def __post_init__(self):
        for key in _NUMBER_KEYS:
            value = getattr(self, key)
            if key == "home_q1" and value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{key} must be a number, got {value!r}")
        # Validate geometry and timing
        self.robot_parameters()
        frames_for(self.duration_ms, self.sample_rate)
        if self.fixed_joint_tolerance < 0:
            raise ValueError(f"fixed_joint_tolerance must be >= 0, got {self.fixed_joint_tolerance}")
        if not isinstance(self.log_level, str) or \
                self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level {self.log_level!r}")

    def robot_parameters(self) -> RobotParameters:
        return RobotParameters(l1=self.l1, l2=self.l2, tool_length=self.tool_length)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        values = dict(data)
        for key in _NUMBER_KEYS:
            if key in values and not (key == "home_q1" and values[key] is None):
                values[key] = _number(key, values[key])
        for key in ("home_position", "initial_angles"):
            if key in values:
                pair = values[key]
                if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                    raise ValueError(f"{key} must have two values, got {pair!r}")
                values[key] = (_number(key, pair[0]), _number(key, pair[1]))
        return cls(**values)


_NUMBER_KEYS = ("l1", "l2", "tool_length", "duration_ms", "sample_rate",
                "fixed_joint_tolerance", "home_q1")


def _number(key: str, value: Any) -> float:
    # reject bool, an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{key} must be a number, got {value!r}")
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"{key} must be finite, got {value!r}")
    return number


def load_json(file_path: str) -> Dict[str, Any]:
    """Load JSON file."""
    with open(file_path, 'r') as f:
        return json.load(f)


def load_config(file_path: Optional[str] = None) -> SimulationConfig:
    """Defaults, overridden by the JSON object at file_path when given."""
    if file_path is None:
        return SimulationConfig()
    data = load_json(file_path)
    if not isinstance(data, dict):
        raise ValueError(f"Config {file_path} must contain a JSON object")
    logger.info("Loaded config from %s", file_path)
    return SimulationConfig.from_dict(data)
