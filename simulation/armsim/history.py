"""Trajectory and joint-angle history of the arm."""

import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple

logger = logging.getLogger(__name__)


class AngleSample(NamedTuple):
    """One completed motion: (motion counter, q1 in degrees, q2 in degrees)."""
    timestamp: int
    q1_deg: float
    q2_deg: float


def angle_columns(samples: List[AngleSample]) -> Tuple[List[int], List[float], List[float]]:
    """Split samples into (counters, q1_deg, q2_deg) columns for plotting."""
    counters = [s.timestamp for s in samples]
    q1 = [s.q1_deg for s in samples]
    q2 = [s.q2_deg for s in samples]
    return counters, q1, q2


@dataclass
class Trajectory:
    """End-effector points sampled during one motion, in order."""

    points: List[Tuple[float, float]] = field(default_factory=list)

    def append(self, x: float, y: float) -> None:
        self.points.append((x, y))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


class MotionHistory:
    """Accumulated trajectories and the per-motion angle time series.

    A trajectory is registered for every validated move request; an angle
    sample is appended only when a motion completes.
    """

    def __init__(self):
        self.trajectories: List[Trajectory] = []
        self.angle_samples: List[AngleSample] = []
        self.counter = 0

    def begin_trajectory(self) -> Trajectory:
        trajectory = Trajectory()
        self.trajectories.append(trajectory)
        return trajectory

    def record_sample(self, q1_deg: float, q2_deg: float) -> AngleSample:
        self.counter += 1
        sample = AngleSample(self.counter, q1_deg, q2_deg)
        self.angle_samples.append(sample)
        return sample

    def reset(self) -> None:
        logger.info("Clearing %d trajectories and %d angle samples",
                    len(self.trajectories), len(self.angle_samples))
        self.trajectories = []
        self.angle_samples = []
        self.counter = 0
