"""Eased joint-space interpolation between two arm poses."""

import logging
from enum import Enum
from typing import Iterator, Optional

from armsim.history import Trajectory
from armsim.kinematics import ArmKinematics
from armsim.state import Pose

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 2000
DEFAULT_SAMPLE_RATE = 60


class MotionState(Enum):
    IDLE = "idle"
    ANIMATING = "animating"


def ease_out_cubic(progress: float) -> float:
    """Cubic ease-out: fast start, decelerating to rest at progress 1."""
    return 1 - (1 - progress) ** 3


def frames_for(duration_ms: float, sample_rate: float) -> int:
    """
    Number of samples a motion produces.

    Args:
        duration_ms: Motion duration in milliseconds
        sample_rate: Samples per second

    Raises:
        ValueError: If the pair yields less than one sample
    """
    if duration_ms <= 0 or sample_rate <= 0:
        raise ValueError(f"Duration ({duration_ms} ms) and sample rate "
                         f"({sample_rate}/s) must be positive")
    frames = round(duration_ms / 1000 * sample_rate)
    if frames < 1:
        raise ValueError(f"{duration_ms} ms at {sample_rate}/s yields no samples")
    return frames


class MotionScheduler:
    """Two-state (idle/animating) interpolator driven one sample at a time.

    A started motion always runs to completion; starting while animating
    is refused.
    """

    def __init__(self, kinematics: ArmKinematics,
                 duration_ms: float = DEFAULT_DURATION_MS,
                 sample_rate: float = DEFAULT_SAMPLE_RATE):
        self.kinematics = kinematics
        self.duration_ms = duration_ms
        self.sample_rate = sample_rate
        self.frames_total = frames_for(duration_ms, sample_rate)

        self.state = MotionState.IDLE
        self.frame = 0
        self.current: Optional[Pose] = None
        self._start: Optional[Pose] = None
        self._target: Optional[Pose] = None
        self._trajectory: Optional[Trajectory] = None

    @property
    def is_animating(self) -> bool:
        return self.state is MotionState.ANIMATING

    @property
    def target(self) -> Optional[Pose]:
        return self._target

    def start(self, start: Pose, target: Pose, trajectory: Trajectory) -> bool:
        """
        Arm the scheduler with a motion from start to target.

        Returns:
            True if the motion started, False if one is already running
        """
        if self.is_animating:
            return False

        self._start = start
        self._target = target
        self._trajectory = trajectory
        self.current = start
        self.frame = 0
        self.state = MotionState.ANIMATING
        logger.info("Motion started: (%.4f, %.4f) -> (%.4f, %.4f) rad over %d samples",
                    start.angles.q1, start.angles.q2,
                    target.angles.q1, target.angles.q2, self.frames_total)
        return True

    def next_sample(self) -> Optional[Pose]:
        """
        Produce the next pose of the running motion.

        The final sample is snapped exactly to the target and the scheduler
        returns to idle.

        Returns:
            The new current pose, or None when idle
        """
        if not self.is_animating:
            return None

        self.frame += 1
        if self.frame >= self.frames_total:
            pose = self._target
        else:
            eased = ease_out_cubic(self.frame / self.frames_total)
            q1 = self._start.angles.q1 + (self._target.angles.q1 - self._start.angles.q1) * eased
            q2 = self._start.angles.q2 + (self._target.angles.q2 - self._start.angles.q2) * eased
            pose = Pose.from_angles(q1, q2, self.kinematics)

        self._trajectory.append(*pose.position)
        self.current = pose
        logger.debug("Sample %d/%d: (%.3f, %.3f)", self.frame, self.frames_total, *pose.position)

        if self.frame >= self.frames_total:
            self.state = MotionState.IDLE
            self._trajectory = None
        return pose

    def samples(self) -> Iterator[Pose]:
        """Yield the remaining poses of the running motion."""
        while self.is_animating:
            yield self.next_sample()
