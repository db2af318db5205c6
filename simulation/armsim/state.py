"""Robot parameters, joint configurations and the current/target arm state."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from armsim.kinematics import ArmKinematics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RobotParameters:
    """Static geometry of the arm. Tool length is reported only."""

    l1: float = 12.0
    l2: float = 12.0
    tool_length: float = 2.0

    def __post_init__(self):
        if not self.l1 > 0:
            raise ValueError(f"Link length l1 must be positive, got {self.l1}")
        if not self.l2 > 0:
            raise ValueError(f"Link length l2 must be positive, got {self.l2}")

    @property
    def reach_min(self) -> float:
        return abs(self.l1 - self.l2)

    @property
    def reach_max(self) -> float:
        return self.l1 + self.l2

    def kinematics(self) -> ArmKinematics:
        return ArmKinematics(L1=self.l1, L2=self.l2)


@dataclass(frozen=True)
class JointConfiguration:
    q1: float
    q2: float

    def degrees(self) -> Tuple[float, float]:
        return (float(np.degrees(self.q1)), float(np.degrees(self.q2)))


@dataclass(frozen=True)
class Pose:
    """Joint angles plus the end-effector position they produce.

    Use ``Pose.from_angles`` so the position always matches forward
    kinematics of the angles.
    """

    angles: JointConfiguration
    position: Tuple[float, float]

    @classmethod
    def from_angles(cls, q1: float, q2: float, kinematics: ArmKinematics) -> "Pose":
        return cls(JointConfiguration(q1, q2), kinematics.forward(q1, q2))


class ArmState:
    """Current and target poses of the arm."""

    def __init__(self, params: RobotParameters,
                 initial_angles: Tuple[float, float] = (0.0, 0.0)):
        self.params = params
        self.kinematics = params.kinematics()
        self.current = Pose.from_angles(*initial_angles, self.kinematics)
        self.target = self.current

    def set_target(self, x: float, y: float,
                   q1_fixed: Optional[float] = None,
                   tolerance: Optional[float] = None) -> Pose:
        """
        Solve for (x, y) and store the result as the target pose.

        Args:
            x: Target X position
            y: Target Y position
            q1_fixed: Pin the shoulder at this angle (radians) and use the
                constrained solve
            tolerance: Acceptance band for the constrained solve

        Returns:
            The new target pose

        Raises:
            KinematicsError: Propagated from the solver; target is unchanged
        """
        if q1_fixed is None:
            q1, q2 = self.kinematics.inverse(x, y)
        elif tolerance is None:
            q1, q2 = self.kinematics.inverse_fixed_shoulder(x, y, q1_fixed)
        else:
            q1, q2 = self.kinematics.inverse_fixed_shoulder(x, y, q1_fixed, tolerance)

        self.target = Pose.from_angles(q1, q2, self.kinematics)
        logger.debug("Target set to (%.3f, %.3f) -> q1=%.4f q2=%.4f", x, y, q1, q2)
        return self.target

    def snapshot_current(self) -> Pose:
        return self.current
