"""Forward and inverse kinematics for 2-DOF planar arm."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# Acceptance band for the pinned-shoulder solve (length units)
FIXED_JOINT_TOLERANCE = 0.5


class KinematicsError(ValueError):
    """Base class for targets the solver cannot place the arm at."""

    def __init__(self, message: str, point: Tuple[float, float]):
        super().__init__(message)
        self.point = point


class WorkspaceError(KinematicsError):
    """Target radius lies outside the reachable annulus."""

    def __init__(self, point: Tuple[float, float], reach_min: float, reach_max: float):
        x, y = point
        super().__init__(
            f"Target ({x:.2f}, {y:.2f}) unreachable: outside workspace "
            f"[{reach_min:.2f}, {reach_max:.2f}]",
            point,
        )
        self.reach_min = reach_min
        self.reach_max = reach_max


class SingularityError(KinematicsError):
    """Law-of-cosines term fell outside [-1, 1] after the radius check passed."""

    def __init__(self, point: Tuple[float, float], cosine: float):
        x, y = point
        super().__init__(
            f"Singularity: cannot reach ({x}, {y}), cos(q2) = {cosine:.6f}",
            point,
        )
        self.cosine = cosine


class UnreachableWithFixedJointError(KinematicsError):
    """Pinned-shoulder solve misses the target by more than the tolerance."""

    def __init__(self, point: Tuple[float, float], q1_fixed: float,
                 distance: float, link_length: float, tolerance: float):
        x, y = point
        super().__init__(
            f"Target ({x:.2f}, {y:.2f}) unreachable with q1 fixed at "
            f"{np.degrees(q1_fixed):.1f} deg (elbow distance {distance:.3f}, "
            f"link {link_length:.3f}, tolerance {tolerance})",
            point,
        )
        self.q1_fixed = q1_fixed
        self.distance = distance
        self.tolerance = tolerance


@dataclass(frozen=True)
class IKResult:
    """Outcome of a solve: either joint angles or the error that prevented them."""

    angles: Optional[Tuple[float, float]] = None
    error: Optional[KinematicsError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ArmKinematics:
    """2-DOF planar arm kinematics.

    Link 1 (L1): Shoulder to elbow
    Link 2 (L2): Elbow to end-effector
    """

    def __init__(self, L1: float = 12.0, L2: float = 12.0):
        """
        Initialize with link lengths.

        Args:
            L1: Shoulder to elbow length
            L2: Elbow to end-effector length
        """
        self.L1 = L1
        self.L2 = L2

    @property
    def reach_max(self) -> float:
        return self.L1 + self.L2

    @property
    def reach_min(self) -> float:
        return abs(self.L1 - self.L2)

    def in_workspace(self, r: float) -> bool:
        """Coarse reachability check on the target radius."""
        return self.reach_min <= r <= self.reach_max

    def forward(self, theta1: float, theta2: float) -> Tuple[float, float]:
        """
        Compute forward kinematics.

        Args:
            theta1: Shoulder angle (radians)
            theta2: Elbow angle (radians)

        Returns:
            (x, y) end-effector position
        """
        x = self.L1 * np.cos(theta1) + self.L2 * np.cos(theta1 + theta2)
        y = self.L1 * np.sin(theta1) + self.L2 * np.sin(theta1 + theta2)
        return (float(x), float(y))

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        """
        Compute inverse kinematics (elbow-up solution).

        Uses law of cosines to solve for joint angles. Only the elbow-up
        branch (theta2 in [0, pi]) is ever returned.

        Args:
            x: Target X position
            y: Target Y position

        Returns:
            (theta1, theta2) joint angles in radians

        Raises:
            WorkspaceError: If target radius is outside [reach_min, reach_max]
            SingularityError: If cos(theta2) leaves [-1, 1] (boundary round-off)
        """
        d_squared = x**2 + y**2
        d = np.sqrt(d_squared)

        if not self.in_workspace(d):
            raise WorkspaceError((x, y), self.reach_min, self.reach_max)

        # Elbow angle using law of cosines
        cos_theta2 = (d_squared - self.L1**2 - self.L2**2) / (2 * self.L1 * self.L2)

        if abs(cos_theta2) > 1:
            raise SingularityError((x, y), cos_theta2)

        theta2 = np.arccos(cos_theta2)

        # Shoulder angle
        alpha = np.arctan2(y, x)
        beta = np.arctan2(self.L2 * np.sin(theta2),
                          self.L1 + self.L2 * np.cos(theta2))
        theta1 = alpha - beta

        return (float(theta1), float(theta2))

    def inverse_fixed_shoulder(self, x: float, y: float, theta1: float,
                               tolerance: float = FIXED_JOINT_TOLERANCE) -> Tuple[float, float]:
        """
        Solve for the elbow angle with the shoulder pinned at theta1.

        The elbow is pointed straight at the target; the solve is accepted
        when the elbow-to-target distance is within tolerance of L2.

        Raises:
            UnreachableWithFixedJointError: If |distance - L2| > tolerance
        """
        x1 = self.L1 * np.cos(theta1)
        y1 = self.L1 * np.sin(theta1)

        theta2 = np.arctan2(y - y1, x - x1) - theta1
        distance = np.sqrt((x - x1)**2 + (y - y1)**2)

        if abs(distance - self.L2) > tolerance:
            raise UnreachableWithFixedJointError(
                (x, y), theta1, float(distance), self.L2, tolerance)

        return (float(theta1), float(theta2))

    def solve(self, x: float, y: float, theta1_fixed: Optional[float] = None,
              tolerance: float = FIXED_JOINT_TOLERANCE) -> IKResult:
        """Solve without raising; the error kind is carried in the result."""
        try:
            if theta1_fixed is None:
                angles = self.inverse(x, y)
            else:
                angles = self.inverse_fixed_shoulder(x, y, theta1_fixed, tolerance)
        except KinematicsError as exc:
            logger.debug("IK failed: %s", exc)
            return IKResult(error=exc)
        return IKResult(angles=angles)


def forward_kinematics(q1: float, q2: float, l1: float, l2: float) -> Tuple[float, float]:
    return ArmKinematics(l1, l2).forward(q1, q2)


def inverse_kinematics(xd: float, yd: float, l1: float, l2: float) -> Tuple[float, float]:
    return ArmKinematics(l1, l2).inverse(xd, yd)


def constrained_inverse_kinematics(xd: float, yd: float, l1: float, l2: float,
                                   q1_fixed: float) -> Tuple[float, float]:
    return ArmKinematics(l1, l2).inverse_fixed_shoulder(xd, yd, q1_fixed)
