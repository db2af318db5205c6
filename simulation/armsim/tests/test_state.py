"""Tests for robot parameters and arm state."""

import pytest
import numpy as np
from armsim.kinematics import WorkspaceError, UnreachableWithFixedJointError
from armsim.state import ArmState, JointConfiguration, Pose, RobotParameters


class TestRobotParameters:
    """Test static arm geometry."""

    def test_reach_bounds(self):
        params = RobotParameters(l1=10.0, l2=11.0)
        assert params.reach_min == 1.0
        assert params.reach_max == 21.0

    @pytest.mark.parametrize("l1, l2", [(0.0, 12.0), (12.0, -1.0)])
    def test_non_positive_lengths_rejected(self, l1, l2):
        with pytest.raises(ValueError, match="must be positive"):
            RobotParameters(l1=l1, l2=l2)


class TestPose:
    """Test pose construction."""

    def test_position_follows_angles(self):
        kin = RobotParameters().kinematics()
        pose = Pose.from_angles(0.3, 0.9, kin)
        assert pose.position == kin.forward(0.3, 0.9)
        assert pose.angles == JointConfiguration(0.3, 0.9)

    def test_degrees(self):
        angles = JointConfiguration(np.pi / 2, np.pi)
        q1_deg, q2_deg = angles.degrees()
        assert abs(q1_deg - 90.0) < 1e-9
        assert abs(q2_deg - 180.0) < 1e-9


class TestArmState:
    """Test target updates."""

    @pytest.fixture
    def state(self):
        return ArmState(RobotParameters(l1=12.0, l2=12.0))

    def test_initial_pose(self, state):
        assert state.snapshot_current().position == (24.0, 0.0)
        assert state.target is state.current

    def test_set_target(self, state):
        target = state.set_target(14.0, 14.0)
        assert state.target is target
        x, y = target.position
        assert abs(x - 14.0) < 1e-9
        assert abs(y - 14.0) < 1e-9
        # current is untouched until a motion runs
        assert state.current.position == (24.0, 0.0)

    def test_failed_target_leaves_state(self, state):
        previous = state.set_target(14.0, 14.0)
        with pytest.raises(WorkspaceError):
            state.set_target(100.0, 100.0)
        assert state.target is previous

    def test_fixed_shoulder_target(self, state):
        target = state.set_target(0.0, 24.0, q1_fixed=np.pi / 2)
        assert target.angles.q1 == np.pi / 2
        assert abs(target.angles.q2) < 1e-9

    def test_fixed_shoulder_custom_tolerance(self, state):
        with pytest.raises(UnreachableWithFixedJointError):
            state.set_target(24.4, 0.0, q1_fixed=0.0, tolerance=0.1)
        target = state.set_target(24.4, 0.0, q1_fixed=0.0)
        assert target.angles.q1 == 0.0
