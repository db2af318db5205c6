"""Tests for eased motion interpolation."""

import pytest
from armsim.history import Trajectory
from armsim.kinematics import ArmKinematics
from armsim.motion import MotionScheduler, MotionState, ease_out_cubic, frames_for
from armsim.state import Pose


class TestEasing:
    """Test the cubic ease-out curve."""

    def test_endpoints(self):
        assert ease_out_cubic(0.0) == 0.0
        assert ease_out_cubic(1.0) == 1.0

    def test_strictly_increasing_over_motion(self):
        """The 120 sampled eased values climb strictly and end at exactly 1."""
        frames = frames_for(2000, 60)
        values = [ease_out_cubic(i / frames) for i in range(1, frames + 1)]
        assert len(values) == 120
        assert all(b > a for a, b in zip(values, values[1:]))
        assert values[-1] == 1.0

    def test_decelerates(self):
        """Ease-out covers more than half the distance in the first half."""
        assert ease_out_cubic(0.5) == pytest.approx(0.875)


class TestFramesFor:
    """Test sample count from duration and rate."""

    def test_default_pair(self):
        assert frames_for(2000, 60) == 120

    def test_custom_pair(self):
        assert frames_for(500, 30) == 15

    @pytest.mark.parametrize("duration, rate", [(0, 60), (2000, 0), (-5, 60), (1, 60)])
    def test_invalid_pairs(self, duration, rate):
        with pytest.raises(ValueError):
            frames_for(duration, rate)


class TestMotionScheduler:
    """Test the idle/animating state machine."""

    @pytest.fixture
    def kin(self):
        return ArmKinematics(L1=12.0, L2=12.0)

    @pytest.fixture
    def scheduler(self, kin):
        return MotionScheduler(kin)

    @pytest.fixture
    def poses(self, kin):
        start = Pose.from_angles(0.0, 0.0, kin)
        target = Pose.from_angles(*kin.inverse(14.0, 14.0), kin)
        return start, target

    def test_idle_returns_none(self, scheduler):
        assert scheduler.state is MotionState.IDLE
        assert scheduler.next_sample() is None

    def test_full_motion(self, scheduler, poses):
        start, target = poses
        trajectory = Trajectory()
        assert scheduler.start(start, target, trajectory)
        assert scheduler.is_animating

        produced = list(scheduler.samples())

        assert len(produced) == 120
        assert len(trajectory) == 120
        assert scheduler.state is MotionState.IDLE
        assert produced[-1] == target
        assert scheduler.current == target
        assert trajectory.points[-1] == target.position

    def test_samples_are_on_the_arm(self, scheduler, poses, kin):
        start, target = poses
        trajectory = Trajectory()
        scheduler.start(start, target, trajectory)
        for pose, point in zip(scheduler.samples(), trajectory.points):
            assert pose.position == kin.forward(pose.angles.q1, pose.angles.q2)
            assert pose.position == point

    def test_joint_progress_monotonic(self, scheduler, poses):
        start, target = poses
        scheduler.start(start, target, Trajectory())
        q1_values = [p.angles.q1 for p in scheduler.samples()]
        assert all(b > a for a, b in zip(q1_values, q1_values[1:]))

    def test_first_sample_is_eased(self, scheduler, poses):
        start, target = poses
        scheduler.start(start, target, Trajectory())
        pose = scheduler.next_sample()
        expected = target.angles.q2 * ease_out_cubic(1 / 120)
        assert pose.angles.q2 == pytest.approx(expected)

    def test_start_while_animating_refused(self, scheduler, poses, kin):
        start, target = poses
        first = Trajectory()
        second = Trajectory()
        scheduler.start(start, target, first)
        scheduler.next_sample()

        other = Pose.from_angles(1.0, 1.0, kin)
        assert not scheduler.start(start, other, second)
        assert scheduler.target == target

        list(scheduler.samples())
        assert len(first) == 120
        assert len(second) == 0

    def test_restart_after_completion(self, scheduler, poses):
        start, target = poses
        scheduler.start(start, target, Trajectory())
        list(scheduler.samples())
        back = Trajectory()
        assert scheduler.start(target, start, back)
        list(scheduler.samples())
        assert scheduler.current == start
        assert len(back) == 120

    def test_configurable_rate(self, kin, poses):
        start, target = poses
        scheduler = MotionScheduler(kin, duration_ms=1000, sample_rate=30)
        scheduler.start(start, target, Trajectory())
        assert len(list(scheduler.samples())) == 30
