"""Tests for trajectory and angle history."""

import pytest
from armsim.history import AngleSample, MotionHistory, angle_columns


class TestMotionHistory:
    """Test history bookkeeping."""

    @pytest.fixture
    def history(self):
        return MotionHistory()

    def test_empty(self, history):
        assert history.trajectories == []
        assert history.angle_samples == []
        assert history.counter == 0

    def test_begin_trajectory_registers(self, history):
        first = history.begin_trajectory()
        second = history.begin_trajectory()
        assert history.trajectories == [first, second]
        assert history.trajectories[0] is first
        first.append(1.0, 2.0)
        assert history.trajectories[0].points == [(1.0, 2.0)]

    def test_record_sample_counts_from_one(self, history):
        s1 = history.record_sample(10.0, 20.0)
        s2 = history.record_sample(30.0, 40.0)
        assert s1 == AngleSample(1, 10.0, 20.0)
        assert s2.timestamp == 2
        assert history.angle_samples == [s1, s2]

    def test_reset(self, history):
        history.begin_trajectory().append(0.0, 0.0)
        history.record_sample(1.0, 2.0)
        history.reset()
        assert history.trajectories == []
        assert history.angle_samples == []
        assert history.counter == 0
        assert history.record_sample(5.0, 6.0).timestamp == 1

    def test_angle_columns(self, history):
        history.record_sample(1.0, 2.0)
        history.record_sample(3.0, 4.0)
        counters, q1, q2 = angle_columns(history.angle_samples)
        assert counters == [1, 2]
        assert q1 == [1.0, 3.0]
        assert q2 == [2.0, 4.0]

    def test_angle_columns_empty(self):
        assert angle_columns([]) == ([], [], [])
