"""Simulation context: arm state, motion scheduler and history in one owner."""

import logging
from typing import List, Optional, Protocol, Tuple

from armsim.config import SimulationConfig
from armsim.history import AngleSample, MotionHistory
from armsim.motion import MotionScheduler
from armsim.report import kinematics_report
from armsim.state import ArmState, Pose

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, state: ArmState, history: MotionHistory,
               motion_target: Optional[Pose]) -> None:
        ...


class Plotter(Protocol):
    def plot(self, samples: List[AngleSample]) -> None:
        ...


class SimulationContext:
    """Owns one simulated arm and drives it one tick at a time.

    Move requests are validated by the solver before anything is recorded;
    a failed request leaves state and history untouched. Callers advance
    the motion by calling ``step`` at the configured sample rate.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 renderer: Optional[Renderer] = None,
                 plotter: Optional[Plotter] = None):
        self.config = config or SimulationConfig()
        self.renderer = renderer
        self.plotter = plotter

        self.state = ArmState(self.config.robot_parameters(), self.config.initial_angles)
        self.history = MotionHistory()
        self.scheduler = MotionScheduler(self.state.kinematics,
                                         duration_ms=self.config.duration_ms,
                                         sample_rate=self.config.sample_rate)

    @property
    def is_animating(self) -> bool:
        return self.scheduler.is_animating

    @property
    def motion_target(self) -> Optional[Pose]:
        """Pose the running motion is heading to; None when idle."""
        return self.scheduler.target if self.scheduler.is_animating else None

    def workspace_bounds(self) -> Tuple[float, float]:
        """(reach_min, reach_max) radii of the reachable annulus."""
        return (self.state.params.reach_min, self.state.params.reach_max)

    def home_q1(self) -> float:
        """Shoulder angle pinned by go_home."""
        if self.config.home_q1 is not None:
            return self.config.home_q1
        q1, _ = self.state.kinematics.inverse(*self.config.home_position)
        return q1

    def request_move(self, x: float, y: float) -> bool:
        """
        Request a move of the end-effector to (x, y).

        A request made while a motion is running still replaces the stored
        target and registers a trajectory, but the running motion continues
        to its original target and no second motion is started.

        Returns:
            True if a new motion started

        Raises:
            KinematicsError: Target cannot be reached; nothing is recorded
        """
        self.state.set_target(x, y)
        return self._begin_motion()

    def go_home(self) -> bool:
        """Move to the configured home position with the shoulder pinned."""
        x, y = self.config.home_position
        self.state.set_target(x, y, q1_fixed=self.home_q1(),
                              tolerance=self.config.fixed_joint_tolerance)
        started = self._begin_motion()
        if started:
            logger.info("Returning to home position (%.1f, %.1f)", x, y)
        return started

    def _begin_motion(self) -> bool:
        trajectory = self.history.begin_trajectory()
        started = self.scheduler.start(self.state.snapshot_current(), self.state.target, trajectory)
        if not started:
            logger.warning("Motion in progress; target (%.2f, %.2f) stored but not started",
                           *self.state.target.position)
        return started

    def step(self) -> Optional[Pose]:
        """
        Advance the running motion by one sample.

        Returns:
            The pose produced this tick, or None when idle
        """
        pose = self.scheduler.next_sample()
        if pose is None:
            return None

        self.state.current = pose
        if self.renderer is not None:
            self.renderer.render(self.state, self.history, self.motion_target)

        if not self.scheduler.is_animating:
            self._complete_motion()
        return pose

    def _complete_motion(self) -> None:
        q1_deg, q2_deg = self.state.current.angles.degrees()
        self.history.record_sample(q1_deg, q2_deg)
        if self.plotter is not None:
            self.plotter.plot(self.history.angle_samples)
        logger.info("Motion completed. Accumulated trajectories: %d", len(self.history.trajectories))
        logger.info("\n%s", kinematics_report(self.state, self.history))

    def run_until_idle(self) -> int:
        """Step until the running motion completes; returns samples produced."""
        count = 0
        while self.step() is not None:
            count += 1
        return count

    def reset(self) -> None:
        """Clear trajectories and angle history, then redraw."""
        self.history.reset()
        if self.plotter is not None:
            self.plotter.plot(self.history.angle_samples)
        if self.renderer is not None:
            self.renderer.render(self.state, self.history, self.motion_target)
