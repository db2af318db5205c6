"""Matplotlib drawing of the arm and its joint-angle chart."""

from typing import List, Optional

import numpy as np
import matplotlib.pyplot as plt

from armsim.history import AngleSample, MotionHistory, angle_columns
from armsim.state import ArmState, Pose


class ArmRenderer:
    """Draws links, joints, accumulated trajectories and workspace circles."""

    def __init__(self, ax, span: Optional[float] = None):
        self.ax = ax
        self.span = span
        self._trajectory_lines = []
        self._workspace_drawn = False

        (self.link1_line,) = ax.plot([], [], lw=6, color="blue", solid_capstyle="round")
        (self.link2_line,) = ax.plot([], [], lw=6, color="red", solid_capstyle="round")
        (self.base_dot,) = ax.plot([0.0], [0.0], "o", ms=10, color="black")
        (self.elbow_dot,) = ax.plot([], [], "o", ms=8, color="darkred")
        (self.tip_dot,) = ax.plot([], [], "o", ms=10, color="purple")
        (self.guide_line,) = ax.plot([], [], ls="--", lw=2, color=(0.0, 1.0, 0.0, 0.5))
        self.label = ax.text(0.0, 0.0, "", fontsize=9)
        self.status = ax.text(0.5, 0.97, "", transform=ax.transAxes, ha="center", va="top",
                              color="orange", fontweight="bold")

        ax.set_aspect("equal", "box")
        ax.axhline(0.0, color="black", alpha=0.3, lw=1)
        ax.axvline(0.0, color="black", alpha=0.3, lw=1)
        ax.set_xlabel("x [cm]")
        ax.set_ylabel("y [cm]")
        ax.set_title("2-DOF planar arm")

    def _draw_workspace(self, state: ArmState) -> None:
        params = state.params
        for radius in (params.reach_min, params.reach_max):
            if radius > 0:
                self.ax.add_patch(plt.Circle((0.0, 0.0), radius, fill=False, ls="--",
                                             lw=1, color=(0.6, 0.6, 0.6, 0.5)))
        span = self.span or params.reach_max * 1.25
        self.ax.set_xlim(-span, span)
        self.ax.set_ylim(-span, span)
        self._workspace_drawn = True

    def _draw_trajectories(self, history: MotionHistory) -> None:
        while len(self._trajectory_lines) > len(history.trajectories):
            self._trajectory_lines.pop().remove()
        while len(self._trajectory_lines) < len(history.trajectories):
            (line,) = self.ax.plot([], [], ls=(0, (5, 3)), lw=2, color="#8B4513")
            self._trajectory_lines.append(line)
        for line, trajectory in zip(self._trajectory_lines, history.trajectories):
            points = np.asarray(trajectory.points, dtype=float).reshape(-1, 2)
            line.set_data(points[:, 0], points[:, 1])

    def render(self, state: ArmState, history: MotionHistory,
               motion_target: Optional[Pose] = None) -> None:
        animating = motion_target is not None
        if not self._workspace_drawn:
            self._draw_workspace(state)
        self._draw_trajectories(history)

        q1 = state.current.angles.q1
        x1 = state.params.l1 * np.cos(q1)
        y1 = state.params.l1 * np.sin(q1)
        x2, y2 = state.current.position

        self.link1_line.set_data([0.0, x1], [0.0, y1])
        self.link2_line.set_data([x1, x2], [y1, y2])
        self.elbow_dot.set_data([x1], [y1])
        self.tip_dot.set_data([x2], [y2])
        self.tip_dot.set_color("orange" if animating else "purple")
        self.label.set_position((x2 + 0.5, y2 + 0.5))
        self.label.set_text(f"EF: ({x2:.1f}, {y2:.1f}) cm")

        if animating:
            tx, ty = motion_target.position
            self.guide_line.set_data([x2, tx], [y2, ty])
        else:
            self.guide_line.set_data([], [])

    def set_status(self, msg: str, color: str = "orange") -> None:
        self.status.set_text(msg)
        self.status.set_color(color)


class AnglePlotter:
    """Line chart of q1/q2 (degrees) keyed by the motion counter."""

    def __init__(self, ax):
        self.ax = ax
        (self.q1_line,) = ax.plot([], [], "-o", color="blue", label="q1(t) [deg]")
        (self.q2_line,) = ax.plot([], [], "-o", color="red", label="q2(t) [deg]")
        ax.set_xlabel("Motion")
        ax.set_ylabel("Angle (deg)")
        ax.grid(True, alpha=0.3)
        ax.legend(loc="upper left")

    def plot(self, samples: List[AngleSample]) -> None:
        counters, q1_deg, q2_deg = angle_columns(samples)
        self.q1_line.set_data(counters, q1_deg)
        self.q2_line.set_data(counters, q2_deg)
        self.ax.relim()
        self.ax.autoscale_view()
