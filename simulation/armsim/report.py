"""Human-readable kinematic summary logged after each motion."""

from armsim.history import MotionHistory
from armsim.state import ArmState


def kinematics_report(state: ArmState, history: MotionHistory,
                      name: str = "2-DOF arm") -> str:
    """
    Summarize the current pose, history counts and geometry.

    Example:
        >>> print(kinematics_report(state, history))
        KINEMATIC INFO - 2-DOF arm
        ...
    """
    x, y = state.current.position
    q1_deg, q2_deg = state.current.angles.degrees()
    params = state.params
    lines = [
        f"KINEMATIC INFO - {name}",
        "========================",
        f"End-effector: ({x:.1f}, {y:.1f}) cm",
        "Joint angles:",
        f"  q1: {q1_deg:.1f} deg (base)",
        f"  q2: {q2_deg:.1f} deg (elbow)",
        "Statistics:",
        f"  trajectories: {len(history.trajectories)}",
        f"  completed motions: {len(history.angle_samples)}",
        "Geometry:",
        f"  l1: {params.l1:g} cm",
        f"  l2: {params.l2:g} cm",
        f"  tool: {params.tool_length:g} cm",
        f"  workspace: [{params.reach_min:g}, {params.reach_max:g}] cm",
        "========================",
    ]
    return "\n".join(lines)
