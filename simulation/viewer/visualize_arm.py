"""Visualize the arm interactively.

Click inside the workspace to move the end-effector there.
Keys: h = home position, r = clear history.
"""

import argparse
import logging
from collections import deque
from typing import Tuple

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from armsim.config import load_config
from armsim.context import SimulationContext
from armsim.kinematics import KinematicsError
from viewer.render import AnglePlotter, ArmRenderer

logger = logging.getLogger(__name__)


def parse_point(text: str) -> Tuple[float, float]:
    try:
        x, y = (float(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected x,y but got {text!r}")
    return (x, y)


class ArmViewer:
    """Ticks a SimulationContext from a matplotlib animation timer."""

    def __init__(self, ctx: SimulationContext, targets=()):
        self.ctx = ctx
        self.pending = deque(targets)

        self.fig, (self.arm_ax, self.chart_ax) = plt.subplots(1, 2, figsize=(12, 6))
        self.renderer = ArmRenderer(self.arm_ax)
        self.plotter = AnglePlotter(self.chart_ax)
        ctx.renderer = self.renderer
        ctx.plotter = self.plotter

        # h and r are viewer commands, not view resets
        plt.rcParams["keymap.home"] = [k for k in plt.rcParams["keymap.home"]
                                       if k not in ("h", "r")]
        self.fig.canvas.mpl_connect("button_press_event", self.on_click)
        self.fig.canvas.mpl_connect("key_press_event", self.on_key)
        self.renderer.render(ctx.state, ctx.history, ctx.motion_target)

    def move_to(self, x: float, y: float) -> None:
        try:
            self.ctx.request_move(x, y)
        except KinematicsError as exc:
            logger.error("%s", exc)
            self.renderer.set_status(str(exc), color="red")
        else:
            self.renderer.set_status("Motion in progress", color="orange")

    def on_click(self, event) -> None:
        if event.inaxes is not self.arm_ax or event.xdata is None:
            return
        self.move_to(event.xdata, event.ydata)

    def on_key(self, event) -> None:
        if event.key == "h":
            try:
                self.ctx.go_home()
            except KinematicsError as exc:
                logger.error("%s", exc)
                self.renderer.set_status(str(exc), color="red")
        elif event.key == "r":
            self.ctx.reset()
            self.renderer.set_status("")

    def tick(self, _frame=None):
        if not self.ctx.is_animating and self.pending:
            self.move_to(*self.pending.popleft())

        if self.ctx.step() is not None and not self.ctx.is_animating:
            self.renderer.set_status(f"Trajectories: {len(self.ctx.history.trajectories)}",
                                     color="#8B4513")
        return ()

    def run(self) -> None:
        interval_ms = 1000.0 / self.ctx.config.sample_rate
        self.anim = FuncAnimation(self.fig, self.tick, interval=interval_ms,
                                  cache_frame_data=False)
        plt.tight_layout()
        plt.show()


def main(argv=None):
    parser = argparse.ArgumentParser(description="2-DOF planar arm simulator")
    parser.add_argument("--config", help="JSON file overriding the default settings")
    parser.add_argument("--target", action="append", type=parse_point, default=[],
                        metavar="X,Y", help="target to visit (repeatable, visited in order)")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    logging.basicConfig(level=config.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    print("Launching arm viewer...")
    print("Click to move, 'h' for home, 'r' to clear history, close window to exit")
    ArmViewer(SimulationContext(config), args.target).run()


if __name__ == "__main__":
    main()
