"""Animated procedural tree viewer: parameter state, timing and drawing."""

from __future__ import annotations

import argparse
import math
import random
import time
from dataclasses import dataclass, replace
from enum import Enum
from functools import partial

from arborgen.params import (
    ANGLE_MINMAX,
    BASE_RADIUS_MINMAX,
    CHILDREN_MINMAX,
    LEAF_RADIUS_MINMAX,
    LEVELS_MINMAX,
    SCALE_MINMAX,
    TRANSLATION_FACTOR_MINMAX,
    Params,
    ParamsVector,
    random_params,
)
from arborgen.tree import Branch, generate, world_transforms

WINDOW_TITLE = "Procedural Tree Generator"
REDRAW_INTERVAL = 0.1
ROTATION_SPEED = 0.1
BRANCH_COLOR = (0.8, 0.7, 0.6)
CAMERA_POSITION = (7.0, 3.5, 0.0)

_BRANCH_POINTS = 40.0
_LEAF_POINTS = 60.0
_FRAME_SECONDS = 1.0 / 60.0

_SLIDER_SPECS = (
    ("children", "Children", CHILDREN_MINMAX, True),
    ("levels", "Levels", LEVELS_MINMAX, True),
    ("child_translation_factor", "Child Translation Factor", TRANSLATION_FACTOR_MINMAX, False),
    ("angle_from_parent_branch", "Deviation Angle from Parent Branch", ANGLE_MINMAX, False),
    ("child_scale", "Child Scale", SCALE_MINMAX, False),
    ("base_radius", "Base Radius", BASE_RADIUS_MINMAX, False),
    ("leaf_radius", "Leaf Radius", LEAF_RADIUS_MINMAX, False),
)


class TimerMode(Enum):
    ONCE = "once"
    REPEATING = "repeating"


@dataclass
class Timer:
    """Countdown that fires once, or repeatedly, every ``duration`` seconds."""

    duration: float
    mode: TimerMode = TimerMode.ONCE
    elapsed: float = 0.0
    finished: bool = False
    times_finished_this_tick: int = 0

    @property
    def just_finished(self) -> bool:
        return self.times_finished_this_tick > 0

    def tick(self, delta: float) -> bool:
        """Advance by ``delta`` seconds; return whether the timer fired."""
        if delta < 0:
            raise ValueError("delta must not be negative")
        if self.mode is TimerMode.ONCE and self.finished:
            self.times_finished_this_tick = 0
            return False
        self.elapsed += delta
        self.finished = self.elapsed >= self.duration
        if not self.finished:
            self.times_finished_this_tick = 0
        elif self.mode is TimerMode.REPEATING:
            if self.duration > 0:
                self.times_finished_this_tick = int(self.elapsed // self.duration)
                self.elapsed = self.elapsed % self.duration
            else:
                self.times_finished_this_tick = 2**32 - 1
                self.elapsed = 0.0
        else:
            self.times_finished_this_tick = 1
            self.elapsed = self.duration
        return self.just_finished

    def toggle_mode(self) -> TimerMode:
        """Switch between one-shot and repeating; return the new mode."""
        self.mode = TimerMode.REPEATING if self.mode is TimerMode.ONCE else TimerMode.ONCE
        return self.mode


def leaf_color(params: Params) -> tuple[float, float, float]:
    """Leaf colour running red, green, blue as the branch angle opens."""
    t = params.angle_from_parent_branch * 2.0 / math.pi
    red = max(1.0 - t * 2.0, 0.0)
    green = 2.0 * t if t < 0.5 else 2.0 - 2.0 * t
    blue = max(t * 2.0 - 1.0, 0.0)
    return (red, green, blue)


class TreeSimulation:
    """Current parameters, the random walk through them and the built tree."""

    def __init__(self, rng: random.Random | None = None, params: Params | None = None) -> None:
        self.rng = rng or random.Random()
        self.params = params if params is not None else Params()
        self.velocity = ParamsVector()
        self.timer = Timer(REDRAW_INTERVAL)
        self.branches: list[Branch] = []
        self.needs_rebuild = False

    def set_params(self, params: Params) -> None:
        self.params = params
        self.needs_rebuild = True

    def randomize(self) -> None:
        self.set_params(random_params(self.rng))

    def toggle_random_walk(self) -> TimerMode:
        return self.timer.toggle_mode()

    def random_walk_step(self) -> None:
        """Steer the velocity slightly and move the parameters along it."""
        self.velocity.nudge(self.rng)
        position = ParamsVector.from_params(self.params)
        position.add(self.velocity)
        self.set_params(position.to_params())

    def update(self, delta: float) -> bool:
        """Advance the scene by ``delta`` seconds; return whether the tree was rebuilt."""
        if self.branches:
            self.branches[0].transform.rotate_y(ROTATION_SPEED * delta)
        if self.timer.tick(delta):
            self.random_walk_step()
        if self.needs_rebuild:
            self.rebuild()
            return True
        return False

    def rebuild(self) -> list[Branch]:
        self.branches = generate(self.params)
        self.needs_rebuild = False
        return self.branches


def _to_plot(point: tuple[float, float, float]) -> tuple[float, float, float]:
    # The scene is Y-up; the plot axes are Z-up.
    x, y, z = point
    return (x, z, y)


def _unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _draw(ax, sim: TreeSimulation) -> None:
    ax.cla()
    ax.set_xlim(-2.5, 2.5)
    ax.set_ylim(-2.5, 2.5)
    ax.set_zlim(-0.5, 3.5)
    cx, cy, _ = CAMERA_POSITION
    ax.view_init(elev=math.degrees(math.atan2(cy, cx)), azim=0.0)
    ax.set_axis_off()
    if not sim.branches:
        return

    leaves, sizes = [], []
    for branch, world in zip(sim.branches, world_transforms(sim.branches)):
        if branch.is_leaf:
            leaves.append(_to_plot(world.transform_point((0.0, 0.0, 0.0))))
            sizes.append((sim.params.leaf_radius * world.scale[0] * _LEAF_POINTS) ** 2)
        else:
            bottom = _to_plot(world.transform_point((0.0, -0.5, 0.0)))
            top = _to_plot(world.transform_point((0.0, 0.5, 0.0)))
            width = max(sim.params.base_radius * world.scale[0] * _BRANCH_POINTS, 0.3)
            xs, ys, zs = zip(bottom, top)
            ax.plot(xs, ys, zs, color=BRANCH_COLOR, linewidth=width)

    if leaves:
        xs, ys, zs = zip(*leaves)
        color = tuple(_unit(c) for c in leaf_color(sim.params))
        ax.scatter(xs, ys, zs, s=sizes, color=color, depthshade=False)


def _on_slider(sim: TreeSimulation, name: str, integer: bool, value: float) -> None:
    new_value = int(round(float(value))) if integer else float(value)
    if getattr(sim.params, name) != new_value:
        sim.set_params(replace(sim.params, **{name: new_value}))


def _sync_sliders(sliders: dict, params: Params) -> None:
    for name, slider in sliders.items():
        slider.eventson = False
        slider.set_val(getattr(params, name))
        slider.eventson = True


def _run_interactive(sim: TreeSimulation, plt) -> None:
    from matplotlib.animation import FuncAnimation
    from matplotlib.widgets import Button, Slider

    fig = plt.figure(figsize=(10, 9))
    if fig.canvas.manager is not None:
        fig.canvas.manager.set_window_title(WINDOW_TITLE)
    ax = fig.add_axes([0.0, 0.3, 1.0, 0.7], projection="3d")

    sliders = {}
    for row, (name, label, (low, high), integer) in enumerate(_SLIDER_SPECS):
        slider_ax = fig.add_axes([0.35, 0.26 - row * 0.03, 0.45, 0.02])
        slider = Slider(
            slider_ax,
            label,
            low,
            high,
            valinit=getattr(sim.params, name),
            valstep=1 if integer else None,
        )
        slider.on_changed(partial(_on_slider, sim, name, integer))
        sliders[name] = slider

    generate_button = Button(fig.add_axes([0.35, 0.02, 0.15, 0.04]), "Generate")
    walk_button = Button(fig.add_axes([0.55, 0.02, 0.15, 0.04]), "Random Walk")

    def on_generate(_event) -> None:
        sim.randomize()
        _sync_sliders(sliders, sim.params)

    generate_button.on_clicked(on_generate)
    walk_button.on_clicked(lambda _event: sim.toggle_random_walk())

    last = [time.perf_counter()]

    def frame(_index):
        now = time.perf_counter()
        delta, last[0] = now - last[0], now
        if sim.update(delta):
            _sync_sliders(sliders, sim.params)
        _draw(ax, sim)
        return ()

    animation = FuncAnimation(fig, frame, interval=16, cache_frame_data=False)
    fig._arborgen_refs = (animation, generate_button, walk_button, sliders)
    plt.show()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="arborgen", description=WINDOW_TITLE)
    parser.add_argument("--seed", type=int, default=None, help="seed for the random generator")
    parser.add_argument(
        "--random-walk", action="store_true", help="start with the random walk running"
    )
    parser.add_argument("--save", metavar="PATH", help="render one frame to an image and exit")
    parser.add_argument(
        "--time",
        type=float,
        default=REDRAW_INTERVAL,
        help="seconds to simulate before saving (with --save)",
    )
    args = parser.parse_args(argv)

    sim = TreeSimulation(rng=random.Random(args.seed))
    if args.random_walk:
        sim.toggle_random_walk()

    if args.save:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        remaining = max(args.time, 0.0)
        while remaining > 1e-12:
            step = min(_FRAME_SECONDS, remaining)
            sim.update(step)
            remaining -= step
        if not sim.branches:
            sim.rebuild()
        fig = plt.figure(figsize=(8, 8))
        ax = fig.add_subplot(projection="3d")
        _draw(ax, sim)
        fig.savefig(args.save)
        plt.close(fig)
        return 0

    import matplotlib.pyplot as plt

    _run_interactive(sim, plt)
    return 0