"""Tree generation parameters and a normalised space for walking them."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

NUM_PARAMS = 7
CHILDREN_MINMAX = (3, 6)
LEVELS_MINMAX = (2, 5)
TRANSLATION_FACTOR_MINMAX = (0.0, 1.0)
ANGLE_MINMAX = (0.0, 0.5 * math.pi)
SCALE_MINMAX = (0.4, 0.8)
BASE_RADIUS_MINMAX = (0.1, 0.3)
LEAF_RADIUS_MINMAX = (0.1, 0.5)
PARAMS_VELOCITY_MAG = 0.5
PARAMS_ACCELERATION_MAG = 0.05

_FLOAT_RANGES = (
    TRANSLATION_FACTOR_MINMAX,
    ANGLE_MINMAX,
    SCALE_MINMAX,
    BASE_RADIUS_MINMAX,
    LEAF_RADIUS_MINMAX,
)


@dataclass
class Params:
    """Shape parameters of a generated tree."""

    children: int = 3
    levels: int = 2
    child_translation_factor: float = 1.0
    angle_from_parent_branch: float = 0.5 * math.pi
    child_scale: float = 0.7
    base_radius: float = 0.15
    leaf_radius: float = 0.4


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def _to_byte(x: float) -> int:
    return min(max(_round_half_away(x), 0), 255)


def _denormalize(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return (high - low) * (value + 1.0) * 0.5 + low


def _normalize_value(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return 2.0 * (value - low) / (high - low) - 1.0


def random_params(rng: random.Random | None = None) -> Params:
    """Draw every parameter uniformly from its allowed range."""
    rng = rng or random.Random()
    floats = [rng.uniform(low, high) for low, high in _FLOAT_RANGES]
    return Params(
        rng.randint(*CHILDREN_MINMAX),
        rng.randint(*LEVELS_MINMAX),
        *floats,
    )


@dataclass
class ParamsVector:
    """A point (magnitude None) or a fixed-length vector in [-1, 1]^7 parameter space."""

    values: list[float] = field(default_factory=lambda: [0.0] * NUM_PARAMS)
    magnitude: float | None = PARAMS_VELOCITY_MAG

    def to_params(self) -> Params:
        v = self.values
        return Params(
            children=_to_byte(_denormalize(v[0], CHILDREN_MINMAX)),
            levels=_to_byte(_denormalize(v[1], LEVELS_MINMAX)),
            child_translation_factor=_denormalize(v[2], TRANSLATION_FACTOR_MINMAX),
            angle_from_parent_branch=_denormalize(v[3], ANGLE_MINMAX),
            child_scale=_denormalize(v[4], SCALE_MINMAX),
            base_radius=_denormalize(v[5], BASE_RADIUS_MINMAX),
            leaf_radius=_denormalize(v[6], LEAF_RADIUS_MINMAX),
        )

    @classmethod
    def from_params(cls, params: Params) -> ParamsVector:
        if params.children < CHILDREN_MINMAX[0]:
            raise ValueError(f"children must be at least {CHILDREN_MINMAX[0]}")
        if params.levels < LEVELS_MINMAX[0]:
            raise ValueError(f"levels must be at least {LEVELS_MINMAX[0]}")
        values = [
            _normalize_value(params.children, CHILDREN_MINMAX),
            _normalize_value(params.levels, LEVELS_MINMAX),
            _normalize_value(params.child_translation_factor, TRANSLATION_FACTOR_MINMAX),
            _normalize_value(params.angle_from_parent_branch, ANGLE_MINMAX),
            _normalize_value(params.child_scale, SCALE_MINMAX),
            _normalize_value(params.base_radius, BASE_RADIUS_MINMAX),
            _normalize_value(params.leaf_radius, LEAF_RADIUS_MINMAX),
        ]
        return cls(values=values, magnitude=None)

    def add(self, other: ParamsVector) -> None:
        """Add ``other`` in place.

        For a point, components leaving [-1, 1] are clamped and the
        matching component of ``other`` is reflected.
        """
        is_point = self.magnitude is None
        new_self: list[float] = []
        new_other: list[float] = []
        for x, y in zip(self.values, other.values):
            x += y
            if is_point and (x < -1.0 or x > 1.0):
                y = -y
                x = min(max(x, -1.0), 1.0)
            new_self.append(x)
            new_other.append(y)
        self.values = new_self
        other.values = new_other

    def normalize(self) -> None:
        """Rescale a vector to its magnitude; points are left unchanged."""
        if self.magnitude is None:
            return
        length2 = sum(v * v for v in self.values)
        if not length2 > 0.0:
            raise ValueError("cannot normalise a zero-length vector")
        factor = self.magnitude / math.sqrt(length2)
        self.values = [v * factor for v in self.values]

    def nudge(self, rng: random.Random | None = None) -> None:
        """Perturb the direction with a small random acceleration."""
        rng = rng or random.Random()
        acceleration = ParamsVector(
            values=[rng.random() * 2.0 - 1.0 for _ in range(NUM_PARAMS)],
            magnitude=PARAMS_ACCELERATION_MAG,
        )
        acceleration.normalize()
        self.add(acceleration)
        self.normalize()