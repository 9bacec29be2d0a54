"""Recursive generation of a branching tree as a flat list of branches."""

from __future__ import annotations

import math
from dataclasses import dataclass

from arborgen.params import Params
from arborgen.transform import Transform


@dataclass
class Branch:
    """One branch or leaf, with its transform relative to its parent."""

    transform: Transform
    parent_idx: int | None
    is_leaf: bool


def _add_leaf(parent_idx: int, branches: list[Branch]) -> None:
    leaf = Transform.identity()
    leaf = leaf.with_translation(leaf.local_y())
    branches.append(Branch(leaf, parent_idx, True))


def _add_branches(params: Params, level: int, parent_idx: int, branches: list[Branch]) -> None:
    angle = params.angle_from_parent_branch
    for i in range(params.children):
        angle_around = 2.0 * math.pi * (i / params.children)
        child_pos = i / (params.children - 1)
        along_parent = (1.0 - child_pos) * params.child_translation_factor + child_pos

        child = Transform.identity()
        child.rotate_local_y(angle_around)
        outward = params.base_radius + params.child_scale * 0.5 * math.sin(angle)
        upward = (along_parent - 0.5) + params.child_scale * 0.5 * math.cos(angle)
        offset = tuple(
            z * outward + y * upward for z, y in zip(child.local_z(), child.local_y())
        )
        child = child.with_translation(offset)
        child = child.with_scale((params.child_scale,) * 3)
        child.rotate_local_x(angle)

        child_idx = len(branches)
        branches.append(Branch(child, parent_idx, False))
        if level < params.levels:
            _add_branches(params, level + 1, child_idx, branches)
        else:
            _add_leaf(child_idx, branches)


def generate(params: Params) -> list[Branch]:
    """Build the tree; the root is first and every parent precedes its children."""
    if params.children <= 1:
        raise ValueError("a tree needs more than one child per branch")
    branches = [Branch(Transform.identity(), None, False)]
    _add_branches(params, 1, 0, branches)
    return branches


def world_transforms(branches: list[Branch]) -> list[Transform]:
    """Resolve each branch's transform relative to the root's frame."""
    result: list[Transform] = []
    for branch in branches:
        if branch.parent_idx is None:
            result.append(branch.transform)
        else:
            result.append(result[branch.parent_idx].mul_transform(branch.transform))
    return result