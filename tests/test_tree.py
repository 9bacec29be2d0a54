from collections import Counter

import pytest

from arborgen.params import Params
from arborgen.transform import Transform
from arborgen.tree import generate, world_transforms


def test_default_tree_size():
    assert len(generate(Params())) == 22


@pytest.mark.parametrize("children,levels", [(3, 2), (4, 3), (2, 1), (5, 2)])
def test_leaf_count_and_structure(children, levels):
    tree = generate(Params(children=children, levels=levels))
    leaves = [b for b in tree if b.is_leaf]
    assert len(leaves) == children ** levels
    assert tree[0].parent_idx is None
    for idx, branch in enumerate(tree[1:], start=1):
        assert branch.parent_idx is not None and branch.parent_idx < idx


def test_child_counts_per_branch():
    params = Params(children=4, levels=3)
    tree = generate(params)
    counts = Counter(b.parent_idx for b in tree if b.parent_idx is not None)
    for idx, branch in enumerate(tree):
        if branch.is_leaf:
            assert counts[idx] == 0
        elif any(tree[c].is_leaf for c, b in enumerate(tree) if b.parent_idx == idx):
            assert counts[idx] == 1
        else:
            assert counts[idx] == params.children


def test_leaves_sit_at_parent_tip():
    tip = Transform.identity().local_y()
    tree = generate(Params())
    for branch in tree:
        if branch.is_leaf:
            assert branch.transform.translation == pytest.approx(tip, abs=1e-9)
            assert not tree[branch.parent_idx].is_leaf


def test_branches_use_child_scale():
    params = Params(child_scale=0.55)
    for branch in generate(params)[1:]:
        if not branch.is_leaf:
            assert branch.transform.scale == pytest.approx((0.55, 0.55, 0.55), abs=1e-9)


def test_zero_angle_keeps_branches_upright():
    up = Transform.identity().local_y()
    for branch in generate(Params(angle_from_parent_branch=0.0))[1:]:
        assert branch.transform.local_y() == pytest.approx(up, abs=1e-9)


def test_too_few_children_raises():
    with pytest.raises(ValueError):
        generate(Params(children=1))


def test_world_transforms_compose_with_parents():
    tree = generate(Params(children=3, levels=3, angle_from_parent_branch=0.6))
    worlds = world_transforms(tree)
    assert len(worlds) == len(tree)
    assert worlds[0] == tree[0].transform
    for branch, world in zip(tree[1:], worlds[1:]):
        expected = worlds[branch.parent_idx].mul_transform(branch.transform)
        assert world.translation == pytest.approx(expected.translation, abs=1e-9)
        assert world.rotation == pytest.approx(expected.rotation, abs=1e-9)