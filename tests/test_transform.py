import math

import pytest

from arborgen.transform import Transform


def _dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def test_identity_leaves_points_unchanged():
    point = (1.5, -2.0, 3.25)
    assert Transform.identity().transform_point(point) == pytest.approx(point, abs=1e-9)


def test_identity_equals_default():
    assert Transform.identity() == Transform()


def test_rotate_local_x_quarter_turn_moves_y_to_z():
    t = Transform.identity()
    t.rotate_local_x(math.pi / 2)
    assert t.local_y() == pytest.approx((0.0, 0.0, 1.0), abs=1e-9)


def test_rotation_and_inverse_restore_axes():
    t = Transform.identity()
    t.rotate_local_y(0.7)
    t.rotate_local_y(-0.7)
    ident = Transform.identity()
    assert t.local_x() == pytest.approx(ident.local_x(), abs=1e-9)
    assert t.local_z() == pytest.approx(ident.local_z(), abs=1e-9)


@pytest.mark.parametrize("a,b", [(0.3, 1.1), (2.0, -0.4), (math.pi, 0.25)])
def test_local_axes_remain_orthonormal(a, b):
    t = Transform.identity()
    t.rotate_local_y(a)
    t.rotate_local_x(b)
    x, y, z = t.local_x(), t.local_y(), t.local_z()
    for axis in (x, y, z):
        assert math.isclose(_dot(axis, axis), 1.0)
    assert math.isclose(_dot(x, y), 0.0, abs_tol=1e-12)
    assert math.isclose(_dot(y, z), 0.0, abs_tol=1e-12)
    assert math.isclose(_dot(x, z), 0.0, abs_tol=1e-12)


def test_global_and_local_y_rotation_agree_from_identity():
    a = Transform.identity()
    b = Transform.identity()
    a.rotate_y(0.9)
    b.rotate_local_y(0.9)
    assert a.rotation == pytest.approx(b.rotation, abs=1e-9)


def test_with_translation_returns_new_transform():
    t = Transform.identity()
    moved = t.with_translation((1.0, 2.0, 3.0))
    assert moved.translation == (1.0, 2.0, 3.0)
    assert t.translation == Transform.identity().translation


def test_with_scale_scales_distances():
    t = Transform.identity().with_scale((2.0, 2.0, 2.0))
    point = (1.0, 0.5, -0.25)
    result = t.transform_point(point)
    assert result == pytest.approx((2.0, 1.0, -0.5), abs=1e-9)


def test_mul_with_identity_is_neutral():
    t = Transform.identity().with_translation((0.5, -1.0, 2.0)).with_scale((0.7, 0.7, 0.7))
    t.rotate_local_x(0.4)
    left = Transform.identity().mul_transform(t)
    right = t.mul_transform(Transform.identity())
    for other in (left, right):
        assert other.translation == pytest.approx(t.translation, abs=1e-9)
        assert other.rotation == pytest.approx(t.rotation, abs=1e-9)
        assert other.scale == pytest.approx(t.scale, abs=1e-9)


def test_mul_transform_composes_point_mapping():
    a = Transform.identity().with_translation((1.0, 2.0, 3.0)).with_scale((0.5, 0.5, 0.5))
    a.rotate_local_y(1.2)
    b = Transform.identity().with_translation((-0.5, 0.25, 4.0)).with_scale((0.8, 0.8, 0.8))
    b.rotate_local_x(0.3)
    point = (0.1, -0.7, 2.2)
    composed = a.mul_transform(b).transform_point(point)
    expected = a.transform_point(b.transform_point(point))
    assert composed == pytest.approx(expected, abs=1e-9)