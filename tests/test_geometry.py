import math

import numpy as np
import pytest

from percam.geometry import Point2D, Point3D, pose_matrix


def test_point3d_constructor_normalises():
    p = Point3D(2.0 * 1.5, 4.0 * 1.5, 6.0 * 1.5, 1.5)
    assert (p.x, p.y, p.z, p.w) == pytest.approx((2.0, 4.0, 6.0, 1.0))


def test_point3d_vector_keeps_zero_w():
    p = Point3D(1.0, 2.0, 3.0, 0.0)
    assert tuple(p) == (1.0, 2.0, 3.0, 0.0)


def test_point3d_set_point_and_vector():
    p = Point3D()
    p.set_point(1.0, -2.0, 3.0)
    assert p.w == 1.0
    p.set_vector(1.0, -2.0, 3.0)
    assert p.w == 0.0
    assert (p.x, p.y, p.z) == (1.0, -2.0, 3.0)


def test_point3d_to_euclidean_at_infinity_raises():
    p = Point3D(1.0, 1.0, 1.0, 0.0)
    with pytest.raises(ValueError):
        p.to_euclidean()


def test_point3d_to_euclidean_after_set():
    p = Point3D()
    p.set(0.5 * 4.0, -1.0 * 4.0, 2.0 * 4.0, 4.0)
    p.to_euclidean()
    assert tuple(p) == pytest.approx((0.5, -1.0, 2.0, 1.0))


def test_point3d_identity_frame_change():
    p = Point3D(0.1, 0.2, 0.3)
    assert tuple(p.change_frame(np.eye(4))) == pytest.approx(tuple(p))


def test_point3d_frame_change_round_trip():
    m = pose_matrix(0.25, -0.1, 0.33, math.pi * 0.2, 0.1, -0.3)
    p = Point3D(0.1, 0.2, 0.3)
    back = p.change_frame(m).change_frame(np.linalg.inv(m))
    assert tuple(back) == pytest.approx(tuple(p))


def test_point3d_vector_ignores_translation():
    m = pose_matrix(1.0, 2.0, 3.0, 0.0, 0.0, 0.0)
    v = Point3D(0.1, 0.2, 0.3, 0.0)
    assert tuple(v.change_frame(m)) == pytest.approx(tuple(v))


def test_change_frame_rejects_bad_shape():
    with pytest.raises(ValueError):
        Point3D(1.0, 2.0, 3.0).change_frame(np.eye(3))


def test_point2d_constructor_normalises_and_round_trip():
    p = Point2D(3.0 * 2.0, -1.0 * 2.0, 2.0)
    assert tuple(p) == pytest.approx((3.0, -1.0, 1.0))
    m = pose_matrix(0.5, -0.7, 0.0, 0.0, 0.0, 0.4)
    back = p.change_frame(m).change_frame(np.linalg.inv(m))
    assert tuple(back) == pytest.approx(tuple(p))


def test_point2d_to_euclidean_at_infinity_raises():
    p = Point2D()
    p.set_vector(1.0, 0.0)
    with pytest.raises(ValueError):
        p.to_euclidean()


def test_pose_matrix_is_rigid():
    m = pose_matrix(0.1, 0.2, 0.3, 0.4, -0.5, 0.6)
    r = m[:3, :3]
    assert np.allclose(r @ r.T, np.eye(3))
    assert np.linalg.det(r) == pytest.approx(1.0)
    assert np.allclose(m[:3, 3], [0.1, 0.2, 0.3])
    assert np.allclose(m[3], [0.0, 0.0, 0.0, 1.0])


def test_pose_matrix_quarter_turn_about_x():
    m = pose_matrix(0.0, 0.0, 0.0, math.pi / 2, 0.0, 0.0)
    assert np.allclose(m[:3, :3] @ np.array([0.0, 1.0, 0.0]), [0.0, 0.0, 1.0])


def test_pose_matrix_without_rotation_is_identity_rotation():
    m = pose_matrix(1.0, 2.0, 3.0, 0.0, 0.0, 0.0)
    assert np.allclose(m[:3, :3], np.eye(3))