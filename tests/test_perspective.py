import math

import pytest

from percam.camera import CameraType
from percam.geometry import pose_matrix
from percam.perspective import PerspectiveCamera
from percam.point import PointFeature


def _camera_point(x, y, z):
    p = PointFeature()
    p.X, p.Y, p.Z = x, y, z
    return p


def test_identity():
    cam = PerspectiveCamera(500, 500, 320, 240)
    assert cam.name == "Perspective"
    assert cam.camera_type is CameraType.PERSPECTIVE
    assert cam.distortions is False


def test_project_3d_image_scales_by_depth():
    cam = PerspectiveCamera(500, 500, 320, 240)
    p = _camera_point(0.3, -0.6, 1.5)
    p.w = 7.0
    cam.project_3d_image(p)
    assert p.x * 1.5 == pytest.approx(0.3)
    assert p.y * 1.5 == pytest.approx(-0.6)
    assert p.w == 1.0


def test_project_3d_image_at_zero_depth_raises():
    cam = PerspectiveCamera(500, 500, 320, 240)
    with pytest.raises(ZeroDivisionError):
        cam.project_3d_image(_camera_point(1.0, 1.0, 0.0))


def test_project_3d_sphere_is_unit_and_parallel():
    cam = PerspectiveCamera(500, 500, 320, 240)
    xs, ys, zs = cam.project_3d_sphere(_camera_point(0.3, -0.4, 1.2))
    assert math.hypot(xs, ys, zs) == pytest.approx(1.0)
    assert xs / zs == pytest.approx(0.3 / 1.2)
    assert ys / zs == pytest.approx(-0.4 / 1.2)


def test_full_projection_chain_round_trip():
    cam = PerspectiveCamera(500, 500, 640 / 2, 480 / 2)
    p = PointFeature()
    p.set_world_coordinates(0.1, 0.1, 0.1)
    p.change_frame(pose_matrix(0.25, 0.0, 0.33, math.pi * 0.2, 0.0, 0.0))
    assert p.X == pytest.approx(0.1 + 0.25)
    cam.project_3d_image(p)
    x, y = p.x, p.y
    cam.meter_pixel_conversion(p)
    assert 0 < p.u < 640 and 0 < p.v < 480
    cam.pixel_meter_conversion(p)
    assert (p.x, p.y) == pytest.approx((x, y))


def test_describe_has_header():
    text = PerspectiveCamera(500, 400, 320, 240).describe()
    assert text.startswith("Camera parameters for perspective projection without distortion:\n")
    assert "  au = 500\t av = 400\n" in text