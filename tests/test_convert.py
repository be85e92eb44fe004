import math

import pytest

from percam.cameras import FisheyeEquidistantCamera, OmniCamera
from percam.convert import convert_distortions, fisheye_to_omni, omni_to_polycart
from percam.perspective import PerspectiveCamera
from percam.point import PointFeature

AZURE = (967.548, 967.409, 1025.603, 777.720,
         0.399, -2.589, 1.528, -1.526e-6, -3.088e-4, 0.276, -2.402, 1.448)


def _fisheye():
    f, k = 1.45e-3, 2.2e-6
    return FisheyeEquidistantCamera(f / k, f / k, 2592 * 0.5, 1944 * 0.5)


def test_fisheye_to_omni_keeps_principal_point():
    fe = _fisheye()
    omni, residual = fisheye_to_omni(fe, 190)
    assert omni.name == "Omni"
    assert (omni.u0, omni.v0) == (fe.u0, fe.v0)
    assert omni.au == omni.av
    assert math.isfinite(residual) and residual >= 0


def test_fisheye_to_omni_residual_matches_projections():
    fe = _fisheye()
    fov = 120
    omni, residual = fisheye_to_omni(fe, fov)
    total = 0.0
    count = fov + 1
    for i in range(count):
        phi = math.radians(-fov / 2 + i)
        a, b = PointFeature(), PointFeature()
        for p in (a, b):
            p.X, p.Y, p.Z = math.sin(phi), 0.0, math.cos(phi)
        omni.project_3d_image(a)
        omni.meter_pixel_conversion(a)
        fe.project_3d_image(b)
        fe.meter_pixel_conversion(b)
        total += (a.u - b.u) ** 2
    assert residual == pytest.approx(math.sqrt(total) / count, rel=1e-6)


def test_omni_to_polycart_structure():
    omni = OmniCamera(259.8888419, 259.3345743, 514.1675494, 382.7969728, 0.9751280249)
    polycart, residual = omni_to_polycart(omni)
    assert polycart.name == "PolyCart"
    assert polycart.au == 1.0
    assert (polycart.u0, polycart.v0) == (omni.u0, omni.v0)
    assert polycart.a[1] == polycart.a[3] == polycart.a[4] == 0.0
    assert math.isfinite(residual) and residual >= 0


def test_omni_to_polycart_is_exact_for_parabolic_mirror():
    au = 200.0
    omni = OmniCamera(au, au, 320, 240, 1.0)
    polycart, residual = omni_to_polycart(omni, 180)
    assert residual == pytest.approx(0.0, abs=1e-9)
    assert polycart.a[0] == pytest.approx(au / 2)
    assert polycart.a[2] * polycart.a[0] == pytest.approx(-0.25)


def test_polynomial_distortions_are_recovered():
    incam = PerspectiveCamera(500, 500, 320, 240, 0.1, -0.05, 0.01)
    outcam = PerspectiveCamera(500, 500, 320, 240, 1.0, 1.0, 1.0)
    residual = convert_distortions(incam, outcam, 90)
    assert residual == pytest.approx(0.0, abs=1e-6)
    assert outcam.k[:3] == pytest.approx(incam.k[:3], abs=1e-9)


def test_tangential_copied_and_denominator_cleared():
    incam = PerspectiveCamera(*AZURE)
    outcam = PerspectiveCamera(*AZURE)
    residual = convert_distortions(incam, outcam, 90)
    assert outcam.k[3:5] == incam.k[3:5]
    assert outcam.k[5:] == [0.0, 0.0, 0.0]
    assert math.isfinite(residual) and residual >= 0


def test_wide_fov_falls_back_to_ninety_degrees():
    incam = PerspectiveCamera(*AZURE)
    out_wide = PerspectiveCamera(*AZURE)
    out_ninety = PerspectiveCamera(*AZURE)
    wide = convert_distortions(incam, out_wide, 200)
    ninety = convert_distortions(incam, out_ninety, 90)
    assert wide == pytest.approx(ninety)
    assert out_wide.k == pytest.approx(out_ninety.k)