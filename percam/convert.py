"""Least-squares conversions between camera models."""

from __future__ import annotations

import math

import numpy as np

from percam.camera import CameraModel
from percam.cameras import FisheyeEquidistantCamera, OmniCamera, PolyCartCamera
from percam.point import PointFeature

_DEGREE = math.pi / 180.0


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def _solve(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.linalg.pinv(a) @ b


def _sweep(fov: float) -> np.ndarray:
    """Angles one degree apart, centred on the optical axis, spanning fov degrees."""
    count = _round(fov) + 1
    return -fov * 0.5 * _DEGREE + _DEGREE * np.arange(count)


def omni_to_polycart(omni: OmniCamera, fov=180.0) -> tuple[PolyCartCamera, float]:
    """Fit a polynomial camera to an omni one over fov degrees.

    Returns the fitted camera and the residual of the fit.
    """
    phi = _sweep(fov)
    zs, xs = np.cos(phi), np.sin(phi)
    up = omni.au * xs / (zs + omni.xi)
    a = np.column_stack([np.ones_like(up), up * up])
    b = omni.au * zs / (zs + omni.xi)
    params = _solve(a, b)
    polycart = PolyCartCamera(
        1.0, omni.u0, omni.v0, [params[0], 0.0, params[1], 0.0, 0.0]
    )
    residual = math.sqrt(float(np.sum((a @ params - b) ** 2))) / len(phi)
    return polycart, residual


def fisheye_to_omni(fisheye: FisheyeEquidistantCamera, fov) -> tuple[OmniCamera, float]:
    """Fit an omni camera to an equidistant fisheye over fov degrees.

    Returns the fitted camera and the residual of the fit in pixels.
    """
    phi = _sweep(fov)
    zs, xs = np.cos(phi), np.sin(phi)
    ufe = phi * fisheye.au
    ratio = np.sinc(phi / math.pi) / fisheye.au
    a = np.column_stack([ratio, -np.ones_like(ratio)])
    scale, xi = (float(v) for v in _solve(a, zs))
    omni = OmniCamera(scale, scale, fisheye.u0, fisheye.v0, xi)
    errors = scale * xs / (zs + xi) - ufe
    residual = math.sqrt(float(np.sum(errors**2))) / len(phi)
    return omni, residual


def convert_distortions(incam: CameraModel, outcam: CameraModel, fov) -> float:
    """Fit outcam's polynomial radial distortion to incam's rational one.

    The tangential coefficients are copied and the denominator ones cleared.
    Returns the root mean square pixel error along the horizontal axis.
    """
    if fov >= 180:
        fov = 90
    count = _round(fov / 2) + 1
    phi = _DEGREE * np.arange(count)
    xu = np.sin(phi) / np.cos(phi)
    r2 = xu * xu
    r4 = r2 * r2
    r6 = r2 * r4
    k = incam.k
    den = 1 + k[5] * r2 + k[6] * r4 + k[7] * r6
    a = np.column_stack([den * r2, den * r4, den * r6])
    b = 1 + k[0] * r2 + k[1] * r4 + k[2] * r6 - den
    p1, p2, p3 = (float(v) for v in _solve(a, b))
    outcam.set_distortion_parameters(p1, p2, p3, k[3], k[4], 0.0, 0.0, 0.0)

    total = 0.0
    for x in xu:
        inp, outp = PointFeature(), PointFeature()
        inp.x, inp.y = float(x), 0.0
        outp.x, outp.y = float(x), 0.0
        incam.meter_pixel_conversion(inp)
        outcam.meter_pixel_conversion(outp)
        total += (outp.u - inp.u) ** 2
    return math.sqrt(total / count)