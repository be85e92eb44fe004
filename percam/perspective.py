"""Pinhole perspective camera."""

from __future__ import annotations

import math

from percam.camera import CameraModel, CameraType
from percam.point import PointFeature


class PerspectiveCamera(CameraModel):
    """Central perspective projection onto the z = 1 plane."""

    name = "Perspective"
    camera_type = CameraType.PERSPECTIVE

    def __init__(self, au=1.0, av=1.0, u0=0.0, v0=0.0, k1=0.0, k2=0.0, k3=0.0,
                 k4=0.0, k5=0.0, k6=0.0, k7=0.0, k8=0.0):
        super().__init__(au, av, u0, v0, k1, k2, k3, k4, k5, k6, k7, k8)

    def project_3d_image(self, point: PointFeature) -> None:
        """Project the sensor-frame coordinates onto the normalized image plane."""
        point.x = point.X / point.Z
        point.y = point.Y / point.Z
        point.w = 1.0

    def project_3d_sphere(self, point: PointFeature) -> tuple[float, float, float]:
        """Return the sensor-frame coordinates projected on the unit sphere."""
        xs, ys, zs = point.X, point.Y, point.Z
        inv_norm = 1.0 / math.sqrt(xs * xs + ys * ys + zs * zs)
        return xs * inv_norm, ys * inv_norm, zs * inv_norm

    def describe(self) -> str:
        return (
            "Camera parameters for perspective projection without distortion:\n"
            + super().describe()
        )