"""Central and non-central camera models beyond the pinhole one."""

from __future__ import annotations

import math

from percam.camera import CameraModel, CameraType
from percam.point import PointFeature


def _to_sphere(point: PointFeature) -> tuple[float, float, float]:
    xs, ys, zs = point.X, point.Y, point.Z
    inv_norm = 1.0 / math.sqrt(xs * xs + ys * ys + zs * zs)
    return xs * inv_norm, ys * inv_norm, zs * inv_norm


class OmniCamera(CameraModel):
    """Unified central catadioptric model with mirror parameter xi."""

    name = "Omni"
    camera_type = CameraType.OMNI

    def __init__(self, au=1.0, av=1.0, u0=0.0, v0=0.0, xi=1.0,
                 k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0):
        super().__init__(au, av, u0, v0, k1, k2, k3, k4, k5)
        self.xi = float(xi)
        self.nb_active_parameters += 1
        self.nb_active_parameters_base += 1

    def init(self, au, av, u0, v0, xi, k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0) -> None:
        """Reset the intrinsic parameters, keeping the active distortion flags."""
        self._set_intrinsics(au, av, u0, v0, k1, k2, k3, k4, k5)
        self.xi = float(xi)

    def project_3d_image(self, point: PointFeature) -> None:
        x, y, z = point.X, point.Y, point.Z
        den = z + self.xi * math.sqrt(x * x + y * y + z * z)
        point.x = x / den
        point.y = y / den

    def project_3d_sphere(self, point: PointFeature) -> tuple[float, float, float]:
        return _to_sphere(point)

    def project_image_sphere(self, point: PointFeature) -> tuple[float, float, float]:
        """Lift the normalized image coordinates of a point onto the unit sphere."""
        x, y, xi = point.x, point.y, self.xi
        r2 = x * x + y * y
        fact = (xi + math.sqrt(1.0 + (1.0 - xi * xi) * r2)) / (r2 + 1.0)
        return fact * x, fact * y, fact - xi

    def copy_from(self, other: "OmniCamera") -> None:
        super().copy_from(other)
        self.xi = other.xi


class ParaboloidCamera(CameraModel):
    """Paraboloidal mirror camera with mirror parameter h."""

    name = "Paraboloid"
    camera_type = CameraType.PARABOLOID

    def __init__(self, au=1.0, av=1.0, u0=0.0, v0=0.0, h=1.0,
                 k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0):
        super().__init__(au, av, u0, v0, k1, k2, k3, k4, k5)
        self.h = float(h)

    def init(self, au, av, u0, v0, h, k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0) -> None:
        self._set_intrinsics(au, av, u0, v0, k1, k2, k3, k4, k5)
        self.h = float(h)

    def _mirror_factor(self, point: PointFeature) -> float:
        x, y, z = point.X, point.Y, point.Z
        return self.h / (math.sqrt(x * x + y * y + z * z) + z)

    def project_3d_image(self, point: PointFeature) -> None:
        fact = self._mirror_factor(point)
        point.x = fact * point.X
        point.y = fact * point.Y

    def project_image_mirror(self, point: PointFeature) -> tuple[float, float, float]:
        """Return the mirror point seen at the normalized image coordinates."""
        x, y, h = point.x, point.y, self.h
        return x, y, (h * h - x * x - y * y) / (2 * h)

    def project_3d_mirror(self, point: PointFeature) -> tuple[float, float, float]:
        """Return the mirror point hit by the ray towards the sensor-frame point."""
        fact = self._mirror_factor(point)
        return fact * point.X, fact * point.Y, fact * point.Z

    def copy_from(self, other: "ParaboloidCamera") -> None:
        super().copy_from(other)
        self.h = other.h


class EquirectangularCamera(CameraModel):
    """Azimuth/elevation spherical image."""

    name = "Equirectangular"
    camera_type = CameraType.EQUIRECTANGULAR

    def __init__(self, au=1.0, av=1.0, u0=0.0, v0=0.0,
                 k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0):
        super().__init__(au, av, u0, v0, k1, k2, k3, k4, k5)

    def init(self, au, av, u0, v0, k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0) -> None:
        self._set_intrinsics(au, av, u0, v0, k1, k2, k3, k4, k5)

    def project_3d_image(self, point: PointFeature) -> None:
        """Set x to the azimuth in [-pi, pi] and y to the elevation in [-pi/2, pi/2]."""
        x, y, z = point.X, point.Y, point.Z
        point.x = math.atan2(x, z)
        point.y = math.atan2(y, math.sqrt(x * x + z * z))

    def project_3d_sphere(self, point: PointFeature) -> tuple[float, float, float]:
        return _to_sphere(point)

    def project_image_sphere(self, point: PointFeature) -> tuple[float, float, float]:
        azimuth, elevation = point.x, point.y
        cos_el = math.cos(elevation)
        return cos_el * math.sin(azimuth), math.sin(elevation), cos_el * math.cos(azimuth)


class FisheyeEquidistantCamera(CameraModel):
    """Equidistant fisheye: image radius proportional to the angle off axis."""

    name = "FisheyeEquidistant"
    camera_type = CameraType.FISHEYE_EQUIDISTANT

    def __init__(self, au=1.0, av=1.0, u0=0.0, v0=0.0,
                 k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0):
        super().__init__(au, av, u0, v0, k1, k2, k3, k4, k5)

    def init(self, au, av, u0, v0, k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0) -> None:
        self._set_intrinsics(au, av, u0, v0, k1, k2, k3, k4, k5)

    def project_3d_image(self, point: PointFeature) -> None:
        x, y, z = point.X, point.Y, point.Z
        phi = math.acos(z / math.sqrt(x * x + y * y + z * z))
        theta = math.atan2(y, x)
        point.x = phi * math.cos(theta)
        point.y = phi * math.sin(theta)

    def project_3d_sphere(self, point: PointFeature) -> tuple[float, float, float]:
        return _to_sphere(point)


class PolyCartCamera(CameraModel):
    """Polynomial model of the ray depth as a function of the pixel radius.

    The polynomial coefficients a0..a4 give r(rho) = a0 + a1 rho + ... + a4 rho^4,
    with rho the distance to the principal point in pixels.
    """

    name = "PolyCart"
    camera_type = CameraType.POLYCART

    def __init__(self, au=1.0, u0=0.0, v0=0.0, a=None,
                 k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0):
        super().__init__(au, au, u0, v0, k1, k2, k3, k4, k5)
        self.a = self._coefficients(a)
        # a1 is assumed to be zero and is not estimated.
        self.nb_active_parameters += 4
        self.nb_active_parameters_base += 4

    @staticmethod
    def _coefficients(a) -> list[float]:
        if a is None:
            return [0.0] * 5
        values = [float(c) for c in a]
        if len(values) != 5:
            raise ValueError(f"expected 5 polynomial coefficients, got {len(values)}")
        return values

    def init(self, au, u0, v0, a=None, k1=0.0, k2=0.0, k3=0.0, k4=0.0, k5=0.0) -> None:
        self._set_intrinsics(au, au, u0, v0, k1, k2, k3, k4, k5)
        self.a = self._coefficients(a)

    def project_3d_sphere(self, point: PointFeature) -> tuple[float, float, float]:
        return _to_sphere(point)

    def project_image_sphere(self, point: PointFeature) -> tuple[float, float, float]:
        """Return the ray of a point from its pixel coordinates u, v."""
        up = point.u - self.u0
        vp = point.v - self.v0
        rho = math.hypot(up, vp)
        depth = sum(c * rho**n for n, c in enumerate(self.a))
        return up / self.au, vp / self.au, depth / self.au

    def copy_from(self, other: "PolyCartCamera") -> None:
        super().copy_from(other)
        self.a = list(other.a)