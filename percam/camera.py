"""Generic pinhole camera intrinsics with rational polynomial distortion."""

from __future__ import annotations

from enum import Enum

import numpy as np

from percam.point import PointFeature

_PREFIXES = ("  ", "\t ", "\t  ", "\t ", "\t  ", "\t  ", "\t ", "\t  ")


class CameraType(Enum):
    PERSPECTIVE = "Perspective"
    OMNI = "Omni"
    PARABOLOID = "Paraboloid"
    EQUIRECTANGULAR = "Equirectangular"
    FISHEYE_EQUIDISTANT = "FisheyeEquidistant"
    POLYCART = "PolyCart"


class CameraModel:
    """Intrinsic parameters and the metric/pixel conversions of a camera.

    Distortion coefficients k1..k8 are: radial k1, k2, k3 (numerator),
    tangential k4, k5, and radial k6, k7, k8 (denominator).
    """

    name = "Perspective"
    camera_type = CameraType.PERSPECTIVE

    def __init__(self, au=1.0, av=1.0, u0=0.0, v0=0.0, k1=0.0, k2=0.0, k3=0.0,
                 k4=0.0, k5=0.0, k6=0.0, k7=0.0, k8=0.0):
        self.ik = [0.0] * 8
        coefficients = (k1, k2, k3, k4, k5, k6, k7, k8)
        self._set_intrinsics(au, av, u0, v0, *coefficients)
        self.nb_active_parameters = self.nb_active_parameters_base = 4
        self.active = [c != 0.0 for c in coefficients]
        self.distortions = any(self.active)
        self.nb_active_parameters += sum(self.active)

    def _set_intrinsics(self, au, av, u0, v0, *k) -> None:
        if len(k) > 8:
            raise ValueError("at most 8 distortion coefficients")
        self.au, self.av = float(au), float(av)
        self.u0, self.v0 = float(u0), float(v0)
        self.k = [float(c) for c in k] + [0.0] * (8 - len(k))

    @property
    def inv_au(self) -> float:
        return 1.0 / self.au

    @property
    def inv_av(self) -> float:
        return 1.0 / self.av

    def _distort(self, c, x, y):
        a = self.active
        r2 = x * x + y * y
        r4 = r2 * r2
        r6 = r4 * r2
        num = 1.0
        if a[0]:
            num += c[0] * r2
        if a[1]:
            num += c[1] * r4
        if a[2]:
            num += c[2] * r6
        den = 1.0
        if a[5]:
            den += c[5] * r2
        if a[6]:
            den += c[6] * r4
        if a[7]:
            den += c[7] * r6
        xd = x * num / den
        yd = y * num / den
        xy = x * y
        if a[3]:
            xd += 2 * c[3] * xy
            yd += c[3] * (r2 + 2 * y * y)
        if a[4]:
            xd += c[4] * (r2 + 2 * x * x)
            yd += 2 * c[4] * xy
        return xd, yd

    def meter_pixel_conversion(self, point: PointFeature) -> None:
        """Set the pixel coordinates u, v of a point from its normalized x, y."""
        x, y = point.x, point.y
        if self.distortions:
            x, y = self._distort(self.k, x, y)
        point.u = x * self.au + self.u0
        point.v = y * self.av + self.v0

    def pixel_meter_conversion(self, point: PointFeature) -> None:
        """Set the normalized coordinates x, y of a point from its pixel u, v."""
        x = (point.u - self.u0) * self.inv_au
        y = (point.v - self.v0) * self.inv_av
        if self.distortions:
            x, y = self._distort(self.ik, x, y)
        point.x, point.y = x, y

    def set_principal_point(self, u0, v0) -> None:
        self.u0, self.v0 = float(u0), float(v0)

    def set_pixel_ratio(self, au, av) -> None:
        self.au, self.av = float(au), float(av)

    def set_distortion_parameters(self, k1, k2, k3, k4, k5, k6, k7, k8) -> None:
        self.k = [float(c) for c in (k1, k2, k3, k4, k5, k6, k7, k8)]

    def set_undistortion_parameters(self, ik1, ik2, ik3, ik4, ik5, ik6, ik7, ik8) -> None:
        self.ik = [float(c) for c in (ik1, ik2, ik3, ik4, ik5, ik6, ik7, ik8)]

    def set_active_distortion_parameters(self, k1, k2, k3, k4, k5, k6, k7, k8) -> None:
        self.active = [bool(f) for f in (k1, k2, k3, k4, k5, k6, k7, k8)]
        self.distortions = any(self.active)
        self.nb_active_parameters = self.nb_active_parameters_base + sum(self.active)

    def copy_from(self, other: "CameraModel") -> None:
        """Copy the intrinsic and distortion parameters of another camera."""
        self.au, self.av = other.au, other.av
        self.u0, self.v0 = other.u0, other.v0
        self.distortions = other.distortions
        self.nb_active_parameters = other.nb_active_parameters
        self.nb_active_parameters_base = other.nb_active_parameters_base
        self.k = list(other.k)
        self.ik = list(other.ik)
        self.active = list(other.active)

    def intrinsic_matrix(self) -> np.ndarray:
        return np.array(
            [[self.au, 0.0, self.u0], [0.0, self.av, self.v0], [0.0, 0.0, 1.0]]
        )

    def describe(self) -> str:
        lines = [
            f"  au = {self.au:g}\t av = {self.av:g}\n",
            f"  u0 = {self.u0:g}\t v0 = {self.v0:g}\n",
        ]
        if self.distortions:
            lines.append(
                "with distortion parameters for undistorted to distorted transformation :\n"
            )
            lines.extend(self._coefficient_terms("k", self.k))
            lines.append(
                "\nwith undistortion parameters for distorted to undistorted transformation :\n"
            )
            lines.extend(self._coefficient_terms("ik", self.ik))
            lines.append("\n")
        return "".join(lines)

    def _coefficient_terms(self, label, values):
        return [
            f"{prefix}{label}{n} = {value:g}"
            for n, (prefix, value, on) in enumerate(zip(_PREFIXES, values, self.active), 1)
            if on
        ]