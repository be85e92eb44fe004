"""Photometric Gaussian mixture samples computed on spherical images."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from percam.geometry import Point3D

# (2 pi)^(3/2) and pi / 3.
_TWO_PI_POW_3_2 = 15.7496099457
_PI_OVER_3 = 1.0471975512


@dataclass
class SampledImage:
    """Image samples: one 3D location and one intensity per sample.

    rhos holds the distance of each sample's 3D point to the camera; it
    defaults to 1 for every sample when no depth is known.
    """

    points: np.ndarray
    values: np.ndarray
    rhos: np.ndarray = field(default=None)

    def __post_init__(self) -> None:
        self.points = np.asarray(self.points, dtype=float).reshape(-1, 3)
        self.values = np.asarray(self.values, dtype=float).ravel()
        if len(self.values) != len(self.points):
            raise ValueError(
                f"{len(self.points)} sample points but {len(self.values)} values"
            )
        if self.rhos is None:
            self.rhos = np.ones(len(self.points))
        else:
            self.rhos = np.asarray(self.rhos, dtype=float).ravel()
            if len(self.rhos) != len(self.points):
                raise ValueError(
                    f"{len(self.points)} sample points but {len(self.rhos)} depths"
                )

    def __len__(self) -> int:
        return len(self.points)

    def sample(self, index) -> tuple[Point3D, float]:
        x, y, z = self.points[index]
        return Point3D(x, y, z), float(self.values[index])

    def rho(self, index) -> float:
        return float(self.rhos[index])


def _rotation_block(s: np.ndarray) -> np.ndarray:
    x, y, z = s
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


class PhotometricGMS:
    """Gaussian mixture of image intensities evaluated at one location.

    Every sample of the image contributes a Gaussian of spread lambda_g,
    weighted by its intensity. When bounded, only samples closer than
    3 lambda_g (in angle) to the location contribute.
    """

    def __init__(self, lambda_g=1.0, bounded=False):
        self.bounded = bool(bounded)
        self.kernel_bound = -1.0
        self.location = Point3D()
        self.value = 0.0
        self._jacobian = np.zeros(6)
        self.pose_jacobian_computed = False
        self.set_lambda(lambda_g)

    def set_lambda(self, lambda_g) -> None:
        """Set the Gaussian spread and the constants derived from it."""
        if lambda_g > 0:
            self.lambda_g = float(lambda_g)
            self.one_o_l2 = 1.0 / (self.lambda_g * self.lambda_g)
            self.one_o_2l2 = self.one_o_l2 * 0.5
            self.norm_fact = self.one_o_l2 / (self.lambda_g * _TWO_PI_POW_3_2)
            if self.bounded and self.lambda_g < _PI_OVER_3:
                self.kernel_bound = math.cos(3.0 * self.lambda_g)
        else:
            self.lambda_g = 1.0
            self.one_o_2l2 = 0.0
            self.one_o_l2 = 0.0
            self.norm_fact = 0.0

    def _location_array(self) -> np.ndarray:
        return np.array([self.location.x, self.location.y, self.location.z])

    def cartesian_build_from(self, image: SampledImage, location,
                             compute_pose_derivatives=False) -> None:
        """Evaluate the mixture with straight-line distances between samples."""
        self.location = Point3D(location.x, location.y, location.z)
        s = self._location_array()
        diff = image.points - s
        dist2 = np.einsum("ij,ij->i", diff, diff)
        gs = image.values * self.norm_fact * np.exp(-dist2 * self.one_o_2l2)
        self.value = float(gs.sum())

        if compute_pose_derivatives:
            gradient = (diff * gs[:, None]).sum(axis=0) * self.one_o_l2
            dxg_dr = np.hstack([-np.eye(3), _rotation_block(s)])
            self._jacobian = gradient @ dxg_dr
            self.pose_jacobian_computed = True

    def build_from(self, image: SampledImage, location, compute_pose_derivatives=False,
                   rho=1.0, source_index=0) -> None:
        """Evaluate the mixture with great-circle distances on the unit sphere.

        The location is normalized to unit length first.
        """
        s = np.array([location.x, location.y, location.z], dtype=float)
        s /= math.sqrt(float(s @ s))
        self.location = Point3D(*s)

        dots = image.points @ s
        values = image.values
        points = image.points
        if self.bounded:
            keep = dots > self.kernel_bound
            dots, values, points = dots[keep], values[keep], points[keep]
        dots = np.clip(dots, -1.0, 1.0)
        dist = np.arccos(dots)
        gs = values * self.norm_fact * np.exp(-dist * dist * self.one_o_2l2)
        self.value = float(gs.sum())

        gradient = np.zeros(3)
        if compute_pose_derivatives:
            sqrt_1m = np.sqrt(1.0 - dots * dots)
            nonzero = sqrt_1m != 0.0
            fact = np.zeros_like(gs)
            fact[nonzero] = gs[nonzero] * self.one_o_l2 * dist[nonzero] / sqrt_1m[nonzero]
            gradient = (points * fact[:, None]).sum(axis=0)

        if rho > 0:
            if compute_pose_derivatives:
                translation = (np.outer(s, s) - np.eye(3)) / rho
                dxg_dr = np.hstack([translation, _rotation_block(s)])
                self._jacobian = gradient @ dxg_dr
                self.pose_jacobian_computed = True
        else:
            self._jacobian = np.zeros(6)
            self.pose_jacobian_computed = True

    def update_from(self, image: SampledImage, compute_pose_derivatives=False,
                    source_index=0) -> None:
        """Re-evaluate at the current location with the depth of source_index."""
        rho = image.rho(source_index)
        self.build_from(image, self.location, compute_pose_derivatives, rho, source_index)

    def pose_jacobian(self) -> np.ndarray:
        """The derivatives of the mixture value with respect to the 6 pose parameters."""
        if not self.pose_jacobian_computed:
            raise RuntimeError("the pose Jacobian has not been computed")
        return self._jacobian.copy()

    def to_double(self) -> float:
        return self.value

    def copy(self) -> "PhotometricGMS":
        other = PhotometricGMS(self.lambda_g, self.bounded)
        other.one_o_2l2 = self.one_o_2l2
        other.one_o_l2 = self.one_o_l2
        other.norm_fact = self.norm_fact
        other.kernel_bound = self.kernel_bound
        other.location = Point3D(self.location.x, self.location.y, self.location.z)
        other.value = self.value
        other._jacobian = self._jacobian.copy()
        other.pose_jacobian_computed = self.pose_jacobian_computed
        return other

    def __sub__(self, other: "PhotometricGMS") -> "PhotometricGMS":
        result = PhotometricGMS(self.lambda_g)
        result.value = self.value - other.value
        return result

    def __mul__(self, other) -> "PhotometricGMS":
        factor = other.value if isinstance(other, PhotometricGMS) else float(other)
        result = PhotometricGMS(self.lambda_g)
        result.value = self.value * factor
        return result

    def __iadd__(self, other: "PhotometricGMS") -> "PhotometricGMS":
        self.value += other.value
        return self