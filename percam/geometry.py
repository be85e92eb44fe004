"""Homogeneous 2D and 3D points and rigid frame changes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np


def _as_matrix(matrix) -> np.ndarray:
    m = np.asarray(matrix, dtype=float)
    if m.shape != (4, 4):
        raise ValueError(f"expected a 4x4 homogeneous matrix, got shape {m.shape}")
    return m


def pose_matrix(tx, ty, tz, tux, tuy, tuz) -> np.ndarray:
    """Build a 4x4 homogeneous matrix from a translation and a theta-u rotation."""
    theta = math.sqrt(tux * tux + tuy * tuy + tuz * tuz)
    skew = np.array(
        [[0.0, -tuz, tuy], [tuz, 0.0, -tux], [-tuy, tux, 0.0]], dtype=float
    )
    if theta < 1e-8:
        sinc, mcosc = 1.0, 0.5
    else:
        sinc = math.sin(theta) / theta
        mcosc = (1.0 - math.cos(theta)) / (theta * theta)
    matrix = np.eye(4)
    matrix[:3, :3] = np.eye(3) + sinc * skew + mcosc * (skew @ skew)
    matrix[:3, 3] = (tx, ty, tz)
    return matrix


@dataclass
class Point2D:
    """A point (w != 0) or a direction (w == 0) of the projective plane."""

    x: float = 0.0
    y: float = 0.0
    w: float = 1.0

    def __post_init__(self) -> None:
        self.set(self.x, self.y, self.w)
        if self.w != 0:
            self.to_euclidean()

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.w))

    def set_point(self, x, y) -> None:
        self.set(x, y, 1.0)

    def set_vector(self, x, y) -> None:
        self.set(x, y, 0.0)

    def set(self, x, y, w) -> None:
        self.x, self.y, self.w = float(x), float(y), float(w)

    def to_euclidean(self) -> None:
        """Scale the coordinates so that w becomes 1."""
        if self.w == 0:
            raise ValueError("a point at infinity has no Euclidean form")
        inv = 1.0 / self.w
        self.set(self.x * inv, self.y * inv, 1.0)

    def change_frame(self, matrix) -> "Point2D":
        """Apply the planar part (rows and columns 0, 1, 3) of a 4x4 matrix."""
        m = _as_matrix(matrix)
        x, y, w = self.x, self.y, self.w
        return Point2D(
            m[0, 0] * x + m[0, 1] * y + m[0, 3] * w,
            m[1, 0] * x + m[1, 1] * y + m[1, 3] * w,
            m[3, 0] * x + m[3, 1] * y + m[3, 3] * w,
        )


@dataclass
class Point3D:
    """A point (w != 0) or a direction (w == 0) of projective space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __post_init__(self) -> None:
        self.set(self.x, self.y, self.z, self.w)
        if self.w != 0:
            self.to_euclidean()

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z, self.w))

    def set_point(self, x, y, z) -> None:
        self.set(x, y, z, 1.0)

    def set_vector(self, x, y, z) -> None:
        self.set(x, y, z, 0.0)

    def set(self, x, y, z, w) -> None:
        self.x, self.y, self.z, self.w = float(x), float(y), float(z), float(w)

    def to_euclidean(self) -> None:
        """Scale the coordinates so that w becomes 1."""
        if self.w == 0:
            raise ValueError("a point at infinity has no Euclidean form")
        inv = 1.0 / self.w
        self.set(self.x * inv, self.y * inv, self.z * inv, 1.0)

    def change_frame(self, matrix) -> "Point3D":
        """Return this point expressed in the frame given by a 4x4 matrix."""
        m = _as_matrix(matrix)
        nx, ny, nz, nw = m @ np.array([self.x, self.y, self.z, self.w])
        return Point3D(nx, ny, nz, nw)