"""Neighbours of image pixels found by stepping along the axes of the unit sphere."""

from __future__ import annotations

import itertools
import math

import numpy as np

from percam.point import PointFeature

# Offsets, in sampling steps, of the neighbours taken on each side of a point.
_OFFSETS = (-3, -2, -1, 1, 2, 3)


def compute_index_neighbor(win_size, value) -> int:
    """Round an image coordinate to an index, or 0 when it lies near the border."""
    if not math.isfinite(value) or value > win_size - 4 or value < 4:
        return 0
    return math.floor(value + 0.5)


class Neighborhood:
    """Table of spherical neighbours of every pixel of an image.

    After build(), neigh has shape (3, height, width, 2, 6): for each sphere
    axis (X, Y, Z), each pixel (row, column) and each of the six neighbours,
    the neighbour's row (index 0) and column (index 1). Pixels within the
    border margins, and neighbours that fall near the image border, hold 0.
    """

    def __init__(self):
        self.is_set = False
        self.nba = 2
        self.nb_neigh = len(_OFFSETS)
        self.di = 3
        self.dj = 3
        self.delta_cs_sampling = 0.0
        self.img_h = 0
        self.img_w = 0
        self.dim_s = 0
        self.neigh_size = 0
        self.neigh: np.ndarray | None = None

    def build(self, width, height, camera) -> None:
        """Compute the neighbour table for an image seen through camera.

        The camera must provide pixel_meter_conversion, project_image_sphere,
        project_3d_image and meter_pixel_conversion. Does nothing if the
        table is already built.
        """
        if self.is_set:
            return
        self.is_set = True

        probe = PointFeature()
        probe.u, probe.v = camera.u0, camera.v0
        xs0, ys0, zs0 = camera.project_image_sphere(probe)
        probe.u, probe.v = camera.u0 + 1, camera.v0 + 1
        camera.pixel_meter_conversion(probe)
        xs1, ys1, zs1 = camera.project_image_sphere(probe)
        delta = math.sqrt((xs1 - xs0) ** 2 + (ys1 - ys0) ** 2 + (zs1 - zs0) ** 2)
        self.delta_cs_sampling = delta

        self.img_h, self.img_w = height, width
        self.dim_s = 2
        self.neigh_size = 3 * height * width * self.nba * self.nb_neigh
        neigh = np.zeros((3, height, width, self.nba, self.nb_neigh), dtype=int)

        rows = range(self.di, height - self.di)
        cols = range(self.dj, width - self.dj)
        point = PointFeature()
        for r, c in itertools.product(rows, cols):
            point.u, point.v = c, r
            camera.pixel_meter_conversion(point)
            centre = camera.project_image_sphere(point)
            for axis in range(3):
                for i, offset in enumerate(_OFFSETS):
                    moved = list(centre)
                    moved[axis] += offset * delta
                    point.X, point.Y, point.Z = moved
                    camera.project_3d_image(point)
                    camera.meter_pixel_conversion(point)
                    neigh[axis, r, c, 1, i] = compute_index_neighbor(width, point.u)
                    neigh[axis, r, c, 0, i] = compute_index_neighbor(height, point.v)
        self.neigh = neigh

    def clear(self) -> None:
        """Drop the neighbour table so that the next build() recomputes it."""
        if not self.is_set:
            return
        self.is_set = False
        self.neigh = None

    def copy_from(self, other: "Neighborhood") -> None:
        """Copy the sampling step and image geometry, not the table itself."""
        self.delta_cs_sampling = other.delta_cs_sampling
        self.img_h = other.img_h
        self.img_w = other.img_w
        self.dim_s = other.dim_s
        self.neigh_size = other.neigh_size