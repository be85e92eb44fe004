"""A point feature carried through world, camera, image and pixel coordinates."""

from __future__ import annotations

from percam.geometry import Point3D


class PointFeature:
    """A 3D point with its projections on the normalized and pixel image planes."""

    def __init__(self):
        self.world = Point3D()
        self.camera = Point3D()
        self.x = 0.0
        self.y = 0.0
        self.w = 1.0
        self.u = 0.0
        self.v = 0.0

    # Coordinates in the object (world) frame.
    @property
    def ox(self) -> float:
        return self.world.x

    @ox.setter
    def ox(self, value) -> None:
        self.world.x = float(value)

    @property
    def oy(self) -> float:
        return self.world.y

    @oy.setter
    def oy(self, value) -> None:
        self.world.y = float(value)

    @property
    def oz(self) -> float:
        return self.world.z

    @oz.setter
    def oz(self, value) -> None:
        self.world.z = float(value)

    # Coordinates in the sensor frame.
    @property
    def X(self) -> float:
        return self.camera.x

    @X.setter
    def X(self, value) -> None:
        self.camera.x = float(value)

    @property
    def Y(self) -> float:
        return self.camera.y

    @Y.setter
    def Y(self, value) -> None:
        self.camera.y = float(value)

    @property
    def Z(self) -> float:
        return self.camera.z

    @Z.setter
    def Z(self, value) -> None:
        self.camera.z = float(value)

    def set_world_coordinates(self, x, y, z) -> None:
        self.world.set_point(x, y, z)

    def set_world_point(self, point: Point3D) -> None:
        """Set the world coordinates from a homogeneous point, which must be finite."""
        if point.w == 0:
            raise ValueError("world coordinates cannot be a point at infinity")
        self.world = Point3D(point.x, point.y, point.z, point.w)

    def change_frame(self, matrix) -> Point3D:
        """Express the world point in the sensor frame given by a 4x4 matrix."""
        self.camera = self.world.change_frame(matrix)
        return self.camera

    def set_object_pix_uv(self, ox, oy, oz, u, v) -> None:
        self.ox, self.oy, self.oz = ox, oy, oz
        self.u, self.v = float(u), float(v)

    def copy(self) -> "PointFeature":
        other = PointFeature()
        other.world = Point3D(*self.world)
        other.camera = Point3D(*self.camera)
        other.x, other.y, other.w = self.x, self.y, self.w
        other.u, other.v = self.u, self.v
        return other