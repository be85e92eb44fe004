"""A rig of several sensors with their poses relative to the first one."""

from __future__ import annotations

import numpy as np


class StereoModel:
    """Sensors of a rig; pose j maps the first sensor's frame to sensor j's."""

    def __init__(self, count=0):
        self.init(count)

    def init(self, count) -> None:
        """Forget the current rig and make room for count sensors."""
        self.sensors = [None] * count
        self.poses = [np.eye(4) for _ in range(count)]

    @property
    def count(self) -> int:
        return len(self.sensors)

    def set_sensor(self, index, sensor) -> None:
        self.sensors[index] = sensor

    def set_relative_pose(self, index, matrix) -> None:
        """Set the pose of sensor index; the first sensor's pose stays the identity."""
        if self.count > 1 and 0 < index < self.count:
            self.poses[index] = np.array(matrix, dtype=float)