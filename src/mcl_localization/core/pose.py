"""
Rigid 2D transforms used for particle poses, odometry deltas and sensor offsets
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np


def wrap_angle(angle):
    """Wrap an angle (scalar or array) to [-pi, pi)."""
    return (angle + np.pi) % (2 * np.pi) - np.pi


@dataclass(frozen=True)
class Pose2D:
    """
    2D pose: translation (x, y) and heading theta in radians.

    Poses compose like rigid transforms: ``a * b`` applies ``b`` in the
    frame of ``a``. Heading is always kept in [-pi, pi).
    """
    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))
        object.__setattr__(self, 'theta', float(wrap_angle(float(self.theta))))

    @staticmethod
    def identity() -> 'Pose2D':
        return Pose2D(0.0, 0.0, 0.0)

    @staticmethod
    def from_matrix(rotation, translation) -> 'Pose2D':
        """Build a pose from a 2x2 rotation matrix and a 2-vector translation."""
        rotation = np.asarray(rotation, dtype=float)
        if rotation.shape != (2, 2):
            raise ValueError("rotation must be a 2x2 matrix")
        theta = math.atan2(rotation[1, 0], rotation[0, 0])
        return Pose2D(translation[0], translation[1], theta)

    def rotation_matrix(self) -> np.ndarray:
        c = math.cos(self.theta)
        s = math.sin(self.theta)
        return np.array([[c, -s],
                         [s, c]])

    @property
    def translation(self) -> np.ndarray:
        return np.array([self.x, self.y])

    def compose(self, other: 'Pose2D') -> 'Pose2D':
        c = math.cos(self.theta)
        s = math.sin(self.theta)
        return Pose2D(self.x + c * other.x - s * other.y,
                      self.y + s * other.x + c * other.y,
                      self.theta + other.theta)

    def __mul__(self, other):
        if not isinstance(other, Pose2D):
            return NotImplemented
        return self.compose(other)

    def inverse(self) -> 'Pose2D':
        c = math.cos(self.theta)
        s = math.sin(self.theta)
        return Pose2D(-c * self.x - s * self.y,
                      s * self.x - c * self.y,
                      -self.theta)

    def transform_point(self, point) -> np.ndarray:
        """Map a point (or an (N, 2) array of points) from this frame to the parent frame."""
        point = np.asarray(point, dtype=float)
        return point @ self.rotation_matrix().T + self.translation

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.theta)

    def is_close(self, other: 'Pose2D', tol_xy: float = 1e-9, tol_theta: float = 1e-9) -> bool:
        return (math.hypot(self.x - other.x, self.y - other.y) <= tol_xy
                and abs(wrap_angle(self.theta - other.theta)) <= tol_theta)
