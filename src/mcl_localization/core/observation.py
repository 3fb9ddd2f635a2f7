"""
Laser scan observations and the sensor mounting they were taken with
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .pose import Pose2D


@dataclass(frozen=True)
class SensorMount:
    """Fixed sensor placement on the robot body: planar offset and height."""
    offset: Pose2D = field(default_factory=Pose2D.identity)
    height: float = 0.0


@dataclass(frozen=True, eq=False)
class LaserScan:
    """
    One range scan.

    Attributes
    ----------
    ranges : array of ranges, one per beam (non-finite values mean no return)
    angle_min : bearing of the first beam in the sensor frame (radians)
    angle_increment : bearing step between consecutive beams (radians)
    stamp : capture time in seconds
    frame_id : sensor frame name
    mount : sensor placement on the robot, None until calibrated
    """
    ranges: np.ndarray
    angle_min: float
    angle_increment: float
    stamp: float = 0.0
    frame_id: str = "laser"
    mount: Optional[SensorMount] = None

    def __post_init__(self):
        ranges = np.asarray(self.ranges, dtype=float)
        if ranges.ndim != 1:
            raise ValueError("ranges must be a one-dimensional sequence")
        object.__setattr__(self, 'ranges', ranges)

    def beam_count(self) -> int:
        return len(self.ranges)

    def bearings(self) -> np.ndarray:
        return self.angle_min + self.angle_increment * np.arange(len(self.ranges))

    def with_mount(self, mount: SensorMount) -> 'LaserScan':
        return dataclasses.replace(self, mount=mount)
