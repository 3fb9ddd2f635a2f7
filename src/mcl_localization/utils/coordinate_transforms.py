"""
Coordinate transforms between sensor, robot and map frames
"""

import numpy as np
from typing import Optional


def ranges_to_points(ranges: np.ndarray, bearings: np.ndarray,
                     max_range: Optional[float] = None) -> np.ndarray:
    """
    Convert range readings into (N, 2) points in the sensor frame

    Args:
        ranges: Range per beam
        bearings: Bearing per beam (radians, sensor frame)
        max_range: If given, beams without a return (non-finite or beyond
            max_range) are dropped

    Returns:
        Array of shape (N, 2)
    """
    ranges = np.asarray(ranges, dtype=float)
    bearings = np.asarray(bearings, dtype=float)
    if ranges.shape != bearings.shape:
        raise ValueError("ranges and bearings must have the same shape")

    mask = np.isfinite(ranges)
    if max_range is not None:
        mask &= ranges < max_range
    r = ranges[mask]
    b = bearings[mask]
    return np.column_stack((r * np.cos(b), r * np.sin(b)))


def scan_to_points(scan, max_range: Optional[float] = None) -> np.ndarray:
    """Points of a LaserScan in its own sensor frame"""
    return ranges_to_points(scan.ranges, scan.bearings(), max_range)


def transform_points(pose, points: np.ndarray) -> np.ndarray:
    """
    Map (N, 2) points from the frame described by pose into its parent frame

    Args:
        pose: Frame pose in the parent frame
        points: Points in the child frame

    Returns:
        Points in the parent frame, shape (N, 2)
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    return pose.transform_point(points)


def ray_endpoints(origin, bearings: np.ndarray, ranges: np.ndarray) -> np.ndarray:
    """End points in the parent frame of rays cast from origin at the given bearings"""
    angles = origin.theta + np.asarray(bearings, dtype=float)
    ranges = np.asarray(ranges, dtype=float)
    return np.column_stack((origin.x + ranges * np.cos(angles),
                            origin.y + ranges * np.sin(angles)))
