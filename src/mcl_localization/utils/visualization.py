"""
Plotting helpers for particle clouds, scans and trajectories

All functions draw onto a caller supplied matplotlib Axes and only read
their inputs; nothing here touches filter state.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional, Sequence

from .coordinate_transforms import scan_to_points, transform_points


def plot_particles(ax: plt.Axes, poses: np.ndarray, mean_pose=None, true_pose=None,
                   arrow_length: float = 0.2):
    """
    Scatter particle positions with heading ticks

    Args:
        ax: Target axes
        poses: (N, 3) array of x, y, theta (ParticleSet.poses())
        mean_pose: Optional estimate drawn as a green marker
        true_pose: Optional ground truth drawn as a red marker
        arrow_length: Heading tick length in map units
    """
    poses = np.asarray(poses, dtype=float).reshape(-1, 3)
    ax.scatter(poses[:, 0], poses[:, 1], c='blue', s=8, alpha=0.4, label='Particles')
    ax.quiver(poses[:, 0], poses[:, 1],
              arrow_length * np.cos(poses[:, 2]), arrow_length * np.sin(poses[:, 2]),
              color='blue', alpha=0.3, angles='xy', scale_units='xy', scale=1, width=0.002)

    if mean_pose is not None:
        ax.plot(mean_pose.x, mean_pose.y, 'go', markersize=10, label='Mean Est', markeredgecolor='black')
    if true_pose is not None:
        ax.plot(true_pose.x, true_pose.y, 'ro', markersize=10, label='GT', markeredgecolor='black')

    ax.set_aspect('equal')
    ax.grid(True, alpha=0.3)


def plot_scan(ax: plt.Axes, scan, pose, max_range: Optional[float] = None):
    """
    Draw the scan end points as seen from a robot pose

    Args:
        ax: Target axes
        scan: LaserScan; its mount offset (if any) is applied
        pose: Robot pose in the map frame, typically the mean estimate
        max_range: Beams at or beyond this range are not drawn
    """
    points = scan_to_points(scan, max_range)
    laser_pose = pose * scan.mount.offset if scan.mount is not None else pose
    world_points = transform_points(laser_pose, points)
    ax.scatter(world_points[:, 0], world_points[:, 1], c='green', s=3, label='Scan')
    return world_points


def plot_grid_world(ax: plt.Axes, world):
    """Show an occupancy GridWorld in map coordinates"""
    extent = (world.origin[0], world.origin[0] + world.width * world.resolution,
              world.origin[1], world.origin[1] + world.height * world.resolution)
    ax.imshow(world.occupancy.T, origin='lower', extent=extent, cmap='gray_r',
              interpolation='none', vmin=0, vmax=1)


def plot_trajectory(ax: plt.Axes, estimates: Sequence, ground_truth: Optional[Sequence] = None):
    """
    Plot estimated (and optionally true) x, y trajectories

    Args:
        ax: Target axes
        estimates: Sequence of (x, y, theta)
        ground_truth: Optional sequence of (x, y, theta)
    """
    est = np.asarray(estimates, dtype=float).reshape(-1, 3)
    ax.plot(est[:, 0], est[:, 1], 'g-', label='Estimate (x,y)', linewidth=2)
    if len(est) > 0:
        ax.scatter(est[0, 0], est[0, 1], c='green', s=100, marker='o', label='Start')
        ax.scatter(est[-1, 0], est[-1, 1], c='blue', s=100, marker='*', label='End')
    if ground_truth is not None:
        gt = np.asarray(ground_truth, dtype=float).reshape(-1, 3)
        ax.plot(gt[:, 0], gt[:, 1], 'r--', label='Ground Truth (x,y)', linewidth=1)
    ax.set_title('Trajectory')
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_aspect('equal')
    ax.legend()
    ax.grid(True)
