"""
Smoke tests for the plotting helpers
"""

import math
import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from mcl_localization.core import LaserScan, Pose2D, SensorMount
from mcl_localization.utils.visualization import (
    plot_grid_world, plot_particles, plot_scan, plot_trajectory
)
from mcl_localization.world import GridWorld


class TestVisualization(unittest.TestCase):
    """Test drawing onto an off-screen figure"""

    def setUp(self):
        self.fig, self.ax = plt.subplots()

    def tearDown(self):
        plt.close(self.fig)

    def test_plot_particles(self):
        poses = np.array([[0, 0, 0], [1, 1, math.pi / 2]], dtype=float)
        plot_particles(self.ax, poses, mean_pose=Pose2D(0.5, 0.5, 0), true_pose=Pose2D(0.4, 0.4, 0))
        self.assertEqual(len(self.ax.collections), 2)
        self.assertEqual(len(self.ax.lines), 2)

    def test_plot_scan_applies_mount(self):
        scan = LaserScan([1.0, np.inf, 2.0], -math.pi / 2, math.pi / 2,
                         mount=SensorMount(Pose2D(0.5, 0, 0)))
        points = plot_scan(self.ax, scan, Pose2D(1.0, 0.0, 0.0), max_range=5.0)
        np.testing.assert_allclose(points, [[1.5, -1.0], [1.5, 2.0]], atol=1e-12)

    def test_plot_grid_world(self):
        occupancy = np.zeros((20, 10), dtype=bool)
        occupancy[0, :] = True
        plot_grid_world(self.ax, GridWorld(occupancy, 0.1, origin=(-1.0, 0.0)))
        image = self.ax.images[0]
        self.assertEqual(tuple(image.get_extent()), (-1.0, 1.0, 0.0, 1.0))

    def test_plot_trajectory(self):
        est = [(0, 0, 0), (1, 0, 0), (2, 1, 0)]
        plot_trajectory(self.ax, est, ground_truth=est)
        self.assertEqual(len(self.ax.lines), 2)
        self.assertEqual(self.ax.get_title(), 'Trajectory')


if __name__ == '__main__':
    unittest.main()
