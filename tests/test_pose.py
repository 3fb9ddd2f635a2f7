"""
Unit tests for 2D pose algebra
"""

import dataclasses
import math
import unittest
import numpy as np
from mcl_localization.core import Pose2D, wrap_angle


class TestWrapAngle(unittest.TestCase):
    """Test angle wrapping"""

    def test_wrap_inside_range(self):
        self.assertAlmostEqual(wrap_angle(0.5), 0.5)

    def test_wrap_large_angle(self):
        self.assertAlmostEqual(wrap_angle(3 * np.pi / 2), -np.pi / 2)

    def test_wrap_array(self):
        wrapped = wrap_angle(np.array([2 * np.pi, -2 * np.pi + 0.1]))
        np.testing.assert_allclose(wrapped, [0.0, 0.1], atol=1e-12)


class TestPose2D(unittest.TestCase):
    """Test rigid transform composition"""

    def test_heading_wrapped_on_construction(self):
        pose = Pose2D(0, 0, 3 * np.pi / 2)
        self.assertAlmostEqual(pose.theta, -np.pi / 2)

    def test_immutable(self):
        pose = Pose2D(1, 2, 0.3)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            pose.x = 5.0

    def test_compose_applies_in_local_frame(self):
        """Moving forward 1 while facing +y ends up at y + 1"""
        pose = Pose2D(1, 0, np.pi / 2) * Pose2D(1, 0, 0)
        self.assertAlmostEqual(pose.x, 1.0)
        self.assertAlmostEqual(pose.y, 1.0)
        self.assertAlmostEqual(pose.theta, np.pi / 2)

    def test_compose_with_identity(self):
        pose = Pose2D(1.5, -2.0, 0.7)
        self.assertTrue((pose * Pose2D.identity()).is_close(pose, 1e-12, 1e-12))
        self.assertTrue((Pose2D.identity() * pose).is_close(pose, 1e-12, 1e-12))

    def test_inverse(self):
        pose = Pose2D(1.0, 2.0, 0.5)
        self.assertTrue((pose * pose.inverse()).is_close(Pose2D.identity(), 1e-12, 1e-12))
        self.assertTrue((pose.inverse() * pose).is_close(Pose2D.identity(), 1e-12, 1e-12))

    def test_relative_motion(self):
        """prev^-1 * current recovers the motion applied to prev"""
        prev = Pose2D(3.0, -1.0, 2.0)
        motion = Pose2D(0.4, 0.1, -0.3)
        current = prev * motion
        self.assertTrue((prev.inverse() * current).is_close(motion, 1e-9, 1e-9))

    def test_transform_point(self):
        pose = Pose2D(1, 0, np.pi / 2)
        np.testing.assert_allclose(pose.transform_point([1, 0]), [1, 1], atol=1e-12)

    def test_transform_many_points(self):
        pose = Pose2D(0, 0, np.pi)
        points = pose.transform_point(np.array([[1, 0], [0, 2]]))
        np.testing.assert_allclose(points, [[-1, 0], [0, -2]], atol=1e-12)

    def test_from_matrix(self):
        pose = Pose2D(0.3, -0.4, 1.2)
        rebuilt = Pose2D.from_matrix(pose.rotation_matrix(), pose.translation)
        self.assertTrue(rebuilt.is_close(pose, 1e-12, 1e-12))

    def test_from_matrix_rejects_bad_shape(self):
        with self.assertRaises(ValueError):
            Pose2D.from_matrix(np.eye(3), [0, 0])

    def test_is_close_across_wraparound(self):
        a = Pose2D(0, 0, math.pi - 1e-6)
        b = Pose2D(0, 0, -math.pi + 1e-6)
        self.assertTrue(a.is_close(b, 1e-9, 1e-5))


if __name__ == '__main__':
    unittest.main()
