import math
import numpy as np

from .pose import Pose2D


# ---------- helper functions ----------

def grid_values(lo, hi, resolution):
    """Inclusive regular grid from lo to hi; a single value when the span is zero."""
    if resolution <= 0:
        raise ValueError(f"resolution must be positive, got {resolution}")
    span = hi - lo
    if span < 0:
        raise ValueError(f"empty range [{lo}, {hi}]")
    n = int(math.floor(span / resolution + 1e-9)) + 1
    if n == 1:
        return np.array([(lo + hi) / 2.0])
    return np.linspace(lo, lo + (n - 1) * resolution, n)


# ---------- Particle class ----------
class Particle:
    def __init__(self, pose=None, weight=1.0):
        self.pose = pose if pose is not None else Pose2D.identity()
        self.weight = float(weight)

    def copy(self):
        # Pose2D is immutable, so sharing it between copies is safe
        return Particle(self.pose, self.weight)

    def __repr__(self):
        return f"Particle(pose={self.pose}, weight={self.weight:.6g})"


# ---------- Particle set ----------
class ParticleSet:
    """
    Ordered collection of particles; the filter's whole belief.

    Weights are unnormalized between sensor updates.
    """

    def __init__(self, particles=None):
        self.particles = list(particles) if particles is not None else []

    @classmethod
    def from_grid(cls, region_min, region_max, resolution, angle_min, angle_max, angle_resolution):
        """One particle per grid point over the region and angle range, uniform weight."""
        xs = grid_values(region_min[0], region_max[0], resolution)
        ys = grid_values(region_min[1], region_max[1], resolution)
        thetas = grid_values(angle_min, angle_max, angle_resolution)

        n = len(xs) * len(ys) * len(thetas)
        weight = 1.0 / n
        particles = [Particle(Pose2D(x, y, theta), weight)
                     for x in xs for y in ys for theta in thetas]
        return cls(particles)

    def __len__(self):
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def __getitem__(self, idx):
        return self.particles[idx]

    def empty(self):
        return len(self.particles) == 0

    def copy(self):
        return ParticleSet(p.copy() for p in self.particles)

    def weights(self):
        return np.array([p.weight for p in self.particles], dtype=float)

    def poses(self):
        """(N, 3) array of x, y, theta."""
        if self.empty():
            return np.zeros((0, 3))
        return np.array([p.pose.as_tuple() for p in self.particles], dtype=float)

    def total_weight(self):
        return float(np.sum(self.weights()))

    def set_uniform_weights(self):
        if self.empty():
            return
        w = 1.0 / len(self.particles)
        for p in self.particles:
            p.weight = w

    def set_weights(self, weights):
        if len(weights) != len(self.particles):
            raise ValueError(f"expected {len(self.particles)} weights, got {len(weights)}")
        for p, w in zip(self.particles, weights):
            p.weight = float(w)


def weighted_mean_pose(particle_set):
    """
    Weighted mean pose of a particle set, or None if the set is empty.

    Translation is the weight-normalized mean; heading is the angle of the
    weighted sum of unit vectors so that +179 and -179 degrees average to 180.
    Raises ValueError when the total weight is zero or non-finite.
    """
    if particle_set.empty():
        return None

    weights = particle_set.weights()
    total = np.sum(weights)
    if not np.isfinite(total) or total <= 0:
        raise ValueError(f"cannot average poses with total weight {total}")
    weights = weights / total

    poses = particle_set.poses()
    x = np.dot(weights, poses[:, 0])
    y = np.dot(weights, poses[:, 1])
    c = np.dot(weights, np.cos(poses[:, 2]))
    s = np.dot(weights, np.sin(poses[:, 2]))
    return Pose2D(x, y, math.atan2(s, c))
