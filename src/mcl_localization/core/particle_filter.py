# Monte Carlo localization particle filter on a known map
# - Particles store a pose (x, y, theta) and an unnormalized weight
# - Motion update composes every pose with the odometry delta plus noise
# - Sensor update multiplies weights by the laser beam likelihood
# - Resampling draws a fresh, uniformly weighted set of num_particles

import logging
from enum import Enum

import numpy as np

from .particle import ParticleSet, weighted_mean_pose
from .resampler import DegenerateWeightsError, normalize, resample
from ..utils.resampling import effective_sample_size

logger = logging.getLogger(__name__)


class FilterState(Enum):
    UNINITIALIZED = 'uninitialized'
    SEEDED = 'seeded'
    TRACKING = 'tracking'


# ---------- Particle Filter Class ----------
class ParticleFilter:
    def __init__(self, motion_model, laser_model, num_particles=500, rng=None, **params):
        if num_particles <= 0:
            raise ValueError("num_particles must be positive")
        self.motion_model = motion_model
        self.laser_model = laser_model
        self.num_particles = int(num_particles)
        self.rng = rng if rng is not None else np.random.default_rng()

        # None means resample every cycle; otherwise an effective sample size ratio
        self.resample_threshold = params.get('resample_threshold', None)
        self.init_resolution = params.get('init_resolution', 0.05)
        self.init_angle_resolution = params.get('init_angle_resolution', 0.05)
        self.set_pose_spread_xy = params.get('set_pose_spread_xy', 0.3)
        self.set_pose_spread_theta = params.get('set_pose_spread_theta', 0.1)

        self.particles = ParticleSet()
        self.state = FilterState.UNINITIALIZED
        # Estimate of the last successful cycle; survives degenerate cycles
        self.last_mean_pose = None

    def samples(self):
        return self.particles

    def init_uniform(self, region_min, region_max, resolution, angle_min, angle_max, angle_resolution):
        self.particles = ParticleSet.from_grid(region_min, region_max, resolution,
                                               angle_min, angle_max, angle_resolution)
        self.state = FilterState.SEEDED
        self.last_mean_pose = None
        logger.info("seeded %d particles over x=[%.3f, %.3f] y=[%.3f, %.3f] theta=[%.3f, %.3f]",
                    len(self.particles), region_min[0], region_max[0],
                    region_min[1], region_max[1], angle_min, angle_max)

    def set_pose(self, pose):
        d = self.set_pose_spread_xy
        self.init_uniform((pose.x - d, pose.y - d), (pose.x + d, pose.y + d), self.init_resolution,
                          pose.theta - self.set_pose_spread_theta,
                          pose.theta + self.set_pose_spread_theta,
                          self.init_angle_resolution)

    def needs_resample(self):
        if self.resample_threshold is None:
            return True
        if len(self.particles) != self.num_particles:
            return True
        ess = effective_sample_size(self.particles.weights())
        return ess < self.resample_threshold * len(self.particles)

    def update(self, delta, scan, world):
        """
        Run one motion / sensor / resample cycle.

        Returns True when the cycle ran and False when it was skipped
        (empty filter or missing input). Raises DegenerateWeightsError when
        no particle explains the scan; the particles keep this cycle's motion
        but get back their pre-sensor weights, and last_mean_pose is left
        untouched.
        """
        if self.particles.empty():
            return False
        if delta is None or scan is None:
            logger.debug("missing motion or scan input, skipping cycle")
            return False
        if scan.mount is None:
            logger.debug("sensor mount not calibrated, skipping cycle")
            return False

        # 1) move
        self.motion_model.update_poses(delta, self.particles)
        prior_weights = self.particles.weights()

        # 2) weigh
        self.laser_model.update_weights(world, scan, self.particles)

        # 3) resample (or only normalize when the weights are still healthy)
        try:
            if self.needs_resample():
                self.particles = resample(self.num_particles, self.particles, self.rng)
            else:
                normalize(self.particles)
        except DegenerateWeightsError:
            # odometry has already been consumed, so the moved poses stay
            logger.error("degenerate weights after sensor update, keeping motion-updated particles")
            self.particles.set_weights(prior_weights)
            raise

        self.state = FilterState.TRACKING
        self.last_mean_pose = weighted_mean_pose(self.particles)
        return True

    def calculate_mean_pose(self):
        """Weighted circular mean of the particles, or None when there is no estimate."""
        if self.particles.empty():
            return None
        return weighted_mean_pose(self.particles)

    mean_pose = calculate_mean_pose

    def get_best_particle(self):
        # return particle with highest weight
        if self.particles.empty():
            return None, np.zeros(0)
        weights = self.particles.weights()
        idx = int(np.argmax(weights))
        return self.particles[idx], weights

    def particle_poses(self):
        """Copy of the particle poses for publishing as a pose cloud."""
        return [p.pose for p in self.particles]
