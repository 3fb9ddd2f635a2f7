import logging
import math
import numpy as np

from .observation import SensorMount
from ..utils.coordinate_transforms import ray_endpoints

logger = logging.getLogger(__name__)


class LaserModel:
    """
    Beam-based laser likelihood model.

    For every particle and every sampled beam the expected range is obtained
    from the world model by ray casting from the sensor pose (particle pose
    composed with the sensor mounting offset). Each beam contributes

        p = z_hit * exp(-0.5 * ((z_obs - z_exp) / hit_sigma)^2) + z_rand

    i.e. a narrow Gaussian around zero error plus a uniform floor so that no
    single beam can drive a weight to zero. Beam log-likelihoods are summed
    and exponentiated once per particle.
    """

    def __init__(self, **params):
        self.num_beams = int(params.get('num_beams', 60))
        self.range_min = float(params.get('range_min', 0.05))
        self.range_max = float(params.get('range_max', 10.0))
        self.hit_sigma = float(params.get('hit_sigma', 0.1))
        self.z_hit = float(params.get('z_hit', 0.95))
        self.z_rand = float(params.get('z_rand', 0.05))

        if self.num_beams <= 0:
            raise ValueError("num_beams must be positive")
        if not 0 <= self.range_min < self.range_max:
            raise ValueError(f"invalid range limits [{self.range_min}, {self.range_max}]")
        if self.hit_sigma <= 0:
            raise ValueError("hit_sigma must be positive")
        if self.z_hit < 0 or self.z_rand <= 0:
            raise ValueError("z_hit must be non-negative and z_rand positive")

        # Ray end points of the last update, for visualization
        self.lines_start = np.zeros((0, 2))
        self.lines_end = np.zeros((0, 2))

    @property
    def max_beam_likelihood(self):
        return self.z_hit + self.z_rand

    @property
    def min_beam_likelihood(self):
        return self.z_rand

    def clip_ranges(self, ranges):
        """Map ranges into [range_min, range_max]; non-finite readings count as max range."""
        ranges = np.asarray(ranges, dtype=float)
        ranges = np.where(np.isfinite(ranges), ranges, self.range_max)
        return np.clip(ranges, self.range_min, self.range_max)

    def beam_likelihood(self, expected, observed):
        expected = self.clip_ranges(expected)
        observed = self.clip_ranges(observed)
        err = (observed - expected) / self.hit_sigma
        return self.z_hit * np.exp(-0.5 * err * err) + self.z_rand

    def sample_beams(self, beam_count):
        """Indexes of the beams used for scoring: a fixed stride starting at beam 0."""
        if beam_count == 0:
            return np.zeros(0, dtype=int)
        step = max(1, int(math.ceil(beam_count / self.num_beams)))
        return np.arange(0, beam_count, step)

    def expected_ranges(self, world, sensor_pose, bearings):
        ranges = np.empty(len(bearings))
        for k, bearing in enumerate(bearings):
            r, valid = world.ray_cast(sensor_pose, bearing)
            ranges[k] = r if valid else self.range_max
        return ranges

    def update_weights(self, world, scan, particle_set):
        if particle_set.empty():
            return

        mount = scan.mount if scan.mount is not None else SensorMount()
        beam_idx = self.sample_beams(scan.beam_count())
        if len(beam_idx) == 0:
            logger.debug("scan has no beams, weights unchanged")
            return

        bearings = scan.bearings()[beam_idx]
        observed = self.clip_ranges(scan.ranges[beam_idx])

        starts = []
        ends = []
        for p in particle_set:
            sensor_pose = p.pose * mount.offset
            expected = self.expected_ranges(world, sensor_pose, bearings)

            log_like = np.sum(np.log(self.beam_likelihood(expected, observed)))
            p.weight *= float(np.exp(log_like))

            starts.append(np.repeat([[sensor_pose.x, sensor_pose.y]], len(bearings), axis=0))
            ends.append(ray_endpoints(sensor_pose, bearings, self.clip_ranges(expected)))

        self.lines_start = np.concatenate(starts)
        self.lines_end = np.concatenate(ends)
