import math
import numpy as np

from .pose import Pose2D


class MotionModel:
    """
    Odometry motion model.

    Each particle pose is composed with the odometry delta perturbed by
    zero-mean Gaussian noise in the particle's own frame. The noise standard
    deviations grow with the size of the delta:

        sigma_trans = alpha_trans_trans * |t| + alpha_trans_rot * |rot| + min_noise
        sigma_rot   = alpha_rot_trans   * |t| + alpha_rot_rot   * |rot| + min_noise
    """

    def __init__(self, rng=None, **params):
        self.alpha_trans_trans = params.get('alpha_trans_trans', 0.2)
        self.alpha_trans_rot = params.get('alpha_trans_rot', 0.05)
        self.alpha_rot_trans = params.get('alpha_rot_trans', 0.05)
        self.alpha_rot_rot = params.get('alpha_rot_rot', 0.2)
        self.min_noise = params.get('min_noise', 0.005)

        for name in ('alpha_trans_trans', 'alpha_trans_rot', 'alpha_rot_trans',
                     'alpha_rot_rot', 'min_noise'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

        self.rng = rng if rng is not None else np.random.default_rng()

    def noise_sigmas(self, delta):
        trans = math.hypot(delta.x, delta.y)
        rot = abs(delta.theta)
        sigma_trans = self.alpha_trans_trans * trans + self.alpha_trans_rot * rot + self.min_noise
        sigma_rot = self.alpha_rot_trans * trans + self.alpha_rot_rot * rot + self.min_noise
        return sigma_trans, sigma_rot

    def update_poses(self, delta, particle_set):
        n = len(particle_set)
        if n == 0:
            return

        sigma_trans, sigma_rot = self.noise_sigmas(delta)
        noise_x = self.rng.normal(0.0, sigma_trans, n)
        noise_y = self.rng.normal(0.0, sigma_trans, n)
        noise_theta = self.rng.normal(0.0, sigma_rot, n)

        for i, p in enumerate(particle_set):
            noisy_delta = Pose2D(delta.x + noise_x[i],
                                 delta.y + noise_y[i],
                                 delta.theta + noise_theta[i])
            p.pose = p.pose * noisy_delta
