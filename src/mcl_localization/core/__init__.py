"""
Core Monte Carlo localization components
"""

from .pose import Pose2D, wrap_angle
from .particle import Particle, ParticleSet, weighted_mean_pose
from .observation import LaserScan, SensorMount
from .motion_model import MotionModel
from .laser_model import LaserModel
from .resampler import DegenerateWeightsError, resample
from .particle_filter import ParticleFilter, FilterState

__all__ = [
    'Pose2D', 'wrap_angle',
    'Particle', 'ParticleSet', 'weighted_mean_pose',
    'LaserScan', 'SensorMount',
    'MotionModel', 'LaserModel',
    'DegenerateWeightsError', 'resample',
    'ParticleFilter', 'FilterState',
]
