"""
Utility functions for configuration parsing, coordinate transforms and resampling

Plotting helpers live in ``mcl_localization.utils.visualization`` and are
imported explicitly so that the filter does not pull in matplotlib.
"""

from .coordinate_transforms import ranges_to_points, scan_to_points, transform_points, ray_endpoints
from .resampling import systematic_resample, effective_sample_size
from .config_parser import (
    load_config, parse_config, get_motion_model_params, get_laser_model_params,
    get_particle_filter_params, get_frame_ids, get_initial_pose, get_robot_params,
    print_config, Config
)

__all__ = [
    'ranges_to_points',
    'scan_to_points',
    'transform_points',
    'ray_endpoints',
    'systematic_resample',
    'effective_sample_size',
    'load_config',
    'parse_config',
    'get_motion_model_params',
    'get_laser_model_params',
    'get_particle_filter_params',
    'get_frame_ids',
    'get_initial_pose',
    'get_robot_params',
    'print_config',
    'Config'
]
