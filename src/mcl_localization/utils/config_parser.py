"""
Configuration file parser for localization parameters
"""

import yaml
import os
import numpy as np
from typing import Dict, Any, Optional


class Config:
    """Configuration container with dot notation access"""

    def __init__(self, config_dict: Dict[str, Any]):
        for key, value in config_dict.items():
            if isinstance(value, dict):
                setattr(self, key, Config(value))
            else:
                setattr(self, key, value)

    def __repr__(self):
        return f"Config({self.__dict__})"

    def __contains__(self, key: str) -> bool:
        return key in self.__dict__

    def get(self, key: str, default: Any = None) -> Any:
        """Value of key, or default when the key is absent"""
        return self.__dict__.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config back to dictionary"""
        result = {}
        for key, value in self.__dict__.items():
            if isinstance(value, Config):
                result[key] = value.to_dict()
            else:
                result[key] = value
        return result


REQUIRED_SECTIONS = ['odom_model', 'laser_model', 'particle_filter']


def parse_config(config_dict: Dict[str, Any]) -> Config:
    """
    Validate a configuration dictionary and wrap it

    Args:
        config_dict: Parsed YAML content

    Returns:
        Config object with dot notation access

    Raises:
        ValueError: If the content is not a mapping or a required section is missing
    """
    if not isinstance(config_dict, dict):
        raise ValueError("Configuration must be a mapping at the top level")

    for section in REQUIRED_SECTIONS:
        if section not in config_dict:
            raise ValueError(f"Missing required configuration section: {section}")

    return Config(config_dict)


def load_config(config_path: str = "config.yaml") -> Config:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to configuration file

    Returns:
        Config object with dot notation access

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
        ValueError: If a required section is missing
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    return parse_config(config_dict)


def get_motion_model_params(config: Config) -> Dict[str, Any]:
    """
    Extract odometry motion model parameters from config

    Args:
        config: Configuration object

    Returns:
        Dictionary of MotionModel keyword arguments
    """
    odom = config.odom_model

    return {
        'alpha_trans_trans': odom.get('alpha_trans_trans', 0.2),
        'alpha_trans_rot': odom.get('alpha_trans_rot', 0.05),
        'alpha_rot_trans': odom.get('alpha_rot_trans', 0.05),
        'alpha_rot_rot': odom.get('alpha_rot_rot', 0.2),
        'min_noise': odom.get('min_noise', 0.005)
    }


def get_laser_model_params(config: Config) -> Dict[str, Any]:
    """
    Extract laser model parameters from config

    Args:
        config: Configuration object

    Returns:
        Dictionary of LaserModel keyword arguments
    """
    laser = config.laser_model

    return {
        'num_beams': laser.get('num_beams', 60),
        'range_min': laser.get('range_min', 0.05),
        'range_max': laser.get('range_max', 10.0),
        'hit_sigma': laser.get('hit_sigma', 0.1),
        'z_hit': laser.get('z_hit', 0.95),
        'z_rand': laser.get('z_rand', 0.05)
    }


def get_particle_filter_params(config: Config) -> Dict[str, Any]:
    """
    Extract particle filter parameters from config

    Args:
        config: Configuration object

    Returns:
        Dictionary of ParticleFilter keyword arguments
    """
    pf = config.particle_filter

    return {
        'num_particles': pf.num_particles,
        'resample_threshold': pf.get('resample_threshold', None),
        'init_resolution': pf.get('init_resolution', 0.05),
        'init_angle_resolution': pf.get('init_angle_resolution', 0.05),
        'set_pose_spread_xy': pf.get('set_pose_spread_xy', 0.3),
        'set_pose_spread_theta': pf.get('set_pose_spread_theta', 0.1)
    }


def get_frame_ids(config: Config) -> Dict[str, str]:
    """
    Extract coordinate frame names from the odom_model section

    Args:
        config: Configuration object

    Returns:
        Dictionary with map_frame, odom_frame and base_link_frame
    """
    odom = config.odom_model

    return {
        'map_frame': odom.get('map_frame', 'map'),
        'odom_frame': odom.get('odom_frame', 'odom'),
        'base_link_frame': odom.get('base_link_frame', 'base_link')
    }


def get_initial_pose(config: Config) -> Optional[Dict[str, float]]:
    """
    Extract the optional initial pose group (x, y, rz)

    Args:
        config: Configuration object

    Returns:
        Dictionary with x, y, theta or None when the group is absent
    """
    initial = config.get('initial_pose')
    if initial is None:
        return None

    return {
        'x': float(initial.get('x', 0.0)),
        'y': float(initial.get('y', 0.0)),
        'theta': float(initial.get('rz', 0.0))
    }


def get_robot_params(config: Config) -> Dict[str, Any]:
    """
    Extract robot simulator parameters from config

    Args:
        config: Configuration object

    Returns:
        Dictionary of robot parameters
    """
    robot = config.robot
    laser = config.laser_model

    return {
        'x': robot.initial_x,
        'y': robot.initial_y,
        'theta': np.radians(robot.initial_theta),
        'sigmaDx': robot.get('sigma_dx', 0.02),
        'sigmaDTheta': np.radians(robot.get('sigma_dtheta', 1.0)),
        'sigmaRange': robot.get('sigma_range', 0.02),
        'numBeams': robot.get('scan_beams', 360),
        'fovDeg': robot.get('scan_fov', 270.0),
        'rangeMax': laser.get('range_max', 10.0),
        'laserOffsetX': robot.get('laser_offset_x', 0.0),
        'laserHeight': robot.get('laser_height', 0.0)
    }


def print_config(config: Config, indent: int = 0):
    """
    Pretty print configuration

    Args:
        config: Configuration object
        indent: Indentation level
    """
    for key, value in config.__dict__.items():
        if isinstance(value, Config):
            print("  " * indent + f"{key}:")
            print_config(value, indent + 1)
        else:
            print("  " * indent + f"{key}: {value}")
