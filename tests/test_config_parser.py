"""
Unit tests for configuration loading
"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

import numpy as np
from mcl_localization.utils import (
    Config, get_frame_ids, get_initial_pose, get_laser_model_params,
    get_motion_model_params, get_particle_filter_params, get_robot_params,
    load_config, parse_config, print_config
)

CONFIG_PATH = os.path.join(os.path.dirname(__file__), '..', 'config.yaml')


def minimal_config():
    return {
        'odom_model': {},
        'laser_model': {},
        'particle_filter': {'num_particles': 50},
    }


class TestLoadConfig(unittest.TestCase):
    """Test reading and validating YAML files"""

    def test_load_repository_config(self):
        config = load_config(CONFIG_PATH)
        self.assertIsInstance(config, Config)
        self.assertEqual(config.particle_filter.num_particles, 300)
        self.assertEqual(config.laser_model.num_beams, 30)
        self.assertIsNone(config.particle_filter.resample_threshold)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(os.path.join(tempfile.gettempdir(), 'no_such_mcl_config.yaml'))

    def test_missing_section(self):
        content = "odom_model: {}\nparticle_filter:\n  num_particles: 10\n"
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'config.yaml')
            with open(path, 'w') as f:
                f.write(content)
            with self.assertRaises(ValueError) as ctx:
                load_config(path)
        self.assertIn('laser_model', str(ctx.exception))

    def test_non_mapping(self):
        with self.assertRaises(ValueError):
            parse_config(['odom_model'])

    def test_dot_access_and_to_dict(self):
        d = minimal_config()
        d['odom_model'] = {'odom_frame': 'wheel_odom'}
        config = parse_config(d)
        self.assertEqual(config.odom_model.odom_frame, 'wheel_odom')
        self.assertIn('laser_model', config)
        self.assertNotIn('initial_pose', config)
        self.assertEqual(config.get('missing', 7), 7)
        self.assertEqual(config.to_dict(), d)


class TestParameterHelpers(unittest.TestCase):
    """Test extraction of component parameters"""

    def setUp(self):
        self.config = load_config(CONFIG_PATH)

    def test_motion_model_params(self):
        params = get_motion_model_params(self.config)
        self.assertEqual(params['alpha_trans_trans'], 0.2)
        self.assertEqual(params['min_noise'], 0.005)
        self.assertEqual(len(params), 5)

    def test_laser_model_params(self):
        params = get_laser_model_params(self.config)
        self.assertEqual(params['range_max'], 8.0)
        self.assertEqual(params['z_hit'], 0.95)
        self.assertNotIn('topic', params)

    def test_particle_filter_params(self):
        params = get_particle_filter_params(self.config)
        self.assertEqual(params['num_particles'], 300)
        self.assertEqual(params['set_pose_spread_xy'], 0.3)

    def test_defaults(self):
        config = parse_config(minimal_config())
        self.assertEqual(get_motion_model_params(config)['alpha_rot_rot'], 0.2)
        self.assertEqual(get_laser_model_params(config)['num_beams'], 60)
        self.assertIsNone(get_particle_filter_params(config)['resample_threshold'])
        self.assertEqual(get_frame_ids(config),
                         {'map_frame': 'map', 'odom_frame': 'odom', 'base_link_frame': 'base_link'})

    def test_initial_pose(self):
        self.assertEqual(get_initial_pose(self.config), {'x': 1.0, 'y': 1.0, 'theta': 0.0})
        self.assertIsNone(get_initial_pose(parse_config(minimal_config())))

    def test_initial_pose_rz(self):
        d = minimal_config()
        d['initial_pose'] = {'x': 2, 'rz': 0.5}
        self.assertEqual(get_initial_pose(parse_config(d)), {'x': 2.0, 'y': 0.0, 'theta': 0.5})

    def test_robot_params(self):
        params = get_robot_params(self.config)
        self.assertEqual(params['numBeams'], 270)
        self.assertEqual(params['rangeMax'], 8.0)
        self.assertAlmostEqual(params['sigmaDTheta'], np.radians(0.5))
        self.assertEqual(params['laserOffsetX'], 0.1)

    def test_print_config(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            print_config(self.config)
        output = buf.getvalue()
        self.assertIn('particle_filter:', output)
        self.assertIn('  num_particles: 300', output)


if __name__ == '__main__':
    unittest.main()
