"""
Localization cycle driver

Bridges raw inputs (laser scans, odometry poses, sensor mount lookups,
operator pose resets) to the particle filter, and turns the filter's mean
pose into the map -> odom correction a robot would broadcast.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from .core import (
    DegenerateWeightsError, LaserModel, LaserScan, MotionModel,
    ParticleFilter, Pose2D, SensorMount
)
from .utils.config_parser import (
    Config, get_frame_ids, get_initial_pose, get_laser_model_params,
    get_motion_model_params, get_particle_filter_params
)

logger = logging.getLogger(__name__)

MountLookup = Callable[[str], Optional[SensorMount]]


@dataclass(frozen=True)
class LocalizationResult:
    """Outcome of one successful localization cycle."""
    mean_pose: Pose2D
    map_to_odom: Pose2D
    particles: List[Pose2D]
    stamp: float
    map_frame: str = 'map'
    odom_frame: str = 'odom'


class OdometryTracker:
    """Turns absolute odom -> base_link poses into per-cycle motion deltas."""

    def __init__(self):
        self.previous_pose = None

    @property
    def have_previous_pose(self):
        return self.previous_pose is not None

    def reset(self):
        self.previous_pose = None

    def delta(self, odom_pose):
        """
        Motion since the previous call, expressed in the previous base_link frame.

        Args:
            odom_pose: Current odom -> base_link pose, or None when the lookup failed

        Returns:
            (delta, odom_pose) where odom_pose is the pose to use this cycle.
            The delta is the identity on the first call and after a failed
            lookup; both are None when no pose has been seen yet.
        """
        if odom_pose is None:
            if self.previous_pose is None:
                return None, None
            return Pose2D.identity(), self.previous_pose

        if self.previous_pose is None:
            delta = Pose2D.identity()
        else:
            delta = self.previous_pose.inverse() * odom_pose
        self.previous_pose = odom_pose
        return delta, odom_pose


class Localizer:
    """
    Runs the particle filter once per laser scan.

    Every input problem (no scan, sensor mount unknown, no odometry, filter
    not seeded) skips the cycle and returns None; so does a degenerate
    sensor update, which additionally sets ``localization_lost``.
    """

    def __init__(self, config: Config, world, rng: Optional[np.random.Generator] = None):
        self.config = config
        self.world = world
        self.rng = rng if rng is not None else np.random.default_rng()

        self.frames = get_frame_ids(config)
        self.particle_filter = ParticleFilter(
            motion_model=MotionModel(rng=self.rng, **get_motion_model_params(config)),
            laser_model=LaserModel(**get_laser_model_params(config)),
            rng=self.rng,
            **get_particle_filter_params(config)
        )

        self.odometry = OdometryTracker()
        self.sensor_mount = None
        self.pending_pose = None
        self.localization_lost = False
        self.last_result = None

        initial = get_initial_pose(config)
        if initial is not None:
            self.particle_filter.set_pose(Pose2D(initial['x'], initial['y'], initial['theta']))

    def set_sensor_mount(self, mount: SensorMount):
        self.sensor_mount = mount

    def initial_pose_callback(self, pose: Pose2D):
        """Queue an operator pose reset; the latest one wins at the next process()."""
        self.pending_pose = pose

    def _resolve_mount(self, scan: LaserScan, mount_lookup: Optional[MountLookup]):
        if self.sensor_mount is not None:
            return self.sensor_mount
        if scan.mount is not None:
            self.sensor_mount = scan.mount
            return self.sensor_mount
        if mount_lookup is None:
            return None

        mount = mount_lookup(scan.frame_id)
        if mount is None:
            logger.warning("Cannot get transform from '%s' to '%s'",
                           self.frames['base_link_frame'], scan.frame_id)
            return None
        logger.info("sensor mount resolved: offset=%s height=%.3f", mount.offset, mount.height)
        self.sensor_mount = mount
        return mount

    def process(self, scan: Optional[LaserScan], odom_pose: Optional[Pose2D],
                mount_lookup: Optional[MountLookup] = None) -> Optional[LocalizationResult]:
        """
        Run one localization cycle.

        Args:
            scan: Latest laser scan, or None if none arrived
            odom_pose: odom -> base_link pose at scan time, or None if the lookup failed
            mount_lookup: Called with the scan frame until the sensor mount is known

        Returns:
            LocalizationResult, or None when the cycle was skipped
        """
        if self.pending_pose is not None:
            self.particle_filter.set_pose(self.pending_pose)
            self.pending_pose = None
            self.localization_lost = False

        if scan is None:
            return None

        mount = self._resolve_mount(scan, mount_lookup)
        if mount is None:
            return None

        if odom_pose is None:
            logger.warning("Cannot get transform from '%s' to '%s'",
                           self.frames['odom_frame'], self.frames['base_link_frame'])
        delta, odom_pose = self.odometry.delta(odom_pose)
        if delta is None:
            return None

        if self.particle_filter.samples().empty():
            return None

        try:
            updated = self.particle_filter.update(delta, scan.with_mount(mount), self.world)
        except DegenerateWeightsError as e:
            logger.error("localization lost: %s, last estimate %s", e, self.particle_filter.last_mean_pose)
            self.localization_lost = True
            return None
        if not updated:
            return None

        self.localization_lost = False
        mean_pose = self.particle_filter.calculate_mean_pose()
        result = LocalizationResult(
            mean_pose=mean_pose,
            map_to_odom=mean_pose * odom_pose.inverse(),
            particles=self.particle_filter.particle_poses(),
            stamp=scan.stamp,
            map_frame=self.frames['map_frame'],
            odom_frame=self.frames['odom_frame']
        )
        self.last_result = result
        return result
