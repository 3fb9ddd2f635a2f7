# coding: utf-8

import random
import numpy as np

from ..core import LaserScan, Pose2D, SensorMount
from ..world import GridWorld


class RobotSim:
    '''
    Simulated robot driving around a known world.

    Commands (dx forward, dtheta turn, radians) are executed with Gaussian
    noise on the true pose, while the odometry pose integrates the clean
    command. Each step returns a laser scan ray cast from the true pose.
    '''
    def __init__(self, world=None, rng=None, **params):
        self.x = params.get('x', 1.0)
        self.y = params.get('y', 1.0)
        self.theta = params.get('theta', 0.0)
        self.sigmaDTheta = params.get('sigmaDTheta', 0.01)
        self.sigmaDx = params.get('sigmaDx', 0.02)
        self.sigmaRange = params.get('sigmaRange', 0.02)
        self.numBeams = int(params.get('numBeams', 360))
        self.fovDeg = params.get('fovDeg', 270.0)
        self.rangeMax = params.get('rangeMax', 10.0)
        self.mount = SensorMount(Pose2D(params.get('laserOffsetX', 0.0), 0.0, 0.0),
                                 params.get('laserHeight', 0.0))
        self.rng = rng if rng is not None else np.random.default_rng()
        self.world = world if world is not None else self.generateMap()
        self.odom = Pose2D.identity()
        self.stamp = 0.0

    @property
    def truePose(self):
        return Pose2D(self.x, self.y, self.theta)

    def commandAndGetData(self, dx, dtheta, dt=0.1):
        # odometry integrates the commanded motion, the true pose a noisy version of it
        self.odom = self.odom * Pose2D(dx, 0.0, dtheta)

        dthetaTrue = dtheta + self.rng.normal(scale=self.sigmaDTheta)
        dxTrue = dx + self.rng.normal(scale=self.sigmaDx) if dx != 0 else 0.0
        true = self.truePose * Pose2D(dxTrue, 0.0, dthetaTrue)
        if self.isBlocked(true.x, true.y):
            raise RuntimeError("CRASH ON OBSTACLE!")
        self.x, self.y, self.theta = true.as_tuple()
        self.stamp += dt
        return self.generateData(), self.odom, self.truePose

    def isBlocked(self, x, y):
        if isinstance(self.world, GridWorld):
            return self.world.is_occupied(x, y)
        return False

    def generateMap(self, map_size=10.0, resolution=0.05, num_obstacles=15):
        cells = int(round(map_size / resolution))
        grid = np.zeros((cells, cells), dtype=bool)
        wBound = 2
        grid[:wBound, :] = True
        grid[:, -wBound:] = True
        grid[-wBound:, :] = True
        grid[:, :wBound] = True
        for i in range(num_obstacles):
            xObs = int(random.random() * (cells - 40) + 20)
            yObs = int(random.random() * (cells - 40) + 20)
            grid[xObs - 5:xObs + 6, yObs - 5:yObs + 6] = True
        # keep the start area free
        si = int(self.x / resolution)
        sj = int(self.y / resolution)
        grid[max(si - 8, wBound):si + 9, max(sj - 8, wBound):sj + 9] = False
        return GridWorld(grid, resolution, max_range=self.rangeMax)

    def generateData(self):
        fov = np.radians(self.fovDeg)
        angleMin = -fov / 2.0
        angleIncrement = fov / max(self.numBeams - 1, 1)
        laserPose = self.truePose * self.mount.offset

        ranges = np.empty(self.numBeams)
        for k in range(self.numBeams):
            r, valid = self.world.ray_cast(laserPose, angleMin + k * angleIncrement)
            ranges[k] = r + self.rng.normal(scale=self.sigmaRange) if valid else np.inf
        return LaserScan(ranges, angleMin, angleIncrement, stamp=self.stamp, frame_id='laser')
