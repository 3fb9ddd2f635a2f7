import math
import numpy as np
from typing import Sequence, Tuple

from .base import WorldModel
from ..core.pose import Pose2D


class SegmentWorld(WorldModel):
    """World made of straight wall segments, ray cast analytically."""

    def __init__(self, segments: Sequence[Tuple[Tuple[float, float], Tuple[float, float]]],
                 max_range: float = 30.0):
        segs = np.asarray(segments, dtype=float).reshape(-1, 2, 2)
        self.starts = segs[:, 0, :]
        self.ends = segs[:, 1, :]
        self.max_range = float(max_range)

    @classmethod
    def box(cls, x_min: float, y_min: float, x_max: float, y_max: float,
            max_range: float = 30.0) -> 'SegmentWorld':
        corners = [(x_min, y_min), (x_max, y_min), (x_max, y_max), (x_min, y_max)]
        segments = [(corners[i], corners[(i + 1) % 4]) for i in range(4)]
        return cls(segments, max_range)

    def ray_cast(self, origin: Pose2D, bearing: float) -> Tuple[float, bool]:
        if len(self.starts) == 0:
            return self.max_range, False

        angle = origin.theta + bearing
        d = np.array([math.cos(angle), math.sin(angle)])
        o = np.array([origin.x, origin.y])

        # Solve o + t*d = a + u*(b - a) for every segment at once
        e = self.ends - self.starts
        denom = d[0] * e[:, 1] - d[1] * e[:, 0]
        w = self.starts - o
        parallel = np.abs(denom) < 1e-12
        denom = np.where(parallel, 1.0, denom)
        t = (w[:, 0] * e[:, 1] - w[:, 1] * e[:, 0]) / denom
        u = (w[:, 0] * d[1] - w[:, 1] * d[0]) / denom

        hit = ~parallel & (t >= 0.0) & (u >= 0.0) & (u <= 1.0)
        if not np.any(hit):
            return self.max_range, False

        r = float(np.min(t[hit]))
        if r > self.max_range:
            return self.max_range, False
        return r, True
