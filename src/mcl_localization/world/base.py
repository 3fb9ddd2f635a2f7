from abc import ABC, abstractmethod
from typing import Tuple

from ..core.pose import Pose2D


class WorldModel(ABC):
    """
    Known map queried by the laser model.

    Implementations are read-only after construction, so ray casts may be
    issued from several threads at once.
    """

    @abstractmethod
    def ray_cast(self, origin: Pose2D, bearing: float) -> Tuple[float, bool]:
        """
        Distance from origin to the nearest obstacle along a ray.

        Args:
            origin: Ray origin; its heading plus bearing gives the ray direction
            bearing: Bearing relative to origin.theta (radians)

        Returns:
            (range, valid); valid is False when nothing is hit within range
        """
