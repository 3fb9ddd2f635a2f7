import logging
import numpy as np

from .particle import Particle, ParticleSet
from ..utils.resampling import systematic_resample

logger = logging.getLogger(__name__)


class DegenerateWeightsError(RuntimeError):
    """Total particle weight is zero or non-finite; the filter has lost track."""

    def __init__(self, total_weight):
        super().__init__(f"degenerate particle weights (total weight = {total_weight})")
        self.total_weight = total_weight


def normalized_weights(particle_set):
    """Weights scaled to sum to one; raises DegenerateWeightsError if that is impossible."""
    weights = particle_set.weights()
    total = np.sum(weights)
    if not np.isfinite(total) or total <= 0:
        raise DegenerateWeightsError(float(total))
    return weights / total


def normalize(particle_set):
    particle_set.set_weights(normalized_weights(particle_set))


def resample(target_count, particle_set, rng=None):
    """
    Draw a new set of exactly target_count particles by systematic resampling.

    Every output particle gets weight 1/target_count. Selected particles are
    copied, so no two output particles share mutable state.
    """
    if target_count <= 0:
        raise ValueError(f"target_count must be positive, got {target_count}")
    if particle_set.empty():
        return ParticleSet()

    weights = normalized_weights(particle_set)
    indexes = systematic_resample(weights, target_count, rng)

    w = 1.0 / target_count
    new_particles = [Particle(particle_set[idx].pose, w) for idx in indexes]
    logger.debug("resampled %d -> %d particles (%d distinct)",
                 len(particle_set), target_count, len(np.unique(indexes)))
    return ParticleSet(new_particles)
