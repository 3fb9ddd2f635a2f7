"""
Resampling primitives over normalized weight vectors
"""

import numpy as np
from typing import Optional


def systematic_resample(weights: np.ndarray, target_count: Optional[int] = None,
                        rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Low-variance (systematic) resampling

    One random offset u in [0, 1/M) and M evenly spaced pointers
    u + k/M walked through the cumulative weight distribution.

    Args:
        weights: Normalized weights (sum to 1)
        target_count: Number of indexes to draw (defaults to len(weights))
        rng: Random generator (defaults to a fresh one)

    Returns:
        Array of target_count indexes into weights
    """
    weights = np.asarray(weights, dtype=float)
    N = len(weights)
    M = N if target_count is None else int(target_count)
    if rng is None:
        rng = np.random.default_rng()

    positions = (np.arange(M) + rng.random()) / M
    indexes = np.zeros(M, dtype=int)
    cumulative_sum = np.cumsum(weights)
    cumulative_sum[-1] = 1.0  # guard against round-off leaving the last pointer unmatched
    i, j = 0, 0
    while i < M:
        if positions[i] < cumulative_sum[j]:
            indexes[i] = j
            i += 1
        else:
            j += 1
    return indexes


def effective_sample_size(weights: np.ndarray) -> float:
    """
    Effective sample size 1 / sum(w^2) of normalized weights

    Returns 0.0 for an empty or all-zero weight vector.
    """
    weights = np.asarray(weights, dtype=float)
    total = np.sum(weights)
    if len(weights) == 0 or total <= 0:
        return 0.0
    w = weights / total
    return float(1.0 / np.sum(w ** 2))
