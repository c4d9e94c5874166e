from __future__ import annotations
import math
from typing import Sequence

import numpy as np

from .errors import InvalidCost, InvalidDistance, InvalidTour


def as_distance_matrix(distances) -> np.ndarray:
    D = np.array(distances, dtype=float)
    if D.ndim != 2 or D.shape[0] != D.shape[1]:
        raise InvalidDistance(f"Distance matrix must be square, got shape {D.shape}")
    if D.shape[0] < 2:
        raise InvalidDistance("Distance matrix needs at least 2 cities")
    D.setflags(write=False)
    return D


def visibility(distances: np.ndarray) -> np.ndarray:
    """Elementwise 1/d off the diagonal. The diagonal is left at 0 and never read."""
    D = np.asarray(distances, dtype=float)
    off = ~np.eye(D.shape[0], dtype=bool)
    bad = off & ~(np.isfinite(D) & (D > 0))
    if bad.any():
        i, j = (int(k) for k in np.argwhere(bad)[0])
        raise InvalidDistance(f"Distance {i} -> {j} is {D[i, j]}; must be finite and > 0")
    eta = np.zeros_like(D)
    with np.errstate(divide="ignore", over="ignore"):
        eta[off] = 1.0 / D[off]
    overflow = off & ~np.isfinite(eta)
    if overflow.any():
        i, j = (int(k) for k in np.argwhere(overflow)[0])
        raise InvalidDistance(f"Distance {i} -> {j} is {D[i, j]}; visibility 1/d is not finite")
    eta.setflags(write=False)
    return eta


def cost(tour: Sequence[int], distances: np.ndarray) -> float:
    """Open path length: sum of consecutive edges, no edge back to the start."""
    n = distances.shape[0]
    if len(tour) < 2:
        raise InvalidTour(f"Tour needs at least 2 cities, got {list(tour)}")
    for city in tour:
        if not 0 <= city < n:
            raise InvalidTour(f"City {city} out of range [0, {n})")
    total = 0.0
    for a, b in zip(tour, tour[1:]):
        total += float(distances[a, b])
    if math.isnan(total):
        raise InvalidCost(f"Cost of tour {list(tour)} is NaN")
    return total


class CostModel:
    """Immutable distances plus the visibility matrix derived from them."""

    def __init__(self, distances):
        self.distances = as_distance_matrix(distances)
        self.visibility = visibility(self.distances)
        self.n = self.distances.shape[0]

    def cost(self, tour: Sequence[int]) -> float:
        return cost(tour, self.distances)
