from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import InvalidDistance

# 10-city symmetric example used by run_acs.py when no CSV is given.
EXAMPLE_DISTANCES = np.array([
    [0, 12, 3, 23, 1, 5, 23, 56, 12, 11],
    [12, 0, 9, 18, 3, 41, 45, 5, 41, 27],
    [3, 9, 0, 89, 56, 21, 12, 48, 14, 29],
    [23, 18, 89, 0, 87, 46, 75, 17, 50, 42],
    [1, 3, 56, 87, 0, 55, 22, 86, 14, 33],
    [5, 41, 21, 46, 55, 0, 21, 76, 54, 81],
    [23, 45, 12, 75, 22, 21, 0, 11, 57, 48],
    [56, 5, 48, 17, 86, 76, 11, 0, 63, 24],
    [12, 41, 14, 50, 14, 54, 57, 63, 0, 9],
    [11, 27, 29, 42, 33, 81, 48, 24, 9, 0],
], dtype=float)


def load_distance_matrix(path: str, delimiter: str = ",") -> np.ndarray:
    """Read a square matrix of travel costs from a CSV file."""
    D = np.loadtxt(path, delimiter=delimiter, ndmin=2, dtype=float)
    if D.shape[0] != D.shape[1]:
        raise InvalidDistance(f"{path}: expected a square matrix, got shape {D.shape}")
    return D


@dataclass
class TSPInstance:
    coords: List[Tuple[float, float]]
    name: str = "euclidean_tsp"

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, square_size: float = 100.0, name: str = "random_euclidean"):
        rng = random.Random(seed)
        coords = [(rng.uniform(0, square_size), rng.uniform(0, square_size)) for _ in range(n)]
        return TSPInstance(coords=coords, name=name)

    def distance(self, i: int, j: int) -> float:
        (x1, y1), (x2, y2) = self.coords[i], self.coords[j]
        return math.hypot(x1 - x2, y1 - y2)

    def distance_matrix(self) -> np.ndarray:
        xy = np.asarray(self.coords, dtype=float)
        diff = xy[:, None, :] - xy[None, :, :]
        return np.hypot(diff[..., 0], diff[..., 1])

    def path_length(self, tour: Sequence[int]) -> float:
        # open path, the tour does not return to its first city
        return sum(self.distance(a, b) for a, b in zip(tour, tour[1:]))
