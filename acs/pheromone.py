from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import EmptyBestTour, InvalidConfig
from .events import EdgeUpdate

logger = logging.getLogger(__name__)


def initialize(n: int, tau0: float) -> np.ndarray:
    if tau0 < 0:
        raise InvalidConfig(f"Initial pheromone must be >= 0, got {tau0}")
    tau = np.full((n, n), float(tau0))
    np.fill_diagonal(tau, 0.0)
    return tau


class PheromoneField:
    """The colony's N x N pheromone matrix. Only ever mutated in place."""

    def __init__(self, n: int, tau0: float):
        self.n = n
        self.tau0 = tau0
        self.tau = initialize(n, tau0)

    def snapshot(self) -> np.ndarray:
        return self.tau.copy()

    def local_update(self, edge: Tuple[int, int], phi: float,
                     tau0: Optional[float] = None) -> Tuple[float, float]:
        """Pull one directed edge towards the baseline (the initial level by default)."""
        if tau0 is None:
            tau0 = self.tau0
        u, v = edge
        before = float(self.tau[u, v])
        if u == v:
            return before, before
        self.tau[u, v] = (1.0 - phi) * before + phi * tau0
        return before, float(self.tau[u, v])

    def global_update(self, best_tour: Optional[Sequence[int]], rho: float, q: float,
                      best_cost: float) -> List[EdgeUpdate]:
        """Evaporate and reinforce the edges of the best tour.

        Only the N-1 consecutive edges of ``best_tour`` change:
        ``tau = (1 - rho) * tau + rho * q / best_cost``. Every other entry keeps
        its value, so edges off the best tour do not evaporate.
        """
        if not best_tour:
            raise EmptyBestTour("Global update requested before any tour was recorded")
        deposit = rho * (q / best_cost)
        updates = []
        for r, c in zip(best_tour, best_tour[1:]):
            if r == c:
                continue
            before = float(self.tau[r, c])
            evaporated = (1.0 - rho) * before
            self.tau[r, c] = evaporated + deposit
            updates.append(EdgeUpdate(r, c, before, evaporated, deposit, float(self.tau[r, c])))
        logger.debug("global update on %d edges, deposit %.6g", len(updates), deposit)
        return updates
