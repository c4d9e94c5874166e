from __future__ import annotations
import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from .config import ACSConfig
from .cost_model import CostModel
from .errors import InvalidConfig
from .events import (GenerationCompleted, GenerationStarted, GlobalUpdateApplied,
                     Observer, TourCompleted)
from .pheromone import PheromoneField
from .random_source import RandomSource, make_random_source
from .tour_builder import TourBuilder

logger = logging.getLogger(__name__)


class Colony:
    """Single-colony Ant Colony System over an open Hamiltonian path.

    Ants run one after another, so each ant sees the local pheromone updates
    of the ants before it in the same generation. After every generation the
    all-time best tour drives the global update.
    """

    def __init__(self, dist_matrix, cfg: ACSConfig, rng: Optional[RandomSource] = None,
                 observer: Optional[Observer] = None):
        self.cfg = cfg.validate()
        self.model = CostModel(dist_matrix)
        self.n = self.model.n
        if not 0 <= cfg.initial_city < self.n:
            raise InvalidConfig(f"initial_city {cfg.initial_city} out of range [0, {self.n})")
        self.rng = rng if rng is not None else make_random_source(cfg.seed)
        self.observer = observer
        self.field = PheromoneField(self.n, cfg.tau0)
        self.builder = TourBuilder(self.model.visibility, self.field, cfg, self.rng, observer)

        self.best_tour: Optional[List[int]] = None
        self.best_cost = math.inf
        self.generation = 0

    @property
    def distances(self) -> np.ndarray:
        return self.model.distances

    @property
    def visibility(self) -> np.ndarray:
        return self.model.visibility

    @property
    def pheromones(self) -> np.ndarray:
        return self.field.tau

    def _emit(self, event):
        if self.observer is not None:
            self.observer(event)

    def run_generation(self) -> List[Tuple[List[int], float]]:
        self.generation += 1
        self._emit(GenerationStarted(self.generation, self.visibility, self.field.snapshot()))

        solutions = []
        gen_best: Optional[Tuple[List[int], float]] = None
        for ant in range(self.cfg.n_ants):
            tour = self.builder.build(ant)
            cost = self.model.cost(tour)
            self._emit(TourCompleted(ant, tour, cost))
            if gen_best is None or cost < gen_best[1]:
                gen_best = (tour, cost)
            if cost < self.best_cost:
                self.best_cost = cost
                self.best_tour = list(tour)
            solutions.append((tour, cost))

        self._emit(GenerationCompleted(self.generation, gen_best[0], gen_best[1],
                                       list(self.best_tour), self.best_cost))

        updates = self.field.global_update(self.best_tour, self.cfg.rho, self.cfg.Q, self.best_cost)
        self._emit(GlobalUpdateApplied(self.generation, self.cfg.rho, updates))
        logger.debug("generation %d: best %.6g, global best %.6g",
                     self.generation, gen_best[1], self.best_cost)
        return solutions
