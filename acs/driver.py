from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from tqdm import tqdm

from .colony import Colony
from .config import ACSConfig
from .events import Observer, RunFinished
from .random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class ACSResult:
    best_tour: List[int]
    best_length: float
    history_best_lengths: List[float]
    history_best_tours: List[List[int]]
    history_iteration_best: List[Tuple[List[int], float]]
    config: ACSConfig
    elapsed_sec: float


def solve(dist_matrix, cfg: ACSConfig, rng: Optional[RandomSource] = None,
          observer: Optional[Observer] = None, progress: bool = False) -> ACSResult:
    """Run ``cfg.n_iterations`` generations and keep the running best."""
    start = time.time()
    colony = Colony(dist_matrix, cfg, rng=rng, observer=observer)
    logger.info("ACS on %d cities: %d ants x %d generations, start city %d",
                colony.n, cfg.n_ants, cfg.n_iterations, cfg.initial_city)

    history_best_lengths: List[float] = []
    history_best_tours: List[List[int]] = []
    history_iteration_best: List[Tuple[List[int], float]] = []

    generations = range(cfg.n_iterations)
    if progress:
        generations = tqdm(generations, desc="ACS", unit="gen")
    for _ in generations:
        solutions = colony.run_generation()
        it_best = min(solutions, key=lambda s: s[1])
        history_iteration_best.append(it_best)
        history_best_lengths.append(colony.best_cost)
        history_best_tours.append(list(colony.best_tour))

    elapsed = time.time() - start
    if observer is not None:
        observer(RunFinished(list(colony.best_tour), colony.best_cost, colony.generation))
    logger.info("best length %.6g after %d generations (%.2fs)", colony.best_cost, colony.generation, elapsed)
    return ACSResult(best_tour=list(colony.best_tour), best_length=colony.best_cost,
                     history_best_lengths=history_best_lengths,
                     history_best_tours=history_best_tours,
                     history_iteration_best=history_iteration_best,
                     config=cfg, elapsed_sec=elapsed)
