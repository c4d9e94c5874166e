from __future__ import annotations
import math
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .config import ACSConfig
from .errors import DegenerateDistribution, InvalidCost, NoCandidateCities
from .events import (DIVERSIFICATION, INTENSIFICATION, AntStarted, Candidate,
                     DecisionMade, LocalUpdateApplied, Observer)
from .pheromone import PheromoneField
from .random_source import RandomSource


def argmax(items, key):
    best = None
    best_val = None
    for it in items:
        v = key(it)
        if best is None or v > best_val:
            best, best_val = it, v
    return best


def _power(base: float, exponent: float) -> float:
    # overflows to inf instead of raising like float.__pow__
    with np.errstate(over="ignore"):
        return float(np.power(np.float64(base), exponent))


def _check(value: float, what: str, current: int, city: int) -> float:
    if math.isnan(value):
        raise InvalidCost(f"{what} for edge {current} -> {city} is NaN")
    return value


def select_intensified(tau: np.ndarray, eta: np.ndarray, current: int,
                       unvisited: Iterable[int], beta: float) -> Tuple[int, List[Candidate]]:
    """Greedy choice: the unvisited city maximising tau * eta**beta.

    Cities are scanned in ascending order and only a strictly larger score
    replaces the incumbent, so ties go to the lowest index.
    """
    candidates = []
    for city in sorted(unvisited):
        pheromone = float(tau[current, city])
        vis = _power(eta[current, city], beta)
        score = _check(pheromone * vis, "Score", current, city)
        if math.isinf(score):
            raise DegenerateDistribution(f"Score for edge {current} -> {city} is infinite")
        candidates.append(Candidate(city, pheromone, vis, score))
    if not candidates:
        raise NoCandidateCities(f"No unvisited city left from {current}")
    best = argmax(candidates, key=lambda cand: cand.score)
    return best.city, candidates


def select_diversified(tau: np.ndarray, eta: np.ndarray, current: int,
                       unvisited: Iterable[int], alpha: float, beta: float,
                       rand: float) -> Tuple[int, List[Candidate], float]:
    """Pseudo-random-proportional choice by cumulative roulette.

    Weights are tau**alpha * eta**beta, normalised by their sum. The first city
    whose cumulative probability reaches ``rand`` wins; the last candidate
    catches anything left over by rounding.
    """
    weighted = []
    for city in sorted(unvisited):
        pheromone = _power(tau[current, city], alpha)
        vis = _power(eta[current, city], beta)
        weight = _check(pheromone * vis, "Weight", current, city)
        weighted.append((city, pheromone, vis, weight))
    if not weighted:
        raise NoCandidateCities(f"No unvisited city left from {current}")

    total = sum(w for _, _, _, w in weighted)
    if total == 0.0 or not math.isfinite(total):
        raise DegenerateDistribution(f"Weights from {current} sum to {total}")

    candidates = [Candidate(city, p, v, w, w / total) for city, p, v, w in weighted]
    chosen = candidates[-1].city
    acc = 0.0
    for cand in candidates:
        acc += cand.probability
        if acc >= rand:
            chosen = cand.city
            break
    return chosen, candidates, total


class TourBuilder:
    """Builds one ant's tour, applying the local update on every edge taken."""

    def __init__(self, eta: np.ndarray, field: PheromoneField, cfg: ACSConfig,
                 rng: RandomSource, observer: Optional[Observer] = None):
        self.eta = eta
        self.field = field
        self.cfg = cfg
        self.rng = rng
        self.observer = observer
        self.n = eta.shape[0]

    def _emit(self, event):
        if self.observer is not None:
            self.observer(event)

    def step(self, ant: int, visited: List[int], unvisited: set) -> int:
        cfg = self.cfg
        current = visited[-1]
        q = self.rng.random()
        if q <= cfg.q0:
            chosen, candidates = select_intensified(self.field.tau, self.eta, current, unvisited, cfg.beta)
            event = DecisionMade(ant, current, q, INTENSIFICATION, candidates, chosen)
        else:
            rand = self.rng.random()
            chosen, candidates, total = select_diversified(
                self.field.tau, self.eta, current, unvisited, cfg.alpha, cfg.beta, rand)
            event = DecisionMade(ant, current, q, DIVERSIFICATION, candidates, chosen,
                                 total=total, rand=rand)
        self._emit(event)

        visited.append(chosen)
        unvisited.remove(chosen)
        before, after = self.field.local_update((current, chosen), cfg.phi, cfg.tau0)
        self._emit(LocalUpdateApplied(ant, (current, chosen), before, after, cfg.phi, cfg.tau0))
        return chosen

    def build(self, ant: int = 0) -> List[int]:
        start = self.cfg.initial_city
        visited = [start]
        unvisited = set(range(self.n))
        unvisited.remove(start)
        self._emit(AntStarted(ant, start))
        while len(visited) < self.n:
            self.step(ant, visited, unvisited)
        return visited
