"""Trace events published by the engine.

The engine never formats anything itself. Every interesting step is handed to
an optional observer (any callable taking one event) and the observer decides
what to do with it; see :class:`acs.report.TraceReport`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

INTENSIFICATION = "intensification"
DIVERSIFICATION = "diversification"


@dataclass(frozen=True)
class Candidate:
    city: int
    pheromone: float            # tau, or tau**alpha for diversification
    visibility: float           # eta**beta
    score: float                # product of the two
    probability: Optional[float] = None


@dataclass(frozen=True)
class EdgeUpdate:
    r: int
    c: int
    before: float
    evaporated: float
    deposit: float
    after: float


@dataclass(frozen=True)
class GenerationStarted:
    generation: int
    visibility: np.ndarray
    pheromones: np.ndarray


@dataclass(frozen=True)
class AntStarted:
    ant: int
    city: int


@dataclass(frozen=True)
class DecisionMade:
    ant: int
    current: int
    q: float
    branch: str
    candidates: List[Candidate]
    chosen: int
    total: Optional[float] = None   # sum of weights (diversification)
    rand: Optional[float] = None    # roulette draw (diversification)


@dataclass(frozen=True)
class LocalUpdateApplied:
    ant: int
    edge: tuple
    before: float
    after: float
    phi: float
    tau0: float


@dataclass(frozen=True)
class TourCompleted:
    ant: int
    tour: List[int]
    cost: float


@dataclass(frozen=True)
class GenerationCompleted:
    generation: int
    best_tour: List[int]
    best_cost: float
    global_best_tour: List[int]
    global_best_cost: float


@dataclass(frozen=True)
class GlobalUpdateApplied:
    generation: int
    rho: float
    updates: List[EdgeUpdate] = field(default_factory=list)


@dataclass(frozen=True)
class RunFinished:
    best_tour: List[int]
    best_cost: float
    generations: int


Observer = Callable[[object], None]
