"""Human-readable trace of an ACS run.

``TraceReport`` is an observer: pass it to :class:`acs.colony.Colony` or
:func:`acs.driver.solve` and it writes every decision the colony makes to a
text stream. Cities are shown as letters (0 -> A, 25 -> Z, 26 -> AA).
"""
from __future__ import annotations
from typing import Sequence, TextIO

import numpy as np
import pandas as pd

from .config import ACSConfig
from .events import (DIVERSIFICATION, AntStarted, DecisionMade, GenerationCompleted,
                     GenerationStarted, GlobalUpdateApplied, LocalUpdateApplied,
                     RunFinished, TourCompleted)


def city_label(i: int) -> str:
    if i < 0:
        raise ValueError(f"City index must be >= 0, got {i}")
    label = ""
    i += 1
    while i > 0:
        i, rem = divmod(i - 1, 26)
        label = chr(ord("A") + rem) + label
    return label


def format_path(tour: Sequence[int]) -> str:
    return " -> ".join(city_label(c) for c in tour)


def format_matrix(m: np.ndarray, decimals: int = 6) -> str:
    labels = [city_label(i) for i in range(m.shape[0])]
    df = pd.DataFrame(np.asarray(m), index=labels, columns=labels)
    return df.to_string(float_format=lambda v: f"{v:.{decimals}f}")


def parameter_table(cfg: ACSConfig) -> str:
    rows = [
        ("Ants", cfg.n_ants),
        ("Iterations", cfg.n_iterations),
        ("Initial city", city_label(cfg.initial_city)),
        ("alpha", cfg.alpha),
        ("beta", cfg.beta),
        ("rho", cfg.rho),
        ("Q", cfg.Q),
        ("q0", cfg.q0),
        ("phi", cfg.phi),
        ("Initial pheromone", cfg.tau0),
        ("Seed", "-" if cfg.seed is None else cfg.seed),
    ]
    df = pd.DataFrame(rows, columns=["Parameter", "Value"])
    return df.to_string(index=False)


class TraceReport:
    def __init__(self, out: TextIO, decimals: int = 6):
        self.out = out
        self.decimals = decimals
        self._handlers = {
            GenerationStarted: self._generation_started,
            AntStarted: self._ant_started,
            DecisionMade: self._decision,
            LocalUpdateApplied: self._local_update,
            TourCompleted: self._tour_completed,
            GenerationCompleted: self._generation_completed,
            GlobalUpdateApplied: self._global_update,
            RunFinished: self._run_finished,
        }

    def __call__(self, event) -> None:
        handler = self._handlers.get(type(event))
        if handler is not None:
            handler(event)

    def write(self, text: str = "") -> None:
        self.out.write(text + "\n")

    def parameters(self, cfg: ACSConfig) -> None:
        self.write("Parameters")
        self.write(parameter_table(cfg))
        self.write()

    def _generation_started(self, ev: GenerationStarted):
        self.write("------------------------------------")
        self.write(f"Iteration {ev.generation}\n")
        self.write("Visibility matrix:")
        self.write(format_matrix(ev.visibility, self.decimals))
        self.write("Pheromone matrix:")
        self.write(format_matrix(ev.pheromones, self.decimals))
        self.write()

    def _ant_started(self, ev: AntStarted):
        self.write(f"Ant {ev.ant + 1}")
        self.write(f"Initial city: {city_label(ev.city)}")

    def _decision(self, ev: DecisionMade):
        cur = city_label(ev.current)
        self.write(f"q = {ev.q}")
        self.write(f"Step by {ev.branch}")
        if ev.branch == DIVERSIFICATION:
            for cand in ev.candidates:
                self.write(f"{cur} -> {city_label(cand.city)}: tau^alpha = {cand.pheromone}, "
                           f"eta^beta = {cand.visibility}, product = {cand.score}")
            self.write(f"Sum: {ev.total}")
            for cand in ev.candidates:
                self.write(f"{cur} -> {city_label(cand.city)}: prob = {cand.probability}")
            self.write(f"Random number: {ev.rand}")
        else:
            for cand in ev.candidates:
                self.write(f"{cur} -> {city_label(cand.city)}: tau = {cand.pheromone}, "
                           f"eta^beta = {cand.visibility}, tau * eta^beta = {cand.score}")
        self.write(f"Next city: {city_label(ev.chosen)}")

    def _local_update(self, ev: LocalUpdateApplied):
        u, v = ev.edge
        self.write(f"Pheromone update on {city_label(u)} -> {city_label(v)} = "
                   f"(1 - {ev.phi}) * {ev.before} + {ev.phi} * {ev.tau0} = {ev.after}\n")

    def _tour_completed(self, ev: TourCompleted):
        self.write(f"Ant {ev.ant + 1} path: {format_path(ev.tour)} (cost: {ev.cost})\n-----\n")

    def _generation_completed(self, ev: GenerationCompleted):
        self.write(f"Best path in this iteration: {format_path(ev.best_tour)} with cost {ev.best_cost}")
        self.write(f"Global best path: {format_path(ev.global_best_tour)} with cost {ev.global_best_cost}")

    def _global_update(self, ev: GlobalUpdateApplied):
        self.write(f"Global pheromone update (rho = {ev.rho}), best-tour edges only; "
                   "every other entry is unchanged:")
        for u in ev.updates:
            self.write(f"{city_label(u.r)} -> {city_label(u.c)}: {u.evaporated} + {u.deposit} = {u.after}")
        self.write()

    def _run_finished(self, ev: RunFinished):
        self.write(f"\nGlobal best path: {format_path(ev.best_tour)} with cost {ev.best_cost}")
