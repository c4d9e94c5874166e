from __future__ import annotations
import csv
import itertools
import os
import statistics
from dataclasses import asdict, replace
from typing import Any, Dict, List, Optional

from .config import ACSConfig
from .driver import solve


def run_repeated_trials(dist_matrix, cfg: ACSConfig, n_runs: int = 10, base_seed: int = 42):
    lengths = []
    times = []
    best_tours = []
    for r in range(n_runs):
        res = solve(dist_matrix, replace(cfg, seed=base_seed + r))
        lengths.append(res.best_length)
        times.append(res.elapsed_sec)
        best_tours.append(res.best_tour)
    stats = {
        "mean_length": statistics.mean(lengths),
        "std_length": statistics.stdev(lengths) if len(lengths) > 1 else 0.0,
        "min_length": min(lengths),
        "max_length": max(lengths),
        "median_length": statistics.median(lengths),
        "mean_time": statistics.mean(times),
        "n_runs": n_runs,
    }
    return stats, list(zip(lengths, times, best_tours))


def run_parameter_sweep(dist_matrix, param_grid: Dict[str, List[Any]],
                        base_cfg: Optional[ACSConfig] = None, n_runs: int = 5, base_seed: int = 100,
                        csv_path: Optional[str] = None):
    base_cfg = base_cfg or ACSConfig()
    keys = sorted(param_grid.keys())
    rows = []
    for values in itertools.product(*[param_grid[k] for k in keys]):
        cfg = ACSConfig.from_dict({**asdict(base_cfg), **dict(zip(keys, values))})
        stats, _ = run_repeated_trials(dist_matrix, cfg, n_runs=n_runs, base_seed=base_seed)
        row = {**{k: getattr(cfg, k) for k in keys}, **stats}
        rows.append(row)
        if csv_path is not None:
            write_header = not os.path.exists(csv_path)
            with open(csv_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=row.keys())
                if write_header:
                    w.writeheader()
                w.writerow(row)
    return rows
