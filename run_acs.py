# run_acs.py
# Runs the Ant Colony System on a distance matrix and writes a full trace
# (parameters, matrices, every ant decision, pheromone updates) to a text file.
#
# Usage:
#   python run_acs.py                         # built-in 10-city example
#   python run_acs.py --csv cities.csv --iters 50 --ants 5 --start 3
#   python run_acs.py --config params.json --out trace.out
import argparse
import logging
from dataclasses import asdict

from acs import ACSConfig, EXAMPLE_DISTANCES, TraceReport, load_distance_matrix, solve
from acs.report import format_path


def build_parser():
    p = argparse.ArgumentParser(description="Ant Colony System for the shortest Hamiltonian path.")
    p.add_argument("--csv", default=None, help="square distance matrix (CSV); default: built-in example")
    p.add_argument("--config", default=None, help="JSON file with ACSConfig fields; flags override it")
    p.add_argument("--alpha", type=float)
    p.add_argument("--beta", type=float)
    p.add_argument("--rho", type=float)
    p.add_argument("--Q", type=float)
    p.add_argument("--q0", type=float)
    p.add_argument("--phi", type=float)
    p.add_argument("--tau0", type=float, help="initial pheromone")
    p.add_argument("--ants", type=int, dest="n_ants")
    p.add_argument("--iters", type=int, dest="n_iterations")
    p.add_argument("--start", type=int, dest="initial_city")
    p.add_argument("--seed", type=int)
    p.add_argument("--out", default="ant-colony-system.out", help="trace file")
    p.add_argument("--quiet", action="store_true", help="no progress bar")
    p.add_argument("--log-level", default="WARNING")
    return p


def config_from_args(args):
    # the built-in example starts from city D
    base = ACSConfig.from_json(args.config) if args.config else ACSConfig(initial_city=0 if args.csv else 3)
    overrides = {k: v for k, v in vars(args).items() if k in asdict(base) and v is not None}
    return ACSConfig.from_dict({**asdict(base), **overrides})


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(levelname)s - %(message)s")

    D = load_distance_matrix(args.csv) if args.csv else EXAMPLE_DISTANCES
    cfg = config_from_args(args)

    with open(args.out, "w", encoding="utf-8") as out:
        report = TraceReport(out)
        report.parameters(cfg)
        res = solve(D, cfg, observer=report, progress=not args.quiet)

    print("Best path:", format_path(res.best_tour))
    print("Cost:", res.best_length)
    print("Trace written to:", args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
