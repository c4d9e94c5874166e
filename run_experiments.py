# run_experiments.py
import os, json, argparse, tempfile, shutil, logging
from dataclasses import replace

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import imageio

from acs import TSPInstance, ACSConfig, solve
from acs.experiments import run_repeated_trials, run_parameter_sweep

OUTDIR = os.path.dirname(os.path.abspath(__file__))


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def build_config(n_ants=10, n_iterations=150, q0=0.9, phi=0.1):
    return ACSConfig(alpha=1.0, beta=2.0, rho=0.1, Q=1.0, q0=q0, phi=phi, tau0=0.01,
                     n_ants=n_ants, n_iterations=n_iterations)


def plot_scatter(details_by_label, save_path):
    plt.figure()
    labels = list(details_by_label.keys())
    for i, label in enumerate(labels, start=1):
        lengths = [L for (L, t, tour) in details_by_label[label]]
        x = np.random.normal(loc=i, scale=0.03, size=len(lengths))
        plt.plot(x, lengths, "o")
    plt.xticks(range(1, len(labels) + 1), labels)
    plt.ylabel("Best path length")
    plt.title("Best lengths across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_convergence(inst, label, cfg, save_path):
    res = solve(inst.distance_matrix(), cfg)
    plt.figure()
    plt.plot(res.history_best_lengths, label="best so far")
    plt.plot([L for _, L in res.history_iteration_best], alpha=0.5, label="iteration best")
    plt.xlabel("Iteration")
    plt.ylabel("Path length")
    plt.title(f"ACS convergence ({label})")
    plt.legend()
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def make_gif(inst, label, cfg, save_gif, step=5, frames_dir=None, keep_frames=False):
    """Render a convergence GIF. By default, writes frames to a temp folder and deletes them."""
    res = solve(inst.distance_matrix(), cfg)
    coords = inst.coords

    tmpdir_was_auto = False
    if frames_dir is None:
        frames_dir = tempfile.mkdtemp(prefix=f"{label}_frames_")
        tmpdir_was_auto = True
    else:
        os.makedirs(frames_dir, exist_ok=True)

    frames = []
    for it in range(0, len(res.history_best_tours), step):
        tour = res.history_best_tours[it]
        L = res.history_best_lengths[it]
        xs = [coords[i][0] for i in tour]
        ys = [coords[i][1] for i in tour]

        plt.figure(figsize=(5, 5))
        plt.plot([c[0] for c in coords], [c[1] for c in coords], "o")
        plt.plot(xs, ys, "-")
        plt.plot(xs[0], ys[0], "s", color="red")
        plt.title(f"ACS best-so-far\niter={it+1} length={L:.2f}")
        plt.axis("equal")
        plt.tight_layout()
        frame_path = os.path.join(frames_dir, f"{label}_{it:03d}.png")
        plt.savefig(frame_path, dpi=120, bbox_inches="tight")
        plt.close()
        frames.append(frame_path)

    ensure(save_gif)
    with imageio.get_writer(save_gif, mode="I", duration=0.6) as w:
        for fp in frames:
            w.append_data(imageio.v2.imread(fp))

    if not keep_frames and tmpdir_was_auto:
        shutil.rmtree(frames_dir, ignore_errors=True)
    elif keep_frames:
        print("Frames saved in:", frames_dir)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--n", type=int, default=30)
    ap.add_argument("--square", type=float, default=100.0)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--iters", type=int, default=150)
    ap.add_argument("--ants", type=int, default=10)
    ap.add_argument("--visualize", action="store_true", help="save a convergence GIF per setting")
    ap.add_argument("--keep-frames", action="store_true", help="keep the PNG frames used for the GIF(s)")
    ap.add_argument("--frames-dir", default=None, help="where to store frames (if keeping them)")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(levelname)s - %(message)s")

    inst = TSPInstance.random_euclidean(n=args.n, seed=123, square_size=args.square, name=f"demo{args.n}")
    D = inst.distance_matrix()
    base = build_config(n_ants=args.ants, n_iterations=args.iters)
    settings = {
        "greedy": replace(base, q0=0.9),
        "balanced": replace(base, q0=0.5),
        "explore": replace(base, q0=0.1),
    }

    records = []
    details_by_label = {}
    for label, cfg in settings.items():
        stats, details = run_repeated_trials(D, cfg, n_runs=args.runs)
        print(label, json.dumps(stats, indent=2))
        records.append({"setting": label, "q0": cfg.q0, **stats})
        details_by_label[label] = details

    df_summary = pd.DataFrame.from_records(records)
    df_summary.to_csv(os.path.join(OUTDIR, "results_summary.csv"), index=False)
    plot_scatter(details_by_label, os.path.join(OUTDIR, "results_distribution.png"))

    for label, cfg in settings.items():
        plot_convergence(inst, label, cfg, os.path.join(OUTDIR, f"convergence_{label}.png"))

    grid = {"q0": [0.5, 0.75, 0.9], "phi": [0.05, 0.1, 0.3], "rho": [0.1, 0.5]}
    rows = run_parameter_sweep(
        D, grid, base_cfg=base, n_runs=3, base_seed=500,
        csv_path=os.path.join(OUTDIR, "acs_grid.csv")
    )
    print("Grid search evaluated:", len(rows))

    if args.visualize:
        for label, cfg in settings.items():
            gif_path = os.path.join(OUTDIR, f"{label}_convergence.gif")
            make_gif(inst, label, cfg, gif_path, step=5,
                     frames_dir=args.frames_dir, keep_frames=args.keep_frames)
            print("Saved GIF:", gif_path)


if __name__ == "__main__":
    main()
