import os, argparse
import matplotlib.pyplot as plt
import imageio

from acs import TSPInstance, ACSConfig, solve


def visualize(inst, cfg, outdir, step=5):
    os.makedirs(outdir, exist_ok=True)
    res = solve(inst.distance_matrix(), cfg, progress=True)

    coords = inst.coords
    cx = [c[0] for c in coords]
    cy = [c[1] for c in coords]
    frames = []
    for it in range(0, len(res.history_best_tours), step):
        tour = res.history_best_tours[it]
        L = res.history_best_lengths[it]
        xs = [coords[i][0] for i in tour]
        ys = [coords[i][1] for i in tour]

        plt.figure(figsize=(5,5))
        plt.plot(cx, cy, "o")
        plt.plot(xs, ys, "-")
        plt.plot(xs[0], ys[0], "s", color="red")
        plt.title(f"ACS best-so-far\niter={it+1}  length={L:.2f}")
        plt.axis("equal")
        plt.tight_layout()
        frame_path = os.path.join(outdir, f"acs_frame_{it:03d}.png")
        plt.savefig(frame_path, dpi=120, bbox_inches="tight")
        plt.close()
        frames.append(frame_path)

    gif_path = os.path.join(outdir, "acs_convergence.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))

    print("Saved:", gif_path)

def main():
    p = argparse.ArgumentParser()
    p.add_argument("--n", type=int, default=40, help="number of cities")
    p.add_argument("--iters", type=int, default=120)
    p.add_argument("--ants", type=int, default=10)
    p.add_argument("--q0", type=float, default=0.9)
    p.add_argument("--start", type=int, default=0)
    p.add_argument("--square", type=float, default=100.0)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--outdir", default="viz")
    p.add_argument("--step", type=int, default=5, help="frame every k iterations")
    args = p.parse_args()

    inst = TSPInstance.random_euclidean(n=args.n, seed=args.seed, square_size=args.square, name=f"viz{args.n}")
    cfg = ACSConfig(alpha=1.0, beta=2.0, rho=0.1, Q=1.0, q0=args.q0, phi=0.1, tau0=0.01,
                    n_ants=args.ants, n_iterations=args.iters, initial_city=args.start, seed=args.seed)
    visualize(inst, cfg, args.outdir, step=args.step)

if __name__ == "__main__":
    main()
