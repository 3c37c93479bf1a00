"""
Scatter points, build their Voronoi cells and save a picture.

Run from the repository root:
    python -m scripts.render_voronoi --policy grid --width 30 --height 20 --randomness 5
    python -m scripts.render_voronoi --policy poisson --points 2000 --seed 7 -o poisson.png
"""
import argparse
import logging
import sys
import time

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from src.scatter import config
from src.scatter.sampling import JitteredGrid, PoissonDisk, grid_region, sample
from src.voronoi_cells.visualize import plot_voronoi
from src.voronoi_cells.voronoi import build_voronoi

logger = logging.getLogger("render_voronoi")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    p.add_argument("--policy", choices=("grid", "poisson"), default="grid")
    p.add_argument("--width", type=int, default=config.GRID_DEFAULT_WIDTH)
    p.add_argument("--height", type=int, default=config.GRID_DEFAULT_HEIGHT)
    p.add_argument("--randomness", type=int, default=config.RANDOMNESS_DEFAULT)
    p.add_argument("--points", type=int, default=config.POINTS_DEFAULT)
    p.add_argument("--shape", choices=("rectangle", "circle"), default="rectangle")
    p.add_argument("--seed", type=int, default=None, help="omit for a different picture every run")
    p.add_argument("-o", "--output", default="voronoi.png")
    p.add_argument("--log-level", default="INFO")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        if args.policy == "grid":
            config.validate_grid_settings(args.width, args.height, args.randomness)
            policy = JitteredGrid(args.width, args.height, args.randomness)
        else:
            config.validate_poisson_settings(args.points, args.width, args.height)
            policy = PoissonDisk(args.points, k=config.CANDIDATES_DEFAULT, shape=args.shape)
    except ValueError as e:
        logger.error("%s", e)
        return 2

    W, H = grid_region(args.width, args.height, config.TILE_SIZE)
    rng = np.random.default_rng(args.seed)

    t0 = time.perf_counter()
    points = sample(W, H, policy, rng=rng)
    t1 = time.perf_counter()
    logger.info("sampled %d points in %.1f ms", len(points), (t1 - t0) * 1e3)

    diagram = build_voronoi(points, W, H, rng=rng)
    t2 = time.perf_counter()
    logger.info("built %d cells (%d empty) in %.1f ms",
                diagram.cell_count(), len(diagram.empty_cell_indices()), (t2 - t1) * 1e3)

    fig, ax = plt.subplots(figsize=(12.8, 8.0))
    plot_voronoi(diagram, ax=ax)
    fig.savefig(args.output, dpi=100)
    plt.close(fig)
    logger.info("wrote %s", args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
