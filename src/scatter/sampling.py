from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from .poisson import poisson_disk_samples

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JitteredGrid:
    """columns x rows lattice, each node moved by an independent uniform offset."""
    columns: int
    rows: int
    jitter: float = 0.0
    full_range: bool = True  # [-jitter, jitter] if True, else [-jitter/2, jitter/2]


@dataclass(frozen=True)
class PoissonDisk:
    """Blue-noise sampling, rescaled from the unit square to the region."""
    num_points: int
    k: int = 30
    shape: str = "rectangle"
    min_dist: Optional[float] = None  # in normalized units
    jitter: float = 0.0  # final per-axis perturbation in region units


SamplingPolicy = Union[JitteredGrid, PoissonDisk]


def _check_region(width: float, height: float) -> None:
    if not (width > 0 and height > 0):
        raise ValueError(f"Region must have positive size, got {width} x {height}")


def grid_region(columns: int, rows: int, tile_size: float = 50.0) -> Tuple[float, float]:
    """Rectangle enclosing a jittered lattice with one spare tile around it."""
    return float(tile_size) * (columns + 1), float(tile_size) * (rows + 1)


def jittered_grid_points(
    columns: int,
    rows: int,
    jitter: float,
    *,
    tile_size: Union[float, Tuple[float, float]],
    rng: np.random.Generator,
    full_range: bool = True,
) -> np.ndarray:
    """
    Node (i, j) sits at tile * (1 + i), tile * (1 + j) plus a uniform offset.

    Always returns exactly columns * rows points, ordered column-major
    (i outer, j inner). Coincident points are possible for large jitter.
    """
    columns = int(columns)
    rows = int(rows)
    if columns < 0 or rows < 0:
        raise ValueError("columns and rows must be >= 0")
    if jitter < 0:
        raise ValueError("jitter must be >= 0")

    tx, ty = np.broadcast_to(np.asarray(tile_size, dtype=np.float64), (2,))
    r = float(jitter) if full_range else 0.5 * float(jitter)

    ii, jj = np.meshgrid(np.arange(columns), np.arange(rows), indexing="ij")
    n = columns * rows
    pts = np.empty((n, 2), dtype=np.float64)
    pts[:, 0] = tx * (1.0 + ii.ravel()) + rng.uniform(-r, r, n)
    pts[:, 1] = ty * (1.0 + jj.ravel()) + rng.uniform(-r, r, n)
    return pts


def sample(
    width: float,
    height: float,
    policy: SamplingPolicy,
    *,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Produce a SampleSet (N,2) inside [0,width] x [0,height] using the given policy.

    The generator is consumed, not reseeded: pass a freshly seeded one for
    reproducible output.
    """
    _check_region(width, height)
    W, H = float(width), float(height)

    if isinstance(policy, JitteredGrid):
        tile = (W / (policy.columns + 1), H / (policy.rows + 1))
        pts = jittered_grid_points(
            policy.columns,
            policy.rows,
            policy.jitter,
            tile_size=tile,
            rng=rng,
            full_range=policy.full_range,
        )
    elif isinstance(policy, PoissonDisk):
        unit = poisson_disk_samples(
            policy.num_points,
            rng,
            k=policy.k,
            shape=policy.shape,
            min_dist=policy.min_dist,
        )
        pts = unit * np.array([W, H], dtype=np.float64)
        if policy.jitter > 0 and len(pts):
            pts += rng.uniform(-policy.jitter, policy.jitter, pts.shape)
            pts[:, 0] = np.clip(pts[:, 0], 0.0, W)
            pts[:, 1] = np.clip(pts[:, 1], 0.0, H)
    else:
        raise TypeError(f"Unknown sampling policy: {type(policy).__name__}")

    logger.debug("sampled %d points with %s in %gx%g", len(pts), type(policy).__name__, W, H)
    return pts
