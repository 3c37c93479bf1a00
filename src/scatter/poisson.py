from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Optional

import numpy as np

from .spatial_grid import SpatialGrid

logger = logging.getLogger(__name__)


def in_unit_rectangle(x: float, y: float) -> bool:
    return 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0


def in_unit_circle(x: float, y: float) -> bool:
    """Circle inscribed in the unit square: centre (0.5, 0.5), radius 0.5."""
    fx = x - 0.5
    fy = y - 0.5
    return fx * fx + fy * fy <= 0.25


SHAPES: Dict[str, Callable[[float, float], bool]] = {
    "rectangle": in_unit_rectangle,
    "circle": in_unit_circle,
}


def shape_predicate(shape: str) -> Callable[[float, float], bool]:
    try:
        return SHAPES[shape]
    except KeyError:
        raise ValueError(f"Unknown shape {shape!r}, expected one of {sorted(SHAPES)}") from None


def default_min_dist(num_points: int) -> float:
    return math.sqrt(num_points) / num_points


def _pop_random(active: list, rng: np.random.Generator):
    idx = int(rng.integers(len(active)))
    p = active[idx]
    active[idx] = active[-1]
    active.pop()
    return p


def _random_point_around(p, min_dist: float, rng: np.random.Generator):
    # radius in [min_dist, 2 * min_dist)
    radius = min_dist * (1.0 + rng.random())
    angle = 2.0 * math.pi * rng.random()
    return p[0] + radius * math.cos(angle), p[1] + radius * math.sin(angle)


def poisson_disk_samples(
    num_points: int,
    rng: np.random.Generator,
    *,
    k: int = 30,
    shape: str = "rectangle",
    min_dist: Optional[float] = None,
) -> np.ndarray:
    """
    Bridson's fast Poisson-disk sampling in normalized [0,1]^2 space.

    k:        candidates tried around every popped active point
    shape:    "rectangle" (unit square) or "circle" (inscribed circle)
    min_dist: minimal distance between samples, defaults to sqrt(N)/N

    Stops when the active front empties or num_points is reached, so the
    result may hold fewer than num_points points.
    """
    num_points = int(num_points)
    if num_points < 0:
        raise ValueError("num_points must be >= 0")
    if k < 1:
        raise ValueError("k must be >= 1")
    fits = shape_predicate(shape)
    if num_points == 0:
        return np.zeros((0, 2), dtype=np.float64)

    if min_dist is None:
        min_dist = default_min_dist(num_points)
    min_dist = float(min_dist)
    if min_dist <= 0:
        raise ValueError("min_dist must be > 0")
    min_dist2 = min_dist * min_dist

    grid = SpatialGrid(min_dist)

    while True:
        first = (float(rng.random()), float(rng.random()))
        if fits(*first):
            break

    active = [first]
    samples = [first]
    grid.insert(first)

    while active and len(samples) < num_points:
        p = _pop_random(active, rng)

        for _ in range(k):
            cand = _random_point_around(p, min_dist, rng)
            if fits(*cand) and not grid.is_in_neighbourhood(cand, min_dist2):
                active.append(cand)
                samples.append(cand)
                grid.insert(cand)
                if len(samples) >= num_points:
                    break

    if len(samples) < num_points:
        logger.debug("poisson front emptied at %d of %d points (min_dist=%g)",
                     len(samples), num_points, min_dist)
    else:
        logger.debug("poisson sampling reached %d points", len(samples))

    return np.asarray(samples, dtype=np.float64)
