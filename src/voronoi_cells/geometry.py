from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from shapely.geometry import Polygon, box


@dataclass(frozen=True)
class BoundingRegion:
    """Axis-aligned rectangle [0, width] x [0, height]."""
    width: float
    height: float

    def __post_init__(self):
        if not (self.width > 0 and self.height > 0):
            raise ValueError(f"Region must have positive size, got {self.width} x {self.height}")

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return 0.0, 0.0, float(self.width), float(self.height)

    @property
    def corners(self) -> np.ndarray:
        W, H = float(self.width), float(self.height)
        return np.array([[0.0, 0.0], [W, 0.0], [W, H], [0.0, H]], dtype=np.float64)

    @property
    def center(self) -> np.ndarray:
        return np.array([0.5 * self.width, 0.5 * self.height], dtype=np.float64)

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    @property
    def area(self) -> float:
        return float(self.width) * float(self.height)

    def scaled(self, s: float) -> "BoundingRegion":
        return BoundingRegion(self.width * s, self.height * s)

    def as_polygon(self) -> Polygon:
        return box(*self.bounds)


def reinforcement_ring(
    region: BoundingRegion,
    *,
    offset: Optional[float] = None,
    density: int = 4,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Auxiliary sites along four segments enclosing the region, `offset` beyond each edge.

    The default offset is the region diagonal: any point of the region is then
    closer to a site inside the region than to any ring site, so ring cells
    never reach into the region.
    Returns (4 * density, 2), corners included once.
    """
    if density < 1:
        raise ValueError("density must be >= 1")
    off = region.diagonal if offset is None else float(offset)
    if off <= 0:
        raise ValueError("offset must be > 0")

    W, H = float(region.width), float(region.height)
    ring_corners = np.array([
        [-off, -off],
        [W + off, -off],
        [W + off, H + off],
        [-off, H + off],
    ], dtype=np.float64)

    t = np.arange(density, dtype=np.float64)[:, None] / density
    sides = []
    for k in range(4):
        a = ring_corners[k]
        b = ring_corners[(k + 1) % 4]
        sides.append(a + t * (b - a))
    ring = np.vstack(sides)

    if rng is not None:
        spacing = (min(W, H) + 2.0 * off) / density
        ring += rng.uniform(-0.01 * spacing, 0.01 * spacing, ring.shape)

    return ring


def ray_reach(region: BoundingRegion) -> float:
    """
    Minimal distance from the region centre at which proxy endpoints are placed.

    Twice the diagonal: four times the circumradius of the region, for any aspect ratio.
    """
    return 2.0 * region.diagonal


def circle_exit(anchor: np.ndarray, direction: np.ndarray, center: np.ndarray, radius: float) -> np.ndarray:
    """
    Point where the ray from `anchor` along unit `direction` leaves the circle
    of `radius` around `center`. `anchor` must lie inside the circle.
    """
    p = anchor - center
    b = float(np.dot(p, direction))
    c = float(np.dot(p, p)) - radius * radius
    t = -b + math.sqrt(b * b - c)
    return anchor + t * direction


def direction_sweep(u_out: np.ndarray, u_in: np.ndarray) -> float:
    """
    Counter-clockwise angle from direction u_out to direction u_in.

    The wedge of a convex cell opens by at most pi, so anything past 1.5*pi is
    a rounding error below zero and counts as 0.
    """
    sweep = (math.atan2(u_in[1], u_in[0]) - math.atan2(u_out[1], u_out[0])) % (2.0 * math.pi)
    if sweep > 1.5 * math.pi:
        return 0.0
    return sweep


def cap_points(a: np.ndarray, b: np.ndarray, center: np.ndarray, radius: float,
               sweep: float) -> np.ndarray:
    """
    Points strictly between `a` and `b` on the circle of `radius` around `center`,
    walking counter-clockwise in steps of at most 90 degrees.

    `a` and `b` lie on that circle at least four radii of the enclosed geometry
    out, so their angular span differs from the ray `sweep` by under 30 degrees.
    A span beyond sweep + 90 degrees is a wrap-around of two nearly coincident
    points and yields no cap.
    """
    pa = a - center
    pb = b - center
    phi_a = math.atan2(pa[1], pa[0])
    phi_b = math.atan2(pb[1], pb[0])
    span = (phi_b - phi_a) % (2.0 * math.pi)
    if span > sweep + 0.5 * math.pi:
        return np.zeros((0, 2), dtype=np.float64)
    steps = max(1, int(math.ceil(span / (0.5 * math.pi))))
    phis = phi_a + span * np.arange(1, steps, dtype=np.float64) / steps
    return center + radius * np.column_stack([np.cos(phis), np.sin(phis)])
