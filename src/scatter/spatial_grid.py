from __future__ import annotations

import math

import numpy as np


class SpatialGrid:
    """
    Uniform acceleration grid over the unit square for Poisson-disk sampling.

    Cell size is min_dist / sqrt(2), so a cell can hold at most one accepted point.
    Cells store the point coordinates, NaN marks an empty cell.
    """

    # number of adjacent cells scanned on each side of a candidate
    NEIGHBOURHOOD = 5

    def __init__(self, min_dist: float):
        if min_dist <= 0:
            raise ValueError("min_dist must be > 0")
        self.cell_size = min_dist / math.sqrt(2.0)
        self.width = int(math.ceil(1.0 / self.cell_size))
        self.height = int(math.ceil(1.0 / self.cell_size))
        self.cells = np.full((self.width, self.height, 2), np.nan, dtype=np.float64)

    def cell_of(self, p) -> tuple[int, int]:
        # points on the far edge (x == 1.0) belong to the last column/row
        i = min(max(int(p[0] * self.width), 0), self.width - 1)
        j = min(max(int(p[1] * self.height), 0), self.height - 1)
        return i, j

    def insert(self, p) -> None:
        i, j = self.cell_of(p)
        self.cells[i, j, 0] = p[0]
        self.cells[i, j, 1] = p[1]

    def is_in_neighbourhood(self, p, min_dist2: float) -> bool:
        """True if an accepted point lies closer than sqrt(min_dist2) to p."""
        gi, gj = self.cell_of(p)
        d = self.NEIGHBOURHOOD
        block = self.cells[
            max(gi - d, 0):min(gi + d + 1, self.width),
            max(gj - d, 0):min(gj + d + 1, self.height),
        ].reshape(-1, 2)
        dx = block[:, 0] - p[0]
        dy = block[:, 1] - p[1]
        # NaN comparisons are False, so empty cells never match
        return bool(np.any(dx * dx + dy * dy < min_dist2))
