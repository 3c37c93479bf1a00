from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

import numpy as np

from .geometry import BoundingRegion


@dataclass
class HalfEdgeGraph:
    """
    Arena of half-edges built from a Voronoi diagram.

    Half-edges 2r and 2r+1 are twins and come from ridge r. Each half-edge
    travels with its cell on the left. origin == -1 means the edge starts at
    infinity; the destination is the twin's origin.
    """
    vertices: np.ndarray        # (V,2) Voronoi vertices
    edge_cell: np.ndarray       # (E,) site index
    edge_origin: np.ndarray     # (E,) vertex index or -1
    edge_twin: np.ndarray       # (E,)
    edge_next: np.ndarray       # (E,) next half-edge around the same cell, -1 if the loop is broken
    edge_ridge: np.ndarray      # (E,)
    edge_primary: np.ndarray    # (E,) bool
    edge_direction: np.ndarray  # (E,2) unit direction of travel
    ridge_anchor: np.ndarray    # (R,2) midpoint of the two sites of the ridge
    cell_edge: np.ndarray       # (C,) any incident half-edge, -1 if none

    @property
    def edge_count(self) -> int:
        return len(self.edge_cell)

    @property
    def cell_count(self) -> int:
        return len(self.cell_edge)

    def destination(self, e: int) -> int:
        return int(self.edge_origin[self.edge_twin[e]])

    def is_finite(self, e: int) -> bool:
        return self.edge_origin[e] >= 0 and self.destination(e) >= 0

    def cell_edges(self, c: int) -> Iterator[int]:
        """Walk the boundary of cell c once via `next`, starting at its incident edge."""
        start = int(self.cell_edge[c])
        if start < 0:
            return
        e = start
        for _ in range(self.edge_count):
            yield e
            e = int(self.edge_next[e])
            if e < 0 or e == start:
                return


@dataclass
class VoronoiCell2D:
    index: int
    site: np.ndarray       # (2,)
    polygon: np.ndarray    # (N,2) counter-clockwise, not closed; N == 0 for an empty cell
    neighbors: List[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.polygon) == 0

    @property
    def area(self) -> float:
        if len(self.polygon) < 3:
            return 0.0
        x = self.polygon[:, 0]
        y = self.polygon[:, 1]
        return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


@dataclass
class VoronoiDiagram2D:
    sites: np.ndarray              # (N,2)
    region: BoundingRegion
    cells: List[VoronoiCell2D]     # cells[i] belongs to sites[i]
    scale: Optional[int] = None

    def cell_count(self) -> int:
        return len(self.cells)

    def polygons(self) -> List[np.ndarray]:
        return [c.polygon for c in self.cells]

    def empty_cell_indices(self) -> List[int]:
        return [c.index for c in self.cells if c.is_empty]
