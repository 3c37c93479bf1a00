from __future__ import annotations

from typing import Dict, Tuple

import numpy as np
from scipy.spatial import Voronoi

from .datastructures import HalfEdgeGraph


def build_halfedge_graph(vor: Voronoi, *, eps: float = 1e-9) -> HalfEdgeGraph:
    """
    Convert SciPy's ridge lists into a half-edge arena.

    For ridge r between sites p and q, with t = q - p and n = rot90(t)/|t|,
    site p lies left of n. So half-edge 2r belongs to p and travels along n,
    half-edge 2r+1 belongs to q and travels along -n.

    Infinite ridges carry -1 for their missing vertex; the outward side is the
    one facing away from the centroid of all sites. Ridges of zero length (or
    between coincident sites) are kept but flagged non-primary.
    """
    points = np.asarray(vor.points, dtype=np.float64)
    vertices = np.asarray(vor.vertices, dtype=np.float64)
    ridge_points = np.asarray(vor.ridge_points, dtype=np.int64).reshape(-1, 2)
    ridge_vertices = vor.ridge_vertices

    n_cells = len(points)
    n_ridges = len(ridge_points)
    n_edges = 2 * n_ridges

    center = points.mean(axis=0)
    span = float(np.ptp(points, axis=0).max()) if n_cells else 0.0
    tol = eps * max(span, 1.0)

    edge_cell = np.empty(n_edges, dtype=np.int64)
    edge_origin = np.full(n_edges, -1, dtype=np.int64)
    edge_twin = np.empty(n_edges, dtype=np.int64)
    edge_next = np.full(n_edges, -1, dtype=np.int64)
    edge_ridge = np.empty(n_edges, dtype=np.int64)
    edge_primary = np.ones(n_edges, dtype=bool)
    edge_direction = np.zeros((n_edges, 2), dtype=np.float64)
    ridge_anchor = 0.5 * (points[ridge_points[:, 0]] + points[ridge_points[:, 1]]) \
        if n_ridges else np.zeros((0, 2), dtype=np.float64)
    cell_edge = np.full(n_cells, -1, dtype=np.int64)

    for r in range(n_ridges):
        p, q = int(ridge_points[r, 0]), int(ridge_points[r, 1])
        a, b = (int(v) for v in ridge_vertices[r])
        ep, eq = 2 * r, 2 * r + 1

        t = points[q] - points[p]
        norm = float(np.hypot(t[0], t[1]))
        primary = norm > tol
        n = np.array([-t[1], t[0]]) / norm if primary else np.zeros(2)

        if a >= 0 and b >= 0:
            d = vertices[b] - vertices[a]
            if float(np.hypot(d[0], d[1])) <= tol:
                primary = False
            origin, dest = (a, b) if np.dot(d, n) >= 0 else (b, a)
        elif a < 0 and b < 0:
            origin, dest = -1, -1
        else:
            finite = a if a >= 0 else b
            outward = float(np.dot(ridge_anchor[r] - center, n)) >= 0
            origin, dest = (finite, -1) if outward else (-1, finite)

        edge_cell[ep], edge_cell[eq] = p, q
        edge_origin[ep], edge_origin[eq] = origin, dest
        edge_twin[ep], edge_twin[eq] = eq, ep
        edge_ridge[ep] = edge_ridge[eq] = r
        edge_primary[ep] = edge_primary[eq] = primary
        edge_direction[ep] = n
        edge_direction[eq] = -n

        if cell_edge[p] < 0:
            cell_edge[p] = ep
        if cell_edge[q] < 0:
            cell_edge[q] = eq

    # link each edge to the edge of the same cell that starts where it ends;
    # the edge running off to infinity is followed by the one coming back
    starts: Dict[Tuple[int, int], int] = {}
    for e in range(n_edges):
        starts.setdefault((int(edge_cell[e]), int(edge_origin[e])), e)
    for e in range(n_edges):
        dest = int(edge_origin[edge_twin[e]])
        edge_next[e] = starts.get((int(edge_cell[e]), dest), -1)

    return HalfEdgeGraph(
        vertices=vertices,
        edge_cell=edge_cell,
        edge_origin=edge_origin,
        edge_twin=edge_twin,
        edge_next=edge_next,
        edge_ridge=edge_ridge,
        edge_primary=edge_primary,
        edge_direction=edge_direction,
        ridge_anchor=ridge_anchor,
        cell_edge=cell_edge,
    )
