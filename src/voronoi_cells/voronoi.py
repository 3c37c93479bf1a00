from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np
from scipy.spatial import Voronoi
from shapely.geometry import Polygon
from shapely.geometry.polygon import orient

from .datastructures import HalfEdgeGraph, VoronoiCell2D, VoronoiDiagram2D
from .geometry import (
    BoundingRegion,
    cap_points,
    circle_exit,
    direction_sweep,
    ray_reach,
    reinforcement_ring,
)
from .halfedge import build_halfedge_graph

logger = logging.getLogger(__name__)

_EMPTY = np.zeros((0, 2), dtype=np.float64)


def is_degenerate(sites: np.ndarray) -> bool:
    """True when the distinct sites are fewer than three or all on one line."""
    distinct = np.unique(sites, axis=0)
    if len(distinct) < 3:
        return True
    sv = np.linalg.svd(distinct - distinct.mean(axis=0), compute_uv=False)
    return bool(sv[1] <= 1e-9 * sv[0])


def far_radius(graph: HalfEdgeGraph, center: np.ndarray, reach: float) -> float:
    """
    Radius of the circle all proxy endpoints are placed on: four times the
    extent of every vertex, ridge anchor and the region itself around `center`.
    """
    extent = 0.0
    for pts in (graph.vertices, graph.ridge_anchor):
        if len(pts):
            extent = max(extent, float(np.max(np.linalg.norm(pts - center, axis=1))))
    return 4.0 * (reach + extent)


def _proxy_endpoint(graph: HalfEdgeGraph, e: int, *, at_origin: bool,
                    center: np.ndarray, radius: float) -> np.ndarray:
    """Finite stand-in for the missing origin (or destination) of half-edge e."""
    anchor = graph.ridge_anchor[graph.edge_ridge[e]]
    d = graph.edge_direction[e]
    if at_origin:
        d = -d
    return circle_exit(anchor, d, center, radius)


def cell_outline(graph: HalfEdgeGraph, c: int, *, center: np.ndarray, radius: float) -> np.ndarray:
    """
    Polygon loop around cell c. Unbounded parts end on the circle of `radius`
    around `center` and are closed along it.
    """
    out: List[np.ndarray] = []
    for e in graph.cell_edges(c):
        if not graph.edge_primary[e]:
            continue

        o = int(graph.edge_origin[e])
        if o >= 0:
            out.append(graph.vertices[o])
        else:
            out.append(_proxy_endpoint(graph, e, at_origin=True, center=center, radius=radius))

        if graph.destination(e) < 0:
            far_dest = _proxy_endpoint(graph, e, at_origin=False, center=center, radius=radius)
            out.append(far_dest)
            nxt = int(graph.edge_next[e])
            if nxt >= 0:
                far_next = _proxy_endpoint(graph, nxt, at_origin=True, center=center, radius=radius)
                sweep = direction_sweep(graph.edge_direction[e], -graph.edge_direction[nxt])
                out.extend(cap_points(far_dest, far_next, center, radius, sweep))

    if not out:
        return _EMPTY
    return np.asarray(out, dtype=np.float64)


def clip_to_region(outline: np.ndarray, region: BoundingRegion) -> np.ndarray:
    """Intersect a polygon loop with the region; degenerate results become an empty array."""
    if len(outline) < 3:
        return _EMPTY

    poly = Polygon(outline)
    if not poly.is_valid:
        poly = poly.buffer(0)

    clipped = poly.intersection(region.as_polygon())
    if clipped.is_empty:
        return _EMPTY

    # keep the largest polygonal part of multi-part results
    if clipped.geom_type in ("MultiPolygon", "GeometryCollection"):
        parts = [g for g in clipped.geoms if g.geom_type == "Polygon" and not g.is_empty]
        if not parts:
            return _EMPTY
        clipped = max(parts, key=lambda g: g.area)

    if clipped.geom_type != "Polygon" or clipped.area <= 0.0:
        return _EMPTY

    clipped = orient(clipped, sign=1.0)
    coords = np.array(clipped.exterior.coords[:-1], dtype=np.float64)
    if len(coords) < 3:
        return _EMPTY
    return coords


def build_voronoi(
    points: np.ndarray,
    width: float,
    height: float,
    *,
    reinforce: bool = True,
    ring_offset: Optional[float] = None,
    ring_density: int = 4,
    scale: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> VoronoiDiagram2D:
    """
    Voronoi cells of `points` clipped to [0,width] x [0,height].

    cells[i] always belongs to points[i]; cells of duplicate or fully
    degenerate sites come back with an empty polygon.

    reinforce:    surround the input with a ring of auxiliary sites so every
                  real cell is bounded; the auxiliary cells are never reported.
                  Sites that are fewer than three or collinear get the ring
                  regardless.
    ring_offset:  distance of the ring beyond the region edges (default: diagonal)
    ring_density: auxiliary sites per ring side
    scale:        run construction on coordinates multiplied by this integer and
                  rounded; results are divided back before clipping
    rng:          jitters the ring sites slightly to break cocircular layouts
    """
    region = BoundingRegion(width, height)

    sites = np.asarray(points, dtype=np.float64)
    if sites.ndim != 2 or sites.shape[1] != 2:
        raise ValueError("points must be (N,2)")
    n_orig = len(sites)
    if n_orig < 1:
        raise ValueError("At least one site is required")
    if not np.all(np.isfinite(sites)):
        raise ValueError("points must be finite")
    if scale is not None and int(scale) < 1:
        raise ValueError("scale must be a positive integer")

    if n_orig == 1 and not reinforce:
        cell = VoronoiCell2D(index=0, site=sites[0].copy(), polygon=region.corners, neighbors=[])
        return VoronoiDiagram2D(sites=sites, region=region, cells=[cell], scale=scale)

    s = 1 if scale is None else int(scale)
    build_region = region
    if scale is not None:
        build_region = region.scaled(s)

    if not reinforce and is_degenerate(sites if scale is None else np.rint(sites * s)):
        logger.debug("%d sites span no triangle, adding the ring", n_orig)
        reinforce = True

    all_sites = sites
    if reinforce:
        ring = reinforcement_ring(region, offset=ring_offset, density=ring_density, rng=rng)
        all_sites = np.vstack([sites, ring])
        logger.debug("added %d auxiliary ring sites", len(ring))

    if scale is not None:
        all_sites = np.rint(all_sites * s)

    vor = Voronoi(all_sites)
    graph = build_halfedge_graph(vor)

    center = build_region.center
    radius = far_radius(graph, center, ray_reach(build_region))

    cells: List[VoronoiCell2D] = []
    for i in range(n_orig):
        outline = cell_outline(graph, i, center=center, radius=radius)
        if scale is not None and len(outline):
            outline = outline / s
        polygon = clip_to_region(outline, region)

        neighbors = sorted({
            int(graph.edge_cell[graph.edge_twin[e]])
            for e in graph.cell_edges(i)
            if graph.edge_primary[e] and graph.edge_cell[graph.edge_twin[e]] < n_orig
        })

        cells.append(VoronoiCell2D(index=i, site=sites[i].copy(), polygon=polygon, neighbors=neighbors))

    empty = sum(1 for c in cells if c.is_empty)
    if empty:
        logger.debug("%d of %d cells are empty after clipping", empty, n_orig)

    return VoronoiDiagram2D(sites=sites, region=region, cells=cells, scale=scale)
