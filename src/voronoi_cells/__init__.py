from .datastructures import VoronoiDiagram2D, VoronoiCell2D, HalfEdgeGraph
from .geometry import BoundingRegion, reinforcement_ring
from .halfedge import build_halfedge_graph
from .voronoi import build_voronoi, cell_outline, clip_to_region
