import numpy as np
import pytest
from shapely.geometry import Polygon

from src.scatter.sampling import JitteredGrid, PoissonDisk, grid_region, sample
from src.voronoi_cells.voronoi import build_voronoi

from tests.voronoi_cells.helpers_partition import assert_partition, raster_uncovered_fraction


@pytest.mark.parametrize("reinforce", [True, False])
def test_random_sites_partition_region(reinforce):
    rng = np.random.default_rng(11)
    seeds = rng.uniform([0, 0], [100, 60], (60, 2))
    d = build_voronoi(seeds, 100.0, 60.0, reinforce=reinforce)

    assert d.cell_count() == 60
    assert d.empty_cell_indices() == []
    assert_partition(d)


@pytest.mark.parametrize("W,H", [(1000.0, 1.0), (1.0, 1000.0)])
def test_extreme_aspect_ratio_without_ring(W, H):
    rng = np.random.default_rng(12)
    seeds = rng.uniform([0, 0], [W, H], (25, 2))
    d = build_voronoi(seeds, W, H, reinforce=False)
    assert_partition(d)


def test_jittered_grid_diagram_covers_raster():
    rng = np.random.default_rng(13)
    W, H = grid_region(12, 8, tile_size=10)
    pts = sample(W, H, JitteredGrid(12, 8, jitter=4), rng=rng)
    d = build_voronoi(pts, W, H, rng=rng)

    assert d.cell_count() == 96
    assert_partition(d)
    assert raster_uncovered_fraction(d, px_per_unit=4.0) < 0.005


def test_poisson_diagram_covers_raster():
    rng = np.random.default_rng(14)
    pts = sample(80.0, 50.0, PoissonDisk(200, jitter=0.1), rng=rng)
    d = build_voronoi(pts, 80.0, 50.0)

    assert d.cell_count() == len(pts)
    assert_partition(d)
    assert raster_uncovered_fraction(d, px_per_unit=5.0) < 0.005


def test_scaled_construction_matches_unscaled():
    rng = np.random.default_rng(15)
    # sites on a 1/1000 lattice survive integer scaling unchanged
    seeds = np.round(rng.uniform([0, 0], [100, 70], (40, 2)), 3)
    plain = build_voronoi(seeds, 100.0, 70.0)
    scaled = build_voronoi(seeds, 100.0, 70.0, scale=1000)

    assert scaled.scale == 1000
    for a, b in zip(plain.cells, scaled.cells):
        assert Polygon(a.polygon).hausdorff_distance(Polygon(b.polygon)) <= 1e-6
    assert_partition(scaled)


def test_scaled_construction_is_close_for_arbitrary_sites():
    rng = np.random.default_rng(16)
    seeds = rng.uniform([0, 0], [100, 70], (40, 2))
    plain = build_voronoi(seeds, 100.0, 70.0)
    scaled = build_voronoi(seeds, 100.0, 70.0, scale=1000)

    # rounding moves each site by at most half a lattice step
    for a, b in zip(plain.cells, scaled.cells):
        assert Polygon(a.polygon).hausdorff_distance(Polygon(b.polygon)) <= 0.05
    diffs = [abs(a.area - b.area) for a, b in zip(plain.cells, scaled.cells)]
    assert sum(diffs) <= 1.0
    assert_partition(scaled)


def test_scaled_construction_keeps_exact_corners():
    rng = np.random.default_rng(17)
    W, H = 100.3, 70.7
    seeds = rng.uniform([0, 0], [W, H], (30, 2))
    d = build_voronoi(seeds, W, H, scale=100)

    verts = np.vstack([c.polygon for c in d.cells if not c.is_empty])
    for corner in ([0.0, 0.0], [W, 0.0], [W, H], [0.0, H]):
        assert np.any(np.all(verts == np.array(corner), axis=1))


def _clustered_sites(rng, W, H, n):
    corner = rng.integers(4)
    origin = np.array([W * (corner % 2), H * (corner // 2)])
    spread = np.array([W, H]) * rng.uniform(0.001, 0.05)
    pts = origin + rng.uniform(-1.0, 1.0, (n, 2)) * spread
    return np.clip(pts, 0.0, [W, H])


def _nearly_collinear_sites(rng, W, H, n):
    xs = rng.uniform(0.0, W, n)
    ys = 0.5 * H + rng.uniform(-1e-3, 1e-3, n) * H
    return np.column_stack([xs, ys])


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("layout", [_clustered_sites, _nearly_collinear_sites])
def test_awkward_layouts_without_ring_partition_region(seed, layout):
    rng = np.random.default_rng(seed)
    W, H = rng.choice([1.0, 10.0, 100.0, 1000.0], 2)
    seeds = layout(rng, W, H, int(rng.integers(3, 12)))
    d = build_voronoi(seeds, W, H, reinforce=False)
    assert_partition(d)


def test_long_strip_with_one_flat_unbounded_cell():
    seeds = np.array([
        [67.61, 7.13],
        [813.12, 5.48],
        [634.31, 1.69],
        [554.33, 1.76],
        [506.57, 3.42],
        [962.42, 5.20],
        [202.36, 2.57],
    ])
    plain = build_voronoi(seeds, 1000.0, 10.0, reinforce=False)
    ringed = build_voronoi(seeds, 1000.0, 10.0)

    assert_partition(plain)
    for a, b in zip(plain.cells, ringed.cells):
        assert Polygon(a.polygon).symmetric_difference(Polygon(b.polygon)).area <= 1e-6
