import numpy as np
import pytest

from src.scatter.poisson import (
    poisson_disk_samples,
    default_min_dist,
    in_unit_circle,
    in_unit_rectangle,
)


def _min_pairwise_distance(pts: np.ndarray) -> float:
    d = np.linalg.norm(pts[None, :, :] - pts[:, None, :], axis=-1)
    np.fill_diagonal(d, np.inf)
    return float(d.min())


@pytest.mark.parametrize("shape", ["rectangle", "circle"])
def test_poisson_min_distance(shape):
    rng = np.random.default_rng(0)
    n = 400
    pts = poisson_disk_samples(n, rng, shape=shape)
    assert len(pts) > 1
    assert _min_pairwise_distance(pts) >= default_min_dist(n) - 1e-12


def test_poisson_min_distance_explicit():
    rng = np.random.default_rng(5)
    pts = poisson_disk_samples(2000, rng, k=10, min_dist=0.03)
    assert _min_pairwise_distance(pts) >= 0.03 - 1e-12


def test_poisson_points_inside_rectangle():
    rng = np.random.default_rng(1)
    pts = poisson_disk_samples(500, rng, shape="rectangle")
    assert np.all(pts >= 0.0) and np.all(pts <= 1.0)
    assert all(in_unit_rectangle(x, y) for x, y in pts)


def test_poisson_points_inside_circle():
    rng = np.random.default_rng(2)
    pts = poisson_disk_samples(500, rng, shape="circle")
    r2 = np.sum((pts - 0.5) ** 2, axis=1)
    assert np.all(r2 <= 0.25)
    assert all(in_unit_circle(x, y) for x, y in pts)


def test_poisson_stops_at_target_count():
    rng = np.random.default_rng(3)
    pts = poisson_disk_samples(50, rng, min_dist=0.01)
    assert pts.shape == (50, 2)


def test_poisson_saturation_returns_fewer_points():
    rng = np.random.default_rng(4)
    # discs of radius 0.4 leave room for a handful of points only
    pts = poisson_disk_samples(100, rng, min_dist=0.4)
    assert 1 <= len(pts) < 100
    if len(pts) > 1:
        assert _min_pairwise_distance(pts) >= 0.4 - 1e-12


def test_poisson_is_deterministic_with_seed():
    a = poisson_disk_samples(300, np.random.default_rng(99))
    b = poisson_disk_samples(300, np.random.default_rng(99))
    assert np.array_equal(a, b)


def test_poisson_zero_points():
    pts = poisson_disk_samples(0, np.random.default_rng(0))
    assert pts.shape == (0, 2)


def test_poisson_rejects_bad_arguments():
    rng = np.random.default_rng(0)
    with pytest.raises(ValueError):
        poisson_disk_samples(10, rng, shape="hexagon")
    with pytest.raises(ValueError):
        poisson_disk_samples(-1, rng)
    with pytest.raises(ValueError):
        poisson_disk_samples(10, rng, k=0)
    with pytest.raises(ValueError):
        poisson_disk_samples(10, rng, min_dist=0.0)
