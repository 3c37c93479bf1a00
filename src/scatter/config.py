"""
Input ranges and defaults of the demo controls.

The sampling and Voronoi functions assume valid input; callers check
user-facing values here first. All bounds are inclusive.
"""
from __future__ import annotations

TILE_SIZE = 50

GRID_MIN = 5
GRID_MAX = 1000
GRID_DEFAULT_WIDTH = 30
GRID_DEFAULT_HEIGHT = 20

RANDOMNESS_MIN = 0
RANDOMNESS_MAX = TILE_SIZE - 1
RANDOMNESS_DEFAULT = TILE_SIZE // 10

POINTS_MIN = 10
POINTS_MAX = 10000
POINTS_DEFAULT = 1000

CANDIDATES_DEFAULT = 30


def _check_range(name: str, value: int, lo: int, hi: int) -> None:
    if not (lo <= value <= hi):
        raise ValueError(f"{name} must be in [{lo}, {hi}], got {value}")


def validate_grid_settings(width: int, height: int, randomness: int) -> None:
    _check_range("width", width, GRID_MIN, GRID_MAX)
    _check_range("height", height, GRID_MIN, GRID_MAX)
    _check_range("randomness", randomness, RANDOMNESS_MIN, RANDOMNESS_MAX)


def validate_poisson_settings(points: int, width: int, height: int) -> None:
    _check_range("points", points, POINTS_MIN, POINTS_MAX)
    _check_range("width", width, GRID_MIN, GRID_MAX)
    _check_range("height", height, GRID_MIN, GRID_MAX)
