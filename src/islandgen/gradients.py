"""Gradient vector grids for gradient noise."""

import math

import numpy as np
from numpy.typing import NDArray

from .exceptions import require_positive


def gradient_grid_shape(width: int, height: int, grid_size: int) -> tuple[int, int]:
    """Return the (rows, cols) of a gradient grid covering a field.

    Two extra corners per axis keep the ``cell + 1`` lookups of every pixel
    in range.

    Args:
        width: Field width in pixels.
        height: Field height in pixels.
        grid_size: Noise cell size in pixels.

    Returns:
        Tuple of (rows, cols).
    """
    require_positive("width", width)
    require_positive("height", height)
    require_positive("grid_size", grid_size)
    cols = math.ceil(width / grid_size) + 2
    rows = math.ceil(height / grid_size) + 2
    return rows, cols


def generate_gradient_grid(
    cols: int,
    rows: int,
    rng: np.random.Generator | int,
) -> NDArray[np.float32]:
    """Generate a grid of random unit-length gradient vectors.

    Each corner gets an angle drawn uniformly from [0, 2*pi) and stores
    (cos, sin). Angles are drawn column by column so a given seed always
    yields the same grid for the same shape.

    Args:
        cols: Number of corners along x.
        rows: Number of corners along y.
        rng: Random source, or a seed for a new one.

    Returns:
        Array of shape (rows, cols, 2).
    """
    require_positive("cols", cols)
    require_positive("rows", rows)
    rng = np.random.default_rng(rng)

    # Drawn as (cols, rows) then transposed so the draw order is x-major
    angles = rng.uniform(0.0, 2.0 * np.pi, size=(cols, rows)).T

    grid = np.empty((rows, cols, 2), dtype=np.float32)
    grid[..., 0] = np.cos(angles)
    grid[..., 1] = np.sin(angles)
    return grid
