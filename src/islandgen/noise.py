"""Gradient noise sampling.

Classic Perlin construction: each pixel dots the gradients of its four
surrounding grid corners with the corner offsets, then blends the four
results with a smoothstep-weighted interpolation.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import InvalidArgumentError, require_positive
from .gradients import generate_gradient_grid, gradient_grid_shape

# Largest magnitude the dot-product construction can reach, per grid unit
_NORMALIZATION = float(np.sqrt(2.0))


def ease_lerp(a0: ArrayLike, a1: ArrayLike, w: ArrayLike) -> NDArray[np.float64]:
    """Blend a0 toward a1 with the cubic ease curve (3 - 2w) * w**2.

    The derivative vanishes at w = 0 and w = 1, so neighbouring cells meet
    without visible seams.
    """
    a0 = np.asarray(a0, dtype=np.float64)
    a1 = np.asarray(a1, dtype=np.float64)
    w = np.asarray(w, dtype=np.float64)
    return (a1 - a0) * (3.0 - 2.0 * w) * w * w + a0


def corner_dot_products(
    x: ArrayLike,
    y: ArrayLike,
    grid_size: int,
    gradients: NDArray[np.float32],
) -> tuple[NDArray[np.float64], ...]:
    """Compute each corner's contribution for pixels (x, y).

    The offset for a corner is ``corner - pixel`` in pixel units, so a pixel
    sitting exactly on a corner gets a zero contribution from it.

    Args:
        x: Pixel x coordinates.
        y: Pixel y coordinates.
        grid_size: Noise cell size in pixels.
        gradients: Gradient grid of shape (rows, cols, 2).

    Returns:
        Tuple of (northwest, northeast, southwest, southeast) dot products.

    Raises:
        InvalidArgumentError: If a pixel's corners fall outside the grid.
    """
    require_positive("grid_size", grid_size)
    x = np.asarray(x, dtype=np.int64)
    y = np.asarray(y, dtype=np.int64)
    cell_x = x // grid_size
    cell_y = y // grid_size

    rows, cols = gradients.shape[:2]
    if x.size and (
        x.min() < 0
        or y.min() < 0
        or cell_x.max() + 1 >= cols
        or cell_y.max() + 1 >= rows
    ):
        raise InvalidArgumentError(
            f"Pixel coordinates exceed a {cols}x{rows} gradient grid "
            f"at grid size {grid_size}"
        )

    def dot(dx: int, dy: int) -> NDArray[np.float64]:
        corner_x = cell_x + dx
        corner_y = cell_y + dy
        vectors = gradients[corner_y, corner_x].astype(np.float64)
        offset_x = corner_x * grid_size - x
        offset_y = corner_y * grid_size - y
        return vectors[..., 0] * offset_x + vectors[..., 1] * offset_y

    return dot(0, 0), dot(1, 0), dot(0, 1), dot(1, 1)


def sample_grid(
    xs: ArrayLike,
    ys: ArrayLike,
    grid_size: int,
    gradients: NDArray[np.float32],
    scale: float = 1.0,
) -> NDArray[np.float32]:
    """Evaluate gradient noise at many pixels at once.

    Args:
        xs: Pixel x coordinates.
        ys: Pixel y coordinates, broadcastable against xs.
        grid_size: Noise cell size in pixels.
        gradients: Gradient grid of shape (rows, cols, 2).
        scale: Multiplier applied after normalization.

    Returns:
        Noise values clamped to [-1, 1], in the broadcast shape of xs/ys.
    """
    xs, ys = np.broadcast_arrays(
        np.asarray(xs, dtype=np.int64), np.asarray(ys, dtype=np.int64)
    )
    northwest, northeast, southwest, southeast = corner_dot_products(
        xs, ys, grid_size, gradients
    )

    u = (xs % grid_size) / grid_size
    v = (ys % grid_size) / grid_size

    north = ease_lerp(northwest, northeast, u)
    south = ease_lerp(southwest, southeast, u)
    value = ease_lerp(north, south, v)

    value = value * _NORMALIZATION / grid_size * scale
    return np.clip(value, -1.0, 1.0).astype(np.float32)


def sample(
    x: int,
    y: int,
    grid_size: int,
    gradients: NDArray[np.float32],
    scale: float = 1.0,
) -> float:
    """Evaluate gradient noise at a single pixel."""
    return float(sample_grid(x, y, grid_size, gradients, scale))


def generate_field(
    width: int,
    height: int,
    grid_size: int,
    scale: float = 1.0,
    *,
    rng: np.random.Generator | int,
) -> NDArray[np.float32]:
    """Generate a gradient noise field.

    Allocates a fresh gradient grid from ``rng`` and samples every pixel.
    The same seed (or a Generator in the same state) always yields the
    same field.

    Args:
        width: Output width in pixels.
        height: Output height in pixels.
        grid_size: Noise cell size in pixels. Larger cells give broader features.
        scale: Contrast multiplier; values are clamped to [-1, 1] afterwards.
        rng: Random source, or a seed for a new one.

    Returns:
        2D float32 array of shape (height, width) in [-1, 1].
    """
    rows, cols = gradient_grid_shape(width, height, grid_size)
    gradients = generate_gradient_grid(cols, rows, rng)

    ys, xs = np.mgrid[0:height, 0:width]
    return sample_grid(xs, ys, grid_size, gradients, scale)
