"""Island shaping: radial bump that pulls the map centre above water."""

import numpy as np
from numpy.typing import NDArray

from .exceptions import require_positive
from .types import Point


def radial_altitude(
    width: int,
    height: int,
    centre: Point,
    falloff_width: float,
) -> NDArray[np.float32]:
    """Compute the radial island bump for every cell.

    ``tanh(4 * (exp(-d**2 / falloff_width**2) - 0.5))`` where d is the
    distance to ``centre``: about +0.96 at the centre, crossing zero at
    ``d = falloff_width * sqrt(ln 2)`` and approaching tanh(-2) far away.

    Args:
        width: Field width.
        height: Field height.
        centre: Centre of the island.
        falloff_width: Radius scale of the bump, in pixels.

    Returns:
        2D float32 array of shape (height, width).
    """
    require_positive("falloff_width", falloff_width)

    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    dist_sq = (xs - centre.x) ** 2 + (ys - centre.y) ** 2
    bump = np.exp(-dist_sq / (falloff_width * falloff_width))
    return np.tanh(4.0 * (bump - 0.5)).astype(np.float32)


def shape_island(
    field: NDArray[np.float32],
    centre: Point,
    falloff_width: float,
) -> NDArray[np.float32]:
    """Raise terrain near ``centre`` to form a land mass.

    Only the positive part of the radial bump is added, so distant ocean
    keeps its existing detail instead of being pushed deeper.

    Args:
        field: Input elevation field in [-1, 1].
        centre: Centre of the island.
        falloff_width: Radius scale of the bump, in pixels.

    Returns:
        New field clamped to [-1, 1].
    """
    height, width = field.shape
    altitude = radial_altitude(width, height, centre, falloff_width)

    lifted = np.clip(field + altitude, -1.0, 1.0)
    return np.where(altitude > 0, lifted, field).astype(np.float32)
