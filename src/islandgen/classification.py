"""Terrain classification: rock, water, beach, forest, resources, grass.

Classification is an ordered list of rules. Each cell takes the category
and color of the first rule that matches it, so the tie-break order
rock > water > beach > forest > resource > grass is the order of RULES.
"""

from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np
from numpy.typing import NDArray

from .exceptions import DimensionMismatchError, InvalidArgumentError
from .types import Color, Point, ResourceLayer, TerrainCategory

ROCK_COLOR = Color(r=100, g=100, b=100)
BEACH_COLOR = Color(r=200, g=200, b=20)

# Roughness thresholds for rock: any land, or high land
ROCK_ROUGHNESS = 0.27
HIGHLAND_ROCK_ROUGHNESS = 0.15
HIGHLAND_ELEVATION = 0.4

BEACH_MAX_ELEVATION = 0.1
TREE_COVER_THRESHOLD = 0.1


@dataclass(frozen=True)
class CellContext:
    """Inputs for a batch of cells, flattened to 1D.

    ``tree_cover`` is None when no tree-cover field was supplied.
    ``resource_values`` holds one row per resource layer.
    """

    xs: NDArray[np.int64]
    ys: NDArray[np.int64]
    elevation: NDArray[np.float64]
    roughness: NDArray[np.float64]
    tree_cover: NDArray[np.float64] | None
    resources: Sequence[ResourceLayer]
    resource_values: NDArray[np.float64]
    reference: Point


@dataclass(frozen=True)
class TerrainRule:
    """One classification rule.

    ``matches`` returns a boolean mask over the context's cells and
    ``colors`` returns an (n, 3) float array of unclamped channel values.
    """

    category: TerrainCategory
    matches: Callable[[CellContext], NDArray[np.bool_]]
    colors: Callable[[CellContext], NDArray[np.float64]]


def _fixed(color: Color) -> Callable[[CellContext], NDArray[np.float64]]:
    def colors(ctx: CellContext) -> NDArray[np.float64]:
        return np.tile(np.array(color.as_tuple(), dtype=np.float64), (ctx.elevation.size, 1))

    return colors


def _linear(
    base: tuple[float, float, float],
    slope: tuple[float, float, float],
    offset: float = 0.0,
) -> Callable[[CellContext], NDArray[np.float64]]:
    """Channels ``base + slope * (elevation + offset)``."""

    def colors(ctx: CellContext) -> NDArray[np.float64]:
        v = (ctx.elevation + offset)[:, None]
        return np.asarray(base, dtype=np.float64) + np.asarray(slope, dtype=np.float64) * v

    return colors


def _is_rock(ctx: CellContext) -> NDArray[np.bool_]:
    return ((ctx.roughness > ROCK_ROUGHNESS) & (ctx.elevation > 0)) | (
        (ctx.roughness > HIGHLAND_ROCK_ROUGHNESS) & (ctx.elevation > HIGHLAND_ELEVATION)
    )


def _is_water(ctx: CellContext) -> NDArray[np.bool_]:
    return ctx.elevation < 0


def _is_beach(ctx: CellContext) -> NDArray[np.bool_]:
    return (ctx.elevation >= 0) & (ctx.elevation < BEACH_MAX_ELEVATION)


def _is_forest(ctx: CellContext) -> NDArray[np.bool_]:
    if ctx.tree_cover is None:
        return np.zeros(ctx.elevation.shape, dtype=bool)
    return (ctx.elevation >= BEACH_MAX_ELEVATION) & (ctx.tree_cover > TREE_COVER_THRESHOLD)


def _resource_index(ctx: CellContext) -> NDArray[np.int64]:
    """Index of the first matching resource layer per cell, or -1."""
    index = np.full(ctx.elevation.shape, -1, dtype=np.int64)
    distance = ctx.reference.manhattan(ctx.xs, ctx.ys)

    # Reversed so earlier layers overwrite later ones
    for i in reversed(range(len(ctx.resources))):
        layer = ctx.resources[i]
        hit = (distance >= layer.min_distance) & (ctx.resource_values[i] > layer.min_value)
        index[hit] = i
    return index


def _is_resource(ctx: CellContext) -> NDArray[np.bool_]:
    return _resource_index(ctx) >= 0


def _resource_colors(ctx: CellContext) -> NDArray[np.float64]:
    palette = np.array(
        [layer.color.as_tuple() for layer in ctx.resources] + [(0, 0, 0)],
        dtype=np.float64,
    )
    # -1 selects the trailing placeholder row
    return palette[_resource_index(ctx)]


def _always(ctx: CellContext) -> NDArray[np.bool_]:
    return np.ones(ctx.elevation.shape, dtype=bool)


RULES: tuple[TerrainRule, ...] = (
    TerrainRule(TerrainCategory.ROCK, _is_rock, _fixed(ROCK_COLOR)),
    TerrainRule(
        TerrainCategory.WATER,
        _is_water,
        _linear((10.0, 60.0, 50.0), (20.0, 40.0, 200.0), offset=1.0),
    ),
    TerrainRule(TerrainCategory.BEACH, _is_beach, _fixed(BEACH_COLOR)),
    TerrainRule(
        TerrainCategory.FOREST,
        _is_forest,
        _linear((10.0, 100.0, 10.0), (10.0, 50.0, 20.0)),
    ),
    TerrainRule(TerrainCategory.RESOURCE, _is_resource, _resource_colors),
    TerrainRule(
        TerrainCategory.GRASS,
        _always,
        _linear((10.0, 150.0, 10.0), (10.0, 50.0, 20.0)),
    ),
)


def gradient_magnitude(x: int, y: int, field: NDArray[np.float32]) -> float:
    """Local roughness: summed absolute difference to the four axis neighbours.

    Border cells have roughness 0.
    """
    height, width = field.shape
    if x <= 0 or y <= 0 or x >= width - 1 or y >= height - 1:
        return 0.0

    centre = float(field[y, x])
    return (
        abs(float(field[y - 1, x]) - centre)
        + abs(float(field[y, x + 1]) - centre)
        + abs(float(field[y + 1, x]) - centre)
        + abs(float(field[y, x - 1]) - centre)
    )


def roughness_map(field: NDArray[np.float32]) -> NDArray[np.float64]:
    """Vectorized gradient_magnitude over a whole field."""
    field = field.astype(np.float64)
    roughness = np.zeros(field.shape, dtype=np.float64)

    centre = field[1:-1, 1:-1]
    roughness[1:-1, 1:-1] = (
        np.abs(field[:-2, 1:-1] - centre)
        + np.abs(field[1:-1, 2:] - centre)
        + np.abs(field[2:, 1:-1] - centre)
        + np.abs(field[1:-1, :-2] - centre)
    )
    return roughness


def _check_shapes(
    elevation: NDArray[np.float32],
    tree_cover: NDArray[np.float32] | None,
    resources: Sequence[ResourceLayer],
) -> None:
    if tree_cover is not None and tree_cover.shape != elevation.shape:
        raise DimensionMismatchError(elevation.shape, tree_cover.shape)
    for layer in resources:
        if layer.field.shape != elevation.shape:
            raise DimensionMismatchError(elevation.shape, layer.field.shape)


def _evaluate(ctx: CellContext) -> tuple[NDArray[np.uint8], NDArray[np.uint8]]:
    """Run RULES over a context, returning category codes and RGB colors."""
    n = ctx.elevation.size
    codes = np.zeros(n, dtype=np.uint8)
    colors = np.zeros((n, 3), dtype=np.uint8)
    remaining = np.ones(n, dtype=bool)

    for rule in RULES:
        hit = remaining & rule.matches(ctx)
        if hit.any():
            codes[hit] = rule.category.code
            # Truncate toward zero like an integer cast of each channel
            colors[hit] = np.clip(np.trunc(rule.colors(ctx)[hit]), 0, 255).astype(np.uint8)
            remaining &= ~hit
        if not remaining.any():
            break

    return codes, colors


def _cell_context(
    x: int,
    y: int,
    elevation: NDArray[np.float32],
    tree_cover: NDArray[np.float32] | None,
    resources: Sequence[ResourceLayer],
    centre: Point,
) -> CellContext:
    _check_shapes(elevation, tree_cover, resources)
    height, width = elevation.shape
    if not (0 <= x < width and 0 <= y < height):
        raise InvalidArgumentError(
            f"Cell ({x}, {y}) is outside a {width}x{height} field"
        )
    return CellContext(
        xs=np.array([x], dtype=np.int64),
        ys=np.array([y], dtype=np.int64),
        elevation=np.array([elevation[y, x]], dtype=np.float64),
        roughness=np.array([gradient_magnitude(x, y, elevation)]),
        tree_cover=None if tree_cover is None else np.array([tree_cover[y, x]], dtype=np.float64),
        resources=resources,
        resource_values=np.array(
            [[layer.field[y, x]] for layer in resources], dtype=np.float64
        ).reshape(len(resources), 1),
        reference=centre.halved(),
    )


def classify_category(
    x: int,
    y: int,
    elevation: NDArray[np.float32],
    tree_cover: NDArray[np.float32] | None = None,
    resources: Sequence[ResourceLayer] = (),
    centre: Point = Point(x=0, y=0),
) -> TerrainCategory:
    """Return the terrain category of one cell."""
    codes, _ = _evaluate(_cell_context(x, y, elevation, tree_cover, resources, centre))
    return TerrainCategory.from_code(int(codes[0]))


def classify(
    x: int,
    y: int,
    elevation: NDArray[np.float32],
    tree_cover: NDArray[np.float32] | None = None,
    resources: Sequence[ResourceLayer] = (),
    centre: Point = Point(x=0, y=0),
) -> Color:
    """Return the display color of one cell.

    Args:
        x: Cell x coordinate.
        y: Cell y coordinate.
        elevation: Elevation field in [-1, 1].
        tree_cover: Optional tree-cover field; None means no forest anywhere.
        resources: Resource layers, checked in order.
        centre: Map centre. Resource distances are measured from its
            halved coordinates.

    Returns:
        Color of the first matching rule.

    Raises:
        DimensionMismatchError: If an auxiliary field's shape differs
            from the elevation field's.
        InvalidArgumentError: If (x, y) lies outside the elevation field.
    """
    _, colors = _evaluate(_cell_context(x, y, elevation, tree_cover, resources, centre))
    r, g, b = (int(c) for c in colors[0])
    return Color(r=r, g=g, b=b)


def classify_map(
    elevation: NDArray[np.float32],
    tree_cover: NDArray[np.float32] | None = None,
    resources: Sequence[ResourceLayer] = (),
    centre: Point = Point(x=0, y=0),
) -> tuple[NDArray[np.uint8], NDArray[np.uint8]]:
    """Classify every cell of a map.

    Gives the same result as calling classify on each cell.

    Returns:
        Tuple of (category codes of shape (h, w), colors of shape (h, w, 3)).
    """
    _check_shapes(elevation, tree_cover, resources)
    height, width = elevation.shape
    ys, xs = np.mgrid[0:height, 0:width]

    if resources:
        resource_values = np.stack(
            [layer.field.astype(np.float64).ravel() for layer in resources]
        )
    else:
        resource_values = np.zeros((0, elevation.size), dtype=np.float64)

    ctx = CellContext(
        xs=xs.ravel().astype(np.int64),
        ys=ys.ravel().astype(np.int64),
        elevation=elevation.astype(np.float64).ravel(),
        roughness=roughness_map(elevation).ravel(),
        tree_cover=None if tree_cover is None else tree_cover.astype(np.float64).ravel(),
        resources=resources,
        resource_values=resource_values,
        reference=centre.halved(),
    )
    codes, colors = _evaluate(ctx)
    return codes.reshape(height, width), colors.reshape(height, width, 3)


def grayscale(field: NDArray[np.float32]) -> NDArray[np.uint8]:
    """Map a [-1, 1] field to 0..255 gray levels."""
    levels = (np.clip(field.astype(np.float64), -1.0, 1.0) + 1.0) * 255.0 / 2.0
    return np.trunc(levels).astype(np.uint8)
