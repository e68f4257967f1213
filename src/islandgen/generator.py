"""Main terrain generation orchestration."""

import numpy as np
import structlog
from numpy.typing import NDArray

from .classification import classify_map
from .compositing import apply_contrast, combine
from .config import ElevationConfig, NoiseLayerConfig, TerrainConfig
from .island import shape_island
from .noise import generate_field
from .types import Point, ResourceLayer, TerrainCategory

logger = structlog.get_logger()


class GenerationResult:
    """Result of terrain generation with all intermediate fields."""

    def __init__(
        self,
        config: TerrainConfig,
        centre: Point,
        elevation: NDArray[np.float32],
        tree_cover: NDArray[np.float32] | None,
        resources: list[ResourceLayer],
        categories: NDArray[np.uint8],
        colors: NDArray[np.uint8],
    ):
        self.config = config
        self.centre = centre
        self.elevation = elevation
        self.tree_cover = tree_cover
        self.resources = resources
        self.categories = categories
        self.colors = colors


def _layer(
    width: int,
    height: int,
    layer: NoiseLayerConfig,
    rng: np.random.Generator,
) -> NDArray[np.float32]:
    return generate_field(width, height, layer.grid_size, layer.scale, rng=rng)


def build_elevation(
    width: int,
    height: int,
    config: ElevationConfig,
    rng: np.random.Generator | int,
) -> NDArray[np.float32]:
    """Composite continent, detail and fine noise into one elevation field.

    Detail and fine layers are combined first, then averaged in with the
    continent layer, and the sum is passed through tanh contrast.

    Args:
        width: Map width.
        height: Map height.
        config: Elevation compositing parameters.
        rng: Random source, or a seed for a new one.

    Returns:
        2D float32 elevation in [-1, 1].
    """
    rng = np.random.default_rng(rng)

    continent = _layer(width, height, config.continent, rng)
    detail = _layer(width, height, config.detail, rng)
    fine = _layer(width, height, config.fine, rng)

    elevation = combine(detail, fine, config.detail_weight)
    elevation = combine(continent, elevation, config.total_weight)
    return apply_contrast(elevation, config.contrast)


def generate_terrain(config: TerrainConfig) -> GenerationResult:
    """Generate a complete classified terrain map.

    All fields are drawn from one Generator seeded with ``config.seed`` in
    a fixed order (elevation layers, tree cover, resources), so a seed
    reproduces the whole map.

    Args:
        config: Terrain generation configuration.

    Returns:
        GenerationResult with fields, category map and color map.
    """
    rng = np.random.default_rng(config.seed)
    width, height = config.width, config.height
    centre = Point(x=width // 2, y=height // 2)

    logger.info("terrain_generation_started", width=width, height=height, seed=config.seed)

    logger.debug("building_elevation")
    elevation = build_elevation(width, height, config.elevation, rng)

    if config.island.enabled:
        logger.debug("shaping_island", centre=str(centre), falloff_width=config.island.falloff_width)
        elevation = shape_island(elevation, centre, config.island.falloff_width)

    tree_cover = None
    if config.forest.enabled:
        logger.debug("generating_tree_cover")
        tree_cover = _layer(width, height, config.forest.layer, rng)

    resources: list[ResourceLayer] = []
    for resource in config.resources:
        logger.debug("generating_resource_layer", name=resource.name)
        resources.append(
            ResourceLayer(
                name=resource.name,
                field=_layer(width, height, resource.layer, rng),
                min_distance=resource.min_distance,
                min_value=resource.min_value,
                color=resource.color,
            )
        )

    logger.debug("classifying_terrain")
    categories, colors = classify_map(elevation, tree_cover, resources, centre)

    result = GenerationResult(
        config=config,
        centre=centre,
        elevation=elevation,
        tree_cover=tree_cover,
        resources=resources,
        categories=categories,
        colors=colors,
    )
    _log_terrain_stats(result)
    return result


def terrain_stats(result: GenerationResult) -> dict[TerrainCategory, int]:
    """Count cells per terrain category."""
    codes, counts = np.unique(result.categories, return_counts=True)
    stats = {category: 0 for category in TerrainCategory}
    for code, count in zip(codes, counts):
        stats[TerrainCategory.from_code(int(code))] = int(count)
    return stats


def _log_terrain_stats(result: GenerationResult) -> None:
    total = result.categories.size
    stats = terrain_stats(result)
    logger.info(
        "terrain_generation_complete",
        cells=total,
        **{
            category.value: f"{count / total:.1%}"
            for category, count in stats.items()
        },
    )
