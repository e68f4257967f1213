"""Procedural island terrain generation.

Gradient noise fields are composited into an elevation map, shaped into an
island, and classified into terrain and resource colors.
"""

from .classification import (
    RULES,
    classify,
    classify_category,
    classify_map,
    gradient_magnitude,
    grayscale,
    roughness_map,
)
from .compositing import apply_contrast, clamp_field, combine
from .config import (
    ElevationConfig,
    ForestConfig,
    IslandConfig,
    NoiseLayerConfig,
    ResourceConfig,
    TerrainConfig,
    load_config,
)
from .exceptions import DimensionMismatchError, InvalidArgumentError, TerrainError
from .generator import GenerationResult, build_elevation, generate_terrain, terrain_stats
from .gradients import generate_gradient_grid, gradient_grid_shape
from .island import radial_altitude, shape_island
from .noise import corner_dot_products, ease_lerp, generate_field, sample, sample_grid
from .types import Color, Point, ResourceLayer, TerrainCategory

__all__ = [
    # Types
    "Color",
    "Point",
    "ResourceLayer",
    "TerrainCategory",
    # Noise
    "corner_dot_products",
    "ease_lerp",
    "generate_field",
    "generate_gradient_grid",
    "gradient_grid_shape",
    "sample",
    "sample_grid",
    # Compositing
    "apply_contrast",
    "clamp_field",
    "combine",
    # Island
    "radial_altitude",
    "shape_island",
    # Classification
    "RULES",
    "classify",
    "classify_category",
    "classify_map",
    "gradient_magnitude",
    "grayscale",
    "roughness_map",
    # Generation
    "GenerationResult",
    "build_elevation",
    "generate_terrain",
    "terrain_stats",
    # Config
    "ElevationConfig",
    "ForestConfig",
    "IslandConfig",
    "NoiseLayerConfig",
    "ResourceConfig",
    "TerrainConfig",
    "load_config",
    # Exceptions
    "DimensionMismatchError",
    "InvalidArgumentError",
    "TerrainError",
]
