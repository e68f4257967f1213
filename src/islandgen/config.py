"""Terrain generation configuration models."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from .types import Color


class NoiseLayerConfig(BaseModel):
    """Parameters for a single gradient noise field."""

    grid_size: int = Field(default=16, gt=0, description="Noise cell size in pixels")
    scale: float = Field(default=1.0, description="Value multiplier before clamping")


class ElevationConfig(BaseModel):
    """Multi-scale elevation compositing parameters."""

    continent: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(grid_size=64, scale=4.0)
    )
    detail: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(grid_size=16, scale=1.0)
    )
    fine: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(grid_size=8, scale=0.25)
    )
    detail_weight: float = Field(
        default=1.25, gt=0, description="Divisor when combining detail and fine layers"
    )
    total_weight: float = Field(
        default=5.0, gt=0, description="Divisor when combining continent with the rest"
    )
    contrast: float = Field(default=4.0, description="tanh contrast strength")


class IslandConfig(BaseModel):
    """Island shaping parameters."""

    enabled: bool = Field(default=True, description="Apply the radial island bump")
    falloff_width: float = Field(
        default=80.0, gt=0, description="Radius scale of the island bump in pixels"
    )


class ForestConfig(BaseModel):
    """Tree-cover field parameters."""

    enabled: bool = Field(default=True, description="Generate a tree-cover field")
    layer: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(grid_size=16, scale=1.0)
    )


class ResourceConfig(BaseModel):
    """One resource deposit type."""

    name: str
    layer: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(grid_size=8, scale=1.0)
    )
    min_distance: int = Field(
        default=0, ge=0, description="Min Manhattan distance from the reference point"
    )
    min_value: float = Field(default=0.5, description="Field value needed for a deposit")
    color: Color


def _default_resources() -> list[ResourceConfig]:
    return [
        ResourceConfig(
            name="iron",
            min_distance=20,
            min_value=0.55,
            color=Color(r=150, g=80, b=60),
        ),
        ResourceConfig(
            name="gold",
            layer=NoiseLayerConfig(grid_size=4, scale=1.0),
            min_distance=60,
            min_value=0.7,
            color=Color(r=230, g=190, b=40),
        ),
    ]


class TerrainConfig(BaseModel):
    """Complete terrain generation configuration."""

    seed: int = Field(default=42, description="Random seed for reproducibility")
    width: int = Field(default=256, gt=0, description="Map width in pixels")
    height: int = Field(default=256, gt=0, description="Map height in pixels")

    elevation: ElevationConfig = Field(default_factory=ElevationConfig)
    island: IslandConfig = Field(default_factory=IslandConfig)
    forest: ForestConfig = Field(default_factory=ForestConfig)
    resources: list[ResourceConfig] = Field(default_factory=_default_resources)


def load_config(config_path: Path) -> TerrainConfig:
    """Load terrain configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed TerrainConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If values fail validation.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return TerrainConfig.model_validate(data)
