"""Core value types for terrain generation."""

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel, Field


class Point(BaseModel, frozen=True):
    """Immutable integer grid coordinate."""

    x: int
    y: int

    def halved(self) -> "Point":
        """Return the point with both coordinates integer-halved."""
        return Point(x=self.x // 2, y=self.y // 2)

    def manhattan(self, x: ArrayLike, y: ArrayLike) -> NDArray[np.int64]:
        """Manhattan distance from this point to (x, y), elementwise."""
        return np.abs(np.asarray(x) - self.x) + np.abs(np.asarray(y) - self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Color(BaseModel, frozen=True):
    """RGB color with 8-bit channels."""

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


class TerrainCategory(str, Enum):
    """Visual terrain categories, in classification priority order."""

    ROCK = "rock"
    WATER = "water"
    BEACH = "beach"
    FOREST = "forest"
    RESOURCE = "resource"
    GRASS = "grass"

    @property
    def code(self) -> int:
        """Compact uint8 code used in category maps."""
        return _CATEGORY_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "TerrainCategory":
        return _CODE_CATEGORIES[code]


_CATEGORY_CODES = {category: i for i, category in enumerate(TerrainCategory)}
_CODE_CATEGORIES = {i: category for category, i in _CATEGORY_CODES.items()}


@dataclass(frozen=True, eq=False)
class ResourceLayer:
    """An auxiliary noise field scattering one deposit type.

    A cell shows the deposit when its Manhattan distance from the reference
    point is at least ``min_distance`` and the field value there exceeds
    ``min_value``.
    """

    name: str
    field: NDArray[np.float32]
    min_distance: int
    min_value: float
    color: Color
