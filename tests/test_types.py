"""Tests for core value types."""

import numpy as np

from islandgen.types import Point, TerrainCategory


class TestPoint:
    """Tests for Point."""

    def test_halved(self) -> None:
        """Halving uses integer division."""
        assert Point(x=9, y=8).halved() == Point(x=4, y=4)

    def test_manhattan_scalar(self) -> None:
        """Distance sums axis offsets."""
        assert Point(x=4, y=4).manhattan(1, 6) == 5

    def test_manhattan_elementwise(self) -> None:
        """Arrays of coordinates give an array of distances."""
        distances = Point(x=4, y=4).manhattan(np.array([4, 6, 1]), np.array([4, 5, 4]))
        np.testing.assert_array_equal(distances, [0, 3, 3])


class TestTerrainCategory:
    """Tests for category codes."""

    def test_codes_round_trip(self) -> None:
        """from_code inverts code."""
        for category in TerrainCategory:
            assert TerrainCategory.from_code(category.code) == category

    def test_codes_unique(self) -> None:
        """Each category has its own code."""
        codes = [category.code for category in TerrainCategory]
        assert len(codes) == len(set(codes))
