"""Tests for gradient noise sampling."""

import numpy as np
import pytest

from islandgen.exceptions import InvalidArgumentError
from islandgen.gradients import generate_gradient_grid, gradient_grid_shape
from islandgen.noise import (
    corner_dot_products,
    ease_lerp,
    generate_field,
    sample,
    sample_grid,
)


class TestEaseLerp:
    """Tests for the smoothstep blend."""

    def test_endpoints(self) -> None:
        """w=0 gives a0 and w=1 gives a1."""
        assert ease_lerp(2.0, 5.0, 0.0) == 2.0
        assert ease_lerp(2.0, 5.0, 1.0) == 5.0

    def test_midpoint(self) -> None:
        """w=0.5 gives the plain average."""
        assert ease_lerp(0.0, 1.0, 0.5) == 0.5

    def test_flat_at_endpoints(self) -> None:
        """Slope vanishes near both endpoints."""
        eps = 1e-4
        assert abs(ease_lerp(0.0, 1.0, eps) - 0.0) < 1e-6
        assert abs(ease_lerp(0.0, 1.0, 1.0 - eps) - 1.0) < 1e-6


class TestCornerDotProducts:
    """Tests for per-corner contributions."""

    def test_aligned_corner_contributes_zero(self, rng: np.random.Generator) -> None:
        """A pixel on a grid corner gets zero from that corner."""
        grid_size = 8
        gradients = generate_gradient_grid(6, 6, rng)
        for k, j in [(0, 0), (1, 2), (3, 3)]:
            northwest, _, _, _ = corner_dot_products(
                k * grid_size, j * grid_size, grid_size, gradients
            )
            assert northwest == 0.0

    def test_offset_is_corner_minus_pixel(self) -> None:
        """Gradient (1, 0) dots the x offset from pixel to corner."""
        gradients = np.zeros((3, 3, 2), dtype=np.float32)
        gradients[..., 0] = 1.0
        northwest, northeast, southwest, southeast = corner_dot_products(
            1, 1, 4, gradients
        )
        assert northwest == -1.0
        assert northeast == 3.0
        assert southwest == -1.0
        assert southeast == 3.0

    def test_out_of_range_rejected(self, rng: np.random.Generator) -> None:
        """Pixels whose corners leave the grid are rejected."""
        gradients = generate_gradient_grid(3, 3, rng)
        with pytest.raises(InvalidArgumentError):
            corner_dot_products(8, 0, 4, gradients)
        with pytest.raises(InvalidArgumentError):
            corner_dot_products(-1, 0, 4, gradients)


class TestSample:
    """Tests for single-pixel sampling."""

    def test_zero_on_grid_corners(self, rng: np.random.Generator) -> None:
        """Noise is exactly zero on every grid corner."""
        gradients = generate_gradient_grid(6, 6, rng)
        for k in range(4):
            for j in range(4):
                assert sample(k * 16, j * 16, 16, gradients) == 0.0

    def test_range(self, rng: np.random.Generator) -> None:
        """Samples stay in [-1, 1] even with large scale."""
        gradients = generate_gradient_grid(6, 6, rng)
        for scale in (0.25, 1.0, 4.0, 100.0):
            for x in range(0, 32, 3):
                for y in range(0, 32, 5):
                    value = sample(x, y, 8, gradients, scale)
                    assert -1.0 <= value <= 1.0

    def test_matches_sample_grid(self, rng: np.random.Generator) -> None:
        """Scalar and vectorized sampling agree."""
        gradients = generate_gradient_grid(6, 6, rng)
        ys, xs = np.mgrid[0:20, 0:20]
        grid = sample_grid(xs, ys, 5, gradients, 2.0)
        for x, y in [(0, 0), (3, 7), (19, 19), (11, 4)]:
            assert sample(x, y, 5, gradients, 2.0) == grid[y, x]

    def test_scale_multiplies(self, rng: np.random.Generator) -> None:
        """Doubling scale doubles unclamped values."""
        gradients = generate_gradient_grid(6, 6, rng)
        base = sample(5, 3, 8, gradients, 0.1)
        doubled = sample(5, 3, 8, gradients, 0.2)
        assert doubled == pytest.approx(2 * base, rel=1e-5)


class TestGenerateField:
    """Tests for whole-field generation."""

    def test_output_shape(self, rng: np.random.Generator) -> None:
        """Output is (height, width)."""
        field = generate_field(30, 20, 8, rng=rng)
        assert field.shape == (20, 30)

    def test_output_dtype(self, rng: np.random.Generator) -> None:
        """Output is float32."""
        field = generate_field(16, 16, 4, rng=rng)
        assert field.dtype == np.float32

    def test_output_range(self, rng: np.random.Generator) -> None:
        """Every value lies in [-1, 1]."""
        field = generate_field(64, 64, 8, scale=4.0, rng=rng)
        assert field.min() >= -1.0
        assert field.max() <= 1.0

    def test_deterministic_with_same_seed(self) -> None:
        """Same seed produces bitwise-identical 4x4 fields."""
        field1 = generate_field(4, 4, 4, 1.0, rng=np.random.default_rng(42))
        field2 = generate_field(4, 4, 4, 1.0, rng=np.random.default_rng(42))
        np.testing.assert_array_equal(field1, field2)

    def test_int_seed_matches_generator(self) -> None:
        """An int seed behaves like a Generator seeded with it."""
        field1 = generate_field(24, 16, 8, 1.0, rng=42)
        field2 = generate_field(24, 16, 8, 1.0, rng=np.random.default_rng(42))
        np.testing.assert_array_equal(field1, field2)

    def test_different_seed_different_output(self) -> None:
        """Different seeds produce different output."""
        field1 = generate_field(32, 32, 8, rng=1)
        field2 = generate_field(32, 32, 8, rng=2)
        assert not np.allclose(field1, field2)

    def test_grid_corners_are_zero(self) -> None:
        """Pixels on grid corners are zero."""
        field = generate_field(32, 32, 8, rng=3)
        np.testing.assert_array_equal(field[::8, ::8], 0.0)

    def test_smooth_between_neighbours(self) -> None:
        """Neighbouring pixels differ by a small amount on average."""
        field = generate_field(64, 64, 16, rng=5)
        assert np.abs(np.diff(field, axis=1)).mean() < 0.1
        assert np.abs(np.diff(field, axis=0)).mean() < 0.1

    def test_uses_grid_sized_for_field(self) -> None:
        """Gradient draws match a grid of gradient_grid_shape size."""
        rows, cols = gradient_grid_shape(20, 12, 8)
        gradients = generate_gradient_grid(cols, rows, 9)
        ys, xs = np.mgrid[0:12, 0:20]
        expected = sample_grid(xs, ys, 8, gradients)
        np.testing.assert_array_equal(generate_field(20, 12, 8, rng=9), expected)

    @pytest.mark.parametrize("args", [(0, 4, 4), (4, 0, 4), (4, 4, 0), (4, 4, -2)])
    def test_invalid_dimensions(self, args: tuple[int, int, int]) -> None:
        """Non-positive dimensions raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            generate_field(*args, rng=0)

    def test_invalid_argument_is_value_error(self) -> None:
        """Precondition violations are ValueErrors too."""
        with pytest.raises(ValueError):
            generate_field(0, 4, 4, rng=0)

    def test_random_source_required(self) -> None:
        """Omitting the random source is an error, not fresh entropy."""
        with pytest.raises(TypeError):
            generate_field(8, 8, 4)  # type: ignore[call-arg]
