"""Custom exceptions for terrain generation."""


class TerrainError(Exception):
    """Base exception for terrain generation errors."""

    pass


class InvalidArgumentError(TerrainError, ValueError):
    """Raised when a generation parameter violates its precondition."""

    pass


class DimensionMismatchError(TerrainError, ValueError):
    """Raised when two fields that must share a shape do not."""

    def __init__(self, shape_a: tuple[int, ...], shape_b: tuple[int, ...]):
        self.shape_a = shape_a
        self.shape_b = shape_b
        super().__init__(
            "The given inputs were not the same dimensions. "
            f"A: {_format_shape(shape_a)}, B: {_format_shape(shape_b)}"
        )


def _format_shape(shape: tuple[int, ...]) -> str:
    """Format a (height, width) array shape as WIDTHxHEIGHT."""
    if len(shape) == 2:
        return f"{shape[1]}x{shape[0]}"
    return "x".join(str(n) for n in shape)


def require_positive(name: str, value: float) -> None:
    """Raise InvalidArgumentError unless value is strictly positive."""
    if not value > 0:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")
