"""Combining and reshaping scalar fields."""

import numpy as np
from numpy.typing import NDArray

from .exceptions import DimensionMismatchError, InvalidArgumentError


def _float_dtype(*fields: NDArray) -> np.dtype:
    """Widest float dtype of the inputs, at least float32."""
    return np.result_type(*fields, np.float32)


def combine(
    a: NDArray[np.float32],
    b: NDArray[np.float32],
    total_weight: float = 1.0,
) -> NDArray[np.float32]:
    """Sum two fields cell by cell and divide by ``total_weight``.

    The result is not clamped and may leave [-1, 1]; follow up with
    apply_contrast or clamp_field where the range matters.

    Args:
        a: First field.
        b: Second field, same shape as ``a``.
        total_weight: Divisor for the sum.

    Returns:
        New field with the wider of the input float dtypes.

    Raises:
        DimensionMismatchError: If the shapes differ.
        InvalidArgumentError: If total_weight is zero.
    """
    if a.shape != b.shape:
        raise DimensionMismatchError(a.shape, b.shape)
    if total_weight == 0:
        raise InvalidArgumentError("total_weight must be non-zero")

    return ((a + b) / total_weight).astype(_float_dtype(a, b), copy=False)


def apply_contrast(
    field: NDArray[np.float32],
    strength: float = 4.0,
) -> NDArray[np.float32]:
    """Map every cell through tanh(strength * value).

    Sharpens land/water boundaries and keeps results inside [-1, 1].
    """
    return np.tanh(strength * field).astype(_float_dtype(field), copy=False)


def clamp_field(field: NDArray[np.float32]) -> NDArray[np.float32]:
    """Clamp a field back into [-1, 1]."""
    return np.clip(field, -1.0, 1.0).astype(_float_dtype(field), copy=False)
