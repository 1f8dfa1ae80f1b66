"""
Coordinate Quantization

Converts floating-point (longitude, latitude) pairs into fixed-precision
integer keys so that vertices shared between neighbouring regions compare
exactly equal and can be hashed.

Each axis is multiplied by 10^6 and truncated toward zero, which keeps
about 0.11 m of precision at the equator. Inputs must lie strictly inside
(-180.0, 180.0); anything else raises instead of being clamped, because a
clamped value would make distinct points collide.
"""

import math
from typing import NamedTuple, Tuple

import numpy as np

from .constants import COORDINATE_LIMIT, COORDINATE_SCALE
from .errors import CoordinateOutOfRangeError


class QuantizedCoordinate(NamedTuple):
    x: int
    y: int


def _check_range(value: float) -> None:
    # NaN fails both comparisons
    if not (-COORDINATE_LIMIT < value < COORDINATE_LIMIT):
        raise CoordinateOutOfRangeError(value)


def quantize_scalar(value: float) -> int:
    """Quantize a single axis value."""
    value = float(value)
    _check_range(value)
    return int(math.trunc(value * COORDINATE_SCALE))


def quantize(longitude: float, latitude: float) -> QuantizedCoordinate:
    """
    Quantize one (longitude, latitude) pair.

    Raises:
        CoordinateOutOfRangeError: If either axis is outside (-180, 180).
    """
    return QuantizedCoordinate(quantize_scalar(longitude), quantize_scalar(latitude))


def dequantize(coordinate: Tuple[int, int]) -> Tuple[float, float]:
    """Map a quantized coordinate back to degrees."""
    x, y = coordinate
    return x / COORDINATE_SCALE, y / COORDINATE_SCALE


def quantize_array(coords: np.ndarray) -> np.ndarray:
    """
    Quantize an (n, 2) array of (longitude, latitude) rows.

    Applies the same truncation and range rules as ``quantize`` but in
    bulk, which is how ingestion handles full polygon rings.

    Args:
        coords: Array-like of shape (n, 2). Extra columns (z) are ignored.

    Returns:
        int64 array of shape (n, 2).

    Raises:
        CoordinateOutOfRangeError: For the first value outside the range.
    """
    values = np.asarray(coords, dtype=np.float64)
    if values.ndim != 2 or (values.size and values.shape[1] < 2):
        raise ValueError(f"Expected an (n, 2) coordinate array, got shape {values.shape}")

    values = values[:, :2]
    in_range = (values > -COORDINATE_LIMIT) & (values < COORDINATE_LIMIT)
    if not in_range.all():
        bad = values[~in_range][0]
        raise CoordinateOutOfRangeError(float(bad))

    return np.trunc(values * COORDINATE_SCALE).astype(np.int64)
