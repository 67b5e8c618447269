# MIT License (see LICENSE)
"""
Core value types for the bucket model.

Defines the immutable geometric primitives used throughout:
- Vector2: a 2D point/vector with exact equality and Euclidean distance.
- Dimension2: a width x height extent.

Stacking relies on exact equality of slot coordinates, so both types are
frozen dataclasses compared component-wise rather than with a tolerance.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .util import f64, norm


# =============================================================================
# Points
# =============================================================================

@dataclass(frozen=True)
class Vector2:
    """
    Immutable 2D point in model coordinates.

    Attributes:
        x: Horizontal component.
        y: Vertical component.
    """
    x: float
    y: float

    ZERO: ClassVar[Vector2]

    @classmethod
    def from_array(cls, values: np.ndarray | tuple[float, float]) -> Vector2:
        """Build a point from any length-2 array-like."""
        arr = f64(values)
        return cls(float(arr[0]), float(arr[1]))

    def as_array(self) -> np.ndarray:
        """Return the point as a float64 numpy array of shape (2,)."""
        return f64((self.x, self.y))

    @property
    def magnitude(self) -> float:
        return norm(self.as_array())

    def distance(self, other: Vector2) -> float:
        """Euclidean distance to another point."""
        return norm(self.as_array() - other.as_array())

    def distance_squared(self, other: Vector2) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def plus(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def minus(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def times(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)


Vector2.ZERO = Vector2(0.0, 0.0)


# =============================================================================
# Extents
# =============================================================================

@dataclass(frozen=True)
class Dimension2:
    """
    Width x height extent.

    Attributes:
        width: Horizontal extent in model units.
        height: Vertical extent in model units.
    """
    width: float
    height: float
