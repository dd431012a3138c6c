"""Immutable 3D vector type used for points, directions and colors.

Every arithmetic operation returns a new vector; instances are never mutated
after construction, so they can be shared freely between worker threads.

Example:
    >>> from pathtracer.core.vector import Vec3
    >>> a = Vec3(1.0, 2.0, 3.0)
    >>> b = Vec3(0.5, 0.5, 0.5)
    >>> (a + b).dot(Vec3(1.0, 0.0, 0.0))
    1.5
"""

from __future__ import annotations

import math
from collections.abc import Iterator


class Vec3:
    """A three-component vector with value semantics.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def splat(cls, value: float) -> Vec3:
        """Create a vector with all three components equal to value."""
        return cls(value, value, value)

    @classmethod
    def of(cls, values: Vec3 | tuple[float, float, float]) -> Vec3:
        """Build a vector from an (x, y, z) tuple, passing vectors through."""
        if isinstance(values, Vec3):
            return values
        x, y, z = values
        return cls(x, y, z)

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, scalar: float) -> Vec3:
        inv = 1.0 / scalar
        return Vec3(self.x * inv, self.y * inv, self.z * inv)

    def dot(self, other: Vec3) -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Cross product self x other."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vec3:
        """Return a unit vector in the same direction.

        A zero-length vector normalizes to the zero vector instead of raising,
        so degenerate camera bases produce zero rays rather than crashing.
        """
        length = self.length()
        if length == 0.0:
            return Vec3(0.0, 0.0, 0.0)
        return self / length

    def near_zero(self, eps: float = 1e-8) -> bool:
        """Check whether every component is within eps of zero."""
        return abs(self.x) < eps and abs(self.y) < eps and abs(self.z) < eps

    # =========================================================================
    # Component-wise helpers
    # =========================================================================

    def min(self, other: Vec3) -> Vec3:
        return Vec3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def max(self, other: Vec3) -> Vec3:
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def clamp(self, lo: float, hi: float) -> Vec3:
        """Clamp every component into [lo, hi]."""
        return Vec3(
            min(max(self.x, lo), hi),
            min(max(self.y, lo), hi),
            min(max(self.z, lo), hi),
        )

    def sqrt(self) -> Vec3:
        """Component-wise square root; negative components map to 0."""
        return Vec3(
            math.sqrt(self.x) if self.x > 0.0 else 0.0,
            math.sqrt(self.y) if self.y > 0.0 else 0.0,
            math.sqrt(self.z) if self.z > 0.0 else 0.0,
        )

    def lerp(self, other: Vec3, t: float) -> Vec3:
        """Linear interpolation: self at t=0, other at t=1."""
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )

    # =========================================================================
    # Python protocol
    # =========================================================================

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vec3({self.x}, {self.y}, {self.z})"


# Colors are linear RGB radiance stored in the same type
Color = Vec3
