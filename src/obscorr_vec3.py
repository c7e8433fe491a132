"""
Cartesian 3-vector used for observatory positions and velocities.

Positions and velocities are carried in whichever frame and unit the
caller chooses (BCRS, AU or metres, AU/day or metres/second); the vector
itself is unit agnostic. In-place operators mutate only the receiver.
"""

import math
from typing import Sequence

import numpy as np


class Vector3:
    """Fixed-size 3-component vector with in-place add/scale and dot product."""

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Vector3":
        """Build from the first three elements of a sequence or numpy array."""
        return cls(values[0], values[1], values[2])

    @classmethod
    def from_spherical(cls, longitude: float, latitude: float) -> "Vector3":
        """
        Unit vector pointing to the spherical position (longitude, latitude).

        Args:
            longitude: Longitude-like angle (e.g. RA) in radians
            latitude: Latitude-like angle (e.g. Dec) in radians

        Returns:
            Unit direction vector
        """
        cos_lat = math.cos(latitude)
        return cls(math.cos(longitude) * cos_lat,
                   math.sin(longitude) * cos_lat,
                   math.sin(latitude))

    def __iadd__(self, other: "Vector3") -> "Vector3":
        self.x += other.x
        self.y += other.y
        self.z += other.z
        return self

    def __imul__(self, scale: float) -> "Vector3":
        self.x *= scale
        self.y *= scale
        self.z *= scale
        return self

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    def __repr__(self) -> str:
        return f"Vector3({self.x!r}, {self.y!r}, {self.z!r})"


def dot(a: Vector3, b: Vector3) -> float:
    """Scalar product of two vectors."""
    return a.dot(b)
