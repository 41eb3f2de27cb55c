"""Minimal 3D vector used for waypoints, positions and facing directions."""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Union


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, value: Union["Vector3", Sequence[float]]) -> "Vector3":
        """Coerce a Vector3 or an (x, y, z) sequence into a Vector3."""
        if isinstance(value, Vector3):
            return value
        x, y, z = value
        return cls(float(x), float(y), float(z))

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> "Vector3":
        return Vector3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance_to(self, other: "Vector3") -> float:
        return (other - self).length()

    def normalized(self) -> "Vector3":
        """Unit vector in the same direction; the zero vector stays zero."""
        n = self.length()
        if n == 0:
            return Vector3()
        return Vector3(self.x / n, self.y / n, self.z / n)

    def lerp(self, other: "Vector3", t: float) -> "Vector3":
        """Linear interpolation (t=0 -> self, t=1 -> other)."""
        return Vector3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )

    def is_close(self, other: "Vector3", tol: float = 1e-9) -> bool:
        return self.distance_to(other) <= tol

    def as_tuple(self) -> tuple:
        return (self.x, self.y, self.z)


def to_vectors(points: Iterable[Union[Vector3, Sequence[float]]]) -> list:
    """Convert an iterable of points/tuples into a list of Vector3."""
    return [Vector3.of(p) for p in points]
