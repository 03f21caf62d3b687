"""Integer 3D vectors used for beacon positions and scanner offsets."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Vector:
    """
    Exact integer point/offset in 3D space.

    Frozen, so vectors can be stored in sets and used as dictionary keys.
    """
    x: int
    y: int
    z: int

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __add__(self, other):
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self):
        return Vector(-self.x, -self.y, -self.z)

    def manhattan_length(self):
        """Sum of the absolute components."""
        return abs(self.x) + abs(self.y) + abs(self.z)

    def manhattan_distance(self, other):
        return (self - other).manhattan_length()

    def __str__(self):
        return f"{self.x},{self.y},{self.z}"


ZERO = Vector(0, 0, 0)
