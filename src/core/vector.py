# core/vector.py
import math
from typing import Tuple

from core.errors import DegenerateVectorError
from core.utils import is_zero


class Point:
    """
    An immutable point in 3D space.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float):
        object.__setattr__(self, "x", float(x))
        object.__setattr__(self, "y", float(y))
        object.__setattr__(self, "z", float(z))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def add(self, vector: "Vector") -> "Point":
        return Point(self.x + vector.x, self.y + vector.y, self.z + vector.z)

    def subtract(self, other: "Point") -> "Vector":
        """
        Returns the vector pointing from other to this point.
        Raises DegenerateVectorError when the points coincide.
        """
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def distance_squared(self, other: "Point") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def distance(self, other: "Point") -> float:
        return math.sqrt(self.distance_squared(other))

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, vector: "Vector") -> "Point":
        return self.add(vector)

    def __sub__(self, other: "Point") -> "Vector":
        return self.subtract(other)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Point):
            return NotImplemented
        return (is_zero(self.x - other.x)
                and is_zero(self.y - other.y)
                and is_zero(self.z - other.z))

    # Tolerant equality admits no consistent hash
    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x}, {self.y}, {self.z})"


class Vector(Point):
    """
    A non-zero direction in 3D space. Any operation whose result would be the
    zero vector raises DegenerateVectorError.
    """
    __slots__ = ()

    def __init__(self, x: float, y: float, z: float):
        if is_zero(x) and is_zero(y) and is_zero(z):
            raise DegenerateVectorError("Vector cannot be the zero vector")
        super().__init__(x, y, z)

    def add(self, vector: "Vector") -> "Vector":
        return Vector(self.x + vector.x, self.y + vector.y, self.z + vector.z)

    def scale(self, scalar: float) -> "Vector":
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector") -> "Vector":
        """
        Raises DegenerateVectorError for parallel vectors.
        """
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> "Vector":
        l = self.length()
        if is_zero(l):
            raise DegenerateVectorError("Cannot normalize a zero-length vector")
        return Vector(self.x / l, self.y / l, self.z / l)

    def __add__(self, other: "Vector") -> "Vector":
        return self.add(other)

    def __mul__(self, scalar: float) -> "Vector":
        return self.scale(scalar)

    def __rmul__(self, scalar: float) -> "Vector":
        return self.scale(scalar)

    def __truediv__(self, scalar: float) -> "Vector":
        return self.scale(1.0 / scalar)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z)


Point.ZERO = Point(0, 0, 0)
Vector.AXIS_X = Vector(1, 0, 0)
Vector.AXIS_Y = Vector(0, 1, 0)
Vector.AXIS_Z = Vector(0, 0, 1)
