# core/ray.py
from typing import TYPE_CHECKING, List, Optional, Sequence

from core.utils import align_zero, is_zero
from core.vector import Point, Vector

if TYPE_CHECKING:
    from geometry.intersectable import Intersection

# Head shift for secondary rays leaving a surface
DELTA = 0.1


class Ray:
    """
    Represents a ray in 3D space with a head point and a unit direction.
    """
    __slots__ = ("head", "direction")

    def __init__(self, head: Point, direction: Vector):
        object.__setattr__(self, "head", head)
        object.__setattr__(self, "direction", direction.normalize())

    def __setattr__(self, name, value):
        raise AttributeError("Ray is immutable")

    @classmethod
    def offset(cls, point: Point, direction: Vector, normal: Vector) -> "Ray":
        """
        Builds a secondary ray whose head is moved off the surface by DELTA
        along the normal, on the side the direction points to.
        """
        nv = align_zero(normal.dot(direction))
        if nv == 0:
            return cls(point, direction)
        return cls(point + normal * (DELTA if nv > 0 else -DELTA), direction)

    def get_point(self, t: float) -> Point:
        """
        Returns the point along the ray at parameter t.
        """
        if is_zero(t):
            return self.head
        return self.head + self.direction * t

    def find_closest_point(self, points: Optional[Sequence[Point]]) -> Optional[Point]:
        if not points:
            return None
        closest = None
        min_distance = float("inf")
        for p in points:
            d = self.head.distance_squared(p)
            if d < min_distance:
                min_distance = d
                closest = p
        return closest

    def find_closest_intersection(
            self, intersections: Optional[List["Intersection"]]) -> Optional["Intersection"]:
        """
        Returns the intersection nearest to the ray head, or None for an empty
        candidate set. Equal distances keep the first candidate.
        """
        if not intersections:
            return None
        closest = None
        min_distance = float("inf")
        for intersection in intersections:
            d = intersection.distance
            if d is None:
                d = self.head.distance(intersection.point)
            if 0 <= d < min_distance:
                min_distance = d
                closest = intersection
        return closest

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ray):
            return NotImplemented
        return self.head == other.head and self.direction == other.direction

    __hash__ = None

    def __repr__(self) -> str:
        return f"Ray(head={self.head}, direction={self.direction})"
