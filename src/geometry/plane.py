# geometry/plane.py
import math
from typing import List, Optional

from core.errors import DegenerateGeometryError
from core.ray import Ray
from core.utils import align_zero, is_zero
from core.vector import Point, Vector
from geometry.intersectable import Geometry, Intersection


class Plane(Geometry):
    """
    An infinite plane defined by a point on it and a unit normal.
    """
    def __init__(self, point: Point, normal: Vector, **kwargs):
        super().__init__(**kwargs)
        self.point = point
        self.normal = normal.normalize()

    @classmethod
    def from_points(cls, p1: Point, p2: Point, p3: Point, **kwargs) -> "Plane":
        """
        Builds the plane through three points. The points must be distinct and
        not collinear.
        """
        if p1 == p2 or p1 == p3 or p2 == p3:
            raise DegenerateGeometryError("Two or more points are identical")
        v1 = p2 - p1
        v2 = p3 - p1
        nx = v1.y * v2.z - v1.z * v2.y
        ny = v1.z * v2.x - v1.x * v2.z
        nz = v1.x * v2.y - v1.y * v2.x
        if is_zero(math.sqrt(nx * nx + ny * ny + nz * nz)):
            raise DegenerateGeometryError("Points are collinear and do not form a plane")
        return cls(p1, Vector(nx, ny, nz), **kwargs)

    def get_normal(self, point: Optional[Point] = None) -> Vector:
        return self.normal

    def intersect_distance(self, ray: Ray, max_distance: float = math.inf) -> Optional[float]:
        """
        Returns the ray parameter of the hit, or None.
        """
        if self.point == ray.head:
            return None
        denominator = align_zero(self.normal.dot(ray.direction))
        if denominator == 0:
            return None
        t = align_zero(self.normal.dot(self.point - ray.head) / denominator)
        if not self.in_range(t, max_distance):
            return None
        return t

    def _calculate_intersections(self, ray: Ray,
                                 max_distance: float) -> Optional[List[Intersection]]:
        t = self.intersect_distance(ray, max_distance)
        if t is None:
            return None
        return [Intersection(self, ray.get_point(t), t)]

    def __repr__(self) -> str:
        return f"Plane(point={self.point}, normal={self.normal})"
