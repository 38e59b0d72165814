# geometry/sphere.py
import math
from typing import List, Optional

from core.errors import DegenerateGeometryError
from core.ray import Ray
from core.utils import align_zero, is_zero
from core.vector import Point, Vector
from geometry.intersectable import Geometry, Intersection


class Sphere(Geometry):
    """
    Represents a sphere defined by its center and radius.
    """
    def __init__(self, center: Point, radius: float, **kwargs):
        super().__init__(**kwargs)
        if align_zero(radius) <= 0:
            raise DegenerateGeometryError("Sphere radius must be positive")
        self.center = center
        self.radius = radius

    def get_normal(self, point: Point) -> Vector:
        return (point - self.center).normalize()

    def _calculate_intersections(self, ray: Ray,
                                 max_distance: float) -> Optional[List[Intersection]]:
        p0 = ray.head
        v = ray.direction

        # Head at the center: exactly one hit, one radius away
        if self.center == p0:
            if not self.in_range(self.radius, max_distance):
                return None
            return [Intersection(self, ray.get_point(self.radius), self.radius)]

        u = self.center - p0
        tm = align_zero(v.dot(u))
        d_squared = align_zero(u.length_squared() - tm * tm)
        radius_squared = self.radius * self.radius
        if d_squared > radius_squared:
            return None

        th = math.sqrt(radius_squared - d_squared)
        # A tangent ray touches the boundary only and is not a hit
        if is_zero(th):
            return None

        hits = []
        for t in (align_zero(tm - th), align_zero(tm + th)):
            if self.in_range(t, max_distance):
                hits.append(Intersection(self, ray.get_point(t), t))
        return hits or None

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"
