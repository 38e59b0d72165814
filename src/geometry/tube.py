# geometry/tube.py
import math
from typing import List, Optional, Tuple

from core.errors import DegenerateGeometryError
from core.ray import Ray
from core.utils import align_zero, is_zero
from core.vector import Point, Vector
from geometry.intersectable import Geometry, Intersection
from geometry.plane import Plane


def lateral_roots(ray: Ray, axis: Ray, radius: float) -> Optional[Tuple[float, float]]:
    """
    Solves |radial distance of ray(t) from the axis line| = radius for t.

    Returns the two roots in increasing order, or None when the ray is
    parallel to the axis, misses the surface or only grazes it.
    """
    v = ray.direction
    va = axis.direction
    vva = v.dot(va)
    a = align_zero(1.0 - vva * vva)
    if a == 0:
        return None

    if ray.head == axis.head:
        dpv = dpva = dp2 = 0.0
    else:
        dp = ray.head - axis.head
        dpv = v.dot(dp)
        dpva = dp.dot(va)
        dp2 = dp.length_squared()

    b = 2.0 * (dpv - vva * dpva)
    c = dp2 - dpva * dpva - radius * radius
    discriminant = align_zero(b * b - 4.0 * a * c)
    if discriminant <= 0:
        return None
    root = math.sqrt(discriminant)
    return (-b - root) / (2.0 * a), (-b + root) / (2.0 * a)


def axial_coordinate(point: Point, axis: Ray) -> float:
    if point == axis.head:
        return 0.0
    return (point - axis.head).dot(axis.direction)


class Tube(Geometry):
    """
    An infinite tube: every point at a fixed distance from an axis line.
    """
    def __init__(self, axis: Ray, radius: float, **kwargs):
        super().__init__(**kwargs)
        if align_zero(radius) <= 0:
            raise DegenerateGeometryError("Tube radius must be positive")
        self.axis = axis
        self.radius = radius

    def get_normal(self, point: Point) -> Vector:
        t = axial_coordinate(point, self.axis)
        o = self.axis.get_point(t)
        return (point - o).normalize()

    def _calculate_intersections(self, ray: Ray,
                                 max_distance: float) -> Optional[List[Intersection]]:
        roots = lateral_roots(ray, self.axis, self.radius)
        if roots is None:
            return None
        hits = [Intersection(self, ray.get_point(t), t)
                for t in roots if self.in_range(t, max_distance)]
        return hits or None

    def __repr__(self) -> str:
        return f"Tube(axis={self.axis}, radius={self.radius})"


class Cylinder(Geometry):
    """
    A finite tube of the given height, closed by two capping disks. The axis
    head is the center of the bottom cap.
    """
    def __init__(self, height: float, axis: Ray, radius: float, **kwargs):
        super().__init__(**kwargs)
        if align_zero(radius) <= 0:
            raise DegenerateGeometryError("Cylinder radius must be positive")
        if align_zero(height) <= 0:
            raise DegenerateGeometryError("Cylinder height must be positive")
        self.axis = axis
        self.radius = radius
        self.height = height
        self._bottom = Plane(axis.head, axis.direction)
        self._top = Plane(axis.get_point(height), axis.direction)

    def get_normal(self, point: Point) -> Vector:
        v = self.axis.direction
        t = axial_coordinate(point, self.axis)
        if align_zero(t) <= 0:
            return -v
        if align_zero(t - self.height) >= 0:
            return v
        return (point - self.axis.get_point(t)).normalize()

    def _calculate_intersections(self, ray: Ray,
                                 max_distance: float) -> Optional[List[Intersection]]:
        hits = []
        roots = lateral_roots(ray, self.axis, self.radius)
        if roots is not None:
            for t in roots:
                if not self.in_range(t, max_distance):
                    continue
                p = ray.get_point(t)
                h = axial_coordinate(p, self.axis)
                if align_zero(h) > 0 and align_zero(h - self.height) < 0:
                    hits.append(Intersection(self, p, t))

        radius_squared = self.radius * self.radius
        for cap in (self._bottom, self._top):
            t = cap.intersect_distance(ray, max_distance)
            if t is None:
                continue
            p = ray.get_point(t)
            # The rim belongs to the boundary and is excluded
            if align_zero(p.distance_squared(cap.point) - radius_squared) < 0:
                hits.append(Intersection(self, p, t))

        if not hits:
            return None
        hits.sort(key=lambda i: i.distance)
        return hits

    def __repr__(self) -> str:
        return f"Cylinder(axis={self.axis}, radius={self.radius}, height={self.height})"
