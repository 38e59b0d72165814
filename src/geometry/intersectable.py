# geometry/intersectable.py
import math
from typing import List, Optional

from core.color import Color
from core.ray import Ray
from core.utils import align_zero
from core.vector import Point, Vector
from materials.material import Material


class Intersection:
    """
    A ray hit: the geometry that was hit, the hit point and its distance from
    the ray head. The geometry is referenced, not owned.
    """
    __slots__ = ("geometry", "point", "distance")

    def __init__(self, geometry: "Geometry", point: Point, distance: Optional[float] = None):
        self.geometry = geometry
        self.point = point
        self.distance = distance

    @property
    def material(self) -> Optional[Material]:
        return None if self.geometry is None else self.geometry.material

    def __eq__(self, other) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.geometry is other.geometry and self.point == other.point

    __hash__ = None

    def __repr__(self) -> str:
        return f"Intersection(geometry={self.geometry!r}, point={self.point}, distance={self.distance})"


class Intersectable:
    """
    Abstract class for anything a ray can intersect.

    A hit at ray parameter t is reported only for t in the half-open
    interval (0, max_distance].
    """
    def calculate_intersections(self, ray: Ray,
                                max_distance: float = math.inf) -> Optional[List[Intersection]]:
        """
        Returns the intersections ordered by increasing distance, or None when
        the ray misses.
        """
        return self._calculate_intersections(ray, max_distance)

    def find_intersections(self, ray: Ray) -> Optional[List[Point]]:
        intersections = self.calculate_intersections(ray)
        if intersections is None:
            return None
        return [i.point for i in intersections]

    def _calculate_intersections(self, ray: Ray,
                                 max_distance: float) -> Optional[List[Intersection]]:
        raise NotImplementedError("_calculate_intersections() must be implemented by subclasses.")

    @staticmethod
    def in_range(t: float, max_distance: float) -> bool:
        return align_zero(t) > 0 and align_zero(t - max_distance) <= 0


class Geometry(Intersectable):
    """
    An intersectable surface with an emission color and a material.
    """
    def __init__(self, emission: Color = Color.BLACK, material: Optional[Material] = None):
        self.emission = emission
        self.material = material if material is not None else Material()

    def get_normal(self, point: Point) -> Vector:
        raise NotImplementedError("get_normal() must be implemented by subclasses.")
