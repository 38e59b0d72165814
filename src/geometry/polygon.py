# geometry/polygon.py
from typing import List, Optional

from core.errors import DegenerateGeometryError, DegenerateVectorError
from core.ray import Ray
from core.utils import align_zero, is_zero
from core.vector import Point, Vector
from geometry.intersectable import Geometry, Intersection
from geometry.plane import Plane


class Polygon(Geometry):
    """
    A convex planar polygon. Vertices must be coplanar and ordered along the
    boundary; this is checked once, at construction.

    Hits on an edge or a vertex are boundary cases and are not reported.
    """
    def __init__(self, *vertices: Point, **kwargs):
        super().__init__(**kwargs)
        if len(vertices) < 3:
            raise DegenerateGeometryError("A polygon can't have less than 3 vertices")
        self.vertices = tuple(vertices)
        self.plane = Plane.from_points(vertices[0], vertices[1], vertices[2])
        size = len(vertices)
        if size == 3:
            return

        n = self.plane.normal
        try:
            edge1 = vertices[size - 1] - vertices[size - 2]
            edge2 = vertices[0] - vertices[size - 1]
            # The winding is fixed by the turn between the last and first
            # edges; every other turn must agree with it
            positive = edge1.cross(edge2).dot(n) > 0
            for i in range(1, size):
                if not is_zero((vertices[i] - vertices[0]).dot(n)):
                    raise DegenerateGeometryError("All vertices of a polygon must lay in the same plane")
                edge1 = edge2
                edge2 = vertices[i] - vertices[i - 1]
                if positive != (edge1.cross(edge2).dot(n) > 0):
                    raise DegenerateGeometryError("All vertices must be ordered and the polygon must be convex")
        except DegenerateVectorError as e:
            raise DegenerateGeometryError(
                "Polygon vertices must be distinct and consecutive edges not collinear") from e

    def get_normal(self, point: Optional[Point] = None) -> Vector:
        return self.plane.normal

    def _calculate_intersections(self, ray: Ray,
                                 max_distance: float) -> Optional[List[Intersection]]:
        t = self.plane.intersect_distance(ray, max_distance)
        if t is None:
            return None
        p = ray.get_point(t)

        for vertex in self.vertices:
            if vertex == p:
                return None

        n = self.plane.normal
        size = len(self.vertices)
        sign = 0
        for i in range(size):
            v1 = self.vertices[i] - p
            v2 = self.vertices[(i + 1) % size] - p
            # Collinear with the edge line: on the edge or on its continuation
            if is_zero(abs(v1.normalize().dot(v2.normalize())) - 1):
                return None
            s = align_zero(_triple_product(n, v1, v2))
            if s == 0:
                return None
            if sign == 0:
                sign = 1 if s > 0 else -1
            elif (s > 0) != (sign > 0):
                return None

        return [Intersection(self, p, t)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self.vertices}"


def _triple_product(n: Vector, a: Vector, b: Vector) -> float:
    # n . (a x b), without building the (possibly zero) cross vector
    return (n.x * (a.y * b.z - a.z * b.y)
            + n.y * (a.z * b.x - a.x * b.z)
            + n.z * (a.x * b.y - a.y * b.x))


class Triangle(Polygon):
    """
    A polygon with three vertices.
    """
    def __init__(self, p1: Point, p2: Point, p3: Point, **kwargs):
        super().__init__(p1, p2, p3, **kwargs)
