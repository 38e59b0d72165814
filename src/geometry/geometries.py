# geometry/geometries.py
import math
from typing import Iterator, List, Optional

from core.ray import Ray
from geometry.intersectable import Intersectable, Intersection


class Geometries(Intersectable):
    """
    An unordered collection of intersectables, scanned linearly.
    """
    def __init__(self, *objects: Intersectable):
        self.objects: List[Intersectable] = []
        self.add(*objects)

    def add(self, *objects: Intersectable) -> "Geometries":
        self.objects.extend(objects)
        return self

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Intersectable]:
        return iter(self.objects)

    def _calculate_intersections(self, ray: Ray,
                                 max_distance: float = math.inf) -> Optional[List[Intersection]]:
        # None, not an empty list, when nothing is hit
        result = None
        for obj in self.objects:
            hits = obj.calculate_intersections(ray, max_distance)
            if hits is not None:
                if result is None:
                    result = []
                result.extend(hits)
        return result
