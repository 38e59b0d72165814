from geometry.intersectable import Geometry, Intersectable, Intersection
from geometry.plane import Plane
from geometry.sphere import Sphere
from geometry.polygon import Polygon, Triangle
from geometry.tube import Cylinder, Tube
from geometry.geometries import Geometries

__all__ = [
    "Intersection",
    "Intersectable",
    "Geometry",
    "Plane",
    "Sphere",
    "Polygon",
    "Triangle",
    "Tube",
    "Cylinder",
    "Geometries",
]
