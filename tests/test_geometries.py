"""Unit tests for the geometries aggregate."""

import pytest

from core.ray import Ray
from core.vector import Point, Vector
from geometry import Geometries, Plane, Sphere, Triangle


@pytest.fixture
def collection():
    return Geometries(
        Sphere(Point(0, 0, -5), 1),
        Plane(Point(0, 0, -10), Vector(0, 0, 1)),
        Triangle(Point(-1, -1, -3), Point(1, -1, -3), Point(0, 1, -3)),
    )


class TestGeometries:
    def test_empty_collection_returns_none(self):
        assert Geometries().find_intersections(Ray(Point(0, 0, 0), Vector(0, 0, -1))) is None

    def test_no_member_hit_returns_none(self, collection):
        assert collection.find_intersections(Ray(Point(0, 0, 0), Vector(0, 0, 1))) is None

    def test_some_members_hit(self, collection):
        result = collection.find_intersections(Ray(Point(5, 0, 0), Vector(0, 0, -1)))
        assert result == [Point(5, 0, -10)]

    def test_all_members_hit(self, collection):
        result = collection.calculate_intersections(Ray(Point(0, 0, 0), Vector(0, 0, -1)))
        assert len(result) == 4

    def test_closest_comes_from_triangle(self, collection):
        ray = Ray(Point(0, 0, 0), Vector(0, 0, -1))
        closest = ray.find_closest_intersection(collection.calculate_intersections(ray))
        assert isinstance(closest.geometry, Triangle)
        assert closest.point == Point(0, 0, -3)

    def test_max_distance_applies_to_members(self, collection):
        result = collection.calculate_intersections(Ray(Point(0, 0, 0), Vector(0, 0, -1)), 6)
        assert sorted(i.distance for i in result) == pytest.approx([3, 4, 6])

    def test_add_and_len(self):
        g = Geometries()
        g.add(Sphere(Point(0, 0, 0), 1), Sphere(Point(3, 0, 0), 1))
        assert len(g) == 2
        assert all(isinstance(item, Sphere) for item in g)
