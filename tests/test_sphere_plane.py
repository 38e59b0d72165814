"""Unit tests for sphere and plane intersections and normals."""

import math

import pytest

from core.errors import DegenerateGeometryError
from core.ray import Ray
from core.vector import Point, Vector
from geometry import Plane, Sphere


@pytest.fixture
def unit_sphere():
    return Sphere(Point(1, 0, 0), 1)


class TestSphere:
    def test_normal(self, unit_sphere):
        assert unit_sphere.get_normal(Point(2, 0, 0)) == Vector(1, 0, 0)

    def test_non_positive_radius_raises(self):
        with pytest.raises(DegenerateGeometryError):
            Sphere(Point(0, 0, 0), 0)

    def test_ray_outside_misses(self, unit_sphere):
        assert unit_sphere.find_intersections(Ray(Point(-1, 0, 0), Vector(1, 1, 0))) is None

    def test_ray_crossing_gives_two_ordered_points(self, unit_sphere):
        result = unit_sphere.find_intersections(Ray(Point(-1, 0, 0), Vector(3, 1, 0)))
        assert result == [Point(0.0651530771650466, 0.355051025721682, 0),
                          Point(1.53484692283495, 0.844948974278318, 0)]

    def test_ray_from_inside_hits_once(self, unit_sphere):
        result = unit_sphere.find_intersections(Ray(Point(0.5, 0.5, 0), Vector(3, 1, 0)))
        assert len(result) == 1
        assert result[0].distance(unit_sphere.center) == pytest.approx(1)

    def test_ray_after_sphere_misses(self, unit_sphere):
        assert unit_sphere.find_intersections(Ray(Point(2, 1, 0), Vector(3, 1, 0))) is None

    def test_ray_through_center_hits_twice(self, unit_sphere):
        result = unit_sphere.find_intersections(Ray(Point(1, -2, 0), Vector(0, 1, 0)))
        assert result == [Point(1, -1, 0), Point(1, 1, 0)]

    def test_head_at_center_hits_once_at_radius(self, unit_sphere):
        result = unit_sphere.calculate_intersections(Ray(Point(1, 0, 0), Vector(0, 1, 0)))
        assert len(result) == 1
        assert result[0].point == Point(1, 1, 0)
        assert result[0].distance == pytest.approx(1)

    def test_head_on_surface_going_inside_hits_once(self, unit_sphere):
        result = unit_sphere.find_intersections(Ray(Point(1, -1, 0), Vector(0, 1, 0)))
        assert result == [Point(1, 1, 0)]

    def test_head_on_surface_going_outside_misses(self, unit_sphere):
        assert unit_sphere.find_intersections(Ray(Point(1, 1, 0), Vector(0, 1, 0))) is None

    def test_tangent_ray_is_boundary_no_hit(self, unit_sphere):
        assert unit_sphere.find_intersections(Ray(Point(0, 1, 0), Vector(1, 0, 0))) is None

    def test_max_distance_cuts_far_hit(self, unit_sphere):
        ray = Ray(Point(1, -2, 0), Vector(0, 1, 0))
        result = unit_sphere.calculate_intersections(ray, 2)
        assert [i.point for i in result] == [Point(1, -1, 0)]
        assert unit_sphere.calculate_intersections(ray, 0.5) is None

    def test_hit_exactly_at_max_distance_counts(self, unit_sphere):
        ray = Ray(Point(1, -2, 0), Vector(0, 1, 0))
        assert len(unit_sphere.calculate_intersections(ray, 1)) == 1


class TestPlane:
    def test_from_points_normal(self):
        plane = Plane.from_points(Point(1, 0, 0), Point(0, 1, 0), Point(0, 0, 1))
        n = plane.get_normal()
        assert n.length() == pytest.approx(1)
        expected = 1 / math.sqrt(3)
        assert n == Vector(expected, expected, expected) or n == Vector(-expected, -expected, -expected)

    def test_coincident_points_raise(self):
        with pytest.raises(DegenerateGeometryError):
            Plane.from_points(Point(1, 2, 3), Point(1, 2, 3), Point(0, 0, 1))

    def test_collinear_points_raise(self):
        with pytest.raises(DegenerateGeometryError):
            Plane.from_points(Point(1, 1, 1), Point(2, 2, 2), Point(3, 3, 3))

    def test_ray_crossing_plane(self):
        plane = Plane(Point(0, 0, 1), Vector(0, 0, 1))
        assert plane.find_intersections(Ray(Point(1, 1, 0), Vector(0, 0, 1))) == [Point(1, 1, 1)]

    def test_ray_pointing_away_misses(self):
        plane = Plane(Point(0, 0, 1), Vector(0, 0, 1))
        assert plane.find_intersections(Ray(Point(1, 1, 0), Vector(0, 0, -1))) is None

    def test_parallel_ray_misses(self):
        plane = Plane(Point(0, 0, 1), Vector(0, 0, 1))
        assert plane.find_intersections(Ray(Point(0, 0, 0), Vector(1, 0, 0))) is None
        assert plane.find_intersections(Ray(Point(0, 0, 1), Vector(1, 0, 0))) is None

    def test_head_on_plane_misses(self):
        plane = Plane(Point(0, 0, 1), Vector(0, 0, 1))
        assert plane.find_intersections(Ray(Point(1, 2, 1), Vector(1, 1, 1))) is None

    def test_head_at_reference_point_misses(self):
        plane = Plane(Point(0, 0, 1), Vector(0, 0, 1))
        assert plane.find_intersections(Ray(Point(0, 0, 1), Vector(1, 1, 1))) is None

    def test_max_distance(self):
        plane = Plane(Point(0, 0, 5), Vector(0, 0, 1))
        ray = Ray(Point(0, 0, 0), Vector(0, 0, 1))
        assert plane.calculate_intersections(ray, 4) is None
        assert plane.calculate_intersections(ray, 5)[0].distance == pytest.approx(5)
