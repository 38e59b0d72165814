"""Unit tests for tubes and cylinders."""

import pytest

from core.errors import DegenerateGeometryError
from core.ray import Ray
from core.vector import Point, Vector
from geometry import Cylinder, Tube


@pytest.fixture
def tube():
    return Tube(Ray(Point(0, 0, 0), Vector(0, 0, 1)), 1)


@pytest.fixture
def cylinder():
    return Cylinder(10, Ray(Point(0, 0, 0), Vector(0, 0, 1)), 2)


class TestTube:
    def test_normal_is_radial(self, tube):
        assert tube.get_normal(Point(1, 0, 5)) == Vector(1, 0, 0)

    def test_normal_opposite_axis_head(self, tube):
        assert tube.get_normal(Point(0, 1, 0)) == Vector(0, 1, 0)

    def test_non_positive_radius_raises(self):
        with pytest.raises(DegenerateGeometryError):
            Tube(Ray(Point(0, 0, 0), Vector(0, 0, 1)), -1)

    def test_ray_crossing_tube(self, tube):
        result = tube.find_intersections(Ray(Point(-2, 0, 3), Vector(1, 0, 0)))
        assert result == [Point(-1, 0, 3), Point(1, 0, 3)]

    def test_ray_from_inside_hits_once(self, tube):
        result = tube.find_intersections(Ray(Point(0, 0, 3), Vector(1, 0, 1)))
        assert result == [Point(1, 0, 4)]

    def test_ray_from_axis_head(self, tube):
        assert tube.find_intersections(Ray(Point(0, 0, 0), Vector(0, 1, 0))) == [Point(0, 1, 0)]

    def test_ray_missing_tube(self, tube):
        assert tube.find_intersections(Ray(Point(-2, 3, 0), Vector(1, 0, 0))) is None

    def test_ray_parallel_to_axis_misses(self, tube):
        assert tube.find_intersections(Ray(Point(0.5, 0, 0), Vector(0, 0, 1))) is None

    def test_tangent_ray_is_boundary_no_hit(self, tube):
        assert tube.find_intersections(Ray(Point(-2, 1, 0), Vector(1, 0, 0))) is None

    def test_ray_pointing_away_misses(self, tube):
        assert tube.find_intersections(Ray(Point(2, 0, 0), Vector(1, 0, 0))) is None


class TestCylinderNormal:
    def test_lateral_surface(self, cylinder):
        assert cylinder.get_normal(Point(2, 0, 5)) == Vector(1, 0, 0)

    def test_caps(self, cylinder):
        assert cylinder.get_normal(Point(0, 0, 10)) == Vector(0, 0, 1)
        assert cylinder.get_normal(Point(1, 0, 0)) == Vector(0, 0, -1)

    def test_cap_rims_use_axis(self, cylinder):
        assert cylinder.get_normal(Point(2, 0, 10)) == Vector(0, 0, 1)
        assert cylinder.get_normal(Point(2, 0, 0)) == Vector(0, 0, -1)

    def test_non_positive_height_raises(self):
        with pytest.raises(DegenerateGeometryError):
            Cylinder(0, Ray(Point(0, 0, 0), Vector(0, 0, 1)), 2)


class TestCylinderIntersections:
    def test_side_to_side(self, cylinder):
        result = cylinder.find_intersections(Ray(Point(-5, 0, 5), Vector(1, 0, 0)))
        assert result == [Point(-2, 0, 5), Point(2, 0, 5)]

    def test_through_both_caps(self, cylinder):
        result = cylinder.find_intersections(Ray(Point(1, 0, -5), Vector(0, 0, 1)))
        assert result == [Point(1, 0, 0), Point(1, 0, 10)]

    def test_through_top_rim_misses(self, cylinder):
        assert cylinder.find_intersections(Ray(Point(0, 0, 12), Vector(1, 0, -1))) is None

    def test_enter_top_leave_side(self, cylinder):
        result = cylinder.find_intersections(Ray(Point(0, 0, 11), Vector(1, 0, -1)))
        assert result == [Point(1, 0, 10), Point(2, 0, 9)]

    def test_beyond_height_misses(self, cylinder):
        assert cylinder.find_intersections(Ray(Point(-5, 0, 12), Vector(1, 0, 0))) is None

    def test_lateral_line_beyond_caps_misses(self, cylinder):
        assert cylinder.find_intersections(Ray(Point(-5, 0, -1), Vector(1, 0, 0))) is None

    def test_cap_rim_is_excluded(self, cylinder):
        assert cylinder.find_intersections(Ray(Point(2, 0, -5), Vector(0, 0, 1))) is None

    def test_outside_radius_parallel_misses(self, cylinder):
        assert cylinder.find_intersections(Ray(Point(3, 0, -5), Vector(0, 0, 1))) is None

    def test_from_inside(self, cylinder):
        result = cylinder.find_intersections(Ray(Point(0, 0, 5), Vector(1, 0, 0)))
        assert result == [Point(2, 0, 5)]

    def test_max_distance(self, cylinder):
        ray = Ray(Point(-5, 0, 5), Vector(1, 0, 0))
        result = cylinder.calculate_intersections(ray, 4)
        assert [i.point for i in result] == [Point(-2, 0, 5)]
