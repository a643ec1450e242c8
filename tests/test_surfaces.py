"""Tests for the analytic surfaces."""
import math
import pytest

from brepdistance.model.geometry_primitives import Point2, Point3, Vector3, X_AXIS, Z_AXIS
from brepdistance.model.surfaces import PlaneSurface, CylindricalSurface, SphericalSurface


class TestPlaneSurface:
    def test_round_trip(self):
        surface = PlaneSurface.from_normal(Point3(0, 0, 2), Z_AXIS)
        uv = surface.position_of(Point3(3, -1, 2))
        assert tuple(surface.point_at(uv)) == pytest.approx((3, -1, 2))
        assert surface.normal_at(uv) == surface.normal
        assert surface.u_period == 0.0

    def test_line_intersection(self):
        surface = PlaneSurface.from_normal(Point3(0, 0, 2), Z_AXIS)
        (uv,) = surface.line_intersection(Point3(1, 1, 0), Z_AXIS)
        assert tuple(surface.point_at(uv)) == pytest.approx((1, 1, 2))
        assert surface.line_intersection(Point3(1, 1, 0), X_AXIS) == []


class TestCylindricalSurface:
    @pytest.fixture
    def cylinder(self):
        return CylindricalSurface.from_axis(Point3(0, 0, 0), Z_AXIS, 2.0)

    def test_evaluation(self, cylinder):
        assert tuple(cylinder.point_at(Point2(0.0, 3.0))) == pytest.approx((2, 0, 3))
        assert tuple(cylinder.normal_at(Point2(math.pi / 2, 0.0))) == pytest.approx((0, 1, 0), abs=1e-12)
        assert cylinder.u_period == pytest.approx(2 * math.pi)

    def test_position_of(self, cylinder):
        uv = cylinder.position_of(Point3(0, 2, 5))
        assert tuple(uv) == pytest.approx((math.pi / 2, 5.0))
        # points off the surface map to the closest surface point
        uv = cylinder.position_of(Point3(0, -7, 1))
        assert tuple(uv) == pytest.approx((3 * math.pi / 2, 1.0))

    def test_line_intersection(self, cylinder):
        uvs = cylinder.line_intersection(Point3(-5, 0, 1), X_AXIS)
        assert len(uvs) == 2
        assert tuple(uvs[0]) == pytest.approx((math.pi, 1.0))
        assert tuple(uvs[1]) == pytest.approx((0.0, 1.0))

    def test_line_parallel_to_axis(self, cylinder):
        assert cylinder.line_intersection(Point3(2, 0, 0), Z_AXIS) == []

    def test_axis(self):
        cylinder = CylindricalSurface.from_axis(Point3(0, 0, 5), Vector3(3, 0, 0), 2.0)
        assert cylinder.axis_location == Point3(0, 0, 5)
        assert tuple(cylinder.axis_direction) == pytest.approx((1, 0, 0))

    def test_invalid_radius(self):
        with pytest.raises(ValueError):
            CylindricalSurface.from_axis(Point3(0, 0, 0), Z_AXIS, -1.0)


class TestSphericalSurface:
    def test_line_intersection(self):
        sphere = SphericalSurface(Point3(1, 0, 0), 2.0)
        points = [sphere.point_at(uv) for uv in sphere.line_intersection(Point3(-5, 0, 0), X_AXIS)]
        assert tuple(points[0]) == pytest.approx((-1, 0, 0), abs=1e-12)
        assert tuple(points[1]) == pytest.approx((3, 0, 0), abs=1e-12)

    def test_round_trip(self):
        sphere = SphericalSurface(Point3(0, 0, 0), 1.0)
        uv = sphere.position_of(Point3(0, 0, 4))
        assert uv.y == pytest.approx(math.pi / 2)
        assert tuple(sphere.point_at(uv)) == pytest.approx((0, 0, 1), abs=1e-12)
