"""Tests for the low level geometric helpers."""
import math
import pytest

from brepdistance.model.geometry_primitives import Point2, Point3, Vector2, Vector3, BoundingRect, X_AXIS, Y_AXIS
from brepdistance.model.geometry_utils import (
    foot_on_line, closest_approach, line_sphere_parameters, clip_parametric_line, adjust_periodic,
)


def test_foot_on_line():
    foot = foot_on_line(Point3(1, 1, 0), Point3(0, 0, 0), Vector3(2, 0, 0))
    assert tuple(foot) == pytest.approx((1, 0, 0))


def test_foot_on_degenerate_line_is_invalid():
    assert not foot_on_line(Point3(1, 1, 0), Point3(0, 0, 0), Vector3(0, 0, 0)).is_valid


def test_closest_approach_skew_lines():
    distance, s, t = closest_approach(Point3(0, 0, 0), X_AXIS, Point3(0, 0, 5), Y_AXIS)
    assert abs(distance - 5.0) < 1e-12
    assert abs(s) < 1e-12
    assert abs(t) < 1e-12


def test_closest_approach_offset_parameters():
    distance, s, t = closest_approach(Point3(-2, 0, 0), Vector3(2, 0, 0), Point3(0, 3, 1), Vector3(0, 1, 0))
    assert abs(distance - 1.0) < 1e-12
    assert abs(s - 1.0) < 1e-12
    assert abs(t + 3.0) < 1e-12


def test_closest_approach_parallel_lines():
    assert closest_approach(Point3(0, 0, 0), X_AXIS, Point3(0, 1, 0), Vector3(-2, 0, 0)) is None


class TestLineSphere:
    def test_two_intersections(self):
        assert line_sphere_parameters((-5, 0), (1, 0), (0, 0), 2.0) == pytest.approx([3.0, 7.0])

    def test_tangent(self):
        assert line_sphere_parameters((-5, 2), (1, 0), (0, 0), 2.0) == pytest.approx([5.0])

    def test_miss(self):
        assert line_sphere_parameters((-5, 3), (1, 0), (0, 0), 2.0) == []

    def test_sphere(self):
        ts = line_sphere_parameters((0, 0, -10), (0, 0, 2), (0, 0, 0), 4.0)
        assert ts == pytest.approx([3.0, 7.0])

    def test_degenerate_direction(self):
        assert line_sphere_parameters((0, 0), (0, 0), (0, 0), 1.0) == []


class TestClipParametricLine:
    rect = BoundingRect(-2, 3, -1, 1)

    def test_clip_to_rect(self):
        assert clip_parametric_line(Point2(0, 0), Vector2(1, 0), -10, 10, self.rect) == pytest.approx((-2, 3))

    def test_interval_inside_rect(self):
        assert clip_parametric_line(Point2(0, 0), Vector2(1, 0), -1, 1, self.rect) == pytest.approx((-1, 1))

    def test_infinite_interval(self):
        result = clip_parametric_line(Point2(0, 0), Vector2(1, 0), -math.inf, math.inf, self.rect)
        assert result == pytest.approx((-2, 3))

    def test_infinite_rect(self):
        t0, t1 = clip_parametric_line(Point2(0, 0), Vector2(1, 0), -math.inf, math.inf, BoundingRect.infinite())
        assert t0 == -math.inf
        assert t1 == math.inf

    def test_miss(self):
        assert clip_parametric_line(Point2(0, 5), Vector2(1, 0), -10, 10, self.rect) is None

    def test_interval_outside_rect(self):
        assert clip_parametric_line(Point2(0, 0), Vector2(1, 0), 5, 10, self.rect) is None

    def test_diagonal(self):
        t0, t1 = clip_parametric_line(Point2(0, 0), Vector2(1, 1), -10, 10, self.rect)
        assert t0 == pytest.approx(-1.0)
        assert t1 == pytest.approx(1.0)


class TestAdjustPeriodic:
    domain = BoundingRect(0, 2 * math.pi, -1, 1)

    def test_negative_angle(self):
        uv = adjust_periodic(Point2(-math.pi / 2, 0.5), 2 * math.pi, self.domain)
        assert tuple(uv) == pytest.approx((3 * math.pi / 2, 0.5))

    def test_angle_above_period(self):
        uv = adjust_periodic(Point2(2 * math.pi + 0.1, 0.0), 2 * math.pi, self.domain)
        assert uv.x == pytest.approx(0.1)

    def test_shifted_domain(self):
        domain = BoundingRect(math.pi, 3 * math.pi, -1, 1)
        uv = adjust_periodic(Point2(0.5, 0.0), 2 * math.pi, domain)
        assert uv.x == pytest.approx(2 * math.pi + 0.5)

    def test_not_periodic(self):
        assert adjust_periodic(Point2(-7.0, 0.0), 0.0, self.domain) == Point2(-7.0, 0.0)
