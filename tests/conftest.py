"""Shared fixtures for the distance engine tests."""
import math
import pytest
from brepdistance.model.geometry_primitives import Point3, Vector3, BoundingRect, Z_AXIS
from brepdistance.model.curves import Line, Arc
from brepdistance.model.surfaces import PlaneSurface, CylindricalSurface, SphericalSurface
from brepdistance.model.topology import Face


@pytest.fixture
def x_line():
    """Line along the x-axis through the origin."""
    return Line(Point3(0, 0, 0), Point3(1, 0, 0))


@pytest.fixture
def upper_arc():
    """Upper half circle of radius 5 around the origin in the XY-plane."""
    return Arc.from_center(Point3(0, 0, 0), Z_AXIS, 5.0, 0.0, math.pi)


@pytest.fixture
def bottom_face():
    """Plane z=0, domain [-10, 10] x [-10, 10]."""
    return Face(PlaneSurface.from_normal(Point3(0, 0, 0), Z_AXIS), BoundingRect(-10, 10, -10, 10))


@pytest.fixture
def top_face():
    """Plane z=3 with the same orientation as the bottom face."""
    return Face(PlaneSurface.from_normal(Point3(0, 0, 3), Z_AXIS), BoundingRect(-10, 10, -10, 10))


@pytest.fixture
def x_cylinder_face():
    """Full cylinder of radius 2 around the axis y=0, z=5 (parallel to x), v in [-3, 3]."""
    surface = CylindricalSurface.from_axis(Point3(0, 0, 5), Vector3(1, 0, 0), 2.0)
    return Face(surface, BoundingRect(0.0, 2.0 * math.pi, -3.0, 3.0))


@pytest.fixture
def z_cylinder_face():
    """Full cylinder of radius 2 around the z-axis, v in [-5, 5]."""
    surface = CylindricalSurface.from_axis(Point3(0, 0, 0), Z_AXIS, 2.0)
    return Face(surface, BoundingRect(0.0, 2.0 * math.pi, -5.0, 5.0))


@pytest.fixture
def sphere_face():
    return Face(SphericalSurface(Point3(20, 0, 0), 1.0), BoundingRect(0.0, 2.0 * math.pi, -math.pi / 2, math.pi / 2))
