"""Tests for face_distances."""
import math
import pytest

from brepdistance.model.geometry_primitives import Point3, BoundingRect, X_AXIS, Z_AXIS
from brepdistance.model.surfaces import PlaneSurface, CylindricalSurface, SphericalSurface
from brepdistance.model.topology import Face, Shell
from brepdistance.measure import face_distances


@pytest.fixture
def block():
    """Bottom, top and one side of a 4 x 4 x 2 block, plus a half cylinder lying on the top."""
    bottom = Face(PlaneSurface.from_normal(Point3(0, 0, 0), Z_AXIS), BoundingRect(0, 4, 0, 4))
    top = Face(PlaneSurface.from_normal(Point3(0, 0, 2), Z_AXIS), BoundingRect(0, 4, 0, 4))
    side = Face(PlaneSurface.from_normal(Point3(0, 0, 0), X_AXIS), BoundingRect(0, 4, 0, 2))
    cylinder = Face(
        CylindricalSurface.from_axis(Point3(0, 2, 3), X_AXIS, 1.0),
        BoundingRect(0.0, 2.0 * math.pi, 0.0, 4.0),
    )
    shell = Shell()
    shell.add_faces([bottom, top, side, cylinder])
    return shell


def test_face_distances(block):
    bottom, top, _, cylinder = block.faces
    results = face_distances(block, bottom)
    assert [r.face for r in results] == [top, cylinder]
    assert results[0].distance == pytest.approx(2.0)
    assert tuple(results[0].point_from) == pytest.approx((2, 2, 0))
    assert tuple(results[0].point_to) == pytest.approx((2, 2, 2))
    assert results[1].distance == pytest.approx(2.0)
    assert tuple(results[1].point_to) == pytest.approx((2, 2, 2), abs=1e-9)


def test_touching_point_selects_side(block):
    bottom, _, _, cylinder = block.faces
    results = face_distances(block, bottom, Point3(2, 2, 10))
    by_face = {id(r.face): r for r in results}
    assert by_face[id(cylinder)].distance == pytest.approx(4.0)


def test_coplanar_faces_are_skipped():
    first = Face(PlaneSurface.from_normal(Point3(0, 0, 0), Z_AXIS), BoundingRect(0, 1, 0, 1))
    second = Face(PlaneSurface.from_normal(Point3(5, 0, 0), Z_AXIS), BoundingRect(0, 1, 0, 1))
    sphere = Face(SphericalSurface(Point3(0, 0, 5), 1.0))
    assert face_distances(Shell([first, second, sphere]), first) == []
