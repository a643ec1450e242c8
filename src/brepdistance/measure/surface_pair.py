"""
Perpendicular connections between two surfaces.

`parallel_distance` finds a pair of surface parameters whose 3D points are
connected by a segment perpendicular to both surfaces: the generalization of
"the distance between two parallel planes". It is used by the relation
resolver for face/face pairs and by tools that scan a shell for faces a
distance can be measured to.
"""
from __future__ import annotations

import logging
import math

from brepdistance.model.geometry_primitives import (
    Point2, Point3, BoundingRect, INVALID_POINT, INVALID_POINT2,
)
from brepdistance.model.geometry_utils import clip_parametric_line, adjust_periodic
from brepdistance.model.surfaces import Surface, PlaneSurface, CylindricalSurface

logger = logging.getLogger(__name__)

_NO_PARAMETERS = (INVALID_POINT2, INVALID_POINT2)


def parallel_distance(
    surface_a: Surface,
    domain_a: BoundingRect,
    surface_b: Surface,
    domain_b: BoundingRect,
    preferred_point: Point3 = INVALID_POINT
) -> tuple[Point2, Point2]:
    """
    Find parameters on two surfaces connected by a segment perpendicular to both.

    Supported configurations:
        - Two planes with parallel normals.
        - A plane and a cylinder whose axis is parallel to the plane (either order).

    Args:
        surface_a: First surface.
        domain_a: Parameter domain of the first face.
        surface_b: Second surface.
        domain_b: Parameter domain of the second face.
        preferred_point: When several solutions exist, the one nearest to this point wins.

    Returns:
        (uv_a, uv_b), or two invalid parameters if the configuration is not supported
        or the surfaces do not face each other within their domains.
    """
    match surface_a, surface_b:
        case PlaneSurface(), PlaneSurface():
            if surface_a.normal.is_parallel(surface_b.normal):
                uv_a = domain_a.center()
                return uv_a, surface_b.position_of(surface_a.point_at(uv_a))
        case PlaneSurface(), CylindricalSurface():
            if surface_a.normal.is_perpendicular(surface_b.axis_direction):
                return _plane_cylinder(surface_a, domain_a, surface_b, domain_b, preferred_point)
        case CylindricalSurface(), PlaneSurface():
            uv_b, uv_a = parallel_distance(surface_b, domain_b, surface_a, domain_a, preferred_point)
            return uv_a, uv_b
    logger.debug(f"No perpendicular connection between {type(surface_a).__name__} and {type(surface_b).__name__}")
    return _NO_PARAMETERS


def _plane_cylinder(
    plane: PlaneSurface,
    plane_domain: BoundingRect,
    cylinder: CylindricalSurface,
    cylinder_domain: BoundingRect,
    preferred_point: Point3
) -> tuple[Point2, Point2]:
    # the cylinder axis projected onto the plane, limited by the cylinder's v-range
    axis_location = plane.position_of(cylinder.axis_location)
    axis_direction = plane.position_of(cylinder.axis_location + cylinder.axis_direction) - axis_location
    clipped = clip_parametric_line(
        axis_location, axis_direction, cylinder_domain.bottom, cylinder_domain.top, plane_domain
    )
    if clipped is None:
        logger.debug("Projected cylinder axis misses the plane domain")
        return _NO_PARAMETERS
    t0, t1 = clipped
    if not (math.isfinite(t0) and math.isfinite(t1)):
        logger.debug("Projected cylinder axis is unbounded")
        return _NO_PARAMETERS

    p1 = axis_location + axis_direction * t0
    p2 = axis_location + axis_direction * t1
    pm = p1.midpoint(p2)
    if not preferred_point.is_valid:
        preferred_point = plane.point_at(p1).midpoint(plane.point_at(p2))

    best, best_distance = INVALID_POINT2, math.inf
    for uv in cylinder.line_intersection(plane.point_at(pm), plane.normal):
        uv = adjust_periodic(uv, cylinder.u_period, cylinder_domain)
        if not cylinder_domain.contains(uv):
            continue
        distance = cylinder.point_at(uv).distance_to(preferred_point)
        if distance < best_distance:
            best, best_distance = uv, distance
    if not best.is_valid:
        return _NO_PARAMETERS
    return pm, best
