"""
Pairwise Distance Relations
===========================
Resolves the measurement segment between two picked B-Rep objects.

Why is this file needed?
------------------------
Every distance-editing tool (move a face, center faces, position an object)
starts from the same question: given two picked objects and optional hints,
which segment is "the distance" and how much freedom remains once its length
is fixed? `resolve` answers it for one pair at a time.

Freedom is tri-state:
    INVALID_VECTOR: the segment is fully determined.
    ZERO_VECTOR: both endpoints may move within the plane perpendicular to the segment.
    any other vector: both endpoints may slide along it in lockstep.

Combinations without a defined answer (degenerate input, unsupported pairs,
non-convergence) return NO_RELATION; no exception is raised for them.

Classes:
    FreedomKind: Readable classification of the freedom vector.
    Relation: Result of `resolve`.
    FaceEdgeDistance: Result of `distance_from_face_to_edge`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
import math

from brepdistance.config import LINEAR_EPS, ANGULAR_EPS
from brepdistance.model.geometry_primitives import (
    Point2, Point3, Vector2, Vector3, Plane,
    INVALID_POINT, INVALID_POINT2, INVALID_VECTOR, ZERO_VECTOR,
)
from brepdistance.model.geometry_utils import foot_on_line, closest_approach, adjust_periodic
from brepdistance.model.curves import Curve, Line, common_plane, nearest_points
from brepdistance.model.surfaces import CylindricalSurface
from brepdistance.model.topology import Edge, Face
from brepdistance.model.entities import (
    CurveKind, SurfaceKind, PointEntity, CurveEntity, FaceEntity, Measurable, as_entity,
)
from brepdistance.measure.surface_pair import parallel_distance

logger = logging.getLogger(__name__)


class FreedomKind(StrEnum):
    NONE = "none"
    PLANAR = "planar"
    LINEAR = "linear"


@dataclass(frozen=True)
class Relation:
    """
    Measurement segment between two objects.

    `start` belongs to the first object passed to `resolve`, `end` to the second.
    `aux_start` / `aux_end` are the points actually used for the calculation
    (e.g. the extremal point of an arc) when they differ from the segment ends;
    they are meant for drawing dimension lines.
    """
    start: Point3 = INVALID_POINT
    end: Point3 = INVALID_POINT
    freedom: Vector3 = INVALID_VECTOR
    aux_start: Point3 = INVALID_POINT
    aux_end: Point3 = INVALID_POINT

    @property
    def is_valid(self) -> bool:
        return self.start.is_valid and self.end.is_valid

    @property
    def distance(self) -> float:
        """Length of the segment, NaN for an invalid relation."""
        return self.start.distance_to(self.end)

    @property
    def freedom_kind(self) -> FreedomKind:
        if not self.freedom.is_valid:
            return FreedomKind.NONE
        if self.freedom == ZERO_VECTOR:
            return FreedomKind.PLANAR
        return FreedomKind.LINEAR

    def swapped(self) -> Relation:
        return Relation(self.end, self.start, self.freedom, self.aux_end, self.aux_start)


NO_RELATION = Relation()


@dataclass(frozen=True)
class FaceEdgeDistance:
    """Closest connection between a face and an edge, as face and edge parameters."""
    face_uv: Point2 = INVALID_POINT2
    edge_parameter: float = math.nan
    face_point: Point3 = INVALID_POINT
    edge_point: Point3 = INVALID_POINT

    @property
    def is_valid(self) -> bool:
        return self.face_uv.is_valid and not math.isnan(self.edge_parameter)

    @property
    def distance(self) -> float:
        return self.face_point.distance_to(self.edge_point)


NO_FACE_EDGE_DISTANCE = FaceEdgeDistance()


def _canonical_sign(direction: Vector3) -> Vector3:
    """Flip `direction` so that its first significant component is positive."""
    if not direction.is_valid or direction.is_null():
        return direction
    threshold = ANGULAR_EPS * direction.magnitude
    for component in direction:
        if abs(component) > threshold:
            return direction if component > 0.0 else -direction
    return direction


def _linear_freedom(direction: Vector3) -> Vector3:
    # sliding direction, independent of the argument order
    return _canonical_sign(direction.normalized())


def _non_degenerate(relation: Relation) -> Relation:
    """NO_RELATION if both ends coincide, so the segment has no direction."""
    if relation.is_valid and relation.distance <= LINEAR_EPS:
        logger.debug("Zero length segment")
        return NO_RELATION
    return relation


def resolve(
    first: Measurable,
    second: Measurable,
    preferred_direction: Vector3 = INVALID_VECTOR,
    preferred_point: Point3 = INVALID_POINT
) -> Relation:
    """
    Calculate the measurement segment between two objects (vertex, edge, face or
    their bare point / curve / entity counterparts).

    Args:
        first: The object `start` belongs to.
        second: The object `end` belongs to.
        preferred_direction: Measure along this direction. Invalid or null means unconstrained.
        preferred_point: Anchor the segment near this point (e.g. where the user clicked).
            Invalid means a midpoint derived from the objects.

    Returns:
        The relation, or NO_RELATION if the combination has no defined answer.

    Raises:
        TypeError: If an argument is not a measurable object.
    """
    a, b = as_entity(first), as_entity(second)
    swapped = a.category > b.category
    if swapped:
        a, b = b, a
    direction = preferred_direction
    if not direction.is_valid or direction.is_null(LINEAR_EPS):
        direction = INVALID_VECTOR

    match a, b:
        case PointEntity(), PointEntity():
            relation = _point_point(a.position, b.position, direction)
        case PointEntity(), CurveEntity():
            relation = _point_curve(a.position, b, direction, preferred_point)
        case CurveEntity(), CurveEntity():
            relation = _curve_curve(a, b, direction, preferred_point)
        case FaceEntity(), FaceEntity():
            relation = _face_face(a, b, preferred_point)
        case FaceEntity(), PointEntity():
            relation = _face_point(a, b.position, direction, preferred_point)
        case _:
            # face/curve is not supported
            relation = NO_RELATION

    if not relation.is_valid:
        logger.debug(f"No relation between {a.category.name} and {b.category.name}")
        return NO_RELATION
    return relation.swapped() if swapped else relation


def _point_point(p1: Point3, p2: Point3, direction: Vector3) -> Relation:
    if direction.is_valid:
        # the plane through p1, perpendicular to the preferred direction
        plane = Plane.from_normal(p1, direction)
        local = plane.to_local(p2)
        start = plane.to_global(Point2(local.x / 2.0, local.y / 2.0))
        end = start + plane.normal * local.z
        # connection of both points within the plane
        freedom = plane.vector_to_global(Vector2(local.x, local.y))
        if freedom.is_null(LINEAR_EPS):
            freedom = INVALID_VECTOR
        return Relation(start, end, _canonical_sign(freedom))
    if p1.distance_to(p2) <= LINEAR_EPS:
        logger.debug("Coincident points without a direction")
        return NO_RELATION
    return Relation(p1, p2, INVALID_VECTOR)


def _point_curve(point: Point3, entity: CurveEntity, direction: Vector3, preferred_point: Point3) -> Relation:
    curve = entity.curve
    if direction.is_valid:
        if entity.kind is CurveKind.LINE and curve.start_direction.is_perpendicular(direction):
            anchor = preferred_point if preferred_point.is_valid else point
            on_line = curve.foot_point(anchor)
            on_point_side = Plane.from_normal(point, direction).foot_point(on_line)
            return _non_degenerate(Relation(on_point_side, on_line, _linear_freedom(curve.start_direction)))
        return NO_RELATION

    plane = curve.plane()
    if plane is not None:
        return _non_degenerate(Relation(point, plane.foot_point(point), ZERO_VECTOR))
    if entity.kind is CurveKind.LINE:
        foot = curve.foot_point(point)
        if foot.distance_to(point) <= LINEAR_EPS:
            logger.debug("Point lies on the line")
            return NO_RELATION
        return Relation(point, foot, INVALID_VECTOR)
    return NO_RELATION


def _curve_curve(c1: CurveEntity, c2: CurveEntity, direction: Vector3, preferred_point: Point3) -> Relation:
    if direction.is_valid:
        return _curves_along_direction(c1.curve, c2.curve, direction, preferred_point)
    if c1.kind is CurveKind.LINE and c2.kind is CurveKind.LINE:
        return _line_line(c1.curve, c2.curve, preferred_point)
    if common_plane(c1.curve, c2.curve) is not None:
        params = nearest_points(c1.curve, c2.curve)
        if params is None:
            return NO_RELATION
        return _non_degenerate(
            Relation(c1.curve.point_at(params[0]), c2.curve.point_at(params[1]), INVALID_VECTOR)
        )
    logger.debug("Curves share no plane and are not both lines")
    return NO_RELATION


def _curves_along_direction(curve1: Curve, curve2: Curve, direction: Vector3, preferred_point: Point3) -> Relation:
    # extremal positions in the direction, e.g. the top of an arc
    extrema1 = curve1.extrema(direction)
    extrema2 = curve2.extrema(direction)
    aux_start = curve1.point_at(extrema1[0]) if extrema1 else curve1.start_point
    aux_end = curve2.point_at(extrema2[0]) if extrema2 else curve2.start_point
    anchor = preferred_point if preferred_point.is_valid else aux_start.midpoint(aux_end)
    start = foot_on_line(aux_start, anchor, direction)
    end = foot_on_line(aux_end, anchor, direction)
    if start.distance_to(end) <= LINEAR_EPS:
        logger.debug("Curves are level in the measuring direction")
        return NO_RELATION

    plane = common_plane(curve1, curve2)
    if plane is None:
        return Relation(start, end, ZERO_VECTOR, aux_start, aux_end)
    _, freedom = plane.intersect(Plane.from_normal(anchor, direction))
    if not freedom.is_valid:
        # common plane perpendicular to the direction
        return NO_RELATION
    return Relation(start, end, _linear_freedom(freedom), aux_start, aux_end)


def _line_line(l1: Line, l2: Line, preferred_point: Point3) -> Relation:
    if l1.start_direction.is_parallel(l2.start_direction):
        connection = l1.foot_point(l2.start) - l2.start
        if connection.is_null(LINEAR_EPS):
            logger.debug("Coincident lines")
            return NO_RELATION
        anchor = preferred_point if preferred_point.is_valid else l1.point_at(0.5).midpoint(l2.point_at(0.5))
        start = foot_on_line(l1.start, anchor, connection)
        end = foot_on_line(l2.start, anchor, connection)
        return Relation(start, end, _linear_freedom(l1.start_direction))

    approach = closest_approach(l1.start, l1.start_direction, l2.start, l2.start_direction)
    if approach is None:
        return NO_RELATION
    distance, s, t = approach
    if distance <= LINEAR_EPS:
        logger.debug("Intersecting lines")
        return NO_RELATION
    return Relation(l1.point_at(s), l2.point_at(t), INVALID_VECTOR)


def _face_face(f1: FaceEntity, f2: FaceEntity, preferred_point: Point3) -> Relation:
    match f1.kind, f2.kind:
        case SurfaceKind.PLANE, SurfaceKind.PLANE:
            return _plane_plane(f1, f2, preferred_point)
        case (SurfaceKind.PLANE, SurfaceKind.CYLINDER) | (SurfaceKind.CYLINDER, SurfaceKind.PLANE):
            uv1, uv2 = parallel_distance(f1.surface, f1.domain, f2.surface, f2.domain, preferred_point)
            if not (uv1.is_valid and uv2.is_valid):
                return NO_RELATION
            cylinder = f1.surface if f1.kind is SurfaceKind.CYLINDER else f2.surface
            return _non_degenerate(Relation(
                f1.surface.point_at(uv1), f2.surface.point_at(uv2), _linear_freedom(cylinder.axis_direction)
            ))
        case SurfaceKind.CYLINDER, SurfaceKind.CYLINDER:
            return _coaxial_cylinders(f1, f2, preferred_point)
    return NO_RELATION


def _plane_plane(f1: FaceEntity, f2: FaceEntity, preferred_point: Point3) -> Relation:
    ps1, ps2 = f1.surface, f2.surface
    if not ps1.normal.is_parallel(ps2.normal):
        # no defined distance between non parallel planes
        return NO_RELATION
    anchor = preferred_point if preferred_point.is_valid else ps1.location.midpoint(ps2.location)
    return _non_degenerate(Relation(ps1.plane.foot_point(anchor), ps2.plane.foot_point(anchor), INVALID_VECTOR))


def _cylinder_key(face: FaceEntity) -> tuple[float, ...]:
    d = face.domain
    return (face.surface.radius, d.left, d.right, d.bottom, d.top, *face.surface.axis_location)


def _coaxial_cylinders(f1: FaceEntity, f2: FaceEntity, preferred_point: Point3) -> Relation:
    cyl1, cyl2 = f1.surface, f2.surface
    if not cyl1.axis_direction.is_parallel(cyl2.axis_direction):
        return NO_RELATION
    if foot_on_line(cyl2.axis_location, cyl1.axis_location, cyl1.axis_direction).distance_to(cyl2.axis_location) > LINEAR_EPS:
        return NO_RELATION

    # the lower keyed face owns the anchor side, whichever argument it is
    leading_first = _cylinder_key(f1) <= _cylinder_key(f2)
    leading = f1 if leading_first else f2
    face_point = leading.surface.point_at(leading.domain.center())
    anchor = preferred_point if preferred_point.is_valid else face_point
    on_axis = foot_on_line(anchor, cyl1.axis_location, cyl1.axis_direction)
    radial = anchor - on_axis
    if radial.is_null(LINEAR_EPS):
        radial = face_point - on_axis
    # the diameter is always taken on the first cylinder
    candidates = [cyl1.point_at(uv) for uv in cyl1.line_intersection(on_axis, radial)]
    if len(candidates) != 2:
        return NO_RELATION
    near, far = sorted(candidates, key=lambda p: p.distance_to(anchor))
    if leading_first:
        return Relation(near, far, INVALID_VECTOR)
    return Relation(far, near, INVALID_VECTOR)


def _face_point(face: FaceEntity, point: Point3, direction: Vector3, preferred_point: Point3) -> Relation:
    if not direction.is_valid or face.kind is not SurfaceKind.PLANE:
        return NO_RELATION
    plane = face.surface.plane
    if not plane.normal.is_parallel(direction):
        return NO_RELATION
    if preferred_point.is_valid:
        start = plane.foot_point(preferred_point)
        end = Plane.from_normal(point, direction).foot_point(start)
    else:
        start = plane.foot_point(point)
        end = point
    return _non_degenerate(Relation(start, end, ZERO_VECTOR))


def distance_from_face_to_edge(face: Face, face_touch: Point3, edge: Edge, edge_touch: Point3) -> FaceEdgeDistance:
    """
    Closest connection between a cylindrical face and a line edge outside of it.

    The connection lies on the common perpendicular of the cylinder axis and the
    edge line. Of the two points where it crosses the cylinder, the one nearer to
    `face_touch` is used. For an edge parallel to the axis, `edge_touch` decides
    where along the edge to measure.

    Args:
        face: The face that was touched.
        face_touch: Where the face was touched (invalid: use the side facing the edge).
        edge: The edge that was touched.
        edge_touch: Where the edge was touched.

    Returns:
        The face parameters and edge parameter of the connection, or
        NO_FACE_EDGE_DISTANCE for any other combination.
    """
    surface, curve = face.surface, edge.curve
    if not isinstance(surface, CylindricalSurface) or not isinstance(curve, Line):
        return NO_FACE_EDGE_DISTANCE

    approach = closest_approach(surface.axis_location, surface.axis_direction, curve.start, curve.start_direction)
    if approach is not None:
        _, s, t = approach
        on_axis = surface.axis_location + surface.axis_direction * s
        on_edge = curve.point_at(t)
    elif edge_touch.is_valid:
        on_edge = curve.foot_point(edge_touch)
        on_axis = foot_on_line(on_edge, surface.axis_location, surface.axis_direction)
        t = curve.parameter_of(on_edge)
    else:
        return NO_FACE_EDGE_DISTANCE

    if on_axis.distance_to(on_edge) <= surface.radius + LINEAR_EPS:
        logger.debug("Edge touches or cuts the cylinder")
        return NO_FACE_EDGE_DISTANCE

    candidates = [
        uv for uv in (
            adjust_periodic(c, surface.u_period, face.domain)
            for c in surface.line_intersection(on_axis, on_edge - on_axis)
        )
        if face.domain.contains(uv)
    ]
    if not candidates:
        logger.debug("Connection leaves the face domain")
        return NO_FACE_EDGE_DISTANCE
    reference = face_touch if face_touch.is_valid else on_edge
    uv = min(candidates, key=lambda c: surface.point_at(c).distance_to(reference))
    return FaceEdgeDistance(uv, t, surface.point_at(uv), on_edge)


def distance_from_axis(axis: Line, other: Measurable) -> Relation:
    """
    Distance between an axis (e.g. of a cylindrical feature) and another object.

    A plane face parallel to the axis is measured from the axis midpoint, leaving the
    axis direction free; a line (or line edge) is measured along the common
    perpendicular.

    Returns:
        The relation, `start` on the axis, or NO_RELATION.
    """
    entity = as_entity(other)
    match entity:
        case FaceEntity(kind=SurfaceKind.PLANE, surface=surface) if surface.normal.is_perpendicular(axis.start_direction):
            on_axis = axis.point_at(0.5)
            on_plane = surface.plane.foot_point(on_axis)
            if on_axis.distance_to(on_plane) > LINEAR_EPS:
                return Relation(on_axis, on_plane, _linear_freedom(axis.start_direction))
        case CurveEntity(kind=CurveKind.LINE, curve=line):
            approach = closest_approach(axis.start, axis.start_direction, line.start, line.start_direction)
            if approach is not None and approach[0] > LINEAR_EPS:
                _, s, t = approach
                return Relation(axis.point_at(s), line.point_at(t), INVALID_VECTOR)
    return NO_RELATION
