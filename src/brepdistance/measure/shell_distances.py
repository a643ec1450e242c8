"""Distances from one face to all faces of its shell it runs parallel to."""
from __future__ import annotations

from dataclasses import dataclass
import logging

from brepdistance.config import LINEAR_EPS
from brepdistance.model.geometry_primitives import Point3, INVALID_POINT
from brepdistance.model.topology import Face, Shell
from brepdistance.measure.surface_pair import parallel_distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FaceDistance:
    face: Face
    distance: float
    point_from: Point3
    point_to: Point3


def face_distances(shell: Shell, distance_from: Face, touching_point: Point3 = INVALID_POINT) -> list[FaceDistance]:
    """
    Collect every face of `shell` a perpendicular distance to `distance_from` can be measured to.

    Args:
        shell: The shell to scan.
        distance_from: The reference face (skipped in the scan).
        touching_point: Where the reference face was picked; chooses among several solutions.

    Returns:
        One record per face with a non-zero perpendicular distance, in shell order.
    """
    result = []
    for face in shell.faces:
        if face is distance_from:
            continue
        uv_from, uv_to = parallel_distance(
            distance_from.surface, distance_from.domain, face.surface, face.domain, touching_point
        )
        if not (uv_from.is_valid and uv_to.is_valid):
            continue
        point_from = distance_from.surface.point_at(uv_from)
        point_to = face.surface.point_at(uv_to)
        distance = point_from.distance_to(point_to)
        if distance > LINEAR_EPS:
            result.append(FaceDistance(face, distance, point_from, point_to))
    logger.debug(f"Found {len(result)} of {len(shell.faces) - 1} faces at a perpendicular distance")
    return result
