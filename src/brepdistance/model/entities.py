"""
Measurement Entities
====================
The tagged union the distance engine dispatches on.

Why is this file needed?
------------------------
1. Classification happens once: every picked object (vertex, edge, face, or a
   bare point / curve) is turned into exactly one of `PointEntity`,
   `CurveEntity` or `FaceEntity`, together with the sub-kind the engine cares
   about (line / general curve, plane / cylinder / other surface).
2. Ordering: `EntityCategory` defines the fixed total order FACE < POINT < CURVE
   used to canonicalize a pair before dispatch, so each pair of categories is
   handled by exactly one branch.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Union

from brepdistance.model.geometry_primitives import Point3, BoundingRect
from brepdistance.model.curves import Curve, Line
from brepdistance.model.surfaces import Surface, PlaneSurface, CylindricalSurface
from brepdistance.model.topology import Vertex, Edge, Face


class EntityCategory(IntEnum):
    """Canonical dispatch order of the entity categories."""
    FACE = 0
    POINT = 1
    CURVE = 2


class CurveKind(StrEnum):
    LINE = "line"
    GENERAL = "general"


class SurfaceKind(StrEnum):
    PLANE = "plane"
    CYLINDER = "cylinder"
    OTHER = "other"


@dataclass(frozen=True)
class PointEntity:
    position: Point3
    category: EntityCategory = field(default=EntityCategory.POINT, init=False)


@dataclass(frozen=True)
class CurveEntity:
    curve: Curve
    kind: CurveKind
    category: EntityCategory = field(default=EntityCategory.CURVE, init=False)

    @classmethod
    def of(cls, curve: Curve) -> CurveEntity:
        return cls(curve, CurveKind.LINE if isinstance(curve, Line) else CurveKind.GENERAL)


@dataclass(frozen=True)
class FaceEntity:
    surface: Surface
    domain: BoundingRect
    kind: SurfaceKind
    category: EntityCategory = field(default=EntityCategory.FACE, init=False)

    @classmethod
    def of(cls, surface: Surface, domain: BoundingRect) -> FaceEntity:
        match surface:
            case PlaneSurface():
                kind = SurfaceKind.PLANE
            case CylindricalSurface():
                kind = SurfaceKind.CYLINDER
            case _:
                kind = SurfaceKind.OTHER
        return cls(surface, domain, kind)


Entity = Union[PointEntity, CurveEntity, FaceEntity]

# Anything a caller may pick
Measurable = Union[Entity, Vertex, Edge, Face, Point3, Curve]


def as_entity(obj: Measurable) -> Entity:
    """
    Classify a picked object.

    Raises:
        TypeError: If `obj` is not a point, curve, face or one of their topological owners.
    """
    match obj:
        case PointEntity() | CurveEntity() | FaceEntity():
            return obj
        case Vertex(position=position):
            return PointEntity(position)
        case Point3():
            return PointEntity(obj)
        case Edge(curve=curve):
            return CurveEntity.of(curve)
        case Curve():
            return CurveEntity.of(obj)
        case Face(surface=surface, domain=domain):
            return FaceEntity.of(surface, domain)
    raise TypeError(f"Cannot measure objects of type {type(obj).__name__}")
