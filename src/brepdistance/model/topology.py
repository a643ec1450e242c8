"""B-Rep topology wrappers handed to the engine by feature-edit tools."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from brepdistance.model.geometry_primitives import Point3, BoundingRect
from brepdistance.model.curves import Curve
from brepdistance.model.surfaces import Surface


@dataclass(frozen=True, eq=False)
class Vertex:
    position: Point3


@dataclass(frozen=True, eq=False)
class Edge:
    """An edge with its trimmed 3D curve."""
    curve: Curve


@dataclass(frozen=True, eq=False)
class Face:
    """A trimmed face: its surface and the (u, v) domain it occupies."""
    surface: Surface
    domain: BoundingRect = field(default_factory=BoundingRect.infinite)


@dataclass(eq=False)
class Shell:
    """
    A connected set of faces. Faces are compared by identity, like the
    topological objects of a kernel.
    """
    faces: List[Face] = field(default_factory=list)

    def add_faces(self, new_faces: List[Face]) -> None:
        self.faces.extend(new_faces)
