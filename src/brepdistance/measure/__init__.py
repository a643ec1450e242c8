"""
Distance Measurement Engine
==========================
Resolves measurement segments between picked B-Rep objects.

Why is this file needed?
------------------------
1. Relations: `resolve` returns the segment between two objects and the
   freedom left once its length is fixed.
2. Surfaces: `parallel_distance` finds perpendicular connections between two
   surfaces, `face_distances` scans a whole shell with it.

Note: This package is pure Python/NumPy/SciPy, synchronous and stateless.
"""
from brepdistance.measure.relation import (
    FreedomKind, Relation, NO_RELATION, FaceEdgeDistance, NO_FACE_EDGE_DISTANCE,
    resolve, distance_from_face_to_edge, distance_from_axis,
)
from brepdistance.measure.surface_pair import parallel_distance
from brepdistance.measure.shell_distances import FaceDistance, face_distances
