"""
Geometric Primitives for the distance engine.

All types are immutable value types. Every coordinate type has an explicit
invalid value (all coordinates NaN) which is used instead of ``None`` to
signal "no geometric solution". Arithmetic on invalid values stays invalid.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Union, TYPE_CHECKING
import math
import numpy as np

from brepdistance.config import LINEAR_EPS, ANGULAR_EPS

if TYPE_CHECKING:
    import numpy.typing as npt

_NAN = float("nan")


class _Coordinates:
    """Validity, equality and hashing shared by the coordinate value types."""
    __slots__ = ()

    def _coords(self) -> tuple[float, ...]:
        raise NotImplementedError

    @property
    def is_valid(self) -> bool:
        return not any(math.isnan(c) for c in self._coords())

    def __iter__(self) -> Iterator[float]:
        return iter(self._coords())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        # all invalid values are the same sentinel
        if not self.is_valid or not other.is_valid:
            return not self.is_valid and not other.is_valid
        return self._coords() == other._coords()

    def __hash__(self) -> int:
        if not self.is_valid:
            return hash((type(self).__name__, "invalid"))
        return hash((type(self).__name__,) + self._coords())

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array(self._coords(), dtype=np.float64)


@dataclass(frozen=True, eq=False)
class Vector3(_Coordinates):
    """
    A vector in 3D space representing direction and magnitude.
    """
    x: float
    y: float
    z: float

    def _coords(self) -> tuple[float, float, float]:
        return self.x, self.y, self.z

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        if scalar == 0.0: raise ZeroDivisionError
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def is_null(self, eps: float = 0.0) -> bool:
        """True for a valid vector whose length does not exceed `eps`."""
        return self.is_valid and self.magnitude <= eps

    def normalized(self) -> Vector3:
        mag = self.magnitude
        if mag == 0.0: return ZERO_VECTOR
        return self / mag

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def is_parallel(self, other: Vector3, eps: float = ANGULAR_EPS) -> bool:
        """Same or opposite direction. Null and invalid vectors are parallel to nothing."""
        mags = self.magnitude * other.magnitude
        if not mags > 0.0:
            return False
        return self.cross(other).magnitude / mags <= eps

    def is_perpendicular(self, other: Vector3, eps: float = ANGULAR_EPS) -> bool:
        mags = self.magnitude * other.magnitude
        if not mags > 0.0:
            return False
        return abs(self.dot(other)) / mags <= eps


@dataclass(frozen=True, eq=False)
class Point3(_Coordinates):
    """A location in 3D space."""
    x: float
    y: float
    z: float

    def _coords(self) -> tuple[float, float, float]:
        return self.x, self.y, self.z

    def __add__(self, other: Vector3) -> Point3:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector3):
            return Point3(self.x + other.x, self.y + other.y, self.z + other.z)
        raise TypeError("Can only add a Vector3 to a Point3.")

    def __sub__(self, other: Union[Vector3, Point3]) -> Union[Vector3, Point3]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector3):
            return Point3(self.x - other.x, self.y - other.y, self.z - other.z)
        raise TypeError("Can only subtract a Vector3 or Point3 from a Point3.")

    def distance_to(self, other: Point3) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2)

    def midpoint(self, other: Point3) -> Point3:
        return Point3((self.x + other.x) / 2.0, (self.y + other.y) / 2.0, (self.z + other.z) / 2.0)

    def to_vector(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)


@dataclass(frozen=True, eq=False)
class Vector2(_Coordinates):
    """A direction in the (u, v) parameter space of a surface."""
    x: float
    y: float

    def _coords(self) -> tuple[float, float]:
        return self.x, self.y

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True, eq=False)
class Point2(_Coordinates):
    """A position in the (u, v) parameter space of a surface."""
    x: float
    y: float

    def _coords(self) -> tuple[float, float]:
        return self.x, self.y

    def __add__(self, other: Vector2) -> Point2:
        if isinstance(other, Vector2):
            return Point2(self.x + other.x, self.y + other.y)
        raise TypeError("Can only add a Vector2 to a Point2.")

    def __sub__(self, other: Union[Vector2, Point2]) -> Union[Vector2, Point2]:
        if isinstance(other, Point2):
            return Vector2(self.x - other.x, self.y - other.y)
        if isinstance(other, Vector2):
            return Point2(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Vector2 or Point2 from a Point2.")

    def distance_to(self, other: Point2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def midpoint(self, other: Point2) -> Point2:
        return Point2((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)


INVALID_VECTOR = Vector3(_NAN, _NAN, _NAN)
ZERO_VECTOR = Vector3(0.0, 0.0, 0.0)
INVALID_POINT = Point3(_NAN, _NAN, _NAN)
INVALID_POINT2 = Point2(_NAN, _NAN)

X_AXIS = Vector3(1.0, 0.0, 0.0)
Y_AXIS = Vector3(0.0, 1.0, 0.0)
Z_AXIS = Vector3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class BoundingRect:
    """
    Rectangular (u, v) domain of a surface or trimmed face. Bounds may be infinite.
    """
    left: float
    right: float
    bottom: float
    top: float

    @classmethod
    def infinite(cls) -> BoundingRect:
        return cls(-math.inf, math.inf, -math.inf, math.inf)

    def center(self) -> Point2:
        """Center of the domain; an axis without two finite bounds contributes 0.0."""
        u = (self.left + self.right) / 2.0 if math.isfinite(self.left) and math.isfinite(self.right) else 0.0
        v = (self.bottom + self.top) / 2.0 if math.isfinite(self.bottom) and math.isfinite(self.top) else 0.0
        return Point2(u, v)

    def contains(self, uv: Point2, eps: float = LINEAR_EPS) -> bool:
        return (self.left - eps <= uv.x <= self.right + eps
                and self.bottom - eps <= uv.y <= self.top + eps)


@dataclass(frozen=True)
class Plane:
    """
    An oriented plane with an origin and two orthonormal in-plane axes.

    Local coordinates are (x, y) along the in-plane axes and z along the normal.
    Build instances with `from_normal`, which derives orthonormal axes.
    """
    origin: Point3
    x_axis: Vector3
    y_axis: Vector3

    def __post_init__(self) -> None:
        if self.x_axis.cross(self.y_axis).is_null(LINEAR_EPS):
            raise ValueError(f"Degenerate plane axes: {self.x_axis}, {self.y_axis}")

    @classmethod
    def from_normal(cls, origin: Point3, normal: Vector3) -> Plane:
        """
        Plane through `origin` perpendicular to `normal`. The in-plane axes are arbitrary
        but deterministic.

        Raises:
            ValueError: If `normal` is null or invalid.
        """
        if not normal.is_valid or normal.is_null(LINEAR_EPS):
            raise ValueError(f"Plane normal must be a non-null vector, got {normal}")
        n = normal.normalized()
        # helper axis: the world axis least aligned with the normal
        helper = min((X_AXIS, Y_AXIS, Z_AXIS), key=lambda axis: abs(axis.dot(n)))
        x_axis = (helper - n * helper.dot(n)).normalized()
        y_axis = n.cross(x_axis)
        return cls(origin, x_axis, y_axis)

    @property
    def normal(self) -> Vector3:
        return self.x_axis.cross(self.y_axis).normalized()

    def to_local(self, point: Point3) -> Point3:
        d = point - self.origin
        return Point3(d.dot(self.x_axis), d.dot(self.y_axis), d.dot(self.normal))

    def to_global(self, local: Union[Point3, Point2]) -> Point3:
        z = local.z if isinstance(local, Point3) else 0.0
        return self.origin + self.x_axis * local.x + self.y_axis * local.y + self.normal * z

    def vector_to_global(self, local: Union[Vector3, Vector2]) -> Vector3:
        z = local.z if isinstance(local, Vector3) else 0.0
        return self.x_axis * local.x + self.y_axis * local.y + self.normal * z

    def project(self, point: Point3) -> Point2:
        """In-plane (x, y) coordinates of the orthogonal projection of `point`."""
        d = point - self.origin
        return Point2(d.dot(self.x_axis), d.dot(self.y_axis))

    def signed_distance(self, point: Point3) -> float:
        return (point - self.origin).dot(self.normal)

    def foot_point(self, point: Point3) -> Point3:
        """Orthogonal projection of `point` onto the plane."""
        return point - self.normal * self.signed_distance(point)

    def line_intersection(self, point: Point3, direction: Vector3) -> Point3:
        """Intersection with the line `point + t * direction`; invalid when parallel."""
        n = self.normal
        denom = direction.dot(n)
        if direction.magnitude == 0.0 or abs(denom) <= ANGULAR_EPS * direction.magnitude:
            return INVALID_POINT
        t = (self.origin - point).dot(n) / denom
        return point + direction * t

    def intersect(self, other: Plane) -> tuple[Point3, Vector3]:
        """
        Intersection line of two planes.

        Returns:
            A point on the line and the unit line direction, or
            (INVALID_POINT, INVALID_VECTOR) for parallel planes.
        """
        n1, n2 = self.normal, other.normal
        direction = n1.cross(n2)
        denom = direction.dot(direction)
        if denom <= ANGULAR_EPS ** 2:
            return INVALID_POINT, INVALID_VECTOR
        d1 = n1.dot(self.origin.to_vector())
        d2 = n2.dot(other.origin.to_vector())
        n12 = n1.dot(n2)
        p = (n1 * (d1 * n2.dot(n2) - d2 * n12) + n2 * (d2 * n1.dot(n1) - d1 * n12)) / denom
        return Point3(p.x, p.y, p.z), direction.normalized()
