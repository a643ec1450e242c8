"""
Surface Geometry
================
Minimal analytic surfaces standing in for the surfaces of B-Rep faces.

Classes:
    Surface: Abstract surface interface, evaluated over (u, v) parameters.
    PlaneSurface: (u, v) are the in-plane coordinates of its plane.
    CylindricalSurface: u is the angle around the axis, v the length along it.
    SphericalSurface: u is the longitude, v the latitude.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import math

from brepdistance.model.geometry_primitives import Point2, Point3, Vector3, Plane
from brepdistance.model.geometry_utils import line_sphere_parameters


class Surface(ABC):
    """
    Abstract base class for parametric surfaces.
    """

    @abstractmethod
    def point_at(self, uv: Point2) -> Point3:
        pass

    @abstractmethod
    def normal_at(self, uv: Point2) -> Vector3:
        """Unit surface normal at `uv`."""
        pass

    @abstractmethod
    def position_of(self, point: Point3) -> Point2:
        """Parameters of the surface point closest to `point`."""
        pass

    @abstractmethod
    def line_intersection(self, point: Point3, direction: Vector3) -> list[Point2]:
        """Parameters of all intersections with the infinite line `point + t * direction`."""
        pass

    @property
    def u_period(self) -> float:
        """Period of the u-parameter, 0.0 if u is not periodic."""
        return 0.0


@dataclass(frozen=True)
class PlaneSurface(Surface):
    plane: Plane

    @classmethod
    def from_normal(cls, origin: Point3, normal: Vector3) -> PlaneSurface:
        return cls(Plane.from_normal(origin, normal))

    @property
    def location(self) -> Point3:
        return self.plane.origin

    @property
    def normal(self) -> Vector3:
        return self.plane.normal

    def point_at(self, uv: Point2) -> Point3:
        return self.plane.to_global(uv)

    def normal_at(self, uv: Point2) -> Vector3:
        return self.plane.normal

    def position_of(self, point: Point3) -> Point2:
        return self.plane.project(point)

    def line_intersection(self, point: Point3, direction: Vector3) -> list[Point2]:
        ip = self.plane.line_intersection(point, direction)
        if not ip.is_valid:
            return []
        return [self.plane.project(ip)]


@dataclass(frozen=True)
class CylindricalSurface(Surface):
    """
    Circular cylinder. `frame.origin` lies on the axis and `frame.normal` is the
    unit axis direction; u is measured from `frame.x_axis`.
    """
    frame: Plane
    radius: float

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Cylinder radius must be positive, got {self.radius}")

    @classmethod
    def from_axis(cls, location: Point3, direction: Vector3, radius: float) -> CylindricalSurface:
        return cls(Plane.from_normal(location, direction), radius)

    @property
    def axis_location(self) -> Point3:
        return self.frame.origin

    @property
    def axis_direction(self) -> Vector3:
        return self.frame.normal

    @property
    def u_period(self) -> float:
        return 2.0 * math.pi

    def point_at(self, uv: Point2) -> Point3:
        return self.frame.to_global(Point3(self.radius * math.cos(uv.x), self.radius * math.sin(uv.x), uv.y))

    def normal_at(self, uv: Point2) -> Vector3:
        return self.frame.x_axis * math.cos(uv.x) + self.frame.y_axis * math.sin(uv.x)

    def position_of(self, point: Point3) -> Point2:
        local = self.frame.to_local(point)
        return Point2(math.atan2(local.y, local.x) % (2.0 * math.pi), local.z)

    def line_intersection(self, point: Point3, direction: Vector3) -> list[Point2]:
        # intersect in the cross-section plane, where the cylinder is a circle
        local = self.frame.to_local(point)
        dx = direction.dot(self.frame.x_axis)
        dy = direction.dot(self.frame.y_axis)
        ts = line_sphere_parameters((local.x, local.y), (dx, dy), (0.0, 0.0), self.radius)
        return [self.position_of(point + direction * t) for t in ts]


@dataclass(frozen=True)
class SphericalSurface(Surface):
    center: Point3
    radius: float

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    @property
    def u_period(self) -> float:
        return 2.0 * math.pi

    def normal_at(self, uv: Point2) -> Vector3:
        return Vector3(
            math.cos(uv.y) * math.cos(uv.x),
            math.cos(uv.y) * math.sin(uv.x),
            math.sin(uv.y)
        )

    def point_at(self, uv: Point2) -> Point3:
        return self.center + self.normal_at(uv) * self.radius

    def position_of(self, point: Point3) -> Point2:
        d = point - self.center
        horizontal = math.hypot(d.x, d.y)
        return Point2(math.atan2(d.y, d.x) % (2.0 * math.pi), math.atan2(d.z, horizontal))

    def line_intersection(self, point: Point3, direction: Vector3) -> list[Point2]:
        ts = line_sphere_parameters(point.to_array(), direction.to_array(), self.center.to_array(), self.radius)
        return [self.position_of(point + direction * t) for t in ts]
