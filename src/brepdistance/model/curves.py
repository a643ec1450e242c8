"""
Curve Geometry
==============
Minimal analytic curves standing in for the trimmed 3D curves of B-Rep edges.

Every curve is parametrized over t in [0, 1] (start to end). The distance
engine only relies on the `Curve` interface; `Line` and `Arc` are the
implementations shipped with the package.

Classes:
    Curve: Abstract curve interface.
    Line: Straight segment (the engine also uses its infinite extension).
    Arc: Circular arc in an arbitrary plane.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
import math
from typing import Optional

import numpy as np
from scipy.optimize import minimize

from brepdistance.config import (
    LINEAR_EPS, ANGULAR_EPS, NEAREST_POINT_MAX_ITERATIONS, NEAREST_POINT_TOLERANCE, NEAREST_POINT_SEED,
)
from brepdistance.model.geometry_primitives import Point2, Point3, Vector3, Plane
from brepdistance.model.geometry_utils import foot_on_line

logger = logging.getLogger(__name__)


class Curve(ABC):
    """
    Abstract base class for parametric 3D curves.
    """

    @abstractmethod
    def point_at(self, t: float) -> Point3:
        """Point at the normalized parameter t (0 = start, 1 = end)."""
        pass

    @abstractmethod
    def direction_at(self, t: float) -> Vector3:
        """First derivative with respect to the normalized parameter."""
        pass

    @abstractmethod
    def extrema(self, direction: Vector3) -> list[float]:
        """
        Parameters where the curve is extremal in `direction`, i.e. where the
        tangent is perpendicular to it. Empty if there are none.
        """
        pass

    @abstractmethod
    def plane(self) -> Optional[Plane]:
        """The plane containing the curve, or None if there is no unique one."""
        pass

    @property
    def start_point(self) -> Point3:
        return self.point_at(0.0)

    @property
    def end_point(self) -> Point3:
        return self.point_at(1.0)

    @property
    def is_planar(self) -> bool:
        return self.plane() is not None


@dataclass(frozen=True)
class Line(Curve):
    """A straight line segment between two points."""
    start: Point3
    end: Point3

    def __post_init__(self) -> None:
        if not self.start.distance_to(self.end) > LINEAR_EPS:
            raise ValueError(f"Degenerate line: {self.start} -> {self.end}")

    @property
    def start_direction(self) -> Vector3:
        """Direction of the line, start to end (not normalized)."""
        return self.end - self.start

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def point_at(self, t: float) -> Point3:
        return self.start + self.start_direction * t

    def direction_at(self, t: float) -> Vector3:
        return self.start_direction

    def extrema(self, direction: Vector3) -> list[float]:
        return []

    def plane(self) -> Optional[Plane]:
        return None

    def foot_point(self, point: Point3) -> Point3:
        """Perpendicular foot of `point` on the infinite extension of the line."""
        return foot_on_line(point, self.start, self.start_direction)

    def parameter_of(self, point: Point3) -> float:
        d = self.start_direction
        return (point - self.start).dot(d) / d.dot(d)


@dataclass(frozen=True)
class Arc(Curve):
    """
    A circular arc. The angle is measured in `frame` from its x-axis towards its
    y-axis; the arc runs from `start_angle` over `sweep` (negative = clockwise).
    """
    frame: Plane
    radius: float
    start_angle: float = 0.0
    sweep: float = 2.0 * math.pi

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Arc radius must be positive, got {self.radius}")
        if self.sweep == 0.0:
            raise ValueError("Arc sweep must not be zero.")

    @classmethod
    def from_center(
        cls,
        center: Point3,
        normal: Vector3,
        radius: float,
        start_angle: float = 0.0,
        sweep: float = 2.0 * math.pi
    ) -> Arc:
        return cls(Plane.from_normal(center, normal), radius, start_angle, sweep)

    @property
    def center(self) -> Point3:
        return self.frame.origin

    def _angle(self, t: float) -> float:
        return self.start_angle + t * self.sweep

    def point_at(self, t: float) -> Point3:
        a = self._angle(t)
        return self.frame.to_global(Point2(self.radius * math.cos(a), self.radius * math.sin(a)))

    def direction_at(self, t: float) -> Vector3:
        a = self._angle(t)
        tangent = self.frame.x_axis * (-math.sin(a)) + self.frame.y_axis * math.cos(a)
        return tangent * (self.radius * self.sweep)

    def extrema(self, direction: Vector3) -> list[float]:
        dx = direction.dot(self.frame.x_axis)
        dy = direction.dot(self.frame.y_axis)
        if math.hypot(dx, dy) <= ANGULAR_EPS * direction.magnitude:
            # direction perpendicular to the arc plane: every point is extremal
            return []
        maximum = math.atan2(dy, dx)
        result = []
        for angle in (maximum, maximum + math.pi):
            for k in range(-2, 3):
                t = (angle + 2.0 * math.pi * k - self.start_angle) / self.sweep
                if -1e-12 <= t <= 1.0 + 1e-12:
                    result.append(min(max(t, 0.0), 1.0))
        return sorted(set(result))

    def plane(self) -> Optional[Plane]:
        return self.frame


def _line_in_plane(line: Line, plane: Plane, eps: float) -> bool:
    return abs(plane.signed_distance(line.start)) <= eps and abs(plane.signed_distance(line.end)) <= eps


def common_plane(curve1: Curve, curve2: Curve, eps: float = LINEAR_EPS) -> Optional[Plane]:
    """
    The plane containing both curves, or None if there is no unique one
    (skew curves, or two coincident lines).
    """
    plane1, plane2 = curve1.plane(), curve2.plane()
    if plane1 is not None and plane2 is not None:
        if plane1.normal.is_parallel(plane2.normal) and abs(plane1.signed_distance(plane2.origin)) <= eps:
            return plane1
        return None
    if plane1 is not None:
        return plane1 if isinstance(curve2, Line) and _line_in_plane(curve2, plane1, eps) else None
    if plane2 is not None:
        return plane2 if isinstance(curve1, Line) and _line_in_plane(curve1, plane2, eps) else None
    if isinstance(curve1, Line) and isinstance(curve2, Line):
        d1 = curve1.start_direction
        offset = curve2.start - curve1.start
        normal = d1.cross(curve2.start_direction)
        if normal.is_null(ANGULAR_EPS * d1.magnitude * curve2.length):
            # parallel lines span a plane unless they coincide
            normal = d1.cross(offset)
            if normal.is_null(eps * d1.magnitude):
                return None
        elif abs(offset.dot(normal.normalized())) > eps:
            return None
        return Plane.from_normal(curve1.start, normal)
    return None


def nearest_points(
    curve1: Curve,
    curve2: Curve,
    seed: tuple[float, float] = NEAREST_POINT_SEED,
    *,
    max_iterations: int = NEAREST_POINT_MAX_ITERATIONS,
    tolerance: float = NEAREST_POINT_TOLERANCE
) -> Optional[tuple[float, float]]:
    """
    Local minimum of the distance between two curves.

    Minimizes |c1(t1) - c2(t2)|^2 over the box [0, 1] x [0, 1] with L-BFGS-B,
    starting from `seed`. The iteration count is capped so that a slowly
    converging configuration cannot stall an interactive caller.

    Args:
        curve1: First curve.
        curve2: Second curve.
        seed: Start parameters (t1, t2).
        max_iterations: Iteration cap of the minimizer.
        tolerance: Gradient and relative objective tolerance.

    Returns:
        The parameters (t1, t2) of the nearest pair, or None if the search did
        not converge within `max_iterations`.
    """
    def objective(params: np.ndarray) -> tuple[float, np.ndarray]:
        t1, t2 = float(params[0]), float(params[1])
        diff = curve1.point_at(t1).to_array() - curve2.point_at(t2).to_array()
        grad = np.array([
            2.0 * float(diff @ curve1.direction_at(t1).to_array()),
            -2.0 * float(diff @ curve2.direction_at(t2).to_array()),
        ])
        return float(diff @ diff), grad

    result = minimize(
        objective,
        np.asarray(seed, dtype=np.float64),
        jac=True,
        method="L-BFGS-B",
        bounds=[(0.0, 1.0), (0.0, 1.0)],
        options={"maxiter": max_iterations, "ftol": tolerance, "gtol": tolerance},
    )
    if result.status == 1 or not np.all(np.isfinite(result.x)):
        logger.debug(f"Nearest point search did not converge after {result.nit} iterations: {result.message}")
        return None
    return float(result.x[0]), float(result.x[1])
