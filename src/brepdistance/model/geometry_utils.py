from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import math
import numpy as np

from brepdistance.config import LINEAR_EPS, ANGULAR_EPS
from brepdistance.model.geometry_primitives import (
    Point2, Point3, Vector2, Vector3, BoundingRect, INVALID_POINT,
)

if TYPE_CHECKING:
    from numpy import typing as npt


def foot_on_line(point: Point3, line_point: Point3, line_direction: Vector3) -> Point3:
    """
    Perpendicular foot of `point` on the infinite line through `line_point`.

    Returns:
        The foot point, or INVALID_POINT if the direction is null.
    """
    denom = line_direction.dot(line_direction)
    if not denom > 0.0:
        return INVALID_POINT
    t = (point - line_point).dot(line_direction) / denom
    return line_point + line_direction * t


def closest_approach(
    p1: Point3,
    d1: Vector3,
    p2: Point3,
    d2: Vector3,
    eps: float = ANGULAR_EPS
) -> Optional[tuple[float, float, float]]:
    """
    Closest approach of two infinite lines L1(s) = p1 + s*d1 and L2(t) = p2 + t*d2.

    Args:
        p1: A point on the first line.
        d1: Direction of the first line (not necessarily unit length).
        p2: A point on the second line.
        d2: Direction of the second line.
        eps: Sine of the angle below which the lines are treated as parallel.

    Returns:
        (distance, s, t) with L1(s), L2(t) the closest points, or None for
        parallel (or degenerate) lines where no unique closest pair exists.

    Notes:
        Minimizing |w0 + s*d1 - t*d2|^2 with w0 = p1 - p2 gives the 2x2 system
          a s - b t = -d
          b s - c t = -e
        with a = d1.d1, b = d1.d2, c = d2.d2, d = d1.w0, e = d2.w0.
    """
    a = d1.dot(d1)
    b = d1.dot(d2)
    c = d2.dot(d2)
    if not (a > 0.0 and c > 0.0):
        return None
    den = a * c - b * b
    # den = |d1 x d2|^2
    if den <= (eps ** 2) * a * c:
        return None
    w0 = p1 - p2
    d = d1.dot(w0)
    e = d2.dot(w0)
    s = (b * e - c * d) / den
    t = (a * e - b * d) / den
    q1 = p1 + d1 * s
    q2 = p2 + d2 * t
    return q1.distance_to(q2), s, t


def line_sphere_parameters(
    origin: npt.ArrayLike,
    direction: npt.ArrayLike,
    center: npt.ArrayLike,
    radius: float,
    *,
    eps: float = 1e-12
) -> list[float]:
    """
    Parameters t where the line P(t) = P0 + t * v meets a circle (2D) or a sphere (3D).

    Args:
        origin: P0, a point on the line.
        direction: v, the line direction.
        center: Center of the circle / sphere.
        radius: Radius (non-negative).
        eps: Numerical tolerance for the degenerate direction and the tangency test.

    Returns:
        A list with 0, 1 (tangency) or 2 parameters, in increasing order.

    Notes:
        - Solves ||P0 + t*v - C||^2 = r^2, yielding a quadratic a t^2 + b t + c = 0 where:
          a = v·v
          b = 2 v·(P0 - C)
          c = ||P0 - C||^2 - r^2
    """
    p0 = np.asarray(origin, dtype=np.float64)
    v = np.asarray(direction, dtype=np.float64)
    w = p0 - np.asarray(center, dtype=np.float64)

    a = float(v @ v)
    # degenerate direction: no line to intersect
    if a < eps:
        return []

    b = 2.0 * float(v @ w)
    c = float(w @ w) - radius * radius
    disc = b * b - 4.0 * a * c

    # No real intersection
    if disc < -eps * max(1.0, b * b):
        return []

    if abs(disc) <= eps * max(1.0, b * b):
        return [-b / (2.0 * a)]

    sqrt_disc = math.sqrt(max(0.0, disc))
    return [(-b - sqrt_disc) / (2.0 * a), (-b + sqrt_disc) / (2.0 * a)]


def clip_parametric_line(
    origin: Point2,
    direction: Vector2,
    t_min: float,
    t_max: float,
    rect: BoundingRect
) -> Optional[tuple[float, float]]:
    """
    Clip the parametric 2D line origin + t * direction, t in [t_min, t_max], against `rect`.

    Liang-Barsky clipping: each rectangle side restricts the admissible parameter
    interval. Infinite bounds (of the interval or of the rectangle) are allowed.

    Returns:
        The clipped parameter interval (t0, t1), or None if the line misses the rectangle.
    """
    t0, t1 = t_min, t_max
    checks = (
        (-direction.x, origin.x - rect.left),
        (direction.x, rect.right - origin.x),
        (-direction.y, origin.y - rect.bottom),
        (direction.y, rect.top - origin.y),
    )
    for p, q in checks:
        if p == 0.0:
            # parallel to this side: inside or completely outside
            if q < 0.0:
                return None
            continue
        r = q / p
        if p < 0.0:
            t0 = max(t0, r)
        else:
            t1 = min(t1, r)
        if t0 > t1:
            return None
    return t0, t1


def adjust_periodic(uv: Point2, u_period: float, domain: BoundingRect) -> Point2:
    """
    Shift the periodic u-parameter by whole periods so that it falls into `domain` if possible.

    Args:
        uv: The parameter to adjust.
        u_period: Period of u, 0.0 for a non-periodic parameter.
        domain: The target domain.
    """
    if u_period <= 0.0 or not math.isfinite(domain.left):
        return uv
    u = domain.left + (uv.x - domain.left) % u_period
    # the upper end of a closed domain is equivalent to its lower end
    if u > domain.right + LINEAR_EPS and abs(u - u_period - domain.left) <= LINEAR_EPS:
        u -= u_period
    return Point2(u, uv.y)
