"""
Configuration & Numeric Tolerances
==================================
This module serves as the central registry for the numeric constants used by
the distance engine.

Why is this file needed?
------------------------
1. Consistency: Every geometric test ("are these directions parallel?",
   "is this vector null?") must use the same tolerance, otherwise swapping the
   arguments of a query could flip a branch decision.
2. Responsiveness: The iterative nearest-point search runs once per mouse move,
   so its iteration cap lives here next to its convergence tolerance.

Exports:
    LINEAR_EPS (float): Length below which two positions are considered equal.
    ANGULAR_EPS (float): Sine of the angle below which two directions are parallel.
    NEAREST_POINT_MAX_ITERATIONS (int): Iteration cap of the curve/curve search.
    NEAREST_POINT_TOLERANCE (float): Gradient tolerance of the curve/curve search.
"""

# Global Constants
LINEAR_EPS: float = 1e-8
ANGULAR_EPS: float = 1e-8

NEAREST_POINT_MAX_ITERATIONS: int = 100
NEAREST_POINT_TOLERANCE: float = 1e-12

# Seed parameters of the curve/curve search (curve midpoints)
NEAREST_POINT_SEED: tuple[float, float] = (0.5, 0.5)
