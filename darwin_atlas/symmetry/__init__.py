"""Exact and approximate symmetry of sequences under D_n."""

from .approx import NearestTransform, dmin, dmin_normalized, nearest_transform
from .exact import (
    SymmetryStats,
    compute_orbit,
    compute_symmetry_stats,
    is_palindrome,
    is_rc_fixed,
    orbit_ratio,
    orbit_size,
    rotational_period,
)

__all__ = [
    "NearestTransform",
    "SymmetryStats",
    "compute_orbit",
    "compute_symmetry_stats",
    "dmin",
    "dmin_normalized",
    "is_palindrome",
    "is_rc_fixed",
    "nearest_transform",
    "orbit_ratio",
    "orbit_size",
    "rotational_period",
]
