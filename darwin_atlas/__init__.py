"""Darwin Atlas public interface.

Operator-defined symmetries of DNA sequences under the dihedral group, and a
quaternion check that Dic_n double-covers D_n. Backends and the consistency
contract live under ``darwin_atlas.backends`` and ``darwin_atlas.validation``;
the foreign-call layer is ``darwin_atlas.ffi``.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .core import (
    Sequence,
    Transform,
    TransformFamily,
    complement,
    hamming_distance,
    reverse,
    reverse_complement,
    shift,
)
from .quaternion import DicyclicGroup, Quaternion, dicyclic_element, order, project_to_dihedral, verify_double_cover
from .symmetry import (
    NearestTransform,
    SymmetryStats,
    compute_orbit,
    compute_symmetry_stats,
    dmin,
    dmin_normalized,
    is_palindrome,
    is_rc_fixed,
    nearest_transform,
    orbit_ratio,
    orbit_size,
    rotational_period,
)

__all__ = [
    "DicyclicGroup",
    "NearestTransform",
    "Quaternion",
    "Sequence",
    "SymmetryStats",
    "Transform",
    "TransformFamily",
    "complement",
    "compute_orbit",
    "compute_symmetry_stats",
    "dicyclic_element",
    "dmin",
    "dmin_normalized",
    "hamming_distance",
    "is_palindrome",
    "is_rc_fixed",
    "nearest_transform",
    "orbit_ratio",
    "orbit_size",
    "order",
    "project_to_dihedral",
    "reverse",
    "reverse_complement",
    "rotational_period",
    "shift",
    "verify_double_cover",
]
