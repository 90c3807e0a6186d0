"""Reference backend: the pure-Python modules, unchanged."""

from __future__ import annotations

from dataclasses import dataclass

from darwin_atlas.core import operators
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.quaternion import dicyclic
from darwin_atlas.symmetry import approx, exact
from darwin_atlas.symmetry.approx import NearestTransform
from darwin_atlas.symmetry.exact import SymmetryStats


@dataclass(frozen=True, slots=True)
class ReferenceBackend:
    name: str = "reference"

    def shift(self, seq: Sequence, k: int) -> Sequence:
        return operators.shift(seq, k)

    def reverse(self, seq: Sequence) -> Sequence:
        return operators.reverse(seq)

    def complement(self, seq: Sequence) -> Sequence:
        return operators.complement(seq)

    def reverse_complement(self, seq: Sequence) -> Sequence:
        return operators.reverse_complement(seq)

    def hamming_distance(self, a: Sequence, b: Sequence) -> int:
        return operators.hamming_distance(a, b)

    def orbit_size(self, seq: Sequence) -> int:
        return exact.orbit_size(seq)

    def orbit_ratio(self, seq: Sequence) -> float:
        return exact.orbit_ratio(seq)

    def is_palindrome(self, seq: Sequence) -> bool:
        return exact.is_palindrome(seq)

    def is_rc_fixed(self, seq: Sequence) -> bool:
        return exact.is_rc_fixed(seq)

    def rotational_period(self, seq: Sequence) -> int:
        return exact.rotational_period(seq)

    def symmetry_stats(self, seq: Sequence) -> SymmetryStats:
        return exact.compute_symmetry_stats(seq)

    def dmin(self, seq: Sequence, include_rc: bool = True) -> int:
        return approx.dmin(seq, include_rc)

    def dmin_normalized(self, seq: Sequence, include_rc: bool = True) -> float:
        return approx.dmin_normalized(seq, include_rc)

    def nearest_transform(self, seq: Sequence, include_rc: bool = True) -> tuple[int, NearestTransform]:
        return approx.nearest_transform(seq, include_rc)

    def dicyclic_order(self, n: int) -> int:
        return dicyclic.order(dicyclic.DicyclicGroup(n))

    def verify_double_cover(self, n: int) -> bool:
        return dicyclic.verify_double_cover(dicyclic.DicyclicGroup(n))
