"""Backend protocol surface (no implementations).

Every operation of the symmetry core is exposed through one
:class:`SymmetryBackend` Protocol so that independently written
implementations can be run side by side on the same inputs.

Conformance
===========

Two backends conform to each other when, for every input:

- integer, boolean and sequence results are equal;
- floating-point results differ by less than ``1e-12``;
- ``nearest_transform`` reports the same ``(family, k, distance)``, using the
  fixed enumeration order S^1..S^(n-1), R-shifts, RC-shifts for ties;
- invalid input raises the same typed error
  (:class:`~darwin_atlas.errors.LengthMismatchError`,
  :class:`~darwin_atlas.errors.InvalidParameterError`).

:mod:`darwin_atlas.validation.crossval` checks this contract over a seeded
corpus.
"""

from __future__ import annotations

from typing import Protocol

from darwin_atlas.core.sequence import Sequence
from darwin_atlas.symmetry.approx import NearestTransform
from darwin_atlas.symmetry.exact import SymmetryStats


class SymmetryBackend(Protocol):
    """One implementation of the sequence and group algebra."""

    name: str

    def shift(self, seq: Sequence, k: int) -> Sequence:
        """Cyclic shift ``result[i] = seq[(i + k) mod n]``."""

    def reverse(self, seq: Sequence) -> Sequence:
        """Reverse the sequence."""

    def complement(self, seq: Sequence) -> Sequence:
        """Complement every base."""

    def reverse_complement(self, seq: Sequence) -> Sequence:
        """Reverse complement."""

    def hamming_distance(self, a: Sequence, b: Sequence) -> int:
        """Mismatch count; raises on unequal lengths."""

    def orbit_size(self, seq: Sequence) -> int:
        """Size of the D_n orbit."""

    def orbit_ratio(self, seq: Sequence) -> float:
        """Orbit size over 2n (1.0 for the empty sequence)."""

    def is_palindrome(self, seq: Sequence) -> bool:
        """Whether ``seq`` is fixed by R."""

    def is_rc_fixed(self, seq: Sequence) -> bool:
        """Whether ``seq`` is fixed by RC."""

    def rotational_period(self, seq: Sequence) -> int:
        """Smallest k > 0 with S^k(seq) == seq."""

    def symmetry_stats(self, seq: Sequence) -> SymmetryStats:
        """All exact statistics at once."""

    def dmin(self, seq: Sequence, include_rc: bool = True) -> int:
        """Minimum distance to a non-identity transform."""

    def dmin_normalized(self, seq: Sequence, include_rc: bool = True) -> float:
        """``dmin / n`` (0.0 for the empty sequence)."""

    def nearest_transform(self, seq: Sequence, include_rc: bool = True) -> tuple[int, NearestTransform]:
        """``(dmin, witness)`` with first-minimum tie-breaking."""

    def dicyclic_order(self, n: int) -> int:
        """Order of Dic_n."""

    def verify_double_cover(self, n: int) -> bool:
        """Whether Dic_n -> D_n checks out as a 2-to-1 homomorphism."""
