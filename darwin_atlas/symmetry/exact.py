"""Exact symmetry analysis under the dihedral group action.

Orbit sizes, fixed points and rotational periods for sequences acted on by
D_n (shifts and reverse-shifts).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from darwin_atlas.core.operators import reverse, reverse_complement, shift
from darwin_atlas.core.sequence import Sequence


@dataclass(frozen=True, slots=True)
class SymmetryStats:
    """Symmetry summary of a single sequence, recomputed on every call."""

    length: int
    orbit_size: int
    orbit_ratio: float
    is_palindrome: bool
    is_rc_fixed: bool
    rotational_period: int

    def to_dict(self) -> dict[str, int | float | bool]:
        return asdict(self)


def compute_orbit(seq: Sequence) -> frozenset[Sequence]:
    """Return every distinct S^k(seq) and S^k(R(seq)) for k in 0..n-1.

    The empty sequence is its own orbit.
    """
    n = len(seq)
    if n == 0:
        return frozenset({seq})
    rev = reverse(seq)
    orbit: set[Sequence] = set()
    for k in range(n):
        orbit.add(shift(seq, k))
        orbit.add(shift(rev, k))
    return frozenset(orbit)


def orbit_size(seq: Sequence) -> int:
    """Size of the D_n orbit; always divides 2n.

    2n means no symmetry, n a palindrome without rotational symmetry, and
    2n/k a k-fold rotational symmetry.
    """
    return len(compute_orbit(seq))


def orbit_ratio(seq: Sequence) -> float:
    """Normalized orbit size ``|orbit| / 2n`` in [1/(2n), 1]; 1.0 when n=0."""
    n = len(seq)
    if n == 0:
        return 1.0
    return orbit_size(seq) / (2 * n)


def is_palindrome(seq: Sequence) -> bool:
    return seq == reverse(seq)


def is_rc_fixed(seq: Sequence) -> bool:
    return seq == reverse_complement(seq)


def _divisors(n: int) -> list[int]:
    small: list[int] = []
    large: list[int] = []
    d = 1
    while d * d <= n:
        if n % d == 0:
            small.append(d)
            if d != n // d:
                large.append(n // d)
        d += 1
    return small + large[::-1]


def rotational_period(seq: Sequence) -> int:
    """Smallest k > 0 with S^k(seq) == seq.

    Only divisors of n can be periods of a circular sequence, so those are
    tested in increasing order. Returns 1 for the empty sequence.
    """
    n = len(seq)
    if n == 0:
        return 1
    for k in _divisors(n):
        if k == n:
            break
        if shift(seq, k) == seq:
            return k
    return n


def compute_symmetry_stats(seq: Sequence) -> SymmetryStats:
    return SymmetryStats(
        length=len(seq),
        orbit_size=orbit_size(seq),
        orbit_ratio=orbit_ratio(seq),
        is_palindrome=is_palindrome(seq),
        is_rc_fixed=is_rc_fixed(seq),
        rotational_period=rotational_period(seq),
    )
