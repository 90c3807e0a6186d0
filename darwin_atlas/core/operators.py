"""Sequence operators that generate the dihedral group action.

``shift`` (S) and ``reverse`` (R) generate D_n = <S, R | S^n = R^2 = 1,
RSR = S^-1> acting on circular sequences of length n. ``complement`` (K)
commutes with both, and ``reverse_complement`` is RC = R.K = K.R.
"""

from __future__ import annotations

import random

from darwin_atlas.core.bases import Base, complement_code
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.errors import InvalidParameterError, LengthMismatchError


def shift(seq: Sequence, k: int) -> Sequence:
    """Cyclic shift S^k: ``result[i] = seq[(i + k) mod n]``.

    ``k`` must be non-negative; it is reduced modulo ``n`` before rotating.
    The empty sequence is returned unchanged for any ``k``.
    """
    if k < 0:
        raise InvalidParameterError(f"Shift amount must be non-negative, got {k}")
    n = len(seq)
    if n == 0:
        return seq
    k %= n
    codes = seq.codes
    return Sequence(codes[k:] + codes[:k])


def reverse(seq: Sequence) -> Sequence:
    """Reverse R: ``result[i] = seq[n - 1 - i]``."""
    return Sequence(seq.codes[::-1])


def complement(seq: Sequence) -> Sequence:
    """Watson-Crick complement K applied base by base."""
    return Sequence(tuple(complement_code(code) for code in seq.codes))


def reverse_complement(seq: Sequence) -> Sequence:
    """Opposite strand RC = R.K."""
    return reverse(complement(seq))


def hamming_distance(a: Sequence, b: Sequence) -> int:
    """Return the number of positions where ``a`` and ``b`` differ."""
    if len(a) != len(b):
        raise LengthMismatchError(len(a), len(b))
    return sum(x != y for x, y in zip(a.codes, b.codes))


def gc_content(seq: Sequence) -> float:
    """Fraction of G and C bases (0.0 for the empty sequence)."""
    n = len(seq)
    if n == 0:
        return 0.0
    gc_count = sum(1 for code in seq.codes if code in (Base.C, Base.G))
    return gc_count / n


def gc_shuffle(seq: Sequence, rng: random.Random | None = None) -> Sequence:
    """Return a random permutation of ``seq`` with the same base composition.

    Used as a null model for symmetry statistics.
    """
    rng = rng or random.Random()
    codes = list(seq.codes)
    rng.shuffle(codes)
    return Sequence(tuple(codes))
