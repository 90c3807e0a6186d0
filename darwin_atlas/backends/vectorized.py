"""Vectorized backend on numpy arrays.

Written independently of the reference modules: sequences become ``uint8``
arrays, all shifts of a sequence are materialized through one index matrix,
and Dic_n is handled as a ``(4n, 4)`` array of quaternions multiplied in bulk
with their left-multiplication matrices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from darwin_atlas.core.sequence import Sequence
from darwin_atlas.core.transforms import TransformFamily
from darwin_atlas.errors import InvalidParameterError, LengthMismatchError
from darwin_atlas.symmetry.approx import NearestTransform
from darwin_atlas.symmetry.exact import SymmetryStats

_LOGGER = logging.getLogger(__name__)

_COMPLEMENT_MASK = np.uint8(0b11)
# Upper bound on cells of a shift block held in memory at once
_MAX_BLOCK_CELLS = 1 << 22
_QUATERNION_TOL = 1e-10


def _as_array(seq: Sequence) -> np.ndarray:
    return np.frombuffer(seq.to_bytes(), dtype=np.uint8)


def _to_sequence(arr: np.ndarray) -> Sequence:
    return Sequence.from_bytes(np.ascontiguousarray(arr, dtype=np.uint8).tobytes())


def _shift_index(n: int, start: int = 0, stop: int | None = None) -> np.ndarray:
    """Rows ``k`` in ``[start, stop)`` of the matrix ``idx[k, i] = (i + k) mod n``."""
    stop = n if stop is None else stop
    return (np.arange(start, stop)[:, None] + np.arange(n)[None, :]) % n


def _shift_distances(target: np.ndarray, source: np.ndarray) -> np.ndarray:
    """``out[k] = H(target, S^k(source))`` for k in 0..n-1, in row blocks."""
    n = target.shape[0]
    block = max(1, _MAX_BLOCK_CELLS // n)
    out = np.empty(n, dtype=np.int64)
    for start in range(0, n, block):
        stop = min(n, start + block)
        rows = source[_shift_index(n, start, stop)]
        out[start:stop] = np.count_nonzero(rows != target[None, :], axis=1)
    return out


def _left_matrices(qs: np.ndarray) -> np.ndarray:
    """``L[q]`` with ``q * p == L[q] @ p`` for each row ``q`` of ``qs``."""
    w, x, y, z = qs[..., 0], qs[..., 1], qs[..., 2], qs[..., 3]
    return np.stack(
        [
            np.stack([w, -x, -y, -z], axis=-1),
            np.stack([x, w, -z, y], axis=-1),
            np.stack([y, z, w, -x], axis=-1),
            np.stack([z, -y, x, w], axis=-1),
        ],
        axis=-2,
    )


def _qmul(p: np.ndarray, q: np.ndarray) -> np.ndarray:
    return _left_matrices(p) @ q


def _qinv(q: np.ndarray) -> np.ndarray:
    conj = q * np.array([1.0, -1.0, -1.0, -1.0])
    return conj / np.dot(q, q)


def _close(p: np.ndarray, q: np.ndarray, tol: float) -> bool:
    return bool(np.all(np.abs(p - q) <= tol))


@dataclass(frozen=True, slots=True)
class NumpyBackend:
    name: str = "numpy"
    tol: float = _QUATERNION_TOL

    # -- operators ---------------------------------------------------------

    def shift(self, seq: Sequence, k: int) -> Sequence:
        if k < 0:
            raise InvalidParameterError(f"Shift amount must be non-negative, got {k}")
        if len(seq) == 0:
            return seq
        return _to_sequence(np.roll(_as_array(seq), -k))

    def reverse(self, seq: Sequence) -> Sequence:
        return _to_sequence(_as_array(seq)[::-1])

    def complement(self, seq: Sequence) -> Sequence:
        return _to_sequence(_as_array(seq) ^ _COMPLEMENT_MASK)

    def reverse_complement(self, seq: Sequence) -> Sequence:
        return _to_sequence((_as_array(seq) ^ _COMPLEMENT_MASK)[::-1])

    def hamming_distance(self, a: Sequence, b: Sequence) -> int:
        if len(a) != len(b):
            raise LengthMismatchError(len(a), len(b))
        return int(np.count_nonzero(_as_array(a) != _as_array(b)))

    # -- exact symmetry ----------------------------------------------------

    def orbit_size(self, seq: Sequence) -> int:
        n = len(seq)
        if n == 0:
            return 1
        arr = _as_array(seq)
        idx = _shift_index(n)
        images = np.vstack([arr[idx], arr[::-1][idx]])
        return int(np.unique(images, axis=0).shape[0])

    def orbit_ratio(self, seq: Sequence) -> float:
        n = len(seq)
        if n == 0:
            return 1.0
        return self.orbit_size(seq) / (2 * n)

    def is_palindrome(self, seq: Sequence) -> bool:
        arr = _as_array(seq)
        return bool(np.array_equal(arr, arr[::-1]))

    def is_rc_fixed(self, seq: Sequence) -> bool:
        arr = _as_array(seq)
        return bool(np.array_equal(arr, (arr ^ _COMPLEMENT_MASK)[::-1]))

    def rotational_period(self, seq: Sequence) -> int:
        # Full scan of k = 1..n-1; the first hit is necessarily a divisor of n
        n = len(seq)
        if n == 0:
            return 1
        arr = _as_array(seq)
        fixed = np.flatnonzero(_shift_distances(arr, arr)[1:] == 0)
        return int(fixed[0]) + 1 if fixed.size else n

    def symmetry_stats(self, seq: Sequence) -> SymmetryStats:
        return SymmetryStats(
            length=len(seq),
            orbit_size=self.orbit_size(seq),
            orbit_ratio=self.orbit_ratio(seq),
            is_palindrome=self.is_palindrome(seq),
            is_rc_fixed=self.is_rc_fixed(seq),
            rotational_period=self.rotational_period(seq),
        )

    # -- approximate metric ------------------------------------------------

    def _candidate_distances(self, seq: Sequence, include_rc: bool) -> np.ndarray:
        arr = _as_array(seq)
        rev = arr[::-1]
        parts = [
            _shift_distances(arr, arr)[1:],
            _shift_distances(arr, rev),
        ]
        if include_rc:
            parts.append(_shift_distances(arr, rev ^ _COMPLEMENT_MASK))
        return np.concatenate(parts)

    def nearest_transform(self, seq: Sequence, include_rc: bool = True) -> tuple[int, NearestTransform]:
        n = len(seq)
        if n == 0:
            return 0, NearestTransform(TransformFamily.SHIFT, 0, 0)
        distances = self._candidate_distances(seq, include_rc)
        # argmin returns the first occurrence, which is the tie-break order
        pos = int(np.argmin(distances))
        distance = int(distances[pos])
        if pos < n - 1:
            family, k = TransformFamily.SHIFT, pos + 1
        elif pos < 2 * n - 1:
            family, k = TransformFamily.REVERSE_SHIFT, pos - (n - 1)
        else:
            family, k = TransformFamily.RC_SHIFT, pos - (2 * n - 1)
        return distance, NearestTransform(family, k, distance)

    def dmin(self, seq: Sequence, include_rc: bool = True) -> int:
        if len(seq) == 0:
            return 0
        return int(self._candidate_distances(seq, include_rc).min())

    def dmin_normalized(self, seq: Sequence, include_rc: bool = True) -> float:
        n = len(seq)
        if n == 0:
            return 0.0
        return self.dmin(seq, include_rc) / n

    # -- dicyclic groups ---------------------------------------------------

    def dicyclic_order(self, n: int) -> int:
        _check_dicyclic_n(n)
        return 4 * n

    def dicyclic_elements(self, n: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(quaternions, powers, uses_b)`` for the 4n elements of Dic_n."""
        _check_dicyclic_n(n)
        powers = np.arange(2 * n)
        angles = powers * (np.pi / n)
        zeros = np.zeros_like(angles)
        rotations = np.stack([np.cos(angles), zeros, zeros, np.sin(angles)], axis=-1)
        b = np.array([0.0, 0.0, 1.0, 0.0])
        coset = rotations @ _left_matrices(b).T
        quaternions = np.vstack([rotations, coset])
        uses_b = np.concatenate([np.zeros(2 * n, dtype=bool), np.ones(2 * n, dtype=bool)])
        return quaternions, np.concatenate([powers, powers]), uses_b

    def verify_double_cover(self, n: int) -> bool:
        quaternions, powers, uses_b = self.dicyclic_elements(n)
        tol = self.tol
        identity = np.array([1.0, 0.0, 0.0, 0.0])
        a = quaternions[1]
        b = quaternions[2 * n]

        a_power = identity
        a_n = identity
        for step in range(1, 2 * n + 1):
            a_power = _qmul(a_power, a)
            if step == n:
                a_n = a_power

        checks = {
            "a_order": _close(a_power, identity, tol),
            "b_squared": _close(_qmul(b, b), a_n, tol),
            "two_to_one": self._two_to_one(quaternions, powers, uses_b, n, tol),
            "conjugation": _close(_qmul(_qmul(b, a), _qinv(b)), _qinv(a), tol),
            "homomorphism": self._homomorphism(quaternions, powers, uses_b, n, tol),
        }
        failed = [name for name, ok in checks.items() if not ok]
        if failed:
            _LOGGER.warning(f"Dic_{n} failed double-cover checks: {', '.join(failed)}")
            return False
        return True

    @staticmethod
    def _projection_keys(powers: np.ndarray, uses_b: np.ndarray, n: int) -> np.ndarray:
        return uses_b.astype(np.int64) * n + powers % n

    def _two_to_one(
        self,
        quaternions: np.ndarray,
        powers: np.ndarray,
        uses_b: np.ndarray,
        n: int,
        tol: float,
    ) -> bool:
        keys = self._projection_keys(powers, uses_b, n)
        counts = np.bincount(keys, minlength=2 * n)
        if counts.shape[0] != 2 * n or not np.all(counts == 2):
            return False
        pairs = np.argsort(keys, kind="stable").reshape(2 * n, 2)
        first = quaternions[pairs[:, 0]]
        second = quaternions[pairs[:, 1]]
        distinct = np.any(np.abs(first - second) > tol, axis=1)
        antipodal = np.all(np.abs(first + second) <= tol, axis=1)
        return bool(np.all(distinct) and np.all(antipodal))

    def _homomorphism(
        self,
        quaternions: np.ndarray,
        powers: np.ndarray,
        uses_b: np.ndarray,
        n: int,
        tol: float,
    ) -> bool:
        products = np.einsum("iab,jb->ija", _left_matrices(quaternions), quaternions)
        located = _locate(products, n)
        if not np.all(np.abs(products - quaternions[located]) <= tol):
            return False

        rotation = powers % n
        reflection = uses_b
        expected_reflection = reflection[:, None] ^ reflection[None, :]
        expected_rotation = np.where(
            reflection[None, :],
            rotation[None, :] - rotation[:, None],
            rotation[:, None] + rotation[None, :],
        ) % n
        return bool(
            np.array_equal(reflection[located], expected_reflection)
            and np.array_equal(rotation[located], expected_rotation)
        )


def _locate(qs: np.ndarray, n: int) -> np.ndarray:
    """Row index into :meth:`NumpyBackend.dicyclic_elements` for each quaternion.

    Powers of a lie in the (w, z) plane and the b-coset in the (x, y) plane;
    the angle in the dominant plane gives the power.
    """
    w, x, y, z = qs[..., 0], qs[..., 1], qs[..., 2], qs[..., 3]
    in_coset = x * x + y * y > w * w + z * z
    phi = np.where(in_coset, np.arctan2(x, y), np.arctan2(z, w))
    power = np.rint(phi * (n / np.pi)).astype(np.int64) % (2 * n)
    return in_coset.astype(np.int64) * (2 * n) + power


def _check_dicyclic_n(n: int) -> None:
    if n < 2:
        raise InvalidParameterError(f"Dicyclic group requires n >= 2, got {n}")
