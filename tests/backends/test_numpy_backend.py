"""Tests for the vectorized backend against hand-checked values and the reference."""

import numpy as np
import pytest

from darwin_atlas.backends import vectorized
from darwin_atlas.backends.vectorized import NumpyBackend
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.core.transforms import TransformFamily
from darwin_atlas.errors import InvalidParameterError, LengthMismatchError


def _seq(tokens: str) -> Sequence:
    return Sequence.from_string(tokens)


class TestOperators:
    """Array operators return Sequence instances with the reference semantics."""

    def test_shift(self, numpy_backend):
        assert numpy_backend.shift(_seq("ACGT"), 1) == _seq("CGTA")
        assert numpy_backend.shift(_seq("ACGT"), 9) == _seq("CGTA")
        assert numpy_backend.shift(Sequence.empty(), 2) == Sequence.empty()

    def test_shift_rejects_negative(self, numpy_backend):
        with pytest.raises(InvalidParameterError):
            numpy_backend.shift(_seq("ACGT"), -1)

    def test_reverse_and_complement(self, numpy_backend):
        seq = _seq("AACG")
        assert numpy_backend.reverse(seq) == _seq("GCAA")
        assert numpy_backend.complement(seq) == _seq("TTGC")
        assert numpy_backend.reverse_complement(seq) == _seq("CGTT")

    def test_hamming(self, numpy_backend):
        assert numpy_backend.hamming_distance(_seq("AAAA"), _seq("AATT")) == 2
        with pytest.raises(LengthMismatchError):
            numpy_backend.hamming_distance(_seq("AAAA"), _seq("AAA"))


class TestSymmetry:
    """Orbit and d_min computations."""

    @pytest.mark.parametrize(
        ("tokens", "size"),
        [("ACGT", 8), ("AAAA", 1), ("ACCA", 4), ("ACGTACGT", 8), ("A", 1), ("", 1)],
    )
    def test_orbit_size(self, numpy_backend, tokens, size):
        assert numpy_backend.orbit_size(_seq(tokens)) == size

    def test_flags_and_period(self, numpy_backend):
        assert numpy_backend.is_palindrome(_seq("ACCA"))
        assert numpy_backend.is_rc_fixed(_seq("ACGT"))
        assert numpy_backend.rotational_period(_seq("ACGTACGT")) == 4
        assert numpy_backend.rotational_period(_seq("ACGTT")) == 5
        assert numpy_backend.rotational_period(Sequence.empty()) == 1

    def test_nearest_transform_tie_break(self, numpy_backend):
        distance, witness = numpy_backend.nearest_transform(_seq("ACGT"), include_rc=False)
        assert distance == 2
        assert (witness.family, witness.k) == (TransformFamily.REVERSE_SHIFT, 1)

    def test_nearest_transform_rc(self, numpy_backend):
        distance, witness = numpy_backend.nearest_transform(_seq("ACGT"))
        assert distance == 0
        assert (witness.family, witness.k) == (TransformFamily.RC_SHIFT, 0)

    def test_dmin_periodic(self, numpy_backend):
        assert numpy_backend.dmin(_seq("ACGTACGT"), include_rc=False) == 0
        assert numpy_backend.dmin_normalized(Sequence.empty()) == 0.0

    def test_agrees_with_reference(self, numpy_backend, reference_backend, random_sequences):
        for seq in random_sequences:
            assert numpy_backend.symmetry_stats(seq) == reference_backend.symmetry_stats(seq)
            for include_rc in (True, False):
                assert numpy_backend.nearest_transform(seq, include_rc) == reference_backend.nearest_transform(
                    seq, include_rc
                )

    def test_blocked_distances_match_unblocked(self, monkeypatch, reference_backend):
        seq = _seq("ACGTTGCAAGCTTACG" * 3)
        expected = NumpyBackend().nearest_transform(seq)
        monkeypatch.setattr(vectorized, "_MAX_BLOCK_CELLS", 7)
        assert NumpyBackend().nearest_transform(seq) == expected == reference_backend.nearest_transform(seq)


class TestDicyclic:
    """Quaternion arrays for Dic_n."""

    def test_elements_shape(self, numpy_backend):
        quaternions, powers, uses_b = numpy_backend.dicyclic_elements(4)
        assert quaternions.shape == (16, 4)
        assert powers.tolist() == list(range(8)) * 2
        assert uses_b.sum() == 8
        assert np.allclose(np.linalg.norm(quaternions, axis=1), 1.0)

    def test_b_coset_lies_in_xy_plane(self, numpy_backend):
        quaternions, _, uses_b = numpy_backend.dicyclic_elements(3)
        coset = quaternions[uses_b]
        assert np.allclose(coset[:, [0, 3]], 0.0)
        assert np.allclose(coset[0], [0.0, 0.0, 1.0, 0.0])

    @pytest.mark.parametrize("n", range(2, 9))
    def test_verify_double_cover(self, numpy_backend, n):
        assert numpy_backend.verify_double_cover(n) is True
        assert numpy_backend.dicyclic_order(n) == 4 * n

    def test_locate_recovers_element_index(self, numpy_backend):
        quaternions, _, _ = numpy_backend.dicyclic_elements(7)
        assert vectorized._locate(quaternions, 7).tolist() == list(range(28))

    def test_large_n_agrees_with_reference(self, numpy_backend, reference_backend):
        assert numpy_backend.verify_double_cover(100) is True
        assert reference_backend.verify_double_cover(100) is True

    def test_rejects_small_n(self, numpy_backend):
        with pytest.raises(InvalidParameterError):
            numpy_backend.verify_double_cover(1)

    def test_failed_check_returns_false(self, monkeypatch):
        backend = NumpyBackend()
        real = NumpyBackend.dicyclic_elements

        def _skewed(self, n):
            quaternions, powers, uses_b = real(self, n)
            quaternions = quaternions.copy()
            quaternions[1] = quaternions[1] * 1.5
            return quaternions, powers, uses_b

        monkeypatch.setattr(NumpyBackend, "dicyclic_elements", _skewed)
        assert backend.verify_double_cover(4) is False
