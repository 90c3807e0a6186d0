import pytest

from darwin_atlas.core.operators import reverse, reverse_complement, shift
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.core.transforms import Transform, TransformFamily, iter_candidate_transforms
from darwin_atlas.errors import InvalidParameterError


def test_apply_matches_operators():
    seq = Sequence.from_string("AACGT")
    assert Transform(TransformFamily.IDENTITY).apply(seq) == seq
    assert Transform(TransformFamily.SHIFT, 2).apply(seq) == shift(seq, 2)
    assert Transform(TransformFamily.REVERSE).apply(seq) == reverse(seq)
    assert Transform(TransformFamily.REVERSE_COMPLEMENT)(seq) == reverse_complement(seq)


def test_reverse_shift_shifts_the_reversed_sequence():
    seq = Sequence.from_string("AACGT")
    assert Transform(TransformFamily.REVERSE_SHIFT, 1)(seq) == shift(reverse(seq), 1)
    assert Transform(TransformFamily.RC_SHIFT, 3)(seq) == shift(reverse_complement(seq), 3)


def test_negative_parameter_rejected():
    with pytest.raises(InvalidParameterError):
        Transform(TransformFamily.SHIFT, -2)


def test_labels():
    assert Transform(TransformFamily.SHIFT, 3).label() == "S^3"
    assert Transform(TransformFamily.REVERSE_SHIFT, 0).label() == "S^0.R"
    assert Transform(TransformFamily.RC_SHIFT, 2).label() == "S^2.RC"
    assert Transform(TransformFamily.COMPLEMENT).label() == "K"


def test_candidate_order_and_count():
    candidates = list(iter_candidate_transforms(3))
    assert [(t.family, t.k) for t in candidates] == [
        (TransformFamily.SHIFT, 1),
        (TransformFamily.SHIFT, 2),
        (TransformFamily.REVERSE_SHIFT, 0),
        (TransformFamily.REVERSE_SHIFT, 1),
        (TransformFamily.REVERSE_SHIFT, 2),
        (TransformFamily.RC_SHIFT, 0),
        (TransformFamily.RC_SHIFT, 1),
        (TransformFamily.RC_SHIFT, 2),
    ]


def test_candidates_without_rc():
    candidates = list(iter_candidate_transforms(5, include_rc=False))
    assert len(candidates) == 2 * 5 - 1
    assert all(t.family is not TransformFamily.RC_SHIFT for t in candidates)


def test_candidates_never_include_identity():
    for t in iter_candidate_transforms(6):
        assert not (t.family is TransformFamily.SHIFT and t.k == 0)
