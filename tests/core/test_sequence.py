import pytest

from darwin_atlas.core.bases import Base, complement_code, decode_code, encode_letter
from darwin_atlas.core.sequence import Sequence, as_sequence
from darwin_atlas.errors import AtlasError, InvalidParameterError


def test_from_string_round_trips_text():
    seq = Sequence.from_string("ACGTTGCA")
    assert seq.codes == (0, 1, 2, 3, 3, 2, 1, 0)
    assert str(seq) == "ACGTTGCA"


def test_from_string_is_case_insensitive():
    assert Sequence.from_string("acgt") == Sequence.from_string("ACGT")


def test_from_string_rejects_unknown_letters():
    with pytest.raises(InvalidParameterError):
        Sequence.from_string("ACGX")


def test_invalid_parameter_is_atlas_and_value_error():
    with pytest.raises(AtlasError):
        Sequence.from_codes([0, 4])
    with pytest.raises(ValueError):
        Sequence.from_codes([-1])


def test_from_bytes_masks_low_two_bits():
    assert Sequence.from_bytes(b"\x04\x05\x06\x07") == Sequence.from_string("ACGT")
    assert Sequence.from_bytes(bytearray([0xFF, 0x10])) == Sequence.from_string("TA")


def test_to_bytes_one_byte_per_base():
    assert Sequence.from_string("GATC").to_bytes() == b"\x02\x00\x03\x01"


def test_empty_sequence():
    empty = Sequence.empty()
    assert len(empty) == 0
    assert empty.to_string() == ""
    assert empty == Sequence.from_string("")


def test_slicing_returns_sequence():
    seq = Sequence.from_string("ACGTAC")
    assert seq[1:4] == Sequence.from_string("CGT")
    assert seq[0] == Base.A


def test_sequences_are_hashable():
    seqs = {Sequence.from_string("ACGT"), Sequence.from_string("ACGT"), Sequence.from_string("TGCA")}
    assert len(seqs) == 2


def test_as_sequence_coerces_inputs():
    seq = Sequence.from_string("ACG")
    assert as_sequence(seq) is seq
    assert as_sequence("ACG") == seq
    assert as_sequence([0, 1, 2]) == seq


def test_to_dict():
    assert Sequence.from_string("AC").to_dict() == {"tokens": "AC", "length": 2}


class TestBases:
    """Encoding and complement of single bases."""

    def test_complement_pairs(self):
        assert Base.A.complement() is Base.T
        assert Base.C.complement() is Base.G
        assert complement_code(Base.G) == Base.C
        assert complement_code(Base.T) == Base.A

    def test_complement_is_involution(self):
        for code in range(4):
            assert complement_code(complement_code(code)) == code

    def test_letter_codes(self):
        assert [encode_letter(ch) for ch in "ACGT"] == [0, 1, 2, 3]
        assert "".join(decode_code(code) for code in range(4)) == "ACGT"

    def test_encode_letter_rejects_unknown(self):
        with pytest.raises(ValueError):
            encode_letter("N")
