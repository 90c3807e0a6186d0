"""Tests for the foreign-call boundary."""

import ctypes
import math
import threading

from darwin_atlas import ffi
from darwin_atlas.ffi import (
    SIZE_ERROR,
    build_export_table,
    darwin_dmin,
    darwin_dmin_normalized,
    darwin_hamming_distance,
    darwin_is_palindrome,
    darwin_is_rc_fixed,
    darwin_last_error,
    darwin_orbit_ratio,
    darwin_orbit_size,
    darwin_verify_double_cover,
    darwin_version,
)

ACGT = b"\x00\x01\x02\x03"


def test_buffer_inputs():
    assert darwin_orbit_size(ACGT, 4) == 8
    assert darwin_orbit_ratio(bytearray(ACGT), 4) == 1.0
    assert darwin_is_rc_fixed(memoryview(ACGT), 4) is True
    assert darwin_is_palindrome((ctypes.c_uint8 * 4)(0, 1, 1, 0), 4) is True


def test_only_low_bits_are_read():
    assert darwin_is_rc_fixed(b"\x04\x05\x06\x07", 4) is True
    assert darwin_hamming_distance(b"\xfc\x01", b"\x00\x05", 2) == 0


def test_raw_address_input():
    buf = ctypes.create_string_buffer(b"\x00\x01\x02\x03\x00\x01\x02\x03", 8)
    assert darwin_dmin(ctypes.addressof(buf), 8, False) == 0
    assert darwin_dmin_normalized(ctypes.addressof(buf), 4, False) == 0.5


def test_length_prefix_of_buffer():
    assert darwin_orbit_size(b"\x00\x00\x01\x02", 2) == 1


def test_zero_length():
    assert darwin_orbit_size(b"", 0) == 1
    assert darwin_dmin(None, 0, True) == 0
    assert darwin_last_error() is None


def test_errors_return_sentinels():
    assert darwin_orbit_size(b"\x00", 4) == SIZE_ERROR
    assert "fewer than length" in darwin_last_error()
    assert math.isnan(darwin_orbit_ratio(b"\x00", 4))
    assert darwin_is_palindrome(None, 3) is False
    assert "Null" in darwin_last_error()
    assert darwin_dmin(b"\x00", -1, True) == SIZE_ERROR
    assert math.isnan(darwin_dmin_normalized(b"", 2, True))


def test_success_clears_last_error():
    darwin_orbit_size(b"\x00", 4)
    assert darwin_last_error() is not None
    darwin_orbit_size(b"\x00", 1)
    assert darwin_last_error() is None


def test_last_error_is_thread_local():
    darwin_verify_double_cover(1)
    assert "n >= 2" in darwin_last_error()
    seen = []
    worker = threading.Thread(target=lambda: seen.append(darwin_last_error()))
    worker.start()
    worker.join()
    assert seen == [None]


def test_verify_double_cover():
    assert darwin_verify_double_cover(4) is True
    assert darwin_verify_double_cover(1) is False


def test_version_is_null_terminated():
    assert darwin_version() == b"0.1.0\x00"
    assert ffi.DARWIN_VERSION.endswith(b"\0")


class TestExportTable:
    """C function pointers call through to the boundary functions."""

    def test_symbols(self):
        table = build_export_table()
        assert set(table) == {
            "darwin_hamming_distance",
            "darwin_orbit_size",
            "darwin_orbit_ratio",
            "darwin_is_palindrome",
            "darwin_is_rc_fixed",
            "darwin_dmin",
            "darwin_dmin_normalized",
            "darwin_verify_double_cover",
            "darwin_version",
        }

    def test_calls_through_c_pointers(self):
        table = build_export_table()
        seq = (ctypes.c_uint8 * 4)(0, 1, 2, 3)
        other = (ctypes.c_uint8 * 4)(0, 1, 3, 3)
        assert table["darwin_orbit_size"](seq, 4) == 8
        assert table["darwin_orbit_ratio"](seq, 4) == 1.0
        assert table["darwin_is_rc_fixed"](seq, 4) is True
        assert table["darwin_hamming_distance"](seq, other, 4) == 1
        assert table["darwin_dmin"](seq, 4, True) == 0
        assert table["darwin_verify_double_cover"](3) is True

    def test_error_sentinel_through_c_pointer(self):
        table = build_export_table()
        assert table["darwin_orbit_size"](None, 3) == SIZE_ERROR

    def test_version_pointer(self):
        table = build_export_table()
        assert ctypes.string_at(table["darwin_version"]()) == b"0.1.0"
