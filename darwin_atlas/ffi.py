"""Foreign-call boundary for embedding the core in another runtime.

Sequences cross the boundary as a ``(pointer, length)`` pair over raw bytes,
one byte per base, of which only the low 2 bits count (0=A, 1=C, 2=G, 3=T).
A pointer is either a buffer-protocol object (``bytes``, ``bytearray``,
``memoryview``, a ctypes array) or a raw address (``int`` or ctypes pointer).

Ownership: the caller keeps ownership of every buffer and must keep it valid
for the duration of the call. The bytes are copied on entry; nothing is
freed or retained after the function returns.

Errors never propagate across the boundary. A failing call returns a sentinel
(:data:`SIZE_ERROR` for sizes, NaN for doubles, ``False`` for booleans) and
records the message for the calling thread, readable with
:func:`darwin_last_error`. Successful calls clear it.
"""

from __future__ import annotations

import ctypes
import logging
import math
import threading
from collections.abc import Callable
from typing import Any, Final, TypeVar

from darwin_atlas import __version__
from darwin_atlas.core.operators import hamming_distance
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.errors import AtlasError, InvalidParameterError
from darwin_atlas.quaternion.dicyclic import DicyclicGroup, verify_double_cover
from darwin_atlas.symmetry.approx import dmin, dmin_normalized
from darwin_atlas.symmetry.exact import is_palindrome, is_rc_fixed, orbit_ratio, orbit_size

_LOGGER = logging.getLogger(__name__)

SIZE_ERROR: Final[int] = 2**64 - 1
DARWIN_VERSION: Final[bytes] = __version__.encode("ascii") + b"\0"

_state = threading.local()

T = TypeVar("T")

Pointer = Any


def darwin_last_error() -> str | None:
    """Message of the last failed call on this thread, or ``None``."""
    return getattr(_state, "error", None)


def _read_sequence(ptr: Pointer, length: int) -> Sequence:
    if length < 0:
        raise InvalidParameterError(f"Length must be non-negative, got {length}")
    if length == 0:
        return Sequence.empty()
    if isinstance(ptr, (bytes, bytearray, memoryview, ctypes.Array)):
        view = memoryview(ptr)
        if view.nbytes < length:
            raise InvalidParameterError(f"Buffer holds {view.nbytes} bytes, fewer than length {length}")
        raw = view.tobytes()[:length]
    else:
        if not ptr:
            raise InvalidParameterError("Null sequence pointer")
        raw = ctypes.string_at(ptr, length)
    return Sequence.from_bytes(raw)


def _guard(fn: Callable[[], T], sentinel: T) -> T:
    try:
        result = fn()
    except AtlasError as exc:
        _state.error = str(exc)
        _LOGGER.debug(f"Foreign call failed: {exc}")
        return sentinel
    _state.error = None
    return result


def darwin_hamming_distance(seq_a: Pointer, seq_b: Pointer, length: int) -> int:
    return _guard(
        lambda: hamming_distance(_read_sequence(seq_a, length), _read_sequence(seq_b, length)),
        SIZE_ERROR,
    )


def darwin_orbit_size(seq: Pointer, length: int) -> int:
    return _guard(lambda: orbit_size(_read_sequence(seq, length)), SIZE_ERROR)


def darwin_orbit_ratio(seq: Pointer, length: int) -> float:
    return _guard(lambda: orbit_ratio(_read_sequence(seq, length)), math.nan)


def darwin_is_palindrome(seq: Pointer, length: int) -> bool:
    return _guard(lambda: is_palindrome(_read_sequence(seq, length)), False)


def darwin_is_rc_fixed(seq: Pointer, length: int) -> bool:
    return _guard(lambda: is_rc_fixed(_read_sequence(seq, length)), False)


def darwin_dmin(seq: Pointer, length: int, include_rc: bool) -> int:
    return _guard(lambda: dmin(_read_sequence(seq, length), bool(include_rc)), SIZE_ERROR)


def darwin_dmin_normalized(seq: Pointer, length: int, include_rc: bool) -> float:
    return _guard(lambda: dmin_normalized(_read_sequence(seq, length), bool(include_rc)), math.nan)


def darwin_verify_double_cover(n: int) -> bool:
    return _guard(lambda: verify_double_cover(DicyclicGroup(n)), False)


def darwin_version() -> bytes:
    """Null-terminated version string."""
    return DARWIN_VERSION


_BYTES = ctypes.POINTER(ctypes.c_uint8)

HAMMING_FN = ctypes.CFUNCTYPE(ctypes.c_size_t, _BYTES, _BYTES, ctypes.c_size_t)
SIZE_FN = ctypes.CFUNCTYPE(ctypes.c_size_t, _BYTES, ctypes.c_size_t)
RATIO_FN = ctypes.CFUNCTYPE(ctypes.c_double, _BYTES, ctypes.c_size_t)
FLAG_FN = ctypes.CFUNCTYPE(ctypes.c_bool, _BYTES, ctypes.c_size_t)
DMIN_FN = ctypes.CFUNCTYPE(ctypes.c_size_t, _BYTES, ctypes.c_size_t, ctypes.c_bool)
DMIN_NORM_FN = ctypes.CFUNCTYPE(ctypes.c_double, _BYTES, ctypes.c_size_t, ctypes.c_bool)
COVER_FN = ctypes.CFUNCTYPE(ctypes.c_bool, ctypes.c_size_t)
VERSION_FN = ctypes.CFUNCTYPE(ctypes.c_void_p)

_VERSION_BUFFER = ctypes.create_string_buffer(DARWIN_VERSION[:-1])


def _address(ptr: Any) -> int:
    return ctypes.cast(ptr, ctypes.c_void_p).value or 0


def build_export_table() -> dict[str, Any]:
    """C function pointers for every boundary function, keyed by symbol name.

    The returned callbacks must be kept alive by the caller for as long as
    foreign code may call them.
    """
    return {
        "darwin_hamming_distance": HAMMING_FN(
            lambda a, b, n: darwin_hamming_distance(_address(a), _address(b), n)
        ),
        "darwin_orbit_size": SIZE_FN(lambda s, n: darwin_orbit_size(_address(s), n)),
        "darwin_orbit_ratio": RATIO_FN(lambda s, n: darwin_orbit_ratio(_address(s), n)),
        "darwin_is_palindrome": FLAG_FN(lambda s, n: darwin_is_palindrome(_address(s), n)),
        "darwin_is_rc_fixed": FLAG_FN(lambda s, n: darwin_is_rc_fixed(_address(s), n)),
        "darwin_dmin": DMIN_FN(lambda s, n, rc: darwin_dmin(_address(s), n, rc)),
        "darwin_dmin_normalized": DMIN_NORM_FN(lambda s, n, rc: darwin_dmin_normalized(_address(s), n, rc)),
        "darwin_verify_double_cover": COVER_FN(darwin_verify_double_cover),
        "darwin_version": VERSION_FN(lambda: ctypes.addressof(_VERSION_BUFFER)),
    }
