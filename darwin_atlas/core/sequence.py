"""Sequence data structures."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import overload

from darwin_atlas.core.bases import CODE_MASK, decode_code, encode_letter
from darwin_atlas.errors import InvalidParameterError


@dataclass(frozen=True, slots=True)
class Sequence:
    """Immutable DNA sequence held as a tuple of 2-bit base codes.

    Equality and hashing are element-wise, so sequences can be collected into
    sets (orbits) and used as dictionary keys. Every operator in
    :mod:`darwin_atlas.core.operators` returns a new instance.
    """

    codes: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.codes, tuple):
            object.__setattr__(self, "codes", tuple(self.codes))
        for code in self.codes:
            if not 0 <= code <= CODE_MASK:
                raise InvalidParameterError(f"Base codes must be in [0, 3], got {code}")

    @classmethod
    def empty(cls) -> Sequence:
        return cls(())

    @classmethod
    def from_string(cls, tokens: str) -> Sequence:
        """Parse an ``ACGT`` string (case-insensitive)."""
        try:
            return cls(tuple(encode_letter(ch) for ch in tokens))
        except ValueError as exc:
            raise InvalidParameterError(str(exc)) from None

    @classmethod
    def from_codes(cls, codes: Iterable[int]) -> Sequence:
        return cls(tuple(int(code) for code in codes))

    @classmethod
    def from_bytes(cls, raw: bytes | bytearray | memoryview) -> Sequence:
        """Decode one byte per base; only the low 2 bits of each byte count."""
        return cls(tuple(byte & CODE_MASK for byte in bytes(raw)))

    def to_string(self) -> str:
        return "".join(decode_code(code) for code in self.codes)

    def to_bytes(self) -> bytes:
        return bytes(self.codes)

    def to_dict(self) -> dict[str, object]:
        return {"tokens": self.to_string(), "length": len(self)}

    def __str__(self) -> str:
        return self.to_string()

    def __len__(self) -> int:
        return len(self.codes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.codes)

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence: ...

    def __getitem__(self, index: int | slice) -> int | Sequence:
        if isinstance(index, slice):
            return Sequence(self.codes[index])
        return self.codes[index]


def as_sequence(value: Sequence | str | Iterable[int]) -> Sequence:
    """Coerce strings and code iterables into a :class:`Sequence`."""
    if isinstance(value, Sequence):
        return value
    if isinstance(value, str):
        return Sequence.from_string(value)
    return Sequence.from_codes(value)
