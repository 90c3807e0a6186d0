"""Nucleotide alphabet and its 2-bit encoding."""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class Base(IntEnum):
    """DNA base stored as a 2-bit code."""

    A = 0b00
    C = 0b01
    G = 0b10
    T = 0b11

    def complement(self) -> Base:
        return Base(self ^ COMPLEMENT_MASK)


# XOR with T's code swaps A<->T and C<->G
COMPLEMENT_MASK: Final = 0b11
CODE_MASK: Final = 0b11

ALPHABET: Final = "ACGT"
_CODE_BY_LETTER: Final[dict[str, int]] = {letter: code for code, letter in enumerate(ALPHABET)}


def complement_code(code: int) -> int:
    return code ^ COMPLEMENT_MASK


def encode_letter(letter: str) -> int:
    """Return the 2-bit code for ``letter`` (case-insensitive)."""
    try:
        return _CODE_BY_LETTER[letter.upper()]
    except KeyError:
        msg = f"Invalid DNA base: {letter!r}"
        raise ValueError(msg) from None


def decode_code(code: int) -> str:
    return ALPHABET[code & CODE_MASK]
