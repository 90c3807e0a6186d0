"""Tagged transforms of the dihedral (plus complement) action."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from darwin_atlas.core import operators
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.errors import InvalidParameterError


class TransformFamily(Enum):
    """Which family a transform belongs to; ``k`` carries the shift amount."""

    IDENTITY = "identity"
    SHIFT = "shift"  # S^k
    REVERSE = "reverse"  # R
    COMPLEMENT = "complement"  # K
    REVERSE_COMPLEMENT = "reverse_complement"  # RC
    REVERSE_SHIFT = "reverse_shift"  # S^k applied to R(seq)
    RC_SHIFT = "rc_shift"  # S^k applied to RC(seq)


@dataclass(frozen=True, slots=True)
class Transform:
    """A transform described by its family tag and shift parameter."""

    family: TransformFamily
    k: int = 0

    def __post_init__(self) -> None:
        if self.k < 0:
            raise InvalidParameterError(f"Transform parameter must be non-negative, got {self.k}")

    def apply(self, seq: Sequence) -> Sequence:
        family = self.family
        if family is TransformFamily.IDENTITY:
            return seq
        if family is TransformFamily.SHIFT:
            return operators.shift(seq, self.k)
        if family is TransformFamily.REVERSE:
            return operators.reverse(seq)
        if family is TransformFamily.COMPLEMENT:
            return operators.complement(seq)
        if family is TransformFamily.REVERSE_COMPLEMENT:
            return operators.reverse_complement(seq)
        if family is TransformFamily.REVERSE_SHIFT:
            return operators.shift(operators.reverse(seq), self.k)
        if family is TransformFamily.RC_SHIFT:
            return operators.shift(operators.reverse_complement(seq), self.k)
        raise InvalidParameterError(f"Unhandled transform family: {family}")

    def __call__(self, seq: Sequence) -> Sequence:
        return self.apply(seq)

    def label(self) -> str:
        if self.family is TransformFamily.SHIFT:
            return f"S^{self.k}"
        if self.family is TransformFamily.REVERSE_SHIFT:
            return f"S^{self.k}.R"
        if self.family is TransformFamily.RC_SHIFT:
            return f"S^{self.k}.RC"
        return {
            TransformFamily.IDENTITY: "I",
            TransformFamily.REVERSE: "R",
            TransformFamily.COMPLEMENT: "K",
            TransformFamily.REVERSE_COMPLEMENT: "RC",
        }[self.family]


def iter_candidate_transforms(n: int, *, include_rc: bool = True) -> Iterator[Transform]:
    """Yield the non-identity transforms searched by ``dmin``, in tie-break order.

    S^1..S^(n-1), then the reverse shifts k=0..n-1, then (optionally) the
    reverse-complement shifts k=0..n-1.
    """
    for k in range(1, n):
        yield Transform(TransformFamily.SHIFT, k)
    for k in range(n):
        yield Transform(TransformFamily.REVERSE_SHIFT, k)
    if include_rc:
        for k in range(n):
            yield Transform(TransformFamily.RC_SHIFT, k)
