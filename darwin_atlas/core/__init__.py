"""Core primitives: bases, sequences, operators and transform tags."""

from .bases import ALPHABET, Base
from .operators import (
    complement,
    gc_content,
    gc_shuffle,
    hamming_distance,
    reverse,
    reverse_complement,
    shift,
)
from .sequence import Sequence, as_sequence
from .transforms import Transform, TransformFamily, iter_candidate_transforms

__all__ = [
    "ALPHABET",
    "Base",
    "Sequence",
    "Transform",
    "TransformFamily",
    "as_sequence",
    "complement",
    "gc_content",
    "gc_shuffle",
    "hamming_distance",
    "iter_candidate_transforms",
    "reverse",
    "reverse_complement",
    "shift",
]
