"""Shared test fixtures for Darwin Atlas tests."""

import random

import pytest

from darwin_atlas.backends import NumpyBackend, ReferenceBackend
from darwin_atlas.core.sequence import Sequence


@pytest.fixture
def dna_alphabet():
    """DNA alphabet (ACGT)."""
    return "ACGT"


@pytest.fixture
def random_sequences(dna_alphabet):
    """Seeded random sequences of assorted lengths."""
    rng = random.Random(1234)
    return [
        Sequence.from_string("".join(rng.choice(dna_alphabet) for _ in range(length)))
        for length in (1, 2, 3, 5, 8, 13, 21, 34)
        for _ in range(3)
    ]


@pytest.fixture
def reference_backend():
    return ReferenceBackend()


@pytest.fixture
def numpy_backend():
    return NumpyBackend()
