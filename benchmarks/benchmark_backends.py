"""Backend micro benchmarks."""

import random
from time import perf_counter

from darwin_atlas.backends import NumpyBackend, ReferenceBackend
from darwin_atlas.core.sequence import Sequence

_RNG = random.Random(0)
SEQUENCES = [Sequence.from_string("".join(_RNG.choice("ACGT") for _ in range(n))) for n in (16, 64, 256)]


def time_backend(backend, method: str) -> float:
    fn = getattr(backend, method)
    start = perf_counter()
    for _ in range(20):
        for seq in SEQUENCES:
            fn(seq)
    return perf_counter() - start


if __name__ == "__main__":
    backends = [ReferenceBackend(), NumpyBackend()]
    for method in ("orbit_size", "rotational_period", "dmin"):
        for backend in backends:
            print(f"{method} [{backend.name}]: {time_backend(backend, method):.6f}s")
    for backend in backends:
        start = perf_counter()
        backend.verify_double_cover(16)
        print(f"verify_double_cover(16) [{backend.name}]: {perf_counter() - start:.6f}s")
