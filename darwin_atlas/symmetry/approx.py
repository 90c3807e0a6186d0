"""Approximate symmetry metric: d_min and its normalized form.

d_min(w) = min over non-identity g of H(w, g(w)), where g ranges over the
shifts, the reverse-shifts and optionally the reverse-complement shifts. A
value of 0 means exact symmetry under some transform.
"""

from __future__ import annotations

from dataclasses import dataclass

from darwin_atlas.core.operators import hamming_distance
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.core.transforms import Transform, TransformFamily, iter_candidate_transforms


@dataclass(frozen=True, slots=True)
class NearestTransform:
    """The transform that achieves d_min, and the distance it achieves."""

    family: TransformFamily
    k: int
    distance: int

    @property
    def transform(self) -> Transform:
        return Transform(self.family, self.k)

    def to_dict(self) -> dict[str, object]:
        return {"family": self.family.value, "k": self.k, "distance": self.distance}


def nearest_transform(seq: Sequence, include_rc: bool = True) -> tuple[int, NearestTransform]:
    """Exhaustive O(n^2) search for the closest non-identity transform.

    Ties go to the first transform in :func:`iter_candidate_transforms`
    order. The empty sequence reports ``S^0`` at distance 0.
    """
    n = len(seq)
    if n == 0:
        return 0, NearestTransform(TransformFamily.SHIFT, 0, 0)

    best: Transform | None = None
    best_distance = n + 1
    for candidate in iter_candidate_transforms(n, include_rc=include_rc):
        distance = hamming_distance(seq, candidate.apply(seq))
        if distance < best_distance:
            best_distance = distance
            best = candidate
            if distance == 0:
                break

    if best is None:
        raise RuntimeError("No candidate transform for a non-empty sequence")
    return best_distance, NearestTransform(best.family, best.k, best_distance)


def dmin(seq: Sequence, include_rc: bool = True) -> int:
    """Minimum Hamming distance to any non-identity transform; 0 when n=0."""
    distance, _ = nearest_transform(seq, include_rc)
    return distance


def dmin_normalized(seq: Sequence, include_rc: bool = True) -> float:
    """``dmin / n`` in [0, 1]; 0.0 when n=0."""
    n = len(seq)
    if n == 0:
        return 0.0
    return dmin(seq, include_rc) / n
