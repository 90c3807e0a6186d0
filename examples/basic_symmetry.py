#!/usr/bin/env python3
"""
Example walk-through of the Darwin Atlas symmetry core.

This example shows:
1. Exact symmetry statistics of a few hand-picked sequences
2. The approximate metric d_min and the transform that achieves it
3. Verifying the Dic_n -> D_n double cover for small n
4. Cross-validating the numpy backend against the reference
"""

from darwin_atlas import Sequence, compute_symmetry_stats, nearest_transform
from darwin_atlas.quaternion import DicyclicGroup, verify_double_cover
from darwin_atlas.utils import CrossValidationConfig
from darwin_atlas.validation import run_cross_validation

SEQUENCES = ["ACGT", "ACCA", "ACGTACGT", "AACGTTAGC"]


def main() -> None:
    """Run the example."""
    print("Exact symmetry")  # noqa: T201
    print("=" * 60)  # noqa: T201
    for tokens in SEQUENCES:
        stats = compute_symmetry_stats(Sequence.from_string(tokens))
        print(  # noqa: T201
            f"  {tokens:<12} orbit={stats.orbit_size:<3} ratio={stats.orbit_ratio:.3f} "
            f"palindrome={stats.is_palindrome} rc_fixed={stats.is_rc_fixed} period={stats.rotational_period}"
        )

    print("\nApproximate symmetry")  # noqa: T201
    print("=" * 60)  # noqa: T201
    for tokens in SEQUENCES:
        seq = Sequence.from_string(tokens)
        for include_rc in (True, False):
            distance, witness = nearest_transform(seq, include_rc)
            label = "with RC" if include_rc else "no RC  "
            print(f"  {tokens:<12} {label} d_min={distance} via {witness.transform.label()}")  # noqa: T201

    print("\nDouble cover")  # noqa: T201
    print("=" * 60)  # noqa: T201
    for n in range(2, 7):
        group = DicyclicGroup(n)
        print(f"  {group} (order {group.order}) -> D_{n}: {verify_double_cover(group)}")  # noqa: T201

    print("\nCross-validation")  # noqa: T201
    print("=" * 60)  # noqa: T201
    report = run_cross_validation(CrossValidationConfig(n_random=30, n_max=8))
    print(report.to_frame().to_string(index=False))  # noqa: T201
    print(f"\n  all passed: {report.all_passed}")  # noqa: T201


if __name__ == "__main__":
    main()
