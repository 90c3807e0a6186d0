"""Technical validation suite.

Checks that the operators satisfy their defining group relations and that
the symmetry statistics stay inside their proven bounds, on small fixed
inputs. Each check is reported as a :class:`ValidationResult`; nothing is
raised for a failed relation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

from darwin_atlas.core.operators import complement, reverse, reverse_complement, shift
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.quaternion.dicyclic import DicyclicGroup, order, verify_double_cover
from darwin_atlas.symmetry.approx import dmin
from darwin_atlas.symmetry.exact import orbit_ratio, orbit_size

_LOGGER = logging.getLogger(__name__)

OPERATOR_PROBE = "ACGTACGTAA"
SYMMETRY_PROBES: tuple[str, ...] = ("ACGTACGT", "AAAAAAA", "ACGTACGTACGT", "ACGTTGCA")
DICYCLIC_PROBES: tuple[int, ...] = (2, 4, 8, 16)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    check_name: str
    passed: bool
    message: str
    details: Mapping[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "check": self.check_name,
            "passed": self.passed,
            "message": self.message,
            "details": dict(self.details),
        }


def validate_operators(probe: str = OPERATOR_PROBE) -> list[ValidationResult]:
    """S^n = I, R^2 = I, K^2 = I, RC = R.K = K.R and R.S^k = S^-k.R."""
    seq = Sequence.from_string(probe)
    n = len(seq)
    results: list[ValidationResult] = []

    shifted_n = shift(seq, n)
    results.append(
        ValidationResult(
            "shift_cyclic",
            shifted_n == seq,
            "S^n should equal identity",
            {"seq": str(seq), "S^n(seq)": str(shifted_n)},
        )
    )

    rev_rev = reverse(reverse(seq))
    results.append(
        ValidationResult(
            "reverse_involution",
            rev_rev == seq,
            "R^2 should equal identity",
            {"seq": str(seq), "R^2(seq)": str(rev_rev)},
        )
    )

    comp_comp = complement(complement(seq))
    results.append(
        ValidationResult(
            "complement_involution",
            comp_comp == seq,
            "K^2 should equal identity",
            {"seq": str(seq), "K^2(seq)": str(comp_comp)},
        )
    )

    rc = reverse_complement(seq)
    r_k = reverse(complement(seq))
    k_r = complement(reverse(seq))
    results.append(
        ValidationResult(
            "rc_commutative",
            rc == r_k == k_r,
            "RC should equal R.K and K.R",
            {"RC": str(rc), "R.K": str(r_k), "K.R": str(k_r)},
        )
    )

    broken = [k for k in range(1, min(5, n - 1) + 1) if reverse(shift(seq, k)) != shift(reverse(seq), n - k)]
    results.append(
        ValidationResult(
            "dihedral_relation",
            not broken,
            "R.S^k should equal S^-k.R",
            {"failing_k": broken},
        )
    )
    return results


def validate_symmetry(probes: Iterable[str] = SYMMETRY_PROBES) -> list[ValidationResult]:
    """Orbit size divides 2n, orbit ratio and d_min bounds, d_min = 0 when periodic."""
    results: list[ValidationResult] = []
    for probe in probes:
        seq = Sequence.from_string(probe)
        n = len(seq)
        os_ = orbit_size(seq)
        ratio = orbit_ratio(seq)
        dm = dmin(seq)
        results.append(
            ValidationResult(
                "orbit_divides_2n",
                (2 * n) % os_ == 0,
                "Orbit size should divide 2n",
                {"seq": probe, "orbit_size": os_, "2n": 2 * n},
            )
        )
        results.append(
            ValidationResult(
                "orbit_ratio_bounds",
                1.0 / (2 * n) <= ratio <= 1.0,
                "Orbit ratio should be in [1/(2n), 1]",
                {"seq": probe, "orbit_ratio": ratio},
            )
        )
        results.append(
            ValidationResult(
                "dmin_bounds",
                0 <= dm <= n,
                "d_min should be in [0, n]",
                {"seq": probe, "dmin": dm, "n": n},
            )
        )

    periodic = Sequence.from_string("ACGTACGT")
    dm_periodic = dmin(periodic, include_rc=False)
    results.append(
        ValidationResult(
            "dmin_periodic_zero",
            dm_periodic == 0,
            "d_min should be 0 for periodic sequences",
            {"seq": "ACGTACGT", "dmin": dm_periodic},
        )
    )
    return results


def dicyclic_summary(n: int) -> dict[str, object]:
    group = DicyclicGroup(n)
    return {
        "n": n,
        "dicyclic_order": order(group),
        "dihedral_order": 2 * n,
        "double_cover_verified": verify_double_cover(group),
        "group_notation": f"Dic_{n} -> D_{n}",
    }


def validate_dicyclic(ns: Iterable[int] = DICYCLIC_PROBES) -> list[ValidationResult]:
    results: list[ValidationResult] = []
    for n in ns:
        summary = dicyclic_summary(n)
        results.append(
            ValidationResult(
                f"dicyclic_lift_{n}",
                summary["double_cover_verified"] is True and summary["dicyclic_order"] == 4 * n,
                "Dic_n should have order 4n and double-cover D_n",
                summary,
            )
        )
    return results


def run_technical_validation() -> dict[str, object]:
    """Run every suite and report whether all checks passed."""
    report: dict[str, object] = {"timestamp": datetime.now(timezone.utc).isoformat()}
    all_passed = True
    for key, suite in (
        ("operator_tests", validate_operators),
        ("symmetry_tests", validate_symmetry),
        ("dicyclic_tests", validate_dicyclic),
    ):
        results = suite()
        passed = all(r.passed for r in results)
        for failed in (r for r in results if not r.passed):
            _LOGGER.warning(f"Validation check failed: {failed.check_name} ({failed.message})")
        report[key] = [r.to_dict() for r in results]
        all_passed &= passed
    report["all_passed"] = all_passed
    return report
