"""Cross-validation between two symmetry backends.

Both backends are run on the same seeded corpus and every output is compared:
integers, booleans, sequences and typed errors must match exactly, floats
must agree within ``tol``. A single mismatch fails the whole batch.
"""

from __future__ import annotations

import logging
import os
import random
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Future, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Literal

import pandas as pd

from darwin_atlas.backends import backend_from_name
from darwin_atlas.backends.interfaces import SymmetryBackend
from darwin_atlas.core.bases import ALPHABET
from darwin_atlas.core.operators import reverse
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.errors import AtlasError, CrossValidationError
from darwin_atlas.symmetry.exact import SymmetryStats
from darwin_atlas.utils.config import DEFAULT_LENGTHS, CrossValidationConfig

_LOGGER = logging.getLogger(__name__)

FIXED_CASES: tuple[str, ...] = (
    "",
    "A",
    "ACGT",  # RC-fixed
    "ACGTACGT",
    "AAAA",
    "ACCA",  # palindrome
    "AACCAA",  # palindrome
    "ACGTTGCA",  # palindrome
    "GGCC",  # RC-fixed
    "ACGTACGTACGT",  # periodic
)

Kind = Literal["exact", "float", "stats"]
Outcome = tuple[str, Any]


@dataclass(frozen=True, slots=True)
class Check:
    """One backend call to run on both sides."""

    function_name: str
    method: str
    args: tuple[Any, ...]
    kind: Kind = "exact"

    def describe(self) -> str:
        return ", ".join(_describe(arg) for arg in self.args)


@dataclass(frozen=True, slots=True)
class Mismatch:
    input_repr: str
    reference: Any
    candidate: Any


@dataclass(slots=True)
class CrossValidationResult:
    """Tally for one compared function."""

    function_name: str
    n_tests: int = 0
    n_passed: int = 0
    n_failed: int = 0
    max_error: float = 0.0
    failed_cases: list[Mismatch] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.n_failed == 0

    def to_dict(self) -> dict[str, object]:
        return {
            "function": self.function_name,
            "n_tests": self.n_tests,
            "n_passed": self.n_passed,
            "n_failed": self.n_failed,
            "max_error": self.max_error,
        }


@dataclass(frozen=True, slots=True)
class CrossValidationReport:
    reference: str
    candidate: str
    seed: int
    n_sequences: int
    results: Mapping[str, CrossValidationResult]

    @property
    def total_tests(self) -> int:
        return sum(r.n_tests for r in self.results.values())

    @property
    def total_failed(self) -> int:
        return sum(r.n_failed for r in self.results.values())

    @property
    def all_passed(self) -> bool:
        return self.total_failed == 0

    def summary(self) -> dict[str, object]:
        return {
            "reference": self.reference,
            "candidate": self.candidate,
            "seed": self.seed,
            "n_sequences": self.n_sequences,
            "total_tests": self.total_tests,
            "total_failed": self.total_failed,
            "all_passed": self.all_passed,
            "functions": {name: r.to_dict() for name, r in self.results.items()},
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per compared function."""
        return pd.DataFrame([r.to_dict() for r in self.results.values()])

    def failures(self) -> list[tuple[str, Mismatch]]:
        return [(name, case) for name, r in self.results.items() for case in r.failed_cases]

    def raise_for_failures(self) -> None:
        if self.all_passed:
            return
        lines = [
            f"{name}({case.input_repr}): {self.reference}={case.reference!r} {self.candidate}={case.candidate!r}"
            for name, case in self.failures()
        ]
        raise CrossValidationError(
            f"{self.total_failed} mismatches between {self.reference} and {self.candidate}:\n" + "\n".join(lines)
        )


def generate_test_sequences(
    n_random: int = 100,
    seed: int = 42,
    lengths: Iterable[int] = DEFAULT_LENGTHS,
) -> list[Sequence]:
    """Fixed literal cases followed by seeded random sequences.

    ``n_random // len(lengths)`` sequences are drawn for each length, so the
    corpus is identical for a given ``(n_random, seed, lengths)``.
    """
    lengths = tuple(lengths)
    rng = random.Random(seed)
    seqs = [Sequence.from_string(case) for case in FIXED_CASES]
    per_length = n_random // len(lengths) if lengths else 0
    for length in lengths:
        for _ in range(per_length):
            tokens = "".join(rng.choice(ALPHABET) for _ in range(length))
            seqs.append(Sequence.from_string(tokens))
    return seqs


def build_checks(
    seqs: Iterable[Sequence],
    ns: Iterable[int],
    include_rc_variants: Iterable[bool] = (True, False),
) -> list[Check]:
    """Expand the corpus into the list of calls compared by the contract."""
    include_rc_variants = tuple(include_rc_variants)
    checks: list[Check] = []
    for seq in seqs:
        n = len(seq)
        for k in sorted({0, 1, n // 2, n, n + 1}):
            checks.append(Check("shift", "shift", (seq, k)))
        checks.append(Check("reverse", "reverse", (seq,)))
        checks.append(Check("complement", "complement", (seq,)))
        checks.append(Check("reverse_complement", "reverse_complement", (seq,)))
        checks.append(Check("hamming_distance", "hamming_distance", (seq, reverse(seq))))
        if n > 0:
            checks.append(Check("hamming_distance", "hamming_distance", (seq, seq[:-1])))
        checks.append(Check("orbit_size", "orbit_size", (seq,)))
        checks.append(Check("orbit_ratio", "orbit_ratio", (seq,), "float"))
        checks.append(Check("is_palindrome", "is_palindrome", (seq,)))
        checks.append(Check("is_rc_fixed", "is_rc_fixed", (seq,)))
        checks.append(Check("rotational_period", "rotational_period", (seq,)))
        checks.append(Check("symmetry_stats", "symmetry_stats", (seq,), "stats"))
        for include_rc in include_rc_variants:
            suffix = "" if include_rc else "[no_rc]"
            checks.append(Check(f"dmin{suffix}", "dmin", (seq, include_rc)))
            checks.append(Check(f"dmin_normalized{suffix}", "dmin_normalized", (seq, include_rc), "float"))
            checks.append(Check(f"nearest_transform{suffix}", "nearest_transform", (seq, include_rc)))
    for n in ns:
        checks.append(Check("dicyclic_order", "dicyclic_order", (n,)))
        checks.append(Check("verify_double_cover", "verify_double_cover", (n,)))
    return checks


def _describe(arg: Any) -> str:
    if isinstance(arg, Sequence):
        return repr(arg.to_string())
    return repr(arg)


def _invoke(backend: SymmetryBackend, check: Check) -> Outcome:
    try:
        return ("ok", getattr(backend, check.method)(*check.args))
    except AtlasError as exc:
        return ("error", type(exc).__name__)


def _run_batch(reference: SymmetryBackend, candidate: SymmetryBackend, batch: list[Check]) -> list[tuple[Outcome, Outcome]]:
    return [(_invoke(reference, check), _invoke(candidate, check)) for check in batch]


def _compare(kind: Kind, left: Outcome, right: Outcome, tol: float) -> tuple[bool, float]:
    """Return ``(agree, abs_error)`` for two outcomes."""
    if left[0] != right[0]:
        return False, 0.0
    if left[0] == "error":
        return left[1] == right[1], 0.0
    a, b = left[1], right[1]
    if kind == "float":
        error = abs(float(a) - float(b))
        return error < tol, error
    if kind == "stats":
        return _stats_agree(a, b, tol)
    return a == b, 0.0


def _stats_agree(a: SymmetryStats, b: SymmetryStats, tol: float) -> tuple[bool, float]:
    error = abs(a.orbit_ratio - b.orbit_ratio)
    same = (
        a.length == b.length
        and a.orbit_size == b.orbit_size
        and a.is_palindrome == b.is_palindrome
        and a.is_rc_fixed == b.is_rc_fixed
        and a.rotational_period == b.rotational_period
    )
    return same and error < tol, error


def _chunks(items: list[Check], size: int) -> list[list[Check]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


@dataclass
class CrossValidator:
    """Run a reference and a candidate backend over the same checks.

    Parameters
    ----------
    reference, candidate:
        Backends to compare.
    tol:
        Absolute tolerance for floating-point outputs.
    mode:
        "serial", "thread" (default) or "process".
    num_workers:
        Worker count, or "auto" for ``os.cpu_count()``.
    batch_size:
        Checks per submitted task.
    """

    reference: SymmetryBackend
    candidate: SymmetryBackend
    tol: float = 1e-12
    mode: Literal["serial", "thread", "process"] = "thread"
    num_workers: int | Literal["auto"] = "auto"
    batch_size: int = 64

    def _max_workers(self) -> int:
        if self.num_workers == "auto":
            return os.cpu_count() or 1
        return max(1, int(self.num_workers))

    def _execute(self, checks: list[Check]) -> list[tuple[Outcome, Outcome]]:
        batches = _chunks(checks, self.batch_size)
        if self.mode == "serial" or len(batches) <= 1:
            return [pair for batch in batches for pair in _run_batch(self.reference, self.candidate, batch)]

        executor_cls = ThreadPoolExecutor if self.mode == "thread" else ProcessPoolExecutor
        outcomes: list[tuple[Outcome, Outcome]] = []
        with executor_cls(max_workers=self._max_workers()) as pool:
            futures: list[Future] = [
                pool.submit(_run_batch, self.reference, self.candidate, batch) for batch in batches
            ]
            # Consume in submission order so the report is independent of scheduling
            for idx, fut in enumerate(futures):
                try:
                    outcomes.extend(fut.result())
                except Exception as exc:
                    for pending in futures[idx + 1 :]:
                        pending.cancel()
                    raise RuntimeError("Worker task failed") from exc
        return outcomes

    def run_checks(self, checks: list[Check]) -> dict[str, CrossValidationResult]:
        outcomes = self._execute(checks)
        results: dict[str, CrossValidationResult] = {}
        for check, (left, right) in zip(checks, outcomes):
            result = results.setdefault(check.function_name, CrossValidationResult(check.function_name))
            agree, error = _compare(check.kind, left, right, self.tol)
            result.n_tests += 1
            result.max_error = max(result.max_error, error)
            if agree:
                result.n_passed += 1
                continue
            result.n_failed += 1
            result.failed_cases.append(Mismatch(check.describe(), left[1], right[1]))
            _LOGGER.warning(
                f"{check.function_name} mismatch on {check.describe()[:60]}: "
                f"{self.reference.name}={left[1]!r} {self.candidate.name}={right[1]!r}"
            )
        return results

    def run(
        self,
        seqs: list[Sequence],
        ns: Iterable[int],
        *,
        seed: int = 0,
        include_rc_variants: Iterable[bool] = (True, False),
    ) -> CrossValidationReport:
        checks = build_checks(seqs, ns, include_rc_variants)
        _LOGGER.info(
            f"Cross-validating {self.reference.name} vs {self.candidate.name}: "
            f"{len(seqs)} sequences, {len(checks)} checks, mode={self.mode}"
        )
        results = self.run_checks(checks)
        report = CrossValidationReport(
            reference=self.reference.name,
            candidate=self.candidate.name,
            seed=seed,
            n_sequences=len(seqs),
            results=results,
        )
        status = "PASSED" if report.all_passed else "FAILED"
        _LOGGER.info(f"Cross-validation {status}: {report.total_tests - report.total_failed}/{report.total_tests}")
        return report


def run_cross_validation(
    config: CrossValidationConfig | None = None,
    *,
    backend_factory: Callable[[str], SymmetryBackend] = backend_from_name,
) -> CrossValidationReport:
    """Build the corpus and backends described by ``config`` and compare them."""
    config = config or CrossValidationConfig()
    seqs = generate_test_sequences(config.n_random, config.seed, config.lengths)
    validator = CrossValidator(
        reference=backend_factory(config.reference),
        candidate=backend_factory(config.candidate),
        tol=config.tol,
        mode=config.mode,
        num_workers=config.num_workers,
    )
    return validator.run(
        seqs,
        config.n_values,
        seed=config.seed,
        include_rc_variants=config.include_rc_variants,
    )
