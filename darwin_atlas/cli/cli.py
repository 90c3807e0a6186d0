"""Darwin Atlas command-line interface."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

from darwin_atlas import __version__
from darwin_atlas.core.sequence import Sequence
from darwin_atlas.errors import AtlasError
from darwin_atlas.symmetry.approx import dmin_normalized, nearest_transform
from darwin_atlas.symmetry.exact import compute_symmetry_stats
from darwin_atlas.utils.config import CrossValidationConfig, load_config
from darwin_atlas.utils.logging import get_logger
from darwin_atlas.validation.crossval import run_cross_validation
from darwin_atlas.validation.technical import dicyclic_summary, run_technical_validation

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="darwin-atlas", description="Darwin Atlas symmetry core")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    stats_parser = subparsers.add_parser("stats", help="Exact and approximate symmetry of a sequence")
    stats_parser.add_argument("sequence", help="DNA sequence over ACGT")
    stats_parser.add_argument("--no-rc", action="store_true", help="Exclude reverse-complement transforms")

    dmin_parser = subparsers.add_parser("dmin", help="Minimum distance to a non-identity transform")
    dmin_parser.add_argument("sequence", help="DNA sequence over ACGT")
    dmin_parser.add_argument("--no-rc", action="store_true", help="Exclude reverse-complement transforms")

    cover_parser = subparsers.add_parser("verify-cover", help="Verify Dic_n -> D_n for each n")
    cover_parser.add_argument("n", type=int, nargs="+", help="Group parameter(s), n >= 2")

    cv_parser = subparsers.add_parser("cross-validate", help="Compare two backends on a seeded corpus")
    cv_parser.add_argument("--config", help="Path to YAML/JSON config file")
    cv_parser.add_argument("--seed", type=int, help="Corpus seed (default: 42)")
    cv_parser.add_argument("--n-random", type=int, help="Random sequences in the corpus (default: 100)")
    cv_parser.add_argument("--reference", help="Reference backend name")
    cv_parser.add_argument("--candidate", help="Candidate backend name")
    cv_parser.add_argument("--mode", choices=["serial", "thread", "process"], help="Worker pool type")
    cv_parser.add_argument("--workers", type=int, help="Number of workers")

    subparsers.add_parser("validate", help="Run the technical validation suite")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = get_logger()
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    try:
        if args.command == "stats":
            return _run_stats(args.sequence, include_rc=not args.no_rc)
        if args.command == "dmin":
            return _run_dmin(args.sequence, include_rc=not args.no_rc)
        if args.command == "verify-cover":
            return _run_verify_cover(args.n)
        if args.command == "cross-validate":
            return _run_cross_validate(args)
        if args.command == "validate":
            return _run_validate()
    except (AtlasError, FileNotFoundError) as exc:
        logger.error(str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID

    parser.print_help()
    return EXIT_OK


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _run_stats(tokens: str, *, include_rc: bool) -> int:
    seq = Sequence.from_string(tokens)
    distance, witness = nearest_transform(seq, include_rc)
    payload = compute_symmetry_stats(seq).to_dict()
    payload.update(
        {
            "dmin": distance,
            "dmin_normalized": dmin_normalized(seq, include_rc),
            "nearest_transform": witness.to_dict(),
            "include_rc": include_rc,
        }
    )
    _emit(payload)
    return EXIT_OK


def _run_dmin(tokens: str, *, include_rc: bool) -> int:
    seq = Sequence.from_string(tokens)
    distance, witness = nearest_transform(seq, include_rc)
    _emit({"dmin": distance, "transform": witness.transform.label(), "include_rc": include_rc})
    return EXIT_OK


def _run_verify_cover(ns: list[int]) -> int:
    rows = [dicyclic_summary(n) for n in ns]
    _emit(rows)
    return EXIT_OK if all(row["double_cover_verified"] for row in rows) else EXIT_FAILED


def _build_cv_config(args: argparse.Namespace) -> CrossValidationConfig:
    config = load_config(Path(args.config)) if args.config else CrossValidationConfig()
    overrides = {
        "seed": args.seed,
        "n_random": args.n_random,
        "reference": args.reference,
        "candidate": args.candidate,
        "mode": args.mode,
        "num_workers": args.workers,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return dataclasses.replace(config, **overrides) if overrides else config


def _run_cross_validate(args: argparse.Namespace) -> int:
    config = _build_cv_config(args)
    report = run_cross_validation(config)
    _emit(report.summary())
    if args.verbose:
        print(report.to_frame().to_string(index=False))
    if not report.all_passed:
        for name, case in report.failures():
            print(
                f"MISMATCH {name}({case.input_repr[:60]}): "
                f"{report.reference}={case.reference!r} {report.candidate}={case.candidate!r}",
                file=sys.stderr,
            )
        return EXIT_FAILED
    return EXIT_OK


def _run_validate() -> int:
    report = run_technical_validation()
    _emit(report)
    return EXIT_OK if report["all_passed"] else EXIT_FAILED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
