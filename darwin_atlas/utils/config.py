"""Configuration utilities."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal

import yaml

from darwin_atlas.errors import InvalidParameterError

DEFAULT_LENGTHS: tuple[int, ...] = (4, 8, 16, 32, 64, 100)


@dataclass(frozen=True, slots=True)
class CrossValidationConfig:
    """Settings for one cross-implementation batch.

    ``reference`` and ``candidate`` are backend names resolved through
    :func:`darwin_atlas.backends.backend_from_name`. The dicyclic sweep covers
    every ``n`` in ``[n_min, n_max]``.
    """

    seed: int = 42
    n_random: int = 100
    lengths: tuple[int, ...] = DEFAULT_LENGTHS
    n_min: int = 2
    n_max: int = 16
    tol: float = 1e-12
    reference: str = "reference"
    candidate: str = "numpy"
    mode: Literal["thread", "process", "serial"] = "thread"
    num_workers: int | Literal["auto"] = "auto"
    include_rc_variants: tuple[bool, ...] = (True, False)

    def __post_init__(self) -> None:
        if self.n_random < 0:
            raise InvalidParameterError(f"n_random must be >= 0, got {self.n_random}")
        if not self.lengths or any(length <= 0 for length in self.lengths):
            raise InvalidParameterError(f"lengths must be positive, got {self.lengths}")
        if self.n_min < 2 or self.n_max < self.n_min:
            raise InvalidParameterError(
                f"dicyclic range must satisfy 2 <= n_min <= n_max, got [{self.n_min}, {self.n_max}]"
            )
        if not self.tol > 0.0:
            raise InvalidParameterError(f"tol must be positive, got {self.tol}")
        if self.mode not in {"thread", "process", "serial"}:
            raise InvalidParameterError(f"Unknown mode: {self.mode}")
        if self.num_workers != "auto" and int(self.num_workers) < 1:
            raise InvalidParameterError(f"num_workers must be >= 1 or 'auto', got {self.num_workers}")

    @property
    def n_values(self) -> list[int]:
        return list(range(self.n_min, self.n_max + 1))

    def as_dict(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "n_random": self.n_random,
            "lengths": list(self.lengths),
            "n_min": self.n_min,
            "n_max": self.n_max,
            "tol": self.tol,
            "reference": self.reference,
            "candidate": self.candidate,
            "mode": self.mode,
            "num_workers": self.num_workers,
            "include_rc_variants": list(self.include_rc_variants),
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CrossValidationConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidParameterError(f"Unknown config keys: {sorted(unknown)}")
        values = dict(data)
        for key in ("lengths", "include_rc_variants"):
            if key in values:
                values[key] = tuple(values[key])
        return cls(**values)


def load_config(path: str | Path) -> CrossValidationConfig:
    """Read a JSON or YAML file into a :class:`CrossValidationConfig`.

    A top-level ``cross_validation`` section is used when present so the
    settings can share a file with other tooling.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix.lower() == ".json":
        data = json.loads(path.read_text())
    else:
        data = yaml.safe_load(path.read_text())
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise InvalidParameterError(f"Config root must be a mapping, got {type(data).__name__}")
    section = data.get("cross_validation", data)
    return CrossValidationConfig.from_mapping(section)
