"""Typed failures raised by the Darwin Atlas core."""

from __future__ import annotations


class AtlasError(Exception):
    """Base class for every error raised by ``darwin_atlas``."""


class LengthMismatchError(AtlasError, ValueError):
    """Two sequences that must share a length do not."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"Sequences must have equal length, got {left} and {right}")
        self.left = left
        self.right = right


class InvalidParameterError(AtlasError, ValueError):
    """A parameter is outside the domain of the operation."""


class CrossValidationError(AtlasError, RuntimeError):
    """Two backends disagreed on at least one input."""
