"""Backend registry surface.

Provides a small factory to obtain a :class:`SymmetryBackend` by name.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from darwin_atlas.backends.interfaces import SymmetryBackend
from darwin_atlas.backends.reference import ReferenceBackend
from darwin_atlas.backends.vectorized import NumpyBackend

_REGISTRY: Final[dict[str, Callable[..., SymmetryBackend]]] = {
    "reference": ReferenceBackend,
    "numpy": NumpyBackend,
}


def backend_from_name(name: str, **params: object) -> SymmetryBackend:
    """Return a backend instance from the registry.

    Raises KeyError for unknown backends.

    Parameters
    ----------
    name : str
        Backend name: "reference" or "numpy"
    **params : object
        Constructor parameters (e.g., ``tol`` for the numpy backend)
    """
    key = name.lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown backend: {name}. Available: {list(_REGISTRY.keys())}")
    return _REGISTRY[key](**params)


def available_backends() -> list[str]:
    return sorted(_REGISTRY)


__all__ = [
    "NumpyBackend",
    "ReferenceBackend",
    "SymmetryBackend",
    "available_backends",
    "backend_from_name",
]
