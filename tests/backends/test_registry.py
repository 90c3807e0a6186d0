"""Tests for the backend registry."""

import pytest

from darwin_atlas.backends import (
    NumpyBackend,
    ReferenceBackend,
    available_backends,
    backend_from_name,
)


class TestBackendRegistry:
    """Resolve backends by name."""

    def test_available(self):
        assert available_backends() == ["numpy", "reference"]

    def test_build_reference(self):
        backend = backend_from_name("reference")
        assert isinstance(backend, ReferenceBackend)
        assert backend.name == "reference"

    def test_build_is_case_insensitive_and_forwards_params(self):
        backend = backend_from_name("NumPy", tol=1e-8)
        assert isinstance(backend, NumpyBackend)
        assert backend.tol == 1e-8

    def test_unknown_backend(self):
        with pytest.raises(KeyError):
            backend_from_name("cuda")

    @pytest.mark.parametrize("name", ["reference", "numpy"])
    def test_backends_implement_protocol(self, name):
        backend = backend_from_name(name)
        for method in (
            "shift",
            "reverse",
            "complement",
            "reverse_complement",
            "hamming_distance",
            "orbit_size",
            "orbit_ratio",
            "is_palindrome",
            "is_rc_fixed",
            "rotational_period",
            "symmetry_stats",
            "dmin",
            "dmin_normalized",
            "nearest_transform",
            "dicyclic_order",
            "verify_double_cover",
        ):
            assert callable(getattr(backend, method))
