"""Cross-implementation and technical validation."""

from .crossval import (
    FIXED_CASES,
    CrossValidationReport,
    CrossValidationResult,
    CrossValidator,
    Mismatch,
    generate_test_sequences,
    run_cross_validation,
)
from .technical import (
    ValidationResult,
    dicyclic_summary,
    run_technical_validation,
    validate_dicyclic,
    validate_operators,
    validate_symmetry,
)

__all__ = [
    "FIXED_CASES",
    "CrossValidationReport",
    "CrossValidationResult",
    "CrossValidator",
    "Mismatch",
    "ValidationResult",
    "dicyclic_summary",
    "generate_test_sequences",
    "run_cross_validation",
    "run_technical_validation",
    "validate_dicyclic",
    "validate_operators",
    "validate_symmetry",
]
