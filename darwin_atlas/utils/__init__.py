"""Utility exports."""

from .config import CrossValidationConfig, load_config
from .logging import get_logger

__all__ = [
    "CrossValidationConfig",
    "get_logger",
    "load_config",
]
