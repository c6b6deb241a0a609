"""
Utility functions for fast_distances.
"""

from .validation import (
    check_same_length,
    check_dimension,
    prepare_pair,
    resolve_weights,
    resolve_matrix,
)
from .linalg import (
    identity_matrix,
    ones_vector,
    cost_matrix,
    sign,
    inverse_covariance,
)
from .logging import setup_logger, get_logger, LogContext

__all__ = [
    "check_same_length",
    "check_dimension",
    "prepare_pair",
    "resolve_weights",
    "resolve_matrix",
    "identity_matrix",
    "ones_vector",
    "cost_matrix",
    "sign",
    "inverse_covariance",
    "setup_logger",
    "get_logger",
    "LogContext",
]
