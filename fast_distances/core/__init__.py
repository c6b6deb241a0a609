"""
Core components for fast_distances.
"""

from .exceptions import (
    FastDistancesError,
    ContractViolationError,
    DimensionMismatchError,
    UnknownMetricError,
    GradientNotAvailableError,
    ConfigurationError,
)
from .numeric import (
    Vector,
    Matrix,
    Scalar,
    FLOAT_DTYPES,
    resolve_dtype,
    as_vector,
    as_pair,
    literal,
    zero,
    one,
    quiet_math,
)

__all__ = [
    # Exceptions
    "FastDistancesError",
    "ContractViolationError",
    "DimensionMismatchError",
    "UnknownMetricError",
    "GradientNotAvailableError",
    "ConfigurationError",
    # Numeric
    "Vector",
    "Matrix",
    "Scalar",
    "FLOAT_DTYPES",
    "resolve_dtype",
    "as_vector",
    "as_pair",
    "literal",
    "zero",
    "one",
    "quiet_math",
]
