"""
Numeric abstraction shared by every metric.

Each metric is written once and runs at whichever floating precision its
inputs carry. The working dtype is resolved from the two input vectors,
literals are built in that dtype, and results come back as numpy scalars of
that dtype, so float32 inputs are never silently widened to float64.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from .exceptions import ContractViolationError


# Type aliases
Vector = NDArray[np.floating]
Matrix = NDArray[np.floating]
Scalar = Union[np.float32, np.float64]

FLOAT_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))

# Degenerate-case constants
GRADIENT_EPS = 1e-6
HYPERBOLOID_EPS = 1e-8
POSITIVE_COUNT_THRESHOLD = 0.9
LOG_BETA_EXACT_LIMIT = 5.0


def default_dtype() -> np.dtype:
    """Dtype used for inputs that carry no floating precision of their own."""
    from ..config.settings import get_settings

    return get_settings().dtype


def resolve_dtype(*arrays: ArrayLike) -> np.dtype:
    """
    Resolve the working dtype for a set of inputs.

    Only floating inputs take part in promotion. float16 is computed in
    float32 and extended precision in float64; if no input is floating the
    configured default is used.

    Args:
        *arrays: Input arrays or sequences (None entries are skipped)

    Returns:
        One of FLOAT_DTYPES
    """
    floating = []
    for a in arrays:
        if a is None:
            continue
        dtype = np.asarray(a).dtype
        if np.issubdtype(dtype, np.floating):
            floating.append(dtype)

    if not floating:
        return default_dtype()

    result = np.result_type(*floating)
    if result.itemsize < 4:
        return FLOAT_DTYPES[0]
    if result.itemsize > 8:
        return FLOAT_DTYPES[1]
    return np.dtype(result)


def as_vector(x: ArrayLike, dtype: Optional[DTypeLike] = None) -> Vector:
    """
    Convert input to a contiguous 1-D vector of the working dtype.

    Args:
        x: Array or sequence of numbers
        dtype: Target dtype, resolved from x when None

    Returns:
        1-D numpy array (x itself when it already conforms)

    Raises:
        ContractViolationError: If x is not one-dimensional
    """
    arr = np.asarray(x)
    if arr.ndim != 1:
        raise ContractViolationError(
            f"Vector must be 1-dimensional, got {arr.ndim} dimensions"
        )
    if dtype is None:
        dtype = resolve_dtype(arr)
    return np.ascontiguousarray(arr, dtype=dtype)


def as_pair(x: ArrayLike, y: ArrayLike) -> Tuple[Vector, Vector]:
    """Convert two inputs to vectors sharing one working dtype."""
    x = np.asarray(x)
    y = np.asarray(y)
    dtype = resolve_dtype(x, y)
    return as_vector(x, dtype), as_vector(y, dtype)


def literal(value: float, dtype: DTypeLike) -> Scalar:
    """Build a scalar literal (0.5, 2.0, 1e-6, pi...) in the given dtype."""
    return np.dtype(dtype).type(value)


def zero(dtype: DTypeLike) -> Scalar:
    return literal(0.0, dtype)


def one(dtype: DTypeLike) -> Scalar:
    return literal(1.0, dtype)


def quiet_math() -> np.errstate:
    """
    Context manager silencing divide/invalid warnings.

    Degenerate inputs that legitimately produce inf or NaN (zero sigma,
    empty binary vectors) must not surface as RuntimeWarnings.
    """
    return np.errstate(divide="ignore", invalid="ignore")
