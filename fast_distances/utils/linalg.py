"""
Small linear-algebra helpers used as metric defaults.
"""

from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray
from scipy import linalg

from ..core.exceptions import ContractViolationError
from ..core.numeric import Matrix, Vector, resolve_dtype


def identity_matrix(n: int, dtype: DTypeLike = np.float64) -> Matrix:
    """
    Build an n x n identity matrix.

    Used as the default inverse covariance for Mahalanobis distance.
    """
    return np.eye(n, dtype=dtype)


def ones_vector(n: int, dtype: DTypeLike = np.float64) -> Vector:
    """Build a length-n vector of ones (default weights and sigmas)."""
    return np.ones(n, dtype=dtype)


def cost_matrix(n: int, dtype: DTypeLike = np.float64) -> Matrix:
    """Unit ground-cost matrix: ones everywhere except a zero diagonal."""
    return np.ones((n, n), dtype=dtype) - identity_matrix(n, dtype)


def sign(a: Union[float, ArrayLike]) -> Union[float, NDArray]:
    """
    Sign with +1 at zero.

    Returns -1 for negative values and +1 otherwise, so zero and NaN map to
    +1. Works element-wise on arrays, preserving the floating dtype.

    Example:
        >>> sign(np.array([-3.5, 0.0, 4.5]))
        array([-1.,  1.,  1.])
    """
    arr = np.asarray(a)
    dtype = arr.dtype if np.issubdtype(arr.dtype, np.floating) else np.float64
    result = np.where(arr < 0, -1, 1).astype(dtype)
    if result.ndim == 0:
        return result[()]
    return result


def inverse_covariance(data: ArrayLike, dtype: DTypeLike = None) -> Matrix:
    """
    Inverse of the sample covariance of a set of observations.

    Builds the ``vinv`` argument of the Mahalanobis metrics. A
    pseudo-inverse is used so singular covariances still give a usable
    (positive semi-definite) matrix.

    Args:
        data: Array of shape (n_samples, n_features)
        dtype: Output dtype, resolved from data when None

    Returns:
        Symmetric matrix of shape (n_features, n_features)

    Raises:
        ContractViolationError: If data is not 2-D with at least 2 samples
    """
    arr = np.asarray(data)
    if arr.ndim != 2:
        raise ContractViolationError(
            f"Observations must be 2-dimensional, got {arr.ndim} dimensions"
        )
    if arr.shape[0] < 2:
        raise ContractViolationError(
            f"At least 2 observations are needed, got {arr.shape[0]}"
        )

    if dtype is None:
        dtype = resolve_dtype(arr)

    cov = np.atleast_2d(np.cov(arr.astype(np.float64), rowvar=False))
    return linalg.pinvh(cov).astype(dtype)
