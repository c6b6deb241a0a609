"""
Input validation utilities.

Everything here guards a precondition. A failure is a programming error in
the caller, so these raise instead of returning sentinel values.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from ..core.exceptions import ContractViolationError, DimensionMismatchError
from ..core.numeric import Matrix, Vector, as_pair, as_vector
from .logging import get_logger
from .linalg import identity_matrix, ones_vector

logger = get_logger(__name__)


def check_same_length(x: Vector, y: Vector) -> None:
    """
    Ensure two vectors have equal length.

    Raises:
        DimensionMismatchError: If lengths differ
    """
    if x.shape[0] != y.shape[0]:
        logger.debug("Length mismatch: %d vs %d", x.shape[0], y.shape[0])
        raise DimensionMismatchError(
            f"Vectors must have the same length, got {x.shape[0]} and {y.shape[0]}"
        )


def check_dimension(x: Vector, expected: int, metric: str) -> None:
    """
    Ensure a vector has exactly the dimensionality a metric is defined for.

    Raises:
        DimensionMismatchError: If len(x) != expected
    """
    if x.shape[0] != expected:
        raise DimensionMismatchError(
            f"{metric} is only defined for {expected}-dimensional data, "
            f"got {x.shape[0]} dimensions"
        )


def prepare_pair(x: ArrayLike, y: ArrayLike) -> Tuple[Vector, Vector]:
    """
    Convert and validate the two vectors of a binary metric.

    Args:
        x: First vector
        y: Second vector

    Returns:
        Tuple of 1-D arrays sharing the working dtype

    Raises:
        DimensionMismatchError: If lengths differ
        ContractViolationError: If either input is not 1-D
    """
    x, y = as_pair(x, y)
    check_same_length(x, y)
    return x, y


def resolve_weights(
    w: Optional[ArrayLike],
    n: int,
    dtype: DTypeLike,
    name: str = "w",
) -> Vector:
    """
    Resolve an optional per-coordinate parameter vector.

    None becomes a ones vector, which reduces weighted and standardised
    metrics to their plain forms exactly.

    Raises:
        DimensionMismatchError: If the vector doesn't have length n
    """
    if w is None:
        return ones_vector(n, dtype)

    w = as_vector(w, dtype)
    if w.shape[0] != n:
        raise DimensionMismatchError(
            f"'{name}' must have length {n}, got {w.shape[0]}"
        )
    return w


def resolve_matrix(
    vinv: Optional[ArrayLike],
    n: int,
    dtype: DTypeLike,
) -> Matrix:
    """
    Resolve an optional inverse-covariance matrix.

    None becomes the identity, which reduces Mahalanobis to Euclidean.

    Raises:
        ContractViolationError: If vinv is not 2-D
        DimensionMismatchError: If vinv is not n x n
    """
    if vinv is None:
        return identity_matrix(n, dtype)

    vinv = np.asarray(vinv)
    if vinv.ndim != 2:
        raise ContractViolationError(
            f"'vinv' must be 2-dimensional, got {vinv.ndim} dimensions"
        )
    if vinv.shape != (n, n):
        raise DimensionMismatchError(
            f"'vinv' must have shape ({n}, {n}), got {vinv.shape}"
        )
    return np.ascontiguousarray(vinv, dtype=dtype)
