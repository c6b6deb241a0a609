"""
Core distance metric implementations.

Every function takes two equal-length vectors (plus optional parameters),
computes in the working dtype of its inputs and returns a numpy scalar of
that dtype. Degenerate inputs (zero norms, zero denominators) return the
documented sentinel where one is defined; otherwise NaN or inf comes back
without a warning.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..core.numeric import (
    HYPERBOLOID_EPS,
    Scalar,
    Vector,
    literal,
    one,
    quiet_math,
    zero,
)
from ..utils.logging import get_logger
from ..utils.validation import (
    check_dimension,
    prepare_pair,
    resolve_matrix,
    resolve_weights,
)

logger = get_logger(__name__)


# =============================================================================
# MINKOWSKI FAMILY
# =============================================================================

def manhattan(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute Manhattan (L1) distance between two vectors.

    Formula: sum(|x_i - y_i|)

    Args:
        x: First vector
        y: Second vector

    Returns:
        Manhattan distance (>= 0)

    Raises:
        DimensionMismatchError: If the vectors differ in length

    Example:
        >>> float(manhattan([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]))
        9.0
    """
    x, y = prepare_pair(x, y)
    return np.sum(np.abs(x - y))


def euclidean(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute Euclidean (L2) distance between two vectors.

    Formula: sqrt(sum((x_i - y_i)^2))

    Example:
        >>> float(euclidean([0.0, 0.0], [3.0, 4.0]))
        5.0
    """
    x, y = prepare_pair(x, y)
    diff = x - y
    return np.sqrt(np.dot(diff, diff))


def chebyshev(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute Chebyshev (L-infinity) distance between two vectors.

    Formula: max(|x_i - y_i|); 0 for empty vectors.
    """
    x, y = prepare_pair(x, y)
    return np.max(np.abs(x - y), initial=zero(x.dtype))


def minkowski(x: ArrayLike, y: ArrayLike, p: float = 2.0) -> Scalar:
    """
    Compute Minkowski distance of order p.

    Formula: (sum(|x_i - y_i|^p))^(1/p)

    p is used as given. p=1 is Manhattan and p=2 Euclidean; an infinite p
    is not special-cased and follows the dtype's power semantics.

    Args:
        x: First vector
        y: Second vector
        p: Order of the norm

    Returns:
        Minkowski distance
    """
    x, y = prepare_pair(x, y)
    p = literal(p, x.dtype)
    with quiet_math():
        return np.sum(np.abs(x - y) ** p) ** (one(x.dtype) / p)


def weighted_minkowski(
    x: ArrayLike,
    y: ArrayLike,
    w: Optional[ArrayLike] = None,
    p: float = 2.0,
) -> Scalar:
    """
    Compute weighted Minkowski distance.

    Formula: (sum(w_i * |x_i - y_i|^p))^(1/p)

    Args:
        x: First vector
        y: Second vector
        w: Per-coordinate weights, all ones when None
        p: Order of the norm

    Returns:
        Weighted Minkowski distance; equals minkowski(x, y, p) when w is None
    """
    x, y = prepare_pair(x, y)
    w = resolve_weights(w, x.shape[0], x.dtype, name="w")
    p = literal(p, x.dtype)
    with quiet_math():
        return np.sum(w * np.abs(x - y) ** p) ** (one(x.dtype) / p)


def standardised_euclidean(
    x: ArrayLike,
    y: ArrayLike,
    sigma: Optional[ArrayLike] = None,
) -> Scalar:
    """
    Compute Euclidean distance standardised by per-coordinate variances.

    Formula: sqrt(sum((x_i - y_i)^2 / sigma_i))

    A zero sigma_i makes that term (and the result) infinite; it is not
    clamped.

    Args:
        x: First vector
        y: Second vector
        sigma: Per-coordinate variances, all ones when None
    """
    x, y = prepare_pair(x, y)
    sigma = resolve_weights(sigma, x.shape[0], x.dtype, name="sigma")
    diff = x - y
    with quiet_math():
        return np.sqrt(np.sum(diff * diff / sigma))


def mahalanobis(
    x: ArrayLike,
    y: ArrayLike,
    vinv: Optional[ArrayLike] = None,
) -> Scalar:
    """
    Compute Mahalanobis distance.

    Formula: sqrt((x - y)^T V^-1 (x - y))

    Args:
        x: First vector
        y: Second vector
        vinv: Inverse covariance matrix of shape (n, n), identity when None
            (which reduces to Euclidean distance)

    See Also:
        fast_distances.utils.inverse_covariance
    """
    x, y = prepare_pair(x, y)
    vinv = resolve_matrix(vinv, x.shape[0], x.dtype)
    diff = x - y
    with quiet_math():
        return np.sqrt(np.dot(diff, vinv @ diff))


# =============================================================================
# RATIO METRICS
# =============================================================================

def canberra(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute Canberra distance.

    Formula: sum(|x_i - y_i| / (|x_i| + |y_i|))

    Terms whose denominator is zero contribute 0.
    """
    x, y = prepare_pair(x, y)
    denominator = np.abs(x) + np.abs(y)
    terms = np.divide(
        np.abs(x - y),
        denominator,
        out=np.zeros_like(x),
        where=denominator > 0,
    )
    return np.sum(terms)


def bray_curtis(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute Bray-Curtis dissimilarity.

    Formula: sum(|x_i - y_i|) / sum(|x_i + y_i|)

    Returns 0 when the denominator is zero.

    Example:
        >>> float(bray_curtis([1.0, 1.0, 1.0], [-1.0, -1.0, -1.0]))
        0.0
    """
    x, y = prepare_pair(x, y)
    numerator = np.sum(np.abs(x - y))
    denominator = np.sum(np.abs(x + y))

    if denominator > 0:
        return numerator / denominator
    return zero(x.dtype)


def cosine(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute cosine distance.

    Formula: 1 - (x . y) / (||x|| * ||y||)

    Returns 0 when both vectors are zero and 1 when exactly one is.

    Example:
        >>> float(cosine([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]))
        1.0
    """
    x, y = prepare_pair(x, y)
    dot, norm_x, norm_y = _dot_and_norms(x, y)

    if norm_x == 0 and norm_y == 0:
        return zero(x.dtype)
    if norm_x == 0 or norm_y == 0:
        return one(x.dtype)
    return one(x.dtype) - dot / (np.sqrt(norm_x) * np.sqrt(norm_y))


def correlation(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute correlation distance (cosine distance of the centred vectors).

    Formula: 1 - ((x - mu_x) . (y - mu_y)) / (||x - mu_x|| * ||y - mu_y||)

    Returns 0 when both centred norms are zero and 1 when the centred dot
    product is zero.
    """
    x, y = prepare_pair(x, y)
    x_centred, y_centred = _centre(x, y)
    dot, norm_x, norm_y = _dot_and_norms(x_centred, y_centred)

    if norm_x == 0 and norm_y == 0:
        return zero(x.dtype)
    if dot == 0:
        return one(x.dtype)
    return one(x.dtype) - dot / (np.sqrt(norm_x) * np.sqrt(norm_y))


def hellinger(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute Hellinger distance between two non-negative vectors.

    Formula: 1 - sum(sqrt(x_i * y_i)) / sqrt(sum(x) * sum(y))

    Returns 0 when both L1 sums are zero and 1 when exactly one is.
    """
    x, y = prepare_pair(x, y)
    with quiet_math():
        result = np.sum(np.sqrt(x * y))
    l1_x = np.sum(x)
    l1_y = np.sum(y)

    if l1_x == 0 and l1_y == 0:
        return zero(x.dtype)
    if l1_x == 0 or l1_y == 0:
        return one(x.dtype)
    with quiet_math():
        return one(x.dtype) - result / np.sqrt(l1_x * l1_y)


# =============================================================================
# SPHERICAL AND HYPERBOLIC METRICS
# =============================================================================

def haversine(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute great-circle (haversine) distance on the unit sphere.

    Inputs are (latitude, longitude) pairs in radians.

    Formula: 2 * arcsin(sqrt(sin^2(dlat/2) + cos(lat1) cos(lat2) sin^2(dlon/2)))

    Raises:
        DimensionMismatchError: If the inputs are not 2-dimensional
    """
    x, y = prepare_pair(x, y)
    check_dimension(x, 2, "Haversine")
    half = literal(0.5, x.dtype)

    sin_lat = np.sin(half * (x[0] - y[0]))
    sin_long = np.sin(half * (x[1] - y[1]))
    with quiet_math():
        result = np.sqrt(sin_lat ** 2 + np.cos(x[0]) * np.cos(y[0]) * sin_long ** 2)
        return literal(2.0, x.dtype) * np.arcsin(result)


def poincare(u: ArrayLike, v: ArrayLike) -> Scalar:
    """
    Compute distance in the Poincare ball model of hyperbolic space.

    Formula: arccosh(1 + 2 ||u - v||^2 / ((1 - ||u||^2) (1 - ||v||^2)))

    Two all-zero vectors short-circuit to 0.
    """
    u, v = prepare_pair(u, v)
    if not np.any(u) and not np.any(v):
        return zero(u.dtype)

    z, _, _, _ = _poincare_argument(u, v)
    with quiet_math():
        return np.arccosh(z)


def hyperboloid(x: ArrayLike, y: ArrayLike) -> Scalar:
    """
    Compute distance in the hyperboloid model of hyperbolic space.

    The inputs are the spatial coordinates of points on the hyperboloid;
    the time coordinates s = sqrt(1 + ||x||^2), t = sqrt(1 + ||y||^2) are
    implied.

    Formula: arccosh(s * t - x . y)

    A bilinear form at or below 1 (numerical underflow) is clamped just
    above 1 before the arccosh.
    """
    x, y = prepare_pair(x, y)
    _, _, b = _hyperboloid_form(x, y)
    return np.arccosh(b)


# =============================================================================
# SHARED REDUCTIONS
# =============================================================================

def _dot_and_norms(x: Vector, y: Vector) -> Tuple[Scalar, Scalar, Scalar]:
    """Return (x . y, ||x||^2, ||y||^2)."""
    return np.dot(x, y), np.dot(x, x), np.dot(y, y)


def _centre(x: Vector, y: Vector) -> Tuple[Vector, Vector]:
    """Subtract each vector's mean. Empty vectors give NaN means."""
    n = literal(x.shape[0], x.dtype)
    with quiet_math():
        mu_x = np.sum(x) / n
        mu_y = np.sum(y) / n
    return x - mu_x, y - mu_y


def _poincare_argument(u: Vector, v: Vector) -> Tuple[Scalar, Scalar, Scalar, Scalar]:
    """
    Return (z, alpha, beta, ||u - v||^2) where z is the arccosh argument,
    alpha = 1 - ||u||^2 and beta = 1 - ||v||^2.
    """
    dtype = u.dtype
    diff = u - v
    sq_dist = np.dot(diff, diff)
    alpha = one(dtype) - np.dot(u, u)
    beta = one(dtype) - np.dot(v, v)
    with quiet_math():
        z = one(dtype) + literal(2.0, dtype) * sq_dist / (alpha * beta)
    return z, alpha, beta, sq_dist


def _hyperboloid_form(x: Vector, y: Vector) -> Tuple[Scalar, Scalar, Scalar]:
    """
    Return (s, t, B) with B = s * t - x . y clamped to stay above 1.

    The clamp offset is 1e-8, widened to the dtype's machine epsilon where
    1 + 1e-8 would round back to 1.
    """
    dtype = x.dtype
    s = np.sqrt(one(dtype) + np.dot(x, x))
    t = np.sqrt(one(dtype) + np.dot(y, y))
    b = s * t - np.dot(x, y)

    if b <= 1:
        eps = max(literal(HYPERBOLOID_EPS, dtype), np.finfo(dtype).eps)
        logger.debug("Hyperboloid bilinear form %r <= 1, clamping", b)
        b = one(dtype) + eps
    return s, t, b
