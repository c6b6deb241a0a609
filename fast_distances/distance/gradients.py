"""
Gradient variants of the differentiable metrics.

Each ``<metric>_grad`` returns ``(distance, gradient)`` where the gradient
is the closed-form derivative of the distance with respect to the first
vector, computed from the same sums as the distance itself. Whenever the
forward metric falls back to a sentinel value for a degenerate input the
gradient is the zero vector.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..core.numeric import GRADIENT_EPS, Scalar, Vector, literal, one, quiet_math, zero
from ..utils.linalg import sign
from ..utils.validation import (
    check_dimension,
    prepare_pair,
    resolve_matrix,
    resolve_weights,
)
from .metrics import _centre, _dot_and_norms, _hyperboloid_form, _poincare_argument

# Type alias
DistanceGradient = Tuple[Scalar, Vector]


# =============================================================================
# MINKOWSKI FAMILY
# =============================================================================

def manhattan_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Manhattan distance and its gradient.

    Gradient: sign(x_i - y_i), taking +1 where x_i == y_i.
    """
    x, y = prepare_pair(x, y)
    diff = x - y
    return np.sum(np.abs(diff)), sign(diff)


def euclidean_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Euclidean distance and its gradient.

    Gradient: (x_i - y_i) / (d + 1e-6). The offset keeps identical
    vectors at a zero gradient.

    Example:
        >>> d, grad = euclidean_grad([0.0, 0.0], [3.0, 4.0])
        >>> float(d)
        5.0
    """
    x, y = prepare_pair(x, y)
    diff = x - y
    d = np.sqrt(np.dot(diff, diff))
    return d, diff / (literal(GRADIENT_EPS, x.dtype) + d)


def chebyshev_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Chebyshev distance and its sub-gradient.

    Only the first coordinate attaining the maximum absolute difference
    gets a non-zero entry, sign(x_i - y_i). Equal vectors give a zero
    gradient.
    """
    x, y = prepare_pair(x, y)
    diff = x - y
    grad = np.zeros_like(diff)
    if diff.shape[0] == 0:
        return zero(x.dtype), grad

    abs_diff = np.abs(diff)
    max_i = int(np.argmax(abs_diff))
    d = abs_diff[max_i]
    if d != 0:
        grad[max_i] = sign(diff[max_i])
    return d, grad


def minkowski_grad(x: ArrayLike, y: ArrayLike, p: float = 2.0) -> DistanceGradient:
    """
    Minkowski distance and its gradient.

    With S = sum(|x_i - y_i|^p) and d = S^(1/p):

        dd/dx_i = |x_i - y_i|^(p-1) * sign(x_i - y_i) * S^(1/p - 1)

    For p == 1 this is sign(x_i - y_i). A zero distance gives a zero
    gradient for p != 1.
    """
    x, y = prepare_pair(x, y)
    return _weighted_minkowski_grad(x, y, None, p)


def weighted_minkowski_grad(
    x: ArrayLike,
    y: ArrayLike,
    w: Optional[ArrayLike] = None,
    p: float = 2.0,
) -> DistanceGradient:
    """
    Weighted Minkowski distance and its gradient.

        dd/dx_i = w_i * |x_i - y_i|^(p-1) * sign(x_i - y_i) * S^(1/p - 1)

    where S = sum(w_i * |x_i - y_i|^p). w defaults to all ones.
    """
    x, y = prepare_pair(x, y)
    w = resolve_weights(w, x.shape[0], x.dtype, name="w")
    return _weighted_minkowski_grad(x, y, w, p)


def _weighted_minkowski_grad(
    x: Vector,
    y: Vector,
    w: Optional[Vector],
    p: float,
) -> DistanceGradient:
    dtype = x.dtype
    p = literal(p, dtype)
    diff = x - y
    abs_diff = np.abs(diff)
    w = np.ones_like(diff) if w is None else w

    with quiet_math():
        s = np.sum(w * abs_diff ** p)
        d = s ** (one(dtype) / p)

        if p == 1:
            grad = w * sign(diff)
        elif s > 0:
            grad = (
                w
                * abs_diff ** (p - one(dtype))
                * sign(diff)
                * s ** (one(dtype) / p - one(dtype))
            )
        else:
            grad = np.zeros_like(diff)
    return d, grad


def standardised_euclidean_grad(
    x: ArrayLike,
    y: ArrayLike,
    sigma: Optional[ArrayLike] = None,
) -> DistanceGradient:
    """
    Standardised Euclidean distance and its gradient.

    Gradient: (x_i - y_i) / (1e-6 + d * sigma_i)
    """
    x, y = prepare_pair(x, y)
    sigma = resolve_weights(sigma, x.shape[0], x.dtype, name="sigma")
    diff = x - y
    with quiet_math():
        d = np.sqrt(np.sum(diff * diff / sigma))
        grad = diff / (literal(GRADIENT_EPS, x.dtype) + d * sigma)
    return d, grad


def mahalanobis_grad(
    x: ArrayLike,
    y: ArrayLike,
    vinv: Optional[ArrayLike] = None,
) -> DistanceGradient:
    """
    Mahalanobis distance and its gradient.

    Gradient: (V_s (x - y)) / (1e-6 + d), with V_s the symmetric part of
    vinv (identical to vinv for a proper inverse covariance).
    """
    x, y = prepare_pair(x, y)
    vinv = resolve_matrix(vinv, x.shape[0], x.dtype)
    diff = x - y
    half = literal(0.5, x.dtype)
    with quiet_math():
        d = np.sqrt(np.dot(diff, vinv @ diff))
        grad = half * ((vinv + vinv.T) @ diff) / (literal(GRADIENT_EPS, x.dtype) + d)
    return d, grad


# =============================================================================
# RATIO METRICS
# =============================================================================

def canberra_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Canberra distance and its gradient.

    Per coordinate with D_i = |x_i| + |y_i| > 0:

        sign(x_i - y_i) / D_i - |x_i - y_i| * sign(x_i) / D_i^2

    Coordinates with D_i == 0 contribute nothing to either.
    """
    x, y = prepare_pair(x, y)
    diff = x - y
    abs_diff = np.abs(diff)
    denominator = np.abs(x) + np.abs(y)
    mask = denominator > 0

    terms = np.divide(abs_diff, denominator, out=np.zeros_like(x), where=mask)
    grad = np.divide(
        sign(diff) - terms * sign(x),
        denominator,
        out=np.zeros_like(x),
        where=mask,
    )
    return np.sum(terms), grad


def bray_curtis_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Bray-Curtis dissimilarity and its gradient.

    Gradient: (sign(x_i - y_i) - d * sign(x_i + y_i)) / sum(|x + y|)

    A zero denominator gives (0, zeros).
    """
    x, y = prepare_pair(x, y)
    diff = x - y
    total = x + y
    numerator = np.sum(np.abs(diff))
    denominator = np.sum(np.abs(total))

    if not denominator > 0:
        return zero(x.dtype), np.zeros_like(x)

    d = numerator / denominator
    grad = (sign(diff) - d * sign(total)) / denominator
    return d, grad


def cosine_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Cosine distance and its gradient.

    With r = x . y, nx = ||x||^2, ny = ||y||^2:

        dd/dx_i = (x_i * r - y_i * nx) / (nx^1.5 * sqrt(ny))

    Zero-norm sentinels (0 or 1) come with a zero gradient.
    """
    x, y = prepare_pair(x, y)
    return _angular_grad(x, y)


def correlation_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Correlation distance and its gradient.

    This is the cosine gradient evaluated on the centred vectors; centring
    leaves it unchanged because both centred vectors sum to zero.
    """
    x, y = prepare_pair(x, y)
    x_centred, y_centred = _centre(x, y)
    dot, norm_x, norm_y = _dot_and_norms(x_centred, y_centred)

    if norm_x == 0 and norm_y == 0:
        return zero(x.dtype), np.zeros_like(x)
    if dot == 0:
        return one(x.dtype), np.zeros_like(x)
    return _angular_value_and_grad(x_centred, y_centred, dot, norm_x, norm_y)


def _angular_grad(x: Vector, y: Vector) -> DistanceGradient:
    dot, norm_x, norm_y = _dot_and_norms(x, y)

    if norm_x == 0 and norm_y == 0:
        return zero(x.dtype), np.zeros_like(x)
    if norm_x == 0 or norm_y == 0:
        return one(x.dtype), np.zeros_like(x)
    return _angular_value_and_grad(x, y, dot, norm_x, norm_y)


def _angular_value_and_grad(
    x: Vector,
    y: Vector,
    dot: Scalar,
    norm_x: Scalar,
    norm_y: Scalar,
) -> DistanceGradient:
    dtype = x.dtype
    root_y = np.sqrt(norm_y)
    d = one(dtype) - dot / (np.sqrt(norm_x) * root_y)
    grad = (x * dot - y * norm_x) / (norm_x ** literal(1.5, dtype) * root_y)
    return d, grad


def hellinger_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Hellinger distance and its gradient.

    With R = sum(sqrt(x_i y_i)), X = sum(x), Y = sum(y), D = sqrt(X Y):

        dd/dx_i = -y_i / (2 sqrt(x_i y_i) D) + R Y / (2 D^3)

    The first term is taken as 0 where x_i * y_i == 0. Sentinel results
    (zero L1 sums) come with a zero gradient.
    """
    x, y = prepare_pair(x, y)
    dtype = x.dtype
    two = literal(2.0, dtype)

    with quiet_math():
        root_xy = np.sqrt(x * y)
    result = np.sum(root_xy)
    l1_x = np.sum(x)
    l1_y = np.sum(y)

    if l1_x == 0 and l1_y == 0:
        return zero(dtype), np.zeros_like(x)
    if l1_x == 0 or l1_y == 0:
        return one(dtype), np.zeros_like(x)

    with quiet_math():
        denominator = np.sqrt(l1_x * l1_y)
        d = one(dtype) - result / denominator
        d_result = np.divide(y, two * root_xy, out=np.zeros_like(x), where=root_xy > 0)
        grad = -d_result / denominator + result * l1_y / (two * denominator ** 3)
    return d, grad


# =============================================================================
# SPHERICAL AND HYPERBOLIC METRICS
# =============================================================================

def haversine_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Haversine distance and its gradient with respect to (lat, lon) of x.

    With h the haversine term, d = 2 arcsin(sqrt(h)) and

        dd/dx = dh/dx / (sqrt(h) sqrt(1 - h) + 1e-6)

    Raises:
        DimensionMismatchError: If the inputs are not 2-dimensional
    """
    x, y = prepare_pair(x, y)
    check_dimension(x, 2, "Haversine")
    dtype = x.dtype
    half = literal(0.5, dtype)

    half_lat = half * (x[0] - y[0])
    half_long = half * (x[1] - y[1])
    sin_lat = np.sin(half_lat)
    sin_long = np.sin(half_long)
    cos_product = np.cos(x[0]) * np.cos(y[0])

    h = sin_lat ** 2 + cos_product * sin_long ** 2
    with quiet_math():
        d = literal(2.0, dtype) * np.arcsin(np.sqrt(h))

    dh_lat = sin_lat * np.cos(half_lat) - np.sin(x[0]) * np.cos(y[0]) * sin_long ** 2
    dh_long = cos_product * sin_long * np.cos(half_long)
    denominator = (
        np.sqrt(np.abs(h)) * np.sqrt(np.abs(one(dtype) - h))
        + literal(GRADIENT_EPS, dtype)
    )
    grad = np.array([dh_lat, dh_long], dtype=dtype) / denominator
    return d, grad


def poincare_grad(u: ArrayLike, v: ArrayLike) -> DistanceGradient:
    """
    Poincare ball distance and its gradient.

    With alpha = 1 - ||u||^2, beta = 1 - ||v||^2, S = ||u - v||^2 and
    z = 1 + 2 S / (alpha beta):

        dd/du_i = 4 / (alpha beta) * ((u_i - v_i) + S u_i / alpha) / sqrt(z^2 - 1)

    Two zero vectors, or any pair with z == 1, give a zero gradient.
    """
    u, v = prepare_pair(u, v)
    dtype = u.dtype
    if not np.any(u) and not np.any(v):
        return zero(dtype), np.zeros_like(u)

    z, alpha, beta, sq_dist = _poincare_argument(u, v)
    with quiet_math():
        d = np.arccosh(z)
        if not z > 1:
            return d, np.zeros_like(u)

        scale = literal(4.0, dtype) / (alpha * beta * np.sqrt(z * z - one(dtype)))
        grad = scale * ((u - v) + sq_dist * u / alpha)
    return d, grad


def hyperboloid_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Hyperboloid distance and its gradient.

    With B = s t - x . y (clamped just above 1):

        dd/dx_i = (x_i t / s - y_i) / (sqrt(B - 1) sqrt(B + 1))
    """
    x, y = prepare_pair(x, y)
    s, t, b = _hyperboloid_form(x, y)
    coefficient = one(x.dtype) / (np.sqrt(b - one(x.dtype)) * np.sqrt(b + one(x.dtype)))
    grad = coefficient * ((x * t) / s - y)
    return np.arccosh(b), grad
