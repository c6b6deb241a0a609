"""
Distance metrics, gradient variants and likelihood measures.

Supported families:
    - Minkowski: manhattan, euclidean, chebyshev, minkowski, weighted_minkowski,
      standardised_euclidean, mahalanobis
    - Ratio: canberra, bray_curtis, cosine, correlation, hellinger
    - Geometric: haversine, poincare, hyperboloid
    - Binary-set: hamming, jaccard, dice, matching, kulsinski, rogers_tanimoto,
      sokal_michener, sokal_sneath, russell_rao, yule
    - Count data: ll_dirichlet

Example:
    >>> from fast_distances.distance import euclidean, get_gradient_fn
    >>> import numpy as np
    >>>
    >>> a = np.array([1.0, 2.0, 3.0])
    >>> b = np.array([4.0, 5.0, 6.0])
    >>>
    >>> # Direct function call
    >>> dist = euclidean(a, b)
    >>>
    >>> # Using registry
    >>> dist, grad = get_gradient_fn("l2")(a, b)
"""

from .metrics import (
    manhattan,
    euclidean,
    chebyshev,
    minkowski,
    weighted_minkowski,
    standardised_euclidean,
    mahalanobis,
    canberra,
    bray_curtis,
    cosine,
    correlation,
    hellinger,
    haversine,
    poincare,
    hyperboloid,
)

from .gradients import (
    DistanceGradient,
    manhattan_grad,
    euclidean_grad,
    chebyshev_grad,
    minkowski_grad,
    weighted_minkowski_grad,
    standardised_euclidean_grad,
    mahalanobis_grad,
    canberra_grad,
    bray_curtis_grad,
    cosine_grad,
    correlation_grad,
    hellinger_grad,
    haversine_grad,
    poincare_grad,
    hyperboloid_grad,
)

from .binary import (
    Contingency,
    contingency,
    hamming,
    jaccard,
    dice,
    matching,
    kulsinski,
    rogers_tanimoto,
    sokal_michener,
    sokal_sneath,
    russell_rao,
    yule,
)

from .likelihood import (
    approx_log_gamma,
    log_single_beta,
    log_beta,
    ll_dirichlet,
)

from .registry import (
    DistanceMetric,
    MetricInfo,
    MetricRegistry,
    DistanceCalculator,
    get_metric,
    get_metric_fn,
    get_gradient_fn,
    register_metric,
    list_metrics,
    list_gradient_metrics,
    metric_exists,
    has_gradient,
)

__all__ = [
    # Metrics
    "manhattan",
    "euclidean",
    "chebyshev",
    "minkowski",
    "weighted_minkowski",
    "standardised_euclidean",
    "mahalanobis",
    "canberra",
    "bray_curtis",
    "cosine",
    "correlation",
    "hellinger",
    "haversine",
    "poincare",
    "hyperboloid",
    # Gradients
    "DistanceGradient",
    "manhattan_grad",
    "euclidean_grad",
    "chebyshev_grad",
    "minkowski_grad",
    "weighted_minkowski_grad",
    "standardised_euclidean_grad",
    "mahalanobis_grad",
    "canberra_grad",
    "bray_curtis_grad",
    "cosine_grad",
    "correlation_grad",
    "hellinger_grad",
    "haversine_grad",
    "poincare_grad",
    "hyperboloid_grad",
    # Binary
    "Contingency",
    "contingency",
    "hamming",
    "jaccard",
    "dice",
    "matching",
    "kulsinski",
    "rogers_tanimoto",
    "sokal_michener",
    "sokal_sneath",
    "russell_rao",
    "yule",
    # Likelihood
    "approx_log_gamma",
    "log_single_beta",
    "log_beta",
    "ll_dirichlet",
    # Registry
    "DistanceMetric",
    "MetricInfo",
    "MetricRegistry",
    "DistanceCalculator",
    "get_metric",
    "get_metric_fn",
    "get_gradient_fn",
    "register_metric",
    "list_metrics",
    "list_gradient_metrics",
    "metric_exists",
    "has_gradient",
]
