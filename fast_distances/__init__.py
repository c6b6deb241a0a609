"""
fast_distances - distance, dissimilarity and likelihood metrics for numeric
vectors, with analytic gradients for the continuous metrics.

Example:
    >>> import numpy as np
    >>> from fast_distances import euclidean, euclidean_grad, get_metric_fn
    >>>
    >>> a = np.array([1.0, 2.0, 3.0], dtype=np.float32)
    >>> b = np.array([4.0, 5.0, 6.0], dtype=np.float32)
    >>>
    >>> dist = euclidean(a, b)            # numpy.float32
    >>> dist, grad = euclidean_grad(a, b)
    >>>
    >>> # Lookup by name or alias
    >>> dist = get_metric_fn("braycurtis")(a, b)
"""

from .core import (
    # Exceptions
    FastDistancesError,
    ContractViolationError,
    DimensionMismatchError,
    UnknownMetricError,
    GradientNotAvailableError,
    ConfigurationError,
)

from .config import (
    Settings,
    load_config,
    get_settings,
    set_settings,
    configure_logging,
)

from .distance import (
    # Metrics
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
    # Gradients
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
    # Binary
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
    # Likelihood
    approx_log_gamma,
    log_single_beta,
    log_beta,
    ll_dirichlet,
    # Registry
    DistanceMetric,
    DistanceCalculator,
    get_metric,
    get_metric_fn,
    get_gradient_fn,
    register_metric,
    list_metrics,
)

from .utils import inverse_covariance

__version__ = "0.1.0"
__author__ = "fast_distances Team"

configure_logging(get_settings())

__all__ = [
    # Exceptions
    "FastDistancesError",
    "ContractViolationError",
    "DimensionMismatchError",
    "UnknownMetricError",
    "GradientNotAvailableError",
    "ConfigurationError",
    # Config
    "Settings",
    "load_config",
    "get_settings",
    "set_settings",
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
    "DistanceCalculator",
    "get_metric",
    "get_metric_fn",
    "get_gradient_fn",
    "register_metric",
    "list_metrics",
    # Helpers
    "inverse_covariance",
]
