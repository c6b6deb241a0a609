"""
Distance metric registry.

Provides a unified interface for looking up metrics and their gradient
variants by name, and for registering custom metrics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..core.exceptions import GradientNotAvailableError, UnknownMetricError
from ..core.numeric import Scalar, Vector
from ..utils.logging import get_logger
from . import binary, gradients, likelihood, metrics

logger = get_logger(__name__)

# Type aliases
DistanceFunction = Callable[..., Scalar]
GradientFunction = Callable[..., Tuple[Scalar, Vector]]


class DistanceMetric(str, Enum):
    """Enumeration of built-in distance metrics."""

    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"
    MINKOWSKI = "minkowski"
    WEIGHTED_MINKOWSKI = "weighted_minkowski"
    STANDARDISED_EUCLIDEAN = "standardised_euclidean"
    MAHALANOBIS = "mahalanobis"
    CANBERRA = "canberra"
    BRAY_CURTIS = "bray_curtis"
    COSINE = "cosine"
    CORRELATION = "correlation"
    HELLINGER = "hellinger"
    HAVERSINE = "haversine"
    POINCARE = "poincare"
    HYPERBOLOID = "hyperboloid"
    HAMMING = "hamming"
    JACCARD = "jaccard"
    DICE = "dice"
    MATCHING = "matching"
    KULSINSKI = "kulsinski"
    ROGERS_TANIMOTO = "rogers_tanimoto"
    SOKAL_MICHENER = "sokal_michener"
    SOKAL_SNEATH = "sokal_sneath"
    RUSSELL_RAO = "russell_rao"
    YULE = "yule"
    LL_DIRICHLET = "ll_dirichlet"

    def __str__(self) -> str:
        return self.value


@dataclass
class MetricInfo:
    """Information about a distance metric."""

    name: str
    function: DistanceFunction
    gradient: Optional[GradientFunction]
    kind: str  # "vector", "binary" or "likelihood"
    min_value: float
    max_value: Optional[float]  # None if unbounded
    description: str
    parameters: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_gradient(self) -> bool:
        return self.gradient is not None

    def __repr__(self) -> str:
        return f"MetricInfo(name='{self.name}', kind='{self.kind}')"


# =============================================================================
# METRIC REGISTRY
# =============================================================================

class MetricRegistry:
    """
    Registry for distance metrics.

    Allows looking up metrics by name or alias and registering custom
    metrics.
    """

    def __init__(self):
        self._metrics: Dict[str, MetricInfo] = {}
        self._aliases: Dict[str, str] = {}
        self._register_builtins()

    def _register_builtins(self) -> None:
        """Register built-in distance metrics."""

        def vector(name, function, gradient, description, aliases=(),
                   max_value=None, parameters=()):
            self.register(
                MetricInfo(
                    name=name,
                    function=function,
                    gradient=gradient,
                    kind="vector",
                    min_value=0.0,
                    max_value=max_value,
                    description=description,
                    parameters=tuple(parameters),
                ),
                aliases=list(aliases),
            )

        def boolean(name, function, description, aliases=(), max_value=1.0):
            self.register(
                MetricInfo(
                    name=name,
                    function=function,
                    gradient=None,
                    kind="binary",
                    min_value=0.0,
                    max_value=max_value,
                    description=description,
                ),
                aliases=list(aliases),
            )

        # Minkowski family
        vector("euclidean", metrics.euclidean, gradients.euclidean_grad,
               "Euclidean (L2) distance", aliases=["l2"])
        vector("manhattan", metrics.manhattan, gradients.manhattan_grad,
               "Manhattan (L1) distance", aliases=["l1", "cityblock", "taxicab"])
        vector("chebyshev", metrics.chebyshev, gradients.chebyshev_grad,
               "Chebyshev (L-infinity) distance", aliases=["linf", "linfinity", "chessboard"])
        vector("minkowski", metrics.minkowski, gradients.minkowski_grad,
               "Minkowski distance of order p", parameters=["p"])
        vector("weighted_minkowski", metrics.weighted_minkowski,
               gradients.weighted_minkowski_grad,
               "Weighted Minkowski distance of order p",
               aliases=["wminkowski"], parameters=["w", "p"])
        vector("standardised_euclidean", metrics.standardised_euclidean,
               gradients.standardised_euclidean_grad,
               "Euclidean distance standardised by per-coordinate variances",
               aliases=["seuclidean", "standardized_euclidean"], parameters=["sigma"])
        vector("mahalanobis", metrics.mahalanobis, gradients.mahalanobis_grad,
               "Mahalanobis distance", parameters=["vinv"])

        # Ratio metrics
        vector("canberra", metrics.canberra, gradients.canberra_grad,
               "Canberra distance")
        vector("bray_curtis", metrics.bray_curtis, gradients.bray_curtis_grad,
               "Bray-Curtis dissimilarity", aliases=["braycurtis"])
        vector("cosine", metrics.cosine, gradients.cosine_grad,
               "Cosine distance (1 - cosine similarity)", max_value=2.0)
        vector("correlation", metrics.correlation, gradients.correlation_grad,
               "Correlation distance (1 - Pearson correlation)", max_value=2.0)
        vector("hellinger", metrics.hellinger, gradients.hellinger_grad,
               "Hellinger distance between non-negative vectors", max_value=1.0)

        # Spherical and hyperbolic
        vector("haversine", metrics.haversine, gradients.haversine_grad,
               "Great-circle distance between (lat, lon) pairs in radians",
               max_value=np.pi)
        vector("poincare", metrics.poincare, gradients.poincare_grad,
               "Poincare ball hyperbolic distance")
        vector("hyperboloid", metrics.hyperboloid, gradients.hyperboloid_grad,
               "Hyperboloid model hyperbolic distance", aliases=["hyperbolic"])

        # Binary-set metrics
        boolean("hamming", binary.hamming, "Fraction of differing positions")
        boolean("jaccard", binary.jaccard, "Jaccard distance")
        boolean("dice", binary.dice, "Dice dissimilarity")
        boolean("matching", binary.matching, "Simple matching dissimilarity")
        boolean("kulsinski", binary.kulsinski, "Kulsinski dissimilarity")
        boolean("rogers_tanimoto", binary.rogers_tanimoto,
                "Rogers-Tanimoto dissimilarity", aliases=["rogerstanimoto"])
        boolean("sokal_michener", binary.sokal_michener,
                "Sokal-Michener dissimilarity", aliases=["sokalmichener"])
        boolean("sokal_sneath", binary.sokal_sneath,
                "Sokal-Sneath dissimilarity", aliases=["sokalsneath"])
        boolean("russell_rao", binary.russell_rao,
                "Russell-Rao dissimilarity", aliases=["russellrao"])
        boolean("yule", binary.yule, "Yule dissimilarity", max_value=2.0)

        # Count data
        self.register(
            MetricInfo(
                name="ll_dirichlet",
                function=likelihood.ll_dirichlet,
                gradient=None,
                kind="likelihood",
                min_value=0.0,
                max_value=None,
                description="Dirichlet-multinomial log-likelihood ratio for count vectors",
            ),
            aliases=["dirichlet"],
        )

    def register(
        self,
        info: MetricInfo,
        aliases: Optional[List[str]] = None,
    ) -> None:
        """
        Register a distance metric.

        Args:
            info: MetricInfo object
            aliases: Optional list of alternative names
        """
        if info.name in self._metrics:
            logger.warning("Overriding registered metric '%s'", info.name)
        self._metrics[info.name] = info

        if aliases:
            for alias in aliases:
                self._aliases[alias] = info.name

        logger.debug("Registered metric '%s' (aliases: %s)", info.name, aliases or [])

    def get(self, name: str) -> MetricInfo:
        """
        Get metric info by name.

        Args:
            name: Metric name or alias

        Returns:
            MetricInfo object

        Raises:
            UnknownMetricError: If metric not found
        """
        name = str(name)
        canonical = self._aliases.get(name, name)

        if canonical not in self._metrics:
            available = list(self._metrics.keys())
            raise UnknownMetricError(
                f"Unknown metric: '{name}'. Available: {available}"
            )

        return self._metrics[canonical]

    def get_function(self, name: str) -> DistanceFunction:
        """Get the distance function for a metric."""
        return self.get(name).function

    def get_gradient(self, name: str) -> GradientFunction:
        """
        Get the gradient function for a metric.

        Raises:
            GradientNotAvailableError: If the metric has no gradient variant
        """
        info = self.get(name)
        if info.gradient is None:
            raise GradientNotAvailableError(
                f"Metric '{info.name}' has no gradient variant"
            )
        return info.gradient

    def list_metrics(self) -> List[str]:
        """List all registered metric names."""
        return list(self._metrics.keys())

    def list_gradient_metrics(self) -> List[str]:
        """List metrics that have a gradient variant."""
        return [name for name, info in self._metrics.items() if info.has_gradient]

    def list_all(self) -> Dict[str, MetricInfo]:
        """Get all registered metrics with their info."""
        return self._metrics.copy()

    def __contains__(self, name: str) -> bool:
        """Check if a metric is registered."""
        name = str(name)
        canonical = self._aliases.get(name, name)
        return canonical in self._metrics

    def __getitem__(self, name: str) -> MetricInfo:
        """Get metric info by name."""
        return self.get(name)


# =============================================================================
# GLOBAL REGISTRY AND CONVENIENCE FUNCTIONS
# =============================================================================

# Global registry instance
_registry = MetricRegistry()


def get_metric(name: str) -> MetricInfo:
    """
    Get metric info by name.

    Example:
        >>> info = get_metric("braycurtis")
        >>> info.name
        'bray_curtis'
    """
    return _registry.get(name)


def get_metric_fn(name: str) -> DistanceFunction:
    """
    Get distance function by metric name.

    Example:
        >>> dist_fn = get_metric_fn("cosine")
        >>> distance = dist_fn(vec_a, vec_b)
    """
    return _registry.get_function(name)


def get_gradient_fn(name: str) -> GradientFunction:
    """
    Get the gradient variant of a metric by name.

    Example:
        >>> grad_fn = get_gradient_fn("euclidean")
        >>> distance, grad = grad_fn(vec_a, vec_b)
    """
    return _registry.get_gradient(name)


def register_metric(
    name: str,
    function: DistanceFunction,
    gradient: Optional[GradientFunction] = None,
    description: str = "",
    kind: str = "vector",
    aliases: Optional[List[str]] = None,
) -> None:
    """
    Register a custom distance metric.

    Args:
        name: Metric name
        function: Distance function (x, y) -> scalar
        gradient: Optional gradient function (x, y) -> (scalar, vector)
        description: Human-readable description
        kind: Metric family ("vector", "binary" or "likelihood")
        aliases: Optional list of alternative names
    """
    info = MetricInfo(
        name=name,
        function=function,
        gradient=gradient,
        kind=kind,
        min_value=0.0,
        max_value=None,
        description=description or f"Custom metric: {name}",
    )
    _registry.register(info, aliases)


def list_metrics() -> List[str]:
    """List all available metric names."""
    return _registry.list_metrics()


def list_gradient_metrics() -> List[str]:
    """List metric names that have a gradient variant."""
    return _registry.list_gradient_metrics()


def metric_exists(name: str) -> bool:
    """Check if a metric is registered under a name or alias."""
    return name in _registry


def has_gradient(name: str) -> bool:
    """Check if a metric has a gradient variant."""
    return _registry.get(name).has_gradient


# =============================================================================
# DISTANCE FUNCTION WRAPPER
# =============================================================================

class DistanceCalculator:
    """
    Binds a metric and its extra parameters behind one interface.

    Example:
        >>> calc = DistanceCalculator("minkowski", p=3)
        >>> dist = calc.distance(vec_a, vec_b)
        >>> dist, grad = calc.gradient(vec_a, vec_b)
    """

    def __init__(self, metric: str = "euclidean", **params: Any):
        """
        Initialize calculator with a specific metric.

        Args:
            metric: Name or alias of the distance metric
            **params: Extra keyword arguments for the metric (p, w, sigma, vinv)

        Raises:
            UnknownMetricError: If the metric is not registered
            TypeError: If a parameter is not accepted by the metric
        """
        self.info = get_metric(metric)
        self.metric = self.info.name

        unexpected = set(params) - set(self.info.parameters)
        if unexpected:
            raise TypeError(
                f"Metric '{self.metric}' does not accept parameters {sorted(unexpected)}"
            )
        self.params = params

    def distance(self, x: ArrayLike, y: ArrayLike) -> Scalar:
        """Compute the distance between two vectors."""
        return self.info.function(x, y, **self.params)

    def gradient(self, x: ArrayLike, y: ArrayLike) -> Tuple[Scalar, Vector]:
        """Compute the distance and its gradient with respect to x."""
        return _registry.get_gradient(self.metric)(x, y, **self.params)

    def __call__(self, x: ArrayLike, y: ArrayLike) -> Scalar:
        return self.distance(x, y)

    @property
    def has_gradient(self) -> bool:
        return self.info.has_gradient

    def __repr__(self) -> str:
        return f"DistanceCalculator(metric='{self.metric}', params={self.params})"
