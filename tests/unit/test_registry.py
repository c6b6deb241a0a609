"""
Unit tests for the metric registry.
"""

import logging

import pytest
import numpy as np
from numpy.testing import assert_allclose, assert_almost_equal

from fast_distances.core.exceptions import GradientNotAvailableError, UnknownMetricError
from fast_distances.distance import (
    DistanceCalculator,
    DistanceMetric,
    MetricInfo,
    MetricRegistry,
    bray_curtis,
    euclidean,
    euclidean_grad,
    get_gradient_fn,
    get_metric,
    get_metric_fn,
    has_gradient,
    list_gradient_metrics,
    list_metrics,
    manhattan,
    metric_exists,
    minkowski,
    minkowski_grad,
    register_metric,
)


GRADIENT_METRICS = {
    "euclidean",
    "manhattan",
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
}


class TestRegistry:
    """Tests for metric lookup."""

    def test_list_metrics(self):
        metrics = list_metrics()
        assert "euclidean" in metrics
        assert "jaccard" in metrics
        assert "ll_dirichlet" in metrics

    def test_every_enum_member_registered(self):
        for metric in DistanceMetric:
            assert metric_exists(metric.value)
            assert get_metric(metric).name == metric.value

    def test_enum_str(self):
        assert str(DistanceMetric.BRAY_CURTIS) == "bray_curtis"

    def test_get_metric_fn(self):
        a = np.array([0.0, 0.0])
        b = np.array([3.0, 4.0])
        assert_almost_equal(get_metric_fn("euclidean")(a, b), 5.0)

    @pytest.mark.parametrize(
        "alias, canonical",
        [
            ("l1", "manhattan"),
            ("cityblock", "manhattan"),
            ("l2", "euclidean"),
            ("linf", "chebyshev"),
            ("braycurtis", "bray_curtis"),
            ("russellrao", "russell_rao"),
            ("seuclidean", "standardised_euclidean"),
            ("wminkowski", "weighted_minkowski"),
            ("hyperbolic", "hyperboloid"),
        ],
    )
    def test_aliases(self, alias, canonical):
        assert get_metric(alias).name == canonical
        assert metric_exists(alias)

    def test_alias_resolves_to_same_function(self):
        assert get_metric_fn("braycurtis") is bray_curtis
        assert get_metric_fn("l1") is manhattan

    def test_unknown_metric(self):
        with pytest.raises(UnknownMetricError):
            get_metric("unknown_metric")
        assert not metric_exists("unknown_metric")

    def test_unknown_metric_is_key_error(self):
        with pytest.raises(KeyError):
            get_metric_fn("unknown_metric")

    def test_metric_kinds(self):
        assert get_metric("euclidean").kind == "vector"
        assert get_metric("jaccard").kind == "binary"
        assert get_metric("ll_dirichlet").kind == "likelihood"

    def test_parameters_declared(self):
        assert get_metric("minkowski").parameters == ("p",)
        assert get_metric("weighted_minkowski").parameters == ("w", "p")
        assert get_metric("mahalanobis").parameters == ("vinv",)
        assert get_metric("euclidean").parameters == ()


class TestGradientLookup:
    """Tests for gradient lookup."""

    def test_gradient_metrics(self):
        assert set(list_gradient_metrics()) == GRADIENT_METRICS

    def test_get_gradient_fn(self):
        assert get_gradient_fn("l2") is euclidean_grad

    def test_has_gradient(self):
        assert has_gradient("cosine")
        assert not has_gradient("jaccard")

    @pytest.mark.parametrize("name", ["jaccard", "hamming", "ll_dirichlet"])
    def test_gradient_not_available(self, name):
        with pytest.raises(GradientNotAvailableError):
            get_gradient_fn(name)


class TestMetricRegistry:
    """Tests for registering metrics on a registry instance."""

    def test_register_custom(self):
        registry = MetricRegistry()
        info = MetricInfo(
            name="half_manhattan",
            function=lambda x, y: manhattan(x, y) / 2,
            gradient=None,
            kind="vector",
            min_value=0.0,
            max_value=None,
            description="Half the L1 distance",
        )
        registry.register(info, aliases=["half_l1"])

        assert "half_manhattan" in registry
        assert "half_l1" in registry
        assert registry["half_l1"] is info
        assert registry.get_function("half_manhattan")([0.0], [4.0]) == 2.0

    def test_override_logs_warning(self, caplog):
        registry = MetricRegistry()
        info = registry.get("euclidean")

        with caplog.at_level(logging.WARNING, logger="fast_distances"):
            registry.register(info)

        assert "Overriding registered metric 'euclidean'" in caplog.text

    def test_list_all_is_copy(self):
        registry = MetricRegistry()
        all_metrics = registry.list_all()
        all_metrics.pop("euclidean")
        assert "euclidean" in registry

    def test_register_metric_function(self):
        register_metric(
            "test_squared_euclidean",
            lambda x, y: euclidean(x, y) ** 2,
            aliases=["test_sqeuclidean"],
        )

        assert metric_exists("test_squared_euclidean")
        info = get_metric("test_sqeuclidean")
        assert info.description == "Custom metric: test_squared_euclidean"
        assert not info.has_gradient
        assert_almost_equal(info.function([0.0, 0.0], [3.0, 4.0]), 25.0)


class TestDistanceCalculator:
    """Tests for DistanceCalculator."""

    def test_default_metric(self):
        calc = DistanceCalculator()
        assert calc.metric == "euclidean"
        assert_almost_equal(calc([0.0, 0.0], [3.0, 4.0]), 5.0)

    def test_bound_parameters(self):
        x = np.array([1.0, 2.0, 3.0])
        y = np.array([4.0, 5.0, 6.0])
        calc = DistanceCalculator("minkowski", p=3)

        assert_allclose(calc.distance(x, y), minkowski(x, y, p=3))
        d, grad = calc.gradient(x, y)
        expected_d, expected_grad = minkowski_grad(x, y, p=3)
        assert_allclose(d, expected_d)
        assert_allclose(grad, expected_grad)

    def test_alias_and_enum(self):
        assert DistanceCalculator("cityblock").metric == "manhattan"
        assert DistanceCalculator(DistanceMetric.COSINE).metric == "cosine"

    def test_unexpected_parameter(self):
        with pytest.raises(TypeError):
            DistanceCalculator("euclidean", p=3)

    def test_unknown_metric(self):
        with pytest.raises(UnknownMetricError):
            DistanceCalculator("unknown_metric")

    def test_gradient_not_available(self):
        calc = DistanceCalculator("jaccard")
        assert not calc.has_gradient
        with pytest.raises(GradientNotAvailableError):
            calc.gradient([1.0, 0.0], [0.0, 1.0])
