"""
Unit tests for the numeric abstraction layer and dtype preservation.
"""

import warnings

import pytest
import numpy as np

from fast_distances.core.exceptions import ContractViolationError
from fast_distances.core.numeric import (
    FLOAT_DTYPES,
    as_pair,
    as_vector,
    literal,
    one,
    quiet_math,
    resolve_dtype,
    zero,
)
from fast_distances.distance import get_metric, list_gradient_metrics, list_metrics


BUILTIN_METRICS = [name for name in list_metrics() if not name.startswith("test_")]


def _inputs_for(name, dtype):
    """Valid inputs of the given dtype for a registered metric."""
    if name == "haversine":
        x, y = [0.3, 0.5], [-0.2, 1.4]
    elif name == "ll_dirichlet":
        x, y = [1.0, 2.0, 3.0], [4.0, 5.0, 6.0]
    elif get_metric(name).kind == "binary":
        x, y = [1.0, 0.0, 1.0], [1.0, 1.0, 0.0]
    else:
        x, y = [0.1, 0.2, 0.3], [0.3, 0.1, 0.2]
    return np.array(x, dtype=dtype), np.array(y, dtype=dtype)


class TestResolveDtype:
    """Tests for working dtype resolution."""

    def test_float32(self):
        a = np.ones(3, dtype=np.float32)
        assert resolve_dtype(a, a) == np.float32

    def test_float64(self):
        assert resolve_dtype(np.ones(3), np.ones(3)) == np.float64

    def test_mixed_promotes(self):
        assert resolve_dtype(np.ones(3, dtype=np.float32), np.ones(3)) == np.float64

    def test_float16_computes_in_float32(self):
        assert resolve_dtype(np.ones(3, dtype=np.float16)) == np.float32

    def test_longdouble_computes_in_float64(self):
        assert resolve_dtype(np.ones(3, dtype=np.longdouble)) == np.float64

    def test_integer_uses_default(self):
        assert resolve_dtype([1, 2, 3], np.arange(3)) == np.float64

    def test_integer_does_not_widen_float32(self):
        assert resolve_dtype(np.ones(3, dtype=np.float32), np.arange(3)) == np.float32

    def test_none_skipped(self):
        assert resolve_dtype(None, np.ones(3, dtype=np.float32)) == np.float32

    def test_result_is_supported(self):
        for dtype in (np.float16, np.float32, np.float64, np.int32, np.bool_):
            assert resolve_dtype(np.ones(2, dtype=dtype)) in FLOAT_DTYPES


class TestAsVector:
    """Tests for vector conversion."""

    def test_converts_sequence(self):
        v = as_vector([1, 2, 3])
        assert v.dtype == np.float64
        assert v.shape == (3,)

    def test_no_copy_when_conforming(self):
        a = np.arange(3, dtype=np.float32)
        assert np.shares_memory(as_vector(a), a)

    def test_explicit_dtype(self):
        assert as_vector([1.0, 2.0], np.float32).dtype == np.float32

    def test_rejects_matrix(self):
        with pytest.raises(ContractViolationError):
            as_vector(np.ones((2, 2)))

    def test_rejects_scalar(self):
        with pytest.raises(ContractViolationError):
            as_vector(1.0)

    def test_pair_shares_dtype(self):
        x, y = as_pair(np.ones(2, dtype=np.float32), [1, 2])
        assert x.dtype == y.dtype == np.float32


class TestLiterals:
    """Tests for dtype literals."""

    @pytest.mark.parametrize("dtype", FLOAT_DTYPES)
    def test_literal_dtype(self, dtype):
        assert literal(0.5, dtype).dtype == dtype
        assert zero(dtype) == 0.0
        assert one(dtype) == 1.0

    def test_float32_rounding(self):
        assert literal(1e-6, np.float32) == np.float32(1e-6)
        assert float(literal(0.1, np.float32)) != 0.1

    def test_quiet_math(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with quiet_math():
                assert np.isnan(np.float64(0.0) / np.float64(0.0))
                assert np.isinf(np.float64(1.0) / np.float64(0.0))


class TestDtypePreservation:
    """float32 in, float32 out, for every registered metric."""

    @pytest.mark.parametrize("name", BUILTIN_METRICS)
    @pytest.mark.parametrize("dtype", FLOAT_DTYPES, ids=str)
    def test_metric(self, name, dtype):
        x, y = _inputs_for(name, dtype)
        result = get_metric(name).function(x, y)
        assert np.asarray(result).dtype == dtype

    @pytest.mark.parametrize("name", sorted(list_gradient_metrics()))
    @pytest.mark.parametrize("dtype", FLOAT_DTYPES, ids=str)
    def test_gradient(self, name, dtype):
        x, y = _inputs_for(name, dtype)
        d, grad = get_metric(name).gradient(x, y)
        assert np.asarray(d).dtype == dtype
        assert grad.dtype == dtype
        assert grad.shape == x.shape

    def test_float32_matches_float64(self):
        x = np.array([0.1, 0.2, 0.3])
        y = np.array([0.3, 0.1, 0.2])
        for name in ("euclidean", "cosine", "hellinger", "poincare"):
            fn = get_metric(name).function
            np.testing.assert_allclose(
                fn(x.astype(np.float32), y.astype(np.float32)),
                fn(x, y),
                rtol=1e-5,
            )

    def test_integer_inputs_use_default_dtype(self):
        result = get_metric("manhattan").function([1, 2, 3], [4, 5, 6])
        assert result.dtype == np.float64
