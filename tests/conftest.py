"""
Pytest fixtures for fast_distances tests.
"""

import pytest
import numpy as np
from typing import Callable

from fast_distances.config import get_settings, set_settings


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator so failures are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture(params=[3, 5, 10])
def dimension(request) -> int:
    """Vector lengths exercised by property tests."""
    return request.param


@pytest.fixture
def positive_pair(rng: np.random.Generator, dimension: int):
    """Two strictly positive vectors that differ in every coordinate."""
    x = rng.uniform(0.5, 2.0, dimension)
    y = rng.uniform(2.5, 4.0, dimension)
    return x, y


@pytest.fixture
def mixed_sign_pair():
    """Vectors with negative coordinates where x + y changes sign."""
    x = np.array([3.0, -1.0, 2.5, -2.0])
    y = np.array([-0.5, 2.0, 1.0, -4.0])
    return x, y


@pytest.fixture
def ball_pair(rng: np.random.Generator, dimension: int):
    """Two distinct points inside the unit Poincare ball."""
    u = rng.uniform(-1.0, 1.0, dimension)
    v = rng.uniform(-1.0, 1.0, dimension)
    u *= 0.4 / np.linalg.norm(u)
    v *= 0.6 / np.linalg.norm(v)
    return u, v


@pytest.fixture
def binary_pair(rng: np.random.Generator):
    """Two random 0/1 vectors of length 20."""
    x = rng.integers(0, 2, 20).astype(np.float64)
    y = rng.integers(0, 2, 20).astype(np.float64)
    return x, y


@pytest.fixture
def numerical_gradient() -> Callable:
    """Central-difference gradient of f(x, y) with respect to x."""

    def _gradient(f: Callable, x: np.ndarray, y: np.ndarray, h: float = 1e-6) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        grad = np.zeros_like(x)
        for i in range(x.shape[0]):
            step = np.zeros_like(x)
            step[i] = h
            grad[i] = (float(f(x + step, y)) - float(f(x - step, y))) / (2 * h)
        return grad

    return _gradient


@pytest.fixture
def restore_settings():
    """Restore the active settings after a test replaces them."""
    previous = get_settings()
    yield previous
    set_settings(previous)
