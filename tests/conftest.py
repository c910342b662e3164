import numpy as np
import pytest
from core.cache.cached_matrix import CachedMatrix
from utils.matrix import solve_inverse

class CountingSolver:
    """Wraps a solver and records the options of every call."""
    def __init__(self, fn=solve_inverse):
        self.fn = fn
        self.calls = []

    def __call__(self, A, **options):
        self.calls.append(dict(options))
        return self.fn(A, **options)

    @property
    def count(self):
        return len(self.calls)

@pytest.fixture
def m1():
    return np.array([[4.0, 7.0], [2.0, 6.0]])

@pytest.fixture
def m2():
    return np.array([[2.0, 0.0, 1.0],
                     [1.0, 3.0, 0.0],
                     [0.0, 1.0, 4.0]])

@pytest.fixture
def ill_conditioned():
    # rcond ~ 1e-10: passes the default tolerance, fails tol=1e-7
    eps = 1e-10
    return np.array([[1.0, 1.0], [1.0, 1.0 + eps]])

@pytest.fixture
def cached(m1):
    return CachedMatrix(m1)

@pytest.fixture
def counting_solver():
    return CountingSolver()

@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog

@pytest.fixture
def make_counting_solver():
    return CountingSolver
