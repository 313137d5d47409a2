import math

import numpy as np
import pytest

from descentkit.debug_mode import debug_context
from descentkit.univariate import Brent, Fibonacci, Golden

FUNCTIONS = [
    (lambda x: (x - 2.0) ** 2, 0.0, 1.0, 5.0),
    (lambda x: math.cosh(x - 0.3), -2.0, 0.0, 3.0),
    (lambda x: (x + 1.0) ** 4 + 0.5 * x, -3.0, -1.5, 1.0),
]


@pytest.mark.parametrize("method_cls", [Golden, Brent, Fibonacci])
@pytest.mark.parametrize("f, lower, initial, upper", FUNCTIONS)
def test_bracket_contains_tracked_minimizer(method_cls, f, lower, initial, upper):
    solution = method_cls(1e-8, 40, history=True).solve(f)
    with debug_context(True):
        solution.search(lower, initial, upper)
    state = solution.state
    assert lower <= state.xl < state.xmin < state.xu <= upper
    assert state.fmin == f(state.xmin)


@pytest.mark.parametrize("method_cls", [Golden, Brent])
@pytest.mark.parametrize("f, lower, initial, upper", FUNCTIONS)
def test_fmin_history_is_non_increasing(method_cls, f, lower, initial, upper):
    solution = method_cls(1e-8, 60, history=True).solve(f)
    solution.search(lower, initial, upper)
    history = solution.state.history
    assert len(history) == solution.state.iteration
    assert all(b <= a for a, b in zip(history, history[1:]))
    assert history[-1] <= f(initial)


@pytest.mark.parametrize("method_cls", [Golden, Brent])
@pytest.mark.parametrize("f, lower, initial, upper", FUNCTIONS)
def test_matches_scipy_brent(method_cls, f, lower, initial, upper):
    scipy = pytest.importorskip("scipy")
    from scipy.optimize import minimize_scalar

    del scipy  # unused
    ours = method_cls(1e-10, 200).solve(f).search(lower, initial, upper)
    theirs = minimize_scalar(f, bracket=(lower, initial, upper), method="brent", tol=1e-12)
    assert np.isclose(ours, theirs.x, atol=1e-5)
