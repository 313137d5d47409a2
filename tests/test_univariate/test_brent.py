import math

import pytest

from descentkit.debug_mode import debug_context
from descentkit.univariate import Brent, BrentState, Golden


def parabola(x: float) -> float:
    return (x - 2.0) ** 2


def test_brent_finds_parabola_minimum():
    solution = Brent(1e-10, 100).solve(parabola)
    xmin = solution.search(0.0, 1.0, 5.0)
    assert abs(xmin - 2.0) < 1e-6
    assert isinstance(solution.state, BrentState)


def test_brent_uses_fewer_evaluations_than_golden():
    counts = {}
    for method in (Brent(1e-8, 200), Golden(1e-8, 200)):
        calls = []

        def f(x, calls=calls):
            calls.append(x)
            return math.cosh(x - 0.7) + 0.1 * (x - 0.7) ** 4

        method.solve(f).search(-3.0, 0.0, 4.0)
        counts[type(method).__name__] = len(calls)
    assert counts["Brent"] < counts["Golden"]


def test_brent_on_non_polynomial_function():
    solution = Brent(1e-10, 200).solve(lambda x: x * math.log(x))
    with debug_context(True):
        xmin = solution.search(0.05, 0.5, 2.0)
    assert xmin == pytest.approx(math.exp(-1.0), abs=1e-6)


def test_brent_minimum_at_zero():
    solution = Brent(1e-10, 200).solve(lambda x: x * x)
    xmin = solution.search(-1.0, 0.3, 2.0)
    assert abs(xmin) < 1e-6
    assert solution.minimum() < 1e-12
