import pytest

from descentkit.debug_mode import debug_context
from descentkit.univariate import BracketSearchError, BracketState, Fibonacci, fibonacci_numbers


def parabola(x: float) -> float:
    return (x - 2.0) ** 2


def test_fibonacci_numbers():
    assert fibonacci_numbers(8) == [1, 1, 2, 3, 5, 8, 13, 21]
    assert fibonacci_numbers(1) == [1]
    assert fibonacci_numbers(0) == []


def test_ratios_end_at_one_half():
    method = Fibonacci(1e-8, 10)
    assert method.ratio(0) == pytest.approx(89 / 144)
    assert method.ratio(9) == 0.5


def test_fibonacci_runs_full_budget_and_brackets_minimum():
    solution = Fibonacci(1e-8, 30).solve(parabola)
    with debug_context(True):
        xmin = solution.search_between(0.0, 5.0)
    state = solution.state
    assert state.iteration == 30
    assert state.xl <= 2.0 <= state.xu
    assert abs(xmin - 2.0) < 1e-4


def test_fibonacci_returns_interval_midpoint():
    solution = Fibonacci(1e-8, 20).solve(parabola)
    xmin = solution.search_between(0.0, 5.0)
    assert xmin == solution.state.midpoint


def test_stuck_interval_raises():
    method = Fibonacci(1e-8, 10)
    state = BracketState(xl=0.0, xu=1.0, xmin=0.5, fmin=0.0)
    # a worse probe on the lower bound moves neither bound
    with pytest.raises(BracketSearchError, match="moving bound"):
        method._update(state, 0.0, 1.0)


def test_repeated_incumbent_raises():
    method = Fibonacci(1e-8, 10)
    state = BracketState(xl=0.0, xu=1.0, xmin=0.5, fmin=0.0)
    with pytest.raises(BracketSearchError, match="repeats the incumbent"):
        method._update(state, 0.5, 0.0)


def test_final_cut_offset_scales_with_abscissa():
    method = Fibonacci(1e-10, 10)
    # ratio 1/2: both candidates coincide with xmin
    state = BracketState(xl=1e9 - 50.0, xu=1e9 + 50.0, xmin=1e9, fmin=0.0, iteration=9)
    xnext = method._next_point(state)
    assert state.xl < xnext < state.xmin
    assert abs(xnext - (1e9 - method.epsilon * 1e9)) < 1e-6


def test_bracket_kept_for_large_abscissae():
    solution = Fibonacci(1e-10, 80).solve(lambda x: (x - 1e9) ** 2)
    with debug_context(True):
        xmin = solution.search(0.0, 0.7e9, 2e9)
    state = solution.state
    assert state.xl < state.xmin < state.xu
    assert state.xl <= 1e9 <= state.xu
    assert abs(xmin - 1e9) < 200.0
