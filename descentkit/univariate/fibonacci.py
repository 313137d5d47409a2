"""Fibonacci search.

The interval reduction of a Fibonacci search is fixed in advance by the
iteration budget: iteration ``k`` of ``N`` keeps the fraction
``F[N-k] / F[N-k+1]`` of the current interval. The search therefore never
stops on a tolerance; ``epsilon`` only serves as the distinguishability offset
for the last cut, where the ratio reaches 1/2 and both candidate points
coincide with the midpoint. The offset is relative, ``epsilon * max(1, |xmin|)``,
so that it survives rounding for large abscissae.
"""

from __future__ import annotations

from typing import List

from .core import BracketSearch, BracketSearchError, BracketState


def fibonacci_numbers(n: int) -> List[int]:
    """Return the first ``n`` Fibonacci numbers starting ``1, 1, 2, ...``."""
    seq = [1, 1][:n]
    while len(seq) < n:
        seq.append(seq[-1] + seq[-2])
    return seq


class Fibonacci(BracketSearch):
    """Fibonacci bracket search running the full iteration budget.

    Raises:
        BracketSearchError: From ``search`` if a candidate repeats the incumbent
            or an iteration leaves both bounds unchanged, which means the
            interval can no longer shrink.
    """

    def __init__(self, epsilon: float, max_iterations: int, history: bool = False):
        super().__init__(epsilon, max_iterations, history)
        self._fib = fibonacci_numbers(self.max_iterations + 2)

    def ratio(self, iteration: int) -> float:
        """Fraction of the interval kept by the (0-based) ``iteration``."""
        k = self.max_iterations - iteration
        return self._fib[k] / self._fib[k + 1]

    def _is_min_found(self, state: BracketState) -> bool:
        return False

    def _next_point(self, state: BracketState) -> float:
        r = self.ratio(state.iteration)
        length = state.xu - state.xl
        left = state.xu - r * length
        right = state.xl + r * length
        xnext = right if abs(right - state.xmin) >= abs(left - state.xmin) else left
        offset = self.epsilon * max(1.0, abs(state.xmin))
        if abs(xnext - state.xmin) < offset:
            # final cut: probe just beside the incumbent, towards the wider side
            if state.xmin < state.midpoint:
                xnext = state.xmin + offset
            else:
                xnext = state.xmin - offset
        return xnext

    def _update(self, state: BracketState, xnext: float, fnext: float) -> None:
        if xnext == state.xmin:
            raise BracketSearchError(
                f"candidate {xnext!r} repeats the incumbent at iteration {state.iteration + 1}"
            )
        xl, xu = state.xl, state.xu
        super()._update(state, xnext, fnext)
        if state.xl == xl and state.xu == xu:
            raise BracketSearchError(
                f"cannot identify the moving bound at iteration {state.iteration + 1}"
            )


__all__ = ["Fibonacci", "fibonacci_numbers"]
