"""Shared machinery for univariate bracket searches.

A bracket search starts from three points ``lower < initial < upper`` with
``f(initial)`` below both end values and repeatedly shrinks the interval
around the best point seen so far. Subclasses only decide *where* to probe
next and *when* to stop; the bracketing bookkeeping lives here.

References:
    - Antoniou & Lu, *Practical Optimization* (2007), chapter 4
    - Press et al., *Numerical Recipes* (2007), section 10.3
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List

import numpy as np

from ..debug_mode import is_debug_enabled
from ..logging import get_logger

logger = get_logger(__name__)

UnivariateFunction = Callable[[float], float]

MACHINE_EPSILON = float(np.finfo(float).eps)
# 1 - 1/phi, the fraction of an interval removed by one golden-section cut
GOLDEN_SECTION = (3.0 - math.sqrt(5.0)) / 2.0


class InvalidIntervalError(ValueError):
    """Raised when the supplied points do not bracket a minimum."""


class BracketSearchError(RuntimeError):
    """Raised when a bracket search loses track of its interval."""


@dataclass
class BracketState:
    """Interval bookkeeping owned by one search session.

    Attributes:
        xl: Lower bound of the bracketing interval.
        xu: Upper bound of the bracketing interval.
        xmin: Best abscissa found so far, ``xl < xmin < xu``.
        fmin: ``f(xmin)``, the least value observed.
        iteration: Number of candidate points evaluated.
        history: ``fmin`` after each iteration when history is requested.
    """

    xl: float
    xu: float
    xmin: float
    fmin: float
    iteration: int = 0
    history: List[float] = field(default_factory=list)

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.xl + self.xu)


class BracketSearch(ABC):
    """Template for bracket searches (Golden, Fibonacci, Brent).

    Args:
        epsilon: Convergence tolerance; values below ``sqrt(machine eps)``
            are raised to it since no double-precision search can do better.
        max_iterations: Maximum number of candidate evaluations.
        history: Record ``fmin`` after every iteration.
    """

    def __init__(self, epsilon: float, max_iterations: int, history: bool = False):
        if epsilon < 0:
            raise ValueError(f"epsilon must be >= 0, got {epsilon}")
        if max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")
        self.epsilon = max(float(epsilon), math.sqrt(MACHINE_EPSILON))
        self.max_iterations = int(max_iterations)
        self.history = history

    def solve(self, f: UnivariateFunction) -> "BracketSolution":
        """Bind the search to ``f`` and return a fresh session."""
        return BracketSolution(self, f)

    def _initial_state(
        self, f: UnivariateFunction, lower: float, initial: float, fx: float, upper: float
    ) -> BracketState:
        return BracketState(xl=lower, xu=upper, xmin=initial, fmin=fx)

    @abstractmethod
    def _is_min_found(self, state: BracketState) -> bool:
        """Stopping predicate checked before each iteration."""

    @abstractmethod
    def _next_point(self, state: BracketState) -> float:
        """Division rule producing the next candidate abscissa."""

    def _update(self, state: BracketState, xnext: float, fnext: float) -> None:
        """Shrink the interval so that it keeps bracketing ``state.xmin``."""
        if fnext < state.fmin:
            # the old minimizer becomes the bound on the candidate's side
            if xnext < state.xmin:
                state.xu = state.xmin
            else:
                state.xl = state.xmin
            state.xmin = xnext
            state.fmin = fnext
        else:
            if xnext < state.xmin:
                state.xl = xnext
            else:
                state.xu = xnext

    def _result(self, state: BracketState) -> float:
        return state.midpoint


class BracketSolution:
    """One bracket-search session over a fixed function."""

    def __init__(self, method: BracketSearch, f: UnivariateFunction):
        self._method = method
        self._f = f
        self._state: BracketState | None = None

    @property
    def state(self) -> BracketState | None:
        return self._state

    def search(self, lower: float, initial: float, upper: float) -> float:
        """Search ``[lower, upper]`` starting from the interior point ``initial``.

        Raises:
            InvalidIntervalError: If ``lower < initial < upper`` does not hold
                or ``f(initial)`` is not below both ``f(lower)`` and ``f(upper)``.
        """
        lower, initial, upper = float(lower), float(initial), float(upper)
        if not (lower < initial < upper):
            raise InvalidIntervalError(
                f"invalid bracket interval: require lower < initial < upper, "
                f"got ({lower}, {initial}, {upper})"
            )
        fl = self._f(lower)
        fx = self._f(initial)
        fu = self._f(upper)
        if not (fx < fl and fx < fu):
            raise InvalidIntervalError(
                "the interval specified may not bracket a minimum: "
                f"f({initial})={fx} must be below f({lower})={fl} and f({upper})={fu}"
            )

        method = self._method
        state = method._initial_state(self._f, lower, initial, fx, upper)
        self._state = state
        check = is_debug_enabled()

        while state.iteration < method.max_iterations:
            if method._is_min_found(state):
                break
            xnext = method._next_point(state)
            if xnext <= state.xl or state.xu <= xnext:
                logger.debug(
                    "%s: candidate %.17g left (%.17g, %.17g); stopping",
                    type(method).__name__,
                    xnext,
                    state.xl,
                    state.xu,
                )
                break
            fnext = self._f(xnext)
            method._update(state, xnext, fnext)
            state.iteration += 1
            if method.history:
                state.history.append(state.fmin)
            if check and not (state.xl < state.xmin < state.xu):
                raise BracketSearchError(
                    f"bracket invariant violated at iteration {state.iteration}: "
                    f"xl={state.xl}, xmin={state.xmin}, xu={state.xu}"
                )

        logger.debug(
            "%s finished after %d iterations: xmin=%.17g fmin=%.17g",
            type(method).__name__,
            state.iteration,
            state.xmin,
            state.fmin,
        )
        return method._result(state)

    def search_between(self, lower: float, upper: float) -> float:
        """Search ``[lower, upper]`` from its golden-section point."""
        initial = lower + GOLDEN_SECTION * (upper - lower)
        return self.search(lower, initial, upper)

    def minimum(self) -> float:
        """Least function value found by the last search."""
        if self._state is None:
            raise RuntimeError("search() has not been called")
        return self._state.fmin

    def minimizer(self) -> float:
        """Abscissa of the least function value found by the last search."""
        if self._state is None:
            raise RuntimeError("search() has not been called")
        return self._state.xmin


__all__ = [
    "GOLDEN_SECTION",
    "MACHINE_EPSILON",
    "BracketSearch",
    "BracketSearchError",
    "BracketSolution",
    "BracketState",
    "InvalidIntervalError",
    "UnivariateFunction",
]
