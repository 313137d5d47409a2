"""Exhaustive grid search over an interval."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .core import MACHINE_EPSILON, UnivariateFunction


class GridSearch:
    """Evaluate ``f`` on ``max_iterations + 1`` equally spaced points.

    Unlike the bracket searches, no bracketing precondition is required, which
    makes the grid a cheap way to find a starting bracket for them.
    """

    def __init__(self, epsilon: float, max_iterations: int):
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
        self.epsilon = max(float(epsilon), math.sqrt(MACHINE_EPSILON))
        self.max_iterations = int(max_iterations)

    def solve(self, f: UnivariateFunction) -> "GridSolution":
        return GridSolution(self, f)


class GridSolution:
    def __init__(self, method: GridSearch, f: UnivariateFunction):
        self._method = method
        self._f = f
        self._xmin: Optional[float] = None
        self._fmin = math.inf

    def search(self, lower: float, initial: float, upper: float) -> float:
        """Search ``[lower, upper]``; ``initial`` is ignored."""
        return self.search_between(lower, upper)

    def search_between(self, lower: float, upper: float) -> float:
        if not lower < upper:
            raise ValueError(f"invalid interval: require lower < upper, got ({lower}, {upper})")
        grid = np.linspace(lower, upper, self._method.max_iterations + 1)
        values = np.array([self._f(float(x)) for x in grid], dtype=float)
        i = int(np.argmin(values))
        self._xmin = float(grid[i])
        self._fmin = float(values[i])
        return self._xmin

    def minimum(self) -> float:
        return self._fmin

    def minimizer(self) -> Optional[float]:
        return self._xmin


__all__ = ["GridSearch", "GridSolution"]
