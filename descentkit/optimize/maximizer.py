"""Maximization by minimizing the negated objective."""

from __future__ import annotations

import numpy as np

from .core import Array, Problem, Status
from .steepest_descent import IterativeMinimizer, SteepestDescent


def negate(problem: Problem) -> Problem:
    """Return the problem with ``fun``, ``grad`` and ``hess`` negated."""
    grad = problem.grad
    hess = problem.hess
    return Problem(
        fun=lambda x: -problem.fun(x),
        grad=None if grad is None else (lambda x: -np.asarray(grad(x), dtype=float)),
        hess=None if hess is None else (lambda x: -np.asarray(hess(x), dtype=float)),
        dim=problem.dim,
    )


class MaximizerSession:
    """Session over the negated problem reporting values of the original one."""

    def __init__(self, session: IterativeMinimizer):
        self.session = session

    @property
    def nit(self) -> int:
        return self.session.nit

    @property
    def status(self) -> Status:
        return self.session.status

    def set_initials(self, *initials: Array) -> None:
        self.session.set_initials(*initials)

    def step(self) -> Array:
        return self.session.step()

    def search(self, *initials: Array) -> Array:
        return self.session.search(*initials)

    def maximum(self) -> float:
        return -self.session.minimum()

    def maximizer(self) -> Array:
        return self.session.minimizer()


class MultivariateMaximizer:
    """Maximize ``f`` with any multivariate minimizer, e.g. ``BFGS``."""

    def __init__(self, minimizer: SteepestDescent):
        self.minimizer = minimizer

    def solve(self, problem: Problem) -> MaximizerSession:
        return MaximizerSession(self.minimizer.solve(negate(problem)))


__all__ = ["MaximizerSession", "MultivariateMaximizer", "negate"]
