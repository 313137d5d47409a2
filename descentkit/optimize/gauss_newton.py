"""Gauss-Newton minimization of sums of squared residuals.

The objective is ``F(x) = r(x)' r(x)`` for a residual vector ``r``. With the
Jacobian ``J`` of ``r`` the gradient is ``2 J' r`` and the Hessian is
approximated by ``2 J' J``, made positive definite by the Matthews-Davies
correction before solving for the direction.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .core import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_ITERATIONS,
    Array,
    Evaluator,
    Jacobian,
    LeastSquaresProblem,
    Residuals,
)
from .line_search import fletcher_line_search
from .steepest_descent import DescentState, DirectionStrategy, IterativeMinimizer, LineSearch
from .utils import approx_jacobian, matthews_davies


def least_squares_problem(
    residuals: Residuals, jacobian: Optional[Jacobian] = None
) -> LeastSquaresProblem:
    """Build the problem ``min r(x)' r(x)`` with gradient ``2 J' r``.

    Each call of ``fun`` or ``grad`` counts as one evaluation in the session
    counters, whatever it costs in residual and Jacobian calls.
    """

    def fun(x: Array) -> float:
        r = np.asarray(residuals(x), dtype=float)
        return float(r @ r)

    def grad(x: Array) -> Array:
        r = np.asarray(residuals(x), dtype=float)
        jac = jacobian(x) if jacobian is not None else approx_jacobian(residuals, x)
        return 2.0 * np.asarray(jac, dtype=float).T @ r

    return LeastSquaresProblem(fun=fun, grad=grad, residuals=residuals, jacobian=jacobian)


class GaussNewtonDirection(DirectionStrategy):
    def direction(self, ev: Evaluator, xk: Array, state: DescentState) -> Array:
        rk = ev.r(xk)
        jk = ev.J(xk)
        gk = 2.0 * jk.T @ rk
        state.gk = gk
        hk = matthews_davies(2.0 * jk.T @ jk)
        return -np.linalg.solve(hk, gk)


class GaussNewton:
    """Gauss-Newton least-squares minimizer.

    Args:
        epsilon: Stop once the increment norm is at most this.
        max_iterations: Maximum number of iterations of ``search``.
        line_search: Line-search routine supplying step lengths.
        history: Record every iterate of each session.
    """

    def __init__(
        self,
        epsilon: float = DEFAULT_EPSILON,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        line_search: LineSearch = fletcher_line_search,
        history: bool = False,
    ):
        if epsilon < 0:
            raise ValueError(f"epsilon must be >= 0, got {epsilon}")
        if max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")
        self.epsilon = float(epsilon)
        self.max_iterations = int(max_iterations)
        self.line_search = line_search
        self.history = history

    def solve(
        self, residuals: Residuals, jacobian: Optional[Jacobian] = None
    ) -> IterativeMinimizer:
        """Return a session minimizing ``|residuals(x)|^2``.

        Without ``jacobian`` the Jacobian is taken by central differences.
        """
        return IterativeMinimizer(
            least_squares_problem(residuals, jacobian),
            GaussNewtonDirection(),
            epsilon=self.epsilon,
            max_iterations=self.max_iterations,
            line_search=self.line_search,
            history=self.history,
        )


__all__ = ["GaussNewton", "GaussNewtonDirection", "least_squares_problem"]
