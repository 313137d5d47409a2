"""Core interfaces shared across the multivariate minimizers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

from .utils import approx_grad, approx_hessian, approx_jacobian

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]
Hessian = Callable[[Array], Array]
Residuals = Callable[[Array], Array]
Jacobian = Callable[[Array], Array]

RTOL = 1e-8
DEFAULT_EPSILON = RTOL
DEFAULT_MAX_ITERATIONS = 200
# step taken along a direction whose gradient change has stalled
STALLED_INCREMENT = 1e-5


class DegenerateCurvatureError(ArithmeticError):
    """Raised when a Hessian update would divide by a (near) zero curvature."""


class Status(Enum):
    """Exit status of an iterative minimizer."""

    IN_PROGRESS = "in_progress"
    CONVERGED = "converged"
    MAX_ITER = "max_iter"


@dataclass(frozen=True)
class Problem:
    """Container describing an unconstrained minimization problem.

    ``grad`` and ``hess`` are optional; missing derivatives are approximated
    by central finite differences of ``fun``.
    """

    fun: Objective
    grad: Optional[Gradient] = None
    hess: Optional[Hessian] = None
    dim: Optional[int] = None


@dataclass(frozen=True)
class LeastSquaresProblem(Problem):
    """Problem ``min r(x)' r(x)`` that also exposes its residual vector.

    Without ``jacobian`` the Jacobian of ``residuals`` is taken by central
    differences.
    """

    residuals: Optional[Residuals] = None
    jacobian: Optional[Jacobian] = None


@dataclass
class OptimizeResult:
    """Snapshot of a minimizer session."""

    x: Array
    fun: float
    nit: int
    status: Status
    message: str
    grad_norm: float
    nfev: int
    njev: int
    nhev: int
    history: List[Array] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is Status.CONVERGED


class Evaluator:
    """Evaluates a :class:`Problem` and counts the calls made to it.

    One evaluator belongs to one minimizer session, so the counters are never
    shared between concurrent solves of the same problem.
    """

    def __init__(self, problem: Problem):
        self.problem = problem
        self.nfev = 0
        self.njev = 0
        self.nhev = 0

    def f(self, x: Array) -> float:
        self.nfev += 1
        return float(self.problem.fun(x))

    def g(self, x: Array) -> Array:
        if self.problem.grad is not None:
            self.njev += 1
            return np.asarray(self.problem.grad(x), dtype=float)
        grad, evals = approx_grad(self.problem.fun, x, return_evals=True)
        self.nfev += int(evals)
        return grad

    def H(self, x: Array) -> Array:
        if self.problem.hess is not None:
            self.nhev += 1
            return np.asarray(self.problem.hess(x), dtype=float)
        hess, evals = approx_hessian(self.problem.fun, x, return_evals=True)
        self.nfev += int(evals)
        return hess

    def r(self, x: Array) -> Array:
        """Residuals of a :class:`LeastSquaresProblem`; counted as one ``nfev``."""
        self.nfev += 1
        return np.asarray(self.problem.residuals(x), dtype=float)

    def J(self, x: Array) -> Array:
        if self.problem.jacobian is not None:
            self.njev += 1
            return np.asarray(self.problem.jacobian(x), dtype=float)
        self.nfev += 2 * np.size(x)
        return approx_jacobian(self.problem.residuals, x)


def check_convergence(step_norm: float, tol: float) -> bool:
    """Return True if the last increment is small enough to stop."""
    return step_norm <= tol


__all__ = [
    "Array",
    "Objective",
    "Gradient",
    "Hessian",
    "Jacobian",
    "Residuals",
    "RTOL",
    "DEFAULT_EPSILON",
    "DEFAULT_MAX_ITERATIONS",
    "STALLED_INCREMENT",
    "DegenerateCurvatureError",
    "Evaluator",
    "LeastSquaresProblem",
    "OptimizeResult",
    "Problem",
    "Status",
    "check_convergence",
]
