"""Unconstrained multivariate minimization by descent methods.

Example
-------
>>> import numpy as np
>>> from descentkit.optimize import BFGS, Problem
>>> def himmelblau(x):
...     return (x[0]**2 + x[1] - 11)**2 + (x[0] + x[1]**2 - 7)**2
>>> def himmelblau_grad(x):
...     a = x[0]**2 + x[1] - 11
...     b = x[0] + x[1]**2 - 7
...     return np.array([4 * x[0] * a + 2 * b, 2 * a + 4 * x[1] * b])
>>> session = BFGS(1e-6, 13).solve(Problem(fun=himmelblau, grad=himmelblau_grad))
>>> np.round(session.search(np.array([6.0, 6.0])), 6)
array([3., 2.])
"""

from .core import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_ITERATIONS,
    RTOL,
    STALLED_INCREMENT,
    DegenerateCurvatureError,
    Evaluator,
    LeastSquaresProblem,
    OptimizeResult,
    Problem,
    Status,
    check_convergence,
)
from .gauss_newton import GaussNewton, least_squares_problem
from .gradient import FirstOrder, Method
from .line_search import backtracking_armijo, fletcher_line_search, wolfe_line_search
from .maximizer import MultivariateMaximizer, negate
from .newton import NewtonRaphson, hessian_inverse
from .quasi_newton import (
    BFGS,
    DFP,
    Huang,
    McCormick,
    QuasiNewton,
    RankOne,
    bfgs_update,
    bfgs_update_dual,
    damped_bfgs_update,
    dfp_update,
    huang_update,
    rank_one_update,
)
from .steepest_descent import (
    DescentState,
    DirectionStrategy,
    IterativeMinimizer,
    SteepestDescent,
)
from .utils import (
    approx_grad,
    approx_hessian,
    approx_jacobian,
    eigen_floor_correction,
    is_pos_def,
    matthews_davies,
    symmetrize,
)

__all__ = [
    "BFGS",
    "DEFAULT_EPSILON",
    "DEFAULT_MAX_ITERATIONS",
    "DFP",
    "DegenerateCurvatureError",
    "DescentState",
    "DirectionStrategy",
    "Evaluator",
    "FirstOrder",
    "GaussNewton",
    "Huang",
    "IterativeMinimizer",
    "LeastSquaresProblem",
    "McCormick",
    "Method",
    "MultivariateMaximizer",
    "NewtonRaphson",
    "OptimizeResult",
    "Problem",
    "QuasiNewton",
    "RTOL",
    "RankOne",
    "STALLED_INCREMENT",
    "Status",
    "SteepestDescent",
    "approx_grad",
    "approx_hessian",
    "approx_jacobian",
    "backtracking_armijo",
    "bfgs_update",
    "bfgs_update_dual",
    "check_convergence",
    "damped_bfgs_update",
    "dfp_update",
    "eigen_floor_correction",
    "fletcher_line_search",
    "hessian_inverse",
    "huang_update",
    "is_pos_def",
    "least_squares_problem",
    "matthews_davies",
    "negate",
    "rank_one_update",
    "symmetrize",
    "wolfe_line_search",
]
