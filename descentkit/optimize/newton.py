"""Newton-Raphson minimizer with a fallback chain for bad Hessians."""

from __future__ import annotations

import numpy as np

from ..logging import get_logger
from .core import Array, Evaluator
from .steepest_descent import DescentState, DirectionStrategy, SteepestDescent
from .utils import eigen_floor_correction

logger = get_logger(__name__)


def _finite_inverse(mat: Array) -> Array | None:
    try:
        inv = np.linalg.inv(mat)
    except np.linalg.LinAlgError:
        return None
    if not np.all(np.isfinite(inv)):
        return None
    return inv


def hessian_inverse(hess: Array) -> Array:
    """Invert ``hess``, falling back when it is singular or non-finite.

    Tries the direct inverse, then the inverse of the eigenvalue-floor
    positive-definite correction, and finally returns the identity.
    """
    hess = np.asarray(hess, dtype=float)
    inv = _finite_inverse(hess)
    if inv is not None:
        return inv
    logger.warning("Hessian is not invertible; applying eigenvalue-floor correction")
    try:
        inv = _finite_inverse(eigen_floor_correction(hess))
    except np.linalg.LinAlgError:
        inv = None
    if inv is not None:
        return inv
    logger.warning("Corrected Hessian is not invertible; using the identity")
    return np.eye(hess.shape[0])


class NewtonDirection(DirectionStrategy):
    def direction(self, ev: Evaluator, xk: Array, state: DescentState) -> Array:
        gk = ev.g(xk)
        state.gk = gk
        return -(hessian_inverse(ev.H(xk)) @ gk)


class NewtonRaphson(SteepestDescent):
    """Newton-Raphson: direction ``-inv(H) g`` scaled by the line search.

    Problems without an analytic Hessian use a finite-difference one.
    """

    def strategy(self) -> NewtonDirection:
        return NewtonDirection()


__all__ = ["NewtonDirection", "NewtonRaphson", "hessian_inverse"]
