"""Quasi-Newton minimizers and their Hessian-inverse update formulas.

Every algorithm keeps an approximation ``S`` of the inverse Hessian, starting
from the identity, and moves along ``dk = -S gk``. After each step ``S`` is
updated from ``gamma = g(k+1) - g(k)`` and ``delta = x(k+1) - x(k)``.

The update formulas are plain functions so they can be used and tested on
their own. They raise :class:`DegenerateCurvatureError` instead of dividing by
a (near) zero curvature; the minimizers then keep the previous ``S``.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..logging import get_logger
from .core import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_ITERATIONS,
    STALLED_INCREMENT,
    Array,
    DegenerateCurvatureError,
    Evaluator,
)
from .line_search import fletcher_line_search
from .steepest_descent import (
    DescentState,
    DirectionStrategy,
    LineSearch,
    SteepestDescent,
    StepLength,
)

logger = get_logger(__name__)

CURVATURE_TOL = 1e-14

Update = Callable[[Array, Array, Array], Array]


def _curvature(value: float, scale: float, name: str) -> float:
    value = float(value)
    if not np.isfinite(value) or abs(value) <= CURVATURE_TOL * scale:
        raise DegenerateCurvatureError(f"{name} = {value:.3e} is degenerate")
    return value


def huang_update(
    S: Array,
    gamma: Array,
    delta: Array,
    theta: float,
    phi: float,
    psi: float,
    omega: float,
) -> Array:
    """Huang's generalized update.

    ``S + delta a^T / (a^T gamma) - S gamma b^T / (b^T gamma)`` with
    ``a = theta delta + phi S^T gamma`` and ``b = psi delta + omega S^T gamma``.
    """
    s_gamma = S @ gamma
    st_gamma = S.T @ gamma
    a = theta * delta + phi * st_gamma
    b = psi * delta + omega * st_gamma
    a_gamma = _curvature(a @ gamma, np.linalg.norm(a) * np.linalg.norm(gamma), "a'gamma")
    b_gamma = _curvature(b @ gamma, np.linalg.norm(b) * np.linalg.norm(gamma), "b'gamma")
    return S + np.outer(delta, a) / a_gamma - np.outer(s_gamma, b) / b_gamma


def dfp_update(S: Array, gamma: Array, delta: Array) -> Array:
    """Davidon-Fletcher-Powell update of the inverse Hessian."""
    s_gamma = S @ gamma
    st_gamma = S.T @ gamma
    gd = _curvature(gamma @ delta, np.linalg.norm(gamma) * np.linalg.norm(delta), "gamma'delta")
    gsg = _curvature(
        gamma @ s_gamma, np.linalg.norm(gamma) * np.linalg.norm(s_gamma), "gamma'S gamma"
    )
    return S + np.outer(delta, delta) / gd - np.outer(s_gamma, st_gamma) / gsg


def rank_one_update(S: Array, gamma: Array, delta: Array) -> Array:
    """Symmetric rank-one update of the inverse Hessian."""
    r = delta - S @ gamma
    a = delta - S.T @ gamma
    a_gamma = _curvature(a @ gamma, np.linalg.norm(a) * np.linalg.norm(gamma), "a'gamma")
    return S + np.outer(r, a) / a_gamma


def bfgs_update(S: Array, gamma: Array, delta: Array) -> Array:
    """Broyden-Fletcher-Goldfarb-Shanno update of the inverse Hessian."""
    gd = _curvature(gamma @ delta, np.linalg.norm(gamma) * np.linalg.norm(delta), "gamma'delta")
    gt_s = gamma @ S
    s_gamma = S @ gamma
    coeff = (1.0 + (gt_s @ gamma) / gd) / gd
    return (
        S
        + coeff * np.outer(delta, delta)
        - (np.outer(delta, gt_s) + np.outer(s_gamma, delta)) / gd
    )


def bfgs_update_dual(S: Array, gamma: Array, delta: Array) -> Array:
    """BFGS update obtained as the dual of DFP.

    The DFP formula with the roles of ``gamma`` and ``delta`` exchanged updates
    the Hessian ``inv(S)``; the result is inverted back. Agrees with
    :func:`bfgs_update` up to rounding but costs two matrix inversions.
    """
    hessian = np.linalg.inv(S)
    return np.linalg.inv(dfp_update(hessian, delta, gamma))


def damped_bfgs_update(H: Array, gamma: Array, delta: Array) -> Array:
    """Powell's damped BFGS update of the Hessian ``H`` (not its inverse).

    ``gamma`` is replaced by ``eta = theta gamma + (1 - theta) H delta`` with
    ``theta`` chosen so that ``delta' eta >= 0.2 delta' H delta``; the update
    therefore keeps ``H`` positive definite even when ``delta' gamma <= 0``.
    """
    d_gamma = float(delta @ gamma)
    h_delta = H @ delta
    d_h_d = float(delta @ h_delta)
    theta = 1.0
    if d_gamma < 0.2 * d_h_d:
        theta = 0.8 * d_h_d / (d_h_d - d_gamma)
    eta = theta * gamma + (1.0 - theta) * h_delta
    return dfp_update(H, delta, eta)


@dataclass
class QuasiNewtonState(DescentState):
    S: Optional[Array] = None
    stalled: bool = False


class QuasiNewtonStrategy(DirectionStrategy):
    """Direction ``-S gk`` with ``S`` refreshed by ``update`` every iteration.

    When the gradient barely changes between iterates (``|gamma| <= epsilon``)
    the previous direction is reused with the small fixed step
    ``STALLED_INCREMENT``.
    """

    def __init__(self, update: Update, epsilon: float):
        self.update = update
        self.epsilon = epsilon

    def start(self, ev: Evaluator, x0: Array) -> QuasiNewtonState:
        return QuasiNewtonState(S=np.eye(x0.size))

    def direction(self, ev: Evaluator, xk: Array, state: QuasiNewtonState) -> Array:
        gk = ev.g(xk)
        state.stalled = False
        if state.dk is not None and state.gk is not None:
            gamma = gk - state.gk
            if np.linalg.norm(gamma) <= self.epsilon:
                state.stalled = True
                state.gk = gk
                return state.dk
            delta = state.ak * state.dk
            try:
                state.S = self.update(state.S, gamma, delta)
            except DegenerateCurvatureError as exc:
                logger.warning("Keeping previous inverse Hessian: %s", exc)
        state.gk = gk
        return -(state.S @ gk)

    def increment(
        self,
        ev: Evaluator,
        xk: Array,
        dk: Array,
        state: QuasiNewtonState,
        line_search: StepLength,
    ) -> float:
        if state.stalled:
            return STALLED_INCREMENT
        return line_search(xk, dk, state.gk)


class QuasiNewton(SteepestDescent):
    """Base of the quasi-Newton minimizers; subclasses supply :meth:`update`."""

    def update(self, S: Array, gamma: Array, delta: Array) -> Array:
        raise NotImplementedError

    def strategy(self) -> QuasiNewtonStrategy:
        return QuasiNewtonStrategy(self.update, self.epsilon)


class Huang(QuasiNewton):
    """Quasi-Newton minimizer using Huang's family with fixed parameters."""

    def __init__(
        self,
        theta: float,
        phi: float,
        psi: float,
        omega: float,
        epsilon: float = DEFAULT_EPSILON,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        line_search: LineSearch = fletcher_line_search,
        history: bool = False,
    ):
        super().__init__(epsilon, max_iterations, line_search, history)
        self.theta = theta
        self.phi = phi
        self.psi = psi
        self.omega = omega

    def update(self, S: Array, gamma: Array, delta: Array) -> Array:
        return huang_update(S, gamma, delta, self.theta, self.phi, self.psi, self.omega)


class RankOne(QuasiNewton):
    """Symmetric rank-one quasi-Newton; Huang's family at (1, -1, 1, -1)."""

    def update(self, S: Array, gamma: Array, delta: Array) -> Array:
        return rank_one_update(S, gamma, delta)


class DFP(QuasiNewton):
    """Davidon-Fletcher-Powell; Huang's family at (1, 0, 0, 1)."""

    def update(self, S: Array, gamma: Array, delta: Array) -> Array:
        return dfp_update(S, gamma, delta)


class BFGS(QuasiNewton):
    """Broyden-Fletcher-Goldfarb-Shanno quasi-Newton minimizer.

    With ``fletcher_switch`` the DFP update replaces the BFGS one whenever
    ``gamma'delta > gamma' S(k+1) gamma`` after the BFGS update (Fletcher's
    switch, Antoniou & Lu section 7.6).
    """

    def __init__(
        self,
        epsilon: float = DEFAULT_EPSILON,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        fletcher_switch: bool = False,
        line_search: LineSearch = fletcher_line_search,
        history: bool = False,
    ):
        super().__init__(epsilon, max_iterations, line_search, history)
        self.fletcher_switch = fletcher_switch

    def update(self, S: Array, gamma: Array, delta: Array) -> Array:
        S1 = bfgs_update(S, gamma, delta)
        if self.fletcher_switch and gamma @ delta - gamma @ S1 @ gamma > 0:
            logger.debug("Fletcher switch: using the DFP update")
            return dfp_update(S, gamma, delta)
        return S1


class McCormick(Huang):
    """McCormick's update; Huang's family at (1, 0, 1, 0).

    Deprecated: the update is not symmetric and rarely outperforms BFGS.
    """

    def __init__(
        self,
        epsilon: float = DEFAULT_EPSILON,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        line_search: LineSearch = fletcher_line_search,
        history: bool = False,
    ):
        warnings.warn(
            "McCormick is deprecated; use BFGS instead",
            DeprecationWarning,
            stacklevel=2,
        )
        super().__init__(1.0, 0.0, 1.0, 0.0, epsilon, max_iterations, line_search, history)


__all__ = [
    "BFGS",
    "CURVATURE_TOL",
    "DFP",
    "Huang",
    "McCormick",
    "QuasiNewton",
    "QuasiNewtonState",
    "QuasiNewtonStrategy",
    "RankOne",
    "bfgs_update",
    "bfgs_update_dual",
    "damped_bfgs_update",
    "dfp_update",
    "huang_update",
    "rank_one_update",
]
