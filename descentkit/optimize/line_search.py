"""Inexact line searches.

Every routine returns ``(alpha, nfev)``. Two calling conventions exist and
the minimizers dispatch on the name of the second parameter: routines whose
second parameter is ``grad`` are called as ``search(f, grad, x, p)``, the
others as ``search(f, x, p, grad_fx)``.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .core import Array, Gradient, Objective

# floor applied to every Fletcher step; smaller steps stall the outer loop
MIN_FLETCHER_STEP = 1e-5


def fletcher_line_search(
    f: Objective,
    grad: Gradient,
    x: Array,
    p: Array,
    rho: float = 0.1,
    sigma: float = 0.1,
    tau: float = 0.1,
    chi: float = 0.75,
    epsilon: float = 1e-10,
    max_iter: int = 400,
) -> tuple[float, int]:
    """Fletcher's inexact line search.

    The step is accepted once it satisfies the Goldstein sufficient-decrease
    test (``rho``) and the slope test ``phi'(a) >= sigma * phi'(aL)``. A step
    failing the first test is pulled back by quadratic interpolation, a step
    failing the second is extrapolated; ``tau`` and ``chi`` keep the new trial
    away from the ends of the current bracket ``[aL, aU]``.

    Reference: Antoniou & Lu, *Practical Optimization* (2007), section 4.8.
    """
    nfev = 0

    def phi(alpha: float) -> float:
        nonlocal nfev
        nfev += 1
        return f(x + alpha * p)

    def phi_prime(alpha: float) -> float:
        return float(np.dot(grad(x + alpha * p), p))

    a_lo = 0.0
    a_hi = 1e99
    f_lo = phi(a_lo)
    df_lo = phi_prime(a_lo)

    a0 = 1.0
    if abs(df_lo) > 0:
        a0 = -2.0 * f_lo / df_lo
    if a0 <= epsilon or a0 > 1.0:
        a0 = 1.0

    for _ in range(max_iter):
        f0 = phi(a0)
        if f0 > f_lo + rho * (a0 - a_lo) * df_lo and abs(f_lo - f0) > epsilon:
            a_hi = min(a_hi, a0)
            # eq. 4.57: minimizer of the quadratic through phi(aL), phi'(aL), phi(a0)
            a_hat = a_lo + (a0 - a_lo) ** 2 * df_lo / 2.0 / (f_lo - f0 + (a0 - a_lo) * df_lo)
            a_hat = max(a_hat, a_lo + tau * (a_hi - a_lo))
            a_hat = min(a_hat, a_hi - tau * (a_hi - a_lo))
            a0 = a_hat
            continue

        df0 = phi_prime(a0)
        if df0 < sigma * df_lo and abs(f_lo - f0) > epsilon and abs(df0 - df_lo) > epsilon:
            da0 = (a0 - a_lo) * df0 / (df_lo - df0)
            if da0 <= 0:
                da0 = a0
            da0 = max(da0, tau * (a0 - a_lo))
            da0 = min(da0, chi * (a_hi - a0))
            a_lo, f_lo, df_lo = a0, f0, df0
            a0 = a0 + da0
            continue

        break

    return max(a0, MIN_FLETCHER_STEP), nfev


def backtracking_armijo(
    f: Objective,
    x: Array,
    p: Array,
    grad_fx: Array,
    alpha0: float = 1.0,
    rho: float = 0.5,
    c: float = 1e-4,
    max_iter: int = 50,
) -> tuple[float, int]:
    """Classic Armijo backtracking line search."""
    if not (0 < c < 1):
        raise ValueError("Armijo constant c must lie in (0, 1)")
    if not (0 < rho < 1):
        raise ValueError("rho must lie in (0, 1)")
    alpha = float(alpha0)
    fx = f(x)
    grad_dot = float(np.dot(grad_fx, p))
    nfev = 1
    for _ in range(max_iter):
        f_new = f(x + alpha * p)
        nfev += 1
        if f_new <= fx + c * alpha * grad_dot:
            return alpha, nfev
        alpha *= rho
    return alpha, nfev


def wolfe_line_search(
    f: Objective,
    grad: Gradient,
    x: Array,
    p: Array,
    alpha0: float = 1.0,
    c1: float = 1e-4,
    c2: float = 0.9,
    max_iter: int = 40,
) -> tuple[float, int]:
    """Strong Wolfe line search using bracketing and zoom (Nocedal & Wright 3.5)."""
    if not (0 < c1 < c2 < 1):
        raise ValueError("Require 0 < c1 < c2 < 1 for Wolfe conditions.")

    nfev = 0

    def phi(alpha: float) -> float:
        nonlocal nfev
        nfev += 1
        return f(x + alpha * p)

    def phi_prime(alpha: float) -> float:
        return float(np.dot(grad(x + alpha * p), p))

    alpha_prev = 0.0
    phi0 = phi(0.0)
    der0 = phi_prime(0.0)
    if der0 >= 0:
        raise ValueError("Search direction must be a descent direction.")
    alpha = float(alpha0)
    phi_prev = phi0

    for iteration in range(max_iter):
        phi_alpha = phi(alpha)
        if phi_alpha > phi0 + c1 * alpha * der0 or (
            iteration > 0 and phi_alpha >= phi_prev
        ):
            return _zoom(phi, phi_prime, alpha_prev, alpha, phi0, der0, c1, c2), nfev
        der_alpha = phi_prime(alpha)
        if abs(der_alpha) <= -c2 * der0:
            return alpha, nfev
        if der_alpha >= 0:
            return _zoom(phi, phi_prime, alpha, alpha_prev, phi0, der0, c1, c2), nfev
        alpha_prev = alpha
        phi_prev = phi_alpha
        alpha *= 2.0
    return alpha, nfev


def _zoom(
    phi: Callable[[float], float],
    phi_prime: Callable[[float], float],
    alo: float,
    ahi: float,
    phi0: float,
    der0: float,
    c1: float,
    c2: float,
) -> float:
    """Zoom stage enforcing strong Wolfe conditions."""
    phi_alo = phi(alo)
    alpha = 0.5 * (alo + ahi)
    for _ in range(32):
        alpha = 0.5 * (alo + ahi)
        phi_alpha = phi(alpha)
        if phi_alpha > phi0 + c1 * alpha * der0 or phi_alpha >= phi_alo:
            ahi = alpha
        else:
            der_alpha = phi_prime(alpha)
            if abs(der_alpha) <= -c2 * der0:
                return alpha
            if der_alpha * (ahi - alo) > 0:
                ahi = alo
            alo = alpha
            phi_alo = phi_alpha
        if abs(ahi - alo) < 1e-12:
            break
    return alpha


__all__ = [
    "MIN_FLETCHER_STEP",
    "backtracking_armijo",
    "fletcher_line_search",
    "wolfe_line_search",
]
