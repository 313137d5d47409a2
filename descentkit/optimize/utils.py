"""Finite differences and positive-definite corrections.

These helpers avoid any dependency on SciPy and provide deterministic, pure
NumPy implementations suitable for small to medium scale problems.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]
VectorFunction = Callable[[Array], Array]


def approx_grad(
    fun: Objective, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    evals = 0
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei[i] = eps
        fx_plus = fun(x + ei)
        fx_minus = fun(x - ei)
        evals += 2
        grad[i] = (fx_plus - fx_minus) / (2.0 * eps)
    if return_evals:
        return grad, evals
    return grad


def approx_hessian(
    fun: Objective, x: Array, eps: float = 1e-4, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Approximate the Hessian using second-order central differences."""
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float)
    n = x.size
    hess = np.zeros((n, n), dtype=float)
    fx = fun(x)
    evals = 1
    for i in range(n):
        ei = np.zeros_like(x)
        ei[i] = eps
        f_ip = fun(x + ei)
        f_im = fun(x - ei)
        evals += 2
        hess[i, i] = (f_ip - 2 * fx + f_im) / (eps**2)
        for j in range(i + 1, n):
            ej = np.zeros_like(x)
            ej[j] = eps
            f_pp = fun(x + ei + ej)
            f_pm = fun(x + ei - ej)
            f_mp = fun(x - ei + ej)
            f_mm = fun(x - ei - ej)
            evals += 4
            value = (f_pp - f_pm - f_mp + f_mm) / (4 * eps**2)
            hess[i, j] = value
            hess[j, i] = value
    if return_evals:
        return hess, evals
    return hess


def approx_jacobian(fun: VectorFunction, x: Array, eps: float = 1e-6) -> Array:
    """Central-difference Jacobian of a vector function, shape ``(m, n)``."""
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float)
    columns = []
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei[i] = eps
        f_plus = np.asarray(fun(x + ei), dtype=float)
        f_minus = np.asarray(fun(x - ei), dtype=float)
        columns.append((f_plus - f_minus) / (2.0 * eps))
    return np.column_stack(columns)


def symmetrize(mat: Array) -> Array:
    """Return the symmetric part ``0.5 * (mat + mat.T)``."""
    return 0.5 * (mat + mat.T)


def is_pos_def(mat: Array, tol: float = 1e-12) -> bool:
    """Check if a matrix is positive definite via eigenvalues."""
    eigvals = np.linalg.eigvalsh(symmetrize(mat))
    return bool(np.all(eigvals > tol))


def eigen_floor_correction(mat: Array, floor: float = 1e-8) -> Array:
    """Positive-definite correction by flooring the eigenvalues.

    Negative eigenvalues are reflected and every eigenvalue is raised to at
    least ``floor * max |lambda|``, so the result is symmetric positive
    definite with condition number at most ``1 / floor``. The zero matrix
    carries no curvature information and maps to the identity.
    """
    mat = np.asarray(mat, dtype=float)
    eigvals, eigvecs = np.linalg.eigh(symmetrize(mat))
    scale = float(np.max(np.abs(eigvals))) if eigvals.size else 0.0
    if scale == 0.0:
        return np.eye(mat.shape[0])
    corrected = np.maximum(np.abs(eigvals), floor * scale)
    return (eigvecs * corrected) @ eigvecs.T


def matthews_davies(mat: Array) -> Array:
    """Matthews-Davies positive-definite correction.

    Gaussian elimination computes ``H = L D L^T``; every non-positive pivot is
    replaced by the smallest positive pivot seen so far (or 1 when none has
    been seen), and the corrected ``L D L^T`` is returned. A positive definite
    input is returned unchanged up to rounding.

    Reference: Antoniou & Lu, *Practical Optimization* (2007), section 5.5.1.
    """
    h = symmetrize(np.array(mat, dtype=float))
    n = h.shape[0]
    lower = np.eye(n)
    h00 = h[0, 0] if h[0, 0] > 0 else 1.0
    for k in range(1, n):
        m = k - 1
        if h[m, m] <= 0:
            h[m, m] = h00
        lower[k:, m] = h[k:, m] / h[m, m]
        h[k:, k:] -= np.outer(lower[k:, m], h[m, k:])
        h[k:, m] = 0.0
        if 0 < h[k, k] < h00:
            h00 = h[k, k]
    if h[n - 1, n - 1] <= 0:
        h[n - 1, n - 1] = h00
    return (lower * np.diag(h)) @ lower.T


__all__ = [
    "Array",
    "Objective",
    "VectorFunction",
    "approx_grad",
    "approx_hessian",
    "approx_jacobian",
    "eigen_floor_correction",
    "is_pos_def",
    "matthews_davies",
    "symmetrize",
]
