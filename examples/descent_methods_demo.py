"""
Example: Descent Methods in descentkit

This example walks through the minimizers shipped with descentkit: bracket
searches for functions of one variable, quasi-Newton and Newton-Raphson
methods for smooth multivariate problems, Gauss-Newton for least squares,
and the maximizer wrapper.
"""

import math

import numpy as np

from descentkit import (
    BFGS,
    DFP,
    Brent,
    FirstOrder,
    GaussNewton,
    Golden,
    GridSearch,
    Method,
    MultivariateMaximizer,
    NewtonRaphson,
    Problem,
)


def rosenbrock(x):
    return 100.0 * (x[1] - x[0] ** 2) ** 2 + (1.0 - x[0]) ** 2


def rosenbrock_grad(x):
    return np.array(
        [
            -400.0 * x[0] * (x[1] - x[0] ** 2) - 2.0 * (1.0 - x[0]),
            200.0 * (x[1] - x[0] ** 2),
        ]
    )


def example_univariate():
    """Example: Bracket searches on a function of one variable."""
    print("=" * 60)
    print("Example 1: Univariate Minimization")
    print("=" * 60)

    def f(x):
        return math.sin(3.0 * x) + 0.1 * x * x

    # A coarse grid finds the basin, a bracket search refines it
    x0 = GridSearch(1e-8, 60).solve(f).search_between(-3.0, 3.0)
    step = 6.0 / 60
    print(f"Grid estimate: x = {x0:.4f}")

    for method in (Golden(1e-10, 200), Brent(1e-10, 200)):
        solution = method.solve(f)
        xmin = solution.search(x0 - step, x0, x0 + step)
        print(f"{type(method).__name__:>8}: x = {xmin:.10f}, f = {solution.minimum():.10f}")
    print()


def example_quasi_newton():
    """Example: Quasi-Newton methods on the Rosenbrock valley."""
    print("=" * 60)
    print("Example 2: Quasi-Newton Methods - Rosenbrock Function")
    print("=" * 60)

    problem = Problem(fun=rosenbrock, grad=rosenbrock_grad)
    x0 = np.array([-1.2, 1.0])

    for method in (BFGS(1e-10, 500), BFGS(1e-10, 500, fletcher_switch=True), DFP(1e-10, 500)):
        session = method.solve(problem)
        session.search(x0)
        result = session.result()
        print(f"{type(method).__name__}: x = {result.x}, f = {result.fun:.3e}")
        print(f"  Status: {result.status.value}, iterations: {result.nit}, nfev: {result.nfev}")
    print()


def example_newton():
    """Example: Newton-Raphson with an analytic Hessian."""
    print("=" * 60)
    print("Example 3: Newton-Raphson - Quadratic Bowl")
    print("=" * 60)

    A = np.array([[4.0, 1.0], [1.0, 3.0]])
    b = np.array([1.0, 2.0])
    problem = Problem(
        fun=lambda x: 0.5 * x @ A @ x - b @ x,
        grad=lambda x: A @ x - b,
        hess=lambda x: A,
    )
    session = NewtonRaphson(1e-10, 50).solve(problem)
    x = session.search(np.zeros(2))
    print(f"Newton solution: {x}")
    print(f"Exact solution:  {np.linalg.solve(A, b)}")
    print(f"Iterations: {session.nit}")
    print()


def example_gauss_newton():
    """Example: Fitting an exponential decay by least squares."""
    print("=" * 60)
    print("Example 4: Gauss-Newton - Exponential Decay Fit")
    print("=" * 60)

    t = np.linspace(0.0, 4.0, 20)
    y = 2.5 * np.exp(-1.3 * t)

    def residuals(p):
        return p[0] * np.exp(-p[1] * t) - y

    def jacobian(p):
        e = np.exp(-p[1] * t)
        return np.column_stack([e, -p[0] * t * e])

    session = GaussNewton(1e-12, 100).solve(residuals, jacobian)
    p = session.search(np.array([1.0, 1.0]))
    print(f"Fitted parameters: amplitude = {p[0]:.6f}, rate = {p[1]:.6f}")
    print(f"Residual sum of squares: {session.minimum():.3e}")
    print()


def example_maximizer():
    """Example: Maximizing a concave function by steepest ascent."""
    print("=" * 60)
    print("Example 5: Maximization - Analytic First-Order Steps")
    print("=" * 60)

    problem = Problem(
        fun=lambda x: -((x[0] - 1.0) ** 2) - 2.0 * (x[1] + 0.5) ** 2,
        grad=lambda x: np.array([-2.0 * (x[0] - 1.0), -4.0 * (x[1] + 0.5)]),
    )
    maximizer = MultivariateMaximizer(FirstOrder(1e-10, 500, method=Method.ANALYTIC))
    session = maximizer.solve(problem)
    x = session.search(np.zeros(2))
    print(f"Maximizer: {x}")
    print(f"Maximum:   {session.maximum():.3e}")
    print()


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("descentkit - Descent Method Examples")
    print("=" * 60 + "\n")

    example_univariate()
    example_quasi_newton()
    example_newton()
    example_gauss_newton()
    example_maximizer()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
