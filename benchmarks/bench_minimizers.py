"""Benchmark multivariate minimizers and univariate bracket searches."""

import math
import time
from typing import Dict

import numpy as np

from descentkit import BFGS, DFP, Brent, Golden, NewtonRaphson, Problem


def extended_rosenbrock(x):
    return float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2))


def extended_rosenbrock_grad(x):
    g = np.zeros_like(x)
    d = x[1:] - x[:-1] ** 2
    g[:-1] = -400.0 * x[:-1] * d - 2.0 * (1.0 - x[:-1])
    g[1:] += 200.0 * d
    return g


def benchmark_minimizer(method, dim: int, n_repeats: int = 5) -> Dict[str, float]:
    """Benchmark one minimizer on the extended Rosenbrock function.

    Args:
        method: Configured minimizer (e.g. ``BFGS(1e-8, 2000)``).
        dim: Problem dimension.
        n_repeats: Number of timed solves.

    Returns:
        Dictionary with timing results.
    """
    problem = Problem(fun=extended_rosenbrock, grad=extended_rosenbrock_grad)
    x0 = np.full(dim, -1.2)
    x0[1::2] = 1.0

    # Warmup
    method.solve(problem).search(x0)

    start = time.perf_counter()
    for _ in range(n_repeats):
        session = method.solve(problem)
        session.search(x0)
    end = time.perf_counter()

    result = session.result()
    return {
        "dim": dim,
        "time_per_solve_sec": (end - start) / n_repeats,
        "nit": result.nit,
        "nfev": result.nfev,
        "fun": result.fun,
    }


def benchmark_bracket(method, n_repeats: int = 1000) -> Dict[str, float]:
    """Benchmark a univariate bracket search on a smooth test function."""
    calls = [0]

    def f(x):
        calls[0] += 1
        return math.cosh(x - 0.7) + 0.1 * (x - 0.7) ** 4

    start = time.perf_counter()
    for _ in range(n_repeats):
        method.solve(f).search(-3.0, 0.0, 4.0)
    end = time.perf_counter()

    return {
        "time_per_search_sec": (end - start) / n_repeats,
        "evaluations_per_search": calls[0] / n_repeats,
    }


if __name__ == "__main__":
    print("Benchmarking multivariate minimizers...")
    for dim in (2, 10, 50):
        for method in (BFGS(1e-8, 5000), DFP(1e-8, 5000), NewtonRaphson(1e-8, 500)):
            results = benchmark_minimizer(method, dim)
            print(f"{type(method).__name__} (dim={dim}):")
            print(f"  Time per solve: {results['time_per_solve_sec']*1e3:.2f} ms")
            print(f"  Iterations: {results['nit']}, f evaluations: {results['nfev']}")

    print("Benchmarking bracket searches...")
    for method in (Golden(1e-8, 200), Brent(1e-8, 200)):
        results = benchmark_bracket(method)
        print(f"{type(method).__name__}:")
        print(f"  Time per search: {results['time_per_search_sec']*1e6:.2f} us")
        print(f"  Evaluations per search: {results['evaluations_per_search']:.1f}")
