"""Performance benchmarks for descentkit.

This package contains microbenchmarks for the hot paths of the library:
multivariate descent on extended Rosenbrock problems and univariate
bracket searches.
"""
