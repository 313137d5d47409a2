"""descentkit - descent methods for unconstrained minimization in NumPy."""

__version__ = "0.1.0"

from .debug_mode import debug_context, is_debug_enabled, set_debug_enabled
from .logging import configure_logging, get_logger, set_log_level

# Multivariate minimization
from .optimize import (
    BFGS,
    DFP,
    FirstOrder,
    GaussNewton,
    Huang,
    McCormick,
    Method,
    MultivariateMaximizer,
    NewtonRaphson,
    OptimizeResult,
    Problem,
    RankOne,
    Status,
    fletcher_line_search,
)

# Univariate minimization
from .univariate import Brent, Fibonacci, Golden, GridSearch, InvalidIntervalError

__all__ = [
    "BFGS",
    "Brent",
    "DFP",
    "Fibonacci",
    "FirstOrder",
    "GaussNewton",
    "Golden",
    "GridSearch",
    "Huang",
    "InvalidIntervalError",
    "McCormick",
    "Method",
    "MultivariateMaximizer",
    "NewtonRaphson",
    "OptimizeResult",
    "Problem",
    "RankOne",
    "Status",
    "__version__",
    "configure_logging",
    "debug_context",
    "fletcher_line_search",
    "get_logger",
    "is_debug_enabled",
    "set_debug_enabled",
    "set_log_level",
]
