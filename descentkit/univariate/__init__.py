"""Univariate minimization: bracket searches and grid search.

Example
-------
>>> from descentkit.univariate import Brent
>>> solution = Brent(1e-10, 100).solve(lambda x: (x - 2.0) ** 2)
>>> round(solution.search(0.0, 1.0, 5.0), 6)
2.0
"""

from .brent import Brent, BrentState
from .core import (
    GOLDEN_SECTION,
    BracketSearch,
    BracketSearchError,
    BracketSolution,
    BracketState,
    InvalidIntervalError,
)
from .fibonacci import Fibonacci, fibonacci_numbers
from .golden import Golden
from .grid import GridSearch, GridSolution

__all__ = [
    "GOLDEN_SECTION",
    "BracketSearch",
    "BracketSearchError",
    "BracketSolution",
    "BracketState",
    "Brent",
    "BrentState",
    "Fibonacci",
    "Golden",
    "GridSearch",
    "GridSolution",
    "InvalidIntervalError",
    "fibonacci_numbers",
]
