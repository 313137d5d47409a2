"""The steepest-descent iteration shared by every multivariate minimizer.

One loop drives all algorithms: at ``xk`` a :class:`DirectionStrategy`
proposes a descent direction ``dk``, a step length ``ak`` is chosen (by the
line search unless the strategy knows better) and the iterate moves to
``xk + ak * dk``. The loop stops when ``|ak * dk| <= epsilon`` or after
``max_iterations`` steps.

Example
-------
>>> import numpy as np
>>> from descentkit.optimize import BFGS, Problem
>>> problem = Problem(fun=lambda x: float(x @ x), grad=lambda x: 2 * x)
>>> session = BFGS(1e-8, 50).solve(problem)
>>> np.allclose(session.search(np.array([1.0, -2.0])), 0.0, atol=1e-6)
True
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from ..debug_mode import is_debug_enabled
from ..logging import get_logger
from .core import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_ITERATIONS,
    Array,
    Evaluator,
    OptimizeResult,
    Problem,
    Status,
    check_convergence,
)
from .line_search import fletcher_line_search

logger = get_logger(__name__)

LineSearch = Callable[..., tuple]
# bound form handed to strategies: (xk, dk, gk) -> step length
StepLength = Callable[[Array, Array, Optional[Array]], float]


def _line_search_requires_grad(func: Callable) -> bool:
    sig = inspect.signature(func)
    params = list(sig.parameters.values())
    return len(params) >= 2 and params[1].name == "grad"


@dataclass
class DescentState:
    """Memory a strategy keeps between iterations of one session.

    Attributes:
        dk: Direction used by the last completed step.
        ak: Step length used by the last completed step.
        gk: Gradient at the current iterate, if the strategy computed it.
    """

    dk: Optional[Array] = None
    ak: Optional[float] = None
    gk: Optional[Array] = None


class DirectionStrategy(ABC):
    """Chooses the search direction (and optionally the step) at an iterate.

    Strategies carry configuration only; everything that changes between
    iterations lives in the :class:`DescentState` returned by :meth:`start`.
    """

    def start(self, ev: Evaluator, x0: Array) -> DescentState:
        return DescentState()

    @abstractmethod
    def direction(self, ev: Evaluator, xk: Array, state: DescentState) -> Array:
        """Return a descent direction at ``xk``."""

    def increment(
        self,
        ev: Evaluator,
        xk: Array,
        dk: Array,
        state: DescentState,
        line_search: StepLength,
    ) -> float:
        """Return the step length along ``dk``; defaults to the line search."""
        return line_search(xk, dk, state.gk)


class IterativeMinimizer:
    """One minimization session: the current iterate and everything it needs.

    Created by ``solve(problem)`` of an algorithm; the problem is only read.
    """

    def __init__(
        self,
        problem: Problem,
        strategy: DirectionStrategy,
        epsilon: float = DEFAULT_EPSILON,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        line_search: LineSearch = fletcher_line_search,
        history: bool = False,
    ):
        self.problem = problem
        self.strategy = strategy
        self.epsilon = epsilon
        self.max_iterations = max_iterations
        self.evaluator = Evaluator(problem)
        self._line_search_fn = line_search
        self._requires_grad = _line_search_requires_grad(line_search)
        self._keep_history = history
        self._xmin: Optional[Array] = None
        self._dx: Optional[Array] = None
        self._state: Optional[DescentState] = None
        self.history: List[Array] = []
        self.nit = 0
        self.status = Status.IN_PROGRESS

    @property
    def state(self) -> Optional[DescentState]:
        return self._state

    @property
    def converged(self) -> bool:
        return self.status is Status.CONVERGED

    def _step_length(self, xk: Array, dk: Array, gk: Optional[Array] = None) -> float:
        ev = self.evaluator
        if self._requires_grad:
            alpha, _ = self._line_search_fn(ev.f, ev.g, xk, dk)
        else:
            if gk is None:
                gk = ev.g(xk)
            alpha, _ = self._line_search_fn(ev.f, xk, dk, gk)
        return float(alpha)

    def set_initials(self, *initials: Array) -> None:
        """Restart the session from ``initials[0]``."""
        if not initials:
            raise ValueError("at least one initial point is required")
        x0 = np.array(initials[0], dtype=float).reshape(-1)
        self._xmin = x0
        self._dx = None
        self._state = self.strategy.start(self.evaluator, x0)
        self.nit = 0
        self.status = Status.IN_PROGRESS
        self.history = [x0.copy()] if self._keep_history else []

    def step(self) -> Array:
        """Advance one iteration and return the new iterate.

        Once the session has converged the iterate no longer moves.
        """
        if self._xmin is None or self._state is None:
            raise RuntimeError("set_initials() must be called before step()")
        if self.status is Status.CONVERGED:
            return self._xmin.copy()

        xk = self._xmin
        state = self._state
        dk = np.asarray(self.strategy.direction(self.evaluator, xk, state), dtype=float)
        ak = float(self.strategy.increment(self.evaluator, xk, dk, state, self._step_length))
        state.dk = dk
        state.ak = ak

        dx = ak * dk
        xk1 = xk + dx
        if is_debug_enabled() and not np.all(np.isfinite(xk1)):
            raise FloatingPointError(
                f"non-finite iterate at iteration {self.nit + 1}: {xk1}"
            )
        self._dx = dx
        self._xmin = xk1
        self.nit += 1
        if self._keep_history:
            self.history.append(xk1.copy())

        step_norm = float(np.linalg.norm(dx))
        if check_convergence(step_norm, self.epsilon):
            self.status = Status.CONVERGED
        else:
            self.status = Status.IN_PROGRESS
        logger.debug(
            "%s iteration %d: ak=%.6e |dx|=%.6e",
            type(self.strategy).__name__,
            self.nit,
            ak,
            step_norm,
        )
        return xk1.copy()

    def search(self, *initials: Array) -> Array:
        """Iterate from ``initials[0]`` until convergence or ``max_iterations``.

        Exhausting the iteration budget is not an error; inspect ``status``
        (or ``result()``) to tell it apart from convergence.
        """
        self.set_initials(*initials)
        for _ in range(self.max_iterations):
            self.step()
            if self.converged:
                break
        else:
            self.status = Status.MAX_ITER
        logger.info(
            "%s stopped with status %s after %d iterations",
            type(self.strategy).__name__,
            self.status.value,
            self.nit,
        )
        return self.minimizer()

    def minimum(self) -> float:
        """Objective value at the current minimizer (re-evaluated on each call)."""
        return self.evaluator.f(self.minimizer())

    def minimizer(self) -> Array:
        if self._xmin is None:
            raise RuntimeError("set_initials() must be called first")
        return self._xmin.copy()

    def result(self) -> OptimizeResult:
        """Summarize the session; evaluates ``f`` and ``g`` once more."""
        x = self.minimizer()
        messages = {
            Status.CONVERGED: "Step size tolerance satisfied.",
            Status.MAX_ITER: "Maximum iterations reached.",
            Status.IN_PROGRESS: "Search in progress.",
        }
        fun = self.minimum()
        grad_norm = float(np.linalg.norm(self.evaluator.g(x)))
        return OptimizeResult(
            x=x,
            fun=fun,
            nit=self.nit,
            status=self.status,
            message=messages[self.status],
            grad_norm=grad_norm,
            nfev=self.evaluator.nfev,
            njev=self.evaluator.njev,
            nhev=self.evaluator.nhev,
            history=[h.copy() for h in self.history],
        )


class SteepestDescent(ABC):
    """Base of the multivariate minimizers.

    Args:
        epsilon: Stop once the increment norm ``|ak * dk|`` is at most this.
        max_iterations: Maximum number of iterations of ``search``.
        line_search: Line-search routine supplying step lengths.
        history: Record every iterate of each session.
    """

    def __init__(
        self,
        epsilon: float = DEFAULT_EPSILON,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        line_search: LineSearch = fletcher_line_search,
        history: bool = False,
    ):
        if epsilon < 0:
            raise ValueError(f"epsilon must be >= 0, got {epsilon}")
        if max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")
        self.epsilon = float(epsilon)
        self.max_iterations = int(max_iterations)
        self.line_search = line_search
        self.history = history

    @abstractmethod
    def strategy(self) -> DirectionStrategy:
        """Create the direction strategy for a new session."""

    def solve(self, problem: Problem) -> IterativeMinimizer:
        """Return a fresh minimizer session over ``problem``."""
        return IterativeMinimizer(
            problem,
            self.strategy(),
            epsilon=self.epsilon,
            max_iterations=self.max_iterations,
            line_search=self.line_search,
            history=self.history,
        )


class GradientDirection(DirectionStrategy):
    """Plain negative-gradient direction."""

    def direction(self, ev: Evaluator, xk: Array, state: DescentState) -> Array:
        state.gk = ev.g(xk)
        return -state.gk


__all__ = [
    "DescentState",
    "DirectionStrategy",
    "GradientDirection",
    "IterativeMinimizer",
    "LineSearch",
    "SteepestDescent",
    "StepLength",
]
