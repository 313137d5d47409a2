"""First-order (steepest) descent along the negative gradient."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..logging import get_logger
from .core import DEFAULT_EPSILON, DEFAULT_MAX_ITERATIONS, Array, Evaluator
from .line_search import fletcher_line_search
from .steepest_descent import (
    DescentState,
    DirectionStrategy,
    LineSearch,
    SteepestDescent,
    StepLength,
)

logger = get_logger(__name__)


class Method(Enum):
    """How :class:`FirstOrder` picks its step length."""

    IN_EXACT_LINE_SEARCH = "inexact_line_search"
    ANALYTIC = "analytic"


@dataclass
class FirstOrderState(DescentState):
    analytic_step: float = 1.0


class FirstOrderDirection(DirectionStrategy):
    def __init__(self, method: Method):
        self.method = method

    def start(self, ev: Evaluator, x0: Array) -> FirstOrderState:
        return FirstOrderState()

    def direction(self, ev: Evaluator, xk: Array, state: FirstOrderState) -> Array:
        state.gk = ev.g(xk)
        return -state.gk

    def increment(
        self,
        ev: Evaluator,
        xk: Array,
        dk: Array,
        state: FirstOrderState,
        line_search: StepLength,
    ) -> float:
        if self.method is Method.ANALYTIC:
            step = self._analytic_step(ev, xk, state)
            if step is not None:
                return step
            logger.debug("Analytic step unusable at %s; using the line search", xk)
        return line_search(xk, dk, state.gk)

    @staticmethod
    def _analytic_step(ev: Evaluator, xk: Array, state: FirstOrderState) -> float | None:
        # minimizer of the quadratic through f(xk), its slope and f(xk - a g)
        g = state.gk
        gg = float(g @ g)
        if gg == 0.0:
            return state.analytic_step
        a = state.analytic_step
        denom = 2.0 * (ev.f(xk - a * g) - ev.f(xk) + a * gg)
        if not np.isfinite(denom) or denom <= 0.0:
            return None
        step = gg * a * a / denom
        if not np.isfinite(step):
            return None
        state.analytic_step = step
        return step


class FirstOrder(SteepestDescent):
    """Steepest descent with the line search or the analytic step length."""

    def __init__(
        self,
        epsilon: float = DEFAULT_EPSILON,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        method: Method = Method.IN_EXACT_LINE_SEARCH,
        line_search: LineSearch = fletcher_line_search,
        history: bool = False,
    ):
        super().__init__(epsilon, max_iterations, line_search, history)
        self.method = method

    def strategy(self) -> FirstOrderDirection:
        return FirstOrderDirection(self.method)


__all__ = ["FirstOrder", "FirstOrderDirection", "FirstOrderState", "Method"]
