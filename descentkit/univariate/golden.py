"""Golden-section search."""

from __future__ import annotations

from .core import GOLDEN_SECTION, BracketSearch, BracketState


class Golden(BracketSearch):
    """Golden-section bracket search.

    Each iteration cuts the larger of the two sub-intervals around ``xmin`` at
    the golden section (0.381966...). The search stops once the interval is
    shorter than ``epsilon`` and returns the tracked minimizer.

    Example
    -------
    >>> solution = Golden(1e-8, 100).solve(lambda x: (x - 2.0) ** 2)
    >>> round(solution.search(0.0, 1.0, 5.0), 6)
    2.0
    """

    def _is_min_found(self, state: BracketState) -> bool:
        return state.xu - state.xl < self.epsilon

    def _next_point(self, state: BracketState) -> float:
        if state.xu - state.xmin > state.xmin - state.xl:
            return state.xmin + GOLDEN_SECTION * (state.xu - state.xmin)
        return state.xmin - GOLDEN_SECTION * (state.xmin - state.xl)

    def _result(self, state: BracketState) -> float:
        return state.xmin


__all__ = ["Golden"]
