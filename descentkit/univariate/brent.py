"""Brent's method: parabolic interpolation with a golden-section safeguard."""

from __future__ import annotations

from dataclasses import dataclass

from .core import (
    GOLDEN_SECTION,
    MACHINE_EPSILON,
    BracketSearch,
    BracketState,
    UnivariateFunction,
)


@dataclass
class BrentState(BracketState):
    """Bracket state plus the second and third least points ``w`` and ``v``."""

    w: float = 0.0
    v: float = 0.0
    fw: float = 0.0
    fv: float = 0.0
    inc_last: float = 0.0


class Brent(BracketSearch):
    """Brent's bracket search (Numerical Recipes, section 10.3).

    A parabola is fitted through ``xmin``, ``w`` and ``v``. Its vertex is used
    when it lies inside the bracket and moves less than half the previous
    step; otherwise the larger sub-interval is cut at the golden section.
    """

    def _tol1(self, state: BracketState) -> float:
        # machine epsilon keeps the tolerance positive when xmin is exactly 0
        return self.epsilon * abs(state.xmin) + MACHINE_EPSILON

    def _initial_state(
        self, f: UnivariateFunction, lower: float, initial: float, fx: float, upper: float
    ) -> BrentState:
        return BrentState(
            xl=lower, xu=upper, xmin=initial, fmin=fx, w=initial, v=initial, fw=fx, fv=fx
        )

    def _is_min_found(self, state: BracketState) -> bool:
        tol2 = 2.0 * self._tol1(state)
        mid = state.midpoint
        return 0.5 * (state.xu - state.xl) + abs(state.xmin - mid) <= tol2

    def _next_point(self, state: BrentState) -> float:
        tol1 = self._tol1(state)
        x, fx = state.xmin, state.fmin
        xmid = state.midpoint

        bound = state.xu if x < xmid else state.xl
        inc = GOLDEN_SECTION * (bound - x)

        if abs(state.inc_last) > tol1:
            r = (x - state.w) * (fx - state.fv)
            q = (x - state.v) * (fx - state.fw)
            p = (x - state.v) * q - (x - state.w) * r
            q = 2.0 * (q - r)
            if q > 0:
                p = -p
            else:
                q = -q

            # accept the parabolic step only if it is inside the bracket and
            # shorter than half the previous one; q == 0 fails the first test
            if (
                abs(p) < abs(0.5 * q * state.inc_last)
                and p > q * (state.xl - x)
                and p < q * (state.xu - x)
            ):
                inc = p / q
                u = x + inc
                if u - state.xl < 2.0 * tol1 or state.xu - u < 2.0 * tol1:
                    inc = tol1 if x < xmid else -tol1

        # never probe closer than tol1 to xmin
        if abs(inc) < tol1:
            inc = tol1 if inc >= 0 else -tol1
        state.inc_last = inc
        return x + inc

    def _update(self, state: BrentState, xnext: float, fnext: float) -> None:
        if fnext < state.fmin:
            state.v, state.fv = state.w, state.fw
            state.w, state.fw = state.xmin, state.fmin
        elif fnext <= state.fw or state.w == state.xmin:
            state.v, state.fv = state.w, state.fw
            state.w, state.fw = xnext, fnext
        elif fnext <= state.fv or state.v == state.xmin or state.v == state.w:
            state.v, state.fv = xnext, fnext
        super()._update(state, xnext, fnext)

    def _result(self, state: BracketState) -> float:
        return state.xmin


__all__ = ["Brent", "BrentState"]
