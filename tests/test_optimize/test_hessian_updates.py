import numpy as np
import pytest

from descentkit.optimize import (
    BFGS,
    DFP,
    DegenerateCurvatureError,
    RankOne,
    bfgs_update,
    bfgs_update_dual,
    damped_bfgs_update,
    dfp_update,
    huang_update,
    is_pos_def,
    rank_one_update,
)


def random_spd(rng: np.random.Generator, n: int) -> np.ndarray:
    m = rng.standard_normal((n, n))
    return m @ m.T + n * np.eye(n)


def curvature_pair(rng: np.random.Generator, n: int):
    """Return (gamma, delta) with gamma = A delta for an SPD A, so gamma'delta > 0."""
    delta = rng.standard_normal(n)
    gamma = random_spd(rng, n) @ delta
    return gamma, delta


def test_dfp_is_huang_one_zero_zero_one(rng):
    S = random_spd(rng, 4)
    gamma, delta = curvature_pair(rng, 4)
    expected = huang_update(S, gamma, delta, 1.0, 0.0, 0.0, 1.0)
    assert np.allclose(DFP().update(S, gamma, delta), expected, rtol=1e-10, atol=1e-12)


def test_rank_one_is_huang_one_minus_one(rng):
    S = random_spd(rng, 4)
    gamma, delta = curvature_pair(rng, 4)
    expected = huang_update(S, gamma, delta, 1.0, -1.0, 1.0, -1.0)
    assert np.allclose(RankOne().update(S, gamma, delta), expected, rtol=1e-10, atol=1e-12)


@pytest.mark.parametrize("update", [bfgs_update, dfp_update, rank_one_update])
def test_updates_satisfy_secant_condition(rng, update):
    S = random_spd(rng, 3)
    gamma, delta = curvature_pair(rng, 3)
    S1 = update(S, gamma, delta)
    assert np.allclose(S1 @ gamma, delta)


def test_huang_update_satisfies_secant_condition_for_any_parameters(rng):
    S = random_spd(rng, 3)
    gamma, delta = curvature_pair(rng, 3)
    S1 = huang_update(S, gamma, delta, 2.0, 0.5, 1.0, 3.0)
    assert np.allclose(S1 @ gamma, delta)


def test_bfgs_update_keeps_positive_definiteness(rng):
    S = random_spd(rng, 5)
    gamma, delta = curvature_pair(rng, 5)
    S1 = bfgs_update(S, gamma, delta)
    assert np.allclose(S1, S1.T)
    assert is_pos_def(S1)


def test_bfgs_dual_form_matches_closed_form(rng):
    S = random_spd(rng, 4)
    gamma, delta = curvature_pair(rng, 4)
    assert np.allclose(bfgs_update_dual(S, gamma, delta), bfgs_update(S, gamma, delta), rtol=1e-8)


def test_fletcher_switch_update_satisfies_secant_condition(rng):
    S = random_spd(rng, 3)
    gamma, delta = curvature_pair(rng, 3)
    S1 = BFGS(fletcher_switch=True).update(S, gamma, delta)
    assert np.allclose(S1 @ gamma, delta)


@pytest.mark.parametrize("update", [bfgs_update, dfp_update, rank_one_update])
def test_zero_gradient_change_is_degenerate(update):
    S = np.eye(2)
    with pytest.raises(DegenerateCurvatureError):
        update(S, np.zeros(2), np.array([1.0, 0.0]))


def test_orthogonal_pair_is_degenerate():
    S = np.eye(2)
    gamma = np.array([0.0, 1.0])
    delta = np.array([1.0, 0.0])
    with pytest.raises(DegenerateCurvatureError):
        bfgs_update(S, gamma, delta)
    with pytest.raises(DegenerateCurvatureError):
        huang_update(S, gamma, delta, 1.0, 0.0, 0.0, 1.0)


def test_non_finite_curvature_is_degenerate():
    S = np.eye(2)
    with pytest.raises(DegenerateCurvatureError):
        dfp_update(S, np.array([np.nan, 1.0]), np.array([1.0, 1.0]))


def test_degenerate_curvature_is_an_arithmetic_error():
    assert issubclass(DegenerateCurvatureError, ArithmeticError)


def test_damped_bfgs_keeps_hessian_positive_definite():
    H = np.eye(2)
    delta = np.array([1.0, 0.0])
    gamma = np.array([-1.0, 0.0])
    H1 = damped_bfgs_update(H, gamma, delta)
    assert np.allclose(H1, np.diag([0.2, 1.0]))
    assert is_pos_def(H1)


def test_damped_bfgs_without_damping_is_plain_bfgs(rng):
    H = random_spd(rng, 3)
    gamma, delta = curvature_pair(rng, 3)
    gamma = gamma + H @ delta
    assert delta @ gamma >= 0.2 * delta @ H @ delta
    H1 = damped_bfgs_update(H, gamma, delta)
    assert np.allclose(H1 @ delta, gamma)
    assert np.allclose(H1, dfp_update(H, delta, gamma))
    assert np.allclose(np.linalg.inv(H1), bfgs_update(np.linalg.inv(H), gamma, delta), rtol=1e-8)
