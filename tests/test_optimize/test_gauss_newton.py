import numpy as np
import pytest

from descentkit.optimize import GaussNewton, LeastSquaresProblem, least_squares_problem

SQRT12 = np.sqrt(12.0)
SQRT3 = np.sqrt(3.0)
SQRT55 = np.sqrt(55.0)


def residuals(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            (x[0] - 4 * x[1]) ** 2,
            SQRT12 * (x[2] - x[3]) ** 2,
            SQRT3 * (x[1] - 10 * x[2]),
            SQRT55 * (x[0] - 2 * x[3]),
        ]
    )


def jacobian(x: np.ndarray) -> np.ndarray:
    u = x[0] - 4 * x[1]
    v = x[2] - x[3]
    return np.array(
        [
            [2 * u, -8 * u, 0.0, 0.0],
            [0.0, 0.0, 2 * SQRT12 * v, -2 * SQRT12 * v],
            [0.0, SQRT3, -10 * SQRT3, 0.0],
            [SQRT55, 0.0, 0.0, -2 * SQRT55],
        ]
    )


def unit_step(f, x, p, grad_fx):
    return 1.0, 0


def test_gauss_newton_with_analytic_jacobian():
    session = GaussNewton(1e-6, 30).solve(residuals, jacobian)
    xmin = session.search(np.array([1.0, -1.0, -1.0, 1.0]))
    r = residuals(xmin)
    assert r @ r < 1e-10


def test_gauss_newton_with_finite_difference_jacobian():
    session = GaussNewton(1e-6, 30).solve(residuals)
    xmin = session.search(np.array([1.0, -1.0, -1.0, 1.0]))
    r = residuals(xmin)
    assert r @ r < 1e-8


def test_linear_least_squares_in_one_step():
    A = np.array([[1.0, 0.0], [1.0, 1.0], [1.0, 2.0], [1.0, 3.0]])
    b = np.array([1.0, 2.0, 2.0, 4.0])

    session = GaussNewton(1e-10, 5, line_search=unit_step).solve(
        lambda x: A @ x - b, lambda x: A
    )
    session.set_initials(np.zeros(2))
    x1 = session.step()
    expected, *_ = np.linalg.lstsq(A, b, rcond=None)
    assert np.allclose(x1, expected, atol=1e-10)


def test_least_squares_problem_objective_and_gradient():
    problem = least_squares_problem(residuals, jacobian)
    x = np.array([0.5, -0.2, 0.1, 0.3])
    r = residuals(x)
    assert problem.fun(x) == pytest.approx(float(r @ r))
    assert np.allclose(problem.grad(x), 2 * jacobian(x).T @ r)


def test_gauss_newton_validates_parameters():
    with pytest.raises(ValueError):
        GaussNewton(-1.0, 10)
    with pytest.raises(ValueError):
        GaussNewton(1e-6, -1)


LINE_A = np.array([[1.0, 0.0], [1.0, 1.0], [1.0, 2.0]])
LINE_B = np.array([1.0, 2.0, 2.0])


def test_step_counts_residual_and_jacobian_calls():
    session = GaussNewton(1e-10, 5, line_search=unit_step).solve(
        lambda x: LINE_A @ x - LINE_B, lambda x: LINE_A
    )
    session.set_initials(np.zeros(2))
    session.step()
    assert session.evaluator.nfev == 1
    assert session.evaluator.njev == 1


def test_finite_difference_jacobian_counts_residual_calls():
    session = GaussNewton(1e-10, 5, line_search=unit_step).solve(lambda x: LINE_A @ x - LINE_B)
    session.set_initials(np.zeros(2))
    session.step()
    # one residual vector plus two per coordinate for the central differences
    assert session.evaluator.nfev == 1 + 2 * 2
    assert session.evaluator.njev == 0


def test_least_squares_problem_without_jacobian():
    problem = least_squares_problem(residuals)
    assert isinstance(problem, LeastSquaresProblem)
    assert problem.jacobian is None
    x = np.array([0.5, -0.2, 0.1, 0.3])
    assert np.allclose(problem.grad(x), 2 * jacobian(x).T @ residuals(x), atol=1e-6)
