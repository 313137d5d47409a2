"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from descentkit.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from descentkit.optimize import BFGS, NewtonRaphson, Problem


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name.startswith("descentkit.")


def test_get_logger_keeps_package_names():
    logger = get_logger("descentkit.optimize.newton")
    assert logger.name == "descentkit.optimize.newton"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG

        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging():
    """Test configure_logging function."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        logger = get_logger("test_module")
        logger.debug("Debug message")
        assert "Debug message" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False


def test_search_reports_iterations_and_status():
    problem = Problem(fun=lambda x: float(x @ x), grad=lambda x: 2 * x, dim=2)
    session = BFGS(1e-8, 50).solve(problem)
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        session.search(np.array([1.0, -1.0]))
    finally:
        configure_logging(level=logging.WARNING)
    output = stream.getvalue()
    assert "QuasiNewtonStrategy iteration 1" in output
    assert "[INFO] descentkit.optimize.steepest_descent" in output
    assert "converged" in output


def test_newton_fallback_is_logged_as_warning():
    problem = Problem(
        fun=lambda x: float(x @ x),
        grad=lambda x: 2 * x,
        hess=lambda x: np.zeros((2, 2)),
        dim=2,
    )
    session = NewtonRaphson(1e-8, 1).solve(problem)
    stream = StringIO()
    try:
        configure_logging(level=logging.WARNING, stream=stream)
        session.search(np.array([1.0, -1.0]))
    finally:
        configure_logging(level=logging.WARNING)
    assert "[WARNING] descentkit.optimize.newton" in stream.getvalue()
