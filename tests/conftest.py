"""Pytest configuration and shared fixtures for descentkit tests.

This module provides:
- A deterministic RNG fixture seeded from ``TEST_RNG_SEED``
"""

import os

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed numpy's global RNG for code that uses np.random directly."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture(autouse=True)
def reset_debug_mode():
    """Leave debug mode off between tests regardless of the environment."""
    from descentkit.debug_mode import is_debug_enabled, set_debug_enabled

    previous = is_debug_enabled()
    set_debug_enabled(False)
    yield
    set_debug_enabled(previous)
