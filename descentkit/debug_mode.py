"""Debug mode management for descentkit.

When debug mode is on, minimizers re-check their invariants after every step:
bracket searches verify ``xl < xmin < xu`` and multivariate minimizers verify
that the new iterate is finite. The checks cost a few comparisons per step and
are off by default.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "DESCENTKIT_DEBUG"
_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in (
    "1",
    "true",
    "yes",
    "on",
)


def is_debug_enabled() -> bool:
    """
    Return whether descentkit debug mode is currently enabled.

    Debug mode can be toggled via set_debug_enabled(...) or the
    DESCENTKIT_DEBUG environment variable.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable descentkit debug mode."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Context manager to temporarily enable or disable debug mode.

    Parameters
    ----------
    enabled:
        Whether to enable debug mode within the context.

    Example
    -------
    >>> with debug_context(True):
    ...     # invariant checks run inside this block
    ...     pass
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev


__all__ = ["debug_context", "is_debug_enabled", "set_debug_enabled"]
