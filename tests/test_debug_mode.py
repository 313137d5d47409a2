"""Tests for debug mode functionality."""

import importlib

import pytest

from descentkit import debug_mode
from descentkit.debug_mode import debug_context, is_debug_enabled, set_debug_enabled


def test_debug_mode_toggle_and_context() -> None:
    """Test debug mode toggling and context manager."""
    set_debug_enabled(False)
    assert not is_debug_enabled()

    with debug_context(True):
        assert is_debug_enabled()

    assert not is_debug_enabled()

    set_debug_enabled(True)
    assert is_debug_enabled()

    with debug_context(False):
        assert not is_debug_enabled()

    assert is_debug_enabled()


def test_debug_context_nested() -> None:
    """Test nested debug contexts."""
    set_debug_enabled(False)
    with debug_context(True):
        assert is_debug_enabled()
        with debug_context(False):
            assert not is_debug_enabled()
        assert is_debug_enabled()
    assert not is_debug_enabled()


def test_debug_context_restores_on_error() -> None:
    set_debug_enabled(False)
    with pytest.raises(RuntimeError):
        with debug_context(True):
            raise RuntimeError("boom")
    assert not is_debug_enabled()


@pytest.mark.parametrize("value, expected", [("1", True), ("on", True), ("0", False), ("", False)])
def test_environment_variable_sets_default(monkeypatch: pytest.MonkeyPatch, value, expected) -> None:
    monkeypatch.setenv("DESCENTKIT_DEBUG", value)
    try:
        module = importlib.reload(debug_mode)
        assert module.is_debug_enabled() is expected
    finally:
        monkeypatch.delenv("DESCENTKIT_DEBUG")
        importlib.reload(debug_mode)
