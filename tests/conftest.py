"""Pytest configuration and fixtures.

Provides environment isolation so settings activated during one test never
leak into another. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

import os

import pytest

from librustic import config

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from reading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(config, "find_dotenv", lambda *_args, **_kwargs: "")


@pytest.fixture(autouse=True)
def isolate_librustic_env(monkeypatch):
    """Clear LIBRUSTIC_* variables and restore default settings around each test."""
    for key in list(os.environ.keys()):
        if key.startswith(config.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config, "_active", config.Settings())


# =============================================================================
# Helpers (opt-in)
# =============================================================================


@pytest.fixture
def librustic_env(monkeypatch):
    """Set LIBRUSTIC_* variables without activating them.

    Usage: ``librustic_env(TRACE="1")``; follow with ``configure()`` to apply.
    """

    def _apply(**values: str) -> None:
        for name, value in values.items():
            monkeypatch.setenv(f"{config.ENV_PREFIX}{name}", value)

    return _apply


@pytest.fixture
def spy():
    """Return a transform that records every call and echoes its input."""

    class _Spy:
        def __init__(self) -> None:
            self.calls: list[object] = []

        def __call__(self, value: object) -> object:
            self.calls.append(value)
            return value

    return _Spy()
