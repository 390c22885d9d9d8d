"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest

from lifeline.config import runtime


@pytest.fixture(autouse=True)
def isolated_lifeline_environment(monkeypatch):
    """Keep host env vars and .env files out of every test."""
    for name in list(os.environ):
        if name.startswith("LIFELINE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(runtime, "_DOTENV_CANDIDATES", ())
    monkeypatch.setattr(runtime, "_DEFAULT_VALUES", None)
    yield
