"""Shared pytest fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Replace retry backoff sleeps and record their durations."""
    sleeps: list[float] = []
    monkeypatch.setattr("backendtool.sync.retry.time.sleep", sleeps.append)
    return sleeps
