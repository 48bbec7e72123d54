"""
Pytest fixtures for ThreatLens tests. Clears THREATLENS_* env so each test
starts from defaults, and provides a recording sleep for fallback delays.
"""

from __future__ import annotations

import os
import random

import pytest

from threatlens.config import Settings


class RecordingSleep:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FixedRandom(random.Random):
    """Random whose random() always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Unset THREATLENS_* and API bind vars so settings come from defaults."""
    for name in list(os.environ):
        if name.startswith("THREATLENS_") or name in ("API_HOST", "API_PORT"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def settings():
    """Settings pointing at an unreachable test host, seeded for reproducibility."""
    return Settings(api_base_url="http://remote.test", random_seed=7)


@pytest.fixture
def client():
    """FastAPI TestClient over the ThreatLens API server."""
    from fastapi.testclient import TestClient

    from threatlens.api_server.server import app

    return TestClient(app)


@pytest.fixture
def fixed_random():
    """Factory: fixed_random(0.9) -> Random whose random() is always 0.9."""
    return FixedRandom
