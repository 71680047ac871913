"""
Shared test fixtures.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    """Replaces secretstore.lease._now; advance() moves time forward."""

    def __init__(self):
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock(monkeypatch):
    """Frozen clock for lease arithmetic."""
    fake = FakeClock()
    monkeypatch.setattr("secretstore.lease._now", fake)
    return fake


@pytest.fixture
def clean_env(monkeypatch):
    """Remove env vars that change configuration."""
    for key in [
        "SECRETSTORE_CONFIG",
        "SECRETSTORE_PATH_PARSER",
        "VAULT_ADDR",
        "VAULT_CACERT",
        "VAULT_TOKEN_PATH",
        "OP_SERVICE_ACCOUNT_TOKEN",
    ]:
        monkeypatch.delenv(key, raising=False)
