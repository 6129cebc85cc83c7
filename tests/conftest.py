"""Shared fixtures: pinned clocks and deterministic id generators."""

from datetime import datetime, timedelta, timezone

import pytest

from eventhub.config import get_settings
from eventhub.core.domain.providers import fixed_clock, sequential_ids

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
T1 = T0 + timedelta(hours=1)


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def t1() -> datetime:
    return T1


@pytest.fixture
def clock():
    """Clock pinned at creation time."""
    return fixed_clock(T0)


@pytest.fixture
def later():
    """Clock one hour after ``clock``."""
    return fixed_clock(T1)


@pytest.fixture
def ids():
    return sequential_ids("abcdef0123")


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Isolate tests from EVENTHUB_* variables of the host environment."""
    for name in ("EVENTHUB_LOG_LEVEL", "EVENTHUB_LOG_JSON",
                 "EVENTHUB_TICKET_QR_PREFIX", "EVENTHUB_INVITATION_CODE_LENGTH"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
