"""
Injectable sources of time, identity and randomness.

Aggregates never read the wall clock, ``uuid4`` or the global ``random``
module directly. Every factory and transition accepts an optional provider
and falls back to the defaults below, so tests can pin all three.
"""

import random
import string
import uuid
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]
IdGenerator = Callable[[], str]

BASE36_ALPHABET: str = string.digits + string.ascii_uppercase


def utc_now() -> datetime:
    """Default clock: timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def uuid4_str() -> str:
    """Default id generator: random UUID4 as a string."""
    return str(uuid.uuid4())


def fixed_clock(moment: datetime) -> Clock:
    """Clock that always returns ``moment``."""

    def _clock() -> datetime:
        return moment

    return _clock


def sequential_ids(prefix: str = "id") -> IdGenerator:
    """Deterministic id generator: ``<prefix>-0001``, ``<prefix>-0002``, ..."""
    counter = 0

    def _next() -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}-{counter:04d}"

    return _next


def random_base36(length: int, rng: random.Random | None = None) -> str:
    """
    Uppercase base-36 string of ``length`` characters.

    Args:
        length: Number of characters (must be positive)
        rng: Random source (defaults to a fresh ``random.Random``)

    Returns:
        String over ``0-9A-Z``
    """
    if length <= 0:
        raise ValueError(f"length must be positive, got {length}")
    source = rng or random.Random()
    return "".join(source.choice(BASE36_ALPHABET) for _ in range(length))
