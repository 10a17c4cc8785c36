"""Shared fixtures: an in-memory store, a controllable clock, and the default hasher."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lib_shield_config.adapters.hashing import Sha256TokenHasher
from lib_shield_config.adapters.stores.memory import InMemoryStore

START = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc).timestamp()


class FrozenClock:
    """Clock returning a fixed epoch that tests advance explicitly."""

    def __init__(self, now: float = START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def hasher() -> Sha256TokenHasher:
    return Sha256TokenHasher()

