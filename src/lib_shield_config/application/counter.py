"""Debounced, day-scoped open counter.

Purpose
-------
Count how often the shield of an entity has been presented today. The host may
invoke the extension several times for one presentation, so bumps within the
debounce window return the stored count unchanged.

Storage layout
--------------
``shield.opens.<yyyy-MM-dd>.<entity key>`` holds the integer count for the UTC
day; ``shield.opens.lastSeen.<entity key>`` holds the epoch seconds of the last
counted bump. A new UTC day reads a fresh key, which resets the count to zero.

Known limitations
-----------------
The read-modify-write in :meth:`OpenCounter.bump` is not atomic across
processes: concurrent invocations can lose increments. Debouncing uses wall
clock time, so clock adjustments can double-count or hold a count.
"""

from __future__ import annotations

import math
import time
from typing import Callable

from ..domain.keys import count_key, last_seen_key, utc_day
from ..domain.settings import DEFAULT_DEBOUNCE_SECONDS
from ..observability import log_debug, make_event
from .ports import KeyValueStore


class OpenCounter:
    """Per-entity open counter backed by a :class:`KeyValueStore`."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._debounce = debounce_seconds
        self._clock = clock

    def bump(self, entity_key: str, now: float | None = None) -> int:
        """Count one presentation for *entity_key* and return the day's count.

        Examples
        --------
        >>> from lib_shield_config.adapters.stores.memory import InMemoryStore
        >>> counter = OpenCounter(InMemoryStore())
        >>> counter.bump("app:demo", now=100.0), counter.bump("app:demo", now=101.0)
        (1, 1)
        >>> counter.bump("app:demo", now=102.0)
        2
        """

        now = self._clock() if now is None else now
        day_key = count_key(entity_key, utc_day(now))
        last_seen = _as_float(self._store.get(last_seen_key(entity_key)))
        stored = _as_count(self._store.get(day_key))

        if now - last_seen < self._debounce:
            log_debug("open_count_debounced", **make_event(entity_key, None, {"count": stored}))
            return stored

        next_count = stored + 1
        self._store.set(day_key, next_count)
        self._store.set(last_seen_key(entity_key), now)
        log_debug("open_count_bumped", **make_event(entity_key, None, {"count": next_count}))
        return next_count

    def current(self, entity_key: str, now: float | None = None) -> int:
        """Return today's count for *entity_key* without touching the store."""

        now = self._clock() if now is None else now
        return _as_count(self._store.get(count_key(entity_key, utc_day(now))))


def _as_count(value: object) -> int:
    """Read a stored count; missing, mistyped, or non-finite values count as zero."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(int(value), 0)


def _as_float(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0
