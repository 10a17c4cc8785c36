"""Stable entity keys and the storage keys derived from them.

Purpose
-------
Derive deterministic string keys for applications and web domains. The same
key is used for the open counter and as the ``{token}`` placeholder of an
application, so it must be identical across process restarts.

Contents
--------
* :func:`app_key` / :func:`domain_key` – entity keys.
* :func:`utc_day` – ISO-8601 calendar day used to scope counters.
* :func:`count_key` / :func:`last_seen_key` – store keys for the open counter.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Final, Protocol

APP_PREFIX: Final[str] = "app:"
DOMAIN_PREFIX: Final[str] = "domain:"
UNKNOWN: Final[str] = "unknown"

CONFIG_KEY: Final[str] = "shield.config.v1"
OPENS_PREFIX: Final[str] = "shield.opens"


class _Hasher(Protocol):
    def hash(self, token: Any) -> str: ...


def app_key(bundle_id: str | None, token: Any, hasher: _Hasher) -> str:
    """Return ``app:<bundle id>``, ``app:<token hash>``, or ``app:unknown``.

    Examples
    --------
    >>> from lib_shield_config.adapters.hashing import Sha256TokenHasher
    >>> app_key("com.example", None, Sha256TokenHasher())
    'app:com.example'
    >>> app_key("", None, Sha256TokenHasher())
    'app:unknown'
    """

    if bundle_id:
        return APP_PREFIX + bundle_id
    if token is not None:
        return APP_PREFIX + hasher.hash(token)
    return APP_PREFIX + UNKNOWN


def domain_key(domain: str | None, token: Any, hasher: _Hasher) -> str:
    """Return ``domain:<lowercase domain>``, ``domain:<token hash>``, or ``domain:unknown``.

    Examples
    --------
    >>> from lib_shield_config.adapters.hashing import Sha256TokenHasher
    >>> domain_key("News.Example.COM", None, Sha256TokenHasher())
    'domain:news.example.com'
    """

    if domain:
        return DOMAIN_PREFIX + domain.lower()
    if token is not None:
        return DOMAIN_PREFIX + hasher.hash(token)
    return DOMAIN_PREFIX + UNKNOWN


def utc_day(epoch_seconds: float) -> str:
    """Format *epoch_seconds* as the UTC calendar day ``yyyy-MM-dd``.

    >>> utc_day(0)
    '1970-01-01'
    """

    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).strftime("%Y-%m-%d")


def count_key(entity_key: str, day: str) -> str:
    """Day-scoped counter key; a new day yields a fresh key and thus a reset."""

    return f"{OPENS_PREFIX}.{day}.{entity_key}"


def last_seen_key(entity_key: str) -> str:
    return f"{OPENS_PREFIX}.lastSeen.{entity_key}"
