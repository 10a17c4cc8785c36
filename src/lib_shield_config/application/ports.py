"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts the composition root depends on so the
resolution pipeline can run against the real shared preference store or an
in-memory double in tests.

Contents
--------
* :class:`KeyValueStore` – shared persisted store with get/set/synchronize.
* :class:`TokenHasher` – deterministic one-way hash of opaque tokens.
* :class:`SelectionIndex` – finds the selection ids an entity belongs to.
* :class:`NativeConfigLookup` – platform-specific base shield field lookup.

System Role
-----------
These protocols enforce Dependency Inversion. Each adapter under
:mod:`lib_shield_config.adapters` implements one protocol.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Persisted key-value store shared across short-lived invocations.

    Why
    ----
    Counters and configuration must survive between extension processes; the
    store is the only shared mutable resource.
    """

    def get(self, key: str) -> Any:
        """Return the value stored under *key* or ``None``."""

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*."""

    def synchronize(self) -> None:
        """Refresh in-process state from the shared backing medium."""


@runtime_checkable
class TokenHasher(Protocol):
    """Stable hash of an opaque platform token, rendered as lowercase hex."""

    def hash(self, token: Any) -> str:
        """Return the hex digest for *token*; equal tokens yield equal digests."""


@runtime_checkable
class SelectionIndex(Protocol):
    """Locate the user selections that contain an entity."""

    def selection_ids(
        self,
        *,
        application_token: Any = None,
        web_domain_token: Any = None,
        category_token: Any = None,
    ) -> list[str]:
        """Return matching selection ids, most specific first."""


@runtime_checkable
class NativeConfigLookup(Protocol):
    """Resolve the native shield field configuration for an entity."""

    def lookup(self, selection_ids: list[str]) -> Mapping[str, Any] | None:
        """Return the base shield configuration for the first matching selection or the fallback."""
