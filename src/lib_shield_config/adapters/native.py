"""Native shield field lookup.

The host app stores the base shield configuration (colors, labels, button
texts, icon fields) per selection under
``shieldConfigurationForSelection_<selection id>`` and a catch-all under
``shieldConfiguration``. The first candidate selection with a stored mapping
wins; otherwise the fallback is used.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from ..application.ports import KeyValueStore
from ..observability import log_debug

SELECTION_PREFIX: Final[str] = "shieldConfigurationForSelection"
FALLBACK_KEY: Final[str] = "shieldConfiguration"


class StoreNativeConfigLookup:
    """Resolve the native shield configuration from the shared store."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key_prefix: str = SELECTION_PREFIX,
        fallback_key: str = FALLBACK_KEY,
    ) -> None:
        self._store = store
        self._prefix = key_prefix
        self._fallback = fallback_key

    def lookup(self, selection_ids: list[str]) -> Mapping[str, Any] | None:
        """Return the first stored selection config, else the fallback, else ``None``.

        Examples
        --------
        >>> from lib_shield_config.adapters.stores.memory import InMemoryStore
        >>> store = InMemoryStore({
        ...     "shieldConfigurationForSelection_S": {"title": "S"},
        ...     "shieldConfiguration": {"title": "fallback"},
        ... })
        >>> StoreNativeConfigLookup(store).lookup(["T", "S"])
        {'title': 'S'}
        >>> StoreNativeConfigLookup(store).lookup([])
        {'title': 'fallback'}
        """

        for selection_id in selection_ids:
            key = f"{self._prefix}_{selection_id}"
            value = self._store.get(key)
            if isinstance(value, Mapping):
                log_debug("native_config_selected", key=key)
                return value
        value = self._store.get(self._fallback)
        if isinstance(value, Mapping):
            log_debug("native_config_selected", key=self._fallback)
            return value
        return None
