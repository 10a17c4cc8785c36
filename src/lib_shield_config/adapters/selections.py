"""Selection index backed by the shared store.

The host app records every activity selection under ``shield.selections.v1``
as ``{selection id: {"applicationTokens": [...], "webDomainTokens": [...],
"categoryTokens": [...]}}`` where each token is already hashed with the same
:class:`~lib_shield_config.application.ports.TokenHasher` used here.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from ..application.ports import KeyValueStore, TokenHasher

SELECTIONS_KEY: Final[str] = "shield.selections.v1"


class StoreSelectionIndex:
    """Find selection ids that contain an application, web domain, or category."""

    def __init__(self, store: KeyValueStore, hasher: TokenHasher) -> None:
        self._store = store
        self._hasher = hasher

    def selection_ids(
        self,
        *,
        application_token: Any = None,
        web_domain_token: Any = None,
        category_token: Any = None,
    ) -> list[str]:
        """Return matching selection ids, smallest (most specific) selection first.

        Ties are broken by selection id so the order is stable across runs.

        Examples
        --------
        >>> from lib_shield_config.adapters.hashing import Sha256TokenHasher
        >>> from lib_shield_config.adapters.stores.memory import InMemoryStore
        >>> hasher = Sha256TokenHasher()
        >>> store = InMemoryStore({SELECTIONS_KEY: {
        ...     "wide": {"applicationTokens": [hasher.hash("a"), hasher.hash("b")]},
        ...     "narrow": {"applicationTokens": [hasher.hash("a")]},
        ... }})
        >>> StoreSelectionIndex(store, hasher).selection_ids(application_token="a")
        ['narrow', 'wide']
        """

        selections = self._store.get(SELECTIONS_KEY)
        if not isinstance(selections, Mapping):
            return []
        wanted = (
            ("applicationTokens", self._hash(application_token)),
            ("webDomainTokens", self._hash(web_domain_token)),
            ("categoryTokens", self._hash(category_token)),
        )
        matches: list[tuple[int, str]] = []
        for selection_id, entry in selections.items():
            if not isinstance(selection_id, str) or not isinstance(entry, Mapping):
                continue
            if any(digest is not None and digest in _tokens(entry, field) for field, digest in wanted):
                size = sum(len(_tokens(entry, field)) for field, _ in wanted)
                matches.append((size, selection_id))
        return [selection_id for _, selection_id in sorted(matches)]

    def _hash(self, token: Any) -> str | None:
        return None if token is None else self._hasher.hash(token)


def _tokens(entry: Mapping[str, Any], field: str) -> list[str]:
    value = entry.get(field)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
