"""In-process key-value store used by tests and one-shot CLI runs."""

from __future__ import annotations

from typing import Any, Mapping


class InMemoryStore:
    """Dictionary-backed :class:`~lib_shield_config.application.ports.KeyValueStore`.

    Examples
    --------
    >>> store = InMemoryStore({"shield.config.v1": {"messages": ["hi"]}})
    >>> store.get("shield.config.v1")
    {'messages': ['hi']}
    >>> store.get("missing") is None
    True
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})
        self.synchronize_calls = 0

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def synchronize(self) -> None:
        self.synchronize_calls += 1

    def as_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the stored entries."""

        return dict(self._data)
