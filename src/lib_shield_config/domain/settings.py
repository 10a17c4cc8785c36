"""Engine settings and their defaults.

Settings are read from ``LIB_SHIELD_CONFIG_*`` environment variables by
:func:`lib_shield_config.core.load_settings`; values of the wrong type keep
the defaults below. Scalar values of the default message, which the
environment loader may have coerced to numbers or booleans, are used as text.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

DEFAULT_MESSAGE: Final[str] = "Come back to Retention and study!"
DEFAULT_DEBOUNCE_SECONDS: Final[float] = 2.0


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunables of the resolution engine.

    Attributes
    ----------
    debounce_seconds:
        Window in which repeated bumps for one entity return the same count.
    default_message:
        Message shown when no tier supplies one.
    store_path:
        Backing file for :class:`~lib_shield_config.adapters.stores.json_file.JsonFileStore`
        when the CLI is not given ``--store``.
    """

    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    default_message: str = DEFAULT_MESSAGE
    store_path: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EngineSettings:
        """Build settings from a nested mapping such as the env loader output.

        Examples
        --------
        >>> EngineSettings.from_mapping({"counter": {"debounce_seconds": 5}}).debounce_seconds
        5.0
        >>> EngineSettings.from_mapping({"messages": {"default": 3}}).default_message
        '3'
        >>> EngineSettings.from_mapping({"messages": {"default": ["a"]}}).default_message == DEFAULT_MESSAGE
        True
        """

        counter = _section(data, "counter")
        messages = _section(data, "messages")
        store = _section(data, "store")

        debounce = counter.get("debounce_seconds")
        if isinstance(debounce, bool) or not isinstance(debounce, (int, float)):
            debounce = DEFAULT_DEBOUNCE_SECONDS
        elif not math.isfinite(debounce) or debounce < 0:
            debounce = DEFAULT_DEBOUNCE_SECONDS
        default_message = messages.get("default")
        if isinstance(default_message, bool):
            default_message = "true" if default_message else "false"
        elif isinstance(default_message, (int, float)):
            default_message = str(default_message)
        if not isinstance(default_message, str) or not default_message:
            default_message = DEFAULT_MESSAGE
        store_path = store.get("path")
        if not isinstance(store_path, str) or not store_path:
            store_path = None
        return cls(debounce_seconds=float(debounce), default_message=default_message, store_path=store_path)


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name)
    return value if isinstance(value, Mapping) else {}
