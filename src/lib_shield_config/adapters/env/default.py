"""Environment variable adapter for engine settings.

Purpose
-------
Translate ``LIB_SHIELD_CONFIG_*`` process environment variables into the
nested mapping consumed by
:meth:`lib_shield_config.domain.settings.EngineSettings.from_mapping`.

Key behaviours
--------------
* Only keys carrying the prefix are captured.
* ``__`` separates nesting levels (``COUNTER__DEBOUNCE_SECONDS`` becomes
  ``{"counter": {"debounce_seconds": ...}}``).
* Scalars are coerced (bools, ints, floats, ``null``/``none``).
"""

from __future__ import annotations

import os
from typing import Mapping

from ...observability import log_debug

SETTINGS_SLUG = "lib-shield-config"


def default_env_prefix(slug: str = SETTINGS_SLUG) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix()
    'LIB_SHIELD_CONFIG'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Load environment variables that belong to the settings namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str | None = None) -> dict[str, object]:
        """Return a nested mapping built from variables starting with *prefix*.

        Examples
        --------
        >>> env = {
        ...     'LIB_SHIELD_CONFIG_COUNTER__DEBOUNCE_SECONDS': '5',
        ...     'LIB_SHIELD_CONFIG_MESSAGES__DEFAULT': 'Not now',
        ...     'HOME': '/root',
        ... }
        >>> payload = DefaultEnvLoader(environ=env).load()
        >>> payload['counter']['debounce_seconds'], payload['messages']['default']
        (5, 'Not now')
        """

        prefix = default_env_prefix() if prefix is None else prefix
        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :]
            if not stripped:
                continue
            try:
                assign_nested(collected, stripped, _coerce(value))
            except ValueError:
                log_debug("env_variable_skipped", key=key)
        log_debug("env_variables_loaded", keys=sorted(collected.keys()))
        return collected


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign ``value`` inside ``target`` using ``__`` as a nesting delimiter.

    Examples
    --------
    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'STORE__PATH', '/tmp/store.json')
    >>> data
    {'store': {'path': '/tmp/store.json'}}
    """

    parts = key.split("__")
    cursor = target
    for part in parts[:-1]:
        cursor = _ensure_child_mapping(cursor, part)
    cursor[parts[-1].lower()] = value


def _ensure_child_mapping(mapping: dict[str, object], key: str) -> dict[str, object]:
    """Ensure ``mapping[key]`` is a ``dict``, refusing to replace a scalar."""

    resolved = key.lower()
    child = mapping.setdefault(resolved, {})
    if not isinstance(child, dict):
        raise ValueError(f"Cannot override scalar with mapping for key {key}")
    return child


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('2.5'), _coerce('hello')
    (True, 10, 2.5, 'hello')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value
