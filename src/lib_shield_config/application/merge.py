"""Application-layer merge policy for native shield configurations.

Purpose
-------
Apply the field overrides produced by the precedence resolver (currently the
icon fields) on top of the native base shield configuration. The merge is a
single level: each override key replaces the whole base value, and keys the
override does not mention are preserved.

System Role
-----------
Receives the base mapping from
:class:`~lib_shield_config.application.ports.NativeConfigLookup` and the
override from :func:`~lib_shield_config.application.resolver.resolve_icon_override`;
the result is handed to the shield renderer unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def merge_config(
    base: Mapping[str, Any] | None,
    override: Mapping[str, Any] | None,
) -> Mapping[str, Any] | None:
    """Shallow-merge *override* into *base*.

    Why
    ----
    The base configuration carries colors, labels, and button texts the
    resolver never touches; an override must not discard them.

    Returns
    -------
    Mapping[str, Any] | None
        *base* itself when *override* is ``None`` or empty (including a
        ``None`` base), otherwise a fresh ``dict``.

    Side Effects
    ------------
    None; neither input is mutated.

    Examples
    --------
    >>> merge_config({"a": 1, "b": 2}, {"b": 3})
    {'a': 1, 'b': 3}
    >>> merge_config(None, {"a": 1})
    {'a': 1}
    >>> merge_config({"a": 1}, None)
    {'a': 1}
    >>> merge_config(None, {}) is None
    True
    """

    if not override:
        return base
    merged: dict[str, Any] = dict(base) if base else {}
    merged.update(override)
    return merged
