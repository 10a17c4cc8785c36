"""Entities being shielded and the result handed back to the shield renderer.

Tokens are opaque platform objects. The library never inspects them beyond
passing them to a :class:`~lib_shield_config.application.ports.TokenHasher`;
``None`` stands for "token not available".
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Application:
    """A shielded application."""

    token: Any = None
    bundle_identifier: str | None = None
    localized_display_name: str | None = None


@dataclass(frozen=True, slots=True)
class WebDomain:
    """A shielded web domain."""

    token: Any = None
    domain: str | None = None


@dataclass(frozen=True, slots=True)
class ActivityCategory:
    """Activity category the shielded entity was blocked through."""

    token: Any = None
    localized_display_name: str | None = None


Entity = Union[Application, WebDomain]

PlaceholderMap = dict[str, Union[str, None]]
"""Placeholder name to value; ``None`` is present-but-blank, distinct from a missing key."""


@dataclass(frozen=True, slots=True)
class ShieldResolution:
    """Everything a renderer needs for one shield presentation."""

    placeholders: PlaceholderMap
    config: Mapping[str, Any] | None
    open_count: int
    entity_key: str
    selection_id: str | None = None
