"""Domain-level configuration value objects.

Purpose
-------
Turn the loosely typed shield configuration document (``shield.config.v1``)
into immutable, explicitly optional records. Parsing happens once at the load
boundary; every key that is present with the wrong type is converted into an
absent field so the resolver only ever sees well-typed values or ``None``.

Contents
--------
* :class:`IconKind` – closed set of icon choice variants plus ``UNRECOGNIZED``.
* :class:`IconChoice` – one entry of an ``iconChoices`` array.
* :class:`ScopedConfig` – the overridable fields shared by every precedence tier.
* :class:`ConfigDocument` – root scope, global placeholders, and the per-app,
  per-domain, and per-selection scopes.
* :func:`parse_document` – schema-validating conversion from a raw mapping.
* :data:`EMPTY_DOCUMENT` – canonical document used when nothing is stored.

System Role
-----------
Consumed by :mod:`lib_shield_config.application.resolver` and
:mod:`lib_shield_config.application.placeholders`. Contains no I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class IconKind(Enum):
    """Icon choice variants understood by the shield renderer."""

    SF_SYMBOL = "SFSymbol"
    APP_GROUP_RELATIVE_PATH = "AppGroupRelativePath"
    ASSET_NAME = "AssetName"
    UNRECOGNIZED = "Unrecognized"

    @classmethod
    def from_raw(cls, value: object) -> IconKind:
        """Map the raw ``type`` tag onto a variant, ``UNRECOGNIZED`` otherwise.

        Examples
        --------
        >>> IconKind.from_raw("SFSymbol")
        <IconKind.SF_SYMBOL: 'SFSymbol'>
        >>> IconKind.from_raw("Bogus")
        <IconKind.UNRECOGNIZED: 'Unrecognized'>
        """

        if isinstance(value, str):
            for kind in cls:
                if kind is not cls.UNRECOGNIZED and kind.value == value:
                    return kind
        return cls.UNRECOGNIZED


@dataclass(frozen=True, slots=True)
class IconChoice:
    """A single ``{type, name}`` entry from an ``iconChoices`` array."""

    kind: IconKind
    name: str = ""

    @property
    def usable(self) -> bool:
        """Return ``True`` when the choice can produce an icon override."""

        return self.kind is not IconKind.UNRECOGNIZED and bool(self.name.strip())


@dataclass(frozen=True, slots=True)
class ScopedConfig:
    """Overridable fields of one precedence tier.

    ``None`` means "inherit from the parent scope", never "empty".
    """

    messages: tuple[str, ...] | None = None
    title_messages: tuple[str, ...] | None = None
    subtitle_messages: tuple[str, ...] | None = None
    loop_messages: bool | None = None
    icon_choices: tuple[IconChoice, ...] | None = None
    loop_icons: bool | None = None


EMPTY_SCOPE = ScopedConfig()


@dataclass(frozen=True, slots=True)
class ConfigDocument:
    """Parsed shield configuration document.

    Examples
    --------
    >>> doc = parse_document({"messages": ["hi"], "perApp": {"com.x": {"messages": ["yo"]}}})
    >>> doc.root.messages
    ('hi',)
    >>> doc.per_app["com.x"].messages
    ('yo',)
    """

    root: ScopedConfig = EMPTY_SCOPE
    global_placeholders: Mapping[str, str | None] | None = None
    per_app: Mapping[str, ScopedConfig] = field(default_factory=lambda: MappingProxyType({}))
    per_domain: Mapping[str, ScopedConfig] = field(default_factory=lambda: MappingProxyType({}))
    per_selection_id: Mapping[str, ScopedConfig] = field(default_factory=lambda: MappingProxyType({}))


def parse_document(raw: Mapping[str, Any] | None) -> ConfigDocument:
    """Convert a raw configuration mapping into a :class:`ConfigDocument`.

    Why
    ----
    The stored document is written by another runtime and may contain keys of
    unexpected types. Normalising here keeps the resolver free of ``isinstance``
    checks and makes degradation deterministic: wrong type means absent.

    Parameters
    ----------
    raw:
        Mapping read from the store, or ``None`` when nothing was stored.

    Returns
    -------
    ConfigDocument
        Parsed document; :data:`EMPTY_DOCUMENT` for ``None`` or non-mappings.

    Examples
    --------
    >>> parse_document({"messages": "not-a-list"}).root.messages is None
    True
    >>> parse_document({"loopMessages": 1}).root.loop_messages is None
    True
    >>> parse_document(None) == EMPTY_DOCUMENT
    True
    """

    if not isinstance(raw, Mapping):
        return EMPTY_DOCUMENT
    return ConfigDocument(
        root=parse_scope(raw),
        global_placeholders=_placeholder_mapping(raw.get("globalPlaceholders")),
        per_app=_scope_table(raw.get("perApp")),
        per_domain=_scope_table(raw.get("perDomain")),
        per_selection_id=_scope_table(raw.get("perSelectionId")),
    )


def parse_scope(raw: Mapping[str, Any]) -> ScopedConfig:
    """Extract the overridable fields of one tier from *raw*."""

    return ScopedConfig(
        messages=_string_tuple(raw.get("messages")),
        title_messages=_string_tuple(raw.get("titleMessages")),
        subtitle_messages=_string_tuple(raw.get("subtitleMessages")),
        loop_messages=_flag(raw.get("loopMessages")),
        icon_choices=_icon_choices(raw.get("iconChoices")),
        loop_icons=_flag(raw.get("loopIcons")),
    )


def _string_tuple(value: object) -> tuple[str, ...] | None:
    """Return *value* as a tuple when it is a list of strings, else ``None``."""

    if not isinstance(value, (list, tuple)):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return tuple(value)


def _flag(value: object) -> bool | None:
    """Accept real booleans only; ``1`` or ``"true"`` are treated as absent."""

    return value if isinstance(value, bool) else None


def _icon_choices(value: object) -> tuple[IconChoice, ...] | None:
    """Parse an ``iconChoices`` array, keeping malformed entries as ``UNRECOGNIZED``.

    Malformed entries stay in place so rotation indexes the array exactly as
    written.

    Examples
    --------
    >>> _icon_choices([{"type": "AssetName", "name": "logo"}, 3])
    (IconChoice(kind=<IconKind.ASSET_NAME: 'AssetName'>, name='logo'), IconChoice(kind=<IconKind.UNRECOGNIZED: 'Unrecognized'>, name=''))
    """

    if not isinstance(value, (list, tuple)):
        return None
    return tuple(_icon_choice(item) for item in value)


def _icon_choice(item: object) -> IconChoice:
    if not isinstance(item, Mapping):
        return IconChoice(IconKind.UNRECOGNIZED)
    name = item.get("name")
    if not isinstance(name, str):
        return IconChoice(IconKind.UNRECOGNIZED)
    return IconChoice(IconKind.from_raw(item.get("type")), name)


def _placeholder_mapping(value: object) -> Mapping[str, str | None] | None:
    """Validate ``globalPlaceholders``; ``null`` values mean "blank"."""

    if not isinstance(value, Mapping):
        return None
    if not all(isinstance(key, str) and (item is None or isinstance(item, str)) for key, item in value.items()):
        return None
    return MappingProxyType(dict(value))


def _scope_table(value: object) -> Mapping[str, ScopedConfig]:
    """Parse a ``perApp``/``perDomain``/``perSelectionId`` table, dropping non-mapping entries."""

    if not isinstance(value, Mapping):
        return MappingProxyType({})
    table = {key: parse_scope(scope) for key, scope in value.items() if isinstance(key, str) and isinstance(scope, Mapping)}
    return MappingProxyType(table)


#: Canonical document used when the store holds no (valid) configuration.
EMPTY_DOCUMENT = ConfigDocument()
