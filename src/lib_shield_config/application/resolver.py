"""Application-layer precedence resolver.

Purpose
-------
Decide which scoped configuration supplies each shield value. Tiers are
consulted most specific first (selection, then app or domain, then the global
root) and the first tier with a non-empty relevant array wins; a tier that
merely exists but lacks the array is skipped.

Contents
    - ``scope_tiers``: ordered tiers applicable to an entity.
    - ``resolve_scope``: most specific existing scope.
    - ``resolve_field``: one message family, resolved independently.
    - ``resolve_messages``: message/title/subtitle resolved as one triple.
    - ``resolve_icon_override``: icon choice mapped to native override fields.

System Role
-----------
Called by :class:`lib_shield_config.core.ShieldResolver`. Free of I/O; the
rotation policy comes from :func:`lib_shield_config.domain.rotation.pick`.

Web domains resolve message text through two tiers only (domain, then global)
while icon overrides still consult the selection tier. This asymmetry matches
the shipped shields and is kept on purpose.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..domain.config import ConfigDocument, IconChoice, IconKind, ScopedConfig
from ..domain.entities import Application, Entity, WebDomain
from ..domain.rotation import pick
from ..domain.settings import DEFAULT_MESSAGE
from ..observability import log_debug, make_event

TIER_SELECTION = "selection"
TIER_APP = "app"
TIER_DOMAIN = "domain"
TIER_GLOBAL = "global"


class FieldFamily(Enum):
    """Message families that rotate independently."""

    MESSAGES = "messages"
    TITLE_MESSAGES = "titleMessages"
    SUBTITLE_MESSAGES = "subtitleMessages"

    def values_of(self, scope: ScopedConfig) -> tuple[str, ...] | None:
        if self is FieldFamily.MESSAGES:
            return scope.messages
        if self is FieldFamily.TITLE_MESSAGES:
            return scope.title_messages
        return scope.subtitle_messages


@dataclass(frozen=True, slots=True)
class ResolvedMessages:
    """Message triple taken from a single tier."""

    message: str
    title: str | None = None
    subtitle: str | None = None
    tier: str | None = None


def scope_tiers(
    doc: ConfigDocument,
    entity: Entity,
    selection_id: str | None = None,
    *,
    include_selection: bool = True,
) -> list[tuple[str, ScopedConfig]]:
    """Return ``(tier_name, scope)`` pairs most specific first.

    Only tiers that exist in *doc* are returned; the global root is always last.

    Examples
    --------
    >>> from lib_shield_config.domain.config import parse_document
    >>> doc = parse_document({"perApp": {"com.x": {}}, "perSelectionId": {"S": {}}})
    >>> [name for name, _ in scope_tiers(doc, Application(bundle_identifier="com.x"), "S")]
    ['selection', 'app', 'global']
    >>> [name for name, _ in scope_tiers(doc, WebDomain(domain="a.com"), "S", include_selection=False)]
    ['global']
    """

    tiers: list[tuple[str, ScopedConfig]] = []
    if include_selection and selection_id is not None:
        scope = doc.per_selection_id.get(selection_id)
        if scope is not None:
            tiers.append((TIER_SELECTION, scope))
    entity_tier = _entity_tier(doc, entity)
    if entity_tier is not None:
        tiers.append(entity_tier)
    tiers.append((TIER_GLOBAL, doc.root))
    return tiers


def resolve_scope(doc: ConfigDocument, entity: Entity, selection_id: str | None = None) -> ScopedConfig:
    """Return the most specific scope that exists for *entity*."""

    return scope_tiers(doc, entity, selection_id)[0][1]


def resolve_field(
    doc: ConfigDocument,
    entity: Entity,
    selection_id: str | None,
    open_count: int,
    family: FieldFamily,
) -> str | None:
    """Resolve one message family independently of the others.

    Returns ``None`` when no tier supplies a non-empty array for *family*.
    """

    for tier_name, scope in scope_tiers(doc, entity, selection_id, include_selection=_messages_use_selection(entity)):
        chosen = pick(family.values_of(scope) or (), open_count, _loop_messages(doc, scope))
        if chosen is not None:
            log_debug("field_resolved", **make_event(None, tier_name, {"family": family.value}))
            return chosen
    return None


def resolve_messages(
    doc: ConfigDocument,
    entity: Entity,
    selection_id: str | None,
    open_count: int,
    *,
    default_message: str = DEFAULT_MESSAGE,
) -> ResolvedMessages:
    """Resolve message, title, and subtitle from the first tier yielding any of them.

    Why
    ----
    Taking the whole triple from one tier avoids pairing, for example, a
    selection-specific title with a global message.

    Examples
    --------
    >>> from lib_shield_config.domain.config import parse_document
    >>> doc = parse_document({
    ...     "messages": ["global"],
    ...     "perApp": {"com.x": {"titleMessages": ["Focus"]}},
    ... })
    >>> resolve_messages(doc, Application(bundle_identifier="com.x"), None, 1)
    ResolvedMessages(message='Come back to Retention and study!', title='Focus', subtitle=None, tier='app')
    """

    for tier_name, scope in scope_tiers(doc, entity, selection_id, include_selection=_messages_use_selection(entity)):
        loop = _loop_messages(doc, scope)
        message = pick(scope.messages or (), open_count, loop)
        title = pick(scope.title_messages or (), open_count, loop)
        subtitle = pick(scope.subtitle_messages or (), open_count, loop)
        if message is None and title is None and subtitle is None:
            continue
        log_debug("messages_resolved", **make_event(None, tier_name, {"open_count": open_count}))
        return ResolvedMessages(message if message is not None else default_message, title, subtitle, tier_name)
    return ResolvedMessages(default_message)


def resolve_icon_override(
    doc: ConfigDocument,
    entity: Entity,
    selection_id: str | None,
    open_count: int,
) -> dict[str, str] | None:
    """Pick an icon choice and translate it into native shield override fields.

    A tier whose picked choice is unrecognised or has a blank name is skipped
    exactly as if it had no ``iconChoices``.

    Examples
    --------
    >>> from lib_shield_config.domain.config import parse_document
    >>> doc = parse_document({"iconChoices": [{"type": "AppGroupRelativePath", "name": "/img/a.png"}]})
    >>> resolve_icon_override(doc, Application(), None, 1)
    {'iconAppGroupRelativePath': 'img/a.png'}
    """

    for tier_name, scope in scope_tiers(doc, entity, selection_id):
        choice = pick(scope.icon_choices or (), open_count, _loop_icons(doc, scope))
        if choice is None:
            continue
        override = icon_override(choice)
        if override is None:
            log_debug("icon_choice_skipped", **make_event(None, tier_name, {"kind": choice.kind.value}))
            continue
        log_debug("icon_resolved", **make_event(None, tier_name, {"kind": choice.kind.value}))
        return override
    return None


def icon_override(choice: IconChoice) -> dict[str, str] | None:
    """Map a single :class:`IconChoice` onto override fields, or ``None``.

    Examples
    --------
    >>> icon_override(IconChoice(IconKind.SF_SYMBOL, "/star"))
    {'iconSystemName': '/star'}
    >>> icon_override(IconChoice(IconKind.UNRECOGNIZED, "x")) is None
    True
    """

    if not choice.usable:
        return None
    name = choice.name.strip()
    if choice.kind is IconKind.SF_SYMBOL:
        return {"iconSystemName": name}
    if choice.kind is IconKind.APP_GROUP_RELATIVE_PATH:
        relative = name.lstrip("/")
        return {"iconAppGroupRelativePath": relative} if relative else None
    if choice.kind is IconKind.ASSET_NAME:
        return {"iconAssetName": name}
    return None


def _entity_tier(doc: ConfigDocument, entity: Entity) -> tuple[str, ScopedConfig] | None:
    if isinstance(entity, Application):
        if entity.bundle_identifier:
            scope = doc.per_app.get(entity.bundle_identifier)
            if scope is not None:
                return TIER_APP, scope
        return None
    if isinstance(entity, WebDomain) and entity.domain:
        scope = doc.per_domain.get(entity.domain.lower())
        if scope is not None:
            return TIER_DOMAIN, scope
    return None


def _messages_use_selection(entity: Entity) -> bool:
    return not isinstance(entity, WebDomain)


def _loop_messages(doc: ConfigDocument, scope: ScopedConfig) -> bool:
    if scope.loop_messages is not None:
        return scope.loop_messages
    if doc.root.loop_messages is not None:
        return doc.root.loop_messages
    return True


def _loop_icons(doc: ConfigDocument, scope: ScopedConfig) -> bool:
    if scope.loop_icons is not None:
        return scope.loop_icons
    if doc.root.loop_icons is not None:
        return doc.root.loop_icons
    return True
