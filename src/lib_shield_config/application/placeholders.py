"""Placeholder map assembly and template substitution.

Purpose
-------
Build the ``{name}`` substitution map handed to the shield renderer. Values
come from the resolved messages, the entity and category metadata, and the
user's ``globalPlaceholders``, which are merged last and win every conflict.

Conventions
-----------
* A key mapped to ``None`` is present but blank and renders as ``""``.
* The generic ``{token}`` placeholder is the category token whenever a
  category is present, otherwise the entity's own token: the counter key for
  applications and the hashed domain token for web domains.
"""

from __future__ import annotations

import re
from typing import Any, Final, Mapping

from ..domain.config import ConfigDocument
from ..domain.entities import ActivityCategory, Application, Entity, PlaceholderMap, WebDomain
from .ports import TokenHasher
from .resolver import ResolvedMessages

UNKNOWN_SITE: Final[str] = "(Unknown site)"

_PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z0-9_]+)\}")


def build_placeholders(
    entity: Entity,
    category: ActivityCategory | None,
    open_count: int,
    messages: ResolvedMessages,
    doc: ConfigDocument,
    *,
    hasher: TokenHasher,
    entity_key: str,
    selection_id: str | None = None,
) -> PlaceholderMap:
    """Assemble the placeholder map for one shield presentation.

    Parameters
    ----------
    entity:
        Shielded application or web domain.
    category:
        Category the entity was blocked through, if any.
    open_count:
        Count returned by the open counter; rendered as ``shieldOpenCount``.
    messages:
        Message triple chosen by the precedence resolver.
    doc:
        Parsed configuration; only ``global_placeholders`` is read here.
    hasher:
        Token hasher used for every ``*Token`` placeholder.
    entity_key:
        Stable key of *entity*; the generic ``{token}`` of an application.
    selection_id:
        First selection id containing the entity, when known.

    Examples
    --------
    >>> from lib_shield_config.adapters.hashing import Sha256TokenHasher
    >>> from lib_shield_config.domain.config import EMPTY_DOCUMENT
    >>> placeholders = build_placeholders(
    ...     Application(bundle_identifier="com.x", localized_display_name="X"),
    ...     None, 2, ResolvedMessages("Go study"), EMPTY_DOCUMENT,
    ...     hasher=Sha256TokenHasher(), entity_key="app:com.x",
    ... )
    >>> placeholders["token"], placeholders["shieldOpenCount"], placeholders["tokenType"]
    ('app:com.x', '2', 'application')
    """

    placeholders: PlaceholderMap = {
        "familyActivitySelectionId": selection_id,
        "shieldOpenCount": str(open_count),
        "shieldMessage": messages.message,
        "shieldTitleMessage": messages.title,
        "shieldSubtitleMessage": messages.subtitle,
    }
    if isinstance(entity, WebDomain):
        _add_web_domain(placeholders, entity, category, hasher)
    else:
        _add_application(placeholders, entity, category, hasher, entity_key)

    if category is not None:
        category_token = _hashed(category.token, hasher)
        placeholders["categoryDisplayName"] = category.localized_display_name
        placeholders["categoryToken"] = category_token
        placeholders["token"] = category_token

    if doc.global_placeholders:
        placeholders.update(doc.global_placeholders)
    return placeholders


def render_template(text: str, placeholders: Mapping[str, str | None]) -> str:
    """Substitute ``{name}`` tokens in *text*.

    Blank (``None``) values render as an empty string; names missing from the
    map are left untouched.

    Examples
    --------
    >>> render_template("Hi {name}{suffix} {other}", {"name": "Ada", "suffix": None})
    'Hi Ada {other}'
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in placeholders:
            return match.group(0)
        return placeholders[name] or ""

    return _PLACEHOLDER_PATTERN.sub(_substitute, text)


def _add_application(
    placeholders: PlaceholderMap,
    application: Application,
    category: ActivityCategory | None,
    hasher: TokenHasher,
    entity_key: str,
) -> None:
    placeholders["applicationOrDomainDisplayName"] = application.localized_display_name
    placeholders["tokenType"] = "application" if category is None else "application_category"
    placeholders["applicationToken"] = _hashed(application.token, hasher)
    placeholders["token"] = entity_key


def _add_web_domain(
    placeholders: PlaceholderMap,
    web_domain: WebDomain,
    category: ActivityCategory | None,
    hasher: TokenHasher,
) -> None:
    display = web_domain.domain or UNKNOWN_SITE
    token = _hashed(web_domain.token, hasher)
    placeholders["applicationOrDomainDisplayName"] = display
    placeholders["domainDisplayName"] = display
    placeholders["tokenType"] = "web_domain" if category is None else "web_domain_category"
    placeholders["webDomainToken"] = token
    placeholders["token"] = token


def _hashed(token: Any, hasher: TokenHasher) -> str | None:
    return None if token is None else hasher.hash(token)
