"""Composition root for ``lib_shield_config``.

Purpose
-------
Provide the single entry point a shield renderer calls per presentation. The
pipeline runs key derivation, the open counter, precedence resolution, and
placeholder building, then merges the icon override into the native base
configuration.

Contents
--------
* :class:`ShieldResolver` – wires the store-backed collaborators and exposes
  :meth:`~ShieldResolver.resolve` and :meth:`~ShieldResolver.preview`.
* :func:`resolve_shield` – one-shot convenience wrapper.
* :func:`load_config_document` – read and parse ``shield.config.v1``.
* :func:`load_settings` – build :class:`EngineSettings` from the environment.

System Role
-----------
This module connects adapters (store, hasher, selection index, native lookup)
with the application layer while emitting structured observability signals.
Every configuration problem degrades to a default value; a shield must always
render something.
"""

from __future__ import annotations

import json
import time
import uuid
from collections.abc import Mapping
from typing import Any, Callable

from .adapters.env.default import DefaultEnvLoader, default_env_prefix
from .adapters.hashing import Sha256TokenHasher
from .adapters.native import StoreNativeConfigLookup
from .adapters.selections import StoreSelectionIndex
from .adapters.stores.memory import InMemoryStore
from .application.counter import OpenCounter
from .application.merge import merge_config
from .application.placeholders import build_placeholders
from .application.ports import KeyValueStore, NativeConfigLookup, SelectionIndex, TokenHasher
from .application.resolver import resolve_icon_override, resolve_messages
from .domain.config import EMPTY_DOCUMENT, ConfigDocument, parse_document
from .domain.entities import ActivityCategory, Application, Entity, ShieldResolution, WebDomain
from .domain.errors import ShieldConfigError
from .domain.keys import CONFIG_KEY, app_key, domain_key
from .domain.settings import EngineSettings
from .observability import bind_trace_id, log_debug, log_error, log_info, make_event


def load_config_document(store: KeyValueStore) -> ConfigDocument:
    """Read ``shield.config.v1`` from *store* and parse it.

    The stored value may be a mapping or a JSON string. Anything missing or
    unparseable yields :data:`EMPTY_DOCUMENT`.

    Examples
    --------
    >>> from lib_shield_config.adapters.stores.memory import InMemoryStore
    >>> load_config_document(InMemoryStore({CONFIG_KEY: '{"messages": ["hi"]}'})).root.messages
    ('hi',)
    >>> load_config_document(InMemoryStore({CONFIG_KEY: "{oops"})) is EMPTY_DOCUMENT
    True
    """

    raw = store.get(CONFIG_KEY)
    if raw is None:
        return EMPTY_DOCUMENT
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("config_document_invalid", key=CONFIG_KEY, error=str(exc))
            return EMPTY_DOCUMENT
    if not isinstance(raw, Mapping):
        log_error("config_document_invalid", key=CONFIG_KEY, error=f"unexpected type {type(raw).__name__}")
        return EMPTY_DOCUMENT
    return parse_document(raw)


def load_settings(environ: Mapping[str, str] | None = None) -> EngineSettings:
    """Build :class:`EngineSettings` from ``LIB_SHIELD_CONFIG_*`` variables.

    Examples
    --------
    >>> load_settings({"LIB_SHIELD_CONFIG_COUNTER__DEBOUNCE_SECONDS": "0.5"}).debounce_seconds
    0.5
    """

    data = DefaultEnvLoader(environ=environ).load(default_env_prefix())
    return EngineSettings.from_mapping(data)


class ShieldResolver:
    """Resolve shield placeholders and configuration against a shared store.

    Parameters
    ----------
    store:
        Shared key-value store holding the configuration document, counters,
        selections, and native shield configurations.
    hasher:
        Token hasher; defaults to :class:`Sha256TokenHasher`.
    selections / native:
        Selection index and native field lookup; default to the store-backed
        adapters.
    settings:
        Engine settings; defaults to :func:`load_settings`.
    clock:
        Source of epoch seconds for the open counter.
    document_loader:
        Replaces :func:`load_config_document`, e.g. with a document read from a
        file by the CLI.

    A store that cannot be synchronized is logged as ``store_unavailable`` and
    the shield is resolved from an empty snapshot: count 0, the empty document,
    and no native configuration.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        hasher: TokenHasher | None = None,
        selections: SelectionIndex | None = None,
        native: NativeConfigLookup | None = None,
        settings: EngineSettings | None = None,
        clock: Callable[[], float] = time.time,
        document_loader: Callable[[], ConfigDocument] | None = None,
    ) -> None:
        self._store = store
        self._hasher = hasher or Sha256TokenHasher()
        self._selections = selections or StoreSelectionIndex(store, self._hasher)
        self._native = native or StoreNativeConfigLookup(store)
        self._settings = settings or load_settings()
        self._clock = clock
        self._counter = OpenCounter(store, debounce_seconds=self._settings.debounce_seconds, clock=clock)
        self._document_loader = document_loader or (lambda: load_config_document(store))

    def entity_key(self, entity: Entity) -> str:
        """Return the stable counter key for *entity*."""

        if isinstance(entity, WebDomain):
            return domain_key(entity.domain, entity.token, self._hasher)
        return app_key(entity.bundle_identifier, entity.token, self._hasher)

    def resolve(self, entity: Entity, category: ActivityCategory | None = None) -> ShieldResolution:
        """Count one presentation of *entity* and resolve its shield."""

        return self._run(entity, category, bump=True)

    def preview(self, entity: Entity, category: ActivityCategory | None = None) -> ShieldResolution:
        """Resolve the shield using the current count, leaving the store untouched."""

        return self._run(entity, category, bump=False)

    def _run(self, entity: Entity, category: ActivityCategory | None, *, bump: bool) -> ShieldResolution:
        bind_trace_id(uuid.uuid4().hex)
        try:
            self._store.synchronize()
        except ShieldConfigError as exc:
            log_error("store_unavailable", error=str(exc))
            return self._empty_snapshot().preview(entity, category)

        key = self.entity_key(entity)
        open_count = self._counter.bump(key) if bump else self._counter.current(key)
        doc = self._document_loader()
        selection_ids = self._selection_ids(entity, category)
        selection_id = selection_ids[0] if selection_ids else None

        messages = resolve_messages(
            doc, entity, selection_id, open_count, default_message=self._settings.default_message
        )
        placeholders = build_placeholders(
            entity,
            category,
            open_count,
            messages,
            doc,
            hasher=self._hasher,
            entity_key=key,
            selection_id=selection_id,
        )
        icon = resolve_icon_override(doc, entity, selection_id, open_count)
        config = merge_config(self._native.lookup(selection_ids), icon)

        log_info(
            "shield_resolved",
            **make_event(key, messages.tier, {"open_count": open_count, "selection_id": selection_id}),
        )
        return ShieldResolution(placeholders, config, open_count, key, selection_id)

    def _empty_snapshot(self) -> ShieldResolver:
        """Return a resolver over an empty in-memory store and the empty document."""

        return ShieldResolver(
            InMemoryStore(),
            hasher=self._hasher,
            settings=self._settings,
            clock=self._clock,
            document_loader=lambda: EMPTY_DOCUMENT,
        )

    def _selection_ids(self, entity: Entity, category: ActivityCategory | None) -> list[str]:
        category_token = category.token if category is not None else None
        if isinstance(entity, WebDomain):
            ids = self._selections.selection_ids(web_domain_token=entity.token, category_token=category_token)
        else:
            ids = self._selections.selection_ids(application_token=entity.token, category_token=category_token)
        log_debug("selection_ids_found", **make_event(None, None, {"count": len(ids)}))
        return ids


def resolve_shield(
    entity: Application | WebDomain,
    category: ActivityCategory | None = None,
    *,
    store: KeyValueStore,
    **options: Any,
) -> ShieldResolution:
    """Resolve one shield presentation with a throwaway :class:`ShieldResolver`.

    *options* are forwarded to :class:`ShieldResolver`.
    """

    return ShieldResolver(store, **options).resolve(entity, category)


__all__ = [
    "ShieldResolver",
    "resolve_shield",
    "load_config_document",
    "load_settings",
]
