"""Public package surface for the shield configuration resolution engine.

``ShieldResolver.resolve`` is the single entry point a shield renderer calls
per presentation; the remaining exports cover the individual pipeline stages
for hosts that wire their own collaborators.
"""

from __future__ import annotations

from .adapters.hashing import Sha256TokenHasher
from .adapters.stores.json_file import JsonFileStore
from .adapters.stores.memory import InMemoryStore
from .application.counter import OpenCounter
from .application.merge import merge_config
from .application.placeholders import build_placeholders, render_template
from .application.resolver import (
    FieldFamily,
    ResolvedMessages,
    resolve_field,
    resolve_icon_override,
    resolve_messages,
    resolve_scope,
)
from .core import ShieldResolver, load_config_document, load_settings, resolve_shield
from .domain.config import ConfigDocument, IconChoice, IconKind, ScopedConfig, parse_document
from .domain.entities import ActivityCategory, Application, ShieldResolution, WebDomain
from .domain.errors import InvalidFormat, NotFound, ShieldConfigError
from .domain.keys import app_key, domain_key
from .domain.rotation import pick
from .domain.settings import DEFAULT_MESSAGE, EngineSettings
from .observability import bind_trace_id, get_logger

__all__ = [
    "ActivityCategory",
    "Application",
    "ConfigDocument",
    "DEFAULT_MESSAGE",
    "EngineSettings",
    "FieldFamily",
    "IconChoice",
    "IconKind",
    "InMemoryStore",
    "InvalidFormat",
    "JsonFileStore",
    "NotFound",
    "OpenCounter",
    "ResolvedMessages",
    "ScopedConfig",
    "Sha256TokenHasher",
    "ShieldConfigError",
    "ShieldResolution",
    "ShieldResolver",
    "WebDomain",
    "app_key",
    "bind_trace_id",
    "build_placeholders",
    "domain_key",
    "get_logger",
    "load_config_document",
    "load_settings",
    "merge_config",
    "parse_document",
    "pick",
    "render_template",
    "resolve_field",
    "resolve_icon_override",
    "resolve_messages",
    "resolve_scope",
    "resolve_shield",
]
