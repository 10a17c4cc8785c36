"""Domain-level exception hierarchy.

Purpose
-------
Expose the small error taxonomy shared by adapters, the composition root, and
the CLI. The resolution pipeline itself never raises for configuration
problems (a shield must always render something); these types surface only at
explicit loading boundaries such as configuration files handed to the CLI or a
corrupt shared store file.

Contents
--------
* :class:`ShieldConfigError` – umbrella base class for all library errors.
* :class:`InvalidFormat` – parsing problems while reading files or stored documents.
* :class:`NotFound` – raised when an expected resource is missing.
"""

from __future__ import annotations


class ShieldConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_shield_config``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidFormat(ShieldConfigError):
    """Raised when an input artifact cannot be parsed into structured data.

    Typical Sources
    ---------------
    Structured file loaders (:mod:`tomllib`, :mod:`json`, :mod:`yaml`) and the
    JSON file store when its backing file is corrupt.
    """


class NotFound(ShieldConfigError):
    """Represents missing-but-optional resources (files, optional parsers)."""
