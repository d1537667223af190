"""Aggregated exports for the mailexport transformation core.

What:
  Package facade exposing the message transform, the redaction engine and
  the field catalogue.

Why:
  :mod:`mailexport.core.engine` depends on the configuration models, which in
  turn depend on the catalogue and the redaction registry. Importing
  submodules lazily keeps that chain acyclic no matter which module a caller
  imports first.

How:
  ``__getattr__`` maps each public name to its owning submodule and imports
  it on first access.

Invariants & Safety:
  - Only names listed in ``__all__`` resolve; anything else raises
    :class:`AttributeError`.
"""

from __future__ import annotations

from typing import Any

_OWNERS = {
    "transform_message": "engine",
    "transform_many": "engine",
    "FIELD_ORDER": "engine",
    "Category": "privacy",
    "SanitizeConfig": "privacy",
    "RedactionResult": "privacy",
    "sanitize": "privacy",
    "FieldInfo": "fields",
    "ALL_FIELDS": "fields",
    "DEFAULT_FIELDS": "fields",
    "parse_fields": "fields",
    "html_to_text": "body",
    "parse_address": "headers",
    "redact_addresses": "addresses",
}

__all__ = sorted(_OWNERS)


def __getattr__(name: str) -> Any:
    """Import the submodule owning ``name`` and return the attribute."""

    owner = _OWNERS.get(name)
    if owner is None:
        raise AttributeError(name)
    from importlib import import_module

    return getattr(import_module(f"{__name__}.{owner}"), name)
