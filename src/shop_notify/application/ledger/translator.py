"""Application ledger – Translator protocol and catalog implementation."""
from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

__all__ = ["CatalogTranslator", "Translator"]


@runtime_checkable
class Translator(Protocol):
    def translate(self, key: str, params: Mapping[str, Any]) -> str: ...


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class CatalogTranslator:
    """Look *key* up in a flat catalog (falling back to the key) and fill ``{name}`` placeholders."""

    def __init__(self, catalog: Mapping[str, str] | None = None) -> None:
        self._catalog = dict(catalog or {})

    def translate(self, key: str, params: Mapping[str, Any]) -> str:
        template = self._catalog.get(key, key)
        try:
            return template.format_map(_KeepMissing(params))
        except (ValueError, IndexError, AttributeError, KeyError, TypeError):
            return template
