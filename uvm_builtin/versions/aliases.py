"""Persisted alias -> tag records under ``<home>/aliases``."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import ResolutionError
from .io import read_record, remove_record, write_record
from .layout import StoreLayout
from .locking import store_lock

logger = logging.getLogger(__name__)

__all__ = ["AliasStore", "validate_alias_name"]


def validate_alias_name(name: str) -> str:
    value = (name or "").strip()
    if not value:
        raise ResolutionError(ResolutionError.INVALID_ALIAS, "alias name is required")
    if value.startswith(".") or "/" in value or "\\" in value:
        raise ResolutionError(ResolutionError.INVALID_ALIAS, f"invalid alias name {value!r}")
    return value


class AliasStore:
    """Plain name -> tag records.

    Targets are not re-validated when versions are uninstalled later; a
    dangling alias surfaces as ``NotInstalledError`` at the point of use.
    """

    def __init__(self, layout: StoreLayout) -> None:
        self.layout = layout

    def get(self, name: str) -> Optional[str]:
        value = (name or "").strip()
        if not value or value.startswith(".") or "/" in value or "\\" in value:
            return None
        return read_record(self.layout.alias_file(value))

    def names(self) -> list[str]:
        root = self.layout.aliases_dir
        if not root.is_dir():
            return []
        return sorted(
            entry.name for entry in root.iterdir() if entry.is_file() and not entry.name.startswith(".")
        )

    def set(self, name: str, tag: str) -> None:
        """Persist ``name -> tag``; callers check that ``tag`` is installed."""
        alias = validate_alias_name(name)
        with store_lock(self.layout.lock_file):
            write_record(self.layout.alias_file(alias), tag)
        logger.debug("alias %s -> %s written", alias, tag)

    def remove(self, name: str) -> None:
        alias = validate_alias_name(name)
        with store_lock(self.layout.lock_file):
            if not remove_record(self.layout.alias_file(alias)):
                raise ResolutionError(
                    ResolutionError.UNKNOWN_ALIAS, f"alias '{alias}' does not exist"
                )
