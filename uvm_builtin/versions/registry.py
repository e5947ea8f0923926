"""Enumerates the versions installed in the store."""

from __future__ import annotations

from pathlib import Path

from .layout import StoreLayout
from .tags import sort_tags

__all__ = ["ENTRY_POINT_NAMES", "InstalledRegistry"]

ENTRY_POINT_NAMES = ("urbit", "vere")


class InstalledRegistry:
    """Read-only view over ``<home>/versions``.

    Only fully published directories are ever seen here: staging and trash
    directories carry a leading dot and are skipped.
    """

    def __init__(self, layout: StoreLayout) -> None:
        self.layout = layout

    def list(self) -> list[str]:
        root = self.layout.versions_dir
        if not root.is_dir():
            return []
        tags = [
            entry.name
            for entry in root.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        ]
        return sort_tags(tags)

    def is_installed(self, tag: str) -> bool:
        if not tag or tag.startswith(".") or "/" in tag or "\\" in tag:
            return False
        return self.path(tag).is_dir()

    def path(self, tag: str) -> Path:
        return self.layout.version_dir(tag)

    def entry_point(self, tag: str) -> Path:
        return self.path(tag) / ENTRY_POINT_NAMES[0]
