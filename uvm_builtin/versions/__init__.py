"""Version store helpers published by uvm_builtin."""

from __future__ import annotations

from .layout import StoreLayout
from .manager import InstalledSummary, UninstallResult, VersionManager
from .resolver import read_project_pin
from .tags import normalize_tag, sort_tags

__all__ = [
    "InstalledSummary",
    "StoreLayout",
    "UninstallResult",
    "VersionManager",
    "normalize_tag",
    "read_project_pin",
    "sort_tags",
]
