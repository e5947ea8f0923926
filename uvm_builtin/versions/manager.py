"""Version store facade used by the built-in commands."""

from __future__ import annotations

import logging
import os
import secrets
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import NotInstalledError
from .activator import Activator, DefaultStore
from .aliases import AliasStore
from .layout import TRASH_PREFIX, StoreLayout
from .locking import store_lock
from .registry import InstalledRegistry
from .resolver import Resolver
from .sweep import sweep_orphans

logger = logging.getLogger(__name__)

__all__ = ["InstalledSummary", "UninstallResult", "VersionManager"]


@dataclass(frozen=True)
class InstalledSummary:
    tag: str
    active: bool


@dataclass(frozen=True)
class UninstallResult:
    tag: str
    cleared_current: bool
    cleared_default: bool


class VersionManager:
    def __init__(self, home: Path | str) -> None:
        self.layout = StoreLayout.from_home(home)
        self.layout.ensure()
        self.aliases = AliasStore(self.layout)
        self.registry = InstalledRegistry(self.layout)
        self.resolver = Resolver(self.aliases)
        self.defaults = DefaultStore(self.layout)
        self.activator = Activator(self.layout, self.registry, self.defaults)

    # -------------------- resolution -----------------------

    def resolve(self, raw: Optional[str], *, cwd: Path | str | None = None) -> str:
        return self.resolver.resolve_or_pin(raw, cwd)

    def require_installed(self, tag: str) -> Path:
        if not self.registry.is_installed(tag):
            raise NotInstalledError(tag)
        return self.registry.path(tag)

    # ------------------------ query ------------------------

    def list_installed(self) -> list[InstalledSummary]:
        active = self.activator.current()
        return [InstalledSummary(tag=tag, active=tag == active) for tag in self.registry.list()]

    def which(self, tag: str) -> Path:
        self.require_installed(tag)
        entry = self.registry.entry_point(tag)
        if not entry.exists():
            raise NotInstalledError(tag)
        return entry

    # ------------------------ state ------------------------

    def use(self, tag: str) -> Path:
        return self.activator.use(tag)

    def current(self) -> Optional[str]:
        return self.activator.current()

    def set_default(self, tag: str) -> None:
        self.activator.set_default(tag)

    def get_default(self) -> Optional[str]:
        return self.activator.get_default()

    def clear_default(self) -> bool:
        return self.activator.clear_default()

    def alias(self, name: str, raw: str) -> str:
        tag = self.resolver.resolve(raw)
        self.require_installed(tag)
        self.aliases.set(name, tag)
        return tag

    def unalias(self, name: str) -> None:
        self.aliases.remove(name)

    # -------------------- housekeeping ---------------------

    def uninstall(self, tag: str) -> UninstallResult:
        """Remove ``tag`` and any pointer or default that referenced it."""
        with store_lock(self.layout.lock_file):
            sweep_orphans(self.layout)
            path = self.require_installed(tag)

            cleared_current = False
            if self.activator.current_pointer() == tag:
                cleared_current = self.activator.clear_pointer()

            trash = path.with_name(f"{TRASH_PREFIX}{tag}-{os.getpid()}-{secrets.token_hex(4)}")
            os.rename(path, trash)
            shutil.rmtree(trash)

            cleared_default = False
            if self.defaults.get() == tag:
                cleared_default = self.defaults.clear()

        logger.debug(
            "uninstalled %s cleared_current=%s cleared_default=%s", tag, cleared_current, cleared_default
        )
        return UninstallResult(tag=tag, cleared_current=cleared_current, cleared_default=cleared_default)
