"""Current-version pointer and default-version record."""

from __future__ import annotations

import logging
import os
import secrets
from pathlib import Path
from typing import Optional

from ..errors import NotInstalledError
from .io import read_record, remove_record, write_record
from .layout import StoreLayout
from .locking import store_lock
from .registry import InstalledRegistry
from .sweep import CURRENT_TMP_INFIX, sweep_orphans

logger = logging.getLogger(__name__)

__all__ = ["Activator", "DefaultStore"]


class DefaultStore:
    """The single persisted fallback version."""

    def __init__(self, layout: StoreLayout) -> None:
        self.layout = layout

    def get(self) -> Optional[str]:
        return read_record(self.layout.default_file)

    def set(self, tag: str) -> None:
        write_record(self.layout.default_file, tag)

    def clear(self) -> bool:
        return remove_record(self.layout.default_file)


class Activator:
    def __init__(self, layout: StoreLayout, registry: InstalledRegistry, defaults: DefaultStore) -> None:
        self.layout = layout
        self.registry = registry
        self.defaults = defaults

    # ------------------------ pointer ------------------------

    def use(self, tag: str) -> Path:
        """Point ``current`` at ``tag`` with a single rename.

        The new link is created under a temporary name first, so the old
        pointer stays intact until ``os.replace`` swaps it in one step.
        """
        with store_lock(self.layout.lock_file):
            sweep_orphans(self.layout)
            if not self.registry.is_installed(tag):
                raise NotInstalledError(tag)
            target = self.registry.path(tag)
            link = self.layout.current_link
            tmp_link = link.with_name(f"{link.name}{CURRENT_TMP_INFIX}{os.getpid()}-{secrets.token_hex(4)}")
            os.symlink(target, tmp_link, target_is_directory=True)
            try:
                os.replace(tmp_link, link)
            except BaseException:
                if tmp_link.is_symlink():
                    tmp_link.unlink()
                raise
        logger.debug("current -> %s", target)
        return target

    def current_pointer(self) -> Optional[str]:
        """Tag referenced by the pointer itself, ignoring the default."""
        link = self.layout.current_link
        if not link.is_symlink():
            return None
        return Path(os.readlink(link)).name or None

    def current(self) -> Optional[str]:
        pointer = self.current_pointer()
        if pointer is not None:
            return pointer
        return self.defaults.get()

    def clear_pointer(self) -> bool:
        link = self.layout.current_link
        if not link.is_symlink():
            return False
        link.unlink()
        return True

    # ------------------------ default ------------------------

    def set_default(self, tag: str) -> None:
        with store_lock(self.layout.lock_file):
            if not self.registry.is_installed(tag):
                raise NotInstalledError(tag)
            self.defaults.set(tag)

    def get_default(self) -> Optional[str]:
        return self.defaults.get()

    def clear_default(self) -> bool:
        with store_lock(self.layout.lock_file):
            return self.defaults.clear()
