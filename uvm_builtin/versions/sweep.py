"""Removal of leftovers from interrupted uvm processes."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from typing import Optional

from .layout import STAGING_PREFIX, TRASH_PREFIX, StoreLayout

logger = logging.getLogger(__name__)

__all__ = ["pid_alive", "sweep_orphans"]

CURRENT_TMP_INFIX = ".tmp-"


def _embedded_pid(name: str) -> Optional[int]:
    # names end in -<pid>-<hex>
    parts = name.rsplit("-", 2)
    if len(parts) != 3:
        return None
    try:
        return int(parts[1])
    except ValueError:
        return None


def pid_alive(pid: int) -> bool:
    if pid == os.getpid():
        return True
    if sys.platform == "win32":
        # no cheap liveness probe; leave the entry alone
        return True
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


def _is_orphan(name: str) -> bool:
    pid = _embedded_pid(name)
    return pid is not None and not pid_alive(pid)


def sweep_orphans(layout: StoreLayout) -> list[str]:
    """Delete staging, trash and temporary pointer entries of dead processes.

    Must be called while holding the store lock. Returns the removed names.
    """
    removed: list[str] = []
    if layout.versions_dir.is_dir():
        for entry in layout.versions_dir.iterdir():
            if not entry.name.startswith((STAGING_PREFIX, TRASH_PREFIX)):
                continue
            if not _is_orphan(entry.name):
                continue
            try:
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
            except OSError as exc:
                logger.debug("could not remove %s: %s", entry, exc)
                continue
            removed.append(entry.name)

    link_prefix = layout.current_link.name + CURRENT_TMP_INFIX
    if layout.home.is_dir():
        for entry in layout.home.iterdir():
            if entry.name.startswith(link_prefix) and entry.is_symlink() and _is_orphan(entry.name):
                try:
                    entry.unlink()
                except OSError as exc:
                    logger.debug("could not remove %s: %s", entry, exc)
                    continue
                removed.append(entry.name)

    if removed:
        logger.debug("swept orphaned entries: %s", ", ".join(sorted(removed)))
    return removed
