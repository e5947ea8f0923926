"""Advisory exclusive lock serializing store mutations across processes."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

logger = logging.getLogger(__name__)

__all__ = ["store_lock"]


def _lock_exclusive(fd: IO[str]) -> None:
    """Acquire an exclusive lock on ``fd``, blocking while another process holds it."""
    if sys.platform == "win32":
        import msvcrt

        fd.seek(0)
        msvcrt.locking(fd.fileno(), msvcrt.LK_LOCK, 1)
    else:
        import fcntl

        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            logger.debug("store lock busy, waiting")
            fcntl.flock(fd, fcntl.LOCK_EX)


def _unlock(fd: IO[str]) -> None:
    if sys.platform == "win32":
        import msvcrt

        fd.seek(0)
        msvcrt.locking(fd.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        import fcntl

        fcntl.flock(fd, fcntl.LOCK_UN)


@contextmanager
def store_lock(lock_file: Path) -> Iterator[None]:
    """Hold the store lock for the duration of the ``with`` block."""
    lock_file.parent.mkdir(parents=True, exist_ok=True)
    with open(lock_file, "a+", encoding="utf-8") as fd:
        _lock_exclusive(fd)
        try:
            yield
        finally:
            _unlock(fd)
