"""Archive extraction and executable discovery."""

from __future__ import annotations

import os
import stat
import tarfile
import zlib
from pathlib import Path
from typing import Optional

from ..errors import ExtractionError

__all__ = ["extract_archive", "find_runtime_binary", "mark_executable"]

BINARY_PREFIX = "vere"


def _safe_tar_extract(tf: tarfile.TarFile, dest: Path) -> None:
    dest = dest.resolve()
    for m in tf.getmembers():
        target = (dest / m.name).resolve()
        if not str(target).startswith(str(dest) + os.sep) and target != dest:
            raise ExtractionError(f"unsafe tar member path: {m.name}")
    if hasattr(tarfile, "data_filter"):
        tf.extractall(dest, filter="tar")
    else:
        tf.extractall(dest)


def extract_archive(archive: Path, dest: Path) -> None:
    dest.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(archive, "r:*") as tf:
            _safe_tar_extract(tf, dest)
    except (tarfile.TarError, EOFError, zlib.error, OSError) as exc:
        raise ExtractionError(f"failed to extract {archive.name}: {exc}") from exc


def mark_executable(directory: Path) -> None:
    """Add the executable bits to the regular files at the top of ``directory``."""
    for entry in directory.iterdir():
        if entry.is_file() and not entry.is_symlink():
            mode = entry.stat().st_mode
            entry.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def find_runtime_binary(directory: Path) -> Optional[Path]:
    candidates = sorted(
        path
        for path in directory.rglob(f"{BINARY_PREFIX}*")
        if path.is_file() and not path.is_symlink() and os.access(path, os.X_OK)
    )
    if not candidates:
        return None
    # shallowest match wins, then name order
    return min(candidates, key=lambda path: (len(path.relative_to(directory).parts), str(path)))
