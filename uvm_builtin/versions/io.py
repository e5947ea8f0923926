"""Single-value record files (aliases, default) written atomically."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

__all__ = ["read_record", "remove_record", "write_record"]


def read_record(path: Path) -> Optional[str]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except UnicodeDecodeError:
        text = path.read_text(encoding="latin-1")
    value = text.strip()
    return value or None


def write_record(path: Path, value: str) -> None:
    """Replace ``path`` with ``value`` so readers see old or new, never half."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(value + "\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def remove_record(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
