"""Layout of the ~/.uvm store."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "ALIASES_DIR_NAME",
    "CURRENT_LINK_NAME",
    "DEFAULT_FILE_NAME",
    "LOCK_FILE_NAME",
    "STAGING_PREFIX",
    "StoreLayout",
    "VERSIONS_DIR_NAME",
]

VERSIONS_DIR_NAME = "versions"
ALIASES_DIR_NAME = "aliases"
CURRENT_LINK_NAME = "current"
DEFAULT_FILE_NAME = "default"
LOCK_FILE_NAME = ".lock"
STAGING_PREFIX = ".staging-"
TRASH_PREFIX = ".trash-"


@dataclass(frozen=True)
class StoreLayout:
    """Paths that make up a version store rooted at ``home``."""

    home: Path
    versions_dir: Path
    aliases_dir: Path
    current_link: Path
    default_file: Path
    lock_file: Path

    @classmethod
    def from_home(cls, home: Path | str) -> "StoreLayout":
        root = Path(home).expanduser().absolute()
        return cls(
            home=root,
            versions_dir=root / VERSIONS_DIR_NAME,
            aliases_dir=root / ALIASES_DIR_NAME,
            current_link=root / CURRENT_LINK_NAME,
            default_file=root / DEFAULT_FILE_NAME,
            lock_file=root / LOCK_FILE_NAME,
        )

    def ensure(self) -> None:
        """Create the directory skeleton; safe to call on every invocation."""
        for directory in (self.home, self.versions_dir, self.aliases_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def version_dir(self, tag: str) -> Path:
        return self.versions_dir / tag

    def alias_file(self, name: str) -> Path:
        return self.aliases_dir / name
