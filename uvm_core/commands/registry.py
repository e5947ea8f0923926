"""In-memory registry for UVM commands."""

from __future__ import annotations

from .entry import CommandEntry
from .errors import CommandCollisionError, CommandNotFoundError


class CommandRegistry:
    """Tracks the closed set of commands by name."""

    def __init__(self) -> None:
        self._by_name: dict[str, CommandEntry] = {}

    def register(self, entry: CommandEntry) -> None:
        if entry.name in self._by_name:
            raise CommandCollisionError(f"{entry.name} is already registered.")
        self._by_name[entry.name] = entry

    def resolve(self, name: str) -> CommandEntry:
        entry = self._by_name.get(name)
        if entry is None:
            raise CommandNotFoundError(f"Unknown command '{name}'")
        return entry

    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def entries(self) -> tuple[CommandEntry, ...]:
        """Return entries in registration order."""

        return tuple(self._by_name.values())
