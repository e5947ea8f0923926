"""Registry entry descriptor for a UVM command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Type


@dataclass(frozen=True)
class CommandEntry:
    """Immutable descriptor for a registered command."""

    name: str
    target: Type[Any]

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name cannot be empty.")
        if any(ch.isspace() for ch in self.name):
            raise ValueError("name may not contain whitespace.")
        if not isinstance(self.target, type):
            raise TypeError("target must be a class type.")
