"""Turns raw user input into a canonical version tag."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..errors import ResolutionError
from .aliases import AliasStore
from .tags import normalize_tag

logger = logging.getLogger(__name__)

__all__ = ["MAX_ALIAS_DEPTH", "PIN_FILE_NAME", "Resolver", "read_project_pin"]

MAX_ALIAS_DEPTH = 32
PIN_FILE_NAME = ".uvmrc"


def read_project_pin(directory: Path | str | None = None) -> Optional[str]:
    """Return the raw version held by ``.uvmrc`` in ``directory``, if any."""
    base = Path(directory) if directory is not None else Path.cwd()
    pin = base / PIN_FILE_NAME
    if not pin.is_file():
        return None
    try:
        text = pin.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ResolutionError(ResolutionError.INVALID_PIN, f"cannot read {pin}: {exc}") from exc
    value = text.replace("\r", "").replace("\n", "").strip()
    return value or None


class Resolver:
    def __init__(self, aliases: AliasStore) -> None:
        self.aliases = aliases

    def resolve(self, raw: str) -> str:
        """Follow alias chains, then normalize the format.

        Existence is not checked; that is the registry's job.
        """
        value = (raw or "").strip()
        if not value:
            raise ResolutionError(ResolutionError.EMPTY_INPUT, "no version specified")

        visited: list[str] = []
        while True:
            target = self.aliases.get(value)
            if target is None:
                break
            if value in visited:
                chain = " -> ".join([*visited, value])
                raise ResolutionError(ResolutionError.CYCLE, f"alias cycle detected: {chain}")
            visited.append(value)
            if len(visited) > MAX_ALIAS_DEPTH:
                raise ResolutionError(
                    ResolutionError.CYCLE,
                    f"alias chain starting at '{visited[0]}' exceeds {MAX_ALIAS_DEPTH} hops",
                )
            logger.debug("alias %s -> %s", value, target)
            value = target

        return normalize_tag(value)

    def resolve_or_pin(self, raw: Optional[str], cwd: Path | str | None = None) -> str:
        """Resolve ``raw``, falling back to the project pin when it is empty."""
        value = (raw or "").strip()
        if not value:
            pinned = read_project_pin(cwd)
            if pinned is None:
                raise ResolutionError(
                    ResolutionError.EMPTY_INPUT,
                    f"no version specified and no {PIN_FILE_NAME} found",
                )
            logger.debug("using version %s from %s", pinned, PIN_FILE_NAME)
            value = pinned
        return self.resolve(value)
