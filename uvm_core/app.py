"""Composition root that wires settings, the version store and the release index."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from uvm_builtin.install import Installer
from uvm_builtin.release_index import GitHubReleaseIndex, ReleaseIndex
from uvm_builtin.versions import VersionManager
from uvm_core.builtins import register_builtin_commands
from uvm_core.commands import CommandRegistry
from uvm_core.config import ConfigStore, Settings


@dataclass(frozen=True)
class UVMAppStatus:
    home: Path
    commands: Sequence[str]


class UVMApp:
    """Entry point that glues settings, the store, the release index and commands."""

    def __init__(
        self,
        *,
        cwd: Path | str | None = None,
        settings: Settings | None = None,
        config: ConfigStore | None = None,
        cli_overrides: Mapping[str, str] | None = None,
        release_index: ReleaseIndex | None = None,
        platform_id: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger("uvm_core.app")
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.config = config or ConfigStore(cli_overrides=cli_overrides)
        self.settings = settings or self.config.settings()
        self.commands = CommandRegistry()
        self.platform_id = platform_id
        self._release_index = release_index
        self._manager: VersionManager | None = None
        self._builtins_registered = False

    @property
    def manager(self) -> VersionManager:
        if self._manager is None:
            self._manager = VersionManager(self.settings.home)
            self.logger.debug("store home=%s", self._manager.layout.home)
        return self._manager

    @property
    def release_index(self) -> ReleaseIndex:
        if self._release_index is None:
            self._release_index = GitHubReleaseIndex(
                base_url=self.settings.api_url,
                timeout=self.settings.timeout,
                token=self.settings.token,
            )
        return self._release_index

    def installer(self) -> Installer:
        return Installer(
            self.manager,
            self.release_index,
            repo=self.settings.repo,
            platform_id=self.platform_id,
        )

    def bootstrap(self) -> UVMAppStatus:
        if not self._builtins_registered:
            register_builtin_commands(self.commands)
            self._builtins_registered = True
        return UVMAppStatus(home=self.settings.home, commands=self.commands.names())
