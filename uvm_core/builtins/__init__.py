"""Helper utilities for registering built-in UVM commands."""

from __future__ import annotations

from typing import Sequence

from uvm_core.commands import CommandEntry, CommandRegistry

from .activate import CurrentCommand, DefaultCommand, UseCommand
from .aliases import AliasCommand, UnaliasCommand
from .commands import DetectPlatformCommand, HelpCommand, VersionCommand
from .install import InstallCommand, ListRemoteCommand
from .query import ListCommand, WhichCommand
from .run import ExecCommand, RunCommand
from .uninstall import UninstallCommand

__all__ = ["register_builtin_commands"]

_BUILTIN_COMMANDS: Sequence[type] = (
    InstallCommand,
    UseCommand,
    CurrentCommand,
    ListCommand,
    ListRemoteCommand,
    UninstallCommand,
    RunCommand,
    ExecCommand,
    DefaultCommand,
    WhichCommand,
    AliasCommand,
    UnaliasCommand,
    VersionCommand,
    DetectPlatformCommand,
    HelpCommand,
)


def register_builtin_commands(registry: CommandRegistry) -> None:
    """Register the built-in UVM command classes with the supplied registry."""

    for command in _BUILTIN_COMMANDS:
        metadata = getattr(command, "__uvm_command__", None)
        if metadata is None:
            continue
        registry.register(CommandEntry(name=str(metadata["name"]), target=command))
