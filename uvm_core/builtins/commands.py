"""Shared command base and the informational built-in commands."""

from __future__ import annotations

import inspect
import sys
from abc import abstractmethod
from argparse import ArgumentParser, Namespace
from typing import TYPE_CHECKING, Iterable

from uvm_builtin.errors import NotInstalledError, UVMError
from uvm_builtin.install import detect_platform
from uvm_core.api import UVMAbstractCommand, uvmcommand

if TYPE_CHECKING:
    from uvm_core.app import UVMApp
    from uvm_core.commands import CommandEntry

UVM_VERSION = "1.0.0"

_EXAMPLES = """\
Examples:
  uvm install vere-v3.4         Install vere version 3.4
  uvm use vere-v3.4             Switch to vere version 3.4
  uvm run vere-v3.4 --help      Run urbit v3.4 with --help
  uvm ls-remote                 List all available versions"""


def command_description(target: type) -> str:
    return (inspect.getdoc(target) or "").strip()


def print_overview(entries: Iterable["CommandEntry"]) -> int:
    """Show the global help listing."""

    print("UVM (Urbit Version Manager) - Manage urbit/vere versions\n")
    print("Usage: uvm [--verbose] [--home PATH] <command> [args...]\n")
    print("Commands:")
    for entry in entries:
        lines = command_description(entry.target).splitlines()
        short = lines[0] if lines else ""
        print(f"  {entry.name:<18} {short}")
    print()
    print(_EXAMPLES)
    return 0


class _StoreAwareCommand(UVMAbstractCommand):
    """Commands that operate on the version store.

    ``run`` turns any ``UVMError`` into a one-line report and exit status 1;
    subclasses implement ``execute``.
    """

    install_hint = False

    def __init__(self, app: "UVMApp | None" = None) -> None:
        if app is None:
            from uvm_core.app import UVMApp

            app = UVMApp()
        self.app = app

    @property
    def command_name(self) -> str:
        return getattr(type(self), "__uvm_command__", {}).get("name", type(self).__name__)

    def run(self, args: Namespace) -> int:
        try:
            return self.execute(args)
        except UVMError as exc:
            return self.fail(exc)

    @abstractmethod
    def execute(self, args: Namespace) -> int:
        """Command body; may raise ``UVMError``."""

    def say(self, message: str) -> None:
        print(f"[uvm:{self.command_name}] {message}")

    def warn(self, message: str) -> None:
        print(f"[uvm:{self.command_name}] warning: {message}", file=sys.stderr)

    def fail(self, exc: Exception | str) -> int:
        print(f"[uvm:{self.command_name}] error: {exc}", file=sys.stderr)
        if self.install_hint and isinstance(exc, NotInstalledError):
            print(f"Run 'uvm install {exc.tag}' to install it", file=sys.stderr)
        return 1


@uvmcommand(name="help")
class HelpCommand(_StoreAwareCommand):
    """Show this help."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        pass

    def execute(self, args: Namespace) -> int:
        self.app.bootstrap()
        return print_overview(self.app.commands.entries())


@uvmcommand(name="version")
class VersionCommand(_StoreAwareCommand):
    """Show the uvm version."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        pass

    def execute(self, args: Namespace) -> int:
        print(UVM_VERSION)
        return 0


@uvmcommand(name="detect-platform")
class DetectPlatformCommand(_StoreAwareCommand):
    """Print the <os>-<arch> string used to pick release assets."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        pass

    def execute(self, args: Namespace) -> int:
        print(self.app.platform_id or detect_platform())
        return 0
