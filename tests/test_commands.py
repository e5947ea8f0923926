from argparse import ArgumentParser, Namespace

import pytest

from uvm_core.api import UVMAbstractCommand, uvmcommand
from uvm_core.builtins import register_builtin_commands
from uvm_core.commands import (
    CommandCollisionError,
    CommandEntry,
    CommandNotFoundError,
    CommandRegistry,
)


@uvmcommand(name="noop")
class _NoopCommand(UVMAbstractCommand):
    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        pass

    def run(self, args: Namespace) -> int:
        return 0


def test_decorator_attaches_name() -> None:
    assert _NoopCommand.__uvm_command__ == {"name": "noop"}


def test_decorator_rejects_non_commands() -> None:
    with pytest.raises(TypeError):

        @uvmcommand(name="bad")
        class _NotACommand:
            pass


def test_registry_rejects_duplicates() -> None:
    registry = CommandRegistry()
    registry.register(CommandEntry(name="noop", target=_NoopCommand))
    with pytest.raises(CommandCollisionError):
        registry.register(CommandEntry(name="noop", target=_NoopCommand))


def test_registry_unknown_name() -> None:
    with pytest.raises(CommandNotFoundError):
        CommandRegistry().resolve("missing")


def test_builtins_registered_in_order() -> None:
    registry = CommandRegistry()
    register_builtin_commands(registry)
    names = registry.names()
    assert names[:3] == ("install", "use", "current")
    assert {"ls", "ls-remote", "uninstall", "run", "exec", "default", "which", "alias", "unalias"} <= set(names)
    assert registry.resolve("ls-remote").name == "ls-remote"
