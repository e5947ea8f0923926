"""Commands that launch the runtime or another program against a version."""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
from argparse import ArgumentParser, Namespace

from uvm_core.api import uvmcommand

from .commands import _StoreAwareCommand

logger = logging.getLogger(__name__)


@uvmcommand(name="run")
class RunCommand(_StoreAwareCommand):
    """Run urbit with a specific version; replaces the uvm process."""

    install_hint = True

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", help="Version, tag or alias")
        parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments passed to urbit")

    def execute(self, args: Namespace) -> int:
        manager = self.app.manager
        tag = manager.resolve(args.version, cwd=self.app.cwd)
        binary = manager.which(tag)
        argv = [str(binary), *list(args.args or [])]
        logger.debug("exec %s", argv)
        os.execv(binary, argv)
        return 0


@uvmcommand(name="exec")
class ExecCommand(_StoreAwareCommand):
    """Execute a command with the version directory first on PATH."""

    install_hint = True

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", help="Version, tag or alias")
        parser.add_argument("command", nargs=argparse.REMAINDER, help="Command to execute")

    def execute(self, args: Namespace) -> int:
        command = list(args.command or [])
        if command and command[0] == "--":
            command = command[1:]
        if not command:
            return self.fail("command required")
        manager = self.app.manager
        tag = manager.resolve(args.version, cwd=self.app.cwd)
        version_dir = manager.require_installed(tag)

        env = dict(os.environ)
        env["PATH"] = os.pathsep.join(filter(None, [str(version_dir), env.get("PATH", "")]))
        try:
            proc = subprocess.run(command, env=env, check=False)
        except FileNotFoundError:
            return self.fail(f"command not found: {command[0]}")
        if proc.returncode < 0:
            # killed by signal N: exit 128 + N
            return 128 - proc.returncode
        return proc.returncode
