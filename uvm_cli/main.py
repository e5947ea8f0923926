"""UVM CLI entrypoint backed by the built-in command registry."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from uvm_core.app import UVMApp
from uvm_core.builtins.commands import UVM_VERSION, command_description, print_overview
from uvm_core.commands import CommandNotFoundError

_HELP_TOKENS = ("-h", "--help")


def main(
    argv: Sequence[str] | None = None,
    *,
    cwd: Path | str | None = None,
    app: UVMApp | None = None,
) -> int:
    """Resolve and run a UVM command."""

    tokens = list(argv) if argv is not None else list(sys.argv[1:])
    tokens, verbose, overrides = _extract_global_options(tokens)
    _configure_logging(verbose)

    if "--version" in tokens[:1]:
        print(UVM_VERSION)
        return 0

    if app is None:
        app = UVMApp(cwd=cwd, cli_overrides=overrides)
    app.bootstrap()

    if not tokens or tokens[0] in _HELP_TOKENS:
        return print_overview(app.commands.entries())

    name, command_args = tokens[0], tokens[1:]
    try:
        entry = app.commands.resolve(name)
    except CommandNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print("Run 'uvm help' for usage information", file=sys.stderr)
        return 1

    parser = argparse.ArgumentParser(
        prog=f"uvm {entry.name}",
        description=command_description(entry.target),
    )
    entry.target.configure(parser)

    try:
        parsed_args = parser.parse_args(command_args)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    command = entry.target(app)
    return to_int(command.run(parsed_args))


def _extract_global_options(tokens: list[str]) -> tuple[list[str], bool, dict[str, str]]:
    verbose = bool(os.environ.get("UVM_DEBUG"))
    overrides: dict[str, str] = {}
    while tokens:
        head = tokens[0]
        if head in ("-v", "--verbose"):
            verbose = True
            tokens = tokens[1:]
        elif head == "--home" and len(tokens) > 1:
            overrides["home"] = tokens[1]
            tokens = tokens[2:]
        elif head.startswith("--home="):
            overrides["home"] = head.split("=", 1)[1]
            tokens = tokens[1:]
        else:
            break
    return tokens, verbose, overrides


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def to_int(result: int | None) -> int:
    return 0 if result is None else result
