"""Decorator that marks UVM command classes with metadata."""

from __future__ import annotations

from typing import Any, Callable, Type

from .abc import UVMAbstractCommand

_CommandCandidate = Type[Any]


def _attach_command_metadata(cls: type, *, name: str | None) -> type:
    if not isinstance(cls, type):
        raise TypeError("Decorated object must be a class.")
    setattr(cls, "__uvm_command__", {"name": name or cls.__name__.lower()})
    return cls


def uvmcommand(
    cls: _CommandCandidate | None = None,
    *,
    name: str | None = None,
) -> Callable[[_CommandCandidate], _CommandCandidate] | _CommandCandidate:
    def wrap(target: _CommandCandidate) -> _CommandCandidate:
        if not issubclass(target, UVMAbstractCommand):
            raise TypeError(
                f"{target.__name__} must subclass {UVMAbstractCommand.__name__} to be registered as command."
            )
        return _attach_command_metadata(target, name=name)

    if cls is None:
        return wrap
    return wrap(cls)
