"""Capability interfaces shared by the generators."""

from __future__ import annotations

from typing import Protocol

from ..registry import Registry


class Sink(Protocol):
    """Append-only text destination. Write failures raise OSError."""

    def write(self, text: str, /) -> object: ...


class Generator(Protocol):
    """One emission strategy turning a registry into a bindings module."""

    def emit(self, registry: Registry, dest: Sink) -> None: ...
