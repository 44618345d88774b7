"""Process-wide bindings: free functions dispatching through one static table.

The `storage` table is plain mutable module state. Loading is not
synchronized; the embedding application loads once before any thread calls
through the table.
"""

from __future__ import annotations

from ..naming import parameter_list, return_annotation, wrapper_name
from ..registry import Registry
from . import common
from .base import Sink
from .common import INDENT


class GlobalGenerator:
    def emit(self, registry: Registry, dest: Sink) -> None:
        common.write_file_header(registry, dest)
        common.write_header(dest, False)
        common.write_metaloadfn(dest)
        common.write_type_aliases(registry, dest)
        common.write_enums(registry, dest)
        common.write_fn_types(registry, dest)
        write_fns(registry, dest)
        common.write_panicking_fns(registry, dest)
        common.write_fnptr_struct_def(dest, True)
        write_ptrs(registry, dest)
        write_fn_mods(registry, dest)
        write_load_fn(registry, dest)


def write_fns(registry: Registry, dest: Sink) -> None:
    """One free function per command, calling its slot in `storage`."""
    for cmd in registry.iter_cmds():
        params = ", ".join(parameter_list(cmd, True, True))
        idents = ", ".join(parameter_list(cmd, True, False))
        call = f"storage.{cmd.name}.f({idents})"
        lines = common.fallbacks_comment(registry, cmd)
        lines.append(
            f"def {wrapper_name(cmd.name)}({params}) -> {return_annotation(cmd)}:"
        )
        lines.append(f"{INDENT}{call}" if cmd.return_is_void else f"{INDENT}return {call}")
        common.emit(dest, lines)


def write_ptrs(registry: Registry, dest: Sink) -> None:
    """The `storage` table: one unloaded FnPtr per command."""
    lines = [
        "class storage:",
        f'{INDENT}"""One function-pointer slot per command, shared by the whole process."""',
    ]
    if registry.cmds:
        lines.append("")
    for cmd in registry.iter_cmds():
        lines.append(
            f'{INDENT}{cmd.name} = FnPtr(None, fntypes.{cmd.name}, "{cmd.name}")'
        )
    common.emit(dest, lines)


def write_fn_mods(registry: Registry, dest: Sink) -> None:
    """One loader namespace per command with `is_loaded` and `load_with`."""
    for cmd in registry.iter_cmds():
        common.emit(
            dest,
            [
                f"class {cmd.name}:",
                f'{INDENT}"""Loader for {wrapper_name(cmd.name)}()."""',
                "",
                f"{INDENT}@staticmethod",
                f"{INDENT}def is_loaded() -> bool:",
                f"{INDENT * 2}return storage.{cmd.name}.loaded",
                "",
                f"{INDENT}@staticmethod",
                f"{INDENT}def load_with(loadfn) -> None:",
                f"{INDENT * 2}storage.{cmd.name} = {common.fnptr_new(registry, cmd)}",
            ],
        )


def write_load_fn(registry: Registry, dest: Sink) -> None:
    """The module-level `load_with`, loading every command in registry order."""
    lines = [
        "def load_with(loadfn) -> None:",
        f'{INDENT}"""Load each {registry.api} symbol using a custom load function.',
        "",
        f"{INDENT}`loadfn` maps a symbol name to its address, or None when the symbol",
        f"{INDENT}is unavailable. Every call probes all symbols again.",
        "",
        f"{INDENT}    load_with(glfw.get_proc_address)",
        f'{INDENT}"""',
    ]
    for cmd in registry.iter_cmds():
        lines.append(f"{INDENT}{cmd.name}.load_with(loadfn)")
    common.emit(dest, lines)
