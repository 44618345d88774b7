"""Per-context bindings: one aggregate instance holding every function pointer."""

from __future__ import annotations

from ..naming import parameter_list, return_annotation, struct_name, wrapper_name
from ..registry import CommandDef, Registry
from . import common
from .base import Sink
from .common import INDENT


class StructGenerator:
    def emit(self, registry: Registry, dest: Sink) -> None:
        common.write_file_header(registry, dest)
        common.write_header(dest, True)
        common.write_metaloadfn(dest)
        common.write_type_aliases(registry, dest)
        common.write_enums(registry, dest)
        common.write_fn_types(registry, dest)
        common.write_fnptr_struct_def(dest, False)
        common.write_panicking_fns(registry, dest)
        common.write_struct(registry, dest, False)
        write_impl(registry, dest)


def write_load_with(registry: Registry, dest: Sink) -> None:
    """The `load_with` classmethod building a fresh, fully probed instance.

    Shared with DebugStructGenerator.
    """
    name = struct_name(registry.api)
    lines = [
        f"{INDENT}@classmethod",
        f"{INDENT}def load_with(cls, loadfn):",
        f'{INDENT * 2}"""Load each {registry.api} symbol using a custom load function.',
        "",
        f"{INDENT * 2}`loadfn` maps a symbol name to its address, or None when the symbol",
        f"{INDENT * 2}is unavailable. Unresolved commands stay callable but raise",
        f"{INDENT * 2}NotLoadedError. Every call probes all symbols again.",
        "",
        f"{INDENT * 2}    gl = {name}.load_with(glfw.get_proc_address)",
        f'{INDENT * 2}"""',
        f"{INDENT * 2}fnptrs = {{}}",
    ]
    for cmd in registry.iter_cmds():
        lines.append(
            f'{INDENT * 2}fnptrs["{cmd.name}"] = {common.fnptr_new(registry, cmd)}'
        )
    lines.append(f"{INDENT * 2}return cls(_PRIV, fnptrs)")
    common.emit(dest, lines, blank_before=1)


def method_signature(cmd: CommandDef) -> str:
    params = ", ".join(["self", *parameter_list(cmd, True, True)])
    return f"{INDENT}def {wrapper_name(cmd.name)}({params}) -> {return_annotation(cmd)}:"


def write_impl(registry: Registry, dest: Sink) -> None:
    """`load_with` plus one method per command, appended to the open class."""
    write_load_with(registry, dest)

    for cmd in registry.iter_cmds():
        idents = ", ".join(parameter_list(cmd, True, False))
        call = f"self.{cmd.name}.f({idents})"
        body = call if cmd.return_is_void else f"return {call}"
        common.emit(
            dest,
            [method_signature(cmd), f"{INDENT * 2}{body}"],
            blank_before=1,
        )
