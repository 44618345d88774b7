"""Struct bindings that trace every call and report errors raised by it.

Tracing only observes: the native call always runs and its result is
returned unchanged.
"""

from __future__ import annotations

from ..naming import parameter_list
from ..registry import CommandDef, Registry
from ..typemaps import display_name, error_name, is_callback_type, no_error_value
from . import common
from .base import Sink
from .common import INDENT
from .struct_gen import method_signature, write_load_with

ERROR_QUERY = "GetError"


class DebugStructGenerator:
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


def trace_line(registry: Registry, cmd: CommandDef) -> str:
    """The print statement announcing a call and its arguments."""
    label = display_name(registry.api)
    placeholders: list[str] = []
    args: list[str] = []
    for param, ident in zip(cmd.params, parameter_list(cmd, True, False)):
        if is_callback_type(param.type_name):
            placeholders.append("<callback>")
        else:
            placeholders.append("{!r}")
            args.append(ident)
    template = f"[{label}] {cmd.name}({', '.join(placeholders)})"
    if not args:
        return f'print("{template}")'
    return f'print("{template}".format({", ".join(args)}))'


def write_check_error(registry: Registry, dest: Sink) -> None:
    label = display_name(registry.api)
    report = f"[{label}] ^ {error_name(registry.api)} error triggered: {{err}}"
    common.emit(
        dest,
        [
            f"{INDENT}def _check_error(self):",
            f"{INDENT * 2}if not self.{ERROR_QUERY}.is_loaded():",
            f"{INDENT * 3}return",
            f"{INDENT * 2}err = self.{ERROR_QUERY}.f()",
            f"{INDENT * 2}if err != {no_error_value(registry.api)}:",
            f'{INDENT * 3}print(f"{report}")',
        ],
        blank_before=1,
    )


def write_impl(registry: Registry, dest: Sink) -> None:
    """`load_with` plus one tracing method per command."""
    write_load_with(registry, dest)

    check_errors = registry.has_command(ERROR_QUERY)
    if check_errors:
        write_check_error(registry, dest)

    for cmd in registry.iter_cmds():
        idents = ", ".join(parameter_list(cmd, True, False))
        call = f"self.{cmd.name}.f({idents})"
        lines = [method_signature(cmd), f"{INDENT * 2}{trace_line(registry, cmd)}"]
        if check_errors and cmd.name != ERROR_QUERY:
            if cmd.return_is_void:
                lines.append(f"{INDENT * 2}{call}")
                lines.append(f"{INDENT * 2}self._check_error()")
            else:
                lines.append(f"{INDENT * 2}_r = {call}")
                lines.append(f"{INDENT * 2}self._check_error()")
                lines.append(f"{INDENT * 2}return _r")
        elif cmd.return_is_void:
            lines.append(f"{INDENT * 2}{call}")
        else:
            lines.append(f"{INDENT * 2}return {call}")
        common.emit(dest, lines, blank_before=1)
