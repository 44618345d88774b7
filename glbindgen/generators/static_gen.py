"""Bindings linked against the platform library when the module is imported."""

from __future__ import annotations

from ..naming import parameter_list, return_annotation, wrapper_name
from ..registry import Registry
from . import common
from .base import Sink
from .common import INDENT


class StaticGenerator:
    def emit(self, registry: Registry, dest: Sink) -> None:
        common.write_file_header(registry, dest)
        common.write_header(dest, False)
        common.write_type_aliases(registry, dest)
        common.write_enums(registry, dest)
        common.write_fn_types(registry, dest)
        common.write_library_loader(registry, dest)
        common.write_extern_symbols(registry, dest)
        write_fns(registry, dest)


def write_fns(registry: Registry, dest: Sink) -> None:
    """Free functions calling the linked symbols, plus a stub `load_with`."""
    for cmd in registry.iter_cmds():
        params = ", ".join(parameter_list(cmd, True, True))
        idents = ", ".join(parameter_list(cmd, True, False))
        call = f"_extern.{cmd.name}({idents})"
        common.emit(
            dest,
            [
                f"def {wrapper_name(cmd.name)}({params}) -> {return_annotation(cmd)}:",
                f"{INDENT}{call}" if cmd.return_is_void else f"{INDENT}return {call}",
            ],
        )

    common.emit(
        dest,
        [
            "def load_with(loadfn) -> None:",
            f'{INDENT}"""Stub. Symbols are linked when the module is imported."""',
        ],
    )
