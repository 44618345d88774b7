"""Statically linked bindings behind the same instance interface as StructGenerator."""

from __future__ import annotations

from ..naming import parameter_list
from ..registry import Registry
from . import common
from .base import Sink
from .common import INDENT
from .struct_gen import method_signature


class StaticStructGenerator:
    def emit(self, registry: Registry, dest: Sink) -> None:
        common.write_file_header(registry, dest)
        common.write_header(dest, False)
        common.write_type_aliases(registry, dest)
        common.write_enums(registry, dest)
        common.write_fn_types(registry, dest)
        common.write_struct(registry, dest, True)
        write_impl(registry, dest)
        common.write_library_loader(registry, dest)
        common.write_extern_symbols(registry, dest)


def write_impl(registry: Registry, dest: Sink) -> None:
    common.emit(
        dest,
        [
            f"{INDENT}@classmethod",
            f"{INDENT}def load_with(cls, loadfn):",
            f'{INDENT * 2}"""Stub. Symbols are linked when the module is imported."""',
            f"{INDENT * 2}return cls()",
        ],
        blank_before=1,
    )

    for cmd in registry.iter_cmds():
        idents = ", ".join(parameter_list(cmd, True, False))
        call = f"_extern.{cmd.name}({idents})"
        body = call if cmd.return_is_void else f"return {call}"
        common.emit(
            dest,
            [method_signature(cmd), f"{INDENT * 2}{body}"],
            blank_before=1,
        )
