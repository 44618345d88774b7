"""Emission helpers shared by every generator.

Each helper streams one block of the generated module to `dest`. Blocks are
separated by two blank lines and carry no trailing blank line, so helpers can
be composed in any order a generator needs.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..naming import enum_ident, parameter_list, struct_name, symbol_name
from ..registry import CommandDef, Registry
from ..typemaps import default_enum_type, library_names, type_alias_table
from .base import Sink

_HEADER_BORDER: str = "# x-------------------------------------------x #"

INDENT = "    "


def emit(dest: Sink, lines: Iterable[str], blank_before: int = 2) -> None:
    """Write one block of lines, preceded by `blank_before` empty lines."""
    dest.write("\n" * blank_before + "\n".join(lines) + "\n")


def str_tuple(names: Iterable[str]) -> str:
    """Render names as a Python tuple literal of double-quoted strings."""
    quoted = [f'"{name}"' for name in names]
    if not quoted:
        return "()"
    if len(quoted) == 1:
        return f"({quoted[0]},)"
    return f"({', '.join(quoted)})"


def prototype(cmd: CommandDef) -> str:
    """The `_FUNCTYPE(restype, *argtypes)` expression of a command."""
    return f"_FUNCTYPE({', '.join([cmd.return_type, *parameter_list(cmd, False, True)])})"


def fnptr_new(registry: Registry, cmd: CommandDef, loadfn: str = "loadfn") -> str:
    """The load-site expression building a command's FnPtr."""
    symbol = symbol_name(registry.api, cmd.name)
    fallbacks = str_tuple(
        symbol_name(registry.api, name) for name in registry.fallbacks(cmd.name)
    )
    return (
        f'FnPtr(metaloadfn({loadfn}, "{symbol}", {fallbacks}), '
        f'fntypes.{cmd.name}, "{cmd.name}")'
    )


def fallbacks_comment(registry: Registry, cmd: CommandDef) -> list[str]:
    fallbacks = registry.fallbacks(cmd.name)
    if not fallbacks:
        return []
    return [f"# Fallbacks: {', '.join(fallbacks)}"]


# ===--- Preamble ---=== #


def write_file_header(registry: Registry, dest: Sink) -> None:
    """Boxed comment banner at the top of every generated module.

    Output format:
        # x-------------------------------------------x #
        # | gl bindings for Python (ctypes)
        # | Generated by glbindgen. Do not edit.
        # | Version: 4.5 (core)
        # | Extensions: GL_ARB_debug_output, GL_KHR_debug
        # x-------------------------------------------x #

    The Version line is omitted when the registry carries no version, the
    profile suffix when it carries no profile, and the Extensions line when
    it lists none. Extensions are sorted for deterministic output.
    """
    lines = [
        _HEADER_BORDER,
        f"# | {registry.api} bindings for Python (ctypes)",
        "# | Generated by glbindgen. Do not edit.",
    ]
    if registry.version:
        profile = f" ({registry.profile})" if registry.profile else ""
        lines.append(f"# | Version: {registry.version}{profile}")
    if registry.extensions:
        lines.append(f"# | Extensions: {', '.join(sorted(registry.extensions))}")
    lines.append(_HEADER_BORDER)
    emit(dest, lines, blank_before=0)


def write_header(dest: Sink, thread_safe: bool) -> None:
    """Imports and the platform calling convention.

    thread_safe == True: DebugStructGenerator, StructGenerator
    thread_safe == False: GlobalGenerator, StaticGenerator, StaticStructGenerator
    """
    lines = [
        "import ctypes",
        "import ctypes.util",
        "import functools",
        "import sys",
        "from ctypes import POINTER",
        "",
        'if sys.platform == "win32":',
        f"{INDENT}_FUNCTYPE = ctypes.WINFUNCTYPE",
        "else:",
        f"{INDENT}_FUNCTYPE = ctypes.CFUNCTYPE",
    ]
    emit(dest, lines, blank_before=1)

    if thread_safe:
        emit(
            dest,
            [
                "class _Shareable:",
                f'{INDENT}"""Binding sets that may be shared between threads.',
                "",
                f"{INDENT}Every slot is written once while loading. Afterwards assignment is",
                f"{INDENT}rejected, so concurrent readers always observe the loaded state.",
                f'{INDENT}"""',
                "",
                f"{INDENT}__slots__ = ()",
                "",
                f"{INDENT}def __setattr__(self, name, value):",
                f'{INDENT * 2}raise AttributeError(f"{{type(self).__name__}} is read-only once loaded")',
                "",
                f"{INDENT}def __delattr__(self, name):",
                f'{INDENT * 2}raise AttributeError(f"{{type(self).__name__}} is read-only once loaded")',
            ],
        )


def write_type_aliases(registry: Registry, dest: Sink) -> None:
    """The `types` namespace with one ctypes alias per native type."""
    lines = [
        "class types:",
        f'{INDENT}"""Native {registry.api} types."""',
        "",
    ]
    for name, expr in type_alias_table(registry.api):
        lines.append(f"{INDENT}{name} = {expr}")
    emit(dest, lines)


def write_enums(registry: Registry, dest: Sink) -> None:
    """One module-level constant per enum, coerced through its native type."""
    default_ty = default_enum_type(registry.api)
    lines = ["# ========= ENUMS ========="]
    for enm in registry.iter_enums():
        value = f"0x{enm.value:X}" if enm.value >= 0 else str(enm.value)
        ty = enm.ty or default_ty
        lines.append(f"{enum_ident(enm.name)} = types.{ty}({value}).value")
    emit(dest, lines)


def write_fn_types(registry: Registry, dest: Sink) -> None:
    """The `fntypes` namespace: the native prototype of every command.

    Storage, loaders and linked symbols all cast through these prototypes.
    """
    lines = [
        "class fntypes:",
        f'{INDENT}"""Native prototype of every {registry.api} command."""',
    ]
    if registry.cmds:
        lines.append("")
    for cmd in registry.iter_cmds():
        lines.append(f"{INDENT}{cmd.name} = {prototype(cmd)}")
    emit(dest, lines)


# ===--- Loading ---=== #


def write_metaloadfn(dest: Sink) -> None:
    """The symbol resolution shared by the loading generators."""
    emit(
        dest,
        [
            "def metaloadfn(loadfn, symbol, fallbacks):",
            f'{INDENT}"""Probe `symbol`, then each fallback in order.',
            "",
            f"{INDENT}Returns the first non-null address, or the last null result.",
            f'{INDENT}"""',
            f"{INDENT}ptr = loadfn(symbol)",
            f"{INDENT}if not ptr:",
            f"{INDENT * 2}for sym in fallbacks:",
            f"{INDENT * 3}ptr = loadfn(sym)",
            f"{INDENT * 3}if ptr:",
            f"{INDENT * 4}break",
            f"{INDENT}return ptr",
        ],
    )


def write_fnptr_struct_def(dest: Sink, is_eager: bool) -> None:
    """The `FnPtr` record holding the store for a single binding.

    is_eager == True: GlobalGenerator
    is_eager == False: DebugStructGenerator, StructGenerator
    """
    lines = [
        "class FnPtr:",
        f'{INDENT}"""Store for a single binding.',
        "",
        f"{INDENT}ptr: resolved address, or None.",
        f"{INDENT}f: callable through the native prototype, or the missing_fn_panic stub.",
        f"{INDENT}loaded: True if `f` calls a real function.",
        f'{INDENT}"""',
        "",
        f'{INDENT}__slots__ = ("ptr", "f", "loaded")',
        "",
        f"{INDENT}def __init__(self, ptr, fntype, name):",
        f"{INDENT * 2}if ptr:",
        f"{INDENT * 3}self.ptr = ptr",
        f"{INDENT * 3}self.f = fntype(ptr)",
        f"{INDENT * 3}self.loaded = True",
        f"{INDENT * 2}else:",
        f"{INDENT * 3}self.ptr = None",
        f"{INDENT * 3}self.f = functools.partial(missing_fn_panic, name)",
        f"{INDENT * 3}self.loaded = False",
    ]
    if not is_eager:
        lines.extend(
            [
                "",
                f"{INDENT}def clone(self):",
                f"{INDENT * 2}other = FnPtr.__new__(FnPtr)",
                f"{INDENT * 2}other.ptr = self.ptr",
                f"{INDENT * 2}other.f = self.f",
                f"{INDENT * 2}other.loaded = self.loaded",
                f"{INDENT * 2}return other",
                "",
                f"{INDENT}__copy__ = clone",
                "",
                f"{INDENT}def is_loaded(self):",
                f'{INDENT * 2}"""Returns True if the function has been successfully loaded.',
                "",
                f"{INDENT * 2}If it returns False, calling the corresponding function will fail.",
                f'{INDENT * 2}"""',
                f"{INDENT * 2}return self.loaded",
            ]
        )
    emit(dest, lines)


def write_panicking_fns(registry: Registry, dest: Sink) -> None:
    """The stub every unresolved command is bound to.

    Calling it always raises; there is no safe value to hand back in place
    of a native entry point that does not exist.
    """
    emit(
        dest,
        [
            "class NotLoadedError(RuntimeError):",
            f'{INDENT}"""A command was called but its native symbol was never resolved."""',
            "",
            "",
            "def missing_fn_panic(name, *args):",
            f'{INDENT}raise NotLoadedError(f"{registry.api} function {{name}} was not loaded")',
        ],
    )


def write_struct(registry: Registry, dest: Sink, is_stub: bool) -> None:
    """The aggregate class named after the API.

    The class body is left open: the generator appends its methods right
    after this block.

    is_stub == True: StaticStructGenerator
    is_stub == False: DebugStructGenerator, StructGenerator
    """
    name = struct_name(registry.api)
    if is_stub:
        emit(
            dest,
            [
                f"class {name}:",
                f'{INDENT}"""Statically linked {registry.api} binding set. Holds no storage."""',
                "",
                f"{INDENT}__slots__ = ()",
            ],
        )
        return

    lines = [
        "_PRIV = object()",
        "",
        "",
        f"class {name}(_Shareable):",
        f'{INDENT}"""Function pointers for one {registry.api} binding set.',
        "",
        f"{INDENT}Instances are built by `{name}.load_with`; several may coexist, one",
        f"{INDENT}per native context.",
        f'{INDENT}"""',
        "",
        f"{INDENT}__slots__ = (",
        f'{INDENT * 2}"_priv",',
    ]
    for cmd in registry.iter_cmds():
        lines.extend(f"{INDENT * 2}{c}" for c in fallbacks_comment(registry, cmd))
        lines.append(f'{INDENT * 2}"{cmd.name}",')
    lines.extend(
        [
            f"{INDENT})",
            "",
            f"{INDENT}def __init__(self, _priv, fnptrs):",
            f"{INDENT * 2}if _priv is not _PRIV:",
            f'{INDENT * 3}raise TypeError("{name} instances are created by {name}.load_with()")',
            f'{INDENT * 2}object.__setattr__(self, "_priv", _priv)',
            f"{INDENT * 2}for slot, fnptr in fnptrs.items():",
            f"{INDENT * 3}object.__setattr__(self, slot, fnptr)",
            "",
            f"{INDENT}def __copy__(self):",
            f"{INDENT * 2}fnptrs = {{slot: getattr(self, slot).clone() for slot in self.__slots__[1:]}}",
            f"{INDENT * 2}return type(self)(_PRIV, fnptrs)",
        ]
    )
    emit(dest, lines)


# ===--- Linking ---=== #


def write_library_loader(registry: Registry, dest: Sink) -> None:
    """Locate and open the native library the static generators link against."""
    names = str_tuple(library_names(registry.api))
    emit(
        dest,
        [
            "def _load_library():",
            f"{INDENT}for name in {names}:",
            f"{INDENT * 2}path = ctypes.util.find_library(name)",
            f"{INDENT * 2}if path:",
            f"{INDENT * 3}return ctypes.CDLL(path)",
            f'{INDENT}raise OSError("cannot find the native {registry.api} library (tried {", ".join(library_names(registry.api))})")',
            "",
            "",
            "_lib = _load_library()",
            "",
            "",
            "def _link(symbol, fntype):",
            f'{INDENT}"""Bind `symbol` from `_lib` to the calling convention of `fntype`."""',
            f"{INDENT}return fntype(ctypes.cast(getattr(_lib, symbol), ctypes.c_void_p).value)",
        ],
    )


def write_extern_symbols(registry: Registry, dest: Sink) -> None:
    """The `_extern` namespace: every command linked from `_lib` at import."""
    lines = [
        "class _extern:",
        f'{INDENT}"""Symbols linked from the native library when the module is imported."""',
    ]
    if registry.cmds:
        lines.append("")
    for cmd in registry.iter_cmds():
        symbol = symbol_name(registry.api, cmd.name)
        lines.append(f'{INDENT}{cmd.name} = _link("{symbol}", fntypes.{cmd.name})')
    emit(dest, lines)
