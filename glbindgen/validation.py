"""Registry input validation.

Generators trust their registry. The driver runs validate_registry first so
that a bad alias key or an unknown native type is reported here instead of
surfacing as broken generated code.
"""

from __future__ import annotations

import ast
import ctypes
import re
from collections.abc import Mapping

from .naming import enum_ident, py_ident, wrapper_name
from .registry import NO_VALUE, Api, Registry
from .typemaps import default_enum_type, type_aliases

VALID_ERROR_CODES = {
    "UNKNOWN_ALIAS_TARGET",
    "INVALID_NAME",
    "INVALID_TYPE",
    "UNMAPPED_TYPE",
    "DUPLICATE_COMMAND",
    "WRAPPER_NAME_COLLISION",
}

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
# Enum names may start with a digit; enum_ident prefixes those.
_ENUM_NAME_RE = re.compile(r"[A-Za-z0-9_]+")

# Names the generated modules and aggregates define for themselves.
RESERVED_NAMES = frozenset(
    {
        "FnPtr",
        "NotLoadedError",
        "POINTER",
        "_FUNCTYPE",
        "_PRIV",
        "_Shareable",
        "_extern",
        "_lib",
        "_link",
        "_load_library",
        "ctypes",
        "fntypes",
        "functools",
        "load_with",
        "metaloadfn",
        "missing_fn_panic",
        "storage",
        "sys",
        "types",
    }
)


class RegistryError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown registry error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


def descriptor_type_names(descriptor: str, where: str = "descriptor") -> list[str]:
    """Return the `types.X` names referenced by a type descriptor.

    Args:
        descriptor: ctypes type expression, e.g. "POINTER(types.GLchar)".
        where: Location used in error messages.

    Returns:
        Alias names in the order they appear. Empty for pure ctypes types.

    Raises:
        RegistryError: INVALID_TYPE for anything that is not a ctypes type
            expression.
    """
    try:
        tree = ast.parse(descriptor, mode="eval")
    except SyntaxError as err:
        raise RegistryError(
            "INVALID_TYPE",
            f"{where}: type descriptor {descriptor!r} is not an expression",
        ) from err

    names: list[str] = []

    def visit(node: ast.expr) -> None:
        if isinstance(node, ast.Call):
            func = node.func
            if not (isinstance(func, ast.Name) and func.id == "POINTER"):
                raise RegistryError(
                    "INVALID_TYPE",
                    f"{where}: only POINTER(...) calls are allowed in {descriptor!r}",
                )
            if len(node.args) != 1 or node.keywords:
                raise RegistryError(
                    "INVALID_TYPE",
                    f"{where}: POINTER takes exactly one type in {descriptor!r}",
                )
            visit(node.args[0])
            return
        if isinstance(node, ast.Attribute) and isinstance(node.value, ast.Name):
            if node.value.id == "types":
                names.append(node.attr)
                return
            if node.value.id == "ctypes" and hasattr(ctypes, node.attr):
                return
        raise RegistryError(
            "INVALID_TYPE",
            f"{where}: unsupported type descriptor {descriptor!r}",
            "Use types.<Name>, ctypes.<name> or POINTER(<descriptor>).",
        )

    visit(tree.body)
    return names


def _check_ident(name: str, what: str) -> None:
    if not _IDENT_RE.fullmatch(name):
        raise RegistryError("INVALID_NAME", f"{what} {name!r} is not an identifier")


def _check_mapped(
    names: list[str], known: Mapping[str, str], api: Api, where: str
) -> None:
    for name in names:
        if name not in known:
            raise RegistryError(
                "UNMAPPED_TYPE",
                f"{where}: native type {name} has no {api} type alias",
                "Add the type to the alias table in glbindgen.typemaps.",
            )


def validate_registry(registry: Registry) -> None:
    """Reject registries the generators would turn into broken bindings.

    Checks, in order: command names are unique identifiers with distinct
    wrapper names, parameter names are distinct identifiers, every type
    descriptor is a ctypes expression whose `types.X` names exist in the API's
    alias table, every alias key names a registered command and every
    fallback is an identifier, and every enum has a free identifier and a
    type that resolves. Every name checked here is written verbatim into the
    generated module.

    Raises:
        RegistryError: On the first problem found.
    """
    known = type_aliases(registry.api)

    all_names = {cmd.name for cmd in registry.iter_cmds()}
    seen: set[str] = set()
    wrappers: dict[str, str] = {}
    for cmd in registry.iter_cmds():
        if cmd.name in seen:
            raise RegistryError(
                "DUPLICATE_COMMAND",
                f"Command {cmd.name} is registered more than once",
                "Merge the duplicate entries in the registry front-end.",
            )
        seen.add(cmd.name)
        _check_ident(cmd.name, "Command name")

        snake = wrapper_name(cmd.name)
        if snake in wrappers:
            raise RegistryError(
                "WRAPPER_NAME_COLLISION",
                f"Commands {wrappers[snake]} and {cmd.name} both map to {snake}()",
            )
        if snake in RESERVED_NAMES or cmd.name in RESERVED_NAMES or snake in all_names:
            raise RegistryError(
                "WRAPPER_NAME_COLLISION",
                f"Command {cmd.name} clashes with a generated name ({snake})",
            )
        wrappers[snake] = cmd.name

        if not cmd.return_is_void:
            where = f"{cmd.name} return type"
            _check_mapped(
                descriptor_type_names(cmd.return_type, where),
                known,
                registry.api,
                where,
            )
        params_seen: set[str] = set()
        for param in cmd.params:
            where = f"{cmd.name}({param.name})"
            _check_ident(param.name, f"{cmd.name}: parameter name")
            ident = py_ident(param.name)
            if ident in params_seen:
                raise RegistryError(
                    "INVALID_NAME",
                    f"{where}: parameter {ident} is declared more than once",
                )
            params_seen.add(ident)
            if param.type_name == NO_VALUE:
                raise RegistryError(
                    "INVALID_TYPE",
                    f"{where}: {NO_VALUE} is only valid as a return type",
                )
            _check_mapped(
                descriptor_type_names(param.type_name, where),
                known,
                registry.api,
                where,
            )

    for name, fallbacks in registry.aliases.items():
        if name not in seen:
            raise RegistryError(
                "UNKNOWN_ALIAS_TARGET",
                f"Fallbacks are registered for unknown command {name}",
                "Drop the alias entry or register the command.",
            )
        for fallback in fallbacks:
            _check_ident(fallback, f"{name}: fallback name")

    default_ty = default_enum_type(registry.api)
    for enm in registry.iter_enums():
        if not _ENUM_NAME_RE.fullmatch(enm.name):
            raise RegistryError(
                "INVALID_NAME",
                f"Enum name {enm.name!r} is not an identifier",
            )
        ident = enum_ident(enm.name)
        if ident in RESERVED_NAMES or ident in all_names or ident in wrappers:
            raise RegistryError(
                "INVALID_NAME",
                f"Enum {enm.name} clashes with a generated name ({ident})",
            )
        _check_mapped([enm.ty or default_ty], known, registry.api, f"enum {enm.name}")
