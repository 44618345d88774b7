"""Symbol, aggregate and parameter naming shared by every generator."""

from __future__ import annotations

import keyword
import re

from .registry import NO_VALUE, Api, CommandDef

SYMBOL_PREFIXES = {
    Api.GL: "gl",
    Api.GLCORE: "gl",
    Api.GLES1: "gl",
    Api.GLES2: "gl",
    Api.GLSC2: "gl",
    Api.GLX: "glX",
    Api.WGL: "wgl",
    Api.EGL: "egl",
}

STRUCT_NAMES = {
    Api.GL: "Gl",
    Api.GLCORE: "Glcore",
    Api.GLES1: "Gles1",
    Api.GLES2: "Gles2",
    Api.GLSC2: "Glsc2",
    Api.GLX: "Glx",
    Api.WGL: "Wgl",
    Api.EGL: "Egl",
}

PY_RESERVED = frozenset(keyword.kwlist) | {"self"}


def symbol_name(api: Api, command_name: str) -> str:
    """Native link/lookup symbol of a command, e.g. ClearColor -> glClearColor."""
    return SYMBOL_PREFIXES[api] + command_name


def struct_name(api: Api) -> str:
    return STRUCT_NAMES[api]


def py_ident(name: str) -> str:
    if name in PY_RESERVED:
        return name + "_"
    return name


def enum_ident(name: str) -> str:
    """Python name of an enum constant; GL has names like 2D and 4_BYTES."""
    if name[:1].isdigit():
        return "_" + name
    return py_ident(name)


def to_snake_case(name: str) -> str:
    name = re.sub(r"(\d)D\b", r"_\1d", name)
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", "_", name).lower()


def wrapper_name(command_name: str) -> str:
    """Name of the call wrapper for a command, e.g. TexImage2D -> tex_image_2d."""
    return py_ident(to_snake_case(command_name))


def parameter_list(
    cmd: CommandDef, include_names: bool, include_types: bool
) -> list[str]:
    """Render a command's parameters in one of three shapes.

    - names and types: ``["mask: types.GLbitfield"]`` (declarations)
    - names only: ``["mask"]`` (call sites)
    - types only: ``["types.GLbitfield"]`` (prototypes)

    Every declaration, prototype and call site in every generator goes
    through this function so their parameter sequences cannot drift apart.

    Raises:
        ValueError: If both flags are False.
    """
    if not (include_names or include_types):
        raise ValueError("parameter_list needs names, types or both")

    rendered: list[str] = []
    for param in cmd.params:
        ident = py_ident(param.name)
        if include_names and include_types:
            rendered.append(f"{ident}: {param.type_name}")
        elif include_names:
            rendered.append(ident)
        else:
            rendered.append(param.type_name)
    return rendered


def return_annotation(cmd: CommandDef) -> str:
    return NO_VALUE if cmd.return_is_void else cmd.return_type
