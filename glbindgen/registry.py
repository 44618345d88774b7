"""In-memory registry of one API surface: enums, commands and fallbacks.

The registry is built once by a front-end and handed to a generator as a
read-only value. Type descriptors are ctypes type expressions written against
the generated `types` namespace (``types.GLenum``, ``POINTER(types.GLchar)``,
``ctypes.c_void_p``); the generators thread them through unchanged.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# ===--- Constants ---=== #

NO_VALUE = "None"
"""Return type descriptor of commands that return nothing."""


class Api(enum.Enum):
    GL = "gl"
    GLCORE = "glcore"
    GLES1 = "gles1"
    GLES2 = "gles2"
    GLSC2 = "glsc2"
    GLX = "glx"
    WGL = "wgl"
    EGL = "egl"

    def __str__(self) -> str:
        return self.value


# ===--- Data classes ---=== #


@dataclass(frozen=True)
class EnumDef:
    name: str
    value: int
    ty: str | None = None


@dataclass(frozen=True)
class CommandParam:
    name: str
    type_name: str


@dataclass(frozen=True)
class CommandDef:
    name: str
    return_type: str
    params: tuple[CommandParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))

    @property
    def return_is_void(self) -> bool:
        return self.return_type == NO_VALUE


@dataclass(frozen=True)
class Registry:
    """One (api, version, profile) surface.

    Attributes:
        api: Target API family. Drives symbol prefixes, the aggregate name
            and the type-alias table.
        enums: Enum entries in emission order. Duplicate names pass through.
        cmds: Commands in emission order.
        aliases: Command name -> fallback names, probed in listed order.
        version: Informational version string, e.g. "4.5".
        profile: Informational profile name, e.g. "core".
        extensions: Extension names the registry was built with.
    """

    api: Api
    enums: tuple[EnumDef, ...] = ()
    cmds: tuple[CommandDef, ...] = ()
    aliases: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    version: str = ""
    profile: str = ""
    extensions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "enums", tuple(self.enums))
        object.__setattr__(self, "cmds", tuple(self.cmds))
        object.__setattr__(self, "extensions", tuple(self.extensions))
        frozen = {name: tuple(names) for name, names in self.aliases.items()}
        object.__setattr__(self, "aliases", MappingProxyType(frozen))

    def iter_enums(self) -> Iterator[EnumDef]:
        return iter(self.enums)

    def iter_cmds(self) -> Iterator[CommandDef]:
        return iter(self.cmds)

    def fallbacks(self, name: str) -> tuple[str, ...]:
        """Fallback symbol names registered for `name`, empty when none."""
        return self.aliases.get(name, ())

    def find_command(self, name: str) -> CommandDef | None:
        for cmd in self.cmds:
            if cmd.name == name:
                return cmd
        return None

    def has_command(self, name: str) -> bool:
        return self.find_command(name) is not None
