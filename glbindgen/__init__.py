"""Generate ctypes bindings for OpenGL-family APIs from an in-memory registry."""

from .driver import (
    ConfigError,
    FileWriteResult,
    GenerateConfig,
    build_config,
    generate_source,
    run_generate,
    write_bindings,
)
from .generators import (
    GENERATORS,
    DebugStructGenerator,
    Generator,
    GlobalGenerator,
    StaticGenerator,
    StaticStructGenerator,
    StructGenerator,
)
from .registry import NO_VALUE, Api, CommandDef, CommandParam, EnumDef, Registry
from .validation import RegistryError, validate_registry

__all__ = [
    "GENERATORS",
    "NO_VALUE",
    "Api",
    "CommandDef",
    "CommandParam",
    "ConfigError",
    "DebugStructGenerator",
    "EnumDef",
    "FileWriteResult",
    "GenerateConfig",
    "Generator",
    "GlobalGenerator",
    "Registry",
    "RegistryError",
    "StaticGenerator",
    "StaticStructGenerator",
    "StructGenerator",
    "build_config",
    "generate_source",
    "run_generate",
    "validate_registry",
    "write_bindings",
]
