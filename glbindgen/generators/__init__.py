"""Emission strategies, selectable by name."""

from .base import Generator, Sink
from .debug_struct_gen import DebugStructGenerator
from .global_gen import GlobalGenerator
from .static_gen import StaticGenerator
from .static_struct_gen import StaticStructGenerator
from .struct_gen import StructGenerator

GENERATORS: dict[str, type] = {
    "global": GlobalGenerator,
    "struct": StructGenerator,
    "debug_struct": DebugStructGenerator,
    "static": StaticGenerator,
    "static_struct": StaticStructGenerator,
}
"""Generator classes by the name a driver config selects them with."""

__all__ = [
    "GENERATORS",
    "DebugStructGenerator",
    "Generator",
    "GlobalGenerator",
    "Sink",
    "StaticGenerator",
    "StaticStructGenerator",
    "StructGenerator",
]
