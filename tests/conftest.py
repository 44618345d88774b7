import ctypes
import ctypes.util
import sys
import types
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

PROJECT_DIR = Path(__file__).resolve().parent.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from glbindgen import (  # noqa: E402
    GENERATORS,
    Api,
    CommandDef,
    CommandParam,
    EnumDef,
    Registry,
    generate_source,
)


def _make_command(
    name: str, return_type: str = "None", params: list[tuple[str, str]] | None = None
) -> CommandDef:
    return CommandDef(
        name=name,
        return_type=return_type,
        params=[CommandParam(n, t) for n, t in (params or [])],
    )


@pytest.fixture
def make_command() -> Callable[..., CommandDef]:
    return _make_command


@pytest.fixture
def make_registry() -> Callable[..., Registry]:
    def _make_registry(
        *,
        api: Api = Api.GL,
        enums: list[EnumDef] | None = None,
        cmds: list[CommandDef] | None = None,
        aliases: Mapping[str, tuple[str, ...]] | None = None,
        version: str = "",
        profile: str = "",
        extensions: tuple[str, ...] = (),
    ) -> Registry:
        return Registry(
            api=api,
            enums=[] if enums is None else enums,
            cmds=[] if cmds is None else cmds,
            aliases={} if aliases is None else aliases,
            version=version,
            profile=profile,
            extensions=extensions,
        )

    return _make_registry


@pytest.fixture
def sample_registry(make_registry: Callable[..., Registry]) -> Registry:
    """A small GL registry: a value-returning call, a void call with a
    fallback, a call taking a callback, and GetError."""
    return make_registry(
        enums=[
            EnumDef("COLOR_BUFFER_BIT", 0x4000),
            EnumDef("TRUE", 1, "GLboolean"),
            EnumDef("2D", 0x0600),
        ],
        cmds=[
            _make_command(
                "Foo", "types.GLuint", [("a", "types.GLint"), ("b", "types.GLfloat")]
            ),
            _make_command("Bar"),
            _make_command("Baz", params=[("mode", "types.GLenum")]),
            _make_command(
                "DebugMessageCallback",
                params=[
                    ("callback", "types.GLDEBUGPROC"),
                    ("userParam", "ctypes.c_void_p"),
                ],
            ),
            _make_command("GetError", "types.GLenum"),
        ],
        aliases={"Bar": ("BarEXT",)},
        version="4.5",
        profile="core",
    )


@pytest.fixture
def load_generated(tmp_path: Path) -> Callable[[str], types.ModuleType]:
    """Compile generated source into a fresh module object."""
    counter = iter(range(1_000_000))

    def _load_generated(source: str) -> types.ModuleType:
        name = f"generated_{next(counter)}"
        module = types.ModuleType(name)
        module.__file__ = str(tmp_path / f"{name}.py")
        exec(compile(source, module.__file__, "exec"), module.__dict__)
        return module

    return _load_generated


@pytest.fixture
def generate(
    load_generated: Callable[[str], types.ModuleType],
) -> Callable[[Registry, str], types.ModuleType]:
    def _generate(registry: Registry, generator: str) -> types.ModuleType:
        return load_generated(generate_source(registry, GENERATORS[generator]()))

    return _generate


class NativeSymbols:
    """Python callables exposed to generated bindings as native addresses.

    `loadfn` answers symbol lookups with the address of a ctypes callback,
    or None for unknown symbols, and records every symbol it was asked for.
    """

    def __init__(self, module: types.ModuleType):
        self.module = module
        self.probes: list[str] = []
        self.calls: list[tuple[str, tuple[object, ...]]] = []
        self._addresses: dict[str, int] = {}
        self.callbacks: dict[str, object] = {}

    def define(self, symbol: str, command: str, impl: Callable[..., object]) -> int:
        """Expose `impl` as `symbol` using the prototype of `command`."""

        def _traced(*args: object) -> object:
            self.calls.append((symbol, args))
            return impl(*args)

        callback = getattr(self.module.fntypes, command)(_traced)
        self.callbacks[symbol] = callback
        address = ctypes.cast(callback, ctypes.c_void_p).value
        assert address
        self._addresses[symbol] = address
        return address

    def loadfn(self, symbol: str) -> int | None:
        self.probes.append(symbol)
        return self._addresses.get(symbol)


@pytest.fixture
def native_symbols() -> Callable[..., NativeSymbols]:
    def _native_symbols(module: types.ModuleType) -> NativeSymbols:
        return NativeSymbols(module)

    return _native_symbols


class NativeLibrary:
    """Stands in for a `ctypes.CDLL`, exporting the callbacks of `symbols`."""

    def __init__(self, symbols: NativeSymbols):
        self._symbols = symbols

    def __getattr__(self, symbol: str) -> object:
        try:
            return self._symbols.callbacks[symbol]
        except KeyError:
            raise AttributeError(f"function {symbol!r} not found") from None


@pytest.fixture
def link_native_library(
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[[NativeSymbols], list[str]]:
    """Make static bindings open `symbols` instead of a platform library.

    Returns the list of paths the bindings opened.
    """

    def _link_native_library(symbols: NativeSymbols) -> list[str]:
        opened: list[str] = []

        def _open(path: str) -> NativeLibrary:
            opened.append(path)
            return NativeLibrary(symbols)

        monkeypatch.setattr(ctypes.util, "find_library", lambda name: f"lib{name}.so")
        monkeypatch.setattr(ctypes, "CDLL", _open)
        return opened

    return _link_native_library


@pytest.fixture
def sample_natives(
    generate: Callable[[Registry, str], types.ModuleType],
    sample_registry: Registry,
) -> NativeSymbols:
    """Native entry points for every command of `sample_registry`.

    The prototypes come from a loader-based module generated from the same
    registry, so static bindings can be linked against them.
    """
    natives = NativeSymbols(generate(sample_registry, "struct"))
    natives.define("glFoo", "Foo", lambda a, b: a + int(b))
    natives.define("glBar", "Bar", lambda: None)
    natives.define("glBaz", "Baz", lambda mode: None)
    natives.define("glDebugMessageCallback", "DebugMessageCallback", lambda cb, user: None)
    natives.define("glGetError", "GetError", lambda: 0x0500)
    return natives
