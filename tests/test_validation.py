from collections.abc import Callable

import pytest

from glbindgen import Api, CommandDef, EnumDef, Registry, RegistryError, validate_registry
from glbindgen.validation import VALID_ERROR_CODES, descriptor_type_names


def _assert_registry_code(exc_info: pytest.ExceptionInfo[Exception], code: str) -> None:
    err = exc_info.value
    assert getattr(err, "code") == code
    assert getattr(err, "code") in VALID_ERROR_CODES


def test_sample_registry_is_valid(sample_registry: Registry) -> None:
    validate_registry(sample_registry)


def test_empty_registry_is_valid(make_registry: Callable[..., Registry]) -> None:
    for api in Api:
        validate_registry(make_registry(api=api))


def test_registry_error_rejects_unknown_code() -> None:
    with pytest.raises(ValueError):
        RegistryError("NOPE", "message")


@pytest.mark.parametrize(
    ("descriptor", "expected"),
    [
        ("types.GLint", ["GLint"]),
        ("POINTER(types.GLchar)", ["GLchar"]),
        ("POINTER(POINTER(types.GLchar))", ["GLchar"]),
        ("ctypes.c_void_p", []),
        ("POINTER(ctypes.c_char_p)", []),
    ],
)
def test_descriptor_type_names(descriptor: str, expected: list[str]) -> None:
    assert descriptor_type_names(descriptor) == expected


@pytest.mark.parametrize(
    "descriptor",
    [
        "int",
        "GLint",
        "ctypes.c_not_a_type",
        "POINTER(types.GLint, 2)",
        "POINTER()",
        "cast(types.GLint)",
        "types.GLint +",
        "os.system",
    ],
)
def test_descriptor_rejects_non_ctypes_expressions(descriptor: str) -> None:
    with pytest.raises(RegistryError) as exc_info:
        descriptor_type_names(descriptor)

    _assert_registry_code(exc_info, "INVALID_TYPE")


def test_duplicate_command_rejected(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    registry = make_registry(cmds=[make_command("Flush"), make_command("Flush")])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "DUPLICATE_COMMAND")


def test_command_name_must_be_identifier(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    registry = make_registry(cmds=[make_command("Bad-Name")])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "INVALID_NAME")


@pytest.mark.parametrize(
    "names",
    [
        ["GetError", "Get_Error"],
        ["Flush", "flush"],
        ["finish"],
        ["Types"],
        ["FnPtr"],
        ["LoadWith"],
        ["Storage"],
        ["Sys"],
    ],
)
def test_wrapper_name_collisions_rejected(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
    names: list[str],
) -> None:
    registry = make_registry(cmds=[make_command(name) for name in names])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "WRAPPER_NAME_COLLISION")


def test_unmapped_parameter_type_rejected(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    registry = make_registry(
        cmds=[make_command("Foo", params=[("x", "POINTER(types.GLmystery)")])]
    )

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "UNMAPPED_TYPE")
    assert "GLmystery" in exc_info.value.message


def test_types_are_checked_against_the_api_table(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    gl_cmd = make_command("GetError", "types.GLenum")

    validate_registry(make_registry(api=Api.GLX, cmds=[gl_cmd]))
    with pytest.raises(RegistryError) as exc_info:
        validate_registry(make_registry(api=Api.EGL, cmds=[gl_cmd]))

    _assert_registry_code(exc_info, "UNMAPPED_TYPE")


def test_unmapped_return_type_rejected(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    registry = make_registry(cmds=[make_command("Foo", "types.EGLint")])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "UNMAPPED_TYPE")


def test_no_value_is_not_a_parameter_type(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    registry = make_registry(cmds=[make_command("Foo", params=[("x", "None")])])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "INVALID_TYPE")


def test_alias_for_unknown_command_rejected(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    registry = make_registry(
        cmds=[make_command("Bar")], aliases={"Qux": ("QuxEXT",)}
    )

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "UNKNOWN_ALIAS_TARGET")
    assert exc_info.value.suggestion


def test_fallback_names_need_not_be_commands(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    registry = make_registry(
        cmds=[make_command("Bar")], aliases={"Bar": ("BarEXT", "BarARB")}
    )

    validate_registry(registry)


def test_enum_type_must_be_mapped(make_registry: Callable[..., Registry]) -> None:
    registry = make_registry(enums=[EnumDef("FOO", 1, "GLnothing")])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "UNMAPPED_TYPE")


def test_enum_default_type_follows_api(make_registry: Callable[..., Registry]) -> None:
    validate_registry(make_registry(api=Api.EGL, enums=[EnumDef("SUCCESS", 0x3000)]))
    validate_registry(make_registry(api=Api.GLX, enums=[EnumDef("USE_GL", 1)]))


@pytest.mark.parametrize(
    "fallback",
    [
        'FooEXT")\nimport os  # ',
        "FooEXT\n",
        "Foo EXT",
        "",
        "1Foo",
    ],
)
def test_fallback_names_must_be_identifiers(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
    fallback: str,
) -> None:
    registry = make_registry(
        cmds=[make_command("Foo")], aliases={"Foo": ("FooARB", fallback)}
    )

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "INVALID_NAME")


@pytest.mark.parametrize("param", ["1x", "x y", "", "x=0"])
def test_parameter_names_must_be_identifiers(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
    param: str,
) -> None:
    registry = make_registry(cmds=[make_command("Foo", params=[(param, "types.GLint")])])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "INVALID_NAME")


@pytest.mark.parametrize(
    "params",
    [
        [("x", "types.GLint"), ("x", "types.GLfloat")],
        [("from", "types.GLint"), ("from_", "types.GLint")],
    ],
)
def test_duplicate_parameter_names_rejected(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
    params: list[tuple[str, str]],
) -> None:
    registry = make_registry(cmds=[make_command("Foo", params=params)])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "INVALID_NAME")


def test_keyword_parameter_names_are_accepted(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    registry = make_registry(
        cmds=[make_command("Foo", params=[("from", "types.GLint"), ("self", "types.GLint")])]
    )

    validate_registry(registry)


@pytest.mark.parametrize("name", ["BAD-NAME", "A B", "", "X = 1\nimport os"])
def test_enum_names_must_be_identifiers(
    make_registry: Callable[..., Registry], name: str
) -> None:
    registry = make_registry(enums=[EnumDef(name, 1)])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "INVALID_NAME")


@pytest.mark.parametrize("name", ["types", "storage", "POINTER", "_lib", "load_with"])
def test_enum_names_must_not_shadow_generated_names(
    make_registry: Callable[..., Registry], name: str
) -> None:
    registry = make_registry(enums=[EnumDef(name, 1)])

    with pytest.raises(RegistryError) as exc_info:
        validate_registry(registry)

    _assert_registry_code(exc_info, "INVALID_NAME")


def test_enum_names_must_not_shadow_commands(
    make_registry: Callable[..., Registry],
    make_command: Callable[..., CommandDef],
) -> None:
    for enum_name in ("Flush", "flush"):
        registry = make_registry(cmds=[make_command("Flush")], enums=[EnumDef(enum_name, 1)])

        with pytest.raises(RegistryError) as exc_info:
            validate_registry(registry)

        _assert_registry_code(exc_info, "INVALID_NAME")


def test_leading_digit_enum_names_are_accepted(
    make_registry: Callable[..., Registry],
) -> None:
    validate_registry(make_registry(enums=[EnumDef("2D", 0x600), EnumDef("4_BYTES", 0x1409)]))
