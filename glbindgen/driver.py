"""Generation driver: config validation, atomic output and the run summary."""

from __future__ import annotations

import io
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .generators import GENERATORS, Generator
from .registry import Registry
from .validation import validate_registry

# ===--- Config contracts ---=== #


VALID_ERROR_CODES = {
    "UNKNOWN_GENERATOR",
    "PATH_NOT_FOUND",
}


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


@dataclass(frozen=True)
class GenerateConfig:
    generator: str
    output_path: Path


def validate_generator_name(name: str) -> str:
    if name in GENERATORS:
        return name
    raise ConfigError(
        "UNKNOWN_GENERATOR",
        f"Unknown generator: {name}",
        f"Use one of: {', '.join(GENERATORS)}.",
    )


def build_config(generator: str, output_path: Path | str) -> GenerateConfig:
    """Validate driver inputs into a GenerateConfig.

    Raises:
        ConfigError: UNKNOWN_GENERATOR for a name missing from GENERATORS,
            PATH_NOT_FOUND when the output file's directory does not exist.
    """
    name = validate_generator_name(generator)
    output_path = Path(output_path)
    if not output_path.parent.is_dir():
        raise ConfigError(
            "PATH_NOT_FOUND",
            f"Output directory does not exist: {output_path.parent}",
            "Create the directory or pass a path inside an existing one.",
        )
    return GenerateConfig(generator=name, output_path=output_path)


# ===--- Write result types ---=== #


@dataclass(frozen=True)
class FileWriteResult:
    """Result of writing one generated bindings module.

    Attributes:
        path: Absolute path of the written file.
        line_count: Number of newline characters in the written content.
        byte_count: Number of bytes written (UTF-8 encoded).
    """

    path: Path
    line_count: int
    byte_count: int


# ===--- Generation ---=== #


def generate_source(registry: Registry, generator: Generator) -> str:
    """Run a generator into memory and return the module source."""
    buffer = io.StringIO()
    generator.emit(registry, buffer)
    return buffer.getvalue()


def write_bindings(
    registry: Registry, generator: Generator, path: Path
) -> FileWriteResult:
    """Stream a generator's output to `path`, all or nothing.

    Output goes to a temporary file next to `path` which replaces `path`
    only once the generator has finished. On any failure the temporary file
    is removed and `path` is left untouched.

    Raises:
        OSError: Propagated from the filesystem or from the generator's
            writes, after cleanup.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as dest:
            generator.emit(registry, dest)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    resolved = path.resolve()
    content = resolved.read_bytes()
    return FileWriteResult(
        path=resolved,
        line_count=content.count(b"\n"),
        byte_count=len(content),
    )


def run_generate(config: GenerateConfig, registry: Registry) -> FileWriteResult:
    """Validate the registry, emit with the configured generator, report.

    Raises:
        RegistryError: The registry failed validation. Nothing is written.
        OSError: Filesystem write failure. Nothing is left at the output path.
    """
    print(f"Generating: {registry.api} bindings ({config.generator})")
    validate_registry(registry)
    fallback_count = sum(len(names) for names in registry.aliases.values())
    print(
        f"  Registry: {len(registry.enums)} enums, {len(registry.cmds)} commands, "
        f"{fallback_count} fallbacks"
    )

    generator = GENERATORS[config.generator]()
    result = write_bindings(registry, generator, config.output_path)
    print(f"  Written: {result.line_count} lines to {result.path}")

    summary = build_generation_summary(config, registry, result)
    print_generation_summary(summary)
    return result


# ===--- Summary report ---=== #


@dataclass(frozen=True)
class GenerationSummary:
    """Immutable data for the post-generation console report.

    Attributes:
        target_label: "<api> <version> (<profile>)", parts omitted when empty.
        generator: Name of the generator that ran.
        enums: Number of enum constants emitted.
        commands: Number of commands emitted.
        commands_with_fallbacks: Commands with at least one fallback symbol.
        output: The file write result.
    """

    target_label: str
    generator: str
    enums: int
    commands: int
    commands_with_fallbacks: int
    output: FileWriteResult


def build_target_label(registry: Registry) -> str:
    label = str(registry.api)
    if registry.version:
        label += f" {registry.version}"
    if registry.profile:
        label += f" ({registry.profile})"
    return label


def build_generation_summary(
    config: GenerateConfig, registry: Registry, result: FileWriteResult
) -> GenerationSummary:
    return GenerationSummary(
        target_label=build_target_label(registry),
        generator=config.generator,
        enums=len(registry.enums),
        commands=len(registry.cmds),
        commands_with_fallbacks=sum(1 for cmd in registry.cmds if registry.fallbacks(cmd.name)),
        output=result,
    )


def format_generation_summary(summary: GenerationSummary) -> str:
    """Render a GenerationSummary. Ends with exactly one trailing newline."""
    lines: list[str] = []
    lines.append(f"{summary.target_label} bindings generated:")
    lines.append("")
    lines.append(f"  Generator:  {summary.generator}")
    lines.append(f"  Output:     {summary.output.path}")
    lines.append("")
    lines.append(f"    {'Enums:':<11}{summary.enums:>6}")
    lines.append(f"    {'Commands:':<11}{summary.commands:>6}")
    lines.append(f"    {'Fallbacks:':<11}{summary.commands_with_fallbacks:>6}")
    lines.append("")
    lines.append(
        f"  Total: {summary.output.line_count:,} lines, {summary.output.byte_count:,} bytes"
    )
    lines.append("")
    return "\n".join(lines)


def print_generation_summary(summary: GenerationSummary) -> None:
    print(format_generation_summary(summary), end="")
