"""Unified CLI entry point for installed mdf_tools converters."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib import metadata
from typing import Callable, Iterable, Mapping, Optional, Sequence

from mdf_tools.driver import ConverterPlugin, driver_version, run

ENTRY_POINT_GROUP = "mdf_tools.converters"


@dataclass(frozen=True)
class ConverterSpec:
    """Represents one installed converter."""

    name: str
    summary: str
    loader: Callable[[], object]


def discover_converters(
    entry_points: Optional[Iterable[metadata.EntryPoint]] = None,
) -> Mapping[str, ConverterSpec]:
    """Return installed converters keyed by name, in name order."""

    found = (
        entry_points
        if entry_points is not None
        else metadata.entry_points(group=ENTRY_POINT_GROUP)
    )
    specs = {}
    for entry in sorted(found, key=lambda item: item.name):
        specs[entry.name] = ConverterSpec(
            name=entry.name,
            summary=_summary_for(entry),
            loader=entry.load,
        )
    return specs


def load_plugin(spec: ConverterSpec) -> ConverterPlugin:
    """Instantiate the plugin behind ``spec``.

    An entry point may name a plugin instance, a plugin class or a
    zero-argument factory returning a plugin.
    """

    target = spec.loader()
    if isinstance(target, type) or not isinstance(target, ConverterPlugin):
        plugin = target()
    else:
        plugin = target
    if not isinstance(plugin, ConverterPlugin):
        raise TypeError(
            f"Entry point '{spec.name}' did not produce a converter plugin."
        )
    return plugin


def format_command_table(converters: Mapping[str, ConverterSpec]) -> str:
    """Return a formatted converter table for help output."""

    if not converters:
        return "No converters are installed."
    width = max(len(name) for name in converters)
    lines = ["Available converters:"]
    for spec in converters.values():
        lines.append(f"  {spec.name.ljust(width)}  {spec.summary}".rstrip())
    return "\n".join(lines)


def format_usage(converters: Mapping[str, ConverterSpec]) -> str:
    """Build the top-level usage banner with converter listings."""

    parts = [
        "Usage: mdf-tools <converter> [args...]",
        "Run `mdf-tools list` for converters or `mdf-tools help <name>` "
        "for details.",
        "",
        format_command_table(converters),
    ]
    return "\n".join(parts)


def _print(
    text: str, *, stream: Optional[Callable[[str], None]] = None
) -> None:
    target = stream if stream is not None else sys.stdout.write
    if text:
        target(text + "\n")


def _handle_version() -> int:
    _print(driver_version())
    return 0


def _handle_help(
    argv: Sequence[str], converters: Mapping[str, ConverterSpec]
) -> int:
    if not argv:
        _print(format_usage(converters))
        return 0

    name = argv[0]
    spec = converters.get(name)
    if spec is None:
        return _unknown_converter(name, converters)

    _print(f"{spec.name}: {spec.summary}".rstrip(": "))
    _print(f"Run `mdf-tools {spec.name} --help` for converter options.")
    return 0


def _unknown_converter(
    name: str, converters: Mapping[str, ConverterSpec]
) -> int:
    _print(f"Unknown converter '{name}'.", stream=sys.stderr.write)
    _print(format_command_table(converters), stream=sys.stderr.write)
    return 2


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    converters: Optional[Mapping[str, ConverterSpec]] = None,
) -> int:
    args = list(argv if argv is not None else sys.argv[1:])
    available = converters if converters is not None else discover_converters()

    if not args:
        _print(format_usage(available))
        return 2

    head, *tail = args

    if head in ("-h", "--help"):
        _print(format_usage(available))
        return 0

    if head in ("-V", "--version", "version"):
        return _handle_version()

    if head == "list":
        _print(format_command_table(available))
        return 0

    if head == "help":
        return _handle_help(tail, available)

    spec = available.get(head)
    if spec is None:
        return _unknown_converter(head, available)

    try:
        plugin = load_plugin(spec)
    except Exception as exc:
        _print(
            f"Could not load converter '{spec.name}': {exc}",
            stream=sys.stderr.write,
        )
        return 1
    return run(plugin, tail)


def _summary_for(entry: metadata.EntryPoint) -> str:
    dist = getattr(entry, "dist", None)
    if dist is None:
        return ""
    try:
        return dist.metadata.get("Summary", "") or ""
    except Exception:  # pragma: no cover - broken distribution metadata
        return ""


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
