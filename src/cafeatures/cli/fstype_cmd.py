"""Filesystem default commands: ``fstype`` and ``resolve``.

``fstype`` shows the feature ceiling assumed for a filesystem magic number;
``resolve`` applies a YAML feature selection on top of it, exactly as the
archiver does before writing the archive header.

Exit Codes:
    0 -- Success.
    2 -- Unknown filesystem name or invalid selection file.
"""

from __future__ import annotations

import json

import click

from cafeatures.cli.output import (
    FORMAT_OPTION,
    fail,
    flags_to_json,
    hex_value,
    print_flags,
)
from cafeatures.config import load_selection, parse_fs_type, resolve_features
from cafeatures.core.fstypes import capabilities_for_fs_type, fs_type_name
from cafeatures.exceptions import CaFeaturesError


@click.command("fstype")
@click.argument("magic")
@FORMAT_OPTION
def fstype_command(magic: str, output_format: str) -> None:
    """Show the default features for filesystem MAGIC.

    MAGIC is a statfs type number (``0xEF53``) or a known name (``btrfs``).
    Unknown numbers fall back to the baseline feature set.
    """
    try:
        magic_value = parse_fs_type(magic)
    except CaFeaturesError as exc:
        fail(exc, output_format)

    name = fs_type_name(magic_value) or "unknown"
    flags = capabilities_for_fs_type(magic_value)

    if output_format == "json":
        payload = flags_to_json(flags)
        payload["fs_type"] = name
        payload["magic"] = hex(magic_value)
        click.echo(json.dumps(payload, indent=2))
    else:
        print_flags(f"{name} ({hex(magic_value)})", flags)


@click.command("resolve")
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--fs-type", "fs_type",
    default=None,
    help="Source filesystem magic or name; overrides the file.",
)
@FORMAT_OPTION
def resolve_command(config_path: str, fs_type: str | None, output_format: str) -> None:
    """Resolve the feature selection in CONFIG_PATH to a header bitset."""
    try:
        selection = load_selection(config_path)
        magic = parse_fs_type(fs_type) if fs_type is not None else None
        flags = resolve_features(selection, fs_type=magic)
    except CaFeaturesError as exc:
        fail(exc, output_format)

    if output_format == "json":
        click.echo(json.dumps(flags_to_json(flags), indent=2))
    else:
        print_flags(f"Resolved features {hex_value(flags)}", flags)
