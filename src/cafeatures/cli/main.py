"""cafeatures CLI: inspect archive feature flags.

Entry point for the ``cafeatures`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    tokens    : List every feature token in priority order.
    parse     : Combine tokens into a normalized bitset.
    format    : Name the tokens of a bitset.
    normalize : Canonical form and time granularity of a bitset.
    fstype    : Default features for a filesystem magic.
    resolve   : Apply a YAML feature selection.

Usage::

    cafeatures tokens
    cafeatures parse unix flag-immutable
    cafeatures format 0x1a0
    cafeatures normalize 0x3
    cafeatures fstype btrfs
    cafeatures resolve features.yaml --fs-type 0xEF53
"""

from __future__ import annotations

import click

from cafeatures import __version__
from cafeatures.cli.flags_cmd import (
    format_command,
    normalize_command,
    parse_command,
    tokens_command,
)
from cafeatures.cli.fstype_cmd import fstype_command, resolve_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """cafeatures: Feature flags of content-addressable archives.

    Translate between feature tokens and header bitsets, normalize
    requests, and show the defaults assumed for a source filesystem.
    """


# Register all subcommands
cli.add_command(tokens_command)
cli.add_command(parse_command)
cli.add_command(format_command)
cli.add_command(normalize_command)
cli.add_command(fstype_command)
cli.add_command(resolve_command)
