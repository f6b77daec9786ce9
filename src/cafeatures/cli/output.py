"""Output helpers shared by the cafeatures CLI commands.

Provides the ``--format`` option and error exit used by every command, the
token table and per-feature breakdowns shown by the ``tokens``, ``fstype``
and ``resolve`` commands, plus the JSON shapes used when ``--format json``
is selected.
"""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cafeatures.core.flags import (
    TOKENS,
    TOLERATED_RESIDUAL,
    format_flags,
    iter_bits,
    time_granularity_ns,
)
from cafeatures.exceptions import CaFeaturesError, NoTimeCapabilityError

console = Console()

FORMAT_OPTION = click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)


def fail(error: CaFeaturesError, output_format: str) -> NoReturn:
    """Report a feature error and exit with code 2."""
    if output_format == "json":
        click.echo(json.dumps({"error": str(error)}))
    else:
        click.echo(f"Error: {error}")
    sys.exit(2)


def hex_value(flags: int) -> str:
    """Render a bitset as zero-padded 64-bit hex."""
    return f"0x{flags:016x}"


def granularity_or_none(flags: int) -> int | None:
    """Return the time granularity, or None when no time flag is set."""
    try:
        return time_granularity_ns(flags)
    except NoTimeCapabilityError:
        return None


def flags_to_json(flags: int) -> dict[str, Any]:
    """Convert a bitset to a JSON-serializable dict.

    Args:
        flags: A bitset within the valid mask.

    Returns:
        Dictionary with the hex value, token string, member names and
        time granularity.
    """
    return {
        "value": hex_value(flags),
        "tokens": format_flags(flags),
        "features": [f.name for f in iter_bits(flags)],
        "time_granularity_ns": granularity_or_none(flags),
    }


def tokens_to_json() -> list[dict[str, Any]]:
    """Return the token table as ``{"token", "value", "bits"}`` dicts."""
    return [
        {"token": name, "value": hex_value(value), "bits": bin(value).count("1")}
        for name, value in TOKENS
    ]


def print_token_table() -> None:
    """Print every token in priority order with its value."""
    table = Table(title="Feature Tokens", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Token", style="bold")
    table.add_column("Value")
    table.add_column("Bits", justify="right")

    for idx, (name, value) in enumerate(TOKENS, start=1):
        bits = bin(value).count("1")
        style = "cyan" if bits > 1 else ""
        table.add_row(str(idx), Text(name, style=style), hex_value(value), str(bits))

    console.print(table)


def print_flags(title: str, flags: int) -> None:
    """Print a bitset as a table of its individual features.

    Args:
        title: Table title, e.g. the filesystem name.
        flags: A bitset within the valid mask.
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Feature", style="bold")
    table.add_column("Value")
    for feature in iter_bits(flags):
        name = feature.name
        if feature & TOLERATED_RESIDUAL:
            name = Text(feature.name, style="dim")
        table.add_row(name, hex_value(int(feature)))
    console.print(table)

    granularity = granularity_or_none(flags)
    console.print(f"[bold]Value:[/bold] {hex_value(flags)}")
    console.print(f"[bold]Tokens:[/bold] {format_flags(flags) or '-'}")
    if granularity is None:
        console.print("[bold]Time granularity:[/bold] none")
    else:
        console.print(f"[bold]Time granularity:[/bold] {granularity} ns")
