"""Feature flag commands: ``tokens``, ``parse``, ``format``, ``normalize``.

These expose the token table and the normalizer for scripting and for
inspecting the header word of an existing archive.

Exit Codes:
    0 -- Success.
    2 -- Unknown token, unsupported bits, or bits without a token name.
"""

from __future__ import annotations

import json

import click

from cafeatures.cli.output import (
    FORMAT_OPTION,
    fail,
    flags_to_json,
    granularity_or_none,
    hex_value,
    print_token_table,
    tokens_to_json,
)
from cafeatures.core.flags import check_supported, format_flags, normalize, parse_many
from cafeatures.exceptions import CaFeaturesError


class BitsetParamType(click.ParamType):
    """Click parameter accepting decimal or 0x-prefixed bitsets."""

    name = "bitset"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            parsed = int(value, 0)
        except ValueError:
            self.fail(f"{value!r} is not a decimal or 0x-hex number", param, ctx)
        if parsed < 0:
            self.fail(f"{value!r} is negative", param, ctx)
        return parsed


BITSET = BitsetParamType()


def _emit(flags: int, output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps(flags_to_json(flags), indent=2))
        return
    granularity = granularity_or_none(flags)
    click.echo(f"value:       {hex_value(flags)}")
    click.echo(f"tokens:      {format_flags(flags)}")
    click.echo(
        "granularity: "
        + ("none" if granularity is None else f"{granularity} ns")
    )


@click.command("tokens")
@FORMAT_OPTION
def tokens_command(output_format: str) -> None:
    """List every feature token in priority order."""
    if output_format == "json":
        click.echo(json.dumps(tokens_to_json(), indent=2))
    else:
        print_token_table()


@click.command("parse")
@click.argument("tokens", nargs=-1, required=True)
@FORMAT_OPTION
def parse_command(tokens: tuple[str, ...], output_format: str) -> None:
    """Combine TOKENS into a bitset and show its normal form.

    Tokens may be given as separate arguments or comma-separated.
    """
    try:
        flags = parse_many(" ".join(tokens))
        normalized = normalize(flags)
    except CaFeaturesError as exc:
        fail(exc, output_format)

    if output_format == "json":
        payload = flags_to_json(normalized)
        payload["requested"] = hex_value(flags)
        click.echo(json.dumps(payload, indent=2))
        return
    click.echo(f"requested:   {hex_value(flags)}")
    _emit(normalized, output_format)


@click.command("format")
@click.argument("value", type=BITSET)
@FORMAT_OPTION
def format_command(value: int, output_format: str) -> None:
    """Print the token names for the bitset VALUE (decimal or 0x-hex)."""
    try:
        check_supported(value)
        names = format_flags(value)
    except CaFeaturesError as exc:
        fail(exc, output_format)

    if output_format == "json":
        click.echo(json.dumps({"value": hex_value(value), "tokens": names}))
    else:
        click.echo(names)


@click.command("normalize")
@click.argument("value", type=BITSET)
@FORMAT_OPTION
def normalize_command(value: int, output_format: str) -> None:
    """Show the canonical form of the bitset VALUE."""
    try:
        normalized = normalize(value)
    except CaFeaturesError as exc:
        fail(exc, output_format)
    _emit(normalized, output_format)
