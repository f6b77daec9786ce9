"""Token table: stable names for feature bits and named unions.

Configuration and the command line name features by token (``usec-time``,
``flag-immutable``, ``unix``). The table below is the single source for both
directions:

- ``parse_one`` maps a token to its value.
- ``format_flags`` walks the table in declaration order and greedily emits
  every entry whose bits are all still present, so a complete union prints
  as its own name rather than as its members.

Priority order
--------------
Unions are declared first so that they win over their constituents. Single
bits follow in bit order. Reordering the table changes ``format_flags``
output; adding a token is a compatible extension.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, Mapping

from cafeatures.core.flags.bits import (
    TOLERATED_RESIDUAL,
    WITH_BEST,
    WITH_CHATTR,
    WITH_FAT,
    WITH_UNIX,
    Feature,
)
from cafeatures.exceptions import UnknownTokenError, UnrepresentableBitsError

# ---------------------------------------------------------------------------
# Token table (priority order)
# ---------------------------------------------------------------------------

TOKENS: tuple[tuple[str, int], ...] = (
    ("best", WITH_BEST),
    ("unix", WITH_UNIX),
    ("fat", WITH_FAT),
    ("chattr", WITH_CHATTR),
    ("16bit-uids", int(Feature.WITH_16BIT_UIDS)),
    ("32bit-uids", int(Feature.WITH_32BIT_UIDS)),
    ("user-names", int(Feature.WITH_USER_NAMES)),
    ("sec-time", int(Feature.WITH_SEC_TIME)),
    ("usec-time", int(Feature.WITH_USEC_TIME)),
    ("nsec-time", int(Feature.WITH_NSEC_TIME)),
    ("2sec-time", int(Feature.WITH_2SEC_TIME)),
    ("read-only", int(Feature.WITH_READ_ONLY)),
    ("permissions", int(Feature.WITH_PERMISSIONS)),
    ("symlinks", int(Feature.WITH_SYMLINKS)),
    ("device-nodes", int(Feature.WITH_DEVICE_NODES)),
    ("fifos", int(Feature.WITH_FIFOS)),
    ("sockets", int(Feature.WITH_SOCKETS)),
    ("flag-hidden", int(Feature.WITH_FLAG_HIDDEN)),
    ("flag-system", int(Feature.WITH_FLAG_SYSTEM)),
    ("flag-archive", int(Feature.WITH_FLAG_ARCHIVE)),
    ("flag-append", int(Feature.WITH_FLAG_APPEND)),
    ("flag-noatime", int(Feature.WITH_FLAG_NOATIME)),
    ("flag-compr", int(Feature.WITH_FLAG_COMPR)),
    ("flag-nocow", int(Feature.WITH_FLAG_NOCOW)),
    ("flag-nodump", int(Feature.WITH_FLAG_NODUMP)),
    ("flag-dirsync", int(Feature.WITH_FLAG_DIRSYNC)),
    ("flag-immutable", int(Feature.WITH_FLAG_IMMUTABLE)),
    ("flag-sync", int(Feature.WITH_FLAG_SYNC)),
    ("flag-nocomp", int(Feature.WITH_FLAG_NOCOMP)),
    ("flag-projinherit", int(Feature.WITH_FLAG_PROJINHERIT)),
)

_BY_NAME: Mapping[str, int] = MappingProxyType(dict(TOKENS))

_SEPARATORS = re.compile(r"[\s,]+")


def token_names() -> tuple[str, ...]:
    """Return every token name in table (priority) order."""
    return tuple(name for name, _ in TOKENS)


def split_tokens(text: str) -> list[str]:
    """Split a token string on whitespace and/or commas, dropping empties."""
    return [n for n in _SEPARATORS.split(text) if n]


def parse_one(name: str) -> int:
    """Look up a single token. Matching is case-sensitive.

    Args:
        name: Token such as ``"usec-time"`` or ``"unix"``.

    Returns:
        The bitset value of the token; multi-bit for unions.

    Raises:
        UnknownTokenError: If *name* is not in the table.
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownTokenError(name) from None


def parse_many(names: str | Iterable[str]) -> int:
    """OR together several tokens.

    Accepts either an iterable of tokens or a single string in which tokens
    are separated by whitespace and/or commas (``"unix, flag-append"``).

    Raises:
        UnknownTokenError: On the first token not in the table.
    """
    if isinstance(names, str):
        names = split_tokens(names)
    flags = 0
    for name in names:
        flags |= parse_one(name)
    return flags


def format_flags(flags: int) -> str:
    """Render a bitset as space-separated token names.

    Entries are tried in table order; an entry is emitted when all of its
    bits are still unaccounted for, and those bits are then cleared. The
    walk ends as soon as nothing is left.

    Args:
        flags: Any bitset.

    Returns:
        Token names joined by single spaces, in match order. Empty for 0.

    Raises:
        UnrepresentableBitsError: If bits other than the tolerated residual
            remain after the walk.
    """
    remaining = int(flags)
    names: list[str] = []
    for name, value in TOKENS:
        if remaining == 0:
            break
        if remaining & value != value:
            continue
        names.append(name)
        remaining &= ~value

    leftover = remaining & ~TOLERATED_RESIDUAL
    if leftover:
        raise UnrepresentableBitsError(leftover)
    return " ".join(names)
