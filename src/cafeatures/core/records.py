"""Record type tags of the archive stream.

Every record in the stream starts with a 64-bit type tag. The serializer
lives elsewhere; this module only names the tags for diagnostics.
"""

from __future__ import annotations

from enum import IntEnum


class RecordType(IntEnum):
    """64-bit record tags."""

    HELLO = 0x3BDD0B4A1BF8F9C5
    ENTRY = 0x1396FABCEA5BBB51
    USER = 0xF453131AAEEACCB3
    GROUP = 0x25EB6AC969396A52
    SYMLINK = 0x664A6FB6830E0D6C
    DEVICE = 0xAC3DACE369DFE643
    PAYLOAD = 0x8B9E1D93D6DCFFC9
    GOODBYE = 0xDFD35C5E8327C403
    INDEX = 0x96824D9C7B129FF9
    TABLE = 0xE75B9E112F17417D


def type_name(tag: int) -> str | None:
    """Return the canonical name of a record tag.

    Unknown tags yield None rather than an error; callers print them as raw
    numbers.
    """
    try:
        return RecordType(tag).name.lower()
    except ValueError:
        return None
