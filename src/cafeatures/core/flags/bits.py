"""Feature bits of the archive capability bitset.

The archive header carries a 64-bit word in which every set bit enables one
metadata facet. Bit positions are part of the on-disk format: adding a bit
is a compatible extension, renumbering or removing one is a breaking change.

Groups
------
Bits fall into disjoint groups:

- **UID width**: 16bit-uids, 32bit-uids (plus user-names).
- **Time resolution**: a chain nsec < usec < sec < 2sec.
- **Inode kinds and modes**: read-only, permissions, symlinks, device
  nodes, FIFOs, sockets.
- **FAT attributes**: hidden, system, archive.
- **Linux inode flags** (``chattr``): append .. projinherit.

``RESPECT_FLAG_NODUMP`` sits apart at the top of the word. It is a request
to the archiver (skip files marked no-dump) rather than a facet of the
stored data, so it has no token and is tolerated by the formatter.
"""

from __future__ import annotations

from enum import IntFlag
from typing import Iterator

from cafeatures.exceptions import UnsupportedBitsError


class Feature(IntFlag):
    """Single-bit archive capabilities."""

    WITH_16BIT_UIDS = 0x1
    WITH_32BIT_UIDS = 0x2
    WITH_USER_NAMES = 0x4
    WITH_SEC_TIME = 0x8
    WITH_USEC_TIME = 0x10
    WITH_NSEC_TIME = 0x20
    WITH_2SEC_TIME = 0x40  # FAT-style 2s granularity
    WITH_READ_ONLY = 0x80
    WITH_PERMISSIONS = 0x100
    WITH_SYMLINKS = 0x200
    WITH_DEVICE_NODES = 0x400
    WITH_FIFOS = 0x800
    WITH_SOCKETS = 0x1000

    # FAT attribute byte
    WITH_FLAG_HIDDEN = 0x2000
    WITH_FLAG_SYSTEM = 0x4000
    WITH_FLAG_ARCHIVE = 0x8000

    # Linux inode flags
    WITH_FLAG_APPEND = 0x10000
    WITH_FLAG_NOATIME = 0x20000
    WITH_FLAG_COMPR = 0x40000
    WITH_FLAG_NOCOW = 0x80000
    WITH_FLAG_NODUMP = 0x100000
    WITH_FLAG_DIRSYNC = 0x200000
    WITH_FLAG_IMMUTABLE = 0x400000
    WITH_FLAG_SYNC = 0x800000
    WITH_FLAG_NOCOMP = 0x1000000
    WITH_FLAG_PROJINHERIT = 0x2000000

    RESPECT_FLAG_NODUMP = 0x8000000000000000


def union_of(*features: Feature) -> int:
    """OR *features* into a plain int."""
    value = 0
    for feature in features:
        value |= int(feature)
    return value


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------

UID_FLAGS: int = union_of(Feature.WITH_16BIT_UIDS, Feature.WITH_32BIT_UIDS)

# Finest first. Normalization and granularity lookup both walk this order.
TIME_FLAGS_BY_RESOLUTION: tuple[Feature, ...] = (
    Feature.WITH_NSEC_TIME,
    Feature.WITH_USEC_TIME,
    Feature.WITH_SEC_TIME,
    Feature.WITH_2SEC_TIME,
)
TIME_FLAGS: int = union_of(*TIME_FLAGS_BY_RESOLUTION)

FAT_ATTR_FLAGS: int = union_of(
    Feature.WITH_FLAG_HIDDEN,
    Feature.WITH_FLAG_SYSTEM,
    Feature.WITH_FLAG_ARCHIVE,
)

CHATTR_FLAGS: int = union_of(
    Feature.WITH_FLAG_APPEND,
    Feature.WITH_FLAG_NOATIME,
    Feature.WITH_FLAG_COMPR,
    Feature.WITH_FLAG_NOCOW,
    Feature.WITH_FLAG_NODUMP,
    Feature.WITH_FLAG_DIRSYNC,
    Feature.WITH_FLAG_IMMUTABLE,
    Feature.WITH_FLAG_SYNC,
    Feature.WITH_FLAG_NOCOMP,
    Feature.WITH_FLAG_PROJINHERIT,
)

# ---------------------------------------------------------------------------
# Named unions
# ---------------------------------------------------------------------------

# Conservative UNIX file properties: every width and resolution, so that
# normalization can pick the best one a given source supports.
WITH_UNIX: int = UID_FLAGS | TIME_FLAGS | union_of(
    Feature.WITH_USER_NAMES,
    Feature.WITH_READ_ONLY,
    Feature.WITH_PERMISSIONS,
    Feature.WITH_SYMLINKS,
    Feature.WITH_DEVICE_NODES,
    Feature.WITH_FIFOS,
    Feature.WITH_SOCKETS,
)

WITH_FAT: int = FAT_ATTR_FLAGS | union_of(
    Feature.WITH_2SEC_TIME,
    Feature.WITH_READ_ONLY,
)

WITH_CHATTR: int = CHATTR_FLAGS

# The finest member of each group; already in normal form.
WITH_BEST: int = FAT_ATTR_FLAGS | CHATTR_FLAGS | union_of(
    Feature.WITH_32BIT_UIDS,
    Feature.WITH_USER_NAMES,
    Feature.WITH_NSEC_TIME,
    Feature.WITH_PERMISSIONS,
    Feature.WITH_SYMLINKS,
    Feature.WITH_DEVICE_NODES,
    Feature.WITH_FIFOS,
    Feature.WITH_SOCKETS,
)

# ---------------------------------------------------------------------------
# Masks
# ---------------------------------------------------------------------------

# Valid but nameless: format_flags() accepts these without a token.
TOLERATED_RESIDUAL: int = int(Feature.RESPECT_FLAG_NODUMP)

FEATURE_FLAGS_MAX: int = WITH_UNIX | WITH_FAT | WITH_CHATTR | TOLERATED_RESIDUAL

# Request everything; normalization keeps the finest member of each group.
DEFAULT_FEATURE_FLAGS: int = FEATURE_FLAGS_MAX


def is_valid(flags: int) -> bool:
    """Return True if *flags* sets no bit outside FEATURE_FLAGS_MAX."""
    return flags >= 0 and (flags & ~FEATURE_FLAGS_MAX) == 0


def check_supported(flags: int) -> int:
    """Return *flags* as a plain int, or raise for out-of-mask bits.

    Raises:
        UnsupportedBitsError: If any bit outside FEATURE_FLAGS_MAX is set.
            The exception carries only the offending bits.
    """
    flags = int(flags)
    if flags < 0:
        raise UnsupportedBitsError(flags)
    extra = flags & ~FEATURE_FLAGS_MAX
    if extra:
        raise UnsupportedBitsError(extra)
    return flags


def iter_bits(flags: int) -> Iterator[Feature]:
    """Yield the Feature members set in *flags*, lowest bit first.

    Bits without a Feature member are skipped.
    """
    for feature in Feature:
        if flags & feature:
            yield feature
