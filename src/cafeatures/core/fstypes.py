"""Default feature sets for well-known filesystem types.

The kernel does not report which metadata a filesystem can hold, so the
archiver guesses from the ``statfs`` magic number. Each known type maps to a
hand-curated ceiling; any other magic falls back to the tmpfs baseline, the
POSIX feature set every Linux filesystem is assumed to offer, with no inode
or FAT attribute flags.

``capabilities_for_fs_type`` never raises: the magic number space is open,
and an unknown filesystem should degrade to the baseline rather than abort
an archive run.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping

from cafeatures.core.flags.bits import WITH_FAT, WITH_UNIX, Feature, union_of

logger = logging.getLogger(__name__)


class FsMagic(IntEnum):
    """``statfs.f_type`` values (``linux/magic.h``).

    ext3 and ext4 report the ext2 magic; ``EXT3`` and ``EXT4`` are aliases
    so they can be named in configuration. ``name`` is always ``EXT2``.
    """

    MSDOS = 0x4D44
    EXT2 = 0xEF53
    EXT3 = 0xEF53
    EXT4 = 0xEF53
    XFS = 0x58465342
    BTRFS = 0x9123683E
    TMPFS = 0x01021994


# ---------------------------------------------------------------------------
# Capability ceilings
# ---------------------------------------------------------------------------

BASELINE_CAPABILITIES: int = WITH_UNIX

_EXT2_CAPABILITIES: int = WITH_UNIX | union_of(
    Feature.WITH_FLAG_APPEND,
    Feature.WITH_FLAG_NOATIME,
    Feature.WITH_FLAG_NODUMP,
    Feature.WITH_FLAG_DIRSYNC,
    Feature.WITH_FLAG_IMMUTABLE,
    Feature.WITH_FLAG_SYNC,
)

_XFS_CAPABILITIES: int = WITH_UNIX | union_of(
    Feature.WITH_FLAG_APPEND,
    Feature.WITH_FLAG_NOATIME,
    Feature.WITH_FLAG_NODUMP,
    Feature.WITH_FLAG_IMMUTABLE,
    Feature.WITH_FLAG_SYNC,
)

_BTRFS_CAPABILITIES: int = WITH_UNIX | union_of(
    Feature.WITH_FLAG_APPEND,
    Feature.WITH_FLAG_NOATIME,
    Feature.WITH_FLAG_COMPR,
    Feature.WITH_FLAG_NOCOW,
    Feature.WITH_FLAG_NODUMP,
    Feature.WITH_FLAG_DIRSYNC,
    Feature.WITH_FLAG_IMMUTABLE,
    Feature.WITH_FLAG_SYNC,
    Feature.WITH_FLAG_NOCOMP,
)

FS_CAPABILITIES: Mapping[FsMagic, int] = MappingProxyType({
    FsMagic.MSDOS: WITH_FAT,
    FsMagic.EXT2: _EXT2_CAPABILITIES,
    FsMagic.XFS: _XFS_CAPABILITIES,
    FsMagic.BTRFS: _BTRFS_CAPABILITIES,
    FsMagic.TMPFS: BASELINE_CAPABILITIES,
})


def is_known_fs_type(magic: int) -> bool:
    """Return True if *magic* has a curated capability entry."""
    return magic in FS_CAPABILITIES


def fs_type_name(magic: int) -> str | None:
    """Return the lowercase name of a known magic, or None."""
    try:
        return FsMagic(magic).name.lower()
    except ValueError:
        return None


def capabilities_for_fs_type(magic: int) -> int:
    """Return the feature bits a filesystem type is assumed to support.

    Args:
        magic: The ``statfs.f_type`` of the source filesystem.

    Returns:
        The curated ceiling for a known type, else BASELINE_CAPABILITIES.
    """
    try:
        return FS_CAPABILITIES[magic]
    except KeyError:
        logger.debug("Unknown filesystem magic %#x, using baseline features", magic)
        return BASELINE_CAPABILITIES
