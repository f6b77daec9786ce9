"""Bridge between archive features and Linux inode flags.

Linux exposes per-inode attribute flags through the ``FS_IOC_GETFLAGS`` /
``FS_IOC_SETFLAGS`` ioctls (what ``lsattr``/``chattr`` show). The traversal
layer reads that 32-bit word for each entry; this module translates it to
and from archive feature bits.

Only the ten flags listed in ``_CHATTR_MAP`` round-trip. Every other inode
flag is dropped by ``from_generic_attrs`` and every non-chattr feature bit
is dropped by ``to_generic_attrs``. Neither direction raises.
"""

from __future__ import annotations

from enum import IntFlag

from cafeatures.core.flags.bits import Feature


class ChattrFlag(IntFlag):
    """Kernel ``FS_*_FL`` inode flag values (``linux/fs.h``)."""

    FS_COMPR_FL = 0x00000004
    FS_SYNC_FL = 0x00000008
    FS_IMMUTABLE_FL = 0x00000010
    FS_APPEND_FL = 0x00000020
    FS_NODUMP_FL = 0x00000040
    FS_NOATIME_FL = 0x00000080
    FS_NOCOMP_FL = 0x00000400
    FS_DIRSYNC_FL = 0x00010000
    FS_NOCOW_FL = 0x00800000
    FS_PROJINHERIT_FL = 0x20000000


_CHATTR_MAP: tuple[tuple[Feature, ChattrFlag], ...] = (
    (Feature.WITH_FLAG_APPEND, ChattrFlag.FS_APPEND_FL),
    (Feature.WITH_FLAG_NOATIME, ChattrFlag.FS_NOATIME_FL),
    (Feature.WITH_FLAG_COMPR, ChattrFlag.FS_COMPR_FL),
    (Feature.WITH_FLAG_NOCOW, ChattrFlag.FS_NOCOW_FL),
    (Feature.WITH_FLAG_NODUMP, ChattrFlag.FS_NODUMP_FL),
    (Feature.WITH_FLAG_DIRSYNC, ChattrFlag.FS_DIRSYNC_FL),
    (Feature.WITH_FLAG_IMMUTABLE, ChattrFlag.FS_IMMUTABLE_FL),
    (Feature.WITH_FLAG_SYNC, ChattrFlag.FS_SYNC_FL),
    (Feature.WITH_FLAG_NOCOMP, ChattrFlag.FS_NOCOMP_FL),
    (Feature.WITH_FLAG_PROJINHERIT, ChattrFlag.FS_PROJINHERIT_FL),
)

# Native bits that survive a round trip; the traversal layer keeps the rest.
CHATTR_MAPPED_MASK: int = sum(int(native) for _, native in _CHATTR_MAP)


def from_generic_attrs(word: int) -> int:
    """Return the feature bits for the inode flags set in *word*."""
    features = 0
    for feature, native in _CHATTR_MAP:
        if word & native:
            features |= int(feature)
    return features


def to_generic_attrs(flags: int) -> int:
    """Return the inode flag word for the chattr feature bits in *flags*."""
    word = 0
    for feature, native in _CHATTR_MAP:
        if flags & feature:
            word |= int(native)
    return word
