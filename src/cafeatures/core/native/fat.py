"""Bridge between archive features and the FAT attribute byte.

FAT directory entries carry a one-byte attribute field (exposed on Linux
through ``FAT_IOCTL_GET_ATTRIBUTES``). Only the three display flags are
archive features; read-only is covered by the permission model and the
volume/directory bits describe the entry type, so none of those map.
"""

from __future__ import annotations

from enum import IntFlag

from cafeatures.core.flags.bits import Feature


class FatAttr(IntFlag):
    """FAT attribute byte values (``linux/msdos_fs.h``)."""

    ATTR_RO = 0x01
    ATTR_HIDDEN = 0x02
    ATTR_SYS = 0x04
    ATTR_VOLUME = 0x08
    ATTR_DIR = 0x10
    ATTR_ARCH = 0x20


_FAT_ATTRS_MAP: tuple[tuple[Feature, FatAttr], ...] = (
    (Feature.WITH_FLAG_HIDDEN, FatAttr.ATTR_HIDDEN),
    (Feature.WITH_FLAG_SYSTEM, FatAttr.ATTR_SYS),
    (Feature.WITH_FLAG_ARCHIVE, FatAttr.ATTR_ARCH),
)

FAT_MAPPED_MASK: int = sum(int(native) for _, native in _FAT_ATTRS_MAP)


def from_fat_attrs(attrs: int) -> int:
    """Return the feature bits for the FAT attributes set in *attrs*."""
    features = 0
    for feature, native in _FAT_ATTRS_MAP:
        if attrs & native:
            features |= int(feature)
    return features


def to_fat_attrs(flags: int) -> int:
    """Return the FAT attribute byte for the display flags in *flags*."""
    attrs = 0
    for feature, native in _FAT_ATTRS_MAP:
        if flags & feature:
            attrs |= int(native)
    return attrs
