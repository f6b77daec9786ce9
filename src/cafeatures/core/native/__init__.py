"""Native attribute bridges.

Two independent translations between archive feature bits and a
filesystem's own attribute encoding:

- ``chattr``: Linux inode flags (``FS_*_FL``).
- ``fat``: the FAT attribute byte.

The tables are separate namespaces and must never be applied to each
other's values.
"""

from cafeatures.core.native.chattr import (
    CHATTR_MAPPED_MASK,
    ChattrFlag,
    from_generic_attrs,
    to_generic_attrs,
)
from cafeatures.core.native.fat import (
    FAT_MAPPED_MASK,
    FatAttr,
    from_fat_attrs,
    to_fat_attrs,
)

__all__ = [
    "CHATTR_MAPPED_MASK",
    "ChattrFlag",
    "FAT_MAPPED_MASK",
    "FatAttr",
    "from_fat_attrs",
    "from_generic_attrs",
    "to_fat_attrs",
    "to_generic_attrs",
]
