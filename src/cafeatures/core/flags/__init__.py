"""Archive feature flags: bits, token table, and canonical form.

Submodules
----------
- ``bits``: Feature IntFlag, groups, named unions, validity masks.
- ``registry``: token table, ``parse_one``, ``parse_many``, ``format_flags``.
- ``normalize``: ``normalize``, ``time_granularity_ns``.

All public names are re-exported here::

    from cafeatures.core.flags import Feature, normalize, parse_one
"""

from cafeatures.core.flags.bits import (
    CHATTR_FLAGS,
    DEFAULT_FEATURE_FLAGS,
    FAT_ATTR_FLAGS,
    FEATURE_FLAGS_MAX,
    TIME_FLAGS,
    TOLERATED_RESIDUAL,
    UID_FLAGS,
    WITH_BEST,
    WITH_CHATTR,
    WITH_FAT,
    WITH_UNIX,
    Feature,
    check_supported,
    is_valid,
    iter_bits,
    union_of,
)
from cafeatures.core.flags.normalize import (
    TIME_GRANULARITY_NS,
    normalize,
    time_granularity_ns,
    truncate_timestamp_ns,
)
from cafeatures.core.flags.registry import (
    TOKENS,
    format_flags,
    parse_many,
    parse_one,
    split_tokens,
    token_names,
)

__all__ = [
    "CHATTR_FLAGS",
    "DEFAULT_FEATURE_FLAGS",
    "FAT_ATTR_FLAGS",
    "FEATURE_FLAGS_MAX",
    "Feature",
    "TIME_FLAGS",
    "TIME_GRANULARITY_NS",
    "TOKENS",
    "TOLERATED_RESIDUAL",
    "UID_FLAGS",
    "WITH_BEST",
    "WITH_CHATTR",
    "WITH_FAT",
    "WITH_UNIX",
    "check_supported",
    "format_flags",
    "is_valid",
    "iter_bits",
    "normalize",
    "parse_many",
    "parse_one",
    "split_tokens",
    "time_granularity_ns",
    "token_names",
    "truncate_timestamp_ns",
    "union_of",
]
