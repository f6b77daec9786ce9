"""Canonical form of a feature bitset and the time granularity it implies.

``normalize`` removes bits made redundant by a stronger bit in the same
group. Rules apply in a fixed order and each only clears bits:

1. 32bit-uids supersedes 16bit-uids.
2. A finer time resolution supersedes every coarser one
   (nsec > usec > sec > 2sec).
3. permissions supersedes read-only.
4. The respect-nodump request supersedes storing the nodump flag.

The result is always a subset of the input and normalizing twice changes
nothing.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from cafeatures.core.flags.bits import (
    TIME_FLAGS_BY_RESOLUTION,
    Feature,
    check_supported,
)
from cafeatures.exceptions import NoTimeCapabilityError

TIME_GRANULARITY_NS: Mapping[Feature, int] = MappingProxyType({
    Feature.WITH_NSEC_TIME: 1,
    Feature.WITH_USEC_TIME: 1_000,
    Feature.WITH_SEC_TIME: 1_000_000_000,
    Feature.WITH_2SEC_TIME: 2_000_000_000,
})


def _coarser_than(index: int) -> int:
    mask = 0
    for feature in TIME_FLAGS_BY_RESOLUTION[index + 1:]:
        mask |= int(feature)
    return mask


def normalize(flags: int) -> int:
    """Return the canonical subset of *flags*.

    Raises:
        UnsupportedBitsError: If *flags* has bits outside FEATURE_FLAGS_MAX.
    """
    flags = check_supported(flags)

    if flags & Feature.WITH_32BIT_UIDS:
        flags &= ~int(Feature.WITH_16BIT_UIDS)

    for index, feature in enumerate(TIME_FLAGS_BY_RESOLUTION):
        if flags & feature:
            flags &= ~_coarser_than(index)

    if flags & Feature.WITH_PERMISSIONS:
        flags &= ~int(Feature.WITH_READ_ONLY)

    if flags & Feature.RESPECT_FLAG_NODUMP:
        flags &= ~int(Feature.WITH_FLAG_NODUMP)

    return flags


def time_granularity_ns(flags: int) -> int:
    """Return the timestamp granularity in nanoseconds.

    The finest resolution bit present decides; *flags* need not be
    normalized.

    Raises:
        UnsupportedBitsError: If *flags* has bits outside FEATURE_FLAGS_MAX.
        NoTimeCapabilityError: If no time resolution bit is set.
    """
    flags = check_supported(flags)
    for feature in TIME_FLAGS_BY_RESOLUTION:
        if flags & feature:
            return TIME_GRANULARITY_NS[feature]
    raise NoTimeCapabilityError(flags)


def truncate_timestamp_ns(timestamp_ns: int, flags: int) -> int:
    """Round a nanosecond timestamp down to the granularity of *flags*.

    Floors toward minus infinity, so pre-epoch times stay on the grid.
    """
    granularity = time_granularity_ns(flags)
    return (timestamp_ns // granularity) * granularity
