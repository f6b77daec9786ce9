"""Tests for Feature bits, groups, unions and validity masks."""

from __future__ import annotations

import pytest

from cafeatures.core.flags import (
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
    normalize,
    union_of,
)
from cafeatures.exceptions import UnsupportedBitsError


class TestFeatureValues:
    """Bit positions are on-disk format and must not drift."""

    def test_every_member_is_a_single_bit(self) -> None:
        for feature in Feature:
            assert bin(int(feature)).count("1") == 1, feature.name

    def test_members_are_distinct(self) -> None:
        values = [int(f) for f in Feature]
        assert len(values) == len(set(values))

    def test_low_bits_are_contiguous(self) -> None:
        low = [int(f) for f in Feature if f is not Feature.RESPECT_FLAG_NODUMP]
        assert sorted(low) == [1 << i for i in range(26)]

    def test_selected_values(self) -> None:
        assert Feature.WITH_16BIT_UIDS == 0x1
        assert Feature.WITH_USEC_TIME == 0x10
        assert Feature.WITH_FLAG_HIDDEN == 0x2000
        assert Feature.WITH_FLAG_PROJINHERIT == 0x2000000
        assert Feature.RESPECT_FLAG_NODUMP == 1 << 63


class TestGroups:
    def test_groups_are_disjoint(self) -> None:
        groups = [UID_FLAGS, TIME_FLAGS, FAT_ATTR_FLAGS, CHATTR_FLAGS]
        for i, a in enumerate(groups):
            for b in groups[i + 1:]:
                assert a & b == 0

    def test_time_group_has_four_bits(self) -> None:
        assert bin(TIME_FLAGS).count("1") == 4

    def test_chattr_group_has_ten_bits(self) -> None:
        assert bin(CHATTR_FLAGS).count("1") == 10
        assert WITH_CHATTR == CHATTR_FLAGS


class TestUnions:
    def test_union_of(self) -> None:
        value = union_of(Feature.WITH_SYMLINKS, Feature.WITH_FIFOS)
        assert value == 0xA00
        assert type(value) is int
        assert union_of() == 0

    def test_unix_value(self) -> None:
        assert WITH_UNIX == 0x1FFF

    def test_fat_value(self) -> None:
        assert WITH_FAT == 0xE0C0

    def test_best_value(self) -> None:
        assert WITH_BEST == 0x3FFFF26

    def test_best_is_already_normal(self) -> None:
        assert normalize(WITH_BEST) == WITH_BEST

    def test_best_has_one_time_flag(self) -> None:
        assert bin(WITH_BEST & TIME_FLAGS).count("1") == 1

    def test_unions_within_max(self) -> None:
        for union in (WITH_UNIX, WITH_FAT, WITH_CHATTR, WITH_BEST):
            assert union & ~FEATURE_FLAGS_MAX == 0


class TestMasks:
    def test_max_value(self) -> None:
        assert FEATURE_FLAGS_MAX == 0x8000000003FFFFFF

    def test_residual_is_only_respect_nodump(self) -> None:
        assert TOLERATED_RESIDUAL == int(Feature.RESPECT_FLAG_NODUMP)

    def test_default_requests_everything(self) -> None:
        assert DEFAULT_FEATURE_FLAGS == FEATURE_FLAGS_MAX

    def test_is_valid(self) -> None:
        assert is_valid(0)
        assert is_valid(FEATURE_FLAGS_MAX)
        assert not is_valid(1 << 26)
        assert not is_valid(-1)

    def test_check_supported_returns_plain_int(self) -> None:
        value = check_supported(Feature.WITH_SYMLINKS)
        assert value == 0x200
        assert type(value) is int

    def test_check_supported_reports_only_extra_bits(self) -> None:
        with pytest.raises(UnsupportedBitsError) as exc_info:
            check_supported(WITH_UNIX | (1 << 40) | (1 << 30))
        assert exc_info.value.bits == (1 << 40) | (1 << 30)

    def test_check_supported_rejects_negative(self) -> None:
        with pytest.raises(UnsupportedBitsError):
            check_supported(-1)


class TestIterBits:
    def test_lowest_first(self) -> None:
        bits = list(iter_bits(WITH_FAT))
        assert bits == [
            Feature.WITH_2SEC_TIME,
            Feature.WITH_READ_ONLY,
            Feature.WITH_FLAG_HIDDEN,
            Feature.WITH_FLAG_SYSTEM,
            Feature.WITH_FLAG_ARCHIVE,
        ]

    def test_empty(self) -> None:
        assert list(iter_bits(0)) == []

    def test_skips_unknown_bits(self) -> None:
        assert list(iter_bits((1 << 40) | 0x1)) == [Feature.WITH_16BIT_UIDS]
