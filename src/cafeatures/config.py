"""Feature selection loaded from YAML.

An archiver names the features it wants by token. A selection file looks
like this:

.. code-block:: yaml

    with: [unix, chattr]     # default: every feature
    without: [flag-nodump]
    respect-nodump: true     # default: true
    fs-type: ext2            # optional; magic number or known name

``resolve_features`` turns a selection into a normalized bitset, capped by
what the source filesystem is assumed to support.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from cafeatures.core.flags import (
    DEFAULT_FEATURE_FLAGS,
    TOLERATED_RESIDUAL,
    Feature,
    normalize,
    parse_many,
    parse_one,
    split_tokens,
)
from cafeatures.core.fstypes import FsMagic, capabilities_for_fs_type
from cafeatures.exceptions import ConfigError, UnknownTokenError

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset({"with", "without", "respect-nodump", "fs-type"})


def parse_fs_type(value: int | str) -> int:
    """Convert a magic number or filesystem name to a magic number.

    Accepts ints, numeric strings (``"0xEF53"``), and known names
    (``"btrfs"``).

    Raises:
        ConfigError: If *value* is neither a number nor a known name.
    """
    if isinstance(value, bool):
        raise ConfigError(f"fs-type must be a number or name, got {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return int(FsMagic[text.upper()])
    except KeyError:
        raise ConfigError(f"Unknown filesystem type: {value!r}") from None


def _token_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    raw = data.get(key)
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = split_tokens(raw)
    if not isinstance(raw, list) or not all(isinstance(t, str) for t in raw):
        raise ConfigError(f"'{key}' must be a list of feature tokens")
    for token in raw:
        try:
            parse_one(token)
        except UnknownTokenError as exc:
            raise ConfigError(f"'{key}': {exc}") from exc
    return tuple(raw)


@dataclass(frozen=True)
class FeatureSelection:
    """Which features an archive run asks for.

    Attributes:
        with_tokens: Tokens to enable. Empty means every feature.
        without_tokens: Tokens removed after ``with_tokens`` is applied.
        respect_nodump: Ask the archiver to skip files marked no-dump.
        fs_type: Magic number of the source filesystem, if pinned.
    """

    with_tokens: tuple[str, ...] = ()
    without_tokens: tuple[str, ...] = ()
    respect_nodump: bool = True
    fs_type: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FeatureSelection:
        """Build a selection from a parsed YAML mapping.

        Raises:
            ConfigError: On unknown keys, wrong types, or unknown tokens.
        """
        if not isinstance(data, dict):
            raise ConfigError("Feature selection must be a mapping")
        unknown = sorted(map(str, set(data) - _KNOWN_KEYS))
        if unknown:
            raise ConfigError(f"Unknown selection keys: {', '.join(unknown)}")

        respect = data.get("respect-nodump", True)
        if not isinstance(respect, bool):
            raise ConfigError("'respect-nodump' must be true or false")

        fs_type = data.get("fs-type")
        return cls(
            with_tokens=_token_list(data, "with"),
            without_tokens=_token_list(data, "without"),
            respect_nodump=respect,
            fs_type=None if fs_type is None else parse_fs_type(fs_type),
        )


def load_selection(path: Path | str) -> FeatureSelection:
    """Read a feature selection file.

    An empty file yields the default selection.

    Raises:
        ConfigError: If the file is unreadable, not valid YAML, or invalid.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {file_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {file_path}: {exc}") from exc
    if data is None:
        return FeatureSelection()
    return FeatureSelection.from_dict(data)


def resolve_features(selection: FeatureSelection, fs_type: int | None = None) -> int:
    """Compute the normalized feature bitset for *selection*.

    Args:
        selection: The requested features.
        fs_type: Source filesystem magic; overrides ``selection.fs_type``.

    Returns:
        A normalized bitset within the filesystem's capability ceiling.
    """
    if selection.with_tokens:
        flags = parse_many(selection.with_tokens)
    else:
        flags = DEFAULT_FEATURE_FLAGS & ~TOLERATED_RESIDUAL
    flags &= ~parse_many(selection.without_tokens)
    if selection.respect_nodump:
        flags |= int(Feature.RESPECT_FLAG_NODUMP)

    magic = fs_type if fs_type is not None else selection.fs_type
    if magic is not None:
        flags &= capabilities_for_fs_type(magic) | TOLERATED_RESIDUAL

    resolved = normalize(flags)
    logger.debug("Resolved feature flags %#x (fs-type %s)", resolved, magic)
    return resolved
