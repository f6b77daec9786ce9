"""cafeatures exception hierarchy.

All public exceptions inherit from CaFeaturesError, giving callers a single
base class to catch when they want to handle any feature-flag failure
without swallowing unrelated errors. Every error is a deterministic function
of its input: retrying with the same value always fails the same way.
"""


class CaFeaturesError(Exception):
    """Base exception for all cafeatures errors."""


class UnknownTokenError(CaFeaturesError):
    """Raised when a feature token name is not in the token table.

    This is a user input error (a typo in configuration or on the command
    line) and is surfaced unchanged to the caller.
    """

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown feature token: {token!r}")
        self.token = token


class UnsupportedBitsError(CaFeaturesError):
    """Raised when a bitset carries bits outside the known feature mask.

    Indicates version skew between archive writer and reader, or an archive
    written by a newer format revision. Never silently masked.
    """

    def __init__(self, bits: int) -> None:
        super().__init__(f"Unsupported feature bits: {bits:#x}")
        self.bits = bits


class UnrepresentableBitsError(CaFeaturesError):
    """Raised when a bitset cannot be fully expressed as token names.

    Signals that a bit was added to the format without a token and without
    being classified as a tolerated residual.
    """

    def __init__(self, bits: int) -> None:
        super().__init__(f"Feature bits have no token name: {bits:#x}")
        self.bits = bits


class NoTimeCapabilityError(CaFeaturesError):
    """Raised when a time granularity is requested from a bitset without
    any timestamp resolution flag."""

    def __init__(self, flags: int) -> None:
        super().__init__(f"No time resolution flag set in {flags:#x}")
        self.flags = flags


class ConfigError(CaFeaturesError):
    """Raised when a feature selection file is unreadable or malformed.

    Covers YAML syntax errors, wrong value types, and unknown keys or
    tokens in the selection.
    """
