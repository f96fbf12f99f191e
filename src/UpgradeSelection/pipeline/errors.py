"""Custom exception hierarchy for the upgrade selection pipeline."""
from __future__ import annotations


class UpgradeSelectionError(Exception):
    """Base exception for the upgrade selection pipeline."""


class DecodeError(UpgradeSelectionError):
    """Raised when a non-empty transport string cannot be decoded."""


class MalformedOptionError(UpgradeSelectionError):
    """Raised when a test option is not of the form KEY=VALUE."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"test option {option!r} is not valid, must be KEY=VALUE")


class DuplicateOptionError(UpgradeSelectionError):
    """Raised when the same option key is declared more than once."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"option {key!r} declared twice")


class UnrecognizedOptionError(UpgradeSelectionError):
    """Raised when a suite does not accept an option key."""

    def __init__(self, key: str, suite: str = "") -> None:
        self.key = key
        self.suite = suite
        msg = f"unrecognized upgrade option: {key}"
        if suite:
            msg += f" (suite {suite!r})"
        super().__init__(msg)


class UnrecognizedSuiteError(UpgradeSelectionError):
    """Raised when the transport names a suite absent from the catalog."""

    def __init__(self, suite: str, available: tuple[str, ...] = ()) -> None:
        self.suite = suite
        self.available = available
        msg = f"unrecognized upgrade info: no suite named {suite!r}"
        if available:
            msg += f". Available: {', '.join(available)}"
        super().__init__(msg)


class InitError(UpgradeSelectionError):
    """Raised by an option setter that rejects its value."""

    def __init__(self, key: str, value: str, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"invalid value {value!r} for option {key!r}: {reason}")
