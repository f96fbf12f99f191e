"""Typed upgrade knobs and the setters that parse their option values."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from UpgradeSelection.pipeline.errors import InitError

ABORT_AT_KEY = "abort-at"
DISRUPT_REBOOT_KEY = "disrupt-reboot"

ABORT_AT_RANDOM = -1
REBOOT_POLICIES = ("graceful", "force")


@dataclass(frozen=True)
class UpgradeKnobs:
    """Suite-specific settings consumed by the upgrade tests.

    ``abort_at`` is a percentage in [0, 100], ``ABORT_AT_RANDOM``, or None
    when the upgrade should not be aborted. ``disrupt_reboot`` is one of
    ``REBOOT_POLICIES`` or None.
    """

    abort_at: int | None = None
    disrupt_reboot: str | None = None

    def to_dict(self) -> dict[str, int | str | None]:
        return {
            "abort_at": self.abort_at,
            "disrupt_reboot": self.disrupt_reboot,
        }


OptionSetter = Callable[[UpgradeKnobs, str], UpgradeKnobs]


def set_abort_at(knobs: UpgradeKnobs, value: str) -> UpgradeKnobs:
    """Apply the ``abort-at`` option."""
    if value == "":
        return replace(knobs, abort_at=None)
    if value == "random":
        return replace(knobs, abort_at=ABORT_AT_RANDOM)
    percent = int(value) if value.isascii() and value.isdigit() else None
    if percent is None or percent > 100:
        raise InitError(
            ABORT_AT_KEY,
            value,
            "abort-at must be empty, set to 'random', "
            "or an integer in [0,100], inclusive",
        )
    return replace(knobs, abort_at=percent)


def set_disrupt_reboot(knobs: UpgradeKnobs, value: str) -> UpgradeKnobs:
    """Apply the ``disrupt-reboot`` option."""
    if value == "":
        return replace(knobs, disrupt_reboot=None)
    if value not in REBOOT_POLICIES:
        raise InitError(
            DISRUPT_REBOOT_KEY,
            value,
            "disrupt-reboot must be empty, 'graceful', or 'force'",
        )
    return replace(knobs, disrupt_reboot=value)


UPGRADE_OPTION_SETTERS: dict[str, OptionSetter] = {
    ABORT_AT_KEY: set_abort_at,
    DISRUPT_REBOOT_KEY: set_disrupt_reboot,
}
