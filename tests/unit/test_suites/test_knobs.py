"""Tests for the abort-at and disrupt-reboot setters."""
from __future__ import annotations

import pytest

from UpgradeSelection.pipeline.errors import InitError
from UpgradeSelection.suites.knobs import (
    ABORT_AT_RANDOM,
    UpgradeKnobs,
    set_abort_at,
    set_disrupt_reboot,
)


class TestSetAbortAt:
    @pytest.mark.parametrize("value, expected", [("0", 0), ("50", 50), ("100", 100)])
    def test_percentages(self, value: str, expected: int) -> None:
        assert set_abort_at(UpgradeKnobs(), value).abort_at == expected

    def test_random(self) -> None:
        assert set_abort_at(UpgradeKnobs(), "random").abort_at == ABORT_AT_RANDOM

    def test_empty_disables(self) -> None:
        knobs = UpgradeKnobs(abort_at=10)
        assert set_abort_at(knobs, "").abort_at is None

    @pytest.mark.parametrize("value", ["101", "-1", "half", " 50", "5.5", "RANDOM"])
    def test_invalid_values(self, value: str) -> None:
        with pytest.raises(InitError, match="abort-at must be empty") as exc:
            set_abort_at(UpgradeKnobs(), value)
        assert exc.value.value == value

    def test_leaves_other_knobs_alone(self) -> None:
        knobs = UpgradeKnobs(disrupt_reboot="force")
        assert set_abort_at(knobs, "5") == UpgradeKnobs(abort_at=5, disrupt_reboot="force")


class TestSetDisruptReboot:
    @pytest.mark.parametrize("value", ["graceful", "force"])
    def test_policies(self, value: str) -> None:
        assert set_disrupt_reboot(UpgradeKnobs(), value).disrupt_reboot == value

    def test_empty_disables(self) -> None:
        knobs = UpgradeKnobs(disrupt_reboot="force")
        assert set_disrupt_reboot(knobs, "").disrupt_reboot is None

    def test_invalid_policy(self) -> None:
        with pytest.raises(InitError, match="'graceful', or 'force'"):
            set_disrupt_reboot(UpgradeKnobs(), "hard")

    def test_setters_commute(self) -> None:
        a = set_disrupt_reboot(set_abort_at(UpgradeKnobs(), "30"), "force")
        b = set_abort_at(set_disrupt_reboot(UpgradeKnobs(), "force"), "30")
        assert a == b
