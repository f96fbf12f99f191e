from __future__ import annotations

import pytest
from robot.api import TestSuite
from robot.errors import DataError

from UpgradeSelection.execution.prerun_modifier import UpgradePreRunModifier

PLATFORM = '{"Suite":"platform","ToImage":"registry/x:y"}'


def _build_suite() -> TestSuite:
    root = TestSuite(name="Upgrade")
    root.tests.create(name="service-upgrade")
    child = root.suites.create(name="Platform")
    child.tests.create(name="control-plane-available")
    other = root.suites.create(name="Storage")
    other.tests.create(name="secret-upgrade")
    return root


class TestUpgradePreRunModifier:
    def test_platform_keeps_only_control_plane(self) -> None:
        suite = _build_suite()
        modifier = UpgradePreRunModifier(PLATFORM)
        suite.visit(modifier)

        assert [t.name for t in suite.tests] == []
        assert [s.name for s in suite.suites] == ["Platform"]
        assert [t.name for t in suite.suites[0].tests] == ["control-plane-available"]
        assert modifier.stats == {"kept": 1, "removed": 2}

    def test_config_exposed_after_visit(self) -> None:
        suite = _build_suite()
        modifier = UpgradePreRunModifier(PLATFORM)
        suite.visit(modifier)

        assert modifier.config is not None
        assert modifier.config.to_image == "registry/x:y"

    def test_all_suite_keeps_everything(self) -> None:
        suite = _build_suite()
        suite.visit(UpgradePreRunModifier('{"Suite":"all"}'))
        assert suite.test_count == 3

    def test_empty_transport_leaves_suite_alone(
        self, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("TEST_UPGRADE_OPTIONS", raising=False)
        suite = _build_suite()
        modifier = UpgradePreRunModifier()
        suite.visit(modifier)

        assert suite.test_count == 3
        assert modifier.config is None

    def test_transport_read_from_environment(
        self, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("TEST_UPGRADE_OPTIONS", PLATFORM)
        suite = _build_suite()
        suite.visit(UpgradePreRunModifier())
        assert suite.test_count == 1

    def test_selection_error_raises_data_error(self) -> None:
        suite = _build_suite()
        with pytest.raises(DataError, match="nightly"):
            suite.visit(UpgradePreRunModifier('{"Suite":"nightly"}'))
