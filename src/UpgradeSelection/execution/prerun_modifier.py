from __future__ import annotations

import os

from robot.api import SuiteVisitor
from robot.errors import DataError

from UpgradeSelection.pipeline.errors import UpgradeSelectionError
from UpgradeSelection.pipeline.select import run_selection
from UpgradeSelection.shared.config import TRANSPORT_ENV, UpgradeConfig
from UpgradeSelection.suites.registry import TestRegistry


class UpgradePreRunModifier(SuiteVisitor):
    """PreRunModifier that keeps only the tests of the requested upgrade suite.

    Test names in the Robot suite are the upgrade test names. The transport
    string usually contains ``:`` characters, so on the command line it is
    read from the environment rather than passed as an argument.

    Usage CLI::

        TEST_UPGRADE_OPTIONS='{"Suite":"platform"}' \\
            robot --prerunmodifier UpgradeSelection.execution.prerun_modifier.UpgradePreRunModifier tests/

    Usage programmatic:
        suite.visit(UpgradePreRunModifier(transport))
    """

    def __init__(self, transport: str | None = None) -> None:
        self._transport = (
            transport if transport is not None
            else os.environ.get(TRANSPORT_ENV, "")
        )
        self._selected: set[str] | None = None
        self._config: UpgradeConfig | None = None
        self._stats = {"kept": 0, "removed": 0}

    def start_suite(self, suite) -> None:  # type: ignore[override]
        if suite.parent is None:
            self._select(suite)
        if self._selected is None:
            return
        original = len(suite.tests)
        suite.tests = [t for t in suite.tests if t.name in self._selected]
        self._stats["kept"] += len(suite.tests)
        self._stats["removed"] += original - len(suite.tests)

    def end_suite(self, suite) -> None:  # type: ignore[override]
        if self._selected is not None:
            suite.suites = [s for s in suite.suites if s.test_count > 0]

    def visit_test(self, test) -> None:  # type: ignore[override]
        pass  # skip internals for performance

    def _select(self, root) -> None:
        names = _collect_test_names(root)
        try:
            outcome = run_selection(self._transport, TestRegistry.from_names(names))
        except UpgradeSelectionError as exc:
            raise DataError(f"Upgrade selection failed: {exc}") from exc
        self._config = outcome.config
        if outcome.selected:
            self._selected = set(outcome.config.test_names)

    @property
    def config(self) -> UpgradeConfig | None:
        return self._config

    @property
    def stats(self) -> dict[str, int]:
        return dict(self._stats)


def _collect_test_names(suite) -> list[str]:
    names = [t.name for t in suite.tests]
    for child in suite.suites:
        names.extend(_collect_test_names(child))
    return names
