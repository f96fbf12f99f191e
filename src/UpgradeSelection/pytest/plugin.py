"""pytest plugin for upgrade suite selection.

Registered as a ``pytest11`` entry point. Activated by a transport string,
either on the command line or inherited from the parent process:

    pytest --upgrade-options='{"Suite":"platform","ToImage":"..."}' tests/
    TEST_UPGRADE_OPTIONS='{"Suite":"all"}' pytest tests/

Upgrade tests are marked with ``@pytest.mark.upgrade("name")``. Unmarked
tests are never deselected. Without a transport string the plugin does
nothing.
"""
from __future__ import annotations

import logging
import os

import pytest

from UpgradeSelection.shared.config import TRANSPORT_ENV, UpgradeConfig

logger = logging.getLogger("UpgradeSelection.pytest")

upgrade_config_key = pytest.StashKey[UpgradeConfig]()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register CLI options for upgrade suite selection."""
    group = parser.getgroup("upgrade", "Upgrade suite selection")
    group.addoption(
        "--upgrade-options",
        default=None,
        help="Upgrade transport string selecting the suite, target image "
        f"and test options (default: ${TRANSPORT_ENV}).",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "upgrade(name): mark a test as the upgrade test called name",
    )


def upgrade_test_name(item: pytest.Item) -> str | None:
    """Return the upgrade test name of an item, or None if it is unmarked."""
    marker = item.get_closest_marker("upgrade")
    if marker is None:
        return None
    if marker.args:
        return str(marker.args[0])
    return marker.kwargs.get("name", item.name)


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item],
) -> None:
    """Deselect upgrade tests that the requested suite does not run."""
    from UpgradeSelection.pipeline.errors import UpgradeSelectionError
    from UpgradeSelection.pipeline.select import run_selection
    from UpgradeSelection.suites.registry import TestRegistry

    transport = config.getoption("--upgrade-options", default=None)
    if transport is None:
        transport = os.environ.get(TRANSPORT_ENV, "")
    if not transport:
        return  # Plugin disabled

    names = {item.nodeid: upgrade_test_name(item) for item in items}
    registry = TestRegistry.from_names(n for n in names.values() if n is not None)

    try:
        outcome = run_selection(transport, registry)
    except UpgradeSelectionError as exc:
        raise pytest.UsageError(f"upgrade selection failed: {exc}") from exc

    if not outcome.selected:
        return
    config.stash[upgrade_config_key] = outcome.config

    selected = set(outcome.config.test_names)
    deselected = [
        item for item in items
        if names[item.nodeid] is not None and names[item.nodeid] not in selected
    ]
    if deselected:
        config.hook.pytest_deselected(items=deselected)
        dropped = {id(item) for item in deselected}
        items[:] = [item for item in items if id(item) not in dropped]

    logger.info(
        "[UPGRADE-SELECT] Suite %s kept %d/%d upgrade tests.",
        outcome.config.suite,
        len(outcome.config.tests),
        len(registry),
    )


@pytest.fixture
def upgrade_config(request: pytest.FixtureRequest) -> UpgradeConfig | None:
    """The upgrade configuration selected for this session, if any."""
    return request.config.stash.get(upgrade_config_key, None)
