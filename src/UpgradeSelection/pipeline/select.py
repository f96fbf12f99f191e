"""Selection orchestrator: decode, resolve suite, apply options, filter tests."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from UpgradeSelection.pipeline.codec import from_transport
from UpgradeSelection.pipeline.errors import UpgradeSelectionError
from UpgradeSelection.shared.config import UpgradeConfig
from UpgradeSelection.shared.types import UpgradeOptions
from UpgradeSelection.suites.catalog import SuiteCatalog, default_catalog
from UpgradeSelection.suites.registry import TestRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionOutcome:
    """Result of a selection run.

    ``config`` is None when the transport string was empty and no suite
    was requested.
    """

    options: UpgradeOptions
    config: UpgradeConfig | None = None

    @property
    def selected(self) -> bool:
        return self.config is not None


def run_selection(
    value: str,
    registry: TestRegistry,
    catalog: SuiteCatalog | None = None,
) -> SelectionOutcome:
    """Run the selection pipeline on a transport string.

    Raises an UpgradeSelectionError subclass on the first failure; no
    configuration is produced in that case.
    """
    catalog = catalog if catalog is not None else default_catalog

    if not value:
        logger.debug("[UPGRADE-SELECT] stage=decode event=empty")
        return SelectionOutcome(options=UpgradeOptions())

    stage = "decode"
    try:
        options = from_transport(value)
        logger.debug(
            "[UPGRADE-SELECT] stage=decode event=complete options=%d",
            len(options.test_options),
        )

        stage = "lookup"
        suite = catalog.lookup(options.suite)
        logger.info(
            "[UPGRADE-SELECT] stage=lookup event=suite_resolved "
            "suite=%s image=%s",
            suite.name,
            options.to_image,
        )

        stage = "validate"
        option_map = options.options_map()
        logger.debug(
            "[UPGRADE-SELECT] stage=validate event=complete keys=%s",
            ",".join(option_map),
        )

        stage = "dispatch"
        knobs = suite.init(option_map)
        logger.debug(
            "[UPGRADE-SELECT] stage=dispatch event=complete applied=%d",
            len(option_map),
        )

        stage = "filter"
        tests = tuple(t for t in registry.tests() if suite.scope(t.name))
        logger.info(
            "[UPGRADE-SELECT] stage=filter event=complete "
            "suite=%s total=%d selected=%d",
            suite.name,
            len(registry),
            len(tests),
        )

        config = UpgradeConfig(
            suite=suite.name,
            to_image=options.to_image,
            tests=tests,
            knobs=knobs,
            junit_dir=options.junit_dir,
            timeout=suite.timeout,
        )
    except UpgradeSelectionError as exc:
        logger.warning(
            "[UPGRADE-SELECT] stage=%s event=error error=%s",
            stage,
            str(exc),
        )
        raise

    logger.info(
        "[UPGRADE-SELECT] stage=commit event=complete suite=%s image=%s "
        "abort_at=%s disrupt_reboot=%s",
        config.suite,
        config.to_image,
        config.knobs.abort_at,
        config.knobs.disrupt_reboot,
    )
    return SelectionOutcome(options=options, config=config)
