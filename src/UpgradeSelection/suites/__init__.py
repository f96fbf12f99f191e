"""Suites bounded context: upgrade suites, their options, and the test registry."""

from UpgradeSelection.suites.catalog import (
    DEFAULT_TIMEOUT,
    Suite,
    SuiteCatalog,
    build_default_catalog,
    default_catalog,
    has_upgrade_tags,
)
from UpgradeSelection.suites.knobs import (
    ABORT_AT_RANDOM,
    UPGRADE_OPTION_SETTERS,
    UpgradeKnobs,
    set_abort_at,
    set_disrupt_reboot,
)
from UpgradeSelection.suites.registry import TestRegistry

__all__ = [
    "ABORT_AT_RANDOM",
    "DEFAULT_TIMEOUT",
    "Suite",
    "SuiteCatalog",
    "TestRegistry",
    "UPGRADE_OPTION_SETTERS",
    "UpgradeKnobs",
    "build_default_catalog",
    "default_catalog",
    "has_upgrade_tags",
    "set_abort_at",
    "set_disrupt_reboot",
]
