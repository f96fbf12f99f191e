"""Suite catalog: the named upgrade suites this package can select."""
from __future__ import annotations

import logging
import textwrap
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import Callable

from UpgradeSelection.pipeline.errors import (
    UnrecognizedOptionError,
    UnrecognizedSuiteError,
)
from UpgradeSelection.shared.types import CONTROL_PLANE_TEST, FEATURE_TAG, SUITE_TAG
from UpgradeSelection.suites.knobs import (
    UPGRADE_OPTION_SETTERS,
    OptionSetter,
    UpgradeKnobs,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = timedelta(minutes=240)


def _accept_all(name: str) -> bool:
    return True


@dataclass(frozen=True)
class Suite:
    """A named group of upgrade tests.

    ``matches`` decides which spec names (the full, tagged test names seen
    by the outer runner) belong to the suite. ``scope`` decides which
    upgrade tests from the registry the suite runs. ``setters`` is the
    closed set of options the suite accepts.
    """

    name: str
    description: str
    matches: Callable[[str], bool]
    scope: Callable[[str], bool] = _accept_all
    setters: Mapping[str, OptionSetter] = field(
        default_factory=lambda: dict(UPGRADE_OPTION_SETTERS), hash=False,
    )
    timeout: timedelta = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "setters", MappingProxyType(dict(self.setters)))

    @property
    def option_names(self) -> tuple[str, ...]:
        return tuple(self.setters)

    def init(self, options: Mapping[str, str]) -> UpgradeKnobs:
        """Apply validated options in order and return the resulting knobs.

        Stops at the first unknown key or rejected value.
        """
        knobs = UpgradeKnobs()
        for key, value in options.items():
            setter = self.setters.get(key)
            if setter is None:
                raise UnrecognizedOptionError(key, self.name)
            knobs = setter(knobs, value)
            logger.debug(
                "[UPGRADE-SELECT] stage=dispatch event=option_applied "
                "suite=%s key=%s value=%s",
                self.name,
                key,
                value,
            )
        return knobs


def has_upgrade_tags(name: str) -> bool:
    """True when a spec name carries both upgrade suite tags."""
    return FEATURE_TAG in name and SUITE_TAG in name


def is_control_plane_test(name: str) -> bool:
    return name == CONTROL_PLANE_TEST


class SuiteCatalog:
    """Ordered catalog of suites, keyed by unique name."""

    def __init__(self) -> None:
        self._suites: dict[str, Suite] = {}

    def register(self, suite: Suite) -> None:
        """Register a suite. Names must be unique."""
        if suite.name in self._suites:
            raise ValueError(f"Suite {suite.name!r} is already registered")
        self._suites[suite.name] = suite

    def lookup(self, name: str) -> Suite:
        """Return the suite with exactly this name."""
        try:
            return self._suites[name]
        except KeyError:
            raise UnrecognizedSuiteError(name, self.names()) from None

    def suites(self) -> tuple[Suite, ...]:
        return tuple(self._suites.values())

    def names(self) -> tuple[str, ...]:
        return tuple(self._suites)

    def __contains__(self, name: object) -> bool:
        return name in self._suites

    def __len__(self) -> int:
        return len(self._suites)


def build_default_catalog() -> SuiteCatalog:
    """Build the catalog with the standard ``all`` and ``platform`` suites."""
    catalog = SuiteCatalog()
    catalog.register(
        Suite(
            name="all",
            description=textwrap.dedent(
                """
                Run all tests.
                """
            ).strip(),
            matches=has_upgrade_tags,
        )
    )
    catalog.register(
        Suite(
            name="platform",
            description=textwrap.dedent(
                """
                Run only the tests that verify the platform remains available.
                """
            ).strip(),
            matches=has_upgrade_tags,
            scope=is_control_plane_test,
        )
    )
    return catalog


default_catalog = build_default_catalog()
