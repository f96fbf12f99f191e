from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from UpgradeSelection.shared.types import UpgradeTest
from UpgradeSelection.suites.knobs import UpgradeKnobs

TRANSPORT_ENV = "TEST_UPGRADE_OPTIONS"
TO_IMAGE_ENV = "UPGRADE_TO_IMAGE"


@dataclass(frozen=True)
class UpgradeConfig:
    """Configuration for the upgrade tests of one process run.

    Built once by the selection pipeline and handed to the runner.
    ``timeout`` is advisory: nothing in this package enforces it.
    """

    suite: str
    to_image: str
    tests: tuple[UpgradeTest, ...]
    knobs: UpgradeKnobs = UpgradeKnobs()
    junit_dir: str = ""
    timeout: timedelta = timedelta(minutes=240)

    @property
    def test_names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.tests)

    def to_dict(self) -> dict:
        return {
            "suite": self.suite,
            "to_image": self.to_image,
            "junit_dir": self.junit_dir,
            "tests": list(self.test_names),
            "timeout_seconds": int(self.timeout.total_seconds()),
            **self.knobs.to_dict(),
        }
