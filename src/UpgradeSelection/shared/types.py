from __future__ import annotations

from dataclasses import dataclass

FEATURE_TAG = "[Feature:ClusterUpgrade]"
SUITE_TAG = "[Suite:openshift]"
CONTROL_PLANE_TEST = "control-plane-available"


@dataclass(frozen=True)
class UpgradeTest:
    """A single upgrade test, identified by name only."""

    name: str


@dataclass(frozen=True)
class UpgradeOptions:
    """Options record passed between processes as a transport string.

    ``test_options`` keeps the raw ``KEY=VALUE`` strings so the receiving
    side validates them on its own.
    """

    suite: str = ""
    to_image: str = ""
    junit_dir: str = ""
    test_options: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "test_options", tuple(self.test_options))

    def options_map(self) -> dict[str, str]:
        """Parse ``test_options`` into a key/value mapping."""
        from UpgradeSelection.pipeline.codec import parse_options

        return parse_options(self.test_options)
