"""Registry of the upgrade tests available to a run."""
from __future__ import annotations

from collections.abc import Iterable

from UpgradeSelection.shared.types import UpgradeTest


class TestRegistry:
    """Ordered collection of upgrade tests, keyed by unique name."""

    __test__ = False  # not a pytest test class

    def __init__(self, tests: Iterable[UpgradeTest] = ()) -> None:
        self._tests: dict[str, UpgradeTest] = {}
        for test in tests:
            self.register(test)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> TestRegistry:
        """Build a registry from test names, ignoring repeats."""
        return cls(UpgradeTest(name) for name in dict.fromkeys(names))

    def register(self, test: UpgradeTest) -> None:
        if test.name in self._tests:
            raise ValueError(f"Upgrade test {test.name!r} is already registered")
        self._tests[test.name] = test

    def tests(self) -> tuple[UpgradeTest, ...]:
        return tuple(self._tests.values())

    def names(self) -> list[str]:
        return list(self._tests)

    def __len__(self) -> int:
        return len(self._tests)
