"""End-to-end: encode options in one process, select in a pytest session."""
from __future__ import annotations

import pytest

from UpgradeSelection.cli import main

UPGRADE_TESTS = '''
import pytest


@pytest.mark.upgrade("control-plane-available")
def test_api_available(upgrade_config):
    assert upgrade_config.to_image == "registry/x:y"
    assert upgrade_config.knobs.abort_at == 50
    assert upgrade_config.knobs.disrupt_reboot == "graceful"


@pytest.mark.upgrade("service-upgrade")
def test_service_survives():
    pass


@pytest.mark.upgrade("secret-upgrade")
def test_secret_survives():
    pass


def test_not_an_upgrade_test():
    pass
'''


def _encode(capsys: pytest.CaptureFixture[str], *argv: str) -> str:
    assert main(["encode", *argv]) == 0
    return capsys.readouterr().out.strip()


def test_platform_suite_selected_from_environment(
    pytester: pytest.Pytester,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    transport = _encode(
        capsys,
        "--suite", "platform",
        "--to-image", "registry/x:y",
        "--options", "abort-at=50,disrupt-reboot=graceful",
    )
    monkeypatch.setenv("TEST_UPGRADE_OPTIONS", transport)
    pytester.makepyfile(test_upgrade=UPGRADE_TESTS)

    result = pytester.runpytest("-p", "UpgradeSelection.pytest.plugin")

    result.assert_outcomes(passed=2, deselected=2)


def test_all_suite_runs_every_upgrade_test(
    pytester: pytest.Pytester,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    transport = _encode(capsys, "--suite", "all")
    monkeypatch.delenv("TEST_UPGRADE_OPTIONS", raising=False)
    pytester.makepyfile(
        test_upgrade='''
import pytest


@pytest.mark.upgrade("control-plane-available")
def test_api_available(upgrade_config):
    assert upgrade_config.suite == "all"


@pytest.mark.upgrade("service-upgrade")
def test_service_survives():
    pass
'''
    )

    result = pytester.runpytest(
        "-p", "UpgradeSelection.pytest.plugin",
        f"--upgrade-options={transport}",
    )

    result.assert_outcomes(passed=2)


def test_bad_options_abort_before_running(
    pytester: pytest.Pytester,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv(
        "TEST_UPGRADE_OPTIONS",
        '{"Suite":"platform","TestOptions":["abort-at=50","abort-at=60"]}',
    )
    pytester.makepyfile(test_upgrade=UPGRADE_TESTS)

    result = pytester.runpytest("-p", "UpgradeSelection.pytest.plugin")

    assert result.ret == pytest.ExitCode.USAGE_ERROR
    assert "declared twice" in result.stderr.str()
