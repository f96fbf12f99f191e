"""CLI entry points for upgrade suite selection."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from UpgradeSelection.shared.config import TO_IMAGE_ENV, TRANSPORT_ENV

logger = logging.getLogger("UpgradeSelection")


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
    )


def _add_encode_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("encode", help="Build an upgrade transport string")
    p.add_argument("--suite", required=True, help="Upgrade suite name")
    p.add_argument(
        "--to-image",
        default=os.environ.get(TO_IMAGE_ENV, ""),
        help="Specify the image to test an upgrade to.",
    )
    p.add_argument(
        "--options",
        action="append",
        default=[],
        help="A set of KEY=VALUE options to control the test. "
        "Repeatable and comma-separated.",
    )
    p.add_argument("--junit-dir", default="", help="Directory for JUnit output")
    p.set_defaults(func=_cmd_encode)


def _add_select_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "select", help="Resolve a transport string against upgrade tests",
    )
    p.add_argument(
        "--transport",
        default=os.environ.get(TRANSPORT_ENV, ""),
        help=f"Transport string (default: ${TRANSPORT_ENV})",
    )
    p.add_argument(
        "--tests-file", type=Path,
        help="File with one upgrade test name per line",
    )
    p.add_argument("names", nargs="*", help="Upgrade test names")
    p.set_defaults(func=_cmd_select)


def _add_suites_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("suites", help="List known upgrade suites")
    p.set_defaults(func=_cmd_suites)


def _add_match_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "match", help="Print the spec names a suite matches",
    )
    p.add_argument("--suite", required=True, help="Upgrade suite name")
    p.add_argument(
        "--names-file", type=Path,
        help="File with one spec name per line",
    )
    p.add_argument("names", nargs="*", help="Spec names")
    p.set_defaults(func=_cmd_match)


def _read_names(path: Path | None, names: list[str]) -> list[str]:
    result = list(names)
    if path is not None:
        result.extend(
            line.strip() for line in path.read_text().splitlines() if line.strip()
        )
    return result


def _cmd_encode(args: argparse.Namespace) -> int:
    from UpgradeSelection.pipeline.codec import split_option_values, to_transport
    from UpgradeSelection.pipeline.errors import UpgradeSelectionError
    from UpgradeSelection.shared.types import UpgradeOptions
    from UpgradeSelection.suites.catalog import default_catalog

    options = UpgradeOptions(
        suite=args.suite,
        to_image=args.to_image,
        junit_dir=args.junit_dir,
        test_options=split_option_values(args.options),
    )
    # The receiving process validates again; this only fails early.
    try:
        suite = default_catalog.lookup(options.suite)
        suite.init(options.options_map())
    except UpgradeSelectionError as exc:
        logger.error("[UPGRADE-SELECT] Encoding failed: %s", exc)
        return 2

    print(to_transport(options))
    return 0


def _cmd_select(args: argparse.Namespace) -> int:
    from UpgradeSelection.pipeline.errors import UpgradeSelectionError
    from UpgradeSelection.pipeline.select import run_selection
    from UpgradeSelection.suites.registry import TestRegistry

    registry = TestRegistry.from_names(_read_names(args.tests_file, args.names))
    try:
        outcome = run_selection(args.transport, registry)
    except UpgradeSelectionError as exc:
        logger.error("[UPGRADE-SELECT] Selection failed: %s", exc)
        return 2

    if not outcome.selected:
        logger.info("[UPGRADE-SELECT] No upgrade suite requested")
        return 0

    print(json.dumps(outcome.config.to_dict(), indent=2))
    return 0


def _cmd_suites(args: argparse.Namespace) -> int:
    from UpgradeSelection.suites.catalog import default_catalog

    for suite in default_catalog.suites():
        minutes = int(suite.timeout.total_seconds() // 60)
        print(f"{suite.name}\t{minutes}m\t{suite.description}")
    return 0


def _cmd_match(args: argparse.Namespace) -> int:
    from UpgradeSelection.pipeline.errors import UpgradeSelectionError
    from UpgradeSelection.suites.catalog import default_catalog

    try:
        suite = default_catalog.lookup(args.suite)
    except UpgradeSelectionError as exc:
        logger.error("[UPGRADE-SELECT] Match failed: %s", exc)
        return 2

    for name in _read_names(args.names_file, args.names):
        if suite.matches(name):
            print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="upgrade-select",
        description="Select and configure upgrade test suites",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    _add_encode_parser(subparsers)
    _add_select_parser(subparsers)
    _add_suites_parser(subparsers)
    _add_match_parser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(getattr(args, "verbose", False))

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
