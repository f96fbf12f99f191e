"""Options codec: KEY=VALUE parsing and the transport string schema.

The transport string is a JSON object with exactly these fields::

    {"Suite": "...", "ToImage": "...", "JUnitDir": "...", "TestOptions": ["k=v"]}

Field names and casing are shared with external decoders, so they are
listed explicitly in ``TRANSPORT_FIELDS`` instead of being derived from the
dataclass.
"""
from __future__ import annotations

import csv
import json
from collections.abc import Iterable

from UpgradeSelection.pipeline.errors import (
    DecodeError,
    DuplicateOptionError,
    MalformedOptionError,
)
from UpgradeSelection.shared.types import UpgradeOptions

TRANSPORT_FIELDS = ("Suite", "ToImage", "JUnitDir", "TestOptions")


def parse_options(raw_options: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` entries into a mapping, in list order.

    Splits on the first ``=`` only. The first malformed or repeated entry
    raises.
    """
    options: dict[str, str] = {}
    for option in raw_options:
        key, sep, value = option.partition("=")
        if not sep or not key:
            raise MalformedOptionError(option)
        if key in options:
            raise DuplicateOptionError(key)
        options[key] = value
    return options


def to_transport(options: UpgradeOptions) -> str:
    """Encode an options record as a transport string."""
    return json.dumps(
        {
            "Suite": options.suite,
            "ToImage": options.to_image,
            "JUnitDir": options.junit_dir,
            "TestOptions": list(options.test_options),
        },
        separators=(",", ":"),
    )


def from_transport(value: str) -> UpgradeOptions:
    """Decode a transport string. An empty string yields the default record."""
    if not value:
        return UpgradeOptions()
    try:
        raw = json.loads(value)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise DecodeError(f"upgrade options are not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise DecodeError(
            f"upgrade options must be a JSON object, got {type(raw).__name__}"
        )
    return UpgradeOptions(
        suite=_string_field(raw, "Suite"),
        to_image=_string_field(raw, "ToImage"),
        junit_dir=_string_field(raw, "JUnitDir"),
        test_options=_string_list_field(raw, "TestOptions"),
    )


def _string_field(raw: dict, name: str) -> str:
    value = raw.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(
            f"upgrade options field {name!r} must be a string, "
            f"got {type(value).__name__}"
        )
    return value


def _string_list_field(raw: dict, name: str) -> tuple[str, ...]:
    value = raw.get(name)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DecodeError(
            f"upgrade options field {name!r} must be a list of strings"
        )
    return tuple(value)


def split_option_values(values: Iterable[str] | None) -> tuple[str, ...]:
    """Flatten repeated, comma-separated ``--options`` values.

    Each value is read as one CSV record, so ``a=1,b=2`` yields two entries
    and ``"a=1,2"`` stays whole.
    """
    entries: list[str] = []
    for value in values or ():
        if not value:
            continue
        for record in csv.reader([value]):
            entries.extend(record)
    return tuple(entries)
