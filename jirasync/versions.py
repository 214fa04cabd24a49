from __future__ import annotations

from collections.abc import Iterable

import semver

from jirasync.errors import VersionError

UNVERSIONED = semver.Version(0, 0, 0)


def parse_label(label: str) -> semver.Version:
    """Parse a fix version label as a semantic version.

    "1.1" is not a valid semantic version, so a label that fails is retried
    with ".0" appended. Anything else (rc tags on a two-part version, etc)
    has to be spelled out in full.
    """
    try:
        return semver.Version.parse(label)
    except (TypeError, ValueError):
        pass
    try:
        return semver.Version.parse(label + ".0")
    except (TypeError, ValueError) as exc:
        raise VersionError(f"Invalid semantic version: {label!r}: {exc}") from exc


def resolve_version(labels: Iterable[str]) -> semver.Version:
    """Return the smallest version among labels, or 0.0.0 if there are none.

    Every label is parsed, so a malformed label fails even when a smaller
    valid one is present.
    """
    versions = [parse_label(label) for label in labels]
    if not versions:
        return UNVERSIONED
    return min(versions)


def nice_versions(labels: Iterable[str]) -> str:
    return ",".join(labels)
