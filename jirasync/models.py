from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jirasync.errors import IssueKeyError


@dataclass(frozen=True)
class JiraIssue:
    """A JIRA search result reduced to the fields the report needs."""

    key: str
    summary: str
    url: str
    status: str
    fix_versions: tuple[str, ...] = ()

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> JiraIssue:
        fields = raw.get("fields") or {}
        status = fields.get("status") or {}
        versions = fields.get("fixVersions") or []
        return cls(
            key=raw["key"],
            summary=fields.get("summary") or "",
            url=raw.get("self", ""),
            status=status.get("name", ""),
            fix_versions=tuple(v["name"] for v in versions),
        )


@dataclass(frozen=True)
class GithubIssue:
    number: int
    title: str
    url: str
    state: str

    @classmethod
    def from_api(cls, node: dict[str, Any]) -> GithubIssue:
        return cls(
            number=int(node["number"]),
            title=node.get("title") or "",
            url=node.get("url", ""),
            state=node.get("state", ""),
        )


def key_number(key: str, separator: str = "-") -> int:
    """Return the number after the separator in a key like MCUB-123.

    A key without the separator or with a non-numeric suffix means the
    backend broke its contract, so it is an error rather than a zero.
    """
    _, sep, suffix = key.partition(separator)
    if not sep:
        raise IssueKeyError(f"Issue key {key!r} has no {separator!r} separator")
    if not (suffix.isascii() and suffix.isdigit()):
        raise IssueKeyError(f"Issue key {key!r} does not end in a number")
    return int(suffix)
